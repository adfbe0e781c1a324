import pytest

from haschema.builtin.primitives import unpack_num
from haschema.errors import (
    BadSpecialFormError,
    HaschemaError,
    NumArgsError,
    TypeMismatchError,
    UnboundFunctionError,
)
from haschema.evaluation.evaluator import evaluate
from haschema.reader.parser import parse
from haschema.types.value import Atom, Bool, List, Number, String


def run(source):
    return evaluate(parse(source), "strict")


def test_unknown_primitive_raises():
    with pytest.raises(UnboundFunctionError) as excinfo:
        run("(foo 1 2)")
    assert excinfo.value.name == "foo"
    assert str(excinfo.value) == "Unrecognized primitive function args: foo"


def test_non_numeric_string_raises():
    with pytest.raises(TypeMismatchError) as excinfo:
        run('(+ "abc" 3)')
    assert excinfo.value.expected == "number"
    assert excinfo.value.found == String("abc")
    assert str(excinfo.value) == 'Invalid type: expected number, found "abc"'


def test_numeric_strings_still_coerce():
    assert run('(+ "5" 3)') == Number(8)
    assert run("(+ '(\"2\") 3)") == Number(5)


@pytest.mark.parametrize(
    "source,found",
    [
        ("(+ '(1 2) 3)", List((Number(1), Number(2)))),
        ("(+ 'x 1)", Atom("x")),
        ("(* #f 2)", Bool(False)),
    ]
)
def test_non_numeric_operands_raise(source, found):
    with pytest.raises(TypeMismatchError) as excinfo:
        run(source)
    assert excinfo.value.found == found


def test_single_argument_raises():
    with pytest.raises(NumArgsError) as excinfo:
        run("(- 5)")
    assert excinfo.value.expected == 2
    assert str(excinfo.value) == "Expected 2 args; found values 5"


@pytest.mark.parametrize("source", ["(quote)", "(quote 1 2)"])
def test_malformed_quote_raises(source):
    with pytest.raises(BadSpecialFormError) as excinfo:
        run(source)
    assert str(excinfo.value) == f"Malformed quote form: {source}"


def test_unpack_num_strict():
    assert unpack_num(String(" 7"), "strict") == 7
    assert unpack_num(String("(0x1f)"), "strict") == 31
    for text in ("5.5", "1e3", "(5"):
        with pytest.raises(TypeMismatchError):
            unpack_num(String(text), "strict")
    with pytest.raises(TypeMismatchError):
        unpack_num(List(()), "strict")


def test_taxonomy_shares_a_base_class():
    for exc in (BadSpecialFormError, NumArgsError, TypeMismatchError, UnboundFunctionError):
        assert issubclass(exc, HaschemaError)
