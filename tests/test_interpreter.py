import logging

import pytest

from haschema.__main__ import main
from haschema.config import get_eval_mode, get_log_level
from haschema.errors import ParserError
from haschema.interpreter import Interpreter
from haschema.types.value import Bool, Number, String


def test_run_prints_result():
    interp = Interpreter()
    assert interp.mode == "lenient"
    assert interp.run("(+ 2 (* 3 4))") == "14"
    assert interp.run("'(a . b)") == "(a . b)"
    assert interp.run("(foo 1 2)") == "#f"


def test_parse_failure_becomes_string_value():
    result = Interpreter("lenient").eval("(+ 1 2")
    assert isinstance(result, String)
    assert result.value.startswith("No match: ")
    assert Interpreter("lenient").run("(+ 1 2").startswith('"No match: "lisp" (line 1, column 7)')


def test_strict_read_raises():
    with pytest.raises(ParserError):
        Interpreter("strict").eval("(+ 1 2")


def test_mode_from_environment(monkeypatch):
    monkeypatch.setenv("HASCHEMA_EVAL_MODE", "Strict")
    assert get_eval_mode() == "strict"
    assert Interpreter().mode == "strict"
    assert Interpreter("lenient").mode == "lenient"


def test_class_default_overrides_environment(monkeypatch):
    monkeypatch.setenv("HASCHEMA_EVAL_MODE", "strict")
    monkeypatch.setattr(Interpreter, "DefaultMode", "lenient")
    assert Interpreter().eval("(foo)") == Bool(False)


def test_invalid_mode_in_environment(monkeypatch):
    monkeypatch.setenv("HASCHEMA_EVAL_MODE", "sloppy")
    with pytest.raises(ValueError):
        get_eval_mode()


def test_log_level_from_environment(monkeypatch):
    assert get_log_level() == logging.WARNING
    monkeypatch.setenv("HASCHEMA_LOG_LEVEL", "debug")
    assert get_log_level() == logging.DEBUG
    monkeypatch.setenv("HASCHEMA_LOG_LEVEL", "chatty")
    with pytest.raises(ValueError):
        get_log_level()


def test_debug_logging_reports_lenient_fallbacks(caplog):
    with caplog.at_level(logging.DEBUG, logger="haschema"):
        assert Interpreter("lenient").eval("(nope 1)") == Bool(False)
    assert any("Unknown primitive 'nope'" in rec.getMessage() for rec in caplog.records)


def test_trailing_input_is_ignored(caplog):
    with caplog.at_level(logging.DEBUG, logger="haschema.reader.parser"):
        assert Interpreter().eval("(+ 1 2) (+ 3 4)") == Number(3)
    assert any("Ignoring trailing input" in rec.getMessage() for rec in caplog.records)


def test_cli_prints_value(capsys):
    assert main(["(- 10 3 2)"]) == 0
    assert capsys.readouterr().out == "5\n"


def test_cli_lenient_unknown_primitive(capsys):
    assert main(["(foo 1)"]) == 0
    assert capsys.readouterr().out == "#f\n"


def test_cli_strict_reports_errors(capsys):
    assert main(["--strict", "(foo)"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.endswith("error: Unrecognized primitive function args: foo\n")


def test_cli_parse_failure_in_lenient_mode(capsys):
    assert main(["(+ 1"]) == 0
    assert capsys.readouterr().out.startswith('"No match: ')


def test_mode_resolution_order(monkeypatch):
    monkeypatch.setenv("HASCHEMA_EVAL_MODE", "strict")
    monkeypatch.setattr(Interpreter, "DefaultMode", "lenient")
    assert Interpreter("strict").mode == "strict"
    assert Interpreter().mode == "lenient"
    monkeypatch.setattr(Interpreter, "DefaultMode", None)
    assert Interpreter().mode == "strict"


def test_moderately_nested_expression_runs():
    source = "(+ 1 " * 300 + "1" + ")" * 300
    assert Interpreter("lenient").run(source) == "301"


def test_excessive_nesting(capsys):
    source = "(+ 1 " * 5000 + "1" + ")" * 5000
    assert Interpreter("lenient").run(source).startswith('"No match: ')
    with pytest.raises(ParserError):
        Interpreter("strict").run(source)
    assert main(["--strict", source]) == 1
    assert "nested too deeply" in capsys.readouterr().err
