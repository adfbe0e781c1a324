"""Primitive functions for the haschema evaluator.

The table maps operator names to integer-reducing primitives. Each primitive
takes the already-evaluated argument list and the evaluation mode. The table
is built once at import and is read-only.
"""
from __future__ import annotations

import logging
import operator
import re
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from haschema import EvalMode, LispValue
from haschema.errors import DefaultError, NumArgsError, TypeMismatchError, UnboundFunctionError
from haschema.types.value import Bool, List, Number, String

logger = logging.getLogger(__name__)

Primitive = Callable[[list[LispValue], EvalMode], LispValue]

# One integer literal: optional negation, then hex, octal or decimal digits.
# A decimal followed by a fraction or exponent is a fractional literal and
# does not read as an integer.
_INTEGER_LEXEME_RE = re.compile(
    r"\s*(?P<neg>-\s*)?"
    r"(?:0[xX](?P<hex>[0-9a-fA-F]+)"
    r"|0[oO](?P<oct>[0-7]+)"
    r"|(?P<dec>[0-9]+)(?P<frac>\.[0-9]+)?(?P<exp>[eE][+-]?[0-9]+)?)"
)
_OPEN_PAREN_RE = re.compile(r"\s*\(")
_CLOSE_PAREN_RE = re.compile(r"\s*\)")


def read_integer(s: str) -> Optional[int]:
    """Read an integer from the start of s, or None if it does not start with one.

    Leading whitespace and balanced enclosing parentheses are allowed, and
    anything after the integer is ignored: "5abc" and "(5)" read as 5, while
    "5.5", "1e3" and "abc" do not read.
    """
    pos, depth = 0, 0
    while m := _OPEN_PAREN_RE.match(s, pos):
        pos, depth = m.end(), depth + 1
    m = _INTEGER_LEXEME_RE.match(s, pos)
    if m is None or m["frac"] or m["exp"]:
        return None
    if m["hex"]:
        n = int(m["hex"], 16)
    elif m["oct"]:
        n = int(m["oct"], 8)
    else:
        n = int(m["dec"])
    pos = m.end()
    for _ in range(depth):
        close = _CLOSE_PAREN_RE.match(s, pos)
        if close is None:
            return None
        pos = close.end()
    return -n if m["neg"] else n


# -------------------------------
# Coercion
# -------------------------------
def unpack_num(value: LispValue, mode: EvalMode = "lenient") -> int:
    """Coerce a value to an integer.

    - Number: its integer.
    - String: the integer read from its start (see read_integer).
    - single-element List: the coerced element.
    Anything else falls back to 0 in lenient mode and raises
    TypeMismatchError in strict mode.
    """
    match value:
        case Number(n):
            return n
        case String(s):
            n = read_integer(s)
            if n is not None:
                return n
        case List((n,)):
            return unpack_num(n, mode)
    if mode == "strict":
        raise TypeMismatchError("number", value)
    logger.debug("Coercing non-numeric operand %s to 0", value)
    return 0


# -------------------------------
# Integer operators
# -------------------------------
def _checked(op: Callable[[int, int], int]) -> Callable[[int, int], int]:
    def wrapped(a: int, b: int) -> int:
        try:
            return op(a, b)
        except ZeroDivisionError:
            raise DefaultError("Division by zero") from None
    wrapped.__name__ = op.__name__
    return wrapped


def quot(a: int, b: int) -> int:
    """Integer division truncated toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def rem(a: int, b: int) -> int:
    """Remainder of quot; takes the sign of the dividend."""
    return a - b * quot(a, b)


def numeric_binop(op: Callable[[int, int], int]) -> Primitive:
    """Build a primitive that left-folds op over the coerced arguments."""

    def primitive(args: list[LispValue], mode: EvalMode = "lenient") -> LispValue:
        if not args:
            raise NumArgsError(1, args)
        if mode == "strict" and len(args) < 2:
            raise NumArgsError(2, args)
        values = [unpack_num(arg, mode) for arg in args]
        result = values[0]
        for v in values[1:]:
            result = op(result, v)
        return Number(result)

    primitive.__name__ = f"numeric_binop_{op.__name__}"
    return primitive


PRIMITIVES: Mapping[str, Primitive] = MappingProxyType(
    {
        "+": numeric_binop(operator.add),
        "-": numeric_binop(operator.sub),
        "*": numeric_binop(operator.mul),
        "/": numeric_binop(_checked(operator.floordiv)),
        "mod": numeric_binop(_checked(operator.mod)),
        "quotient": numeric_binop(_checked(quot)),
        "remainder": numeric_binop(_checked(rem)),
    }
)


def apply(name: str, args: list[LispValue], mode: EvalMode = "lenient") -> LispValue:
    """Dispatch a call to the primitive table.

    An unknown name yields Bool(False) in lenient mode and raises
    UnboundFunctionError in strict mode.
    """
    primitive = PRIMITIVES.get(name)
    if primitive is None:
        if mode == "strict":
            raise UnboundFunctionError("Unrecognized primitive function args", name)
        logger.debug("Unknown primitive %r, returning #f", name)
        return Bool(False)
    return primitive(args, mode)
