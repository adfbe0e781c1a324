"""Core evaluator for haschema.

Direct recursive tree walk. Literals evaluate to themselves, (quote x) returns
x untouched, and any other list headed by an atom is a primitive call whose
arguments are evaluated eagerly, left to right.
"""

from __future__ import annotations

import logging

from haschema import EvalMode, LispValue, SExpression
from haschema.builtin.primitives import apply
from haschema.errors import BadSpecialFormError, DefaultError
from haschema.types.value import Atom, Bool, List, Number, String

logger = logging.getLogger(__name__)


def evaluate(expr: SExpression, mode: EvalMode = "lenient") -> LispValue:
    """
    Evaluate expr, returning a new value; expr itself is never modified.

    Bare atoms, dotted lists, the empty list and lists whose head is not an
    atom have no evaluation rule and raise BadSpecialFormError in either mode.
    Nesting deeper than the interpreter stack raises DefaultError.
    """
    try:
        return evaluate0(expr, mode)
    except RecursionError:
        raise DefaultError("Expression nested too deeply") from None


def evaluate0(expr: SExpression, mode: EvalMode = "lenient") -> LispValue:
    """Single recursive evaluation step."""
    match expr:
        case String() | Number() | Bool():
            return expr

        case List((Atom("quote"), quoted)):
            return quoted

        case List((Atom("quote"), *_)) if mode == "strict":
            raise BadSpecialFormError("Malformed quote form", expr)

        case List((Atom(name), *tail_args)):
            args = [evaluate0(arg, mode) for arg in tail_args]
            logger.debug("Applying %s to %d argument(s)", name, len(args))
            return apply(name, args, mode)

    raise BadSpecialFormError("Unrecognized special form", expr)
