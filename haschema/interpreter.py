from __future__ import annotations

import logging

from haschema import EvalMode, LispValue, SExpression
from haschema.config import get_eval_mode
from haschema.errors import DefaultError
from haschema.evaluation.evaluator import evaluate
from haschema.printer import show_val
from haschema.reader.parser import parse, read_expr

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates reading, evaluating and printing a single expression.

    The evaluation mode comes from the constructor argument, then the
    DefaultMode class attribute, then the HASCHEMA_EVAL_MODE environment
    variable (which defaults to "lenient").
    """

    DefaultMode: EvalMode | None = None

    def __init__(self, mode: EvalMode | None = None):
        self.mode: EvalMode = mode or self.DefaultMode or get_eval_mode()

    def read(self, code: str) -> SExpression:
        # Lenient reading turns a parse failure into a String value.
        if self.mode == "strict":
            return parse(code)
        return read_expr(code)

    def eval(self, code: str) -> LispValue:
        expr = self.read(code)
        result = evaluate(expr, self.mode)
        logger.debug("%s => %s", code, result)
        return result

    def run(self, code: str) -> str:
        result = self.eval(code)
        try:
            return show_val(result)
        except RecursionError:
            raise DefaultError("Result nested too deeply to print") from None
