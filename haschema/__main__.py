"""Command line entry point: evaluate one expression and print the result.

    python -m haschema "(+ 2 (* 3 4))"
"""

from __future__ import annotations

import argparse
import logging
import sys

from haschema.config import get_log_level
from haschema.errors import HaschemaError
from haschema.interpreter import Interpreter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="haschema",
        description="Parse and evaluate a single S-expression.",
    )
    parser.add_argument("expr", help="the expression to evaluate")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--strict",
        dest="mode",
        action="store_const",
        const="strict",
        help="raise errors instead of coercing bad input",
    )
    mode.add_argument(
        "--lenient",
        dest="mode",
        action="store_const",
        const="lenient",
        help="coerce bad input silently (default)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else get_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    interp = Interpreter(mode=args.mode)
    try:
        print(interp.run(args.expr))
    except HaschemaError as err:
        print(f"error: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
