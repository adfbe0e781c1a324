"""
  S-expression Reader, Lexer and Parser

- Lazy lexing, single-pass recursive-descent parsing
- Emits haschema Value nodes:

    - atoms          -> Atom(name)
    - "#f"           -> Bool(False)
    - a tab "atom"   -> Bool(True)   (kept for parity; a tab never starts an atom)
    - strings        -> String (no escape sequences)
    - digit runs     -> Number (arbitrary precision int)
    - 'x             -> List((Atom("quote"), x))
    - (a b c)        -> List
    - (a b . c)      -> DottedList

Whitespace is significant: list elements are separated by one or more
whitespace characters, and a dotted list needs whitespace after every element
and after the dot. Only one expression is read; trailing text is ignored.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Iterator, NamedTuple, Optional, TypeVar

from haschema import SExpression
from haschema.errors import ParserError
from haschema.types.value import Bool, DottedList, List, Number, String, Atom, quoted

logger = logging.getLogger(__name__)

T = TypeVar("T")

SYMBOL_CHARS = "!#$%&|*+-/:<=>?@^_~"

_LETTER = r"[^\W\d_]"
_SYMBOL = f"[{re.escape(SYMBOL_CHARS)}]"

TOKEN_RE = re.compile(
    r"(?P<space>\s+)"  # separator run
    rf"|(?P<atom>(?:{_LETTER}|{_SYMBOL})(?:{_LETTER}|[0-9]|{_SYMBOL})*)"
    r'|(?P<string>"[^"]*")'  # no escapes
    r'|(?P<unterminated>"[^"]*)'  # opening quote never closed
    r"|(?P<number>[0-9]+)"
    r"|(?P<quote>')"
    r"|(?P<lparen>\()"
    r"|(?P<rparen>\))"
    r"|(?P<dot>\.)"
    r"|(?P<unknown>.)",
    re.DOTALL,
)

# Labels used in "expecting ..." messages
EXPR_START = ("letter", "symbol", '"\\""', "digit", '"\'"', '"("')

# Token kinds that begin an expression
_EXPR_KINDS = frozenset({"atom", "string", "unterminated", "number", "quote", "lparen"})


class Token(NamedTuple):
    kind: str
    text: str
    pos: int


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields Token(kind, text, pos) until the source is exhausted."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        kind, end = m.lastgroup, m.end()
        if kind == "atom":
            # The regex letter class also admits numeric characters such as "½"
            end = next((i for i in range(pos, end) if not _is_atom_char(source[i])), end)
            if end == pos:
                kind, end = "unknown", pos + 1
        yield Token(kind, source[pos:end], pos)
        pos = end


def _is_atom_char(ch: str) -> bool:
    return ch.isalpha() or ch in SYMBOL_CHARS or "0" <= ch <= "9"


def line_and_column(source: str, pos: int) -> tuple[int, int]:
    """1-based line and column of offset pos; tabs stop every 8 columns."""
    line, column = 1, 1
    for ch in source[:pos]:
        if ch == "\n":
            line += 1
            column = 1
        elif ch == "\t":
            column += 8 - (column - 1) % 8
        else:
            column += 1
    return line, column


def _show_char(ch: str) -> str:
    return '"' + repr(ch)[1:-1].replace('"', '\\"') + '"'


def _atom_value(text: str) -> SExpression:
    match text:
        case "\t":
            return Bool(True)
        case "#f":
            return Bool(False)
        case _:
            return Atom(text)


class TokenStream:
    def __init__(self, source: str, source_name: str = "lisp"):
        self.source = source
        self.source_name = source_name
        self.tokens = lex(source)
        self.buffer: list[Token] = []
        self.index = 0
        self._eof = Token("eof", "", len(source))
        # Expectations from alternatives that failed at the current token
        self._pending: Optional[ParserError] = None

    # ------------------------
    # Token access
    # ------------------------
    def peek(self) -> Token:
        while len(self.buffer) <= self.index:
            tok = next(self.tokens, None)
            if tok is None:
                return self._eof
            self.buffer.append(tok)
        return self.buffer[self.index]

    def advance(self) -> Token:
        tok = self.peek()
        if tok.kind != "eof":
            self.index += 1
            self._pending = None
        return tok

    # ------------------------
    # Errors
    # ------------------------
    def error_at(self, pos: int, unexpected: str, expected=()) -> ParserError:
        expected = list(expected)
        if self._pending is not None and self._pending.pos == pos:
            expected = self._pending.expected + expected
        line, column = line_and_column(self.source, pos)
        return ParserError(pos, line, column, unexpected, expected, self.source_name)

    def error(self, tok: Token, expected=()) -> ParserError:
        if tok.kind == "eof":
            return self.error_at(tok.pos, "end of input", expected)
        return self.error_at(tok.pos, _show_char(tok.text[0]), expected)

    def expect(self, kind: str, label: str) -> Token:
        tok = self.peek()
        if tok.kind != kind:
            raise self.error(tok, [label])
        return self.advance()

    def attempt(self, parse_fn: Callable[[], T]) -> Optional[T]:
        """Run parse_fn; a failure that consumed no tokens yields None instead of raising."""
        start = self.index
        try:
            return parse_fn()
        except ParserError as err:
            if self.index != start:
                raise
            self._pending = err
            return None

    # ------------------------
    # Grammar
    # ------------------------
    def parse_expr(self) -> SExpression:
        tok = self.peek()

        if tok.kind == "atom":
            self.advance()
            return _atom_value(tok.text)

        if tok.kind == "string":
            self.advance()
            return String(tok.text[1:-1])

        if tok.kind == "number":
            self.advance()
            return Number(int(tok.text))

        if tok.kind == "quote":
            self.advance()
            return quoted(self.parse_expr())

        if tok.kind == "lparen":
            self.advance()
            return self.parse_parenthesized()

        if tok.kind == "unterminated":
            self.advance()  # the string body is consumed before running out of input
            raise self.error_at(len(self.source), "end of input", ['"\\""'])

        raise self.error(tok, EXPR_START)

    def parse_parenthesized(self) -> SExpression:
        # The dotted and plain list grammars share their element run and only
        # diverge at the token after the last separator, so the run is read once.
        items = []
        if self._at_expr():
            items.append(self.parse_expr())
            while self.attempt(self._separator) is not None:
                if not self._at_expr():
                    return self._finish_dotted(items)
                items.append(self.parse_expr())
        elif self.peek().kind == "dot":
            return self._finish_dotted(items)
        tok = self.peek()
        if tok.kind != "rparen":
            expected = ['")"'] if items else ['"."', '")"']
            raise self.error(tok, expected)
        self.advance()
        return List(items)

    def _finish_dotted(self, items: list[SExpression]) -> DottedList:
        self.expect("dot", '"."')
        self._separator()
        tail = self.parse_expr()
        self.expect("rparen", '")"')
        return DottedList(items, tail)

    def _at_expr(self) -> bool:
        """True if the next token can start an expression; otherwise records the expectation."""
        tok = self.peek()
        if tok.kind in _EXPR_KINDS:
            return True
        self._pending = self.error(tok, EXPR_START)
        return False

    def _separator(self) -> Token:
        return self.expect("space", "space")


def parse(source: str, source_name: str = "lisp") -> SExpression:
    """Parse one expression from source, raising ParserError on the first mismatch."""
    stream = TokenStream(source, source_name)
    try:
        expr = stream.parse_expr()
    except RecursionError:
        # Position of the deepest token read; the lexer may not be resumable here
        pos = stream.buffer[stream.index - 1].pos if stream.index else 0
        line, column = line_and_column(source, pos)
        raise ParserError(
            pos, line, column, "", source_name=source_name,
            reason="expression nested too deeply",
        ) from None
    rest = stream.peek()
    if rest.kind != "eof":
        logger.debug("Ignoring trailing input at offset %d: %r", rest.pos, source[rest.pos:])
    logger.debug("Parsed %r -> %r", source, expr)
    return expr


def read_expr(source: str, source_name: str = "lisp") -> SExpression:
    """Parse source; a parse failure becomes a String value describing it."""
    try:
        return parse(source, source_name)
    except ParserError as err:
        logger.debug("Parse failed: %s", err)
        return String(f"No match: {err}")
