from __future__ import annotations

from typing import Sequence


def _show(value) -> str:
    from haschema.printer import show_val
    return show_val(value)


class HaschemaError(Exception):
    """ Base class for all haschema errors"""
    pass


class NumArgsError(HaschemaError):
    """ Raised when a primitive receives the wrong number of arguments"""

    def __init__(self, expected: int, found: Sequence):
        self.expected = expected
        self.found = list(found)
        super().__init__(expected, self.found)

    def __str__(self) -> str:
        from haschema.printer import unwords_list
        return f"Expected {self.expected} args; found values {unwords_list(self.found)}"


class TypeMismatchError(HaschemaError):
    """ Raised when an operand has the wrong type"""

    def __init__(self, expected: str, found):
        self.expected = expected
        self.found = found
        super().__init__(expected, found)

    def __str__(self) -> str:
        return f"Invalid type: expected {self.expected}, found {_show(self.found)}"


class ParserError(HaschemaError):
    """ Raised when the input does not match the grammar"""

    def __init__(
        self,
        pos: int,
        line: int,
        column: int,
        unexpected: str,
        expected: Sequence[str] = (),
        source_name: str = "lisp",
        reason: str | None = None,
    ):
        self.pos = pos
        self.line = line
        self.column = column
        self.unexpected = unexpected
        self.expected = list(dict.fromkeys(expected))
        self.source_name = source_name
        # Replaces the unexpected/expecting lines for failures that are not a token mismatch
        self.reason = reason
        super().__init__(self.describe())

    def describe(self) -> str:
        header = f'"{self.source_name}" (line {self.line}, column {self.column}):'
        if self.reason:
            return f"{header}\n{self.reason}"
        lines = [header, f"unexpected {self.unexpected}"]
        if self.expected:
            if len(self.expected) == 1:
                lines.append(f"expecting {self.expected[0]}")
            else:
                lines.append(
                    f"expecting {', '.join(self.expected[:-1])} or {self.expected[-1]}"
                )
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.describe()


class BadSpecialFormError(HaschemaError):
    """ Raised when a form has no evaluation rule"""

    def __init__(self, message: str, form):
        self.message = message
        self.form = form
        super().__init__(message, form)

    def __str__(self) -> str:
        return f"{self.message}: {_show(self.form)}"


class UnboundFunctionError(HaschemaError):
    """ Raised when a call names a function that is not a primitive"""

    def __init__(self, message: str, name: str):
        self.message = message
        self.name = name
        super().__init__(message, name)

    def __str__(self) -> str:
        return f"{self.message}: {self.name}"


class DefaultError(HaschemaError):
    """ Raised for failures outside the other categories"""
