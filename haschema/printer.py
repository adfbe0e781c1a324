"""Textual rendering of values.

Strings are wrapped in double quotes without escaping, so the output is not
guaranteed to read back as the same value.
"""

from __future__ import annotations

from typing import Iterable

from haschema.types.value import Atom, Bool, DottedList, List, Number, String, Value


def unwords_list(values: Iterable[Value]) -> str:
    return " ".join([show_val(v) for v in values])


def show_val(value: Value) -> str:
    match value:
        case String(contents):
            return f'"{contents}"'
        case Atom(name):
            return name
        case Number(n):
            return str(n)
        case Bool(True):
            return "#t"
        case Bool(False):
            return "#f"
        case List(items):
            return f"({unwords_list(items)})"
        case DottedList(items, tail):
            return f"({unwords_list(items)} . {show_val(tail)})"
    raise TypeError(f"Cannot show non-value {value!r}")
