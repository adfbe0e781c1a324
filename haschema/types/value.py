"""The Value union: parsed forms and evaluated results share one representation.

Every variant is a frozen dataclass, so values are immutable and compare
structurally. Compound variants store their children as tuples; lists passed
to the constructors are normalised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


class _Printable:
    __slots__ = ()

    def __str__(self) -> str:
        # Lazy import: the printer pattern-matches on the classes defined here.
        from haschema.printer import show_val
        return show_val(self)


@dataclass(frozen=True)
class Atom(_Printable):
    name: str


@dataclass(frozen=True)
class List(_Printable):
    items: tuple[Value, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True)
class DottedList(_Printable):
    items: tuple[Value, ...]
    tail: Value

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True)
class Number(_Printable):
    value: int


@dataclass(frozen=True)
class String(_Printable):
    value: str


@dataclass(frozen=True)
class Bool(_Printable):
    value: bool


Value = Union[Atom, List, DottedList, Number, String, Bool]


def quoted(expr: Value) -> List:
    """Return the (quote expr) form."""
    return List((Atom("quote"), expr))


