"""
Operator table

Precedence, associativity and arity class per operator tag. The table is data:
adding an operator means adding an OperatorSpec row, the parser and compiler
read everything they need from here.

Precedence (lowest to highest):
1. threading (->, ->>, some->, some->>)
2. or
3. and
4. compare (=, not=, <, <=, >, >=)
5. not (unary, right associative)
6. add (+, -)
7. mul (*, /)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Union

from .errors import OperatorTableError

Number = Union[int, float, str, Fraction]


class Assoc(Enum):
    LEFT = "left"
    RIGHT = "right"


class Arity(Enum):
    UNARY = "unary"
    BINARY = "binary"
    THREADING = "threading"


class Thread(Enum):
    FIRST = "first"
    LAST = "last"


@dataclass(frozen=True)
class OperatorSpec:
    tag: str
    precedence: Fraction
    assoc: Assoc = Assoc.LEFT
    arity: Arity = Arity.BINARY
    direction: Optional[Thread] = None
    nil_safe: bool = False

    def __post_init__(self) -> None:
        # Fraction(str) keeps decimal literals like "0.05" exact
        prec = self.precedence
        if isinstance(prec, float):
            prec = str(prec)
        object.__setattr__(self, "precedence", Fraction(prec))

        if self.arity is Arity.THREADING:
            if self.direction is None:
                raise OperatorTableError(f"threading operator {self.tag!r} needs a direction")
        else:
            if self.direction is not None:
                raise OperatorTableError(f"only threading operators take a direction ({self.tag!r})")
            if self.nil_safe:
                raise OperatorTableError(f"only threading operators can be nil-safe ({self.tag!r})")

    @property
    def is_left(self) -> bool:
        return self.assoc is Assoc.LEFT


def unary(tag: str, precedence: Number, assoc: Assoc = Assoc.RIGHT) -> OperatorSpec:
    return OperatorSpec(tag, precedence, assoc, Arity.UNARY)


def binary(tag: str, precedence: Number, assoc: Assoc = Assoc.LEFT) -> OperatorSpec:
    return OperatorSpec(tag, precedence, assoc, Arity.BINARY)


def threading(tag: str, precedence: Number, direction: Thread, nil_safe: bool = False) -> OperatorSpec:
    return OperatorSpec(tag, precedence, Assoc.LEFT, Arity.THREADING, direction, nil_safe)


class OperatorTable(Mapping[str, OperatorSpec]):
    """Immutable tag -> OperatorSpec lookup."""

    def __init__(self, specs: Iterable[OperatorSpec] = ()):
        rows: Dict[str, OperatorSpec] = {}

        for spec in specs:
            if spec.tag in rows:
                raise OperatorTableError(f"duplicate operator tag {spec.tag!r}")
            rows[spec.tag] = spec

        self._rows = MappingProxyType(rows)

    def __getitem__(self, tag: str) -> OperatorSpec:
        return self._rows[tag]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"OperatorTable({sorted(self._rows)!r})"

    # Mapping sets __hash__ to None
    def __hash__(self) -> int:
        return hash(frozenset(self._rows.items()))

    def spec(self, tag: Any) -> Optional[OperatorSpec]:
        if not isinstance(tag, str):
            return None
        return self._rows.get(str(tag))

    def is_operator(self, tag: Any) -> bool:
        return self.spec(tag) is not None

    def precedence(self, tag: Any) -> Fraction:
        spec = self.spec(tag)
        return spec.precedence if spec else Fraction(0)

    def associativity(self, tag: Any) -> Assoc:
        spec = self.spec(tag)
        return spec.assoc if spec else Assoc.LEFT

    def arity_class(self, tag: Any) -> Arity:
        spec = self.spec(tag)
        return spec.arity if spec else Arity.BINARY

    def extend(self, *specs: OperatorSpec) -> OperatorTable:
        """New table with rows added or replaced."""
        rows = dict(self._rows)

        for spec in specs:
            rows[spec.tag] = spec

        return OperatorTable(rows.values())

    def without(self, *tags: str) -> OperatorTable:
        return OperatorTable(spec for tag, spec in self._rows.items() if tag not in tags)


DEFAULT_TABLE = OperatorTable([
    threading('->', '0.05', Thread.FIRST),
    threading('->>', '0.05', Thread.LAST),
    threading('some->', '0.05', Thread.FIRST, nil_safe=True),
    threading('some->>', '0.05', Thread.LAST, nil_safe=True),
    binary('or', '0.1'),
    binary('and', '0.2'),
    binary('=', '0.5'),
    binary('not=', '0.5'),
    binary('<', '0.5'),
    binary('<=', '0.5'),
    binary('>', '0.5'),
    binary('>=', '0.5'),
    unary('not', '0.8'),
    binary('+', 1),
    binary('-', 1),
    binary('*', 2),
    binary('/', 2),
])
