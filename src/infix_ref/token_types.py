"""
Token Types for the infix compiler

Input tokens arrive pre-segmented:
- identifiers are lark Tokens (``sym('x')``)
- nested groupings are ``Form`` instances
- vector literals are ``Vector`` instances
- anything else is an atomic value and passes through untouched

The flattener turns those into a classified stream (group markers, operator
tokens, opaque operands). Classification happens once there and is never
re-interpreted downstream.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Optional, Tuple

from lark import Token

SYMBOL = 'SYMBOL'
OP = 'OP'
LPAR = 'LPAR'
RPAR = 'RPAR'

GROUP_START = Token(LPAR, '(')
GROUP_END = Token(RPAR, ')')


def sym(name: str, line: Optional[int] = None, column: Optional[int] = None) -> Token:
    """Build an identifier token."""
    return Token(SYMBOL, name, line=line, column=column)


def is_identifier(value: Any) -> bool:
    return isinstance(value, Token) and value.type not in (OP, LPAR, RPAR)


def is_group_marker(value: Any) -> bool:
    return isinstance(value, Token) and value.type in (LPAR, RPAR)


def is_operator_token(value: Any) -> bool:
    return isinstance(value, Token) and value.type == OP


@dataclass(frozen=True)
class _Seq:
    items: Tuple[Any, ...]

    def __iter__(self) -> Iterator[Any]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]


@dataclass(frozen=True)
class Form(_Seq):
    """Nested grouping; call-form or grouped-expression is decided later."""

    def __repr__(self) -> str:
        return "(" + " ".join(repr(x) for x in self.items) + ")"


@dataclass(frozen=True)
class Vector(_Seq):
    """Collection literal; each element compiles as its own expression."""

    def __repr__(self) -> str:
        return "[" + " ".join(repr(x) for x in self.items) + "]"


def form(*items: Any) -> Form:
    return Form(tuple(items))


def vec(*items: Any) -> Vector:
    return Vector(tuple(items))


# ---------- classified operands ----------

@dataclass(frozen=True)
class CallForm:
    """Opaque call-form operand: head applied to args."""

    head: Token
    args: Tuple[Any, ...]


@dataclass(frozen=True)
class LambdaForm:
    """Opaque lambda operand found nested inside another expression."""

    params: Tuple[Token, ...]
    body: Tuple[Any, ...]
