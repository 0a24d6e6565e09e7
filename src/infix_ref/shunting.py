"""
Precedence climbing over an explicit operator stack (shunting-yard)

Turns the flattened stream into postfix order, operators after their operands:

    1 + 2 * 3      =>  1 2 3 * +
    (1 + 2) * 3    =>  1 2 + 3 *
    not a and b    =>  a not b and

Each operator is pushed and popped at most once, so a pass is linear in the
number of tokens.
"""

from __future__ import annotations

import logging
from typing import Any, List, Sequence

from lark import Token

from .errors import UnbalancedGrouping
from .operators import Arity, Assoc, DEFAULT_TABLE, OperatorTable
from .token_types import LPAR, RPAR, is_operator_token

logger = logging.getLogger(__name__)


class PostfixParser:
    """Single-use parse state: output queue plus operator stack."""

    def __init__(self, stream: Sequence[Any], table: OperatorTable = DEFAULT_TABLE):
        self.stream = stream
        self.table = table
        self.output: List[Any] = []
        self.stack: List[tuple[Token, int]] = []

    def _should_pop(self, top: Token, incoming: Token) -> bool:
        if not is_operator_token(top):
            return False

        top_prec = self.table.precedence(top)
        in_prec = self.table.precedence(incoming)

        if top_prec > in_prec:
            return True
        return top_prec == in_prec and self.table.associativity(incoming) is Assoc.LEFT

    def push_operator(self, token: Token, pos: int) -> None:
        # A prefix operator has no left operand, so nothing on the stack can close yet
        if self.table.arity_class(token) is not Arity.UNARY:
            while self.stack and self._should_pop(self.stack[-1][0], token):
                self.output.append(self.stack.pop()[0])

        self.stack.append((token, pos))

    def close_group(self, token: Token, pos: int) -> None:
        while self.stack:
            top, _ = self.stack.pop()
            if top.type == LPAR:
                return
            self.output.append(top)

        raise UnbalancedGrouping("unbalanced grouping: group end without a start", token, pos)

    def finish(self) -> List[Any]:
        while self.stack:
            top, pos = self.stack.pop()
            if top.type == LPAR:
                raise UnbalancedGrouping("unbalanced grouping: group never closed", top, pos)
            self.output.append(top)

        return self.output

    def parse(self) -> List[Any]:
        for pos, token in enumerate(self.stream):
            if isinstance(token, Token) and token.type == LPAR:
                self.stack.append((token, pos))
            elif isinstance(token, Token) and token.type == RPAR:
                self.close_group(token, pos)
            elif is_operator_token(token):
                self.push_operator(token, pos)
            else:
                self.output.append(token)

        postfix = self.finish()
        logger.debug("postfix: %s", postfix)
        return postfix


def to_postfix(stream: Sequence[Any], table: OperatorTable = DEFAULT_TABLE) -> List[Any]:
    return PostfixParser(stream, table).parse()
