"""
Postfix compiler

Stack machine over the postfix sequence. Operands are pushed (opaque ones are
compiled first, through whatever the driver hands in as `operand`), operators
pop what their arity class needs:

    unary       a not        => (not a)
    binary      a b +        => (+ a b)
    ->          a (f x) ->   => (f a x)
    ->>         a (f x) ->>  => (f x a)
    some->      a f some->   => nil_safe_call(__it0, a, (f __it0))

`run` is a generator: it yields a sub-generator for every operand and receives
the compiled operand back, which lets the driver keep nesting off the Python
call stack.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generator, Iterator, List, Sequence

from lark import Token

from .errors import DanglingOperands, MissingOperand
from .operators import Arity, Thread, OperatorTable
from .token_types import is_operator_token
from .tree import Node, call, head_symbol, nil_safe_call, splice_first, splice_last

logger = logging.getLogger(__name__)

OperandCompiler = Callable[[Any], Generator[Any, Any, Node]]


class PostfixCompiler:
    def __init__(self, table: OperatorTable, bindings: Iterator[Token]):
        self.table = table
        self.bindings = bindings

    def _pop(self, stack: List[Node], token: Token, pos: int) -> Node:
        if not stack:
            raise MissingOperand(f"missing operand for {token!s}", token, pos)
        return stack.pop()

    def apply(self, token: Token, stack: List[Node], pos: int) -> Node:
        spec = self.table.spec(token)
        arity = spec.arity if spec is not None else Arity.BINARY
        head = head_symbol(token, token)

        if arity is Arity.UNARY:
            return call(head, self._pop(stack, token, pos))

        if len(stack) < 2:
            raise MissingOperand(f"missing operand for {token!s}", token, pos)

        b = stack.pop()
        a = stack.pop()

        if arity is Arity.BINARY:
            return call(head, a, b)

        splice = splice_first if spec.direction is Thread.FIRST else splice_last
        if not spec.nil_safe:
            return splice(a, b)

        binding = next(self.bindings)
        logger.debug("%s binds its data to %s", token, binding)
        return nil_safe_call(binding, a, splice(binding, b))

    def run(self, postfix: Sequence[Any], operand: OperandCompiler) -> Generator[Any, Any, Node]:
        stack: List[Node] = []
        # postfix position where each stacked value begins
        starts: List[int] = []

        for pos, token in enumerate(postfix):
            if is_operator_token(token):
                node = self.apply(token, stack, pos)
                start = starts[len(stack)]
                del starts[len(stack):]
                stack.append(node)
                starts.append(start)
            else:
                stack.append((yield operand(token)))
                starts.append(pos)

        if not stack:
            raise MissingOperand("empty expression")

        if len(stack) > 1:
            raise DanglingOperands(
                f"{len(stack)} values left where one expression was expected",
                tuple(stack),
                stack[1],
                starts[1],
            )

        return stack[0]
