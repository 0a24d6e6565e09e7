"""
Infix compiler driver

Pipeline per expression:

    tokens -> lambda check -> flatten -> to_postfix -> postfix compiler -> call tree

Opaque operands (call-forms, vectors, nested lambdas) go through the same
pipeline again. Every stage is written as a generator that yields the
sub-computations it needs; `drive` runs them on an explicit stack, so deep
nesting costs heap, not Python frames.
"""

from __future__ import annotations

import logging
from itertools import count
from typing import AbstractSet, Any, Generator, Iterator, List, Optional, Sequence, Set

from lark import Token

from .classify import is_operator, match_lambda
from .flatten import classify_form, flatten, operator_token
from .options import CompileOptions, DEFAULT_OPTIONS
from .postfix import PostfixCompiler
from .shunting import to_postfix
from .token_types import SYMBOL, CallForm, Form, LambdaForm, Vector, is_identifier
from .tree import Node, call, lam, vector

logger = logging.getLogger(__name__)

Step = Generator[Any, Any, Node]


def drive(root: Step) -> Node:
    """Run a generator that yields sub-generators and expects their results back."""
    stack: List[Step] = [root]
    result: Any = None

    while True:
        try:
            request = stack[-1].send(result)
        except StopIteration as stop:
            stack.pop()
            result = stop.value
            if not stack:
                return result
            continue

        stack.append(request)
        result = None


def _leaf(value: Any) -> Step:
    return value
    yield  # pragma: no cover


def identifier_names(tokens: Sequence[Any]) -> Set[str]:
    """Every identifier name in the input, nested forms and vectors included."""
    names: Set[str] = set()
    pending: List[Iterator[Any]] = [iter(tokens)]

    while pending:
        for item in pending[-1]:
            if isinstance(item, (Form, Vector)):
                pending.append(iter(item.items))
                break
            if is_identifier(item):
                names.add(str(item))
        else:
            pending.pop()

    return names


class _Run:
    """Transient state for one top-level compile."""

    def __init__(self, options: CompileOptions, taken: AbstractSet[str] = frozenset()):
        self.options = options
        self.taken = taken
        self.postfix = PostfixCompiler(options.table, self._bindings())

    def _bindings(self) -> Iterator[Token]:
        """Generated names, skipping any the input already uses."""
        for n in count():
            name = f"{self.options.binding_prefix}{n}"
            if name not in self.taken:
                yield Token(SYMBOL, name)

    def expression(self, tokens: Sequence[Any]) -> Step:
        """Entry point for a token sequence that may be a lambda."""
        matched = match_lambda(tokens, self.options)
        if matched is not None:
            params, body = matched
            return (yield self.lambda_(params, body))

        return (yield self.infix(tokens))

    def lambda_(self, params: Sequence[Token], body: Sequence[Any]) -> Step:
        compiled = yield self.expression(body)
        return lam(params, compiled)

    def infix(self, tokens: Sequence[Any]) -> Step:
        stream = flatten(tokens, self.options)
        postfix = to_postfix(stream, self.options.table)
        return (yield self.postfix.run(postfix, self.operand))

    def operand(self, token: Any) -> Step:
        if isinstance(token, CallForm):
            return self.call_form(token)
        if isinstance(token, LambdaForm):
            return self.lambda_(token.params, token.body)
        if isinstance(token, Vector):
            return self.vector(token)
        return _leaf(token)

    def argument(self, value: Any) -> Step:
        """A call-form argument or vector element, compiled on its own."""
        if isinstance(value, Form):
            opaque = classify_form(value, self.options)
            if opaque is None:
                return self.infix(value.items)
            return self.operand(opaque)
        return self.operand(value)

    def call_form(self, form: CallForm) -> Step:
        args = []
        for arg in form.args:
            args.append((yield self.argument(arg)))
        return call(form.head, *args)

    def vector(self, value: Vector) -> Step:
        items = []
        for item in value.items:
            items.append((yield self.argument(item)))
        return vector(items)


class Compiler:
    """Compiles token sequences into call trees. Holds no per-call state."""

    def __init__(self, options: Optional[CompileOptions] = None):
        self.options = options or DEFAULT_OPTIONS

    def compile(self, tokens: Sequence[Any]) -> Node:
        if isinstance(tokens, Form):
            tokens = tokens.items
        run = _Run(self.options, identifier_names(tokens))
        tree = drive(run.expression(tuple(tokens)))
        logger.debug("compiled %d tokens", len(tokens))
        return tree

    def compile_postfix(self, postfix: Sequence[Any]) -> Node:
        """Compile an already-postfix sequence (operators as OP tokens)."""
        table = self.options.table
        postfix = [operator_token(t) if is_operator(t, table) else t for t in postfix]
        run = _Run(self.options, identifier_names(postfix))
        return drive(run.postfix.run(postfix, run.argument))

    def postfix_of(self, tokens: Sequence[Any]) -> List[Any]:
        return to_postfix(flatten(tokens, self.options), self.options.table)


def compile_infix(tokens: Sequence[Any], options: Optional[CompileOptions] = None) -> Node:
    return Compiler(options).compile(tokens)


def compile_postfix(postfix: Sequence[Any], options: Optional[CompileOptions] = None) -> Node:
    return Compiler(options).compile_postfix(postfix)
