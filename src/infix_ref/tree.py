"""Call tree nodes and the helpers used to build and inspect them.

The tree is made of lark Trees:

    Tree('call', [head, *operands])
    Tree('lambda', [Tree('params', [*identifiers]), body])
    Tree('nil_safe_call', [binding, data, body])
    Tree('vector', [*items])

Anything that is not a Tree is a leaf (an atomic value or an identifier token).
"""
from __future__ import annotations

from typing import Any, Iterable, List, Optional

from lark import Token, Tree
from typing_extensions import TypeAlias, TypeGuard

from .token_types import SYMBOL

Node: TypeAlias = Any

CALL = 'call'
LAMBDA = 'lambda'
PARAMS = 'params'
NIL_SAFE_CALL = 'nil_safe_call'
VECTOR = 'vector'


def call(head: Node, *operands: Node) -> Tree:
    return Tree(CALL, [head, *operands])


def lam(params: Iterable[Token], body: Node) -> Tree:
    return Tree(LAMBDA, [Tree(PARAMS, list(params)), body])


def nil_safe_call(binding: Token, data: Node, body: Node) -> Tree:
    return Tree(NIL_SAFE_CALL, [binding, data, body])


def vector(items: Iterable[Node]) -> Tree:
    return Tree(VECTOR, list(items))


def head_symbol(tag: str, borrow: Optional[Token] = None) -> Token:
    """Operator heads leave the compiler as plain identifiers."""
    if isinstance(borrow, Token):
        return Token.new_borrow_pos(SYMBOL, str(tag), borrow)
    return Token(SYMBOL, str(tag))


def is_tree(node: Node) -> TypeGuard[Tree]:
    return isinstance(node, Tree)

def tree_label(node: Node) -> Optional[str]:
    return node.data if is_tree(node) else None

def tree_children(node: Node) -> List[Node]:
    if not is_tree(node):
        return []

    return list(node.children)

def is_call(node: Node) -> TypeGuard[Tree]:
    return tree_label(node) == CALL

def is_lambda(node: Node) -> TypeGuard[Tree]:
    return tree_label(node) == LAMBDA

def is_nil_safe(node: Node) -> TypeGuard[Tree]:
    return tree_label(node) == NIL_SAFE_CALL

def call_head(node: Tree) -> Node:
    return node.children[0]

def call_operands(node: Tree) -> List[Node]:
    return list(node.children[1:])

def lambda_params(node: Tree) -> List[Token]:
    return list(node.children[0].children)

def lambda_body(node: Tree) -> Node:
    return node.children[1]


def splice_first(data: Node, operation: Node) -> Tree:
    """(-> a (f x)) => (f a x); (-> a f) => (f a)"""
    if is_call(operation):
        return call(call_head(operation), data, *call_operands(operation))
    return call(operation, data)


def splice_last(data: Node, operation: Node) -> Tree:
    """(->> a (f x)) => (f x a); (->> a f) => (f a)"""
    if is_call(operation):
        return call(call_head(operation), *call_operands(operation), data)
    return call(operation, data)


def depth(node: Node) -> int:
    """Nesting depth of a call tree, computed without recursion."""
    deepest = 0
    pending = [(node, 0)]

    while pending:
        current, level = pending.pop()
        deepest = max(deepest, level)
        for child in tree_children(current):
            pending.append((child, level + 1))

    return deepest
