"""Render call trees as Lisp-style text for debugging and test output.

    (+ 1 (* 2 3))
    (fn [x] (* x x))
    (nil-safe [__it0 user] (get __it0 :name))
    [1 (+ 2 3)]
"""
from __future__ import annotations

from typing import Any, List

from lark import Token
from lark.visitors import Transformer_NonRecursive

from .tree import Node, is_tree


class Sexpr(str):
    """Already rendered text, as opposed to a text atom still to be quoted."""


def render_atom(value: Any) -> str:
    if isinstance(value, (Sexpr, Token)):
        return str(value)
    if value is None:
        return "nil"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return repr(value)


def _join(children: List[Any]) -> str:
    return " ".join(render_atom(c) for c in children)


class SexprRenderer(Transformer_NonRecursive):
    def __init__(self) -> None:
        super().__init__(visit_tokens=False)

    def call(self, children: List[Any]) -> Sexpr:
        return Sexpr(f"({_join(children)})")

    def params(self, children: List[Any]) -> Sexpr:
        return Sexpr(f"[{_join(children)}]")

    def vector(self, children: List[Any]) -> Sexpr:
        return Sexpr(f"[{_join(children)}]")

    def nil_safe_call(self, children: List[Any]) -> Sexpr:
        binding, data, body = children
        return Sexpr(f"(nil-safe [{render_atom(binding)} {render_atom(data)}] {render_atom(body)})")

    def __default__(self, data: str, children: List[Any], meta: Any) -> Sexpr:
        # `lambda` cannot be a method name
        if data == "lambda":
            params, body = children
            return Sexpr(f"(fn {render_atom(params)} {render_atom(body)})")
        return Sexpr(f"({data} {_join(children)})")


def to_sexpr(node: Node) -> str:
    if is_tree(node):
        return str(SexprRenderer().transform(node))
    return render_atom(node)
