from __future__ import annotations

from typing import Any

import pytest
from lark import Token

from infix_ref import sym, to_sexpr
from infix_ref.render import Sexpr, render_atom
from infix_ref.tree import call, lam, nil_safe_call, vector
from tests.support.harness import sexpr

ATOM_CASES = [
    pytest.param(None, "nil", id="null"),
    pytest.param(True, "true", id="true"),
    pytest.param(False, "false", id="false"),
    pytest.param(3, "3", id="int"),
    pytest.param(1.5, "1.5", id="float"),
    pytest.param("hi", '"hi"', id="text"),
    pytest.param('say "hi"', '"say \\"hi\\""', id="text-with-quotes"),
    pytest.param(sym("x"), "x", id="identifier"),
    pytest.param(Token("KEYWORD", ":name"), ":name", id="keyword"),
    pytest.param(Sexpr("(f x)"), "(f x)", id="already-rendered"),
]


@pytest.mark.parametrize("value, expected", ATOM_CASES)
def test_render_atom(value: Any, expected: str) -> None:
    assert render_atom(value) == expected
    assert to_sexpr(value) == expected


def test_render_trees() -> None:
    x = sym("x")
    it = sym("__it0")

    assert to_sexpr(call(sym("+"), 1, call(sym("*"), 2, 3))) == "(+ 1 (* 2 3))"
    assert to_sexpr(lam([x], call(sym("*"), x, x))) == "(fn [x] (* x x))"
    assert to_sexpr(nil_safe_call(it, sym("u"), call(sym("f"), it))) == "(nil-safe [__it0 u] (f __it0))"
    assert to_sexpr(vector([1, "a", None])) == '[1 "a" nil]'
    assert to_sexpr(call(sym("f"))) == "(f)"


def test_render_from_text() -> None:
    assert sexpr('(str "a" :k true) + 1') == '(+ (str "a" :k true) 1)'
    assert sexpr("[]") == "[]"


def test_render_deep_tree() -> None:
    node: Any = 0
    for _ in range(2000):
        node = call(sym("inc"), node)

    text = to_sexpr(node)
    assert text.startswith("(inc (inc ")
    assert text.count("(") == 2000
