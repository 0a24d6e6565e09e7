from __future__ import annotations

from typing import Any, List

import pytest
from lark import Token

from infix_ref import DEFAULT_OPTIONS, GROUP_END, GROUP_START, form, sym, vec
from infix_ref.flatten import flatten
from infix_ref.token_types import CallForm, LambdaForm, Vector, is_group_marker
from tests.support.harness import read


def _shape(stream: List[Any]) -> List[str]:
    """Readable view of a flattened stream."""
    out = []
    for tok in stream:
        if isinstance(tok, CallForm):
            out.append(f"call:{tok.head}")
        elif isinstance(tok, LambdaForm):
            out.append("lambda")
        elif isinstance(tok, Vector):
            out.append("vector")
        elif isinstance(tok, Token):
            out.append(f"{tok.type}:{tok}")
        else:
            out.append(repr(tok))
    return out


FLATTEN_CASES = [
    pytest.param("1 + 2", ["1", "OP:+", "2"], id="flat"),
    pytest.param("(1 + 2) * 3", ["LPAR:(", "1", "OP:+", "2", "RPAR:)", "OP:*", "3"], id="grouped"),
    pytest.param(
        "((a + b))",
        ["LPAR:(", "LPAR:(", "SYMBOL:a", "OP:+", "SYMBOL:b", "RPAR:)", "RPAR:)"],
        id="double-group",
    ),
    pytest.param("(f x) + 1", ["call:f", "OP:+", "1"], id="call-form-opaque"),
    pytest.param("xs ->> (reduce + 0)", ["SYMBOL:xs", "OP:->>", "call:reduce"], id="allowlisted-call"),
    pytest.param("[1 (2 + 3)] ->> count", ["vector", "OP:->>", "SYMBOL:count"], id="vector-opaque"),
    pytest.param("(x => x + 1)", ["lambda"], id="nested-lambda"),
    pytest.param("frob <=> 3", ["SYMBOL:frob", "SYMBOL:<=>", "3"], id="unknown-tag-stays-identifier"),
]


@pytest.mark.parametrize("text, expected", FLATTEN_CASES)
def test_flatten_shapes(text: str, expected: List[str]) -> None:
    assert _shape(flatten(read(text), DEFAULT_OPTIONS)) == expected


def test_group_markers_balance() -> None:
    stream = flatten(read("((1 + (2 * (3 - 4))) / (5 + 6))"), DEFAULT_OPTIONS)
    depth = 0
    for tok in stream:
        if tok == GROUP_START:
            depth += 1
        elif tok == GROUP_END:
            depth -= 1
        assert depth >= 0
    assert depth == 0


def test_call_form_contents_are_not_flattened() -> None:
    stream = flatten(read("(f (a + b) c) * 2"), DEFAULT_OPTIONS)
    call_form = stream[0]
    assert isinstance(call_form, CallForm)
    assert str(call_form.head) == "f"
    assert len(call_form.args) == 2
    assert not any(is_group_marker(tok) for tok in stream)


def test_operator_tokens_keep_source_position() -> None:
    (_, plus, _) = flatten(read("a\n  + b"), DEFAULT_OPTIONS)
    assert plus.type == "OP"
    assert plus.line == 2
    assert plus.column == 3


def test_explicit_markers_in_input_pass_through() -> None:
    tokens = [GROUP_START, sym("f"), sym("+"), 1, GROUP_END]
    assert _shape(flatten(tokens, DEFAULT_OPTIONS)) == ["LPAR:(", "SYMBOL:f", "OP:+", "1", "RPAR:)"]


def test_deep_nesting_uses_no_recursion() -> None:
    nested: Any = form(1, sym("+"), 2)
    for _ in range(5000):
        nested = form(nested)

    stream = flatten([nested], DEFAULT_OPTIONS)
    assert stream.count(GROUP_START) == 5001
    assert stream.count(GROUP_END) == 5001


def test_vectors_stay_whole() -> None:
    value = vec(1, sym("+"), 2)
    assert flatten([value], DEFAULT_OPTIONS) == [value]
