"""
Grouping classifier and lambda disambiguator

A nested Form is either a call-form (head applied to arguments, kept opaque)
or a grouped-expression (parenthesized infix, flattened and re-parsed). The
rule is a heuristic: a form is a call-form when its head is a plain identifier
and either the head is on the allow-list, or no operator sits between two
elements of the form.

    (f x y)          call-form
    (reduce + xs)    call-form (allow-listed head)
    (a + b)          grouped-expression
    (1 + 2)          grouped-expression (head is not an identifier)
    (+ 1 2 3)        call-form (prefix call, unless prefix_calls is off)

Ambiguous forms such as (f x + y) resolve to grouped-expression; callers that
want the other reading must nest the call explicitly.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, Tuple

from lark import Token

from .options import CompileOptions
from .operators import OperatorTable
from .token_types import Form, Vector, is_identifier

logger = logging.getLogger(__name__)


def is_operator(value: Any, table: OperatorTable) -> bool:
    """Only identifiers can be operators; text atoms never are."""
    return is_identifier(value) and table.is_operator(value)


def has_infix_pattern(items: Sequence[Any], table: OperatorTable) -> bool:
    """True if some operator has an element on both sides of it."""
    for idx in range(1, len(items) - 1):
        if is_operator(items[idx], table):
            return True

    return False


def is_call_form(value: Form, options: CompileOptions) -> bool:
    if not isinstance(value, Form) or not value.items:
        return False

    head = value.items[0]
    if not is_identifier(head):
        return False

    if is_operator(head, options.table):
        return options.prefix_calls and not has_infix_pattern(value.items, options.table)

    if str(head) in options.call_allowlist:
        return True

    infix = has_infix_pattern(value.items, options.table)
    if infix:
        logger.debug("form %r headed by %s read as grouped expression", value, head)

    return not infix


def _is_param(value: Any, options: CompileOptions) -> bool:
    return (
        is_identifier(value)
        and not is_operator(value, options.table)
        and str(value) != options.lambda_arrow
        and str(value) not in options.lambda_reserved
    )


def lambda_params(value: Any, options: CompileOptions) -> Optional[Tuple[Token, ...]]:
    """Parameter tuple for `x` or `(x y)`; None if value is not a parameter list."""
    if _is_param(value, options):
        return (value,)

    if isinstance(value, (Form, Vector)) and all(_is_param(p, options) for p in value):
        return tuple(value)

    return None


def is_arrow(value: Any, options: CompileOptions) -> bool:
    return is_identifier(value) and str(value) == options.lambda_arrow


def match_lambda(tokens: Sequence[Any], options: CompileOptions) -> Optional[Tuple[Tuple[Token, ...], Tuple[Any, ...]]]:
    """
    Recognize `params => body...`.

    Returns (params, body tokens) on a match, None otherwise.
    """
    if len(tokens) < 3 or not is_arrow(tokens[1], options):
        return None

    params = lambda_params(tokens[0], options)
    if params is None:
        return None

    logger.debug("lambda with params %s", [str(p) for p in params])
    return params, tuple(tokens[2:])
