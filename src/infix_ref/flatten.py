from __future__ import annotations

import logging
from typing import Any, Iterator, List, Sequence

from lark import Token

from .classify import is_call_form, is_operator, match_lambda
from .options import CompileOptions, DEFAULT_OPTIONS
from .token_types import GROUP_END, GROUP_START, OP, CallForm, Form, LambdaForm

logger = logging.getLogger(__name__)


def classify_form(value: Form, options: CompileOptions) -> Any:
    """CallForm or LambdaForm for opaque forms, None for grouped expressions."""
    matched = match_lambda(value.items, options)
    if matched is not None:
        params, body = matched
        return LambdaForm(params, body)

    if is_call_form(value, options):
        return CallForm(value.items[0], tuple(value.items[1:]))

    return None


def operator_token(value: Token) -> Token:
    return Token.new_borrow_pos(OP, str(value), value)


def flatten(tokens: Sequence[Any], options: CompileOptions = DEFAULT_OPTIONS) -> List[Any]:
    """
    Linearize grouped expressions into GROUP_START ... GROUP_END runs.

    Call-forms, nested lambdas and vectors stay single opaque operands; their
    contents are compiled later. Walks with an explicit iterator stack so deep
    nesting never touches the Python call stack.
    """
    out: List[Any] = []
    pending: List[Iterator[Any]] = [iter(tokens)]

    while pending:
        for item in pending[-1]:
            if isinstance(item, Form):
                opaque = classify_form(item, options)
                if opaque is None:
                    out.append(GROUP_START)
                    pending.append(iter(item.items))
                    break
                out.append(opaque)
            elif is_operator(item, options.table):
                out.append(operator_token(item))
            else:
                out.append(item)
        else:
            pending.pop()
            if pending:
                out.append(GROUP_END)

    logger.debug("flattened %d tokens into %d", len(tokens), len(out))
    return out
