from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import FrozenSet

from .operators import DEFAULT_TABLE, OperatorTable

# Higher-order functions that routinely take operator names as plain arguments,
# e.g. (reduce + xs)
CALL_ALLOWLIST: FrozenSet[str] = frozenset({'apply', 'reduce', 'map', 'filter', 'partial', 'comp'})

LAMBDA_RESERVED: FrozenSet[str] = frozenset({'fn', 'defn', 'let', 'if', 'when', 'cond'})


@dataclass(frozen=True)
class CompileOptions:
    table: OperatorTable = DEFAULT_TABLE
    call_allowlist: FrozenSet[str] = field(default=CALL_ALLOWLIST)
    lambda_arrow: str = '=>'
    lambda_reserved: FrozenSet[str] = field(default=LAMBDA_RESERVED)
    binding_prefix: str = '__it'
    # (+ 1 2 3), (- x): operator-headed forms with no infix pattern are prefix calls
    prefix_calls: bool = True

    def with_table(self, table: OperatorTable) -> CompileOptions:
        return replace(self, table=table)

    def allowing(self, *names: str) -> CompileOptions:
        return replace(self, call_allowlist=self.call_allowlist | frozenset(names))


DEFAULT_OPTIONS = CompileOptions()
