"""Infix expression compiler: token streams in, call trees out."""

from .compiler import Compiler, compile_infix, compile_postfix
from .errors import DanglingOperands, InfixError, MissingOperand, OperatorTableError, UnbalancedGrouping
from .operators import DEFAULT_TABLE, Arity, Assoc, OperatorSpec, OperatorTable, Thread, binary, threading, unary
from .options import DEFAULT_OPTIONS, CompileOptions
from .render import to_sexpr
from .token_types import GROUP_END, GROUP_START, Form, Vector, form, sym, vec

__all__ = [
    "Compiler",
    "compile_infix",
    "compile_postfix",
    "InfixError",
    "UnbalancedGrouping",
    "MissingOperand",
    "DanglingOperands",
    "OperatorTableError",
    "DEFAULT_TABLE",
    "Arity",
    "Assoc",
    "OperatorSpec",
    "OperatorTable",
    "Thread",
    "binary",
    "threading",
    "unary",
    "DEFAULT_OPTIONS",
    "CompileOptions",
    "to_sexpr",
    "GROUP_START",
    "GROUP_END",
    "Form",
    "Vector",
    "form",
    "sym",
    "vec",
]
