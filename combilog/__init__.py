"""
Combilog: a term engine for combinatory logic and the lambda calculus.

Terms are built from native combinators (I, K, S, B, C, W, Church
numerals, user-defined natives), named aliases, free variables and
single-argument lambdas. The engine reduces them in normal order,
compares them up to bound-variable renaming, discovers their arity,
compiles lambdas to S/K/I and searches for light lambda equivalents of
combinator terms.

Usage:
    python -m combilog --demo reduce
    python -m combilog --demo canonize
    python -m combilog --demo bracket
    python -m combilog --demo lambdify
    python -m combilog --demo numerals
"""

from .core.config import Defaults, DEFAULTS, configure
from .core.terms import (
    Term, Application, Variable, Native, Church, Alias, Lambda,
    LAMBDA_PLACEHOLDER, VariableAllocator,
    ConstructionError, BudgetExceeded, TermMismatch,
    make_variable, free, make_native, make_alias, make_lambda, apply,
)
from .core.structure import (
    equals, weight, symbols, free_vars, free_only, has_lambda, expand, contains, expect,
)
from .core.reduction import StepResult, RunResult, step, run, walk
from .core.canonical import Canonical, canonicalize
from .core.render import to_string
from .convert.bracket import to_bracket_form, rewrite_ski
from .convert.lambdify import LambdifyStep, lambdify
from .natives import I, K, S, B, C, W, SUCC, NATIVES
from .numerals import NotANumber, NAT, church, to_number, to_int

__all__ = [
    "Defaults", "DEFAULTS", "configure",
    "Term", "Application", "Variable", "Native", "Church", "Alias", "Lambda",
    "LAMBDA_PLACEHOLDER", "VariableAllocator",
    "ConstructionError", "BudgetExceeded", "TermMismatch",
    "make_variable", "free", "make_native", "make_alias", "make_lambda", "apply",
    "equals", "weight", "symbols", "free_vars", "free_only", "has_lambda",
    "expand", "contains", "expect",
    "StepResult", "RunResult", "step", "run", "walk",
    "Canonical", "canonicalize",
    "to_string",
    "to_bracket_form", "rewrite_ski",
    "LambdifyStep", "lambdify",
    "I", "K", "S", "B", "C", "W", "SUCC", "NATIVES",
    "NotANumber", "NAT", "church", "to_number", "to_int",
]
