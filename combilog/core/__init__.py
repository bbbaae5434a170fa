from .config import Defaults, DEFAULTS, configure
from .terms import (
    Term, Application, Variable, Native, Church, Alias, Lambda,
    LAMBDA_PLACEHOLDER, VariableAllocator, ALLOCATOR,
    ConstructionError, BudgetExceeded, TermMismatch,
    make_variable, free, make_native, make_alias, make_lambda, apply, subst,
)
from .structure import (
    equals, weight, symbols, free_vars, free_only, has_lambda,
    wants_args, expand, contains, expect,
)
from .reduction import StepResult, RunResult, step, run, walk, is_settled
from .canonical import Canonical, canonicalize
from .render import to_string

__all__ = [
    "Defaults", "DEFAULTS", "configure",
    "Term", "Application", "Variable", "Native", "Church", "Alias", "Lambda",
    "LAMBDA_PLACEHOLDER", "VariableAllocator", "ALLOCATOR",
    "ConstructionError", "BudgetExceeded", "TermMismatch",
    "make_variable", "free", "make_native", "make_alias", "make_lambda", "apply", "subst",
    "equals", "weight", "symbols", "free_vars", "free_only", "has_lambda",
    "wants_args", "expand", "contains", "expect",
    "StepResult", "RunResult", "step", "run", "walk", "is_settled",
    "Canonical", "canonicalize",
    "to_string",
]
