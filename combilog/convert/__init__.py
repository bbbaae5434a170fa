from .bracket import to_bracket_form, rewrite_ski
from .lambdify import LambdifyStep, naive_canonicalize, lambdify, simplify

__all__ = [
    "to_bracket_form", "rewrite_ski",
    "LambdifyStep", "naive_canonicalize", "lambdify", "simplify",
]
