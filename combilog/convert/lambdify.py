"""
Lambdify: search for a light lambda term equivalent to a combinator term.

The term is first rewritten so that every native becomes its canonical
lambda and every alias its definition. The search then works from the
leaves up: simplify the function part, then the argument part, then try
canonicalizing the node as a whole, yielding a candidate each time it
beats the lightest one so far. Weights strictly decrease, so the
sequence is finite, but it can be long for pathological inputs.
"""

from dataclasses import dataclass
from typing import Iterator, Optional

from ..core.canonical import canonicalize
from ..core.structure import free_only, weight
from ..core.terms import Term, Application, Alias, Lambda, BudgetExceeded, apply


@dataclass
class LambdifyStep:
    term: Term
    steps: int
    comment: str


def naive_canonicalize(term: Term, max_steps=None, max_args=None) -> Term:
    """Replace natives by canonical lambdas and aliases by definitions, without computing."""
    if isinstance(term, Application):
        return apply(
            naive_canonicalize(term.fun, max_steps, max_args),
            *[naive_canonicalize(arg, max_steps, max_args) for arg in term.args],
        )
    if isinstance(term, Lambda):
        return Lambda(term.arg, naive_canonicalize(term.body, max_steps, max_args))
    if isinstance(term, Alias):
        return naive_canonicalize(term.impl, max_steps, max_args)
    canon = canonicalize(term, max_steps=max_steps, max_args=max_args).canonical
    if canon is None:
        raise BudgetExceeded(f"failed to canonicalize {term}")
    return canon


def lambdify(term: Term, max_steps: Optional[int] = None,
             max_args: Optional[int] = None) -> Iterator[LambdifyStep]:
    """Equivalent lambda terms of strictly decreasing weight."""
    expr = naive_canonicalize(term, max_steps, max_args)
    yield from simplify(expr, max_steps=max_steps, max_args=max_args)


def simplify(expr: Term, ceiling: float = float("inf"),
             max_steps: Optional[int] = None,
             max_args: Optional[int] = None) -> Iterator[LambdifyStep]:
    """
    Yield terms equivalent to expr that are lighter than ceiling,
    each lighter than the one before.

    expr is expected to contain only lambdas and free variables.
    """
    if free_only(expr):
        if weight(expr) < ceiling:
            yield LambdifyStep(expr, 0, "only free vars")
        return

    steps = 0

    if isinstance(expr, Application):
        fun, arg = expr.split()
        for found in simplify(fun, ceiling - 1, max_steps, max_args):
            candidate = apply(found.term, arg)
            if weight(candidate) < ceiling:
                ceiling = weight(candidate)
                fun = found.term
                steps += found.steps
                yield LambdifyStep(candidate, steps, found.comment + "(app)")
        for found in simplify(arg, ceiling - 1, max_steps, max_args):
            candidate = apply(fun, found.term)
            if weight(candidate) < ceiling:
                ceiling = weight(candidate)
                steps += found.steps
                yield LambdifyStep(candidate, steps, found.comment + "(app)")

    if isinstance(expr, Lambda):
        for found in simplify(expr.body, ceiling - 1, max_steps, max_args):
            candidate = Lambda(expr.arg, found.term)
            if weight(candidate) < ceiling:
                ceiling = weight(candidate)
                steps += found.steps
                yield LambdifyStep(candidate, steps, found.comment + "(lambda)")

    canon = canonicalize(expr, max_steps=max_steps, max_args=max_args)
    if canon.canonical is not None and weight(canon.canonical) < ceiling:
        yield LambdifyStep(canon.canonical, steps + canon.steps, "canonical")
