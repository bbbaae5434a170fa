"""
Bracket abstraction: compile lambdas down to S, K and I.

For λv.body, convert body first, then:
    body is v                          -> I
    v not free in body                 -> K body
    body is (prefix v), v not in prefix -> prefix          (eta)
    body is (prefix last)              -> S [λv.prefix] [λv.last]

Natives other than S, K, I are replaced by their canonical lambda form
and compiled in turn; a native met again inside its own expansion is
left as it is. One step budget is shared by the whole descent, and when
it runs out the remaining lambdas are left in place.
"""

from typing import Iterator, Optional

from ..core.canonical import canonicalize
from ..core.config import DEFAULTS
from ..core.reduction import RunResult
from ..core.structure import symbols
from ..core.terms import Term, Application, Native, Alias, Lambda, apply
from ..natives import I, K, S


class _Budget:
    def __init__(self, limit: float):
        self.limit = limit
        self.spent = 0
        # natives whose expansion is being compiled right now
        self.expanding = set()

    @property
    def exhausted(self) -> bool:
        return self.spent >= self.limit


def to_bracket_form(term: Term, max_steps: Optional[int] = None) -> Term:
    """Compile term to S, K, I and free variables, spending at most max_steps eliminations."""
    budget = _Budget(DEFAULTS.max_steps if max_steps is None else max_steps)
    return _convert(term, budget)


def rewrite_ski(term: Term, per_step: int = 1) -> Iterator[RunResult]:
    """
    Expose the compilation gradually: each snapshot applies at most
    per_step more eliminations. The last snapshot has final=True.
    """
    steps = 0
    expr = term
    while True:
        budget = _Budget(per_step)
        nxt = _convert(expr, budget)
        final = budget.spent == 0
        yield RunResult(expr, steps, final)
        if final:
            return
        steps += budget.spent
        expr = nxt


def _convert(term: Term, budget: _Budget) -> Term:
    if isinstance(term, Application):
        if budget.exhausted:
            return term
        return apply(_convert(term.fun, budget), *[_convert(arg, budget) for arg in term.args])
    if isinstance(term, Lambda):
        return _abstract(term, budget)
    if isinstance(term, Alias):
        return _convert(term.impl, budget)
    if isinstance(term, Native):
        if term is I or term is K or term is S or term in budget.expanding or budget.exhausted:
            return term
        canon = canonicalize(term).canonical
        if canon is None:
            return term
        budget.spent += 1
        budget.expanding.add(term)
        out = _convert(canon, budget)
        budget.expanding.discard(term)
        return out
    return term


def _abstract(lam: Lambda, budget: _Budget) -> Term:
    v = lam.arg
    body = _convert(lam.body, budget)
    if budget.exhausted:
        return Lambda(v, body)
    budget.spent += 1

    if body is v:
        return I
    if v not in symbols(body):
        return apply(K, body)
    if isinstance(body, Application):
        prefix, last = body.split()
        if last is v and v not in symbols(prefix):
            return _convert(prefix, budget)
        return apply(
            S,
            _abstract(Lambda(v, prefix), budget),
            _abstract(Lambda(v, last), budget),
        )
    # Only reachable when body still holds an unconverted lambda.
    return Lambda(v, body)
