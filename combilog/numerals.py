"""
Church numerals and the numeral injection.

to_number() decides what number a term stands for by running it against
the successor combinator and zero. The successor's coercion hook turns
"+ <numeral n>" into numeral n+1 as soon as the application is built, so
a genuine numeral term collapses to a single Church literal.
"""

from typing import Optional

from .core.reduction import run
from .core.terms import Term, Church, BudgetExceeded, make_native
from .natives import SUCC


NUMBER_BUDGET = 1_000_000


class NotANumber(ValueError):
    """A term normalized to something other than a numeral."""


def church(n: int) -> Church:
    return Church(n)


def to_number(term: Term, max_steps: Optional[int] = None) -> Church:
    """
    Evaluate term as a numeral: run term + 0 in strict mode.
    Raises BudgetExceeded if that does not terminate, NotANumber if the
    normal form is not a numeral.
    """
    budget = NUMBER_BUDGET if max_steps is None else max_steps
    try:
        out = run(term, SUCC, Church(0), max_steps=budget, strict=True).term
    except BudgetExceeded as err:
        raise BudgetExceeded(
            f"Church numeral coercion of {term} did not terminate in {budget} steps"
        ) from err
    if not isinstance(out, Church):
        raise NotANumber(f"Church numeral coercion: not a number: {term}")
    return out


def to_int(term: Term, max_steps: Optional[int] = None) -> int:
    return to_number(term, max_steps=max_steps).n


# Usable inside terms: NAT x normalizes x to a Church literal.
NAT = make_native("!nat", 1, to_number, note="coerce argument to a numeral")
