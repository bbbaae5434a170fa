"""
Canonicalization: find out how many arguments a term needs.

Feed the term fresh probe variables one at a time, normalizing after
each, until the result is headed by a free variable. The number of
probes is the arity; the probes' occurrence counts in the result tell
which arguments are dropped (skip) or duplicated (dup).

A term that never settles and a term that keeps asking for arguments
beyond max_args are both reported as found=False.
"""

from dataclasses import dataclass, field
from typing import Optional

from .config import DEFAULTS
from .reduction import run
from .structure import symbols, wants_args
from .terms import Term, Application, BudgetExceeded, apply, make_lambda, make_variable


PROBE_NAMES = "abcdefgh"


@dataclass
class Canonical:
    found: bool
    proper: bool = False
    linear: bool = False
    arity: Optional[int] = None
    canonical: Optional[Term] = None
    steps: int = 0
    skip: frozenset = field(default_factory=frozenset)
    dup: frozenset = field(default_factory=frozenset)


def probe_name(i: int) -> str:
    return PROBE_NAMES[i] if i < len(PROBE_NAMES) else f"x{i}"


def skip_dup(probes: list, counts) -> tuple:
    """Indices of probes that are absent from counts, and of those seen twice or more."""
    skip = frozenset(i for i, p in enumerate(probes) if counts.get(p, 0) == 0)
    dup = frozenset(i for i, p in enumerate(probes) if counts.get(p, 0) > 1)
    return skip, dup


def canonicalize(term: Term, max_steps: Optional[int] = None,
                 max_args: Optional[int] = None, strict: bool = False) -> Canonical:
    """
    Discover arity, properness and linearity of term.

    max_steps bounds each normalization, max_args bounds the number of
    probes. The canonical form is λ(probes).result, or the result itself
    when no probe was needed.
    """
    max_steps = DEFAULTS.max_steps if max_steps is None else max_steps
    max_args = DEFAULTS.max_args if max_args is None else max_args

    steps = 0
    expr = term
    probes = []
    for i in range(max_args):
        calc = run(expr, max_steps=max_steps)
        steps += calc.steps
        if not calc.final:
            break
        expr = calc.term
        if not wants_args(expr):
            counts = symbols(expr)
            skip, dup = skip_dup(probes, counts)
            proper = set(counts) <= set(probes)
            return Canonical(
                found=True,
                proper=proper,
                linear=proper and not skip and not dup,
                arity=i,
                canonical=make_lambda(probes, expr) if probes else expr,
                steps=steps,
                skip=skip,
                dup=dup,
            )
        probe = make_variable(probe_name(i))
        probes.append(probe)
        expr = apply(expr, probe)

    if strict:
        raise BudgetExceeded(
            f"failed to canonicalize {term} within {max_args} arguments "
            f"of {max_steps} steps each"
        )
    return Canonical(found=False, steps=steps, canonical=_best_guess(term, max_steps, max_args))


def _best_guess(term: Term, max_steps: int, max_args: int) -> Optional[Term]:
    """For an application, canonicalize both halves and put them back together."""
    if not isinstance(term, Application):
        return None
    fun, arg = term.split()
    fun_canon = canonicalize(fun, max_steps=max_steps, max_args=max_args).canonical
    arg_canon = canonicalize(arg, max_steps=max_steps, max_args=max_args).canonical
    if fun_canon is None or arg_canon is None:
        return None
    return apply(fun_canon, arg_canon)
