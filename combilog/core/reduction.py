"""
The reduction engine.

One step of normal-order (leftmost-outermost) rewriting:
    1. if the head of an application is a native, lambda or alias with
       enough arguments, fire its rule at the root;
    2. otherwise step the head;
    3. otherwise step the arguments left to right, stopping at the first
       one that changes.

Lambda bodies are not reduced in place. Applications found to be in
normal form are remembered in a weak side table, so shared subterms are
never re-examined.
"""

import weakref
from dataclasses import dataclass
from typing import Iterator, Optional

from .config import DEFAULTS
from .terms import (
    Term, Application, Native, Alias, Lambda,
    BudgetExceeded, ConstructionError, apply, subst,
)


@dataclass
class StepResult:
    term: Term
    steps: int
    changed: bool


@dataclass
class RunResult:
    term: Term
    steps: int
    final: bool


_settled = weakref.WeakSet()


def is_settled(term: Term) -> bool:
    """True if term is known to be in normal form (only tracked for applications)."""
    return term in _settled


def reduce(head: Term, args: tuple) -> Optional[Term]:
    """Fire the root rule of head applied to args, or return None."""
    if isinstance(head, Native):
        if len(args) < head.arity:
            return None
        result = head.rule(*args[:head.arity])
        if not isinstance(result, Term):
            raise ConstructionError(
                f"native combinator {head.name} reduced to a non-term: {result!r}"
            )
        return apply(result, *args[head.arity:])
    if isinstance(head, Lambda):
        if not args:
            return None
        body = subst(head.body, head.arg, args[0])
        return apply(head.body if body is None else body, *args[1:])
    if isinstance(head, Alias):
        if len(args) < head.arity:
            return None
        return apply(head.impl, *args)
    return None


def step(term: Term) -> StepResult:
    """
    Perform at most one rewrite, in normal order.

    The descent keeps its own stack of [application, child] frames, where
    child 0 is the head and child i is args[i - 1], so arbitrarily deep
    terms never touch the interpreter's recursion limit.
    """
    path = []
    node = term
    while True:
        if isinstance(node, Alias):
            # An alias waiting for arguments stays put; otherwise expanding it
            # counts as a change but costs no steps.
            if node.arity == 0:
                return _rebuild(path, node.impl, 0)
        elif isinstance(node, Application) and node not in _settled:
            reduced = reduce(node.fun, node.args)
            if reduced is not None:
                return _rebuild(path, reduced, 1)
            path.append([node, 0])
            node = node.fun
            continue

        # node is in normal form: move to its next sibling, settling every
        # application whose children are all done.
        while path:
            frame = path[-1]
            app, child = frame
            if child < len(app.args):
                frame[1] = child + 1
                node = app.args[child]
                break
            _settled.add(app)
            path.pop()
        else:
            return StepResult(term, 0, False)


def _rebuild(path: list, new: Term, steps: int) -> StepResult:
    """Put a rewritten subterm back in place along path."""
    for app, child in reversed(path):
        if child == 0:
            new = apply(new, *app.args)
        else:
            args = list(app.args)
            args[child - 1] = new
            new = apply(app.fun, *args)
    return StepResult(new, steps, True)


def run(term: Term, *args, max_steps: Optional[int] = None, strict: bool = False) -> RunResult:
    """
    Step until normal form or until max_steps rewrites have been spent.

    Extra positional args are applied to term first. Running out of budget
    is reported via final=False; with strict=True it raises BudgetExceeded.
    """
    expr = apply(term, *args)
    budget = DEFAULTS.max_steps if max_steps is None else max_steps
    steps = 0
    final = False
    while steps < budget:
        nxt = step(expr)
        if not nxt.changed:
            final = True
            break
        steps += nxt.steps
        expr = nxt.term
    else:
        # A term already in normal form is final even with no budget left.
        final = not step(expr).changed
    if strict and not final:
        raise BudgetExceeded(f"failed to compute {term} in {budget} steps")
    return RunResult(expr, steps, final)


def walk(term: Term, max_steps: Optional[float] = None) -> Iterator[RunResult]:
    """
    Like run(), but yield every intermediate term.

    Each snapshot is yielded before moving on; the last one has
    final=True unless the budget ran out first. Unbounded by default.
    """
    budget = float("inf") if max_steps is None else max_steps
    steps = 0
    expr = term
    while steps < budget:
        nxt = step(expr)
        final = not nxt.changed
        yield RunResult(expr, steps, final)
        if final:
            return
        steps += nxt.steps
        expr = nxt.term
