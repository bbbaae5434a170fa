"""
Structural inspection: equality, weight, symbol accounting.

Every function here matches on the term variant explicitly, so the rules
for each kind of term sit next to each other.

Equality is behavioural for lambdas: two abstractions are equal when
feeding both the same fresh variable yields equal bodies. That makes
bound-variable names irrelevant. Free variables are equal only to
themselves, whatever their names.
"""

from collections import Counter

from .terms import (
    Term, Application, Variable, Native, Church, Alias, Lambda,
    LAMBDA_PLACEHOLDER, TermMismatch, apply, make_variable, subst,
)


def _unwrap(term: Term) -> Term:
    """Look through non-terminal aliases."""
    while isinstance(term, Alias) and not term.terminal:
        term = term.impl
    return term


def equals(a: Term, b: Term) -> bool:
    """Structural equality, insensitive to bound-variable names."""
    pairs = [(a, b)]
    while pairs:
        a, b = pairs.pop()
        if a is b:
            continue
        a, b = _unwrap(a), _unwrap(b)
        if a is b:
            continue

        if isinstance(a, Application):
            if not isinstance(b, Application) or len(a.args) != len(b.args):
                return False
            pairs.extend(zip(reversed(a.args), reversed(b.args)))
            pairs.append((a.fun, b.fun))
        elif isinstance(a, Church):
            if not (isinstance(b, Church) and a.n == b.n):
                return False
        elif isinstance(a, Lambda):
            if not isinstance(b, Lambda):
                return False
            probe = make_variable("t")
            left = subst(a.body, a.arg, probe)
            right = subst(b.body, b.arg, probe)
            pairs.append((a.body if left is None else left,
                          b.body if right is None else right))
        else:
            # Variable, Native, terminal Alias: identity only, checked above.
            return False
    return True


def weight(term: Term) -> int:
    """Rough complexity: variables are free, every other leaf and binder costs 1."""
    total = 0
    stack = [term]
    while stack:
        term = stack.pop()
        if isinstance(term, Variable):
            continue
        if isinstance(term, Application):
            stack.append(term.fun)
            stack.extend(term.args)
        elif isinstance(term, Lambda):
            total += 1
            stack.append(term.body)
        elif isinstance(term, Alias) and not term.terminal:
            stack.append(term.impl)
        else:
            total += 1
    return total


def symbols(term: Term) -> Counter:
    """
    Terminal symbols of term with their occurrence counts.

    Keys are the terms themselves (by identity): free variables, natives,
    numerals, terminal aliases, and LAMBDA_PLACEHOLDER for every lambda.
    Each pending subterm carries the binders in scope, so bound variables
    are never counted.
    """
    out = Counter()
    stack = [(term, frozenset())]
    while stack:
        term, bound = stack.pop()
        if isinstance(term, Application):
            stack.extend((part, bound) for part in (term.fun,) + term.args)
        elif isinstance(term, Lambda):
            out[LAMBDA_PLACEHOLDER] += 1
            stack.append((term.body, bound | {term.arg}))
        elif isinstance(term, Alias) and not term.terminal:
            stack.append((term.impl, bound))
        elif term not in bound:
            out[term] += 1
    return out


def free_vars(term: Term) -> set:
    return {key for key in symbols(term) if isinstance(key, Variable)}


def free_only(term: Term) -> bool:
    """True if the only symbols are free variables (lambdas are not allowed)."""
    return all(isinstance(key, Variable) for key in symbols(term))


def has_lambda(term: Term) -> bool:
    return LAMBDA_PLACEHOLDER in symbols(term)


def wants_args(term: Term) -> bool:
    """
    Would this term do anything more if given another argument?
    Only a term headed by a free variable is done.
    """
    if isinstance(term, Variable):
        return False
    if isinstance(term, Application):
        return wants_args(term.fun)
    if isinstance(term, Alias):
        return wants_args(term.impl)
    return True


def expand(term: Term) -> Term:
    """Replace every alias by its definition. No computation happens."""
    if isinstance(term, Application):
        return apply(expand(term.fun), *[expand(arg) for arg in term.args])
    if isinstance(term, Lambda):
        return Lambda(term.arg, expand(term.body))
    if isinstance(term, Alias):
        return expand(term.impl)
    return term


def contains(term: Term, other: Term) -> bool:
    """Does other occur anywhere inside term (up to equality)?"""
    if term is other or equals(term, other):
        return True
    if isinstance(term, Application):
        return contains(term.fun, other) or any(contains(arg, other) for arg in term.args)
    if isinstance(term, Lambda):
        return contains(term.body, other)
    if isinstance(term, Alias):
        return contains(term.impl, other)
    return False


def expect(actual: Term, expected: Term):
    """Raise TermMismatch unless actual equals expected."""
    if not isinstance(expected, Term):
        raise TypeError(f"expected a term, got {expected!r}")
    if not equals(actual, expected):
        raise TermMismatch(actual, expected)
