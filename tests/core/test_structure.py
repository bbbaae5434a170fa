"""
Tests for equality, weight and symbol accounting.

The core claims:
    - Reflexivity:   every term equals itself
    - Alpha:         lambdas compare by behaviour, not by binder names
    - Identity:      free variables are equal only to themselves
    - Accounting:    symbol counts add up over applications
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from combilog.core.terms import (
    Church, LAMBDA_PLACEHOLDER, TermMismatch,
    make_variable, free, make_alias, make_lambda, apply,
)
from combilog.core.structure import (
    equals, weight, symbols, free_vars, free_only, has_lambda,
    wants_args, expand, contains, expect,
)
from combilog.natives import I, K, S, B, C


natives = st.sampled_from([I, K, S, B, C])


@st.composite
def terms(draw, max_depth=3):
    """Combinator terms over a fixed pool of free variables."""
    pool = draw(st.just(free("x", "y")))
    leaves = st.one_of(natives, st.sampled_from(pool))

    def build(depth):
        if depth == 0 or draw(st.booleans()):
            return draw(leaves)
        fun = build(depth - 1)
        args = [build(depth - 1) for _ in range(draw(st.integers(1, 2)))]
        return apply(fun, *args)

    return build(max_depth)


class TestEquality:
    def test_same_combinators(self):
        assert equals(apply(S, I, I), apply(S, I, I))
        assert equals(K, K)

    def test_different_combinators(self):
        assert not equals(apply(K, I), apply(S, K))
        assert not equals(apply(S, I), apply(S, I, I))

    def test_free_variables_by_identity(self):
        a = make_variable("x")
        b = make_variable("x")
        assert equals(a, a)
        assert not equals(a, b)
        assert not equals(apply(I, a), apply(I, b))

    def test_lambda_ignores_binder_names(self):
        x, y = free("x", "y")
        assert equals(make_lambda(x, x), make_lambda(y, y))

    def test_lambda_compares_bodies(self):
        x, y = free("x", "y")
        k = make_lambda([x, y], x)
        ki = make_lambda([x, y], y)
        assert not equals(k, ki)
        assert equals(k, make_lambda([y, x], y))

    def test_lambda_vs_other_shape(self):
        x = make_variable("x")
        assert not equals(make_lambda(x, x), I)
        assert not equals(I, make_lambda(x, x))

    def test_church_by_value(self):
        assert equals(Church(5), Church(5))
        assert not equals(Church(5), Church(4))
        assert not equals(Church(1), I)

    def test_terminal_alias_is_opaque(self):
        foo = make_alias("foo", apply(S, K))
        bar = make_alias("bar", apply(S, K))
        assert foo.terminal and bar.terminal
        assert equals(foo, foo)
        assert not equals(foo, bar)

    def test_transparent_alias_delegates(self):
        foo = make_alias("foo", apply(S, K), terminal=False)
        bar = make_alias("bar", apply(S, K), terminal=False)
        assert equals(foo, bar)
        assert equals(foo, apply(S, K))
        assert equals(apply(S, K), foo)

    @given(terms())
    def test_reflexive(self, t):
        assert equals(t, t)

    @given(terms(), terms())
    def test_symmetric(self, a, b):
        assert equals(a, b) == equals(b, a)


class TestExpect:
    def test_passes_on_equal(self):
        expect(apply(S, K), apply(S, K))

    def test_raises_with_renderings(self):
        with pytest.raises(TermMismatch, match=r"ound.*\bS\b.*expected.*\bI\b") as info:
            expect(S, I)
        assert info.value.actual == "S"
        assert info.value.expected == "I"


class TestWeight:
    def test_variables_are_free(self):
        x, y = free("x", "y")
        assert weight(x) == 0
        assert weight(apply(x, y)) == 0

    def test_atoms_cost_one(self):
        assert weight(S) == 1
        assert weight(Church(7)) == 1
        assert weight(apply(S, K, K)) == 3

    def test_lambda_costs_one_per_binder(self):
        x, y = free("x", "y")
        assert weight(make_lambda([x, y], apply(x, y))) == 2

    def test_terminal_alias_is_one(self):
        t = make_alias("T", apply(S, apply(K, apply(S, I)), K))
        assert weight(t) == 1
        assert weight(make_alias("U", apply(S, K, K), terminal=False)) == 3


class TestSymbols:
    def test_counts(self):
        x = make_variable("x")
        counts = symbols(apply(S, x, apply(K, x)))
        assert counts[S] == 1
        assert counts[K] == 1
        assert counts[x] == 2

    def test_lambda_placeholder(self):
        x, y = free("x", "y")
        lam = make_lambda(x, apply(x, y))
        counts = symbols(apply(lam, lam))
        assert counts[LAMBDA_PLACEHOLDER] == 2
        assert counts[y] == 2
        assert has_lambda(lam)
        assert not has_lambda(apply(S, y))

    def test_terminal_alias_reports_itself(self):
        t = make_alias("T", apply(S, K, K))
        assert set(symbols(t)) == {t}

    def test_free_vars_and_free_only(self):
        x, y = free("x", "y")
        assert free_vars(apply(S, x, apply(y, x))) == {x, y}
        assert free_only(apply(x, y))
        assert not free_only(apply(x, S))
        assert not free_only(make_lambda(x, x))

    @given(terms(), terms())
    def test_counts_add_over_application(self, a, b):
        together = symbols(apply(a, b))
        separate = symbols(a)
        separate.update(symbols(b))
        assert together == separate


class TestInspectors:
    def test_wants_args(self):
        x = make_variable("x")
        assert wants_args(S)
        assert wants_args(apply(S, x))
        assert not wants_args(x)
        assert not wants_args(apply(x, S))
        assert wants_args(make_lambda(x, x))

    def test_expand_removes_aliases(self):
        t = make_alias("T", apply(S, K))
        out = expand(apply(t, t))
        assert out.fun is S
        assert out.args[0] is K
        assert equals(out.args[1], apply(S, K))

    def test_contains(self):
        x, y = free("x", "y")
        assert contains(apply(S, apply(K, x)), apply(K, x))
        assert not contains(apply(S, apply(K, x)), y)
        assert contains(make_lambda(y, apply(y, x)), x)
