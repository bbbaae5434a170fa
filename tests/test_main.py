"""
Tests for the CLI entry point and the reporting helpers.
"""

import pytest

from combilog.__main__ import main, DEMOS
from combilog.core.config import DEFAULTS, configure
from combilog.core.terms import Variable, free, make_variable, apply
from combilog.core.canonical import canonicalize
from combilog.natives import I, K, S
from combilog.visualization import print_walk, print_canonical, print_lambdify, export_dot


@pytest.fixture
def restore_defaults():
    saved = (DEFAULTS.terse, DEFAULTS.max_steps, DEFAULTS.max_args)
    yield
    DEFAULTS.terse, DEFAULTS.max_steps, DEFAULTS.max_args = saved


class TestMain:
    def test_reduce_demo(self):
        out = main(["--demo", "reduce", "--quiet"])
        assert isinstance(out, Variable)
        assert out.name == "x"

    def test_canonize_demo(self):
        results = main(["--demo", "canonize", "--quiet"])
        assert results[0].arity == 1
        assert results[1].arity == 2
        assert not results[4].found

    def test_bracket_demo(self):
        out = main(["--demo", "bracket", "--quiet"])
        assert str(out) == "S(K(SI))K"

    def test_numerals_demo(self):
        assert main(["--demo", "numerals", "--quiet"]) == 8

    def test_every_demo_prints(self, capsys):
        for name in DEMOS:
            main(["--demo", name])
        assert "=" * 60 in capsys.readouterr().out

    def test_flags_reach_defaults(self, restore_defaults):
        main(["--demo", "numerals", "--quiet", "--steps", "5000", "--max-args", "8",
              "--verbose-terms"])
        assert DEFAULTS.max_steps == 5000
        assert DEFAULTS.max_args == 8
        assert DEFAULTS.terse is False

    def test_dot_export(self, tmp_path):
        path = tmp_path / "term.dot"
        main(["--demo", "bracket", "--quiet", "--dot", str(path)])
        text = path.read_text()
        assert text.startswith("digraph term {")
        assert 'label="S"' in text

    def test_bad_demo(self):
        with pytest.raises(SystemExit):
            main(["--demo", "nope"])


class TestVisualization:
    def test_print_walk(self, capsys):
        x, y = free("x", "y")
        print_walk(apply(K, x, y))
        out = capsys.readouterr().out
        assert "[0] Kx y" in out
        assert "[1] x" in out

    def test_print_walk_gives_up(self, capsys):
        sii = apply(S, I, I)
        print_walk(apply(sii, sii), max_steps=3)
        assert "gave up" in capsys.readouterr().out

    def test_print_canonical(self, capsys):
        print_canonical(K, canonicalize(K))
        out = capsys.readouterr().out
        assert "arity: 2" in out
        assert "unused arguments: [1]" in out

    def test_print_canonical_not_found(self, capsys):
        sii = apply(S, I, I)
        omega = apply(sii, sii)
        print_canonical(omega, canonicalize(omega, max_steps=100))
        assert "not found" in capsys.readouterr().out

    def test_print_lambdify(self, capsys):
        x, y = free("x", "y")
        print_lambdify(apply(K, x, y))
        assert "weight 0" in capsys.readouterr().out

    def test_export_lambda(self, tmp_path, capsys):
        x = make_variable("x")
        from combilog.core.terms import make_lambda
        path = tmp_path / "lam.dot"
        export_dot(make_lambda(x, apply(x, x)), str(path))
        assert 'label="x->"' in path.read_text()
        assert "exported" in capsys.readouterr().out
