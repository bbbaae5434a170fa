"""
Visualization and reporting utilities.
"""

from itertools import count, islice

from .core.canonical import Canonical
from .core.reduction import walk
from .core.terms import Term, Application, Variable, Lambda
from .convert.lambdify import lambdify


def print_walk(term: Term, max_steps=100, terse=None):
    """Print every intermediate term of a reduction."""
    print(f"\n{'='*60}")
    print(f"Reducing {term.render(terse)}")
    print(f"{'='*60}")
    last = None
    for last in walk(term, max_steps=max_steps):
        print(f"  [{last.steps}] {last.term.render(terse)}")
    if last is not None and not last.final:
        print(f"  ... gave up after {max_steps} steps")


def print_canonical(term: Term, result: Canonical):
    """Print a canonicalization report."""
    print(f"\n{'='*60}")
    print(f"Canonical form of {term}")
    print(f"{'='*60}")
    if not result.found:
        guess = f" (best guess: {result.canonical})" if result.canonical is not None else ""
        print(f"  not found after {result.steps} steps{guess}")
        return
    print(f"  canonical: {result.canonical}")
    print(f"  arity: {result.arity}  proper: {result.proper}  linear: {result.linear}")
    if result.skip:
        print(f"  unused arguments: {sorted(result.skip)}")
    if result.dup:
        print(f"  duplicated arguments: {sorted(result.dup)}")
    print(f"  steps: {result.steps}")


def print_lambdify(term: Term, limit=30, **options):
    """Print the lambdify sequence, at most limit entries."""
    print(f"\n{'='*60}")
    print(f"Lambdify {term}")
    print(f"{'='*60}")
    for found in islice(lambdify(term, **options), limit):
        print(f"  [{found.steps}] {found.term}  // {found.comment}; weight {found.term.weight()}")


def export_dot(term: Term, path="term.dot"):
    """Export the term tree as a DOT file for Graphviz visualization."""
    counter = count(1)

    with open(path, "w") as f:
        f.write("digraph term {\n")
        f.write("  node [shape=box, style=rounded];\n")

        def node(t):
            ident = f"n{next(counter)}"
            if isinstance(t, Application):
                f.write(f'  {ident} [label="@"];\n')
                for child in (t.fun,) + t.args:
                    f.write(f"  {ident} -> {node(child)};\n")
            elif isinstance(t, Lambda):
                label = f"{t.arg.name}->".replace('"', '\\"')
                f.write(f'  {ident} [label="{label}", fillcolor=lightblue, style=filled];\n')
                f.write(f"  {ident} -> {node(t.body)};\n")
            else:
                label = str(t).replace('"', '\\"')
                color = "lightgray" if isinstance(t, Variable) else "white"
                f.write(f'  {ident} [label="{label}", fillcolor={color}, style=filled];\n')
            return ident

        node(term)
        f.write("}\n")
    print(f"Graph exported to {path}")
