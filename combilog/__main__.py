"""
CLI entry point. Run as: python -m combilog --demo <name>
"""

import argparse

from .core.config import configure
from .core.canonical import canonicalize
from .core.terms import free, make_alias, make_lambda
from .convert.bracket import to_bracket_form
from .natives import I, K, S, B, C, W
from .numerals import church, to_int
from .visualization import print_walk, print_canonical, print_lambdify, export_dot


def demo_reduce(quiet):
    x, y = free("x", "y")
    term = S.apply(K, K, x)
    if not quiet:
        print_walk(term)
        print_walk(church(3).apply(x, y))
    return term.run().term


def demo_canonize(quiet):
    x, y = free("x", "y")
    cases = [I, K, S, C.apply(I), S.apply(I, I, S.apply(I, I)), make_lambda([x, y], y.apply(x, x))]
    results = []
    for term in cases:
        result = canonicalize(term)
        results.append(result)
        if not quiet:
            print_canonical(term, result)
    return results


def demo_bracket(quiet):
    x, y = free("x", "y")
    term = make_lambda([x, y], y.apply(x))
    out = to_bracket_form(term)
    if not quiet:
        print(f"{term}  =>  {out}")
        for name, native in (("B", B), ("C", C), ("W", W)):
            canon = canonicalize(native).canonical
            print(f"{name} = {canon}  =>  {to_bracket_form(canon)}")
    return out


def demo_lambdify(quiet):
    m = make_alias("M", S.apply(I, I))
    term = B.apply(C, C.apply(I))
    if not quiet:
        print_lambdify(term)
        print_lambdify(m.apply(m))
    return term


def demo_numerals(quiet):
    # 2^3 via exponentiation: 3 2 = 2^3
    n = to_int(church(3).apply(church(2)))
    if not quiet:
        print(f"3 2 = {n}")
    return n


DEMOS = {
    "reduce":   demo_reduce,
    "canonize": demo_canonize,
    "bracket":  demo_bracket,
    "lambdify": demo_lambdify,
    "numerals": demo_numerals,
}


def main(argv=None):
    parser = argparse.ArgumentParser(description="Combinatory logic term engine")
    parser.add_argument("--demo", choices=list(DEMOS.keys()), default="reduce",
                        help="Which demonstration to run")
    parser.add_argument("--steps",    type=int, default=None, help="Reduction steps per run")
    parser.add_argument("--max-args", type=int, default=None, help="Probes tried by canonicalize")
    parser.add_argument("--dot",      type=str, default=None, help="Export DOT graph of the result")
    parser.add_argument("--quiet",    action="store_true",    help="Less output")
    parser.add_argument("--verbose-terms", action="store_true",
                        help="Print terms with every argument parenthesized")
    args = parser.parse_args(argv)

    configure(max_steps=args.steps, max_args=args.max_args)
    if args.verbose_terms:
        configure(terse=False)

    result = DEMOS[args.demo](args.quiet)

    if args.dot:
        target = result if args.demo in ("reduce", "bracket", "lambdify") else None
        if target is None:
            print(f"--dot is not supported for the {args.demo} demo")
        else:
            export_dot(target, args.dot)
    return result


if __name__ == "__main__":
    main()
