"""
The standard native combinators.

    I x       -> x
    K x y     -> x
    S x y z   -> x z (y z)
    B x y z   -> x (y z)
    C x y z   -> x z y
    W x y     -> x y y
    + n f x   -> f (n f x)      successor; + <numeral n> is numeral n+1 at once

NATIVES maps names to combinators, the way a parser or environment
layer would look them up.
"""

from .core.terms import Church, make_native


I = make_native("I", 1, lambda x: x)
K = make_native("K", 2, lambda x, _: x)
S = make_native("S", 3, lambda x, y, z: x.apply(z, y.apply(z)))
B = make_native("B", 3, lambda x, y, z: x.apply(y.apply(z)))
C = make_native("C", 3, lambda x, y, z: x.apply(z, y))
W = make_native("W", 2, lambda x, y: x.apply(y, y))


def _succ_coerce(arg):
    if isinstance(arg, Church):
        return Church(arg.n + 1)
    return None


SUCC = make_native(
    "+", 3, lambda n, f, x: f.apply(n.apply(f, x)),
    coerce=_succ_coerce,
    note="n -> n + 1, or SB",
)


NATIVES = {
    "I": I,
    "K": K,
    "S": S,
    "B": B,
    "C": C,
    "W": W,
    "+": SUCC,
}
