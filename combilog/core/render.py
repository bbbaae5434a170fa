"""
Turning terms back into text.

Verbose form parenthesizes every argument: S(K)(K)(x).
Terse form drops separators where the tokens cannot run together:
S(KI)K, x(y z), S K x -> SKx. Lambdas print as x->body.
"""

import re
from typing import Optional

from .config import DEFAULTS
from .terms import Term, Application, Variable, Native, Alias, Lambda


# Token classes for deciding whether adjacent tokens need a space.
T_UNKNOWN, T_PARENS, T_UPPER, T_LOWER = range(4)

CAN_LUMP = {
    (T_PARENS, T_PARENS),
    (T_PARENS, T_UPPER),
    (T_UPPER, T_PARENS),
    (T_UPPER, T_UPPER),
    (T_UPPER, T_LOWER),
    (T_LOWER, T_PARENS),
    (T_UNKNOWN, T_PARENS),
}

_UPPER = re.compile(r"^[A-Z]$")
_LOWER = re.compile(r"^[a-z][a-z_0-9]*$")
_NUMBER = re.compile(r"^[0-9]+$")


def needs_parens(term: Term) -> bool:
    return isinstance(term, Lambda)


def to_string(term: Term, terse: Optional[bool] = None) -> str:
    terse = DEFAULTS.terse if terse is None else terse
    if isinstance(term, Application):
        return _terse_app(term) if terse else _verbose_app(term)
    if isinstance(term, Lambda):
        return f"{to_string(term.arg, terse)}->{to_string(term.body, terse)}"
    if isinstance(term, (Variable, Native, Alias)):
        return term.name
    raise TypeError(f"cannot render {type(term).__name__}")


def _verbose_app(term: Application) -> str:
    fun = to_string(term.fun, False)
    if needs_parens(term.fun):
        fun = f"({fun})"
    return fun + "".join(f"({to_string(arg, False)})" for arg in term.args)


def _terse_app(term: Application) -> str:
    out = []
    old = T_UNKNOWN
    for sub in (term.fun,) + term.args:
        s = to_string(sub, True)
        if _UPPER.match(s):
            new = T_UPPER
        elif isinstance(sub, Variable) or _LOWER.match(s):
            new = T_LOWER
        elif _NUMBER.match(s):
            new = T_UNKNOWN
        elif out or needs_parens(sub):
            s = f"({s})"
            new = T_PARENS
        else:
            new = T_UNKNOWN
        if out and (old, new) not in CAN_LUMP:
            out.append(" ")
        out.append(s)
        old = new
    return "".join(out)
