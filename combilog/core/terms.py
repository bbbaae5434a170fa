"""
Term model and construction API.

Terms are immutable trees. Every variant compares by identity at the
Python level (dataclass eq=False), so terms can key dicts and weak sets;
structural equality lives in structure.equals().

Variants:
    Application(fun, args)   fun applied to a non-empty tuple of args
    Variable(name, ident)    free variable; ident is globally unique
    Native(name, arity, rule[, coerce])
                             primitive combinator, rule(*args) -> Term
    Church(n)                Native of arity 2: f, x -> f(f(...f(x)))
    Alias(name, impl, ...)   named term, opaque or transparent under reduction
    Lambda(arg, body)        single-argument abstraction

Build terms with apply(), make_variable(), make_native(), make_alias()
and make_lambda(). apply() keeps applications flat: applying an
Application to more arguments extends its argument tuple instead of
nesting.
"""

import itertools
from dataclasses import dataclass
from typing import Callable, Optional


class ConstructionError(ValueError):
    """A term could not be built: no partial object is produced."""


class BudgetExceeded(RuntimeError):
    """A budgeted computation did not finish. Raised only in strict mode."""


class TermMismatch(AssertionError):
    """Raised by expect() when two terms are not equal."""

    def __init__(self, actual, expected):
        self.actual = str(actual)
        self.expected = str(expected)
        super().__init__(f"Found term {self.actual} but expected {self.expected}")


class VariableAllocator:
    """Mints unique variable identities. One shared instance is the default."""

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)

    def mint(self) -> int:
        return next(self._counter)


ALLOCATOR = VariableAllocator()


class Term:
    """
    Base class of all terms.

    The methods below are conveniences over the module-level operations
    in core.structure, core.reduction, core.canonical, core.render and
    the convert package.
    """

    def apply(self, *args) -> "Term":
        return apply(self, *args)

    def step(self):
        from .reduction import step
        return step(self)

    def run(self, *args, max_steps=None, strict=False):
        from .reduction import run
        return run(self, *args, max_steps=max_steps, strict=strict)

    def walk(self, max_steps=None):
        from .reduction import walk
        return walk(self, max_steps=max_steps)

    def equals(self, other) -> bool:
        from .structure import equals
        return equals(self, other)

    def weight(self) -> int:
        from .structure import weight
        return weight(self)

    def symbols(self):
        from .structure import symbols
        return symbols(self)

    def canonicalize(self, max_steps=None, max_args=None, strict=False):
        from .canonical import canonicalize
        return canonicalize(self, max_steps=max_steps, max_args=max_args, strict=strict)

    def to_bracket_form(self, max_steps=None) -> "Term":
        from ..convert.bracket import to_bracket_form
        return to_bracket_form(self, max_steps=max_steps)

    def lambdify(self, max_steps=None, max_args=None):
        from ..convert.lambdify import lambdify
        return lambdify(self, max_steps=max_steps, max_args=max_args)

    def render(self, terse: Optional[bool] = None) -> str:
        from .render import to_string
        return to_string(self, terse=terse)

    def __str__(self):
        return self.render()

    def __repr__(self):
        return f"{type(self).__name__}({self.render(terse=True)!r})"


def _check_name(name):
    if not isinstance(name, str) or not name:
        raise ConstructionError(f"improper term name: {name!r}")


@dataclass(eq=False, repr=False)
class Application(Term):
    fun: Term
    args: tuple

    def __post_init__(self):
        self.args = tuple(self.args)
        if not self.args:
            raise ConstructionError(
                f"application of {self.fun} to no arguments"
            )

    def split(self):
        """View as a binary (prefix, last) pair."""
        return apply(self.fun, *self.args[:-1]), self.args[-1]


@dataclass(eq=False, repr=False)
class Variable(Term):
    name: str
    ident: int

    def __post_init__(self):
        _check_name(self.name)


@dataclass(eq=False, repr=False)
class Native(Term):
    name: str
    arity: int
    rule: Callable
    coerce: Optional[Callable] = None
    note: Optional[str] = None

    def __post_init__(self):
        _check_name(self.name)
        if isinstance(self.arity, bool) or not isinstance(self.arity, int) or self.arity < 1:
            raise ConstructionError(
                f"native {self.name} needs a positive integer arity, got {self.arity!r}"
            )
        if not callable(self.rule):
            raise ConstructionError(f"native {self.name} has no callable rule")


class Church(Native):
    """Church numeral n: applies its first argument to its second n times."""

    def __init__(self, n: int):
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise ConstructionError(f"Church numeral must be a non-negative integer, got {n!r}")
        self.n = n
        super().__init__(str(n), 2, self._iterate, note=str(n))

    def _iterate(self, f, x):
        out = x
        for _ in range(self.n):
            out = apply(f, out)
        return out


@dataclass(eq=False, repr=False)
class Alias(Term):
    """
    A name for an existing term.

    arity > 0 means the alias waits for that many arguments before
    expanding; arity 0 means it expands as soon as it is stepped.
    A terminal alias counts as a single opaque symbol in symbols(),
    weight() and equality.
    """
    name: str
    impl: Term
    arity: int = 0
    proper: bool = False
    terminal: bool = False
    canonical: Optional[Term] = None
    note: Optional[str] = None

    def __post_init__(self):
        _check_name(self.name)


class Lambda(Term):
    """
    Single-argument abstraction.

    The bound variable is always replaced by a fresh one, so two lambdas
    never share a binder even when built from the same Variable.
    """

    def __init__(self, arg: Variable, body: Term, allocator: Optional[VariableAllocator] = None):
        if not isinstance(arg, Variable):
            raise ConstructionError(f"lambda must bind a Variable, got {arg!r}")
        if not isinstance(body, Term):
            raise ConstructionError(f"lambda body must be a term, got {body!r}")
        local = make_variable(arg.name, allocator)
        self.arg = local
        replaced = subst(body, arg, local)
        self.body = body if replaced is None else replaced


def _placeholder_coerce(_arg):
    raise ConstructionError("attempt to use the lambda placeholder in a term")


# Marks "a lambda occurs here" in symbols(). Never part of a real term.
LAMBDA_PLACEHOLDER = Native("->", 1, lambda x: x, coerce=_placeholder_coerce,
                            note="lambda placeholder")


# ── Construction API ─────────────────────────────────────────────────────────

def make_variable(name: str, allocator: Optional[VariableAllocator] = None) -> Variable:
    """A new free variable. Always a fresh identity, whatever the name."""
    return Variable(name, (allocator or ALLOCATOR).mint())


def free(*names, allocator: Optional[VariableAllocator] = None) -> list:
    """Several fresh variables at once: x, y = free("x", "y")."""
    return [make_variable(name, allocator) for name in names]


def make_native(name: str, arity: int, rule: Callable,
                coerce: Optional[Callable] = None, note: Optional[str] = None) -> Native:
    return Native(name, arity, rule, coerce=coerce, note=note)


def make_alias(name: str, term: Term, terminal: Optional[bool] = None,
               canonize: bool = True, max_steps=None, max_args=None,
               note: Optional[str] = None) -> Alias:
    """
    Bind name to term, running one canonicalization pass to learn its
    arity and properness. Proper aliases are terminal unless the caller
    says otherwise.
    """
    if not isinstance(term, Term):
        raise ConstructionError(f"alias {name} must name a term, got {term!r}")
    arity, proper, canonical = 0, False, None
    if canonize:
        from .canonical import canonicalize
        guess = canonicalize(term, max_steps=max_steps, max_args=max_args)
        if guess.found and guess.proper and guess.arity:
            arity = guess.arity
        proper = guess.proper
        canonical = guess.canonical
    return Alias(
        name, term,
        arity=arity,
        proper=proper,
        terminal=proper if terminal is None else terminal,
        canonical=canonical,
        note=note,
    )


def apply(term: Term, *args) -> Term:
    """
    Apply term to args without computing anything.

    Applications are extended rather than nested. A native with a coerce
    hook gets to replace itself and its first argument before an
    Application is built.
    """
    if not args:
        return term
    for arg in args:
        if not isinstance(arg, Term):
            raise ConstructionError(f"cannot apply {term} to non-term {arg!r}")
    if isinstance(term, Application):
        return Application(term.fun, term.args + args)
    if isinstance(term, Native) and term.coerce is not None:
        replacement = term.coerce(args[0])
        if isinstance(replacement, Term):
            return apply(replacement, *args[1:])
    return Application(term, args)


def make_lambda(arg, body: Term) -> Lambda:
    """
    λarg.body. A list of variables nests: [x, y] means λx.λy.body.
    Bound names within one list must be distinct.
    """
    if isinstance(arg, (list, tuple)):
        if not arg:
            raise ConstructionError("empty argument list in lambda")
        seen = set()
        for var in arg:
            if not isinstance(var, Variable):
                raise ConstructionError(f"lambda must bind Variables, got {var!r}")
            if var.name in seen:
                raise ConstructionError(f"duplicate bound name {var.name} in lambda")
            seen.add(var.name)
        for var in reversed(arg[1:]):
            body = Lambda(var, body)
        arg = arg[0]
    return Lambda(arg, body)


def subst(term: Term, var: Variable, value: Term) -> Optional[Term]:
    """
    Replace every free occurrence of var in term by value.
    Returns None when var does not occur, so callers can keep sharing.

    Walks the term with an explicit stack of (node, children, results)
    frames, rebuilding each node once all of its children are done.
    """
    stack = [(term, _subst_children(term, var), [])]
    out = None
    while stack:
        node, children, results = stack[-1]
        if len(results) < len(children):
            child = children[len(results)]
            stack.append((child, _subst_children(child, var), []))
            continue
        stack.pop()
        out = _subst_node(node, children, results, var, value)
        if stack:
            stack[-1][2].append(out)
    return out


def _subst_children(term: Term, var: Variable) -> tuple:
    if isinstance(term, Application):
        return (term.fun,) + term.args
    if isinstance(term, Lambda):
        return () if term.arg is var else (term.body,)
    if isinstance(term, Alias):
        return (term.impl,)
    return ()


def _subst_node(term, children, results, var, value) -> Optional[Term]:
    if isinstance(term, Variable):
        return value if term is var else None
    if isinstance(term, Application):
        if all(new is None for new in results):
            return None
        fun, *args = [old if new is None else new for old, new in zip(children, results)]
        return apply(fun, *args)
    if isinstance(term, Lambda):
        if not results or results[0] is None:
            return None
        return Lambda(term.arg, results[0])
    if isinstance(term, Alias):
        return results[0]
    return None
