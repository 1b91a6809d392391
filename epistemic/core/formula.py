"""
Formulas of multi-agent epistemic first-order logic.

Formulas are immutable dataclasses. Terms inside them follow the
conventions of terms.py.

    TRUE, FALSE                  truth constants
    Atom("p", ("a", "X"))        p(a, X)
    Eq("X", "red")               X = red
    Not(F)                       ~F
    And(F, G), Or(F, G)          F & G, F | G
    Implies(F, G), Iff(F, G)     F => G, F <=> G
    Forall(("X",), F)            all([X], F)
    Exists(("X",), F)            ext([X], F)   (only valid under negation)
    Knows("ann", F)              knows(ann, F)

The bound-variable list of a quantifier is its instantiation marker: those
names are never unified, only replaced by fresh prover variables when the
quantifier is instantiated.
"""

from dataclasses import dataclass
from typing import Callable

from .terms import is_variable, is_function, format_term


class Formula:
    """Base class for all formula variants."""

    def __str__(self):
        return format_formula(self)


@dataclass(frozen=True)
class Truth(Formula):
    value: bool


TRUE = Truth(True)
FALSE = Truth(False)


@dataclass(frozen=True)
class Atom(Formula):
    predicate: str
    args: tuple = ()

    @property
    def term(self) -> tuple:
        """The atom as a compound term, so atoms unify like terms."""
        return (self.predicate,) + tuple(self.args)

    @classmethod
    def from_term(cls, term: tuple) -> "Atom":
        return cls(term[0], tuple(term[1:]))


@dataclass(frozen=True)
class Eq(Formula):
    lhs: object
    rhs: object


@dataclass(frozen=True)
class Not(Formula):
    body: Formula


@dataclass(frozen=True)
class And(Formula):
    left: Formula
    right: Formula


@dataclass(frozen=True)
class Or(Formula):
    left: Formula
    right: Formula


@dataclass(frozen=True)
class Implies(Formula):
    left: Formula
    right: Formula


@dataclass(frozen=True)
class Iff(Formula):
    left: Formula
    right: Formula


@dataclass(frozen=True)
class Forall(Formula):
    variables: tuple
    body: Formula


@dataclass(frozen=True)
class Exists(Formula):
    variables: tuple
    body: Formula


@dataclass(frozen=True)
class Knows(Formula):
    agent: object
    body: Formula


_COMPOUND = (Not, And, Or, Implies, Iff, Forall, Exists, Knows)


def is_atom(fml) -> bool:
    """True for truth constants, predicates and equalities."""
    return isinstance(fml, Formula) and not isinstance(fml, _COMPOUND)


def is_literal(fml) -> bool:
    """An atom or the negation of one."""
    if isinstance(fml, Not):
        return is_atom(fml.body)
    return is_atom(fml)


def conj(*fmls) -> Formula:
    """Right-nested conjunction. conj() is TRUE."""
    if not fmls:
        return TRUE
    result = fmls[-1]
    for fml in reversed(fmls[:-1]):
        result = And(fml, result)
    return result


def disj(*fmls) -> Formula:
    """Right-nested disjunction. disj() is FALSE."""
    if not fmls:
        return FALSE
    result = fmls[-1]
    for fml in reversed(fmls[:-1]):
        result = Or(fml, result)
    return result


def map_terms(fml: Formula, term_fn: Callable) -> Formula:
    """Rebuild fml with term_fn applied to every term it mentions."""
    if isinstance(fml, Truth):
        return fml
    if isinstance(fml, Atom):
        return Atom(fml.predicate, tuple(term_fn(arg) for arg in fml.args))
    if isinstance(fml, Eq):
        return Eq(term_fn(fml.lhs), term_fn(fml.rhs))
    if isinstance(fml, Not):
        return Not(map_terms(fml.body, term_fn))
    if isinstance(fml, (And, Or, Implies, Iff)):
        return type(fml)(map_terms(fml.left, term_fn), map_terms(fml.right, term_fn))
    if isinstance(fml, (Forall, Exists)):
        return type(fml)(fml.variables, map_terms(fml.body, term_fn))
    if isinstance(fml, Knows):
        return Knows(term_fn(fml.agent), map_terms(fml.body, term_fn))
    raise TypeError(f"not a formula: {fml!r}")


def copy_formula(fml: Formula, keep, fresh: Callable, bound=None, scope=None) -> Formula:
    """
    Copy fml, renaming every variable not in `keep` to a fresh one.

    Variables in `keep` are shared with the original. A renamed variable
    that currently has a value in `bound` is replaced by a copy of that
    value. Each quantifier gets fresh names for the variables it binds;
    `scope` pre-maps names (used to instantiate a quantifier's variable).
    """
    if bound is None:
        bound = {}
    free_map = {}

    def copy_term(term, mapping):
        if is_variable(term):
            if term in mapping:
                return mapping[term]
            if term in keep:
                return term
            if term in bound:
                return copy_term(bound[term], mapping)
            if term not in free_map:
                free_map[term] = fresh(term)
            return free_map[term]
        if is_function(term):
            return tuple([term[0]] + [copy_term(arg, mapping) for arg in term[1:]])
        return term

    def walk(f, mapping):
        if isinstance(f, (Forall, Exists)):
            inner = dict(mapping)
            for var in f.variables:
                inner[var] = fresh(var)
            return type(f)(tuple(inner[var] for var in f.variables), walk(f.body, inner))
        if isinstance(f, Not):
            return Not(walk(f.body, mapping))
        if isinstance(f, (And, Or, Implies, Iff)):
            return type(f)(walk(f.left, mapping), walk(f.right, mapping))
        if isinstance(f, Knows):
            return Knows(copy_term(f.agent, mapping), walk(f.body, mapping))
        return map_terms(f, lambda term: copy_term(term, mapping))

    return walk(fml, dict(scope or {}))


# ── Printing ────────────────────────────────────────────────────────────────

# Binding strength of each connective; higher binds tighter.
_PREC = {Iff: 1, Implies: 2, Or: 3, And: 4, Not: 5}
_ATOMIC = 6


def _precedence(fml) -> int:
    return _PREC.get(type(fml), _ATOMIC)


def format_formula(fml: Formula, required: int = 0) -> str:
    """Render fml in the syntax accepted by parse_formula."""
    if isinstance(fml, Truth):
        text = "true" if fml.value else "false"
    elif isinstance(fml, Atom):
        text = format_term(fml.term)
    elif isinstance(fml, Eq):
        text = f"{format_term(fml.lhs)} = {format_term(fml.rhs)}"
    elif isinstance(fml, Not):
        text = "~" + format_formula(fml.body, _PREC[Not])
    elif isinstance(fml, (And, Or, Implies, Iff)):
        op = {And: "&", Or: "|", Implies: "=>", Iff: "<=>"}[type(fml)]
        prec = _PREC[type(fml)]
        # All binary connectives associate to the right.
        left = format_formula(fml.left, prec + 1)
        right = format_formula(fml.right, prec)
        text = f"{left} {op} {right}"
    elif isinstance(fml, (Forall, Exists)):
        name = "all" if isinstance(fml, Forall) else "ext"
        text = f"{name}([{', '.join(fml.variables)}], {format_formula(fml.body)})"
    elif isinstance(fml, Knows):
        text = f"knows({format_term(fml.agent)}, {format_formula(fml.body)})"
    else:
        raise TypeError(f"not a formula: {fml!r}")

    if _precedence(fml) < required:
        return f"({text})"
    return text
