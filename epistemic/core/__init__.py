from .terms import (
    is_variable, is_function, occurs_in, apply_substitution,
    unify_terms, unifier, format_term,
)
from .formula import (
    Formula, Truth, TRUE, FALSE, Atom, Eq, Not, And, Or, Implies, Iff,
    Forall, Exists, Knows, is_atom, is_literal, conj, disj,
    copy_formula, format_formula,
)
from .normalize import normalize
from .bindings import Bindings
from .tableau import Tableau, Universal
from .expand import Closed, Open, OPEN, Search, expand, add_literal
from .prover import prove, refute, INITIAL_DEPTH, DEPTH_STEP

__all__ = [
    "is_variable", "is_function", "occurs_in", "apply_substitution",
    "unify_terms", "unifier", "format_term",
    "Formula", "Truth", "TRUE", "FALSE", "Atom", "Eq", "Not", "And", "Or",
    "Implies", "Iff", "Forall", "Exists", "Knows", "is_atom", "is_literal",
    "conj", "disj", "copy_formula", "format_formula",
    "normalize",
    "Bindings",
    "Tableau", "Universal",
    "Closed", "Open", "OPEN", "Search", "expand", "add_literal",
    "prove", "refute", "INITIAL_DEPTH", "DEPTH_STEP",
]
