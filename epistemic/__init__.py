"""
Epistemic: a tableau theorem prover for multi-agent epistemic
first-order logic.

A leanTAP-style refutation prover extended with Fitting-style modal
sub-tableaux, one knowledge modality per agent, a background theory that
holds at every world, and equality treated as unification under rigid
terms and unique names.

Usage:
    python -m epistemic "knows(ann, p | ~p)"
    python -m epistemic "p | q" --axiom q
    python -m epistemic --suite all

    >>> from epistemic import prove, parse_formula
    >>> prove(parse_formula("knows(ann, p) => knows(ann, p | q)"))
    True
"""

from .core.formula import (
    Formula, TRUE, FALSE, Atom, Eq, Not, And, Or, Implies, Iff,
    Forall, Exists, Knows, is_atom, is_literal, conj, disj,
)
from .core.prover import prove, refute
from .errors import (
    ProverError, UsageError, ExistentialQuantifierError,
    FormulaSyntaxError, DepthLimitExceeded,
)
from .parse import parse_formula, parse_formulas
from .suites import SUITES, run_suite
from .visualization import print_tableau, print_results

__all__ = [
    "Formula", "TRUE", "FALSE", "Atom", "Eq", "Not", "And", "Or",
    "Implies", "Iff", "Forall", "Exists", "Knows",
    "is_atom", "is_literal", "conj", "disj",
    "prove", "refute",
    "ProverError", "UsageError", "ExistentialQuantifierError",
    "FormulaSyntaxError", "DepthLimitExceeded",
    "parse_formula", "parse_formulas",
    "SUITES", "run_suite",
    "print_tableau", "print_results",
]
