"""
Top-level driver: prove a formula by refuting its negation.

The logic is not decidable, so each attempt runs under a depth budget
(nested expansion calls). An attempt that gives no answer within its
budget is restarted from scratch with a larger one: iterative deepening,
for completeness in the limit.

A formula that is not a theorem may keep the search going forever if its
tableau keeps growing; pass max_depth to put a ceiling on the budget.
"""

import sys
from contextlib import contextmanager
from typing import Optional

from .expand import Search, Closed, OPEN, expand
from .formula import Formula, Not, Knows, And, Or, Implies, Iff, Forall, Exists
from .tableau import Tableau
from ..errors import DepthLimitExceeded, UsageError


INITIAL_DEPTH = 100
DEPTH_STEP = 100

# Generator frames used per level of expansion, with room to spare.
_FRAMES_PER_LEVEL = 10


def prove(
    formula: Formula,
    axioms=(),
    initial_depth: int = INITIAL_DEPTH,
    depth_step: int = DEPTH_STEP,
    max_depth: Optional[int] = None,
    verbose: bool = False,
) -> bool:
    """
    Is formula a logical consequence of the axioms?

    The formula comes first and the axioms are optional, so prove(f) and
    prove(f, axioms) read alike; the usual notation prove(axioms, f) maps
    to prove(f, axioms).

    Args:
        formula:        the formula to prove
        axioms:         modality-free formulas true at every world
        initial_depth:  depth budget of the first attempt
        depth_step:     budget increase after each inconclusive attempt
        max_depth:      give up (return False) rather than exceed this
                        budget. Default: no ceiling.
        verbose:        print progress.

    Returns True if a closed tableau was found for the negated formula.
    False means no proof exists within the fragment the prover decides,
    or that max_depth was reached.

    Raises ExistentialQuantifierError if an existential quantifier turns
    up in positive scope, and UsageError for other malformed input.
    """
    axioms = tuple(axioms)
    _check_input(formula, axioms)

    limit = initial_depth
    while True:
        try:
            proved = refute(Not(formula), axioms, limit)
        except DepthLimitExceeded:
            next_limit = limit + depth_step
            if max_depth is not None and next_limit > max_depth:
                if verbose:
                    print(f"  not proved at depth {limit}; giving up (max depth {max_depth})")
                return False
            if verbose:
                print(f"  not proved at depth {limit}, retrying at depth {next_limit}")
            limit = next_limit
            continue

        if verbose:
            outcome = "proved" if proved else "not provable"
            print(f"  {outcome} at depth {limit}: {formula}")
        return proved


def refute(formula: Formula, axioms=(), limit: int = INITIAL_DEPTH) -> bool:
    """
    Try to close every branch of a tableau for formula plus the axioms.

    Returns True if the tableau closes, False if it definitely stays
    open. Raises DepthLimitExceeded if the budget ran out before either
    answer was reached.
    """
    search = Search(limit)
    tbl = Tableau.initial(axioms)
    with _recursion_headroom(limit):
        # Every Closed result comes before OPEN, so the first one decides.
        result = next(expand(formula, tbl, search), OPEN)
    if isinstance(result, Closed):
        return True
    if search.exceeded:
        raise DepthLimitExceeded(limit)
    return False


@contextmanager
def _recursion_headroom(limit: int):
    """Raise the interpreter recursion limit to fit a search of this depth."""
    previous = sys.getrecursionlimit()
    needed = limit * _FRAMES_PER_LEVEL + 1000
    if needed > previous:
        sys.setrecursionlimit(needed)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


def _check_input(formula, axioms):
    if not isinstance(formula, Formula):
        raise UsageError(f"not a formula: {formula!r}")
    for axiom in axioms:
        if not isinstance(axiom, Formula):
            raise UsageError(f"not a formula: {axiom!r}")
        if _has_modality(axiom):
            raise UsageError(f"axioms must not contain modalities: {axiom}")


def _has_modality(fml) -> bool:
    if isinstance(fml, Knows):
        return True
    if isinstance(fml, Not):
        return _has_modality(fml.body)
    if isinstance(fml, (And, Or, Implies, Iff)):
        return _has_modality(fml.left) or _has_modality(fml.right)
    if isinstance(fml, (Forall, Exists)):
        return _has_modality(fml.body)
    return False
