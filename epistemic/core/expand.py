"""
The tableau expansion engine.

expand(fml, tbl, search) tries to extend branch tbl with fml until every
branch is closed. It is a generator of results:

    Closed(disequalities)  the branch closed, provided the listed pairs of
                           terms are never unified
    OPEN                   some branch could not be closed

Each result is produced with the bindings that led to it in place. Pulling
the next result backtracks: the bindings are undone and the next
alternative is tried. All Closed results come before the final OPEN, so a
caller that only needs one refutation can stop at the first result.

Expansion handles one connective per call (see normalize.py), collects
modal formulas without expanding them, and only when the current world
is exhausted moves on to the worlds they imply.
"""

from dataclasses import dataclass

from .bindings import Bindings
from .formula import (
    Formula, TRUE, FALSE, Eq, Not, And, Or, Forall, Knows, is_literal,
)
from .normalize import normalize
from .tableau import Tableau
from ..errors import UsageError


@dataclass(frozen=True)
class Closed:
    """The branch is contradictory, as long as no disequality is violated."""
    disequalities: tuple = ()


@dataclass(frozen=True)
class Open:
    """Some branch stays open."""


OPEN = Open()


class Search:
    """Everything one depth-limited refutation attempt shares."""

    def __init__(self, limit: int, bindings: Bindings = None):
        self.limit = limit
        self.bindings = bindings if bindings is not None else Bindings()
        self.exceeded = False
        self.expansions = 0


def expand(fml: Formula, tbl: Tableau, search: Search, depth: int = 0):
    """
    Generate the results of expanding fml on branch tbl.

    A call nested deeper than the search's limit produces no results and
    marks the search as having exceeded its budget. Results that repeat
    an earlier one with the same bindings are skipped.
    """
    if depth >= search.limit:
        search.exceeded = True
        return
    search.expansions += 1

    bindings = search.bindings
    mark = bindings.mark()
    seen = set()
    for result in _expand(fml, tbl, search, depth + 1):
        key = (result, bindings.since(mark))
        if key in seen:
            continue
        seen.add(key)
        yield result


def _expand(fml, tbl, search, depth):
    rewritten = normalize(fml)
    if rewritten is not None:
        yield from expand(rewritten, tbl, search, depth)
        return

    if isinstance(fml, Forall):
        if not fml.variables:
            yield from expand(fml.body, tbl, search, depth)
            return
        first, rest = fml.variables[0], fml.variables[1:]
        instance, tbl = tbl.add_universal(first, Forall(rest, fml.body), search.bindings)
        yield from expand(instance, tbl, search, depth)
        return

    # Modalities constrain the worlds reachable from here, not this one.
    if isinstance(fml, Knows):
        tbl = tbl.add_necessity(fml.agent, fml.body)
        yield from expand(TRUE, tbl, search, depth)
        return
    if isinstance(fml, Not) and isinstance(fml.body, Knows):
        tbl = tbl.add_possibility(fml.body.agent, Not(fml.body.body))
        yield from expand(TRUE, tbl, search, depth)
        return

    if isinstance(fml, Or):
        yield from _expand_or(fml, tbl, search, depth)
        return
    if isinstance(fml, And):
        yield from expand(fml.left, tbl.push(fml.right), search, depth)
        return

    if not is_literal(fml):
        raise UsageError(f"cannot expand {fml!r}")
    yield from _expand_literal(fml, tbl, search, depth)


def _expand_or(fml, tbl, search, depth):
    """
    Both sides must close. The right side is expanded under the bindings
    of each closing of the left side, and must respect the disequalities
    that closing relied on.
    """
    for left in expand(fml.left, tbl, search, depth):
        if not isinstance(left, Closed):
            yield OPEN
            continue
        right_tbl = tbl.add_disequalities(left.disequalities)
        for right in expand(fml.right, right_tbl, search, depth):
            if isinstance(right, Closed):
                yield Closed(left.disequalities + right.disequalities)


def _expand_literal(fml, tbl, search, depth):
    for added in add_literal(tbl, fml, search.bindings):
        if isinstance(added, Closed):
            yield added
        else:
            yield from _resume(added, search, depth)
    # Open is always a possible outcome once the alternatives are exhausted.
    yield OPEN


def _resume(tbl, search, depth):
    """
    Carry on after a literal left the branch open.

    Next formula on the worklist first; then fresh instances of used-up
    universal formulas; then the related worlds, any one of which closing
    closes this branch; then, since those worlds may have bound more
    instance variables, used-up universals once more.
    """
    bindings = search.bindings

    fml, rest = tbl.pop()
    if fml is not None:
        yield from expand(fml, rest, search, depth)
        return

    fml, rest = tbl.refresh_universals(bindings).pop()
    if fml is not None:
        yield from expand(fml, rest, search, depth)
        return

    for result in _expand_worlds(tbl.subtableaux(bindings), search, depth):
        if isinstance(result, Closed):
            yield result
            continue
        fml, rest = tbl.refresh_universals(bindings).pop()
        if fml is not None:
            yield from expand(fml, rest, search, depth)
        else:
            yield OPEN


def _expand_worlds(worlds, search, depth):
    if not worlds:
        yield OPEN
        return
    for result in expand(TRUE, worlds[0], search, depth):
        if isinstance(result, Closed):
            yield result
        else:
            yield from _expand_worlds(worlds[1:], search, depth)


# ── Adding literals ─────────────────────────────────────────────────────────

def add_literal(tbl: Tableau, lit: Formula, bindings: Bindings):
    """
    Add a literal to the branch, generating the ways it can turn out.

    Yields Closed(...) once for each way the literal contradicts the
    branch (some of which need bindings, held while the result is in
    use), then the extended Tableau if the branch can also stay open.

    Equality is unification: terms that cannot unify are distinct, terms
    already identical are equal, and anything else is a choice between
    binding the variables and forbidding those bindings forever.
    """
    if lit == TRUE or lit == Not(FALSE):
        yield tbl
    elif lit == FALSE or lit == Not(TRUE):
        yield Closed()
    elif isinstance(lit, Eq):
        yield from _add_equality(tbl, lit, bindings)
    elif isinstance(lit, Not) and isinstance(lit.body, Eq):
        yield from _add_disequality(tbl, lit.body, bindings)
    elif isinstance(lit, Not):
        yield from _add_atom(tbl, lit.body.term, False, bindings)
    else:
        yield from _add_atom(tbl, lit.term, True, bindings)


def _add_equality(tbl, eq, bindings):
    needed = bindings.unifier(eq.lhs, eq.rhs)
    if needed is None:
        yield Closed()
        return
    if not needed:
        yield tbl
        return

    # Closed, if any one of the bindings is never made.
    for var, value in needed.items():
        yield Closed(((var, value),))

    # Or open, with the terms made equal.
    mark = bindings.mark()
    kept = bindings.apply(needed, tbl.disequalities)
    if kept is not None:
        yield tbl.with_disequalities(kept)
    bindings.undo(mark)


def _add_disequality(tbl, eq, bindings):
    needed = bindings.unifier(eq.lhs, eq.rhs)
    if needed is None:
        yield tbl
        return
    if not needed:
        yield Closed()
        return

    # Closed, by making the terms equal.
    mark = bindings.mark()
    if bindings.apply(needed, tbl.disequalities) is not None:
        yield Closed()
    bindings.undo(mark)

    # Or open, with the terms forbidden from ever unifying.
    yield tbl.add_disequalities(((eq.lhs, eq.rhs),))


def _add_atom(tbl, atom, positive, bindings):
    opposite = tbl.false_literals if positive else tbl.true_literals
    candidates = _contradictions(atom, opposite, bindings)

    if candidates and not candidates[0]:
        # An identical complement closes the branch with no choices left.
        yield Closed()
        return

    for needed in candidates:
        mark = bindings.mark()
        if bindings.apply(needed, tbl.disequalities) is not None:
            yield Closed()
        bindings.undo(mark)

    same = tbl.true_literals if positive else tbl.false_literals
    resolved = bindings.resolve(atom)
    if any(bindings.resolve(known) == resolved for known in same):
        yield tbl
    elif positive:
        yield tbl.add_true(atom)
    else:
        yield tbl.add_false(atom)


def _contradictions(atom, opposite, bindings) -> list:
    """Distinct unifiers of atom with each complementary literal, fewest bindings first."""
    found = []
    for other in opposite:
        needed = bindings.unifier(atom, other)
        if needed is not None and needed not in found:
            found.append(needed)
    found.sort(key=len)
    return found
