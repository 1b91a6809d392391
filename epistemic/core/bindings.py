"""
Variable bindings for one refutation attempt.

Bindings made by the prover are global: once a variable is bound, the value
is visible on every branch, as first-order free-variable tableaux require.
They are not final, though. Every binding is pushed on a trail, and a
choice point remembers the trail height (a mark) before trying an
alternative so it can undo everything bound since.

Two checks guard every batch of bindings:

    * Veto: each instance variable of a universal formula is registered
      with the earlier instances of that formula on its own branch. No
      instance may end up identical to one of those siblings, since it
      would be redundant there. Registrations are trailed like bindings.

    * Disequalities: pairs of terms declared never to unify. A batch that
      makes any pair identical is rejected; pairs that can no longer unify
      are dropped as satisfied.
"""

from typing import Optional

from .terms import apply_substitution, unifier


class Bindings:
    """The binding trail, veto families and fresh-name supply of one attempt."""

    def __init__(self):
        self.values = {}
        self.trail = []
        self.families = {}
        self.registered = []
        self._counter = 0

    def fresh(self, name: str) -> str:
        """A variable name never used before in this attempt."""
        self._counter += 1
        base = name.split("__")[0]
        return f"{base}__{self._counter}"

    def resolve(self, term):
        return apply_substitution(self.values, term)

    def is_bound(self, var) -> bool:
        return var in self.values

    def unifier(self, t1, t2) -> Optional[dict]:
        """New bindings that would make t1 and t2 identical, or None."""
        return unifier(t1, t2, self.values)

    # ── Trail ───────────────────────────────────────────────────────────────

    def mark(self) -> tuple:
        """Heights of the binding trail and the family registrations."""
        return len(self.trail), len(self.registered)

    def undo(self, mark: tuple):
        """Unbind everything bound, and forget every family registered, since mark."""
        bound, registered = mark
        while len(self.trail) > bound:
            del self.values[self.trail.pop()]
        while len(self.registered) > registered:
            del self.families[self.registered.pop()]

    def since(self, mark: tuple) -> tuple:
        """The (variable, value) pairs bound since mark, oldest first."""
        return tuple((var, self.values[var]) for var in self.trail[mark[0]:])

    # ── Veto families ───────────────────────────────────────────────────────

    def register(self, var, siblings=()):
        """
        Record var as an instance whose value must differ from each of its
        siblings: the earlier instances of the same universal formula on
        the branch that made var. The registration is on the trail and is
        undone along with bindings.
        """
        self.families[var] = tuple(siblings) + (var,)
        self.registered.append(var)

    def vetoed(self, var) -> bool:
        """Is var's current value already taken by one of its siblings?"""
        family = self.families.get(var, ())
        value = self.resolve(var)
        return any(other != var and self.resolve(other) == value
                   for other in family)

    # ── Committing bindings ─────────────────────────────────────────────────

    def apply(self, new_bindings: dict, disequalities=()) -> Optional[tuple]:
        """
        Commit new_bindings, then re-check the disequality obligations.

        Returns the obligations still active afterwards, or None if the
        bindings were vetoed or violate an obligation; in that case
        nothing stays bound.
        """
        mark = self.mark()
        for var, value in new_bindings.items():
            self.values[var] = value
            self.trail.append(var)

        # A binding can give an older instance the value of a newer sibling.
        if any(self.vetoed(var) for var in self.registered):
            self.undo(mark)
            return None

        kept = self.check_disequalities(disequalities)
        if kept is None:
            self.undo(mark)
        return kept

    def check_disequalities(self, disequalities) -> Optional[tuple]:
        """
        Drop obligations that can no longer be violated.

        Returns None if some pair has become identical.
        """
        kept = []
        for lhs, rhs in disequalities:
            needed = self.unifier(lhs, rhs)
            if needed is None:
                continue
            if not needed:
                return None
            kept.append((lhs, rhs))
        return tuple(kept)
