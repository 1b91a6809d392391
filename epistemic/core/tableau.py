"""
The state of one tableau branch.

A Tableau is a partially built model rooted at one world of a Kripke
structure. It is treated as a value: every mutator returns a new Tableau
and leaves the original untouched, so a choice point can hold on to the
state it started from. Variable bindings are not part of it; they live in
the attempt's Bindings trail.

    worklist:        formulas still to expand on this branch, next first
    true_literals:   atoms (as terms) true at this world
    false_literals:  atoms (as terms) false at this world
    disequalities:   (lhs, rhs) pairs that must never unify
    axioms:          formulas true at every world
    necessity:       (agent, formula): holds at every world the agent
                     considers possible from here
    possibility:     (agent, formula): holds at some world the agent
                     considers possible from here
    universals:      universally quantified formulas available for
                     re-instantiation, with the instances made so far
    free_variables:  variables introduced by the prover; copying a
                     formula shares these and renames everything else
"""

from dataclasses import dataclass, field, replace

from .formula import Formula, copy_formula
from .bindings import Bindings


@dataclass(frozen=True)
class Universal:
    """A quantified formula template: all(variable, body)."""
    variable: str
    body: Formula
    instances: tuple = ()   # instantiation variables, newest first

    def used_up(self, bindings: Bindings) -> bool:
        """Every instance so far has been bound, so a fresh one may help."""
        return bindings.is_bound(self.instances[0])


@dataclass(frozen=True)
class Tableau:
    worklist: tuple = ()
    true_literals: tuple = ()
    false_literals: tuple = ()
    disequalities: tuple = ()
    axioms: tuple = ()
    necessity: tuple = ()
    possibility: tuple = ()
    universals: tuple = ()
    free_variables: frozenset = field(default_factory=frozenset)

    @classmethod
    def initial(cls, axioms=()) -> "Tableau":
        """A fresh branch at the root world, with the axioms still to expand."""
        axioms = tuple(axioms)
        return cls(worklist=axioms, axioms=axioms)

    # ── Worklist ────────────────────────────────────────────────────────────

    def push(self, fml: Formula) -> "Tableau":
        return replace(self, worklist=(fml,) + self.worklist)

    def pop(self):
        """(next formula, remaining tableau), or (None, self) if nothing is left."""
        if not self.worklist:
            return None, self
        return self.worklist[0], replace(self, worklist=self.worklist[1:])

    # ── Literals and obligations ────────────────────────────────────────────

    def add_true(self, atom: tuple) -> "Tableau":
        return replace(self, true_literals=(atom,) + self.true_literals)

    def add_false(self, atom: tuple) -> "Tableau":
        return replace(self, false_literals=(atom,) + self.false_literals)

    def add_disequalities(self, pairs) -> "Tableau":
        if not pairs:
            return self
        return replace(self, disequalities=tuple(pairs) + self.disequalities)

    def with_disequalities(self, pairs) -> "Tableau":
        return replace(self, disequalities=tuple(pairs))

    def add_necessity(self, agent, fml: Formula) -> "Tableau":
        return replace(self, necessity=((agent, fml),) + self.necessity)

    def add_possibility(self, agent, fml: Formula) -> "Tableau":
        return replace(self, possibility=((agent, fml),) + self.possibility)

    # ── Universal formulas ──────────────────────────────────────────────────

    def _instantiate(self, variable: str, body: Formula, bindings: Bindings):
        var = bindings.fresh(variable)
        instance = copy_formula(body, self.free_variables, bindings.fresh,
                                bindings.values, scope={variable: var})
        return var, instance

    def add_universal(self, variable: str, body: Formula, bindings: Bindings):
        """
        Instantiate all(variable, body) with a fresh variable and remember
        the template for later re-use.

        Returns (instance, new tableau).
        """
        var, instance = self._instantiate(variable, body, bindings)
        bindings.register(var)
        univ = Universal(variable, body, (var,))
        return instance, replace(
            self,
            universals=(univ,) + self.universals,
            free_variables=self.free_variables | {var},
        )

    def refresh_universals(self, bindings: Bindings) -> "Tableau":
        """
        Queue a fresh instance of every template whose newest instance
        variable has been bound.

        An unbound newest instance can still be used as it is, so making
        another copy would only duplicate work. A fresh instance is vetoed
        from the values of the earlier instances on this branch only; a
        sibling branch refreshes the same template independently.
        """
        universals = []
        fresh_instances = []
        free_variables = set(self.free_variables)
        for univ in self.universals:
            if not univ.used_up(bindings):
                universals.append(univ)
                continue
            var, instance = self._instantiate(univ.variable, univ.body, bindings)
            bindings.register(var, univ.instances)
            universals.append(replace(univ, instances=(var,) + univ.instances))
            fresh_instances.append(instance)
            free_variables.add(var)
        if not fresh_instances:
            return self
        return replace(
            self,
            worklist=tuple(fresh_instances) + self.worklist,
            universals=tuple(universals),
            free_variables=frozenset(free_variables),
        )

    # ── Related worlds ──────────────────────────────────────────────────────

    def subtableaux(self, bindings: Bindings) -> list:
        """
        One fresh tableau for each world implied by the modal obligations.

        Every possibility (A, F) gives a world where F holds along with
        everything A knows. An agent with knowledge but no recorded
        possibility still considers some world possible, and that world
        must be consistent with what the agent knows.
        """
        worlds = [self._world(agent, (fml,), bindings)
                  for agent, fml in self.possibility]

        possible = {bindings.resolve(agent) for agent, _ in self.possibility}
        knowing = {bindings.resolve(agent) for agent, _ in self.necessity}
        for agent in sorted(knowing - possible, key=str):
            worlds.append(self._world(agent, (), bindings))
        return worlds

    def _world(self, agent, seed: tuple, bindings: Bindings) -> "Tableau":
        agent = bindings.resolve(agent)
        known = tuple(fml for other, fml in self.necessity
                      if bindings.resolve(other) == agent)
        axioms = tuple(copy_formula(ax, self.free_variables, bindings.fresh,
                                    bindings.values)
                       for ax in self.axioms)
        return Tableau(
            worklist=seed + known + axioms,
            disequalities=self.disequalities,
            axioms=self.axioms,
            free_variables=self.free_variables,
        )
