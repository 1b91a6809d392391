"""
Tests for branch state: worklist, literals, universals and related worlds.
"""

from epistemic.core.bindings import Bindings
from epistemic.core.formula import TRUE, Atom, Eq, Not, Forall, Implies
from epistemic.core.tableau import Tableau, Universal
from epistemic.core.terms import is_variable


P, Q = Atom("p"), Atom("q")


class TestWorklist:
    def test_initial_queues_axioms(self):
        tbl = Tableau.initial([P, Q])
        assert tbl.worklist == (P, Q)
        assert tbl.axioms == (P, Q)

    def test_push_pop(self):
        tbl = Tableau().push(Q).push(P)
        fml, rest = tbl.pop()
        assert fml == P
        assert rest.worklist == (Q,)

    def test_pop_empty(self):
        tbl = Tableau()
        assert tbl.pop() == (None, tbl)

    def test_mutators_leave_original_untouched(self):
        tbl = Tableau()
        tbl.push(P).add_true(("p",)).add_necessity("ann", Q)
        assert tbl == Tableau()


class TestLiterals:
    def test_add_literals(self):
        tbl = Tableau().add_true(("p", "a")).add_false(("q",))
        assert tbl.true_literals == (("p", "a"),)
        assert tbl.false_literals == (("q",),)

    def test_disequalities_prepend(self):
        tbl = Tableau().add_disequalities([("X", "a")]).add_disequalities([("Y", "b")])
        assert tbl.disequalities == (("Y", "b"), ("X", "a"))

    def test_empty_disequalities_keep_tableau(self):
        tbl = Tableau()
        assert tbl.add_disequalities(()) is tbl

    def test_with_disequalities_replaces(self):
        tbl = Tableau().add_disequalities([("X", "a")]).with_disequalities(())
        assert tbl.disequalities == ()


class TestUniversals:
    body = Implies(Eq("X", "red"), Atom("hot", ("X",)))

    def test_add_universal_instantiates_fresh_variable(self):
        b = Bindings()
        instance, tbl = Tableau().add_universal("X", self.body, b)
        (univ,) = tbl.universals
        var = univ.instances[0]
        assert is_variable(var) and var != "X"
        assert instance == Implies(Eq(var, "red"), Atom("hot", (var,)))
        assert var in tbl.free_variables
        assert b.families[var] == (var,)

    def test_unbound_instance_is_not_refreshed(self):
        b = Bindings()
        _, tbl = Tableau().add_universal("X", self.body, b)
        assert tbl.refresh_universals(b) is tbl

    def test_bound_instance_is_refreshed(self):
        b = Bindings()
        _, tbl = Tableau().add_universal("X", self.body, b)
        first = tbl.universals[0].instances[0]
        b.apply({first: "red"})

        refreshed = tbl.refresh_universals(b)
        (univ,) = refreshed.universals
        second = univ.instances[0]
        assert univ.instances == (second, first)
        assert refreshed.worklist == (Implies(Eq(second, "red"), Atom("hot", (second,))),)
        assert second in refreshed.free_variables
        assert b.families[second] == (first, second)

    def test_refreshed_instance_cannot_repeat_value(self):
        b = Bindings()
        _, tbl = Tableau().add_universal("X", self.body, b)
        first = tbl.universals[0].instances[0]
        b.apply({first: "red"})
        second = tbl.refresh_universals(b).universals[0].instances[0]
        assert b.apply({second: "red"}) is None
        assert b.apply({second: "blue"}) == ()

    def test_sibling_branches_refresh_independently(self):
        b = Bindings()
        _, tbl = Tableau().add_universal("X", self.body, b)
        first = tbl.universals[0].instances[0]
        b.apply({first: "a"})

        left = tbl.refresh_universals(b).universals[0].instances[0]
        assert b.apply({left: "c"}) == ()

        right = tbl.refresh_universals(b).universals[0].instances[0]
        assert b.families[right] == (first, right)
        assert b.apply({right: "c"}) == ()

    def test_used_up(self):
        b = Bindings()
        univ = Universal("X", P, ("V__1",))
        assert not univ.used_up(b)
        b.apply({"V__1": "a"})
        assert univ.used_up(b)

    def test_free_variables_shared_by_instances(self):
        b = Bindings()
        tbl = Tableau(free_variables=frozenset({"W__7"}))
        instance, _ = tbl.add_universal("X", Atom("p", ("X", "W__7")), b)
        assert instance.args[1] == "W__7"


class TestSubtableaux:
    def test_no_modalities_no_worlds(self):
        assert Tableau().subtableaux(Bindings()) == []

    def test_possibility_world_holds_knowledge(self):
        b = Bindings()
        tbl = (Tableau()
               .add_necessity("ann", P)
               .add_necessity("bob", Q)
               .add_possibility("ann", Not(Q)))
        ann_world, bob_world = tbl.subtableaux(b)
        assert ann_world.worklist == (Not(Q), P)
        assert ann_world.necessity == ()
        assert ann_world.possibility == ()
        assert bob_world.worklist == (Q,)

    def test_seriality_world_for_agent_without_possibility(self):
        b = Bindings()
        tbl = Tableau().add_necessity("bob", Q).add_necessity("ann", P)
        worlds = tbl.subtableaux(b)
        assert [w.worklist for w in worlds] == [(P,), (Q,)]

    def test_possibility_worlds_come_first(self):
        b = Bindings()
        tbl = (Tableau()
               .add_necessity("bob", Q)
               .add_possibility("ann", Not(P)))
        worlds = tbl.subtableaux(b)
        assert [w.worklist for w in worlds] == [(Not(P),), (Q,)]

    def test_agents_compared_after_binding(self):
        b = Bindings()
        b.apply({"A": "ann"})
        tbl = Tableau().add_necessity("A", P).add_possibility("ann", Not(Q))
        (world,) = tbl.subtableaux(b)
        assert world.worklist == (Not(Q), P)

    def test_world_gets_fresh_axiom_copy(self):
        b = Bindings()
        axiom = Forall(("X",), Atom("p", ("X", "Y")))
        tbl = Tableau.initial([axiom]).add_possibility("ann", Not(P))
        (world,) = tbl.subtableaux(b)
        copy = world.worklist[1]
        assert world.axioms == (axiom,)
        assert copy != axiom
        assert copy.body.args[1] != "Y"

    def test_world_inherits_obligations(self):
        b = Bindings()
        tbl = (Tableau(free_variables=frozenset({"V__1"}))
               .add_disequalities([("V__1", "a")])
               .add_true(("p",))
               .add_possibility("ann", TRUE))
        (world,) = tbl.subtableaux(b)
        assert world.disequalities == (("V__1", "a"),)
        assert world.free_variables == frozenset({"V__1"})
        assert world.true_literals == ()
