"""
Tests for formula construction, classification, copying and printing.
"""

import pytest

from epistemic.core.formula import (
    TRUE, FALSE, Atom, Eq, Not, And, Or, Implies, Iff, Forall, Exists, Knows,
    is_atom, is_literal, conj, disj, map_terms,
    copy_formula, format_formula,
)
from epistemic.core.terms import is_variable


def p(*args):
    return Atom("p", args)


def q(*args):
    return Atom("q", args)


class TestClassification:
    def test_atoms(self):
        assert is_atom(TRUE)
        assert is_atom(FALSE)
        assert is_atom(p("a"))
        assert is_atom(Eq("X", "red"))

    def test_compound_is_not_atom(self):
        for fml in (Not(p()), And(p(), q()), Or(p(), q()), Implies(p(), q()),
                    Iff(p(), q()), Forall(("X",), p("X")),
                    Exists(("X",), p("X")), Knows("ann", p())):
            assert not is_atom(fml)

    def test_literals(self):
        assert is_literal(p())
        assert is_literal(Not(p()))
        assert is_literal(Not(Eq("a", "b")))
        assert not is_literal(Not(Not(p())))
        assert not is_literal(Not(Knows("ann", p())))

    def test_non_formula_is_not_atom(self):
        assert not is_atom("p")


class TestBuilders:
    def test_conj_is_right_nested(self):
        assert conj(p(), q(), TRUE) == And(p(), And(q(), TRUE))

    def test_disj_is_right_nested(self):
        assert disj(p(), q(), FALSE) == Or(p(), Or(q(), FALSE))

    def test_empty_builders(self):
        assert conj() == TRUE
        assert disj() == FALSE

    def test_single_element(self):
        assert conj(p()) == p()
        assert disj(p()) == p()


class TestAtoms:
    def test_term_round_trip(self):
        atom = Atom("loc", ("X", ("f", "a")))
        assert atom.term == ("loc", "X", ("f", "a"))
        assert Atom.from_term(atom.term) == atom

    def test_formulas_are_hashable_values(self):
        assert {p("a"), p("a")} == {p("a")}
        assert Not(p("a")) == Not(p("a"))
        assert Not(p("a")) != Not(p("b"))


class TestMapTerms:
    def test_map_terms(self):
        fml = And(p("X"), Eq("X", "a"))
        mapped = map_terms(fml, lambda t: "b" if t == "X" else t)
        assert mapped == And(p("b"), Eq("b", "a"))


class TestCopyFormula:
    def fresh(self):
        counter = {"n": 0}

        def make(name):
            counter["n"] += 1
            return f"{name}__{counter['n']}"
        return make

    def test_kept_variables_are_shared(self):
        fml = p("V__1", "Y")
        copy = copy_formula(fml, {"V__1"}, self.fresh())
        assert copy.args[0] == "V__1"
        assert copy.args[1] != "Y"
        assert is_variable(copy.args[1])

    def test_renaming_is_consistent(self):
        fml = And(p("Y"), q("Y"))
        copy = copy_formula(fml, set(), self.fresh())
        assert copy.left.args[0] == copy.right.args[0]

    def test_quantified_variables_get_fresh_names(self):
        fml = Forall(("X",), p("X"))
        copy = copy_formula(fml, set(), self.fresh())
        assert copy.variables != ("X",)
        assert copy.body.args == copy.variables

    def test_shadowing_quantifiers_stay_separate(self):
        fml = Forall(("X",), And(p("X"), Forall(("X",), q("X"))))
        copy = copy_formula(fml, set(), self.fresh())
        outer = copy.variables[0]
        inner = copy.body.right.variables[0]
        assert outer != inner
        assert copy.body.left.args == (outer,)
        assert copy.body.right.body.args == (inner,)

    def test_scope_instantiates_variable(self):
        body = Implies(Eq("X", "red"), Atom("hot", ("X",)))
        copy = copy_formula(body, set(), self.fresh(), scope={"X": "V__9"})
        assert copy == Implies(Eq("V__9", "red"), Atom("hot", ("V__9",)))

    def test_bound_variables_are_copied_by_value(self):
        copy = copy_formula(p("Y"), set(), self.fresh(), bound={"Y": ("f", "a")})
        assert copy == p(("f", "a"))

    def test_constants_unchanged(self):
        fml = Knows("ann", p("red"))
        assert copy_formula(fml, set(), self.fresh()) == fml


class TestFormatFormula:
    @pytest.mark.parametrize("fml, text", [
        (TRUE, "true"),
        (FALSE, "false"),
        (Atom("p"), "p"),
        (Atom("hot", ("red",)), "hot(red)"),
        (Eq("X", ("f", "a")), "X = f(a)"),
        (Not(Eq("red", "blue")), "~red = blue"),
        (Not(Not(Atom("p"))), "~~p"),
        (And(Atom("p"), Or(Atom("q"), Atom("r"))), "p & (q | r)"),
        (Or(And(Atom("p"), Atom("q")), Atom("r")), "p & q | r"),
        (And(And(Atom("p"), Atom("q")), Atom("r")), "(p & q) & r"),
        (And(Atom("p"), And(Atom("q"), Atom("r"))), "p & q & r"),
        (Implies(Implies(Atom("p"), Atom("q")), Atom("r")), "(p => q) => r"),
        (Not(Or(Atom("p"), Atom("q"))), "~(p | q)"),
        (Forall(("X", "Y"), Atom("p", ("X", "Y"))), "all([X, Y], p(X, Y))"),
        (Not(Exists(("X",), Atom("p", ("X",)))), "~ext([X], p(X))"),
        (Knows("ann", Iff(Atom("p"), Atom("q"))), "knows(ann, p <=> q)"),
    ])
    def test_format(self, fml, text):
        assert format_formula(fml) == text
        assert str(fml) == text
