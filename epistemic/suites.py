"""
Named problem suites.

Each suite is a dict of problems keyed by label:
    formula:      the formula to prove, in parse_formula syntax
    axioms:       list of axiom formulas                     [optional]
    expected:     True if the formula should be provable
    description:  str

These are the prover's regression problems: propositional basics, nested
knowledge of two agents, and equality under universal instantiation.
"""

from .core.prover import prove
from .parse import parse_formula


PROP_PROBLEMS = {
    "prop-true": {
        "formula": "true",
        "expected": True,
        "description": "truth is a theorem",
    },
    "prop-not-false": {
        "formula": "~false",
        "expected": True,
        "description": "falsehood is refutable",
    },
    "prop-eq-refl": {
        "formula": "red = red",
        "expected": True,
        "description": "identical terms are equal",
    },
    "prop-unique-names": {
        "formula": "~red = blue",
        "expected": True,
        "description": "distinct constants denote distinct individuals",
    },
    "prop-excluded-middle": {
        "formula": "p | ~p",
        "expected": True,
        "description": "excluded middle",
    },
    "prop-contingent": {
        "formula": "p | q",
        "expected": False,
        "description": "a contingent disjunction is not a theorem",
    },
    "prop-axiom": {
        "formula": "p | q",
        "axioms": ["q"],
        "expected": True,
        "description": "an axiom closes the right disjunct",
    },
}


KNOWS_PROBLEMS = {
    "knows-tautology": {
        "formula": "knows(ann, p | ~p)",
        "expected": True,
        "description": "agents know every tautology",
    },
    "knows-contingent": {
        "formula": "knows(ann, p | q)",
        "expected": False,
        "description": "agents do not know contingent facts",
    },
    "knows-contradiction": {
        "formula": "knows(ann, p & ~p)",
        "expected": False,
        "description": "agents do not know contradictions",
    },
    "knows-axiom": {
        "formula": "knows(ann, p | q)",
        "axioms": ["q"],
        "expected": True,
        "description": "axioms hold in every world an agent considers possible",
    },
    "knows-nested-weaken": {
        "formula": "knows(ann, knows(bob, p)) => knows(ann, knows(bob, p | q))",
        "expected": True,
        "description": "nested knowledge is closed under weakening",
    },
    "knows-nested-strengthen": {
        "formula": "knows(ann, knows(bob, p | q)) => knows(ann, knows(bob, p))",
        "expected": False,
        "description": "nested knowledge of a disjunction is not knowledge of a disjunct",
    },
    "knows-nested-axiom": {
        "formula": "knows(ann, knows(bob, p | q))",
        "axioms": ["p | q"],
        "expected": True,
        "description": "axioms hold at every depth of nesting",
    },
    "knows-nested-ground": {
        "formula": "knows(ann, knows(bob, p(c) | ~p(c)))",
        "expected": True,
        "description": "nested knowledge of a ground tautology",
    },
    "knows-witness": {
        "formula": "knows(ann, p(c)) => knows(ann, ext([X], p(X)))",
        "expected": True,
        "description": "knowing an instance is knowing there is a witness",
    },
    "knows-instance": {
        "formula": "knows(ann, all([X], p(X))) => knows(ann, p(c))",
        "expected": True,
        "description": "knowing a universal is knowing each instance",
    },
    "knows-de-re-outer": {
        "formula": "knows(ann, knows(bob, p(x))) => ext([X], knows(ann, knows(bob, p(X))))",
        "expected": True,
        "description": "nested knowledge implies an outer de re witness",
    },
    "knows-de-re-middle": {
        "formula": "knows(ann, knows(bob, p(x))) => knows(ann, ext([X], knows(bob, p(X))))",
        "expected": True,
        "description": "nested knowledge implies a witness inside ann's knowledge",
    },
    "knows-de-dicto": {
        "formula": "knows(ann, knows(bob, p(x))) => knows(ann, knows(bob, ext([X], p(X))))",
        "expected": True,
        "description": "nested knowledge implies a de dicto witness",
    },
}


EQ_PROBLEMS = {
    "eq-instantiate": {
        "formula": "all([X], X = red => hot(X)) => hot(red)",
        "expected": True,
        "description": "universal instantiation through equality",
    },
    "eq-distinct-instance": {
        "formula": "all([X], X = red => hot(X)) => hot(blue)",
        "expected": False,
        "description": "an equality guard rules out other individuals",
    },
}


SUITES = {
    "prop": {
        "problems":    PROP_PROBLEMS,
        "description": "Propositional connectives, truth constants and ground equality",
    },
    "knows": {
        "problems":    KNOWS_PROBLEMS,
        "description": "Knowledge of one and two agents, nested and with axioms",
    },
    "eq": {
        "problems":    EQ_PROBLEMS,
        "description": "Equality as unification under universal instantiation",
    },
}


def run_problem(problem: dict, **prove_kwargs) -> bool:
    """Parse and prove a single problem."""
    formula = parse_formula(problem["formula"])
    axioms = [parse_formula(text) for text in problem.get("axioms", ())]
    return prove(formula, axioms, **prove_kwargs)


def run_suite(name: str, verbose: bool = True, **prove_kwargs) -> dict:
    """
    Run every problem of a suite ("all" for every suite).

    Returns dict: label -> {proved, expected, formula, description}
    """
    names = list(SUITES) if name == "all" else [name]
    results = {}
    for suite_name in names:
        for label, problem in SUITES[suite_name]["problems"].items():
            if verbose:
                print(f"\n[{label}] {problem['formula']}")
            proved = run_problem(problem, verbose=verbose, **prove_kwargs)
            results[label] = {
                "proved": proved,
                "expected": problem["expected"],
                "formula": problem["formula"],
                "description": problem["description"],
            }
    return results
