"""
Visualization and reporting utilities.
"""

from .core.formula import Atom, format_formula
from .core.terms import format_term
from .core.tableau import Tableau


def print_tableau(tbl: Tableau, bindings=None):
    """Print every field of a branch state, with current bindings applied."""
    def term(t):
        return format_term(bindings.resolve(t) if bindings is not None else t)

    def literal(atom):
        return format_formula(Atom.from_term(bindings.resolve(atom) if bindings is not None else atom))

    print(f"\n{'='*60}")
    print(f"Worklist ({len(tbl.worklist)}):")
    for fml in tbl.worklist:
        print(f"  {fml}")
    print(f"True literals: {', '.join(literal(a) for a in tbl.true_literals) or '-'}")
    print(f"False literals: {', '.join(literal(a) for a in tbl.false_literals) or '-'}")
    neqs = ", ".join(f"{term(a)} \\= {term(b)}" for a, b in tbl.disequalities)
    print(f"Disequalities: {neqs or '-'}")
    print(f"Necessity ({len(tbl.necessity)}):")
    for agent, fml in tbl.necessity:
        print(f"  [{term(agent)}] {fml}")
    print(f"Possibility ({len(tbl.possibility)}):")
    for agent, fml in tbl.possibility:
        print(f"  <{term(agent)}> {fml}")
    print(f"Universals ({len(tbl.universals)}):")
    for univ in tbl.universals:
        instances = ", ".join(
            f"{var}={term(var)}" if bindings is not None and bindings.is_bound(var) else var
            for var in univ.instances
        )
        print(f"  all([{univ.variable}], {univ.body})  instances: {instances}")
    print(f"{'='*60}")


def print_results(results: dict):
    """Pretty-print suite results against their expected outcomes."""
    print(f"\n{'='*60}")
    print("Suite results")
    print(f"{'='*60}")

    failures = 0
    for label, r in results.items():
        status = "PROVED" if r["proved"] else "NOT PROVED"
        mark = "ok" if r["proved"] == r["expected"] else "UNEXPECTED"
        if r["proved"] != r["expected"]:
            failures += 1
        print(f"  {status:>10s}  {mark:<10s}  {label}: {r['description']}")

    print(f"{'='*60}")
    if failures:
        print(f"  {failures} of {len(results)} outcomes differ from expectations.")
    else:
        print(f"  All {len(results)} outcomes as expected.")
    print(f"{'='*60}")
