"""
CLI entry point. Run as: python -m epistemic "<formula>" [--axiom "<formula>" ...]
"""

import argparse
import sys

from .core.prover import prove, INITIAL_DEPTH, DEPTH_STEP
from .errors import UsageError
from .parse import parse_formula, parse_formulas
from .suites import SUITES, run_suite
from .visualization import print_results


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Tableau prover for multi-agent epistemic first-order logic",
    )
    parser.add_argument("formula", nargs="?", default=None,
                        help="Formula to prove, e.g. \"knows(ann, p | ~p)\"")
    parser.add_argument("--axiom", action="append", default=[],
                        help="Axiom true at every world (repeatable)")
    parser.add_argument("--axioms-file", type=str, default=None,
                        help="File with one axiom per line; %% starts a comment")
    parser.add_argument("--suite", choices=list(SUITES.keys()) + ["all"], default=None,
                        help="Run a named problem suite instead of a single formula")
    parser.add_argument("--initial-depth", type=int, default=INITIAL_DEPTH,
                        help=f"Depth budget of the first attempt (default {INITIAL_DEPTH})")
    parser.add_argument("--depth-step", type=int, default=DEPTH_STEP,
                        help=f"Budget increase per retry (default {DEPTH_STEP})")
    parser.add_argument("--max-depth", type=int, default=None,
                        help="Give up beyond this budget (default: never)")
    parser.add_argument("--quiet", action="store_true", help="Less output")
    args = parser.parse_args(argv)

    prove_kwargs = {
        "initial_depth": args.initial_depth,
        "depth_step": args.depth_step,
        "max_depth": args.max_depth,
    }

    if args.suite:
        results = run_suite(args.suite, verbose=not args.quiet, **prove_kwargs)
        print_results(results)
        return 0 if all(r["proved"] == r["expected"] for r in results.values()) else 1

    if args.formula is None:
        parser.error("a formula or --suite is required")

    try:
        formula = parse_formula(args.formula)
        axioms = [parse_formula(text) for text in args.axiom]
        if args.axioms_file:
            with open(args.axioms_file) as f:
                axioms.extend(parse_formulas(f.read()))
        proved = prove(formula, axioms, verbose=not args.quiet, **prove_kwargs)
    except UsageError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130

    print("PROVED" if proved else "NOT PROVED")
    return 0 if proved else 1


if __name__ == "__main__":
    sys.exit(main())
