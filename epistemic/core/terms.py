"""
Terms and Robinson unification with occurs check.

Equality in this prover is unification: under the rigid-term and
unique-names assumptions, two terms denote the same individual exactly
when they can be made syntactically identical.

Terms:
    str starting with uppercase -> variable:  "X", "Foo", "X__3"
    any other str               -> constant:  "red", "ann", "0"
    tuple                       -> compound:  ("f", "a"), ("loc", "X", "Y")

Substitutions are plain dicts from variables to terms. A bound value may
itself mention bound variables: {"X__1": ("f", "Y__2"), "Y__2": "red"}.
Every function here looks through such chains, and the occurs check
keeps them finite.
"""


def is_variable(term) -> bool:
    """Variables start with uppercase. Everything else is a constant or compound."""
    return isinstance(term, str) and len(term) > 0 and term[0].isupper()


def is_function(term) -> bool:
    """Compound terms are tuples: (name, arg1, arg2, ...)."""
    return isinstance(term, tuple)


def walk(term, sub):
    """Follow bindings at the top of term until an unbound variable or non-variable."""
    while is_variable(term) and term in sub:
        term = sub[term]
    return term


def occurs_in(var, term, sub=None) -> bool:
    """Does var occur in term once the bindings in sub are followed?"""
    if sub is None:
        sub = {}
    pending = [term]
    while pending:
        t = walk(pending.pop(), sub)
        if t == var:
            return True
        if is_function(t):
            pending.extend(t[1:])
    return False


def apply_substitution(sub, term):
    """The term with every bound variable replaced by its value, all the way down."""
    term = walk(term, sub)
    if is_function(term):
        return (term[0],) + tuple(apply_substitution(sub, arg) for arg in term[1:])
    return term


def unify_terms(t1, t2, sub=None):
    """
    Unify two terms under substitution sub.

    Returns an extended copy of sub, or None if the terms cannot be
    unified. The input substitution is never mutated.
    """
    sub = dict(sub) if sub else {}
    pending = [(t1, t2)]
    while pending:
        a, b = pending.pop()
        a, b = walk(a, sub), walk(b, sub)
        if a == b:
            continue
        if is_variable(b) and not is_variable(a):
            a, b = b, a
        if is_variable(a):
            if occurs_in(a, b, sub):
                return None
            sub[a] = b
            continue
        if not (is_function(a) and is_function(b)):
            return None
        if a[0] != b[0] or len(a) != len(b):
            return None
        pending.extend(zip(a[1:], b[1:]))
    return sub


def unifier(t1, t2, bound=None):
    """
    The bindings needed, on top of `bound`, to make t1 and t2 identical.

    Returns a dict of new bindings ({} when the terms are already
    identical), or None if the terms cannot be unified. Nothing in
    `bound` is modified.
    """
    if bound is None:
        bound = {}
    sub = unify_terms(t1, t2, bound)
    if sub is None:
        return None
    return {var: value for var, value in sub.items() if var not in bound}


def format_term(term) -> str:
    """Render a term in the textual syntax: f(a, X)."""
    if is_function(term):
        if len(term) == 1:
            return str(term[0])
        args = ", ".join(format_term(arg) for arg in term[1:])
        return f"{term[0]}({args})"
    return str(term)
