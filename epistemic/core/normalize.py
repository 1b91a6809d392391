"""
Single-step rewriting of derived connectives.

The expansion engine calls normalize() on every formula it sees. Each call
performs at most one rewrite toward the primitive set
{literal, negated literal, And, Or, Forall, Knows, ~Knows}; the engine
then expands the result, so the normal form is computed lazily as the
tableau grows.

    ~~X        ->  X
    X => Y     ->  ~X | Y
    X <=> Y    ->  (X & Y) | (~X & ~Y)
    ~(X & Y)   ->  ~X | ~Y
    ~(X | Y)   ->  ~X & ~Y
    ~(X => Y)  ->  X & ~Y
    ~(X <=> Y) ->  (~X | ~Y) & (X | Y)
    ~ext(V, P) ->  all(V, ~P)
"""

from typing import Optional

from .formula import Formula, Not, And, Or, Implies, Iff, Forall, Exists
from ..errors import ExistentialQuantifierError


def normalize(fml: Formula) -> Optional[Formula]:
    """
    Rewrite fml one step, or return None if it is already primitive.

    Raises ExistentialQuantifierError for ext(...) in positive scope and
    for ~all(...), which would need an existential witness.
    """
    if isinstance(fml, Implies):
        return Or(Not(fml.left), fml.right)
    if isinstance(fml, Iff):
        return Or(And(fml.left, fml.right),
                  And(Not(fml.left), Not(fml.right)))
    if isinstance(fml, Exists):
        raise ExistentialQuantifierError(fml)

    if not isinstance(fml, Not):
        return None

    inner = fml.body
    if isinstance(inner, Not):
        return inner.body
    if isinstance(inner, And):
        return Or(Not(inner.left), Not(inner.right))
    if isinstance(inner, Or):
        return And(Not(inner.left), Not(inner.right))
    if isinstance(inner, Implies):
        return And(inner.left, Not(inner.right))
    if isinstance(inner, Iff):
        return And(Or(Not(inner.left), Not(inner.right)),
                   Or(inner.left, inner.right))
    if isinstance(inner, Exists):
        return Forall(inner.variables, Not(inner.body))
    if isinstance(inner, Forall):
        raise ExistentialQuantifierError(fml)
    return None
