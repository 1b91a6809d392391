"""
Exceptions raised by the prover.

Ordinary proof outcomes (a branch closing, unification failing, a
disequality being violated) are control flow, not errors. Only misuse of
the prover and the internal depth-limit signal are exceptions.
"""


class ProverError(Exception):
    """Base class for everything the prover raises."""


class UsageError(ProverError, ValueError):
    """The caller passed something the prover cannot handle."""


class ExistentialQuantifierError(UsageError):
    """
    An existential quantifier reached the expansion engine in positive scope.

    Existentials must be expanded into finite disjunctions before proving;
    equality-as-unification rules out skolemization.
    """

    def __init__(self, fml):
        self.formula = fml
        super().__init__(f"formula cannot contain existential quantifiers: {fml}")


class FormulaSyntaxError(UsageError):
    """Raised by the parser, with the offending position in the input."""

    def __init__(self, message: str, text: str = "", position: int = 0):
        self.text = text
        self.position = position
        if text:
            message = f"{message} at position {position}: {text[position:position + 20]!r}"
        super().__init__(message)


class DepthLimitExceeded(ProverError):
    """
    A refutation attempt hit its depth budget without a definite answer.

    Raised by refute() and caught by prove(), which retries with a larger
    budget. It does not escape prove().
    """

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"depth limit {limit} exceeded")
