"""
Textual syntax for formulas.

    true, false          truth constants
    p, p(a, f(X))        predicates; uppercase names are variables
    A = B                term equality
    ~F                   negation
    F & G                conjunction
    F | G                disjunction
    F => G               implication
    F <=> G              equivalence
    all([X, Y], F)       universal quantification
    ext([X], F)          existential quantification (negative scope only)
    knows(ann, F)        agent knowledge

Binding strength, tightest first: =, ~, &, |, =>, <=>. Binary
connectives associate to the right. This is the syntax str(formula)
prints, so parse_formula(str(f)) == f.
"""

import re

from .core.formula import (
    TRUE, FALSE, Atom, Eq, Not, And, Or, Implies, Iff, Forall, Exists, Knows,
)
from .core.terms import is_variable
from .errors import FormulaSyntaxError


_TOKEN = re.compile(r"""
    \s*(?:
        (?P<op><=>|=>|[~&|=(),\[\]])
      | (?P<name>[A-Za-z0-9_]+)
    )
""", re.VERBOSE)

_KEYWORDS = {"true", "false", "all", "ext", "knows"}


def _tokenize(text: str) -> list:
    """(kind, value, position) triples, ending with an 'end' token."""
    tokens = []
    pos = 0
    while True:
        while pos < len(text) and text[pos].isspace():
            pos += 1
        if pos >= len(text):
            break
        match = _TOKEN.match(text, pos)
        if match is None:
            raise FormulaSyntaxError("unexpected character", text, pos)
        kind = "op" if match.group("op") else "name"
        value = match.group(kind)
        tokens.append((kind, value, match.start(kind)))
        pos = match.end()
    tokens.append(("end", "", len(text)))
    return tokens


class _Parser:
    """Recursive descent over the token list, one method per precedence level."""

    def __init__(self, text: str):
        self.text = text
        self.tokens = _tokenize(text)
        self.index = 0

    @property
    def current(self):
        return self.tokens[self.index]

    def error(self, message: str):
        raise FormulaSyntaxError(message, self.text, self.current[2])

    def accept(self, value: str) -> bool:
        if self.current[0] == "op" and self.current[1] == value:
            self.index += 1
            return True
        return False

    def expect(self, value: str):
        if not self.accept(value):
            self.error(f"expected {value!r}")

    def name(self) -> str:
        kind, value, _ = self.current
        if kind != "name":
            self.error("expected a name")
        self.index += 1
        return value

    # ── Formulas ────────────────────────────────────────────────────────────

    def formula(self):
        left = self.implication()
        if self.accept("<=>"):
            return Iff(left, self.formula())
        return left

    def implication(self):
        left = self.disjunction()
        if self.accept("=>"):
            return Implies(left, self.implication())
        return left

    def disjunction(self):
        left = self.conjunction()
        if self.accept("|"):
            return Or(left, self.disjunction())
        return left

    def conjunction(self):
        left = self.unary()
        if self.accept("&"):
            return And(left, self.conjunction())
        return left

    def unary(self):
        if self.accept("~"):
            return Not(self.unary())
        return self.primary()

    def primary(self):
        if self.accept("("):
            fml = self.formula()
            self.expect(")")
            return fml

        kind, value, _ = self.current
        if kind == "name" and value in _KEYWORDS and not self._is_equation_ahead():
            return self.keyword()

        lhs = self.term()
        if self.accept("="):
            return Eq(lhs, self.term())
        if is_variable(lhs):
            self.error(f"variable {lhs} used as a formula")
        if isinstance(lhs, tuple):
            return Atom.from_term(lhs)
        return Atom(lhs)

    def _is_equation_ahead(self) -> bool:
        # A keyword spelled as a plain constant, e.g. "true = X".
        following = self.tokens[self.index + 1]
        return following[0] == "op" and following[1] == "="

    def keyword(self):
        word = self.name()
        if word == "true":
            return TRUE
        if word == "false":
            return FALSE
        self.expect("(")
        if word == "knows":
            agent = self.term()
            self.expect(",")
            body = self.formula()
            self.expect(")")
            return Knows(agent, body)
        variables = self.variable_list()
        self.expect(",")
        body = self.formula()
        self.expect(")")
        quantifier = Forall if word == "all" else Exists
        return quantifier(variables, body)

    def variable_list(self) -> tuple:
        self.expect("[")
        variables = []
        if not self.accept("]"):
            while True:
                var = self.name()
                if not is_variable(var):
                    self.index -= 1
                    self.error(f"{var} is not a variable")
                variables.append(var)
                if self.accept("]"):
                    break
                self.expect(",")
        return tuple(variables)

    # ── Terms ───────────────────────────────────────────────────────────────

    def term(self):
        functor = self.name()
        if not self.accept("("):
            return functor
        if is_variable(functor):
            self.index -= 1
            self.error(f"variable {functor} applied to arguments")
        args = [self.term()]
        while self.accept(","):
            args.append(self.term())
        self.expect(")")
        return tuple([functor] + args)


def parse_formula(text: str):
    """Parse a single formula. Raises FormulaSyntaxError on bad input."""
    parser = _Parser(text)
    fml = parser.formula()
    if parser.current[0] != "end":
        parser.error("unexpected input after formula")
    return fml


def parse_formulas(text: str) -> list:
    """
    Parse one formula per line. Blank lines are skipped and % starts a
    comment.
    """
    formulas = []
    for line in text.splitlines():
        line = line.split("%", 1)[0].strip()
        if line:
            formulas.append(parse_formula(line))
    return formulas
