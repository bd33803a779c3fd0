"""
Error types for Novarc parsing and evaluation.

Two families that never mix:

- Syntax errors come from the tokenizer and parser. They carry one or more
  ``SyntaxDiagnostic`` entries, each pointing at a span of the source line.
- Evaluation errors come from the evaluator. Exactly one is raised and it
  ends evaluation of the whole expression.
"""

from __future__ import annotations

from dataclasses import dataclass


class NovarcError(Exception):
    """Base exception for all Novarc errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class SyntaxDiagnostic:
    """
    A single syntax error with its location in the source.

    Attributes:
        message: Human-readable description
        span: Half-open ``(start, end)`` character offsets into the source.
            ``start == end == len(source)`` marks end of input.
    """

    message: str
    span: tuple[int, int]

    @property
    def start(self) -> int:
        return self.span[0]

    @property
    def end(self) -> int:
        return self.span[1]

    def __str__(self) -> str:
        return f"{self.start}..{self.end}: {self.message}"


class DiagnosticError(NovarcError):
    """Base for errors that carry a list of syntax diagnostics."""

    def __init__(self, diagnostics: list[SyntaxDiagnostic]):
        if not diagnostics:
            raise ValueError("at least one diagnostic is required")
        self.diagnostics = list(diagnostics)
        super().__init__("; ".join(d.message for d in self.diagnostics))

    @property
    def pos(self) -> int:
        """Start offset of the first diagnostic."""
        return self.diagnostics[0].start


# ---------------------------------------------------------------------------
# Evaluation errors
# ---------------------------------------------------------------------------


class EvalError(NovarcError):
    """
    Raised when a well-formed expression cannot be evaluated.

    Subclasses carry the offending names and counts as attributes and
    compare equal by class and data.
    """

    def _key(self) -> tuple[object, ...]:
        return (self.message,)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        assert isinstance(other, EvalError)
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash((type(self), self._key()))

    def __repr__(self) -> str:
        args = ", ".join(repr(v) for v in self._key())
        return f"{type(self).__name__}({args})"


class UnboundVariable(EvalError):
    """A variable reference with no binding in scope."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Cannot find variable `{name}` in scope")

    def _key(self) -> tuple[object, ...]:
        return (self.name,)


class UndefinedFunction(EvalError):
    """A call to a function with no definition in scope."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Cannot find function `{name}` in scope")

    def _key(self) -> tuple[object, ...]:
        return (self.name,)


class ArityMismatch(EvalError):
    """A call whose argument count differs from the function's parameter count."""

    def __init__(self, name: str, expected: int, found: int):
        self.name = name
        self.expected = expected
        self.found = found
        super().__init__(
            f"Wrong number of arguments for function `{name}`: "
            f"expected {expected}, found {found}"
        )

    def _key(self) -> tuple[object, ...]:
        return (self.name, self.expected, self.found)


class RecursionLimitExceeded(EvalError):
    """Function calls nested deeper than the configured ceiling."""

    def __init__(self, name: str | None, limit: int):
        self.name = name
        self.limit = limit
        if name is None:
            # Nesting outside any call, e.g. a very long chain of operators
            super().__init__(f"Expression nested too deeply to evaluate (limit {limit})")
        else:
            super().__init__(
                f"Recursion limit of {limit} exceeded while calling function `{name}`"
            )

    def _key(self) -> tuple[object, ...]:
        return (self.name, self.limit)
