"""
Novarc - an interactive evaluator for a small expression language.

Arithmetic, sequential ``let`` bindings and first-order ``fn`` definitions,
parsed into a typed tree and evaluated under dynamic scoping.
"""

from __future__ import annotations

from ._version import get_version

# Re-export commonly used types for convenience
from .core import ir
from .core.errors import (
    ArityMismatch,
    EvalError,
    NovarcError,
    RecursionLimitExceeded,
    SyntaxDiagnostic,
    UnboundVariable,
    UndefinedFunction,
)
from .core.expression_lang import ExpressionParseError, evaluate, parse_expr, run_source

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "NovarcError",
    "SyntaxDiagnostic",
    "ExpressionParseError",
    "EvalError",
    "UnboundVariable",
    "UndefinedFunction",
    "ArityMismatch",
    "RecursionLimitExceeded",
    "evaluate",
    "parse_expr",
    "run_source",
]
