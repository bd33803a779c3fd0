"""Core Novarc functionality: IR, tokenizer, parser, evaluator, diagnostics, configuration."""

from . import ir
from .errors import (
    ArityMismatch,
    DiagnosticError,
    EvalError,
    NovarcError,
    RecursionLimitExceeded,
    SyntaxDiagnostic,
    UnboundVariable,
    UndefinedFunction,
)
from .expression_lang import ExpressionParseError, evaluate, parse_expr, run_source

__all__ = [
    "ir",
    "NovarcError",
    "DiagnosticError",
    "SyntaxDiagnostic",
    "EvalError",
    "UnboundVariable",
    "UndefinedFunction",
    "ArityMismatch",
    "RecursionLimitExceeded",
    "ExpressionParseError",
    "evaluate",
    "parse_expr",
    "run_source",
]
