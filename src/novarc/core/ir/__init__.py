"""
Novarc Intermediate Representation (IR) types.

The expression tree produced by the parser and consumed by the evaluator.
"""

from .expressions import (
    BinaryExpr,
    BinaryOp,
    Call,
    Expr,
    Fn,
    Let,
    Neg,
    Num,
    Var,
)

__all__ = [
    "BinaryExpr",
    "BinaryOp",
    "Call",
    "Expr",
    "Fn",
    "Let",
    "Neg",
    "Num",
    "Var",
]
