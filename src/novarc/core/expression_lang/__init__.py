"""
Novarc expression language.

Tokenizer, parser and evaluator for arithmetic with ``let`` bindings and
first-order ``fn`` definitions.

Usage:
    from novarc.core.expression_lang import parse_expr, evaluate

    expr = parse_expr("fn add a b = a + b; add(1, 2)")
    result = evaluate(expr)
    # result == 3.0
"""

from novarc.core.expression_lang.evaluator import evaluate
from novarc.core.expression_lang.parser import ExpressionParseError, parse_expr
from novarc.core.ir.expressions import Expr


def run_source(source: str, *, max_depth: int | None = None) -> float:
    """Parse and evaluate a source line.

    Raises:
        ExpressionParseError: If the source does not parse.
        EvalError: If the parsed expression cannot be evaluated.
    """
    expr: Expr = parse_expr(source)
    return evaluate(expr, max_depth=max_depth)


__all__ = ["ExpressionParseError", "evaluate", "parse_expr", "run_source"]
