"""
Property-based tests using Hypothesis.

These tests verify invariants of the parser and evaluator across
generated arithmetic trees and arbitrary text.
"""

from __future__ import annotations

import math

from hypothesis import given, settings
from hypothesis import strategies as st

from novarc.core.errors import EvalError
from novarc.core.expression_lang import run_source
from novarc.core.expression_lang.evaluator import evaluate
from novarc.core.expression_lang.parser import ExpressionParseError, parse_expr
from novarc.core.ir.expressions import BinaryExpr, BinaryOp, Expr, Neg, Num

# =============================================================================
# Strategies
# =============================================================================

numbers = st.integers(min_value=0, max_value=10**6).map(lambda n: Num(value=float(n)))

arithmetic_trees = st.recursive(
    numbers,
    lambda children: st.one_of(
        children.map(lambda operand: Neg(operand=operand)),
        st.builds(
            lambda op, left, right: BinaryExpr(op=op, left=left, right=right),
            st.sampled_from(list(BinaryOp)),
            children,
            children,
        ),
    ),
    max_leaves=25,
)

# Characters the tokenizer knows, plus a few it rejects
source_text = st.text(
    alphabet=st.sampled_from("0123456789 abfnletxy+-*/(),=;_.$"),
    min_size=0,
    max_size=60,
)


def _reference(expr: Expr) -> float:
    """Fold an arithmetic tree with plain float operations."""
    if isinstance(expr, Num):
        return expr.value
    if isinstance(expr, Neg):
        return -_reference(expr.operand)
    assert isinstance(expr, BinaryExpr)
    left = _reference(expr.left)
    right = _reference(expr.right)
    if expr.op == BinaryOp.ADD:
        return left + right
    if expr.op == BinaryOp.SUB:
        return left - right
    if expr.op == BinaryOp.MUL:
        return left * right
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def _same_float(a: float, b: float) -> bool:
    if math.isnan(a) or math.isnan(b):
        return math.isnan(a) and math.isnan(b)
    return a == b


# =============================================================================
# Arithmetic Properties
# =============================================================================


class TestArithmeticProperties:
    """Evaluating printed arithmetic agrees with float arithmetic."""

    @given(arithmetic_trees)
    @settings(max_examples=200)
    def test_evaluate_matches_float_arithmetic(self, tree: Expr) -> None:
        """Invariant: evaluate(parse(str(tree))) equals a direct float fold of tree."""
        result = evaluate(parse_expr(str(tree)))
        assert _same_float(result, _reference(tree))

    @given(arithmetic_trees)
    @settings(max_examples=100)
    def test_printed_tree_parses_back(self, tree: Expr) -> None:
        """Invariant: the printed form of a tree parses to the same tree."""
        assert parse_expr(str(tree)) == tree

    @given(st.integers(min_value=0, max_value=1000), st.integers(min_value=0, max_value=1000))
    @settings(max_examples=100)
    def test_multiplication_binds_tighter(self, a: int, b: int) -> None:
        """Invariant: a + b * 2 groups the product first."""
        assert run_source(f"{a} + {b} * 2") == a + b * 2


# =============================================================================
# Robustness Properties
# =============================================================================


class TestParserProperties:
    """The parser and evaluator fail only through their own error types."""

    @given(st.text(min_size=0, max_size=500))
    @settings(max_examples=200)
    def test_parse_never_crashes_on_arbitrary_input(self, text: str) -> None:
        """Invariant: parse_expr never crashes, only raises ExpressionParseError."""
        try:
            parse_expr(text)
        except ExpressionParseError as e:
            assert e.diagnostics  # Always at least one located diagnostic

    @given(source_text)
    @settings(max_examples=300)
    def test_run_never_crashes_on_near_valid_input(self, text: str) -> None:
        """Invariant: run_source only raises ExpressionParseError or EvalError."""
        try:
            run_source(text)
        except (ExpressionParseError, EvalError):
            pass  # Expected for invalid or unevaluable input

    @given(st.integers(min_value=1, max_value=1500))
    @settings(max_examples=30)
    def test_nesting_depth_never_crashes(self, depth: int) -> None:
        """Invariant: nested parentheses either evaluate to 1 or are a syntax error."""
        try:
            assert run_source("(" * depth + "1" + ")" * depth) == 1.0
        except ExpressionParseError as e:
            assert e.diagnostics[0].message == "Expression nested too deeply"
