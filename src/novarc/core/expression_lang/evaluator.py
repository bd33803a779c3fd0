"""
Expression evaluator for the Novarc expression language.

Walks an expression AST and computes a float. Pure evaluation: no I/O and
no state outside the scope stacks created for the call.

Scoping is dynamic. A call pushes its parameter bindings on top of the
caller's live variable stack instead of opening an isolated frame, so a
function body can see every variable bound where it was *called*:

    let x = 5; fn f y = x + y; f(1)     # 6

Functions are visible to their own bodies while called from the ``then``
of their ``fn``, which makes recursion work without special casing.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import assert_never

from novarc.core.environment import get_max_depth
from novarc.core.errors import (
    ArityMismatch,
    RecursionLimitExceeded,
    UnboundVariable,
    UndefinedFunction,
)
from novarc.core.expression_lang.scope import FunctionDef, Scope
from novarc.core.ir.expressions import (
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

logger = logging.getLogger(__name__)


@dataclass
class _Context:
    scope: Scope
    max_depth: int
    depth: int = field(default=0)


def evaluate(expr: Expr, *, max_depth: int | None = None, scope: Scope | None = None) -> float:
    """Evaluate an expression.

    Args:
        expr: Parsed expression AST.
        max_depth: Maximum nesting of function calls. Defaults to
            NOVARC_MAX_DEPTH, then 128.
        scope: Empty stacks to evaluate against, for inspecting them
            afterwards. A fresh pair is created when omitted.

    Returns:
        The computed value. Division by zero follows IEEE 754 and yields
        ``inf``, ``-inf`` or ``nan``.

    Raises:
        EvalError: The first unbound variable, undefined function, arity
            mismatch or depth overflow encountered. Running out of Python
            stack is reported as ``RecursionLimitExceeded`` too.
        ValueError: If ``scope`` already holds bindings.
    """
    if scope is None:
        scope = Scope()
    elif len(scope.variables) or len(scope.functions):
        raise ValueError("evaluate() needs an empty scope; bindings never outlive a call")

    ctx = _Context(scope=scope, max_depth=get_max_depth(max_depth))
    try:
        return _interpret(expr, ctx)
    except RecursionError:
        # Deep operator chains with no call in progress
        raise RecursionLimitExceeded(None, ctx.max_depth) from None


def _interpret(expr: Expr, ctx: _Context) -> float:
    """Dispatch evaluation to the appropriate handler."""
    if isinstance(expr, Num):
        return expr.value

    if isinstance(expr, Var):
        return _interpret_var(expr, ctx)

    if isinstance(expr, Neg):
        return -_interpret(expr.operand, ctx)

    if isinstance(expr, BinaryExpr):
        return _interpret_binary(expr, ctx)

    if isinstance(expr, Call):
        return _interpret_call(expr, ctx)

    if isinstance(expr, Let):
        return _interpret_let(expr, ctx)

    if isinstance(expr, Fn):
        return _interpret_fn(expr, ctx)

    assert_never(expr)


def _interpret_var(expr: Var, ctx: _Context) -> float:
    value = ctx.scope.variables.lookup(expr.name)
    if value is None:
        raise UnboundVariable(expr.name)
    return value


def _interpret_binary(expr: BinaryExpr, ctx: _Context) -> float:
    """Evaluate a binary expression, left operand first."""
    left = _interpret(expr.left, ctx)
    right = _interpret(expr.right, ctx)

    if expr.op == BinaryOp.ADD:
        return left + right
    if expr.op == BinaryOp.SUB:
        return left - right
    if expr.op == BinaryOp.MUL:
        return left * right
    if expr.op == BinaryOp.DIV:
        return _divide(left, right)

    assert_never(expr.op)


def _divide(left: float, right: float) -> float:
    """IEEE 754 division: x/0 is a signed infinity and 0/0 is nan."""
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        # Signed zero decides the direction: 1 / -0 is -inf
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def _interpret_let(expr: Let, ctx: _Context) -> float:
    value = _interpret(expr.rhs, ctx)
    with ctx.scope.variables.scoped([(expr.name, value)]):
        return _interpret(expr.then, ctx)


def _interpret_fn(expr: Fn, ctx: _Context) -> float:
    definition = FunctionDef(name=expr.name, params=expr.params, body=expr.body)
    with ctx.scope.functions.scoped([(expr.name, definition)]):
        return _interpret(expr.then, ctx)


def _interpret_call(expr: Call, ctx: _Context) -> float:
    """Call a user-defined function.

    Arguments are evaluated left to right against the caller's stacks
    before any parameter is bound.
    """
    func = ctx.scope.functions.lookup(expr.name)
    if func is None:
        raise UndefinedFunction(expr.name)
    if func.arity != len(expr.args):
        raise ArityMismatch(expr.name, func.arity, len(expr.args))

    values = [_interpret(arg, ctx) for arg in expr.args]

    if ctx.depth >= ctx.max_depth:
        raise RecursionLimitExceeded(expr.name, ctx.max_depth)

    ctx.depth += 1
    logger.debug("Calling %s%s at depth %d", expr.name, tuple(values), ctx.depth)
    try:
        with ctx.scope.variables.scoped(list(zip(func.params, values))):
            return _interpret(func.body, ctx)
    except RecursionError:
        # Python's stack ran out before max_depth calls; the innermost call
        # with room left to build the error reports it
        raise RecursionLimitExceeded(expr.name, ctx.max_depth) from None
    finally:
        ctx.depth -= 1
