"""
Expression tree for the Novarc language.

Every source line parses into exactly one ``Expr``:

- Literals: 42
- Variable references: x
- Arithmetic: -a, a + b, a - b, a * b, a / b
- Function calls: f(1, 2)
- Variable bindings: let x = 1; x + 1
- Function definitions: fn add a b = a + b; add(1, 2)

Nodes are frozen pydantic models. The tree is finite, acyclic and each node
owns its children; ``let`` and ``fn`` always carry the expression they scope
over in ``then``.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary arithmetic operators."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Num(BaseModel):
    """A numeric literal. Source literals are integers, stored as floats."""

    value: float = Field(description="The literal value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if self.value.is_integer():
            return str(int(self.value))
        return repr(self.value)


class Var(BaseModel):
    """Reference to a bound variable."""

    name: str = Field(description="Variable name")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.name


class Neg(BaseModel):
    """Arithmetic negation: -operand."""

    operand: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"-{self.operand}"


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    op: BinaryOp
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.left} {self.op.value} {self.right})"


class Call(BaseModel):
    """Function call: name(arg1, arg2, ...)."""

    name: str = Field(description="Function name")
    args: tuple[Expr, ...] = Field(default=(), description="Arguments, in call order")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        args_str = ", ".join(str(a) for a in self.args)
        return f"{self.name}({args_str})"


class Let(BaseModel):
    """
    Variable binding: let name = rhs; then.

    ``name`` is visible only while evaluating ``then``.
    """

    name: str = Field(description="Bound variable name")
    rhs: Expr = Field(description="Value bound to the name")
    then: Expr = Field(description="Expression evaluated with the binding in scope")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"let {self.name} = {self.rhs}; {self.then}"


class Fn(BaseModel):
    """
    Function definition: fn name params... = body; then.

    The function is callable from ``then``, and from its own body while it
    is being called from there.
    """

    name: str = Field(description="Function name")
    params: tuple[str, ...] = Field(default=(), description="Parameter names")
    body: Expr = Field(description="Function body")
    then: Expr = Field(description="Expression evaluated with the function in scope")

    model_config = ConfigDict(frozen=True)

    @property
    def arity(self) -> int:
        return len(self.params)

    def __str__(self) -> str:
        head = " ".join((self.name, *self.params))
        return f"fn {head} = {self.body}; {self.then}"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Num | Var | Neg | BinaryExpr | Call | Let | Fn

# Rebuild models for recursive forward references
Neg.model_rebuild()
BinaryExpr.model_rebuild()
Call.model_rebuild()
Let.model_rebuild()
Fn.model_rebuild()
