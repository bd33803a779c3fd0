"""
Recursive descent parser for the Novarc expression language.

Grammar (precedence low to high):
    declaration → "let" IDENT "=" addition ";" declaration
                | "fn" IDENT IDENT* "=" addition ";" declaration
                | addition
    addition    → multiply (("+"|"-") multiply)*
    multiply    → unary (("*"|"/") unary)*
    unary       → "-"* primary
    primary     → INT | func_call | IDENT | "(" addition ")"
    func_call   → IDENT "(" (addition ("," addition)* ","?)? ")"

``let`` and ``fn`` are reserved and never valid identifiers. Declarations
only appear at the top level, so ``(let x = 1; x)`` is rejected. The whole
input must be consumed.
"""

from __future__ import annotations

import logging

from novarc.core.errors import DiagnosticError, SyntaxDiagnostic
from novarc.core.expression_lang.tokenizer import (
    ExpressionTokenError,
    Token,
    TokenKind,
    tokenize,
)
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

_ADDITIVE_OPS: dict[TokenKind, BinaryOp] = {
    TokenKind.PLUS: BinaryOp.ADD,
    TokenKind.MINUS: BinaryOp.SUB,
}

_MULTIPLICATIVE_OPS: dict[TokenKind, BinaryOp] = {
    TokenKind.STAR: BinaryOp.MUL,
    TokenKind.SLASH: BinaryOp.DIV,
}


class ExpressionParseError(DiagnosticError):
    """Error during expression parsing."""

    @classmethod
    def at(cls, message: str, span: tuple[int, int]) -> ExpressionParseError:
        return cls([SyntaxDiagnostic(message, span)])


class _Parser:
    """Recursive descent parser for expressions."""

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.pos = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def peek(self, offset: int = 0) -> Token:
        idx = self.pos + offset
        if idx < len(self.tokens):
            return self.tokens[idx]
        return self.tokens[-1]  # EOF

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def expect(self, kind: TokenKind, what: str) -> Token:
        tok = self.current
        if tok.kind != kind:
            raise ExpressionParseError.at(f"Expected {what}, found {tok.describe()}", tok.span)
        return self.advance()

    def expect_ident(self, what: str) -> Token:
        tok = self.current
        if tok.kind in (TokenKind.LET, TokenKind.FN):
            raise _keyword_error(tok)
        return self.expect(TokenKind.IDENT, what)

    def expect_close(self, opening: Token) -> Token:
        """Consume the ``)`` matching ``opening``."""
        tok = self.current
        if tok.kind == TokenKind.RPAREN:
            return self.advance()
        if tok.kind == TokenKind.EOF:
            raise ExpressionParseError.at(
                "Unclosed delimiter `(`, expected `)` before end of input",
                (opening.pos, tok.pos),
            )
        raise ExpressionParseError.at(
            f"Expected `)` to close `(` at {opening.pos}, found {tok.describe()}",
            tok.span,
        )

    # -- Grammar rules --

    def parse_declaration(self) -> Expr:
        """let_decl | fn_decl | addition"""
        if self.current.kind == TokenKind.LET:
            return self._parse_let()
        if self.current.kind == TokenKind.FN:
            return self._parse_fn()
        return self.parse_addition()

    def _parse_let(self) -> Let:
        """'let' IDENT '=' addition ';' declaration"""
        self.advance()
        name = self.expect_ident("variable name after `let`")
        self.expect(TokenKind.EQUALS, "`=`")
        rhs = self.parse_addition()
        self.expect(TokenKind.SEMICOLON, "`;`")
        then = self.parse_declaration()
        return Let(name=name.value, rhs=rhs, then=then)

    def _parse_fn(self) -> Fn:
        """'fn' IDENT IDENT* '=' addition ';' declaration"""
        self.advance()
        name = self.expect_ident("function name after `fn`")

        params: list[str] = []
        while self.current.kind in (TokenKind.IDENT, TokenKind.LET, TokenKind.FN):
            params.append(self.expect_ident("parameter name").value)

        self.expect(TokenKind.EQUALS, "parameter name or `=`")
        body = self.parse_addition()
        self.expect(TokenKind.SEMICOLON, "`;`")
        then = self.parse_declaration()
        return Fn(name=name.value, params=tuple(params), body=body, then=then)

    def parse_addition(self) -> Expr:
        """multiply (('+' | '-') multiply)*"""
        left = self.parse_multiply()
        while self.current.kind in _ADDITIVE_OPS:
            op = _ADDITIVE_OPS[self.advance().kind]
            right = self.parse_multiply()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_multiply(self) -> Expr:
        """unary (('*' | '/') unary)*"""
        left = self.parse_unary()
        while self.current.kind in _MULTIPLICATIVE_OPS:
            op = _MULTIPLICATIVE_OPS[self.advance().kind]
            right = self.parse_unary()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_unary(self) -> Expr:
        """'-'* primary"""
        negations = 0
        while self.current.kind == TokenKind.MINUS:
            self.advance()
            negations += 1

        expr = self.parse_primary()
        for _ in range(negations):
            expr = Neg(operand=expr)
        return expr

    def parse_primary(self) -> Expr:
        """INT | func_call | IDENT | '(' addition ')'"""
        tok = self.current

        # Parenthesized expression
        if tok.kind == TokenKind.LPAREN:
            self.advance()
            expr = self.parse_addition()
            self.expect_close(tok)
            return expr

        if tok.kind == TokenKind.INT:
            self.advance()
            return Num(value=float(tok.value))

        # Identifier: could be function call or variable reference
        if tok.kind == TokenKind.IDENT:
            if self.peek(1).kind == TokenKind.LPAREN:
                return self._parse_func_call()
            self.advance()
            return Var(name=tok.value)

        if tok.kind in (TokenKind.LET, TokenKind.FN):
            raise _keyword_error(tok)

        if tok.kind == TokenKind.EOF:
            raise ExpressionParseError.at("Unexpected end of input, expected expression", tok.span)

        raise ExpressionParseError.at(
            f"Unexpected token {tok.describe()}, expected expression",
            tok.span,
        )

    def _parse_func_call(self) -> Call:
        """IDENT '(' (addition (',' addition)* ','?)? ')'"""
        name_tok = self.expect(TokenKind.IDENT, "function name")
        opening = self.expect(TokenKind.LPAREN, "`(`")

        args: list[Expr] = []
        while self.current.kind != TokenKind.RPAREN:
            args.append(self.parse_addition())
            if self.current.kind != TokenKind.COMMA:
                break
            self.advance()

        self.expect_close(opening)
        return Call(name=name_tok.value, args=tuple(args))


def _keyword_error(tok: Token) -> ExpressionParseError:
    return ExpressionParseError.at(
        f"Keyword `{tok.value}` cannot be used as an identifier",
        tok.span,
    )


def parse_expr(source: str) -> Expr:
    """Parse a source line into an AST.

    Args:
        source: Source text (e.g., "let x = 2; fn sq n = n * n; sq(x) + 1")

    Returns:
        Parsed expression AST.

    Raises:
        ExpressionParseError: If the source is invalid. ``diagnostics`` lists
            every error found, each with its span into ``source``.
    """
    try:
        tokens = tokenize(source)
    except ExpressionTokenError as e:
        raise ExpressionParseError(e.diagnostics) from e

    logger.debug("Tokenized %d tokens", len(tokens))

    parser = _Parser(tokens)
    try:
        expr = parser.parse_declaration()
    except RecursionError:
        # Hundreds of nested parentheses
        raise ExpressionParseError.at(
            "Expression nested too deeply", parser.current.span
        ) from None

    # Ensure all tokens consumed
    if parser.current.kind != TokenKind.EOF:
        tok = parser.current
        raise ExpressionParseError.at(
            f"Unexpected token {tok.describe()}, expected end of input",
            tok.span,
        )

    logger.debug("Parsed: %s", expr)
    return expr
