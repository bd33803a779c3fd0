"""
Novarc CLI commands: repl, eval, parse.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from novarc.cli.repl import History, console, err_console, execute_line, run_repl
from novarc.core.diagnostics import render_syntax_errors
from novarc.core.environment import (
    get_environment_info,
    get_history_file,
    get_max_depth,
    should_show_ast,
)
from novarc.core.expression_lang import parse_expr
from novarc.core.expression_lang.parser import ExpressionParseError

logger = logging.getLogger(__name__)


def repl_command(
    history: Path | None = typer.Option(
        None, "--history", help="History file (default: $NOVARC_HISTORY_FILE or repl_history.txt)"
    ),
    show_ast: bool | None = typer.Option(
        None, "--show-ast/--no-show-ast", help="Print the parsed AST before each result"
    ),
    max_depth: int | None = typer.Option(
        None, "--max-depth", min=1, help="Maximum nesting of function calls"
    ),
) -> None:
    """Start the interactive evaluator."""
    logger.debug("Environment: %s", get_environment_info())
    run_repl(
        History(get_history_file(history)),
        show_ast=should_show_ast(show_ast),
        max_depth=get_max_depth(max_depth),
    )


def eval_command(
    source: str = typer.Argument(..., help="Expression to evaluate"),
    show_ast: bool | None = typer.Option(
        None, "--show-ast/--no-show-ast", help="Print the parsed AST before the result"
    ),
    max_depth: int | None = typer.Option(
        None, "--max-depth", min=1, help="Maximum nesting of function calls"
    ),
) -> None:
    """Evaluate a single expression and print the result."""
    ok = execute_line(
        source,
        show_ast=should_show_ast(show_ast),
        max_depth=get_max_depth(max_depth),
    )
    if not ok:
        raise typer.Exit(code=1)


def parse_command(
    source: str = typer.Argument(..., help="Expression to parse"),
) -> None:
    """Parse a single expression and print its AST."""
    try:
        expr = parse_expr(source)
    except ExpressionParseError as e:
        for rendered in render_syntax_errors(source, e.diagnostics):
            err_console.print(rendered)
        raise typer.Exit(code=1)

    console.print(str(expr))
