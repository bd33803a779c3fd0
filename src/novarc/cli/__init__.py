"""
Novarc CLI Package.

- commands.py: repl, eval and parse commands
- repl.py: interactive loop and line execution
- utils.py: Shared utilities
"""

from __future__ import annotations

import typer

from novarc.cli.commands import eval_command, parse_command, repl_command
from novarc.cli.utils import configure_logging, version_callback

app = typer.Typer(
    help="""Novarc – interactive evaluator for let/fn arithmetic

Examples:
  novarc repl
  novarc eval "let x = 5; fn f y = x + y; f(1)"
  novarc parse "1 + 2 * 3"
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable debug logging"),
) -> None:
    """Novarc CLI main callback for global options."""
    configure_logging(verbose)


app.command(name="repl")(repl_command)
app.command(name="eval")(eval_command)
app.command(name="parse")(parse_command)


def main() -> None:
    app(standalone_mode=True)


__all__ = ["app", "main"]
