"""
Interactive read-eval-print loop.

Each line is parsed and evaluated on its own; bindings made with ``let``
or ``fn`` do not survive to the next line. Line editing and history come
from the standard ``readline`` module where the platform provides it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from rich.console import Console
from rich.text import Text

from novarc._version import get_version
from novarc.cli.utils import format_number
from novarc.core.diagnostics import render_eval_error, render_syntax_errors
from novarc.core.errors import EvalError
from novarc.core.expression_lang import evaluate, parse_expr
from novarc.core.expression_lang.parser import ExpressionParseError

logger = logging.getLogger(__name__)

PROMPT = ">> "

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)


def execute_line(
    line: str,
    *,
    show_ast: bool = False,
    max_depth: int | None = None,
) -> bool:
    """Parse, evaluate and print one line. Returns False if it failed."""
    try:
        expr = parse_expr(line)
    except ExpressionParseError as e:
        for rendered in render_syntax_errors(line, e.diagnostics):
            err_console.print(rendered)
        return False

    if show_ast:
        console.print(Text(f"AST: {expr}"))

    try:
        result = evaluate(expr, max_depth=max_depth)
    except EvalError as e:
        err_console.print(render_eval_error(e))
        return False

    console.print(format_number(result))
    return True


class History:
    """Line history backed by ``readline``, persisted to a file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        try:
            import readline
        except ImportError:
            logger.debug("readline unavailable; history disabled")
            self._readline = None
        else:
            self._readline = readline

    def load(self) -> None:
        if self._readline is None or not self.path.exists():
            return
        try:
            self._readline.read_history_file(str(self.path))
        except OSError as e:
            logger.warning("Could not read history file %s: %s", self.path, e)

    def add(self, line: str) -> None:
        if self._readline is not None:
            self._readline.add_history(line)

    def save(self) -> None:
        if self._readline is None:
            return
        try:
            self._readline.write_history_file(str(self.path))
        except OSError as e:
            logger.warning("Could not write history file %s: %s", self.path, e)


def run_repl(
    history: History,
    *,
    show_ast: bool = False,
    max_depth: int | None = None,
    read_line: Callable[[str], str] = input,
) -> None:
    """Loop until end of input or Ctrl-C at the prompt, then save history.

    Ctrl-C during a long evaluation abandons that line only.
    """
    console.print(f"Novarc {get_version()} ready.")
    history.load()
    try:
        while True:
            try:
                line = read_line(PROMPT)
            except (EOFError, KeyboardInterrupt):
                break
            if not line.strip():
                continue
            history.add(line)
            try:
                execute_line(line, show_ast=show_ast, max_depth=max_depth)
            except KeyboardInterrupt:
                err_console.print("Interrupted")
    finally:
        history.save()
