"""
Human-readable rendering of Novarc errors.

Syntax diagnostics are shown against the source they came from, with a
gutter and a caret underline under the offending span:

    Error: Unclosed delimiter `(`, expected `)` before end of input
       1 | 1 + (2
         |     ^^

Evaluation errors carry no location and render as a single line.
"""

from __future__ import annotations

from collections.abc import Iterable

from rich.style import Style
from rich.text import Text

from novarc.core.errors import EvalError, SyntaxDiagnostic

STYLES = {
    "error": Style(color="red", bold=True),
    "gutter": Style(color="bright_black"),
    "marker": Style(color="red", bold=True),
}


def locate(source: str, offset: int) -> tuple[int, int]:
    """Convert a character offset into a 1-indexed ``(line, column)``."""
    offset = max(0, min(offset, len(source)))
    line = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


def render_syntax_error(source: str, diagnostic: SyntaxDiagnostic) -> Text:
    """Render one diagnostic with the source line it points into."""
    start, end = diagnostic.span
    line_no, column = locate(source, start)

    lines = source.split("\n")
    line = lines[line_no - 1] if line_no <= len(lines) else ""

    # Underline stops at the end of the line; always at least one caret
    width = max(1, min(end, start + len(line) - column + 1) - start)

    prefix = f"{line_no:4d} | "
    blank = " " * (len(prefix) - 2) + "| "

    text = Text()
    text.append(f"Error: {diagnostic.message}", style=STYLES["error"])
    text.append("\n")
    text.append(prefix, style=STYLES["gutter"])
    text.append(line)
    text.append("\n")
    text.append(blank, style=STYLES["gutter"])
    text.append(" " * (column - 1))
    text.append("^" * width, style=STYLES["marker"])
    return text


def render_syntax_errors(source: str, diagnostics: Iterable[SyntaxDiagnostic]) -> list[Text]:
    return [render_syntax_error(source, d) for d in diagnostics]


def render_eval_error(error: EvalError) -> Text:
    return Text(f"Evaluation error: {error.message}", style=STYLES["error"])
