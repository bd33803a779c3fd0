"""
Environment configuration for the Novarc runtime.

Settings are read from ``NOVARC_*`` environment variables. Each getter
takes an optional explicit override (typically a CLI option) that wins over
the environment. Malformed values log a warning and fall back to the
default rather than failing.

Environment values:
    - NOVARC_MAX_DEPTH: maximum nesting of function calls (default 128)
    - NOVARC_HISTORY_FILE: REPL history file (default repl_history.txt)
    - NOVARC_SHOW_AST: echo the parsed AST in the REPL (default off)

Usage:
    from novarc.core.environment import get_max_depth

    limit = get_max_depth()        # from NOVARC_MAX_DEPTH or default
    limit = get_max_depth(500)     # explicit override
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

MAX_DEPTH_VAR = "NOVARC_MAX_DEPTH"
HISTORY_FILE_VAR = "NOVARC_HISTORY_FILE"
SHOW_AST_VAR = "NOVARC_SHOW_AST"

DEFAULT_MAX_DEPTH = 128
DEFAULT_HISTORY_FILE = "repl_history.txt"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def get_max_depth(override: int | None = None) -> int:
    """Get the function-call depth ceiling.

    Resolution order:
    1. ``override`` if given
    2. NOVARC_MAX_DEPTH if set to a positive integer
    3. DEFAULT_MAX_DEPTH

    Raises:
        ValueError: If ``override`` is not positive.
    """
    if override is not None:
        if override < 1:
            raise ValueError(f"max depth must be positive, got {override}")
        return override

    raw = os.environ.get(MAX_DEPTH_VAR, "").strip()
    if not raw:
        return DEFAULT_MAX_DEPTH

    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value < 1:
        logger.warning(
            "Invalid %s value '%s'. Expected a positive integer. Defaulting to %d.",
            MAX_DEPTH_VAR,
            raw,
            DEFAULT_MAX_DEPTH,
        )
        return DEFAULT_MAX_DEPTH
    return value


def get_history_file(override: Path | None = None) -> Path:
    """Get the REPL history file path."""
    if override is not None:
        return override
    raw = os.environ.get(HISTORY_FILE_VAR, "").strip()
    return Path(raw) if raw else Path(DEFAULT_HISTORY_FILE)


def should_show_ast(override: bool | None = None) -> bool:
    """Determine if the REPL should print the AST before each result."""
    if override is not None:
        return override

    raw = os.environ.get(SHOW_AST_VAR, "").lower().strip()
    if raw in _TRUTHY:
        return True
    if raw not in _FALSY:
        logger.warning(
            "Unknown %s value '%s'. Valid values: 1, true, yes, on, 0, false, no, off. "
            "Defaulting to off.",
            SHOW_AST_VAR,
            raw,
        )
    return False


def get_environment_info() -> dict[str, str | int | bool]:
    """Summary of the effective configuration, for ``--verbose`` startup logging."""
    return {
        "max_depth": get_max_depth(),
        "history_file": str(get_history_file()),
        "show_ast": should_show_ast(),
    }
