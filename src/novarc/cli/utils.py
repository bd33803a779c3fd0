"""
Novarc CLI Utilities.

Shared helpers used across CLI modules.
"""

from __future__ import annotations

import logging
import math
import platform
from decimal import Decimal

import typer

from novarc._version import get_version


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"Novarc {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records to stderr; DEBUG when verbose, else WARNING."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logging.getLogger("novarc").setLevel(level)


def format_number(value: float) -> str:
    """Format a result as plain decimal text.

    Integral values print without a fractional part and no value ever
    prints in exponent form: 3, 2.5, -0, 100000000000000000000, 1e-07 as
    0.0000001. Non-finite values print as inf, -inf and NaN.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        # Exact for integral floats, and keeps the sign of -0.0
        return format(Decimal(value), "f")
    return format(Decimal(repr(value)), "f")
