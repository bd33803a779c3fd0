"""Installed version of the novarc distribution."""

from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION = "novarc"


def get_version() -> str:
    """Return the installed version, or 0.0.0 when running from an uninstalled tree."""
    try:
        return version(DISTRIBUTION)
    except PackageNotFoundError:
        return "0.0.0"
