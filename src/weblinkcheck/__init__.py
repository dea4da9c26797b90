"""weblinkcheck: verify that web links and their anchors actually exist."""

from __future__ import annotations

from importlib import metadata

from weblinkcheck.checker import check_web
from weblinkcheck.errors import LinkCheckError, Reason

_SOURCE_TREE_VERSION = "0.0.0+unknown"


def _installed_version() -> str:
    # Running from a checkout without `pip install -e .` leaves no metadata
    try:
        return metadata.version("weblinkcheck")
    except metadata.PackageNotFoundError:
        return _SOURCE_TREE_VERSION


__version__ = _installed_version()

__all__ = ["LinkCheckError", "Reason", "check_web", "__version__"]
