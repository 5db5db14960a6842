"""Build and release metadata shared by ``setup.py`` and the service entry point."""

from __future__ import annotations

from .version import (
    MIN_PYTHON_VERSION,
    MIN_PYTHON_VERSION_STR,
    PROJECT_VERSION,
    PYTHON_REQUIRES_SPECIFIER,
    VERSION_INFO,
    __version__,
)

__all__ = [
    "MIN_PYTHON_VERSION",
    "MIN_PYTHON_VERSION_STR",
    "PROJECT_VERSION",
    "PYTHON_REQUIRES_SPECIFIER",
    "VERSION_INFO",
    "__version__",
]
