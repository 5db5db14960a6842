"""Project-level versioning and compatibility metadata for FeedMixer."""

from __future__ import annotations

from importlib import metadata
from pathlib import Path
from typing import Final, NamedTuple, Tuple

MIN_PYTHON_VERSION: Final[Tuple[int, int]] = (3, 10)
MIN_PYTHON_VERSION_STR: Final[str] = ".".join(str(part) for part in MIN_PYTHON_VERSION)
PYTHON_REQUIRES_SPECIFIER: Final[str] = f">={MIN_PYTHON_VERSION_STR}"


class VersionInfo(NamedTuple):
    """Semantic version triple parsed from the ``VERSION`` file."""

    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, raw: str) -> "VersionInfo":
        parts = raw.strip().split(".")
        if len(parts) != 3:
            raise ValueError(f"version must have three components, got {raw!r}")
        values = tuple(int(part) for part in parts)
        for name, value in zip(cls._fields, values):
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        return cls(*values)

    def __str__(self) -> str:  # pragma: no cover - simple formatting helper
        return f"{self.major}.{self.minor}.{self.patch}"


_VERSION_FILE = Path(__file__).resolve().parent.parent / "VERSION"
try:
    _RAW_VERSION = _VERSION_FILE.read_text(encoding="utf-8")
except FileNotFoundError:  # pragma: no cover - installed without the source tree
    _RAW_VERSION = metadata.version("feedmixer")
PROJECT_VERSION: Final[str] = _RAW_VERSION.strip()
VERSION_INFO: Final[VersionInfo] = VersionInfo.parse(PROJECT_VERSION)
__version__: Final[str] = PROJECT_VERSION

__all__ = [
    "MIN_PYTHON_VERSION",
    "MIN_PYTHON_VERSION_STR",
    "PYTHON_REQUIRES_SPECIFIER",
    "PROJECT_VERSION",
    "VERSION_INFO",
    "VersionInfo",
    "__version__",
]
