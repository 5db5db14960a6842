"""Ensure version and Python compatibility metadata stay in sync across the project."""

from __future__ import annotations

from pathlib import Path

import pytest

import feedmixer
from config.version import (
    PROJECT_VERSION,
    PYTHON_REQUIRES_SPECIFIER,
    VERSION_INFO,
    VersionInfo,
)
from feed_helpers import make_config
from feedmixer.serving import create_app

ROOT_DIR = Path(__file__).resolve().parents[1]


def test_version_file_is_single_source_of_truth() -> None:
    assert (ROOT_DIR / "VERSION").read_text(encoding="utf-8").strip() == PROJECT_VERSION
    assert str(VERSION_INFO) == PROJECT_VERSION

    setup_text = (ROOT_DIR / "setup.py").read_text(encoding="utf-8")
    assert "PYTHON_REQUIRES_SPECIFIER" in setup_text
    assert "PROJECT_VERSION" in setup_text
    assert PYTHON_REQUIRES_SPECIFIER.startswith(">=3.")


@pytest.mark.parametrize("raw", ["1.0", "1.0.0.0", "a.b.c", "1.-1.0"])
def test_malformed_versions_are_rejected(raw: str) -> None:
    with pytest.raises(ValueError):
        VersionInfo.parse(raw)


def test_service_reports_the_project_version() -> None:
    assert feedmixer.__version__ == PROJECT_VERSION
    assert create_app(make_config()).version == PROJECT_VERSION
