from __future__ import annotations

from pathlib import Path

import pytest

from feed_helpers import MOCKS_DIR


@pytest.fixture()
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def mocks_dir() -> Path:
    return MOCKS_DIR


@pytest.fixture()
def articles_bytes() -> bytes:
    return (MOCKS_DIR / "articles.json").read_bytes()


@pytest.fixture()
def ads_bytes() -> bytes:
    return (MOCKS_DIR / "ads.json").read_bytes()
