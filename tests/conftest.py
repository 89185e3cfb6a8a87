"""Shared pytest fixtures for nullable tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from nullable.config.settings import get_settings
from tests.models import metadata


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Drop cached settings and any ``NULLABLE_*`` env vars around each test."""
    for key in ("STRICT_DECODE", "SCAN_PARSE_TEXT", "VERBOSE", "LOG_JSON"):
        monkeypatch.delenv(f"NULLABLE_{key}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def db_engine(tmp_path: Path) -> Generator[Engine]:
    """SQLite engine with the test tables created."""
    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}", echo=False)
    metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()
