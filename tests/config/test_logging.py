"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from nullable.config.logging import configure_logging
from nullable.config.settings import NullableSettings
from nullable.zero import zero_value


class NeedsArgs:
    def __init__(self, required: int) -> None:
        self.required = required


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    lib = logging.getLogger("nullable")
    lib_level = lib.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    lib.setLevel(lib_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("nullable").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("nullable").level == logging.WARNING

    def test_reads_settings(self) -> None:
        configure_logging(settings=NullableSettings(verbose=True))
        assert logging.getLogger("nullable").level == logging.DEBUG

    def test_explicit_flag_beats_settings(self) -> None:
        configure_logging(verbose=False, settings=NullableSettings(verbose=True))
        assert logging.getLogger("nullable").level == logging.WARNING

    def test_falls_back_to_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NULLABLE_VERBOSE", "true")
        configure_logging()
        assert logging.getLogger("nullable").level == logging.DEBUG

    def test_human_mode_output(self) -> None:
        configure_logging(verbose=True, log_json=False)
        log = structlog.get_logger("nullable.test")
        log.warning("hello world", key="val")
        # Smoke test — verify no exception; format depends on terminal

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("nullable.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "nullable.test"
        assert "timestamp" in parsed

    def test_library_records_get_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)

        assert zero_value(NeedsArgs) is None

        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "No zero value for NeedsArgs, using None"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "nullable.zero"

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)

        logging.getLogger("sqlalchemy.engine").debug("statement noise")

        captured = capfd.readouterr()
        assert captured.err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        root = logging.getLogger()
        assert len(root.handlers) == 1
