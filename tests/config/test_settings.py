"""Tests for NullableSettings and the cached settings accessor."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from nullable.config.settings import NullableSettings, get_settings


class TestNullableSettings:
    def test_defaults(self) -> None:
        settings = NullableSettings()
        assert settings.strict_decode is True
        assert settings.scan_parse_text is True
        assert settings.verbose is False
        assert settings.log_json is False

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NULLABLE_STRICT_DECODE", "false")
        monkeypatch.setenv("NULLABLE_LOG_JSON", "1")
        settings = NullableSettings()
        assert settings.strict_decode is False
        assert settings.log_json is True

    def test_init_kwargs_beat_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NULLABLE_VERBOSE", "true")
        assert NullableSettings(verbose=False).verbose is False

    def test_frozen(self) -> None:
        settings = NullableSettings()
        with pytest.raises(ValidationError):
            settings.verbose = True  # type: ignore[misc]


class TestGetSettings:
    def test_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_cache_clear_rereads_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert get_settings().scan_parse_text is True
        monkeypatch.setenv("NULLABLE_SCAN_PARSE_TEXT", "false")
        assert get_settings().scan_parse_text is True
        get_settings.cache_clear()
        assert get_settings().scan_parse_text is False
