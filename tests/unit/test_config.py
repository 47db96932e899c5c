"""Tests for pydantic-settings configuration."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from highlightcode.config import DEFAULT_STORE_KEY, Settings, get_settings


class TestDefaults:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.store.url.startswith("sqlite+aiosqlite://")
        assert settings.store.key == DEFAULT_STORE_KEY
        assert settings.markers.default_language == "plaintext"
        assert settings.markers.indent_markers is True
        assert settings.app.log_level == "INFO"


class TestEnvironment:
    """Nested fields are read from ``SECTION__FIELD`` variables."""

    def test_nested_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STORE__KEY", "team.bookmarks")
        monkeypatch.setenv("MARKERS__INDENT_MARKERS", "false")

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.store.key == "team.bookmarks"
        assert settings.markers.indent_markers is False

    def test_blank_key_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STORE__KEY", "   ")

        with pytest.raises(ValidationError, match="must not be blank"):
            Settings(_env_file=None)  # type: ignore[call-arg]

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_cache_clear_rereads_environment(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        first = get_settings()
        monkeypatch.setenv("APP__LOG_LEVEL", "DEBUG")
        get_settings.cache_clear()

        assert get_settings() is not first
        assert get_settings().app.log_level == "DEBUG"
