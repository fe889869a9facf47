"""Unit tests for application settings.

This module tests the Pydantic settings classes and their validators.
"""

import pytest
from pydantic import ValidationError

from debtstack_chat.platform.settings import (
    AppHTTPSettings,
    BackendSettings,
    BugsnagSettings,
    ChatSettings,
    SecSettings,
    Settings,
    TwelveDataSettings,
)


class TestAppHTTPSettings:
    """Tests for AppHTTPSettings configuration."""

    def test_default_values(self):
        """Settings should have sensible defaults."""
        settings = AppHTTPSettings()
        assert settings.host == "0.0.0.0"
        assert settings.port == 8000
        assert settings.log_level == "INFO"
        assert settings.log_json is None

    def test_log_level_is_upper_cased(self):
        """Valid log levels are accepted in any case."""
        for level in ["DEBUG", "INFO", "WARNING", "error", "debug"]:
            assert AppHTTPSettings(log_level=level).log_level == level.upper()

    def test_log_level_validation_invalid(self):
        """Invalid log levels should raise ValidationError."""
        with pytest.raises(ValidationError):
            AppHTTPSettings(log_level="LOUD")


class TestBugsnagSettings:
    """Tests for BugsnagSettings configuration."""

    def test_valid_release_stages(self):
        for stage in ["development", "production", "local"]:
            assert BugsnagSettings(api_key="k", release_stage=stage).release_stage == stage

    def test_invalid_release_stage(self):
        with pytest.raises(ValidationError):
            BugsnagSettings(api_key="k", release_stage="staging")

    def test_api_key_required(self):
        with pytest.raises(ValidationError):
            BugsnagSettings()  # type: ignore[call-arg]


class TestChatSettings:
    """Tests for chat loop limits."""

    def test_defaults(self):
        settings = ChatSettings()
        assert settings.max_tool_rounds == 5
        assert settings.max_messages == 50
        assert settings.max_result_items == 20

    def test_rounds_must_be_positive(self):
        with pytest.raises(ValidationError):
            ChatSettings(max_tool_rounds=0)


class TestBackendSettings:
    """Tests for DebtStack API settings."""

    def test_defaults(self):
        settings = BackendSettings()
        assert settings.url == "https://api.debtstack.ai"
        assert settings.timeout_seconds == 15.0
        assert settings.research_timeout_seconds == 45.0

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            BackendSettings(timeout_seconds=0)


class TestSecSettings:
    """Tests for SEC research settings."""

    def test_defaults(self):
        settings = SecSettings()
        assert "DebtStack" in settings.user_agent
        assert settings.ticker_cache_ttl_seconds == 86400
        assert settings.max_section_chars == 100_000


class TestSettings:
    """Tests for the root Settings object."""

    def test_nested_env_vars(self, monkeypatch):
        """Nested settings are read with the __ delimiter."""
        monkeypatch.setenv("BUGSNAG__API_KEY", "env-key")
        monkeypatch.setenv("BUGSNAG__RELEASE_STAGE", "local")
        monkeypatch.setenv("CHAT__MAX_TOOL_ROUNDS", "3")
        monkeypatch.setenv("TWELVE_DATA__API_KEY", "td-key")

        settings = Settings()

        assert settings.bugsnag.api_key == "env-key"
        assert settings.chat.max_tool_rounds == 3
        assert settings.twelve_data.api_key == "td-key"

    def test_only_bugsnag_is_required(self, monkeypatch):
        monkeypatch.delenv("BUGSNAG__API_KEY", raising=False)
        settings = Settings(bugsnag=BugsnagSettings(api_key="k"))
        assert settings.backend == BackendSettings()
        assert settings.twelve_data == TwelveDataSettings()
