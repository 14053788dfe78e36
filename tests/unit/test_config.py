"""Test Settings loading from TOML, overrides and environment."""

import pytest

from protrade_analytics.core.config import Settings, load_settings
from protrade_analytics.core.errors import ConfigError


class TestSettingsDefaults:
    def test_default_settings(self):
        settings = Settings()
        assert settings.observability.log_level == "INFO"
        assert settings.observability.log_format == "json"
        assert settings.profile.min_trades == 5
        assert settings.dashboard.starting_balance == 1000.0

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("PROTRADE_PROFILE__MIN_TRADES", "10")
        assert Settings().profile.min_trades == 10


class TestLoadSettings:
    def test_missing_file_uses_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "absent.toml")
        assert settings.profile.min_trades == 5

    def test_toml_file(self, tmp_path):
        path = tmp_path / "protrade.toml"
        path.write_text('[dashboard]\nstarting_balance = 2500.0\n\n[profile]\nmin_trades = 3\n')
        settings = load_settings(path)
        assert settings.dashboard.starting_balance == 2500.0
        assert settings.profile.min_trades == 3

    def test_overrides_merge_into_file_sections(self, tmp_path):
        path = tmp_path / "protrade.toml"
        path.write_text('[observability]\nlog_level = "DEBUG"\nlog_format = "console"\n')
        settings = load_settings(path, overrides={"observability": {"log_level": "WARNING"}})
        assert settings.observability.log_level == "WARNING"
        assert settings.observability.log_format == "console"

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "broken.toml"
        path.write_text("[profile\nmin_trades = ")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_settings(path)

    def test_invalid_value(self):
        with pytest.raises(ConfigError):
            load_settings(overrides={"profile": {"min_trades": 0}})
