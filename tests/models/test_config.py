"""Tests for environment-driven application configuration."""

import pytest

from promhist.models import Config


class TestConfig:
    """Test Config."""

    @pytest.mark.unit
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test defaults when no environment variables are set."""
        for name in ("LOG_LEVEL", "LOG_FILE", "METRIC_HOST", "METRIC_PORT", "HISTOGRAMS_FILE"):
            monkeypatch.delenv(name, raising=False)

        config = Config.from_env()

        assert config.log_level == "INFO"
        assert config.log_file is None
        assert config.metric_host == "127.0.0.1"
        assert config.metric_port == 8080
        assert config.histograms_file == "histograms.json"

    @pytest.mark.unit
    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test values are read from the environment."""
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("LOG_FILE", "/tmp/promhist.log")
        monkeypatch.setenv("METRIC_HOST", "0.0.0.0")
        monkeypatch.setenv("METRIC_PORT", "9100")
        monkeypatch.setenv("HISTOGRAMS_FILE", "/etc/promhist/histograms.json")

        config = Config.from_env()

        assert config.log_level == "DEBUG"
        assert config.log_file == "/tmp/promhist.log"
        assert config.metric_host == "0.0.0.0"
        assert config.metric_port == 9100
        assert config.histograms_file == "/etc/promhist/histograms.json"
