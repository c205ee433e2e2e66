"""Tests for environment-driven settings."""

from pathlib import Path

import pytest

from nextscope.config import DEFAULT_BATCH_SIZE, Settings


class TestSettingsFromEnv:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.delenv("NEXTSCOPE_TIMEOUT", raising=False)
        monkeypatch.delenv("NEXTSCOPE_BATCH_SIZE", raising=False)
        monkeypatch.setenv("NEXTSCOPE_PROJECT_PATH", str(tmp_path))

        settings = Settings.from_env()

        assert settings.project_path == tmp_path.resolve()
        assert settings.timeout is None
        assert settings.batch_size == DEFAULT_BATCH_SIZE

    def test_numeric_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NEXTSCOPE_TIMEOUT", "2.5")
        monkeypatch.setenv("NEXTSCOPE_BATCH_SIZE", "0")

        settings = Settings.from_env()

        assert settings.timeout == 2.5
        assert settings.batch_size == 1

    def test_non_positive_timeout_means_unlimited(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NEXTSCOPE_TIMEOUT", "0")
        assert Settings.from_env().timeout is None

    def test_malformed_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NEXTSCOPE_BATCH_SIZE", "many")
        with pytest.raises(ValueError, match="NEXTSCOPE_BATCH_SIZE must be an integer"):
            Settings.from_env()
