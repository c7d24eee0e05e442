"""Tests for environment-driven settings."""
import pytest
from pydantic import ValidationError

from workout_creator.config import DEFAULT_EXERCISES_PATH, Settings


class TestSettings:
    def test_library_defaults(self, monkeypatch):
        monkeypatch.delenv("SEED_DEFAULT_EXERCISES", raising=False)
        settings = Settings(_env_file=None)

        assert settings.search_result_limit == 100
        assert settings.autocomplete_limit == 5
        assert settings.recent_limit == 10
        assert settings.seed_default_exercises is True
        assert settings.default_exercises_path == DEFAULT_EXERCISES_PATH
        assert DEFAULT_EXERCISES_PATH.exists()

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SEARCH_RESULT_LIMIT", "25")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)

        assert settings.search_result_limit == 25
        assert settings.log_level == "DEBUG"

    def test_rejects_unknown_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "verbose")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_rejects_non_positive_limit(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, search_result_limit=0)
