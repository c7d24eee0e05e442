"""Application configuration management."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_EXERCISES_PATH = Path(__file__).resolve().parent / "data" / "default_exercises.yaml"


class Settings(BaseSettings):
    """Centralised application settings derived from environment variables."""

    database_url: str = Field(
        default="sqlite:///./data/workouts.db",
        description="SQLAlchemy-compatible database URL.",
    )
    app_host: str = Field(default="0.0.0.0")
    app_port: int = Field(default=8000, ge=1, le=65535)

    debug: bool = Field(default=False)

    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default=Path("logs"))

    # Exercise library policies
    search_result_limit: int = Field(default=100, ge=1)
    autocomplete_limit: int = Field(default=5, ge=1)
    recent_limit: int = Field(default=10, ge=1)
    seed_default_exercises: bool = Field(default=True)
    default_exercises_path: Path = Field(
        default=DEFAULT_EXERCISES_PATH,
        description="YAML file describing the built-in exercise library.",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        valid = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
        upper = value.upper()
        if upper not in valid:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(sorted(valid))}")
        return upper


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance so it can be reused across the app."""

    settings = Settings()
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    return settings
