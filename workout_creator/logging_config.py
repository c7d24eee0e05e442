"""Central logging configuration for the workout creator."""
from __future__ import annotations

from logging.config import dictConfig
from pathlib import Path

from pydantic import ValidationError

from workout_creator.config import get_settings

_configured = False

LOG_FILENAME = "workout_creator.log"


def _default_config(log_dir: Path, level: str, debug: bool = False) -> dict:
    """
    Build the ``dictConfig`` payload.

    SQL statements are logged through ``sqlalchemy.engine`` only in debug
    mode; otherwise the engine and Alembic stay at WARNING so library
    searches do not flood the log.
    """
    log_path = log_dir / LOG_FILENAME
    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": fmt,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "level": level,
            },
            "file": {
                "class": "logging.FileHandler",
                "filename": str(log_path),
                "encoding": "utf-8",
                "formatter": "standard",
                "level": "DEBUG" if debug else level,
            },
        },
        "loggers": {
            "sqlalchemy.engine": {"level": "INFO" if debug else "WARNING"},
            "alembic": {"level": "INFO" if debug else "WARNING"},
            "workout_creator": {"level": "DEBUG" if debug else level},
        },
        "root": {
            "level": level,
            "handlers": ["console", "file"],
        },
    }


def configure_logging() -> None:
    """Configure application logging once per process."""

    global _configured
    if _configured:
        return

    try:
        settings = get_settings()
        log_dir = settings.log_dir
        level = settings.log_level
        debug = settings.debug
    except ValidationError:
        # Malformed environment (e.g. a bad LOG_LEVEL) still gets console + file output.
        log_dir = Path("logs")
        level = "INFO"
        debug = False
    log_dir.mkdir(parents=True, exist_ok=True)

    dictConfig(_default_config(log_dir, level, debug))
    _configured = True
