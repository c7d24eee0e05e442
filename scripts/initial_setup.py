"""Create the database schema and seed the default exercise library."""
from pathlib import Path

from workout_creator.config import get_settings
from workout_creator.database import SessionLocal, run_migrations
from workout_creator.logging_config import configure_logging
from workout_creator.services.exercise_library import seed_default_exercises


def main() -> None:
    configure_logging()
    data_dir = Path("data")
    data_dir.mkdir(exist_ok=True)
    run_migrations()
    settings = get_settings()
    inserted = seed_default_exercises(SessionLocal, settings.default_exercises_path)
    print("Database initialised at", data_dir, f"({inserted} default exercises added)")


if __name__ == "__main__":
    main()
