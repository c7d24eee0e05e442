"""Import exercises from workouts exported before the exercise library existed."""
import argparse
import json
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pydantic import ValidationError

from workout_creator.database import SessionLocal
from workout_creator.logging_config import configure_logging
from workout_creator.models.training_method import parse_training_method
from workout_creator.services.exercise_library import ExerciseLibraryStore


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Import legacy inline exercises into the exercise library",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
The input is a JSON list of workouts, each with "intervals", each with
"exercises" entries of the form {"name": ..., "trainingMethod": {...}}.

Examples:
  python scripts/import_legacy_exercises.py exports/workouts.json
        """
    )
    parser.add_argument("path", type=Path, help="JSON export of legacy workouts")
    return parser.parse_args()


def collect_entries(workouts: list[dict]) -> list[tuple]:
    """Flatten workouts into (name, training_method) pairs, skipping unreadable ones."""
    entries = []
    for workout in workouts:
        for interval in workout.get("intervals", []):
            for exercise in interval.get("exercises", []):
                name = (exercise.get("name") or "").strip()
                if not name:
                    continue
                try:
                    method = parse_training_method(exercise["trainingMethod"])
                except (KeyError, ValidationError) as e:
                    print(f"  ⚠️  Skipping '{name}': unreadable training method ({e})")
                    continue
                entries.append((name, method))
    return entries


def main() -> int:
    args = parse_args()
    configure_logging()

    with args.path.open("r", encoding="utf-8") as fh:
        workouts = json.load(fh)

    entries = collect_entries(workouts)
    print(f"Found {len(entries)} exercises in {args.path}")

    db = SessionLocal()
    try:
        store = ExerciseLibraryStore(db, seed_defaults=False)
        imported = store.import_legacy(entries)
        unique = {exercise.id for exercise in imported}
        print(f"✅ Library now references {len(unique)} distinct exercises")
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
