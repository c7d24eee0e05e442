"""Tests for the one-time default exercise seed."""
import logging

import pytest

from workout_creator.config import DEFAULT_EXERCISES_PATH, Settings
from workout_creator.models.database_models import Exercise
from workout_creator.models.taxonomy import Equipment, ExerciseCategory, MuscleGroup
from workout_creator.models.training_method import StandardMethod, TimedMethod
from workout_creator.services.exercise_library import (
    ExerciseLibraryStore,
    load_default_exercises,
    seed_default_exercises,
)


class TestDefaultExerciseFile:
    """The bundled YAML seed file."""

    def test_loads_all_defaults(self):
        exercises = load_default_exercises(DEFAULT_EXERCISES_PATH)

        assert len(exercises) == 14
        assert all(exercise.is_custom is False for exercise in exercises)
        assert len({exercise.name for exercise in exercises}) == 14

    def test_entry_details(self):
        by_name = {exercise.name: exercise for exercise in load_default_exercises(DEFAULT_EXERCISES_PATH)}

        push_ups = by_name["Push-ups"]
        assert push_ups.category == ExerciseCategory.CHEST
        assert push_ups.equipment_tags == [Equipment.BODYWEIGHT]
        assert MuscleGroup.CHEST.value in push_ups.primary_muscles
        assert push_ups.training_method == StandardMethod(min_reps=10, max_reps=15)
        assert "triceps" in push_ups.search_text

        assert by_name["Plank"].training_method == TimedMethod(seconds=60)


class TestSeedDefaultExercises:
    """Seeding runs once, guarded by a count of library-default exercises."""

    def test_seeds_empty_library(self, session_factory, db_session):
        assert seed_default_exercises(session_factory, DEFAULT_EXERCISES_PATH) == 14
        assert db_session.query(Exercise).filter(Exercise.is_custom.is_(False)).count() == 14

    def test_second_seed_is_a_no_op(self, session_factory, db_session):
        seed_default_exercises(session_factory, DEFAULT_EXERCISES_PATH)
        assert seed_default_exercises(session_factory, DEFAULT_EXERCISES_PATH) == 0
        assert db_session.query(Exercise).count() == 14

    def test_custom_exercises_do_not_block_seed(self, store, session_factory, db_session):
        store.create("My Move", StandardMethod(min_reps=5, max_reps=5))
        assert seed_default_exercises(session_factory, DEFAULT_EXERCISES_PATH) == 14
        assert db_session.query(Exercise).count() == 15

    def test_missing_file_is_logged(self, session_factory, db_session, tmp_path, caplog):
        with caplog.at_level(logging.ERROR):
            inserted = seed_default_exercises(session_factory, tmp_path / "missing.yaml")

        assert inserted == 0
        assert db_session.query(Exercise).count() == 0
        assert "Failed to seed default exercises" in caplog.text

    def test_invalid_entry_inserts_nothing(self, session_factory, db_session, tmp_path):
        path = tmp_path / "defaults.yaml"
        path.write_text(
            "exercises:\n"
            "  - name: Good\n"
            "    training_method: {type: timed, seconds: 30}\n"
            "  - name: Bad\n"
            "    training_method: {type: standard, minReps: 12, maxReps: 8}\n",
            encoding="utf-8",
        )

        assert seed_default_exercises(session_factory, path) == 0
        assert db_session.query(Exercise).count() == 0

    @pytest.mark.parametrize(
        "content",
        [
            "exercises: [ {name: 'x'\n",
            "- name: Push-ups\n  training_method: {type: timed, seconds: 30}\n",
            "exercises: Push-ups\n",
            "exercises:\n  - Push-ups\n",
        ],
        ids=["unparseable", "top-level-list", "exercises-not-a-list", "entry-not-a-mapping"],
    )
    def test_malformed_file_is_logged(self, session_factory, db_session, tmp_path, caplog, content):
        path = tmp_path / "defaults.yaml"
        path.write_text(content, encoding="utf-8")

        with caplog.at_level(logging.ERROR):
            inserted = seed_default_exercises(session_factory, path)

        assert inserted == 0
        assert db_session.query(Exercise).count() == 0
        assert "Failed to seed default exercises" in caplog.text


class TestStoreSeeding:
    """Store construction schedules the seed off the calling thread."""

    def test_store_seeds_in_background(self, db_session):
        store = ExerciseLibraryStore(db_session, seed_defaults=True)

        assert store.wait_until_seeded(timeout=10)
        assert len(store.search()) == 14
        assert store.stats().custom_exercises == 0

    def test_second_store_does_not_duplicate(self, db_session, session_factory):
        first = ExerciseLibraryStore(db_session, seed_defaults=True)
        assert first.wait_until_seeded(timeout=10)

        other_session = session_factory()
        try:
            second = ExerciseLibraryStore(other_session, seed_defaults=True)
            assert second.wait_until_seeded(timeout=10)
        finally:
            other_session.close()

        assert db_session.query(Exercise).count() == 14

    def test_malformed_file_does_not_reach_caller(self, db_session, tmp_path):
        path = tmp_path / "defaults.yaml"
        path.write_text("- Push-ups\n- Squats\n", encoding="utf-8")
        settings = Settings(_env_file=None, default_exercises_path=path)

        store = ExerciseLibraryStore(db_session, seed_defaults=True, settings=settings)

        assert store.wait_until_seeded(timeout=10) is True
        assert store.search() == []

    def test_wait_without_seeding_returns_immediately(self, store):
        assert store.wait_until_seeded(timeout=0) is True
        assert store.search() == []
