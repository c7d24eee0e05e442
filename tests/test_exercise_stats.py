"""Tests for library statistics."""
from workout_creator.models.database_models import Exercise
from workout_creator.models.taxonomy import Equipment, ExerciseCategory
from workout_creator.models.training_method import StandardMethod


REPS = StandardMethod(min_reps=8, max_reps=12)


class TestExerciseStats:
    """Test aggregate counts over the non-archived library."""

    def test_empty_library(self, store):
        stats = store.stats()

        assert stats.total_exercises == 0
        assert stats.custom_exercises == 0
        assert stats.favorite_count == 0
        assert stats.category_counts == {}
        assert stats.equipment_counts == {}

    def test_multi_tag_exercise_counts_in_each_bucket(self, store):
        store.create("Dumbbell Bench Press", REPS, equipment=[Equipment.DUMBBELL, Equipment.BENCH])
        store.create("Push-ups", REPS, equipment=[Equipment.BODYWEIGHT])

        stats = store.stats()

        assert stats.equipment_counts == {
            Equipment.DUMBBELL: 1,
            Equipment.BENCH: 1,
            Equipment.BODYWEIGHT: 1,
        }

    def test_counts(self, store, db_session):
        db_session.add_all(
            [
                Exercise(
                    name="Squats",
                    training_method=REPS,
                    category=ExerciseCategory.LEGS,
                    equipment=[Equipment.BODYWEIGHT],
                    is_custom=False,
                ),
                Exercise(
                    name="Lunges",
                    training_method=REPS,
                    category=ExerciseCategory.LEGS,
                    equipment=[Equipment.BODYWEIGHT],
                    is_custom=False,
                    is_favorite=True,
                ),
                Exercise(
                    name="Cable Fly",
                    training_method=REPS,
                    category=ExerciseCategory.CHEST,
                    equipment=[Equipment.CABLE],
                ),
                Exercise(name="Mystery Move", training_method=REPS),
                Exercise(
                    name="Old Move",
                    training_method=REPS,
                    category=ExerciseCategory.LEGS,
                    equipment=[Equipment.MACHINE],
                    is_archived=True,
                ),
            ]
        )
        db_session.commit()

        stats = store.stats()

        assert stats.total_exercises == 4
        assert stats.custom_exercises == 2
        assert stats.favorite_count == 1
        assert stats.category_counts == {ExerciseCategory.LEGS: 2, ExerciseCategory.CHEST: 1}
        assert stats.equipment_counts == {Equipment.BODYWEIGHT: 2, Equipment.CABLE: 1}

    def test_stats_serialize_with_enum_values(self, store):
        store.create("Push-ups", REPS, category=ExerciseCategory.CHEST, equipment=[Equipment.BODYWEIGHT])

        payload = store.stats().model_dump(mode="json")

        assert payload["category_counts"] == {"Chest": 1}
        assert payload["equipment_counts"] == {"Bodyweight": 1}
