"""Tests for saved workout persistence."""
from datetime import datetime

from workout_creator.models.database_models import Exercise, Interval, IntervalExercise, Workout
from workout_creator.models.tempo import Tempo
from workout_creator.models.training_method import StandardMethod
from workout_creator.services.workout_store import WorkoutStore


REPS = StandardMethod(min_reps=10, max_reps=10)


def _workout(exercise: Exercise, name: str = "Push Day", when: datetime | None = None) -> Workout:
    interval = Interval(name="Main Set", rounds=3, rest_between_rounds=60)
    interval.add_exercise(exercise, rest_after=30, tempo=Tempo.CONTROLLED, notes="Full range")
    return Workout(name=name, date_and_time=when or datetime(2025, 10, 1, 7, 0), intervals=[interval])


class TestWorkoutStore:
    """Test workout CRUD and duration bookkeeping."""

    def test_add_computes_total_duration(self, store, db_session):
        push_ups = store.create("Push-ups", REPS)
        workouts = WorkoutStore(db_session)

        workouts.add(_workout(push_ups))

        saved = workouts.fetch_all()
        assert len(saved) == 1
        assert saved[0].total_duration == 3 * (30 + 30) + 2 * 60

    def test_slot_details_round_trip(self, store, db_session):
        push_ups = store.create("Push-ups", REPS)
        workouts = WorkoutStore(db_session)
        workouts.add(_workout(push_ups))
        db_session.expire_all()

        slot = workouts.fetch_all()[0].intervals[0].interval_exercises[0]
        assert slot.exercise.id == push_ups.id
        assert slot.tempo == Tempo.CONTROLLED
        assert slot.tempo.notation == "2-0-1"
        assert slot.notes == "Full range"

    def test_fetch_all_newest_first(self, store, db_session):
        push_ups = store.create("Push-ups", REPS)
        workouts = WorkoutStore(db_session)
        workouts.add(_workout(push_ups, "Older", datetime(2025, 9, 1)))
        workouts.add(_workout(push_ups, "Newer", datetime(2025, 10, 1)))

        assert [workout.name for workout in workouts.fetch_all()] == ["Newer", "Older"]

    def test_update_recomputes_duration(self, store, db_session):
        push_ups = store.create("Push-ups", REPS)
        workouts = WorkoutStore(db_session)
        workout = _workout(push_ups)
        workouts.add(workout)

        workout.intervals[0].rounds = 1
        workouts.update(workout)

        assert workouts.fetch_all()[0].total_duration == 30 + 30

    def test_delete_keeps_library_exercises(self, store, db_session):
        push_ups = store.create("Push-ups", REPS)
        workouts = WorkoutStore(db_session)
        workout = _workout(push_ups)
        workouts.add(workout)

        workouts.delete(workout)

        assert workouts.fetch_all() == []
        assert db_session.query(Interval).count() == 0
        assert db_session.query(IntervalExercise).count() == 0
        assert store.get(push_ups.id) is not None

    def test_delete_twice_is_a_no_op(self, store, db_session):
        push_ups = store.create("Push-ups", REPS)
        workouts = WorkoutStore(db_session)
        workout = _workout(push_ups)
        workouts.add(workout)

        workouts.delete(workout)
        workouts.delete(workout)

        assert workouts.fetch_all() == []

    def test_deleted_exercise_leaves_empty_slot(self, store, db_session):
        push_ups = store.create("Push-ups", REPS)
        squats = store.create("Squats", StandardMethod(min_reps=15, max_reps=15))
        workout = _workout(push_ups)
        workout.intervals[0].add_exercise(squats, rest_after=30)
        workouts = WorkoutStore(db_session)
        workouts.add(workout)

        store.delete(squats)
        db_session.expire_all()

        interval = workouts.fetch_all()[0].intervals[0]
        assert len(interval.interval_exercises) == 2
        assert interval.exercises == [push_ups]
