"""Workout duration estimates derived from training methods and rest gaps."""

from __future__ import annotations

from workout_creator.models.database_models import Interval, Workout
from workout_creator.models.training_method import estimate_seconds


def estimate_interval_seconds(interval: Interval) -> int:
    """
    Estimate how long an interval takes, rest included.

    Each round runs every exercise once (its training-method estimate plus
    its ``rest_after``). ``rest_between_rounds`` separates consecutive rounds,
    so it is counted ``rounds - 1`` times. ``rest_after_interval`` is added
    once at the end.

    Args:
        interval: Interval with its exercise slots loaded

    Returns:
        Estimated duration in seconds

    Example:
        3 rounds of push-ups (10 reps, 30s rest after) with 60s between
        rounds: 3 * (30 + 30) + 2 * 60 = 300
    """
    rounds = max(interval.rounds or 1, 1)

    per_round = 0
    for slot in interval.interval_exercises:
        if slot.exercise is None:
            continue
        per_round += estimate_seconds(slot.exercise.training_method)
        per_round += slot.rest_after or 0

    total = per_round * rounds
    total += (interval.rest_between_rounds or 0) * (rounds - 1)
    total += interval.rest_after_interval or 0
    return total


def estimate_workout_seconds(workout: Workout) -> int:
    """Sum of the interval estimates; a derived value, not measured time."""
    return sum(estimate_interval_seconds(interval) for interval in workout.intervals)


def format_duration(seconds: int) -> str:
    """
    Render a duration for display.

    Whole minutes read as ``"5 min"``; anything else as ``"3:45"``.
    """
    minutes, remainder = divmod(int(seconds), 60)
    if remainder == 0:
        return f"{minutes} min"
    return f"{minutes}:{remainder:02d}"
