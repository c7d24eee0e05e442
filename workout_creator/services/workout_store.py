"""Persistence helpers for saved workouts."""
from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from workout_creator.models.database_models import Workout
from workout_creator.services.workout_duration import estimate_workout_seconds


logger = logging.getLogger(__name__)


class WorkoutStore:
    """CRUD over saved workouts; keeps ``total_duration`` in step with the intervals."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def fetch_all(self) -> list[Workout]:
        """All workouts, newest first."""

        try:
            return (
                self.session.query(Workout)
                .order_by(Workout.date_and_time.desc())
                .all()
            )
        except SQLAlchemyError:
            logger.exception("Failed to fetch workouts")
            self.session.rollback()
            return []

    def add(self, workout: Workout) -> None:
        workout.total_duration = estimate_workout_seconds(workout)
        self.session.add(workout)
        self._save(f"save workout '{workout.name}'")

    def update(self, workout: Workout) -> None:
        workout.total_duration = estimate_workout_seconds(workout)
        self._save(f"update workout {workout.id}")

    def delete(self, workout: Workout) -> None:
        """Delete a workout with its intervals; exercises stay in the library."""

        if not inspect(workout).persistent:
            logger.debug("Workout is not persisted; nothing to delete")
            return
        self.session.delete(workout)
        self._save(f"delete workout {workout.id}")

    def _save(self, action: str) -> bool:
        try:
            self.session.commit()
        except SQLAlchemyError:
            logger.exception("Failed to %s", action)
            self.session.rollback()
            return False
        return True
