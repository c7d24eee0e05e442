"""Exercise library store: search, filtering, mutations and statistics."""
from __future__ import annotations

import logging
from collections import Counter
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from pathlib import Path
from typing import Any, Iterable

import yaml
from pydantic import ValidationError
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, sessionmaker

from workout_creator.config import Settings, get_settings
from workout_creator.models.database_models import Exercise
from workout_creator.models.schemas import ExerciseStats, SearchCriteria, SortOption
from workout_creator.models.taxonomy import Equipment, ExerciseCategory, MuscleGroup, infer_category
from workout_creator.models.training_method import TrainingMethod, parse_training_method


logger = logging.getLogger(__name__)

_seed_executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="exercise-seed")


def load_default_exercises(path: Path) -> list[Exercise]:
    """
    Build (unsaved) library-default exercises from the YAML seed file.

    Args:
        path: YAML file with an ``exercises`` list

    Returns:
        Exercise instances with ``is_custom=False``

    Raises:
        ValueError: If the document or one of its entries is not a mapping.
    """
    with Path(path).open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a mapping with an 'exercises' list")
    entries = raw.get("exercises") or []
    if not isinstance(entries, list):
        raise ValueError(f"'exercises' in {path} must be a list")

    exercises: list[Exercise] = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise ValueError(f"Exercise entry in {path} must be a mapping, got {entry!r}")
        exercise = Exercise(
            name=entry["name"],
            training_method=parse_training_method(entry["training_method"]),
            category=ExerciseCategory(entry["category"]) if entry.get("category") else None,
            equipment=[Equipment(tag) for tag in entry.get("equipment", [])],
            is_custom=False,
        )
        if entry.get("primary_muscles"):
            exercise.primary_muscles = [MuscleGroup(m).value for m in entry["primary_muscles"]]
            exercise.update_search_text()
        exercises.append(exercise)
    return exercises


def seed_default_exercises(session_factory: sessionmaker, path: Path) -> int:
    """
    Insert the default exercise set if no library-default exercises exist yet.

    Runs in its own session so it can be scheduled off the caller's thread.

    Returns:
        Number of exercises inserted (0 when the library was already seeded
        or the seed could not be written)
    """
    session = session_factory()
    try:
        existing = session.query(Exercise).filter(Exercise.is_custom.is_(False)).count()
        if existing:
            logger.debug("Exercise library already has %d default exercises; skipping seed", existing)
            return 0

        defaults = load_default_exercises(path)
        session.add_all(defaults)
        session.commit()
        logger.info("Seeded exercise library with %d default exercises", len(defaults))
        return len(defaults)
    except (SQLAlchemyError, OSError, yaml.YAMLError, ValidationError, ValueError, KeyError):
        session.rollback()
        logger.exception("Failed to seed default exercises from %s", path)
        return 0
    finally:
        session.close()


class ExerciseLibraryStore:
    """
    Mediates reads and writes against the persisted exercise collection.

    One store backs one library view. The view sets the criteria attributes
    (``search_text``, ``selected_category``, ``selected_equipment``,
    ``show_favorites_only``, ``sort_by``) and calls :meth:`search` again
    whenever they change.

    Read failures are logged and yield empty results; write failures are
    logged and rolled back. Neither is raised to the caller. The store is not
    thread-safe: callers must serialise access to one instance.
    """

    def __init__(
        self,
        session: Session,
        *,
        seed_defaults: bool | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.session = session
        self.settings = settings or get_settings()

        self.search_text: str = ""
        self.selected_category: ExerciseCategory | None = None
        self.selected_equipment: set[Equipment] = set()
        self.show_favorites_only: bool = False
        self.sort_by: SortOption = SortOption.NAME

        if seed_defaults is None:
            seed_defaults = self.settings.seed_default_exercises

        self._seeding: Future | None = None
        if seed_defaults:
            seed_factory = sessionmaker(bind=session.get_bind(), autoflush=False, future=True)
            self._seeding = _seed_executor.submit(
                seed_default_exercises,
                seed_factory,
                self.settings.default_exercises_path,
            )

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------

    def wait_until_seeded(self, timeout: float | None = None) -> bool:
        """Block until the default-library check has finished; False on timeout."""

        if self._seeding is None:
            return True
        try:
            self._seeding.result(timeout=timeout)
        except FutureTimeoutError:
            return False
        return True

    # ------------------------------------------------------------------
    # Search & filter
    # ------------------------------------------------------------------

    @property
    def criteria(self) -> SearchCriteria:
        """Snapshot of the current view criteria."""

        return SearchCriteria(
            search_text=self.search_text,
            category=self.selected_category,
            equipment=set(self.selected_equipment),
            favorites_only=self.show_favorites_only,
            sort_by=self.sort_by,
        )

    def search(self, criteria: SearchCriteria | None = None) -> list[Exercise]:
        """
        Return non-archived exercises matching every active criterion.

        Text, category and favorite filters run in SQL. The equipment filter
        keeps exercises that use at least one selected piece of equipment and
        runs in Python after the fetch. The result is capped at
        ``settings.search_result_limit``.
        """
        criteria = criteria or self.criteria
        limit = self.settings.search_result_limit

        query = self._active()
        text = criteria.search_text.strip().lower()
        if text:
            query = query.filter(Exercise.search_text.contains(text, autoescape=True))
        if criteria.category is not None:
            query = query.filter(Exercise.category == criteria.category)
        if criteria.favorites_only:
            query = query.filter(Exercise.is_favorite.is_(True))
        query = query.order_by(*_sort_columns(criteria.sort_by))

        if not criteria.equipment:
            return self._fetch(query.limit(limit), "search exercises")

        wanted = {Equipment(tag) for tag in criteria.equipment}
        matches = [
            exercise
            for exercise in self._fetch(query, "search exercises")
            if not wanted.isdisjoint(exercise.equipment_tags)
        ]
        return matches[:limit]

    def recent(self, limit: int | None = None) -> list[Exercise]:
        """Exercises that have been used, most recently used first."""

        query = (
            self._active()
            .filter(Exercise.last_used_date.is_not(None))
            .order_by(Exercise.last_used_date.desc(), Exercise.name.asc())
            .limit(self.settings.recent_limit if limit is None else limit)
        )
        return self._fetch(query, "fetch recent exercises")

    def favorites(self) -> list[Exercise]:
        query = self._active().filter(Exercise.is_favorite.is_(True)).order_by(Exercise.name.asc())
        return self._fetch(query, "fetch favorite exercises")

    def by_category(self, category: ExerciseCategory) -> list[Exercise]:
        query = self._active().filter(Exercise.category == category).order_by(Exercise.name.asc())
        return self._fetch(query, f"fetch {category.value} exercises")

    def autocomplete(self, prefix: str, limit: int | None = None) -> list[Exercise]:
        """
        Suggest exercises for partially typed text.

        Suggestions favour frequently used exercises (use count descending)
        and fall back to name order. Blank input yields no suggestions.
        """
        text = prefix.strip().lower()
        if not text:
            return []

        query = (
            self._active()
            .filter(Exercise.search_text.contains(text, autoescape=True))
            .order_by(Exercise.use_count.desc(), Exercise.name.asc())
            .limit(self.settings.autocomplete_limit if limit is None else limit)
        )
        return self._fetch(query, "autocomplete exercises")

    def get(self, exercise_id: str) -> Exercise | None:
        try:
            return self.session.get(Exercise, exercise_id)
        except SQLAlchemyError:
            logger.exception("Failed to load exercise %s", exercise_id)
            self.session.rollback()
            return None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(
        self,
        name: str,
        training_method: TrainingMethod,
        category: ExerciseCategory | None = None,
        equipment: Iterable[Equipment] | None = None,
    ) -> Exercise:
        """Create and persist a custom exercise.

        Raises:
            ValueError: If ``name`` is empty or blank.
        """
        if not name or not name.strip():
            raise ValueError("Exercise name must not be empty")

        exercise = Exercise(
            name=name,
            training_method=training_method,
            category=category,
            equipment=list(equipment) if equipment is not None else None,
            is_custom=True,
        )
        self.session.add(exercise)
        self._save(f"create exercise '{name}'")
        return exercise

    def update(self, exercise: Exercise) -> None:
        """Persist caller-side edits, re-deriving the search index first.

        Raises:
            ValueError: If the edited name is empty or blank. Pending edits
                on a persisted exercise are discarded.
        """
        if not exercise.name or not exercise.name.strip():
            if inspect(exercise).persistent:
                self.session.expire(exercise)
            raise ValueError("Exercise name must not be empty")

        exercise.update_search_text()
        self._save(f"update exercise {exercise.id}")

    def delete(self, exercise: Exercise) -> None:
        """Remove the exercise permanently; a no-op if it is already gone."""

        state = inspect(exercise)
        exercise_id = state.identity[0] if state.identity else exercise.id
        persisted = None if state.was_deleted else self.get(exercise_id)
        if persisted is None:
            logger.debug("Exercise %s already removed; nothing to delete", exercise_id)
            return
        self.session.delete(persisted)
        self._save(f"delete exercise {exercise_id}")

    def toggle_favorite(self, exercise: Exercise) -> None:
        exercise.is_favorite = not exercise.is_favorite
        self._save(f"toggle favorite on exercise {exercise.id}")

    def archive(self, exercise: Exercise) -> None:
        exercise.is_archived = True
        self._save(f"archive exercise {exercise.id}")

    def record_usage(self, exercise: Exercise) -> None:
        exercise.record_usage()
        self._save(f"record usage of exercise {exercise.id}")

    # ------------------------------------------------------------------
    # Import / migration support
    # ------------------------------------------------------------------

    def find_or_create(self, name: str, training_method: TrainingMethod) -> Exercise:
        """
        Return the first exercise named exactly ``name``, creating it if absent.

        Identity is the name: two exercises with the same name are treated as
        the same exercise.
        """
        existing = self._find_by_name(name)
        if existing is not None:
            return existing
        return self.create(name=name, training_method=training_method)

    def import_legacy(self, entries: Iterable[tuple[str, TrainingMethod]]) -> list[Exercise]:
        """
        Bring exercises authored inline in older workouts into the library.

        Entries are deduplicated by name. Newly created exercises get a
        category inferred from their name.
        """
        imported: list[Exercise] = []
        for name, training_method in entries:
            exercise = self._find_by_name(name)
            if exercise is None:
                exercise = self.create(
                    name=name,
                    training_method=training_method,
                    category=infer_category(name),
                )
            imported.append(exercise)
        logger.info("Imported %d legacy exercises", len(imported))
        return imported

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def stats(self) -> ExerciseStats:
        """Aggregate counts over all non-archived exercises in a single scan."""

        exercises = self._fetch(self._active(), "calculate exercise stats")

        category_counts: Counter[ExerciseCategory] = Counter()
        equipment_counts: Counter[Equipment] = Counter()
        custom = favorites = 0
        for exercise in exercises:
            if exercise.category is not None:
                category_counts[ExerciseCategory(exercise.category)] += 1
            for tag in exercise.equipment_tags:
                equipment_counts[tag] += 1
            custom += int(exercise.is_custom)
            favorites += int(exercise.is_favorite)

        return ExerciseStats(
            total_exercises=len(exercises),
            custom_exercises=custom,
            favorite_count=favorites,
            category_counts=dict(category_counts),
            equipment_counts=dict(equipment_counts),
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _active(self) -> Query:
        return self.session.query(Exercise).filter(Exercise.is_archived.is_(False))

    def _find_by_name(self, name: str) -> Exercise | None:
        query = (
            self.session.query(Exercise)
            .filter(Exercise.name == name)
            .order_by(Exercise.created_at.asc(), Exercise.id.asc())
            .limit(1)
        )
        matches = self._fetch(query, f"look up exercise '{name}'")
        return matches[0] if matches else None

    def _fetch(self, query: Query, action: str) -> list[Any]:
        try:
            return query.all()
        except SQLAlchemyError:
            logger.exception("Failed to %s", action)
            self.session.rollback()
            return []

    def _save(self, action: str) -> bool:
        try:
            self.session.commit()
        except SQLAlchemyError:
            logger.exception("Failed to %s", action)
            self.session.rollback()
            return False
        return True


def _sort_columns(sort_by: SortOption) -> list:
    if sort_by is SortOption.RECENT:
        return [Exercise.last_used_date.desc(), Exercise.name.asc()]
    if sort_by is SortOption.POPULAR:
        return [Exercise.use_count.desc(), Exercise.name.asc()]
    if sort_by is SortOption.CATEGORY:
        # NULL categories sort first on SQLite, ahead of every named category.
        return [Exercise.category.asc(), Exercise.name.asc()]
    return [Exercise.name.asc()]
