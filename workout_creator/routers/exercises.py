"""API endpoints for the exercise library."""
from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from workout_creator.database import get_db
from workout_creator.models.database_models import Exercise
from workout_creator.models.schemas import (
    ExerciseCreate,
    ExerciseResponse,
    ExerciseStats,
    ExerciseUpdate,
    SearchCriteria,
    SortOption,
)
from workout_creator.models.taxonomy import Equipment, ExerciseCategory, MuscleGroup
from workout_creator.services.exercise_library import ExerciseLibraryStore


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/exercises", tags=["exercises"])


def get_exercise_store(db: Annotated[Session, Depends(get_db)]) -> ExerciseLibraryStore:
    """One store per request; defaults are seeded at application startup."""
    return ExerciseLibraryStore(db, seed_defaults=False)


StoreDep = Annotated[ExerciseLibraryStore, Depends(get_exercise_store)]


def _get_or_404(store: ExerciseLibraryStore, exercise_id: str) -> Exercise:
    exercise = store.get(exercise_id)
    if exercise is None:
        raise HTTPException(status_code=404, detail=f"Exercise {exercise_id} not found")
    return exercise


@router.get("", response_model=list[ExerciseResponse])
async def search_exercises(
    store: StoreDep,
    q: str = "",
    category: ExerciseCategory | None = None,
    equipment: Annotated[list[Equipment] | None, Query()] = None,
    favorites_only: bool = False,
    sort_by: SortOption = SortOption.NAME,
):
    """
    Search the library.

    Args:
        q: Free text matched against name, category, equipment and muscles
        category: Only exercises filed under this category
        equipment: Repeatable; keeps exercises using any of the listed equipment
        favorites_only: Only favorited exercises
        sort_by: name, recent, popular or category

    Returns:
        list[ExerciseResponse]: At most 100 matching exercises
    """
    criteria = SearchCriteria(
        search_text=q,
        category=category,
        equipment=set(equipment or []),
        favorites_only=favorites_only,
        sort_by=sort_by,
    )
    return store.search(criteria)


@router.get("/autocomplete", response_model=list[ExerciseResponse])
async def autocomplete_exercises(
    store: StoreDep,
    q: str = "",
    limit: Annotated[int, Query(ge=1, le=50)] = 5,
):
    """Ranked suggestions for partially typed exercise names."""
    return store.autocomplete(q, limit=limit)


@router.get("/recent", response_model=list[ExerciseResponse])
async def recent_exercises(
    store: StoreDep,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
):
    return store.recent(limit=limit)


@router.get("/favorites", response_model=list[ExerciseResponse])
async def favorite_exercises(store: StoreDep):
    return store.favorites()


@router.get("/category/{category}", response_model=list[ExerciseResponse])
async def exercises_by_category(category: ExerciseCategory, store: StoreDep):
    return store.by_category(category)


@router.get("/stats", response_model=ExerciseStats)
async def library_stats(store: StoreDep):
    """Counts per category and equipment over the non-archived library."""
    return store.stats()


@router.get("/{exercise_id}", response_model=ExerciseResponse)
async def get_exercise(exercise_id: str, store: StoreDep):
    return _get_or_404(store, exercise_id)


@router.post("", response_model=ExerciseResponse, status_code=201)
async def create_exercise(payload: ExerciseCreate, store: StoreDep):
    """Create a custom exercise."""
    try:
        exercise = store.create(
            name=payload.name,
            training_method=payload.training_method,
            category=payload.category,
            equipment=payload.equipment,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info("Created exercise: id=%s, name=%s", exercise.id, exercise.name)
    return exercise


@router.patch("/{exercise_id}", response_model=ExerciseResponse)
async def update_exercise(exercise_id: str, payload: ExerciseUpdate, store: StoreDep):
    """Apply a partial edit; fields left out of the payload keep their values."""
    exercise = _get_or_404(store, exercise_id)
    changes = payload.model_dump(exclude_unset=True)

    if "name" in changes:
        exercise.name = changes["name"]
    if "category" in changes:
        exercise.category = payload.category
    if "equipment" in changes:
        exercise.equipment = [tag.value for tag in payload.equipment] if payload.equipment is not None else None
    if "primary_muscles" in changes:
        exercise.primary_muscles = _muscle_values(payload.primary_muscles)
    if "secondary_muscles" in changes:
        exercise.secondary_muscles = _muscle_values(payload.secondary_muscles)
    if "form_notes" in changes:
        exercise.form_notes = payload.form_notes
    if payload.training_method is not None:
        exercise.training_method = payload.training_method

    try:
        store.update(exercise)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return exercise


@router.post("/{exercise_id}/favorite", response_model=ExerciseResponse)
async def toggle_favorite(exercise_id: str, store: StoreDep):
    exercise = _get_or_404(store, exercise_id)
    store.toggle_favorite(exercise)
    return exercise


@router.post("/{exercise_id}/archive", response_model=ExerciseResponse)
async def archive_exercise(exercise_id: str, store: StoreDep):
    exercise = _get_or_404(store, exercise_id)
    store.archive(exercise)
    return exercise


@router.post("/{exercise_id}/usage", response_model=ExerciseResponse)
async def record_usage(exercise_id: str, store: StoreDep):
    exercise = _get_or_404(store, exercise_id)
    store.record_usage(exercise)
    return exercise


@router.delete("/{exercise_id}", status_code=204)
async def delete_exercise(exercise_id: str, store: StoreDep) -> Response:
    """Permanently delete an exercise. Deleting an unknown id is a no-op."""
    exercise = store.get(exercise_id)
    if exercise is not None:
        store.delete(exercise)
    return Response(status_code=204)


def _muscle_values(muscles: list[MuscleGroup] | None) -> list[str] | None:
    if muscles is None:
        return None
    return [muscle.value for muscle in muscles]
