"""Pydantic models describing library queries and API payloads."""
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from workout_creator.models.taxonomy import Equipment, ExerciseCategory, MuscleGroup
from workout_creator.models.training_method import TrainingMethod


class SortOption(str, Enum):
    """Orderings offered by the exercise library view."""

    NAME = "name"
    RECENT = "recent"
    POPULAR = "popular"
    CATEGORY = "category"


class SearchCriteria(BaseModel):
    """Filter and sort settings of one library view."""

    search_text: str = ""
    category: ExerciseCategory | None = None
    equipment: set[Equipment] = Field(default_factory=set)
    favorites_only: bool = False
    sort_by: SortOption = SortOption.NAME


class ExerciseStats(BaseModel):
    """Aggregate counts over the non-archived library."""

    total_exercises: int = Field(ge=0)
    custom_exercises: int = Field(ge=0)
    favorite_count: int = Field(ge=0)
    category_counts: dict[ExerciseCategory, int] = Field(default_factory=dict)
    equipment_counts: dict[Equipment, int] = Field(default_factory=dict)


# Exercise API Schemas
class ExerciseBase(BaseModel):
    """Base schema for library exercises."""

    name: str = Field(min_length=1, max_length=200)
    training_method: TrainingMethod
    category: ExerciseCategory | None = None
    equipment: list[Equipment] | None = None


class ExerciseCreate(ExerciseBase):
    """Schema for creating a custom exercise."""


class ExerciseUpdate(BaseModel):
    """Schema for editing an exercise; omitted fields are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=200)
    training_method: TrainingMethod | None = None
    category: ExerciseCategory | None = None
    equipment: list[Equipment] | None = None
    primary_muscles: list[MuscleGroup] | None = None
    secondary_muscles: list[MuscleGroup] | None = None
    form_notes: str | None = None


class ExerciseResponse(ExerciseBase):
    """Schema for exercise API response."""

    id: str
    primary_muscles: list[MuscleGroup] | None = None
    secondary_muscles: list[MuscleGroup] | None = None
    form_notes: str | None = None
    is_custom: bool
    is_favorite: bool
    is_archived: bool
    use_count: int
    last_used_date: datetime | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
