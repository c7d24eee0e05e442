"""SQLAlchemy ORM models for the exercise library and saved workouts."""

import logging
import uuid
from datetime import datetime, timezone

from pydantic import ValidationError
from sqlalchemy import JSON, Boolean, DateTime, Enum, Float, ForeignKey, Integer, String, Text
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from workout_creator.database import Base
from workout_creator.models.taxonomy import Equipment, ExerciseCategory, MuscleGroup
from workout_creator.models.tempo import Tempo
from workout_creator.models.training_method import (
    DEFAULT_TRAINING_METHOD,
    TrainingMethod,
    dump_training_method,
    parse_training_method,
)


logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _new_id() -> str:
    return str(uuid.uuid4())


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


class Exercise(Base):
    """Library exercise that workouts reference."""

    __tablename__ = "exercises"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    training_method_data: Mapped[dict | None] = mapped_column("training_method", JSON, nullable=True)

    # Categorisation
    category: Mapped[ExerciseCategory | None] = mapped_column(
        Enum(ExerciseCategory, native_enum=False, values_callable=_enum_values, length=50),
        nullable=True,
        index=True,
    )
    equipment: Mapped[list | None] = mapped_column(JSON, nullable=True)  # Equipment values
    primary_muscles: Mapped[list | None] = mapped_column(JSON, nullable=True)  # MuscleGroup values
    secondary_muscles: Mapped[list | None] = mapped_column(JSON, nullable=True)

    # Media
    video_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    gif_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    thumbnail_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    form_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Usage & flags
    last_used_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, index=True)
    use_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_custom: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)
    is_favorite: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_archived: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)

    # Lowercased name + metadata, kept in sync by update_search_text()
    search_text: Mapped[str] = mapped_column(Text, default="", nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, onupdate=_utcnow)

    # Relationship
    interval_exercises: Mapped[list["IntervalExercise"]] = relationship(
        "IntervalExercise",
        back_populates="exercise",
        passive_deletes=True,
    )

    def __init__(
        self,
        name: str,
        training_method: TrainingMethod | None = None,
        category: ExerciseCategory | None = None,
        equipment: list[Equipment] | None = None,
        is_custom: bool = True,
        **kwargs,
    ) -> None:
        kwargs.setdefault("id", _new_id())
        kwargs.setdefault("use_count", 0)
        kwargs.setdefault("is_favorite", False)
        kwargs.setdefault("is_archived", False)
        super().__init__(**kwargs)
        self.name = name
        self.category = ExerciseCategory(category) if category is not None else None
        self.equipment = [Equipment(tag).value for tag in equipment] if equipment is not None else None
        self.is_custom = is_custom
        self.training_method = training_method or DEFAULT_TRAINING_METHOD

    def __repr__(self) -> str:
        return f"Exercise(id={self.id!r}, name={self.name!r})"

    @property
    def training_method(self) -> TrainingMethod:
        if self.training_method_data is None:
            return DEFAULT_TRAINING_METHOD
        try:
            return parse_training_method(self.training_method_data)
        except ValidationError:
            logger.warning("Unreadable training method stored for exercise %s; using default", self.id)
            return DEFAULT_TRAINING_METHOD

    @training_method.setter
    def training_method(self, value: TrainingMethod) -> None:
        self.training_method_data = dump_training_method(value)
        self.update_search_text()

    @property
    def equipment_tags(self) -> list[Equipment]:
        return [Equipment(tag) for tag in self.equipment or []]

    def update_search_text(self) -> None:
        """Recompute the lowercase search index from name and metadata."""

        components = [(self.name or "").lower()]
        if self.category is not None:
            components.append(ExerciseCategory(self.category).value.lower())
        components.extend(tag.value.lower() for tag in self.equipment_tags)
        components.extend(MuscleGroup(muscle).value.lower() for muscle in self.primary_muscles or [])
        self.search_text = " ".join(components)

    def record_usage(self) -> None:
        self.last_used_date = _utcnow()
        self.use_count = (self.use_count or 0) + 1


class Workout(Base):
    """A saved workout: an ordered list of intervals."""

    __tablename__ = "workouts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False, default="Untitled Workout")
    date_and_time: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow, index=True)
    total_duration: Mapped[int] = mapped_column(Integer, nullable=False, default=0)  # seconds, estimated

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, onupdate=_utcnow)

    # Relationship
    intervals: Mapped[list["Interval"]] = relationship(
        "Interval",
        back_populates="workout",
        cascade="all, delete-orphan",
        order_by="Interval.position",
        collection_class=ordering_list("position"),
    )


class Interval(Base):
    """Block of exercises repeated for a number of rounds."""

    __tablename__ = "intervals"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    workout_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("workouts.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    name: Mapped[str | None] = mapped_column(String(200), nullable=True)  # e.g. "Warmup", "Main Set"
    rounds: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    rest_between_rounds: Mapped[int | None] = mapped_column(Integer, nullable=True)  # seconds
    rest_after_interval: Mapped[int | None] = mapped_column(Integer, nullable=True)  # seconds

    # Relationships
    workout: Mapped["Workout | None"] = relationship("Workout", back_populates="intervals")
    interval_exercises: Mapped[list["IntervalExercise"]] = relationship(
        "IntervalExercise",
        back_populates="interval",
        cascade="all, delete-orphan",
        order_by="IntervalExercise.order_index",
    )

    @property
    def exercises(self) -> list[Exercise]:
        """Library exercises in slot order, skipping slots whose exercise was deleted."""
        ordered = sorted(self.interval_exercises, key=lambda slot: slot.order_index)
        return [slot.exercise for slot in ordered if slot.exercise is not None]

    def add_exercise(
        self,
        exercise: Exercise,
        effort: int = 5,
        weight: float | None = None,
        rest_after: int | None = None,
        tempo: Tempo | None = None,
        notes: str | None = None,
    ) -> "IntervalExercise":
        """Append ``exercise`` as the last slot and record the usage on it."""

        next_index = max((slot.order_index for slot in self.interval_exercises), default=-1) + 1
        slot = IntervalExercise(
            exercise=exercise,
            order_index=next_index,
            effort=effort,
            weight=weight,
            rest_after=rest_after,
            notes=notes,
        )
        slot.tempo = tempo
        self.interval_exercises.append(slot)
        exercise.record_usage()
        return slot


class IntervalExercise(Base):
    """Workout-specific prescription for one library exercise inside an interval."""

    __tablename__ = "interval_exercises"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    interval_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("intervals.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    exercise_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("exercises.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    effort: Mapped[int] = mapped_column(Integer, nullable=False, default=5)  # 1-10 scale
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    rest_after: Mapped[int | None] = mapped_column(Integer, nullable=True)  # seconds
    tempo_data: Mapped[dict | None] = mapped_column("tempo", JSON, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    interval: Mapped["Interval | None"] = relationship("Interval", back_populates="interval_exercises")
    exercise: Mapped["Exercise | None"] = relationship("Exercise", back_populates="interval_exercises")

    @property
    def tempo(self) -> Tempo | None:
        if self.tempo_data is None:
            return None
        return Tempo.model_validate(self.tempo_data)

    @tempo.setter
    def tempo(self, value: Tempo | None) -> None:
        self.tempo_data = value.model_dump() if value is not None else None
