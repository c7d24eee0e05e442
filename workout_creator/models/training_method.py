"""Training method variants and the pure helpers that operate on them.

A training method describes how the volume of an exercise is prescribed:

    - ``standard``: a rep range, e.g. 8-12 reps
    - ``timed``: a hold or effort for a number of seconds
    - ``restPause``: a total rep target reached over several mini-sets, each
      within a rep range

Values are frozen pydantic models. Edits never mutate a method in place;
:func:`normalize` returns a replacement that keeps ``min_reps <= max_reps``.
The JSON form is tagged by ``type`` and uses camelCase keys, which is what the
exercise table stores and what the HTTP API exchanges.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator
from pydantic.alias_generators import to_camel


SECONDS_PER_REP = 3

# Rep bounds assumed for rest-pause payloads stored before bounds were recorded.
LEGACY_REST_PAUSE_MIN_REPS = 5
LEGACY_REST_PAUSE_MAX_REPS = 10


class InvalidTrainingMethodEdit(ValueError):
    """Raised when an edit would leave a training method in an invalid state."""


class TrainingMethodKind(str, Enum):
    """Tag identifying which variant a training method is."""

    STANDARD = "standard"
    REST_PAUSE = "restPause"
    TIMED = "timed"

    @property
    def label(self) -> str:
        return _KIND_INFO[self][0]

    @property
    def description(self) -> str:
        return _KIND_INFO[self][1]


_KIND_INFO: dict[TrainingMethodKind, tuple[str, str]] = {
    TrainingMethodKind.STANDARD: (
        "Standard",
        "Traditional rep ranges with minimum and maximum targets",
    ),
    TrainingMethodKind.REST_PAUSE: (
        "Rest-Pause",
        "Reach target total reps using multiple mini-sets with short rests",
    ),
    TrainingMethodKind.TIMED: (
        "Timed",
        "Perform exercise for a specific duration rather than counting reps",
    ),
}


class _TrainingMethodBase(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class StandardMethod(_TrainingMethodBase):
    """Rep range with inclusive minimum and maximum."""

    type: Literal["standard"] = "standard"
    min_reps: int = Field(ge=1)
    max_reps: int = Field(ge=1)

    @model_validator(mode="before")
    @classmethod
    def _accept_single_rep_count(cls, data: Any) -> Any:
        # Older payloads carried one fixed rep count instead of a range.
        if isinstance(data, dict) and "reps" in data:
            data = dict(data)
            reps = data.pop("reps")
            if "minReps" not in data and "min_reps" not in data:
                data["minReps"] = reps
            if "maxReps" not in data and "max_reps" not in data:
                data["maxReps"] = reps
        return data

    @model_validator(mode="after")
    def _check_range(self) -> "StandardMethod":
        if self.min_reps > self.max_reps:
            raise ValueError(f"min_reps ({self.min_reps}) must not exceed max_reps ({self.max_reps})")
        return self


class RestPauseMethod(_TrainingMethodBase):
    """Total rep target accumulated over mini-sets of ``min_reps``-``max_reps``."""

    type: Literal["restPause"] = "restPause"
    target_total: int = Field(ge=1)
    min_reps: int = Field(default=LEGACY_REST_PAUSE_MIN_REPS, ge=1)
    max_reps: int = Field(default=LEGACY_REST_PAUSE_MAX_REPS, ge=1)

    @model_validator(mode="after")
    def _check_targets(self) -> "RestPauseMethod":
        if self.min_reps > self.max_reps:
            raise ValueError(f"min_reps ({self.min_reps}) must not exceed max_reps ({self.max_reps})")
        if self.target_total < self.min_reps:
            raise ValueError(
                f"target_total ({self.target_total}) must be at least min_reps ({self.min_reps})"
            )
        return self


class TimedMethod(_TrainingMethodBase):
    """Fixed duration in seconds."""

    type: Literal["timed"] = "timed"
    seconds: int = Field(ge=1)


TrainingMethod = Annotated[
    Union[StandardMethod, RestPauseMethod, TimedMethod],
    Field(discriminator="type"),
]

training_method_adapter: TypeAdapter[TrainingMethod] = TypeAdapter(TrainingMethod)

# Fallback used when an exercise has no readable training method stored.
DEFAULT_TRAINING_METHOD = StandardMethod(min_reps=10, max_reps=10)

_DEFAULTS: dict[TrainingMethodKind, StandardMethod | RestPauseMethod | TimedMethod] = {
    TrainingMethodKind.STANDARD: StandardMethod(min_reps=8, max_reps=12),
    TrainingMethodKind.REST_PAUSE: RestPauseMethod(
        target_total=20,
        min_reps=LEGACY_REST_PAUSE_MIN_REPS,
        max_reps=LEGACY_REST_PAUSE_MAX_REPS,
    ),
    TrainingMethodKind.TIMED: TimedMethod(seconds=45),
}

_EDITABLE_FIELDS: dict[TrainingMethodKind, frozenset[str]] = {
    TrainingMethodKind.STANDARD: frozenset({"min_reps", "max_reps"}),
    TrainingMethodKind.REST_PAUSE: frozenset({"target_total", "min_reps", "max_reps"}),
    TrainingMethodKind.TIMED: frozenset({"seconds"}),
}


@dataclass(frozen=True)
class MethodEdit:
    """A single field change requested by a form, e.g. ``MethodEdit("min_reps", 12)``."""

    field: Literal["min_reps", "max_reps", "seconds", "target_total"]
    value: int


def parse_training_method(data: Any) -> TrainingMethod:
    """Decode the tagged JSON form (or an existing value) into a training method."""
    return training_method_adapter.validate_python(data)


def dump_training_method(method: TrainingMethod) -> dict[str, Any]:
    """Encode a training method into its tagged camelCase JSON form."""
    return method.model_dump(by_alias=True)


def classify(method: TrainingMethod) -> TrainingMethodKind:
    """Return the kind tag for a training method."""
    if isinstance(method, StandardMethod):
        return TrainingMethodKind.STANDARD
    if isinstance(method, RestPauseMethod):
        return TrainingMethodKind.REST_PAUSE
    if isinstance(method, TimedMethod):
        return TrainingMethodKind.TIMED
    raise TypeError(f"Unsupported training method: {method!r}")


def estimate_seconds(method: TrainingMethod) -> int:
    """
    Estimate how long one set of the method takes.

    Rep-based methods assume ``SECONDS_PER_REP`` per rep; standard ranges use
    the (floored) midpoint of the range. Timed methods return their duration.

    Example:
        >>> estimate_seconds(StandardMethod(min_reps=8, max_reps=12))
        30
    """
    if isinstance(method, StandardMethod):
        return ((method.min_reps + method.max_reps) // 2) * SECONDS_PER_REP
    if isinstance(method, RestPauseMethod):
        return method.target_total * SECONDS_PER_REP
    if isinstance(method, TimedMethod):
        return method.seconds
    raise TypeError(f"Unsupported training method: {method!r}")


def normalize(method: TrainingMethod, edit: MethodEdit) -> TrainingMethod:
    """
    Apply a field edit and return a replacement of the same kind.

    Editing ``min_reps`` above ``max_reps`` raises ``max_reps`` to match;
    editing ``max_reps`` below ``min_reps`` lowers ``min_reps`` to match.

    Raises:
        InvalidTrainingMethodEdit: The value is below 1, the field does not
            belong to the method's kind, or a rest-pause target would end up
            below its minimum reps.
    """
    kind = classify(method)
    if edit.field not in _EDITABLE_FIELDS[kind]:
        raise InvalidTrainingMethodEdit(f"{kind.label} methods have no '{edit.field}' field")
    if edit.value < 1:
        raise InvalidTrainingMethodEdit(f"{edit.field} must be at least 1, got {edit.value}")

    values = method.model_dump()
    values[edit.field] = edit.value

    if edit.field == "min_reps" and values["min_reps"] > values["max_reps"]:
        values["max_reps"] = values["min_reps"]
    elif edit.field == "max_reps" and values["max_reps"] < values["min_reps"]:
        values["min_reps"] = values["max_reps"]

    if kind is TrainingMethodKind.REST_PAUSE and values["target_total"] < values["min_reps"]:
        raise InvalidTrainingMethodEdit(
            f"target_total ({values['target_total']}) must be at least min_reps ({values['min_reps']})"
        )

    return type(method)(**values)


def default_method(kind: TrainingMethodKind) -> TrainingMethod:
    """Starting value offered when a user picks a method kind."""
    return _DEFAULTS[kind]


def switch_kind(method: TrainingMethod, kind: TrainingMethodKind) -> TrainingMethod:
    """Return ``method`` if it already has ``kind``, otherwise that kind's default."""
    if classify(method) is kind:
        return method
    return default_method(kind)


def describe(method: TrainingMethod) -> str:
    """Short human-readable summary, e.g. ``"8-12 reps"`` or ``"45s"``."""
    if isinstance(method, StandardMethod):
        if method.min_reps == method.max_reps:
            return f"{method.min_reps} reps"
        return f"{method.min_reps}-{method.max_reps} reps"
    if isinstance(method, RestPauseMethod):
        return f"{method.target_total} total ({method.min_reps}-{method.max_reps} per set)"
    if isinstance(method, TimedMethod):
        return f"{method.seconds}s"
    raise TypeError(f"Unsupported training method: {method!r}")
