"""Exercise categorisation vocabularies shared by the library and the API."""
from __future__ import annotations

from enum import Enum


class ExerciseCategory(str, Enum):
    """Primary body region (or style) an exercise is filed under."""

    CHEST = "Chest"
    BACK = "Back"
    SHOULDERS = "Shoulders"
    BICEPS = "Biceps"
    TRICEPS = "Triceps"
    LEGS = "Legs"
    CORE = "Core"
    CARDIO = "Cardio"
    FULL_BODY = "Full Body"
    FLEXIBILITY = "Flexibility"
    CUSTOM = "Custom"


class Equipment(str, Enum):
    """Equipment tags; an exercise may carry several."""

    BODYWEIGHT = "Bodyweight"
    BARBELL = "Barbell"
    DUMBBELL = "Dumbbell"
    KETTLEBELL = "Kettlebell"
    CABLE = "Cable"
    MACHINE = "Machine"
    RESISTANCE_BAND = "Resistance Band"
    PULLUP_BAR = "Pull-up Bar"
    DIP_BARS = "Dip Bars"
    BENCH = "Bench"
    OTHER = "Other"


class MuscleGroup(str, Enum):
    # Upper body
    CHEST = "Chest"
    UPPER_BACK = "Upper Back"
    LOWER_BACK = "Lower Back"
    SHOULDERS = "Shoulders"
    BICEPS = "Biceps"
    TRICEPS = "Triceps"
    FOREARMS = "Forearms"

    # Core
    ABS = "Abs"
    OBLIQUES = "Obliques"

    # Lower body
    QUADS = "Quadriceps"
    HAMSTRINGS = "Hamstrings"
    GLUTES = "Glutes"
    CALVES = "Calves"
    HIP_FLEXORS = "Hip Flexors"
    ADDUCTORS = "Adductors"
    ABDUCTORS = "Abductors"


# Checked in order; the first rule with a keyword found in the name wins.
_CATEGORY_KEYWORDS: tuple[tuple[ExerciseCategory, tuple[str, ...]], ...] = (
    (ExerciseCategory.CHEST, ("bench", "chest", "push-up")),
    (ExerciseCategory.BACK, ("pull", "row", "back")),
    (ExerciseCategory.LEGS, ("squat", "lunge", "leg")),
    (ExerciseCategory.BICEPS, ("curl", "bicep")),
    (ExerciseCategory.TRICEPS, ("tricep", "dip")),
    (ExerciseCategory.SHOULDERS, ("shoulder", "press", "raise")),
    (ExerciseCategory.CORE, ("core", "plank", "ab")),
    (ExerciseCategory.CARDIO, ("run", "jump", "burpee")),
)


def infer_category(name: str) -> ExerciseCategory:
    """
    Guess a category from keywords in an exercise name.

    Used when importing exercises that were authored before the library
    existed and therefore carry no category of their own.

    Example:
        >>> infer_category("Incline Bench Press")
        <ExerciseCategory.CHEST: 'Chest'>
    """
    lowered = name.lower()
    for category, keywords in _CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return ExerciseCategory.CUSTOM
