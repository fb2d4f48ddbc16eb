"""
Base type for exercise catalog entries.

ExerciseDefinition carries everything the point scorer needs to value one
logged entry.  Definitions are immutable: changing a catalog entry never
touches points already stored on log entries.
"""

from dataclasses import dataclass

from ..models import CATEGORIES, UNITS, Category, Unit


@dataclass(frozen=True)
class ExerciseDefinition:
    """
    Full configuration for one exercise.

    ``points_per_unit`` is earned per repetition (unit="reps") or per minute
    (unit="minutes").  Weighted exercises earn a weight multiplier; exercises
    supporting the decreased variant earn a bonus when the entry is logged as
    decreased.
    """

    # Identity
    exercise_id: str          # e.g. "push_up", "stretching"
    display_name: str         # e.g. "Push-Up"

    # Scoring
    points_per_unit: float
    unit: Unit = "reps"
    is_weighted: bool = False
    supports_decreased_variant: bool = False

    # Recovery entries are capped off recovery days
    category: Category = "regular"

    def __post_init__(self) -> None:
        if not self.exercise_id:
            raise ValueError("exercise_id must be non-empty")
        if self.points_per_unit < 0:
            raise ValueError("points_per_unit must be non-negative")
        if self.unit not in UNITS:
            raise ValueError(f"Invalid unit: {self.unit}. Must be one of {UNITS}")
        if self.category not in CATEGORIES:
            raise ValueError(f"Invalid category: {self.category}. Must be one of {CATEGORIES}")
