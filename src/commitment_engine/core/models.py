"""
Data models for the commitment rules engine.

Plain value types passed into and returned from the rules functions.
Nothing here performs I/O; log entries are read-only snapshots of what the
caller persisted.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Literal, NamedTuple

Mode = Literal["sane", "insane"]
Category = Literal["regular", "recovery", "sport"]
Unit = Literal["reps", "minutes"]

MODES: tuple[str, ...] = ("sane", "insane")
CATEGORIES: tuple[str, ...] = ("regular", "recovery", "sport")
UNITS: tuple[str, ...] = ("reps", "minutes")


class InvalidArgument(ValueError):
    """Raised when a rules function is called with a structurally invalid argument."""


def validate_weekdays(days, name: str) -> frozenset[int]:
    """Return *days* as a frozenset, raising InvalidArgument on indices outside 0-6."""
    result = frozenset(days)
    for d in result:
        if isinstance(d, bool) or not isinstance(d, int) or not 0 <= d <= 6:
            raise InvalidArgument(f"{name} must hold weekday indices 0-6, got {d!r}")
    return result


def validate_mode(mode: str) -> Mode:
    """Return *mode* unchanged, raising InvalidArgument if it is not a known mode."""
    if mode not in MODES:
        raise InvalidArgument(f"Invalid mode: {mode!r}. Must be one of {MODES}")
    return mode  # type: ignore[return-value]


@dataclass(frozen=True)
class GroupConfig:
    """
    Challenge settings shared by every member of an accountability group.

    ``start_date`` is day 1 of the challenge.  ``rest_days`` and
    ``recovery_days`` are weekday indices (0 = Sunday).  When a weekday is
    in both sets it is treated as a rest day.
    """

    start_date: date
    rest_days: frozenset[int] = frozenset()
    recovery_days: frozenset[int] = frozenset()
    penalty_amount: float = 10.0

    def __post_init__(self) -> None:
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "rest_days", validate_weekdays(self.rest_days, "rest_days"))
        object.__setattr__(
            self, "recovery_days", validate_weekdays(self.recovery_days, "recovery_days")
        )
        if self.penalty_amount < 0:
            raise ValueError("penalty_amount must be non-negative")


@dataclass(frozen=True)
class LogEntry:
    """
    One recorded activity.

    ``computed_points`` is the score frozen at logging time and is never
    recomputed.  ``category`` is copied from the exercise when the entry is
    created so history can be split into regular and recovery points without
    the catalog.
    """

    date: date
    exercise_ref: str
    count_or_duration: float
    computed_points: int
    weight: float = 0.0
    is_decreased_variant: bool = False
    category: Category = "regular"

    def __post_init__(self) -> None:
        if self.computed_points < 0:
            raise ValueError("computed_points must be non-negative")
        if self.count_or_duration < 0:
            raise ValueError("count_or_duration must be non-negative")
        if self.weight < 0:
            raise ValueError("weight must be non-negative")
        if self.category not in CATEGORIES:
            raise ValueError(f"Invalid category: {self.category}")

    @property
    def is_recovery(self) -> bool:
        return self.category == "recovery"


@dataclass
class DailyAggregate:
    """Sum of one member's logged points for one calendar date."""

    date: date
    regular_points: int = 0  # regular + sport
    recovery_points: int = 0  # raw, before any cap
    recovery_entries: list[int] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.regular_points + self.recovery_points


@dataclass(frozen=True)
class DayProgress:
    """
    How a member stands against one day's target.

    ``total`` counts recovery points after the cap; ``recovery_raw`` keeps the
    uncapped sum for display.
    """

    date: date
    target: int
    regular_points: int
    recovery_raw: int
    recovery_effective: int
    is_rest_day: bool
    is_recovery_day: bool

    @property
    def total(self) -> int:
        return self.regular_points + self.recovery_effective

    @property
    def met(self) -> bool:
        return self.total >= self.target

    @property
    def remaining(self) -> int:
        return max(0, self.target - self.total)


class StreakResult(NamedTuple):
    """Current and longest run of qualifying days."""

    current_streak: int
    longest_streak: int
