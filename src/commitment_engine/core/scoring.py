"""
Point scoring for logged exercises.

score_entry() values one entry at logging time; the result is stored on the
LogEntry and never recomputed.  effective_recovery_points() derives how much
of today's recovery work counts towards the target: off recovery days the
recovery subtotal is capped at a quarter of the day's target.
"""

import math

from .config import (
    DECREASED_VARIANT_BONUS,
    RECOVERY_CAP_FRACTION,
    SCORE_ROUNDING_DIGITS,
    WEIGHT_BAND_START,
    WEIGHT_BAND_WIDTH,
    WEIGHT_MULTIPLIER_STEP,
)
from .exercises.base import ExerciseDefinition
from .models import InvalidArgument


def weight_multiplier(weight: float | None) -> float:
    """
    Step multiplier for added weight.

    1.0 below 10, then +0.5 for every started 5-unit band:

        10-14.9 → 1.5,  15-19.9 → 2.0,  20-24.9 → 2.5,  ...

    Args:
        weight: Added weight; None or <= 0 means bodyweight

    Returns:
        Multiplier >= 1.0
    """
    if weight is None or weight < WEIGHT_BAND_START:
        return 1.0
    bands = math.floor((weight - WEIGHT_BAND_START) / WEIGHT_BAND_WIDTH) + 1
    return 1.0 + WEIGHT_MULTIPLIER_STEP * bands


def raw_entry_score(
    exercise: ExerciseDefinition,
    quantity: float,
    weight: float | None = 0.0,
) -> float:
    """Unrounded score before the decreased-variant bonus."""
    if quantity <= 0:
        return 0.0
    points = quantity * exercise.points_per_unit
    if exercise.is_weighted and weight is not None and weight > 0:
        points *= weight_multiplier(weight)
    return points


def score_entry(
    exercise: ExerciseDefinition,
    quantity: float,
    weight: float | None = 0.0,
    is_decreased: bool = False,
) -> int:
    """
    Points earned by one logged entry.

    Args:
        exercise: Catalog definition of the exercise
        quantity: Repetitions or minutes, depending on exercise.unit
        weight: Added weight (None is treated as bodyweight)
        is_decreased: Entry was logged as the decreased variant

    Returns:
        Points, rounded up; 0 when quantity <= 0
    """
    points = raw_entry_score(exercise, quantity, weight)
    if points <= 0:
        return 0
    if is_decreased and exercise.supports_decreased_variant:
        points *= DECREASED_VARIANT_BONUS
    return math.ceil(round(points, SCORE_ROUNDING_DIGITS))


def recovery_cap(daily_target: int) -> int:
    """Most recovery points that count on a non-recovery day."""
    if daily_target < 0:
        raise InvalidArgument(f"daily_target must be non-negative, got {daily_target}")
    return math.floor(daily_target * RECOVERY_CAP_FRACTION)


def effective_recovery_points(
    all_recovery_entries_today: list[int],
    daily_target: int,
    is_recovery_day: bool,
) -> list[int]:
    """
    Contribution of each of today's recovery entries after the cap.

    On a recovery day every entry counts in full.  Otherwise, when the raw
    sum exceeds the cap, every entry shrinks in proportion to its raw size
    (floored), so the sum of the result never exceeds the cap.

    Args:
        all_recovery_entries_today: Raw scores of today's recovery entries
        daily_target: Today's target
        is_recovery_day: Today is one of the group's recovery days

    Returns:
        Effective points, one per input entry, in input order
    """
    cap = recovery_cap(daily_target)
    entries = [int(p) for p in all_recovery_entries_today]

    if is_recovery_day:
        return entries

    raw_sum = sum(entries)
    if raw_sum == 0:
        return [0] * len(entries)
    if raw_sum <= cap:
        return entries
    return [p * cap // raw_sum for p in entries]


def preview_recovery_contribution(
    raw_points: int,
    today_recovery_scores: list[int],
    daily_target: int,
    is_recovery_day: bool,
) -> int:
    """
    How many points a new recovery entry would add to today's total.

    Used before logging to tell the member that the cap is (nearly) reached.
    """
    if is_recovery_day:
        return raw_points
    available = max(0, recovery_cap(daily_target) - sum(today_recovery_scores))
    return min(raw_points, available)
