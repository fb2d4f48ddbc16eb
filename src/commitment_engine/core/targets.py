"""
Daily target calculation.

The full-intensity target ramps with the number of days since the group's
challenge started; each mode follows its own TargetCurve (see config.py).
Rest days require nothing, recovery days require a quarter of the full
target.
"""

import math
from datetime import date

from .config import RECOVERY_DAY_TARGET_FRACTION, TARGET_CURVES, TargetCurve
from .models import GroupConfig, InvalidArgument, Mode, validate_mode


def curve_value(curve: TargetCurve, days_since_start: int) -> int:
    """
    Evaluate a target curve on day *days_since_start* (1-based).

    Before ``weekly_after_day`` the ramp advances every day:

        target(d) = floor + floor(daily_increment * (d - 1))

    After it, only whole weeks past the taper day add another increment.

    Args:
        curve: Ramp parameters for one mode
        days_since_start: Day number, already clamped to >= 1

    Returns:
        Full-intensity target (non-negative int)
    """
    steps = float(days_since_start - 1)
    taper = curve.weekly_after_day
    if taper is not None and days_since_start > taper:
        steps = (taper - 1) + (days_since_start - taper) // 7
    return curve.floor + math.floor(curve.daily_increment * steps)


def full_target(days_since_start: int, mode: Mode) -> int:
    """Target for an ordinary (non-rest, non-recovery) day."""
    validate_mode(mode)
    if days_since_start < 0:
        raise InvalidArgument(
            f"days_since_start must be non-negative, got {days_since_start}"
        )
    return curve_value(TARGET_CURVES[mode], max(1, days_since_start))


def compute_daily_target(
    days_since_start: int,
    mode: Mode,
    rest_days: set[int] | frozenset[int],
    recovery_days: set[int] | frozenset[int],
    day_of_week: int,
) -> int:
    """
    Compute the number of points a member must earn on one day.

    Day 0 is treated as day 1.  When a weekday is both a rest and a recovery
    day, the rest rule wins.

    Args:
        days_since_start: 1 on the group's start date
        mode: "sane" or "insane"
        rest_days: Weekday indices (0 = Sunday) with no requirement
        recovery_days: Weekday indices with a reduced requirement
        day_of_week: Weekday index of the day being evaluated

    Returns:
        Required points (non-negative int)

    Raises:
        InvalidArgument: day_of_week outside 0-6, negative days_since_start,
            or an unknown mode
    """
    if isinstance(day_of_week, bool) or not isinstance(day_of_week, int) or not 0 <= day_of_week <= 6:
        raise InvalidArgument(f"day_of_week must be 0-6, got {day_of_week!r}")

    target = full_target(days_since_start, mode)

    if day_of_week in rest_days:
        return 0
    if day_of_week in recovery_days:
        return math.floor(target * RECOVERY_DAY_TARGET_FRACTION)
    return target


def day_of_week(on_date: date) -> int:
    """Weekday index of a date, 0 = Sunday ... 6 = Saturday."""
    return (on_date.weekday() + 1) % 7


def days_since_start(start_date: date, on_date: date) -> int:
    """
    Day number of *on_date* in a challenge that began on *start_date*.

    The start date is day 1; dates before it are clamped to day 1.
    """
    return max(1, (on_date - start_date).days + 1)


def is_rest_day(group: GroupConfig, on_date: date) -> bool:
    return day_of_week(on_date) in group.rest_days


def is_recovery_day(group: GroupConfig, on_date: date) -> bool:
    """Recovery rules apply only when the day is not also a rest day."""
    dow = day_of_week(on_date)
    return dow in group.recovery_days and dow not in group.rest_days


def target_for_date(group: GroupConfig, mode: Mode, on_date: date) -> int:
    """Convenience wrapper: the target of *on_date* for a member of *group*."""
    return compute_daily_target(
        days_since_start(group.start_date, on_date),
        mode,
        group.rest_days,
        group.recovery_days,
        day_of_week(on_date),
    )
