"""
Streaks, promotion, and day-level progress.

A streak counts consecutive calendar days on which a member's logged
points reached the day's insane target.  Rest and recovery days are
neutral: they neither extend nor break a streak.  Days without any log
count as zero points.
"""

from datetime import date, timedelta

from .models import (
    DailyAggregate,
    DayProgress,
    GroupConfig,
    InvalidArgument,
    LogEntry,
    Mode,
    StreakResult,
    validate_mode,
    validate_weekdays,
)
from .scoring import effective_recovery_points
from .targets import (
    day_of_week,
    days_since_start,
    full_target,
    is_recovery_day,
    is_rest_day,
    target_for_date,
)


def aggregate_daily(log_history: list[LogEntry]) -> dict[date, DailyAggregate]:
    """
    Sum stored points per calendar date.

    Sport entries count as regular points; recovery entries are kept raw so
    callers can apply the cap themselves.

    Args:
        log_history: Log entries in any order

    Returns:
        {date: DailyAggregate}, ordered by date
    """
    days: dict[date, DailyAggregate] = {}
    for entry in sorted(log_history, key=lambda e: e.date):
        agg = days.setdefault(entry.date, DailyAggregate(date=entry.date))
        if entry.is_recovery:
            agg.recovery_points += entry.computed_points
            agg.recovery_entries.append(entry.computed_points)
        else:
            agg.regular_points += entry.computed_points
    return days


def _qualifies(
    total: int,
    on_date: date,
    group_start_date: date,
    mode: Mode,
) -> bool:
    return total >= full_target(days_since_start(group_start_date, on_date), mode)


def compute_streak(
    log_history: list[LogEntry],
    group_start_date: date,
    rest_days: set[int] | frozenset[int],
    recovery_days: set[int] | frozenset[int],
    mode: Mode = "insane",
    today: date | None = None,
) -> StreakResult:
    """
    Current and longest run of days that met the target.

    The history ends at the most recent logged date.  If *today* is given
    and nothing has been earned today yet, today is left out so an
    unfinished day does not break an active streak.  Entries dated before
    the group start are ignored.

    Args:
        log_history: Member's log entries
        group_start_date: Day 1 of the challenge
        rest_days: Weekday indices (0 = Sunday) skipped by the walk
        recovery_days: Weekday indices skipped by the walk
        mode: Target curve to measure against (insane by default)
        today: Current date, if the history may contain an in-progress day

    Returns:
        StreakResult(current_streak, longest_streak)
    """
    validate_mode(mode)
    excluded = validate_weekdays(rest_days, "rest_days") | validate_weekdays(
        recovery_days, "recovery_days"
    )

    totals = {
        d: agg.total
        for d, agg in aggregate_daily(log_history).items()
        if d >= group_start_date
    }
    if today is not None:
        totals = {d: t for d, t in totals.items() if d <= today}
        if totals.get(today, 0) == 0:
            totals.pop(today, None)
    if not totals:
        return StreakResult(0, 0)

    end = max(totals)

    # Current: backward from the last logged day, stop at the first miss
    current = 0
    day = end
    while day >= group_start_date:
        if day_of_week(day) not in excluded:
            if not _qualifies(totals.get(day, 0), day, group_start_date, mode):
                break
            current += 1
        day -= timedelta(days=1)

    # Longest: forward from the start date, reset on a miss
    longest = 0
    run = 0
    day = group_start_date
    while day <= end:
        if day_of_week(day) not in excluded:
            if _qualifies(totals.get(day, 0), day, group_start_date, mode):
                run += 1
                longest = max(longest, run)
            else:
                run = 0
        day += timedelta(days=1)

    return StreakResult(current, longest)


def should_promote(today_total: int, today_insane_target: int, current_mode: Mode) -> bool:
    """
    True when a sane member has reached the insane target today.

    Promotion is one-way; an insane member is never demoted here.  A day
    with no points earned never promotes, even when its target is 0.
    """
    validate_mode(current_mode)
    if today_total <= 0:
        return False
    return current_mode == "sane" and today_total >= today_insane_target


def compute_day_progress(
    entries: list[LogEntry],
    group: GroupConfig,
    mode: Mode,
    on_date: date,
) -> DayProgress:
    """
    Progress of one member on one day, recovery cap applied.

    Entries dated on other days are ignored, so the full history may be
    passed in.
    """
    target = target_for_date(group, mode, on_date)
    agg = aggregate_daily([e for e in entries if e.date == on_date]).get(
        on_date, DailyAggregate(date=on_date)
    )
    recovery_day = is_recovery_day(group, on_date)
    effective = effective_recovery_points(agg.recovery_entries, target, recovery_day)
    return DayProgress(
        date=on_date,
        target=target,
        regular_points=agg.regular_points,
        recovery_raw=agg.recovery_points,
        recovery_effective=sum(effective),
        is_rest_day=is_rest_day(group, on_date),
        is_recovery_day=recovery_day,
    )


def missed_days(
    log_history: list[LogEntry],
    group: GroupConfig,
    mode: Mode,
    start: date,
    end: date,
) -> list[DayProgress]:
    """
    Days in [start, end] on which the member fell short of the target.

    Days before the group's start date are never reported.  These are the
    candidates for a missed-target penalty.
    """
    if end < start:
        raise InvalidArgument(f"end ({end}) is before start ({start})")

    by_date: dict[date, list[LogEntry]] = {}
    for entry in log_history:
        by_date.setdefault(entry.date, []).append(entry)

    missed: list[DayProgress] = []
    day = max(start, group.start_date)
    while day <= end:
        progress = compute_day_progress(by_date.get(day, []), group, mode, day)
        if not progress.met:
            missed.append(progress)
        day += timedelta(days=1)
    return missed
