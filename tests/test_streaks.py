"""
Tests for daily aggregation, streaks, promotion, and day progress.

Calendar used throughout: the challenge starts on Monday 2026-01-05 (day 1).
Weekday indices: 0 = Sunday, 1 = Monday, 5 = Friday.
"""

from datetime import date, timedelta

import pytest

from commitment_engine.core.models import GroupConfig, InvalidArgument, LogEntry
from commitment_engine.core.streaks import (
    aggregate_daily,
    compute_day_progress,
    compute_streak,
    missed_days,
    should_promote,
)
from commitment_engine.core.targets import full_target, target_for_date

# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

START = date(2026, 1, 5)  # Monday
MONDAY = 1
FRIDAY = 5
NO_DAYS: frozenset[int] = frozenset()


def _day(n: int) -> date:
    """Calendar date of challenge day n (1-based)."""
    return START + timedelta(days=n - 1)


def _log(on: date, points: int, category: str = "regular") -> LogEntry:
    return LogEntry(
        date=on,
        exercise_ref="stretching" if category == "recovery" else "push_up",
        count_or_duration=max(1, points),
        computed_points=points,
        category=category,
    )


def _meet(n: int, mode: str = "insane") -> LogEntry:
    """A log that exactly meets the full target of day n."""
    return _log(_day(n), full_target(n, mode))


def _group(rest=NO_DAYS, recovery=NO_DAYS) -> GroupConfig:
    return GroupConfig(start_date=START, rest_days=frozenset(rest), recovery_days=frozenset(recovery))


# ===========================================================================
# aggregate_daily
# ===========================================================================

class TestAggregateDaily:

    def test_sums_per_date_and_partitions_recovery(self):
        logs = [
            _log(_day(1), 5),
            _log(_day(1), 3, "recovery"),
            _log(_day(1), 2, "sport"),
            _log(_day(2), 4),
        ]
        days = aggregate_daily(logs)
        assert list(days) == [_day(1), _day(2)]
        assert days[_day(1)].regular_points == 7
        assert days[_day(1)].recovery_points == 3
        assert days[_day(1)].recovery_entries == [3]
        assert days[_day(1)].total == 10
        assert days[_day(2)].total == 4

    def test_order_of_input_irrelevant(self):
        logs = [_log(_day(3), 1), _log(_day(1), 1)]
        assert list(aggregate_daily(logs)) == [_day(1), _day(3)]

    def test_empty(self):
        assert aggregate_daily([]) == {}


# ===========================================================================
# compute_streak
# ===========================================================================

class TestComputeStreak:

    def test_empty_history(self):
        assert compute_streak([], START, NO_DAYS, NO_DAYS) == (0, 0)

    def test_scenario_met_missed_met(self):
        """Meets days 1-5, misses day 6, meets 7-12, nothing on 13-14."""
        logs = [_meet(n) for n in range(1, 6)]
        logs.append(_log(_day(6), 1))
        logs += [_meet(n) for n in range(7, 13)]

        result = compute_streak(logs, START, NO_DAYS, NO_DAYS, "insane")
        assert result.current_streak == 6
        assert result.longest_streak == 6

        # Same answer when evaluated on day 14 with nothing logged yet
        assert compute_streak(logs, START, NO_DAYS, NO_DAYS, "insane", today=_day(14)) == (6, 6)

    def test_unlogged_day_breaks_streak(self):
        logs = [_meet(1), _meet(2), _meet(4), _meet(5)]
        assert compute_streak(logs, START, NO_DAYS, NO_DAYS) == (2, 2)

    def test_meeting_only_sane_target_does_not_count(self):
        logs = [_meet(n, "sane") for n in range(2, 6)]  # sane < insane from day 1
        assert compute_streak(logs, START, NO_DAYS, NO_DAYS) == (0, 0)

    def test_mode_parameter_selects_curve(self):
        logs = [_meet(n, "sane") for n in range(1, 6)]
        assert compute_streak(logs, START, NO_DAYS, NO_DAYS, "sane") == (5, 5)

    def test_longest_keeps_earlier_longer_run(self):
        logs = [_meet(n) for n in range(1, 8)] + [_log(_day(8), 0)] + [_meet(9), _meet(10)]
        assert compute_streak(logs, START, NO_DAYS, NO_DAYS) == (2, 7)

    def test_last_day_missed_gives_zero_current(self):
        logs = [_meet(1), _meet(2), _log(_day(3), 1)]
        assert compute_streak(logs, START, NO_DAYS, NO_DAYS) == (0, 2)

    def test_rest_and_recovery_days_are_skipped(self):
        # Day 1 and 8 are Mondays (rest), day 5 is Friday (recovery): none logged
        logs = [_meet(n) for n in range(2, 11) if n not in (5, 8)]
        result = compute_streak(logs, START, {MONDAY}, {FRIDAY})
        assert result == (7, 7)

    def test_zero_log_on_rest_day_changes_nothing(self):
        logs = [_meet(n) for n in range(2, 8)] + [_meet(9), _meet(10)]
        with_zero = logs + [_log(_day(8), 0)]  # day 8 = Monday
        expected = compute_streak(logs, START, {MONDAY}, NO_DAYS)
        assert compute_streak(with_zero, START, {MONDAY}, NO_DAYS) == expected
        assert expected == (8, 8)

    def test_in_progress_today_does_not_break_streak(self):
        logs = [_meet(n) for n in range(1, 5)]
        assert compute_streak(logs, START, NO_DAYS, NO_DAYS, today=_day(5)) == (4, 4)

    def test_today_with_points_counts_when_met(self):
        logs = [_meet(n) for n in range(1, 6)]
        assert compute_streak(logs, START, NO_DAYS, NO_DAYS, today=_day(5)) == (5, 5)

    def test_today_with_partial_points_breaks_current(self):
        logs = [_meet(n) for n in range(1, 5)] + [_log(_day(5), 1)]
        assert compute_streak(logs, START, NO_DAYS, NO_DAYS, today=_day(5)) == (0, 4)

    def test_logs_before_start_ignored(self):
        logs = [_log(START - timedelta(days=1), 1000), _meet(1), _meet(2)]
        assert compute_streak(logs, START, NO_DAYS, NO_DAYS) == (2, 2)

    def test_invalid_weekday_set(self):
        with pytest.raises(InvalidArgument):
            compute_streak([_meet(1)], START, {9}, NO_DAYS)


# ===========================================================================
# should_promote
# ===========================================================================

class TestShouldPromote:

    def test_sane_member_reaching_insane_target(self):
        assert should_promote(15, 15, "sane") is True
        assert should_promote(16, 15, "sane") is True

    def test_below_target(self):
        assert should_promote(14, 15, "sane") is False

    def test_insane_member_never_promoted(self):
        assert should_promote(100, 15, "insane") is False

    def test_no_points_never_promotes(self):
        assert should_promote(0, 0, "sane") is False

    def test_points_on_zero_target_day_promote(self):
        assert should_promote(5, 0, "sane") is True
        assert should_promote(5, 0, "insane") is False

    def test_ten_day_scenario(self):
        """Sane member, rest Monday, recovery Friday: nothing logged until day 10."""
        group = _group({MONDAY}, {FRIDAY})
        day10_target = target_for_date(group, "insane", _day(10))
        assert day10_target == 15

        for n in range(1, 11):
            total = day10_target if n == 10 else 0
            insane_target = target_for_date(group, "insane", _day(n))
            assert should_promote(total, insane_target, "sane") is (n == 10), n


# ===========================================================================
# compute_day_progress / missed_days
# ===========================================================================

class TestDayProgress:

    def test_recovery_capped_off_recovery_day(self):
        # Day 10 (Wed), sane target 10, cap 2; recovery raw 6 → 1 + 1
        group = _group({MONDAY}, {FRIDAY})
        logs = [
            _log(_day(10), 6),
            _log(_day(10), 3, "recovery"),
            _log(_day(10), 3, "recovery"),
            _log(_day(9), 50),
        ]
        p = compute_day_progress(logs, group, "sane", _day(10))
        assert p.target == 10
        assert p.regular_points == 6
        assert p.recovery_raw == 6
        assert p.recovery_effective == 2
        assert p.total == 8
        assert not p.met
        assert p.remaining == 2

    def test_recovery_day_uncapped(self):
        # Day 12 is Friday: sane full 12 → target 3, recovery counts fully
        group = _group({MONDAY}, {FRIDAY})
        logs = [_log(_day(12), 3, "recovery"), _log(_day(12), 3, "recovery")]
        p = compute_day_progress(logs, group, "sane", _day(12))
        assert p.is_recovery_day
        assert p.target == 3
        assert p.recovery_effective == 6
        assert p.met

    def test_rest_day_always_met(self):
        group = _group({MONDAY}, {FRIDAY})
        p = compute_day_progress([], group, "insane", _day(8))
        assert p.is_rest_day
        assert p.target == 0
        assert p.met


class TestMissedDays:

    def test_week_without_logs(self):
        group = _group({MONDAY}, {FRIDAY})
        missed = missed_days([], group, "sane", _day(1), _day(7))
        # Monday (day 1) is a rest day; every other day has a target > 0
        assert [p.date for p in missed] == [_day(n) for n in range(2, 8)]

    def test_met_day_not_reported(self):
        group = _group({MONDAY}, {FRIDAY})
        missed = missed_days([_log(_day(2), 2)], group, "sane", _day(1), _day(7))
        assert _day(2) not in [p.date for p in missed]
        assert len(missed) == 5

    def test_days_before_start_not_reported(self):
        group = _group({MONDAY}, {FRIDAY})
        assert missed_days([], group, "sane", START - timedelta(days=4), START) == []

    def test_end_before_start_rejected(self):
        with pytest.raises(InvalidArgument):
            missed_days([], _group(), "sane", _day(5), _day(1))
