"""
Check-in workflow: score one exercise, store it, and promote if due.

The rules functions are pure; this module wires them to the persistence
collaborators the surrounding application provides.  Reader and writer are
protocols, so any backend (or a test double) can be plugged in.
"""

from dataclasses import dataclass
from datetime import date
from typing import Protocol

from .exercises.base import ExerciseDefinition
from .models import DayProgress, GroupConfig, InvalidArgument, LogEntry, Mode
from .scoring import score_entry
from .streaks import compute_day_progress, should_promote
from .targets import target_for_date


class RulesReader(Protocol):
    """Read side of the persistence layer."""

    def fetch_logs(self, user_id: str, date_range: tuple[date, date]) -> list[LogEntry]: ...

    def fetch_group_config(self, group_id: str) -> GroupConfig: ...

    def fetch_member_mode(self, user_id: str) -> Mode: ...


class RulesWriter(Protocol):
    """Write side of the persistence layer."""

    def persist_log_entry(self, entry: LogEntry) -> LogEntry: ...

    def persist_mode(self, user_id: str, mode: Mode) -> None: ...


@dataclass(frozen=True)
class CheckinResult:
    """Outcome of logging one exercise."""

    entry: LogEntry
    progress: DayProgress  # today's standing, including the new entry
    mode: Mode  # member's mode after the check-in
    promoted: bool


def build_log_entry(
    exercise: ExerciseDefinition,
    quantity: float,
    weight: float | None,
    is_decreased: bool,
    on_date: date,
) -> LogEntry:
    """
    Score an entry and freeze the result into a LogEntry.

    Raises:
        InvalidArgument: quantity <= 0 (nothing to log)
    """
    if quantity <= 0:
        raise InvalidArgument(f"quantity must be positive, got {quantity}")
    weight = weight or 0.0
    return LogEntry(
        date=on_date,
        exercise_ref=exercise.exercise_id,
        count_or_duration=quantity,
        computed_points=score_entry(exercise, quantity, weight, is_decreased),
        weight=weight if exercise.is_weighted else 0.0,
        is_decreased_variant=is_decreased and exercise.supports_decreased_variant,
        category=exercise.category,
    )


def log_exercise(
    reader: RulesReader,
    writer: RulesWriter,
    user_id: str,
    group_id: str,
    exercise: ExerciseDefinition,
    quantity: float,
    weight: float | None,
    is_decreased: bool,
    on_date: date,
) -> CheckinResult:
    """
    Log one exercise for a member and apply automatic promotion.

    Steps:
    1. Score the entry, read today's earlier logs, then persist the entry
       (write-once).
    2. Recompute today's progress from the earlier logs plus the new entry.
    3. If a sane member's total reached today's insane target, persist the
       insane mode.  Today's progress is reported against the mode in force
       after the check-in.

    Args:
        reader: Source of group config, mode, and today's logs
        writer: Sink for the new entry and a mode change
        user_id: Member identifier
        group_id: Member's group identifier
        exercise: Catalog definition of the logged exercise
        quantity: Repetitions or minutes
        weight: Added weight, None or 0 for bodyweight
        is_decreased: Logged as the decreased variant
        on_date: Calendar date of the entry

    Returns:
        CheckinResult with the stored entry and today's standing
    """
    group = reader.fetch_group_config(group_id)
    mode = reader.fetch_member_mode(user_id)
    entry = build_log_entry(exercise, quantity, weight, is_decreased, on_date)

    # Earlier logs only; entries have no identity to dedupe on after the write
    todays_logs = [
        e for e in reader.fetch_logs(user_id, (on_date, on_date)) if e.date == on_date
    ]
    stored = writer.persist_log_entry(entry)
    todays_logs.append(stored)

    insane_progress = compute_day_progress(todays_logs, group, "insane", on_date)
    promoted = should_promote(
        insane_progress.total, target_for_date(group, "insane", on_date), mode
    )
    if promoted:
        writer.persist_mode(user_id, "insane")
        mode = "insane"

    return CheckinResult(
        entry=stored,
        progress=compute_day_progress(todays_logs, group, mode, on_date),
        mode=mode,
        promoted=promoted,
    )
