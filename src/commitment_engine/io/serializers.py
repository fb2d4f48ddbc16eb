"""
JSON serialization for rules data models.

Handles conversion between dataclasses and JSON-compatible dicts.
"""

import json
import math
import re
from datetime import date, datetime
from typing import Any

from ..core.config import DEFAULT_PENALTY_AMOUNT
from ..core.models import (
    CATEGORIES,
    DayProgress,
    GroupConfig,
    InvalidArgument,
    LogEntry,
    StreakResult,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def parse_date(date_str: str) -> date:
    """
    Validate an ISO date string and convert it to a date.

    Args:
        date_str: Date string to validate

    Returns:
        Parsed date

    Raises:
        ValidationError: If date format is invalid
    """
    if not isinstance(date_str, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValidationError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str}") from e


def validate_non_negative(value: int | float, name: str) -> int | float:
    """
    Validate that a value is a finite, non-negative number.

    Raises:
        ValidationError: If value is negative, NaN/infinite, or not a number
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValidationError(f"{name} must be finite, got {value}")
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


def parse_weekday_list(value: Any, name: str) -> frozenset[int]:
    """
    Validate a list of weekday indices (0 = Sunday ... 6 = Saturday).

    Raises:
        ValidationError: If the value is not a list of ints in 0-6
    """
    if value is None:
        return frozenset()
    if not isinstance(value, (list, tuple, set, frozenset)):
        raise ValidationError(f"{name} must be a list of weekday indices, got {value!r}")
    for d in value:
        if isinstance(d, bool) or not isinstance(d, int) or not 0 <= d <= 6:
            raise ValidationError(f"{name} must hold weekday indices 0-6, got {d!r}")
    return frozenset(value)


def parse_weekday_option(text: str | None, name: str) -> frozenset[int]:
    """
    Parse a CLI weekday list such as "1,5" or "" into weekday indices.

    Raises:
        ValidationError: If an item is not an integer in 0-6
    """
    if text is None or not text.strip():
        return frozenset()
    days: list[int] = []
    for part in text.split(","):
        part = part.strip()
        if not re.fullmatch(r"\d+", part):
            raise ValidationError(f"{name}: '{part}' is not a weekday index (0-6)")
        days.append(int(part))
    return parse_weekday_list(days, name)


def log_entry_to_dict(entry: LogEntry) -> dict[str, Any]:
    """
    Convert LogEntry to JSON-compatible dict.

    Args:
        entry: LogEntry to convert

    Returns:
        Dict representation
    """
    return {
        "date": entry.date.isoformat(),
        "exercise_ref": entry.exercise_ref,
        "count_or_duration": entry.count_or_duration,
        "weight": entry.weight,
        "is_decreased_variant": entry.is_decreased_variant,
        "computed_points": entry.computed_points,
        "category": entry.category,
    }


def dict_to_log_entry(data: dict[str, Any]) -> LogEntry:
    """
    Convert dict to LogEntry.

    ``weight`` and ``is_decreased_variant`` are optional; ``category``
    defaults to "regular".

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Log entry must be an object, got {type(data).__name__}")
    for key in ("date", "exercise_ref", "count_or_duration", "computed_points"):
        if key not in data:
            raise ValidationError(f"Log entry missing field: {key}")

    entry_date = parse_date(data["date"])
    validate_non_negative(data["count_or_duration"], "count_or_duration")
    validate_non_negative(data["computed_points"], "computed_points")
    weight = data.get("weight") or 0.0
    validate_non_negative(weight, "weight")

    points = data["computed_points"]
    if int(points) != points:
        raise ValidationError(f"computed_points must be an integer, got {points}")

    decreased = data.get("is_decreased_variant", False)
    if not isinstance(decreased, bool):
        raise ValidationError(f"is_decreased_variant must be true or false, got {decreased!r}")

    category = data.get("category", "regular")
    if category not in CATEGORIES:
        raise ValidationError(f"Invalid category: {category}. Must be one of {CATEGORIES}")

    return LogEntry(
        date=entry_date,
        exercise_ref=str(data["exercise_ref"]),
        count_or_duration=float(data["count_or_duration"]),
        computed_points=int(points),
        weight=float(weight),
        is_decreased_variant=decreased,
        category=category,
    )


def group_config_to_dict(group: GroupConfig) -> dict[str, Any]:
    """Convert GroupConfig to JSON-compatible dict."""
    return {
        "start_date": group.start_date.isoformat(),
        "rest_days": sorted(group.rest_days),
        "recovery_days": sorted(group.recovery_days),
        "penalty_amount": group.penalty_amount,
    }


def dict_to_group_config(data: dict[str, Any]) -> GroupConfig:
    """
    Convert dict to GroupConfig.

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Group config must be an object")
    if "start_date" not in data:
        raise ValidationError("Group config missing field: start_date")

    start = data["start_date"]
    # YAML turns unquoted ISO dates into date objects already
    start_date = start if isinstance(start, date) else parse_date(start)

    penalty = data.get("penalty_amount", DEFAULT_PENALTY_AMOUNT)
    validate_non_negative(penalty, "penalty_amount")

    try:
        return GroupConfig(
            start_date=start_date,
            rest_days=parse_weekday_list(data.get("rest_days"), "rest_days"),
            recovery_days=parse_weekday_list(data.get("recovery_days"), "recovery_days"),
            penalty_amount=float(penalty),
        )
    except InvalidArgument as e:
        raise ValidationError(str(e)) from e


def day_progress_to_dict(progress: DayProgress) -> dict[str, Any]:
    """Convert DayProgress to JSON-compatible dict (derived fields included)."""
    return {
        "date": progress.date.isoformat(),
        "target": progress.target,
        "regular_points": progress.regular_points,
        "recovery_raw": progress.recovery_raw,
        "recovery_effective": progress.recovery_effective,
        "total": progress.total,
        "remaining": progress.remaining,
        "met": progress.met,
        "is_rest_day": progress.is_rest_day,
        "is_recovery_day": progress.is_recovery_day,
    }


def streak_to_dict(streak: StreakResult) -> dict[str, int]:
    return {
        "current_streak": streak.current_streak,
        "longest_streak": streak.longest_streak,
    }


def log_entry_to_json_line(entry: LogEntry) -> str:
    """
    Serialize a log entry to a single JSON line.

    Returns:
        JSON string (single line, no trailing newline)
    """
    return json.dumps(log_entry_to_dict(entry), separators=(",", ":"))


def json_line_to_log_entry(line: str) -> LogEntry:
    """
    Deserialize a JSON line to a LogEntry.

    Raises:
        ValidationError: If JSON is invalid or data validation fails
    """
    try:
        data = json.loads(line.strip())
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}") from e

    return dict_to_log_entry(data)
