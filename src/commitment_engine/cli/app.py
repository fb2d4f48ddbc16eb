"""Shared Typer app object, shared option types, and input loading helpers."""

from datetime import date, datetime
from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.models import MODES, GroupConfig, LogEntry
from ..io.log_files import LogFile, load_group_config
from ..io.serializers import ValidationError, parse_date
from . import views

# Shared options used across commands
ModeOption = Annotated[
    str,
    typer.Option("--mode", "-m", help="Member mode: sane | insane"),
]

GroupOption = Annotated[
    Path,
    typer.Option("--group", "-g", help="Group settings file (.json or .yaml)"),
]

LogsOption = Annotated[
    Path,
    typer.Option("--logs", "-l", help="Log export (JSONL, one entry per line)"),
]

DateOption = Annotated[
    Optional[str],
    typer.Option("--date", "-d", help="Date to evaluate (YYYY-MM-DD, default: today)"),
]

JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

app = typer.Typer(
    name="commitment-engine",
    help="Daily targets, exercise points and streaks for fitness accountability groups.",
    no_args_is_help=True,
)


def resolve_date(value: str | None) -> date:
    """Parse --date, defaulting to today; exit with an error when invalid."""
    if value is None:
        return datetime.now().date()
    try:
        return parse_date(value)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)


def check_mode(mode: str) -> str:
    if mode not in MODES:
        views.print_error(f"Invalid mode: {mode}. Must be one of {', '.join(MODES)}")
        raise typer.Exit(1)
    return mode


def load_group(path: Path) -> GroupConfig:
    """Load --group, reporting problems the same way every command does."""
    try:
        return load_group_config(path)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)


def load_logs(path: Path) -> list[LogEntry]:
    """Load --logs, reporting problems the same way every command does."""
    try:
        return LogFile(path).load_entries()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)
