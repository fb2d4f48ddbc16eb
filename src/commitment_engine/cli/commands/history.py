"""History commands: day, streak, missed."""

import json
from datetime import timedelta
from typing import Annotated, Optional

import typer

from ...core.models import InvalidArgument
from ...core.streaks import compute_day_progress, compute_streak, missed_days, should_promote
from ...core.targets import target_for_date
from ...io.serializers import day_progress_to_dict, streak_to_dict
from .. import views
from ..app import (
    DateOption,
    GroupOption,
    JsonOption,
    LogsOption,
    ModeOption,
    app,
    check_mode,
    load_group,
    load_logs,
    resolve_date,
)


@app.command()
def day(
    logs_path: LogsOption,
    group_path: GroupOption,
    date: DateOption = None,
    mode: ModeOption = "sane",
    json_out: JsonOption = False,
) -> None:
    """
    Show one day's progress against the target, with the recovery cap applied.
    """
    check_mode(mode)
    group = load_group(group_path)
    entries = load_logs(logs_path)
    on_date = resolve_date(date)

    progress = compute_day_progress(entries, group, mode, on_date)  # type: ignore[arg-type]
    # Promotion is judged on the insane target, whatever the current mode
    insane = compute_day_progress(entries, group, "insane", on_date)
    promote = should_promote(insane.total, target_for_date(group, "insane", on_date), mode)  # type: ignore[arg-type]

    if json_out:
        out = day_progress_to_dict(progress)
        out["mode"] = mode
        out["should_promote"] = promote
        print(json.dumps(out, indent=2))
        return

    views.console.print()
    views.print_day_progress(progress, mode)
    if promote:
        views.print_success("Insane target reached: member should be promoted to insane mode")
    views.console.print()


@app.command()
def streak(
    logs_path: LogsOption,
    group_path: GroupOption,
    today: Annotated[
        Optional[str],
        typer.Option("--today", "-t", help="Today's date; an empty today does not break the streak"),
    ] = None,
    mode: ModeOption = "insane",
    json_out: JsonOption = False,
) -> None:
    """
    Show the current and longest streak of days meeting the target.
    """
    check_mode(mode)
    group = load_group(group_path)
    entries = load_logs(logs_path)
    today_date = resolve_date(today)

    result = compute_streak(
        entries,
        group.start_date,
        group.rest_days,
        group.recovery_days,
        mode,  # type: ignore[arg-type]
        today=today_date,
    )

    if json_out:
        print(json.dumps(streak_to_dict(result), indent=2))
        return

    views.console.print()
    views.console.print(views.format_group_summary(group))
    views.print_streak(result)
    views.console.print()


@app.command()
def missed(
    logs_path: LogsOption,
    group_path: GroupOption,
    start: Annotated[
        Optional[str],
        typer.Option("--from", help="First date to check (default: 7 days before --to)"),
    ] = None,
    end: Annotated[
        Optional[str],
        typer.Option("--to", help="Last date to check (default: yesterday)"),
    ] = None,
    mode: ModeOption = "sane",
    json_out: JsonOption = False,
) -> None:
    """
    List days that fell short of the target (penalty candidates).
    """
    check_mode(mode)
    group = load_group(group_path)
    entries = load_logs(logs_path)

    end_date = resolve_date(end) if end is not None else resolve_date(None) - timedelta(days=1)
    start_date = resolve_date(start) if start is not None else end_date - timedelta(days=6)

    try:
        days = missed_days(entries, group, mode, start_date, end_date)  # type: ignore[arg-type]
    except InvalidArgument as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps({
            "missed": [day_progress_to_dict(p) for p in days],
            "penalty_total": group.penalty_amount * len(days),
        }, indent=2))
        return

    if not days:
        views.print_success(f"No missed days between {start_date} and {end_date}.")
        return

    views.console.print(views.format_progress_table(days, title="Missed Days"))
    views.print_warning(
        f"{len(days)} missed day(s), penalty {group.penalty_amount * len(days):g}"
    )
