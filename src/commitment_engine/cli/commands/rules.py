"""Rules commands: target, score, exercises."""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from ...core.exercises.loader import exercise_to_dict
from ...core.exercises.registry import exercises_by_category, get_exercise
from ...core.models import InvalidArgument
from ...core.scoring import preview_recovery_contribution, raw_entry_score, score_entry, weight_multiplier
from ...core.streaks import aggregate_daily
from ...core.targets import (
    compute_daily_target,
    day_of_week,
    days_since_start,
    is_recovery_day,
    target_for_date,
)
from ...io.serializers import ValidationError, group_config_to_dict, parse_weekday_option
from .. import views
from ..app import DateOption, JsonOption, ModeOption, app, check_mode, load_group, load_logs, resolve_date


@app.command()
def target(
    group_path: Annotated[
        Optional[Path],
        typer.Option("--group", "-g", help="Group settings file (.json or .yaml)"),
    ] = None,
    date: DateOption = None,
    day: Annotated[
        Optional[int],
        typer.Option("--day", help="Day number since start (1 = start date); skips --group"),
    ] = None,
    weekday: Annotated[
        Optional[int],
        typer.Option("--weekday", help="Weekday index 0-6 (0 = Sunday), used with --day"),
    ] = None,
    rest_days: Annotated[
        Optional[str],
        typer.Option("--rest-days", help="Rest weekdays with --day, e.g. 1"),
    ] = None,
    recovery_days: Annotated[
        Optional[str],
        typer.Option("--recovery-days", help="Recovery weekdays with --day, e.g. 5"),
    ] = None,
    mode: ModeOption = "sane",
    json_out: JsonOption = False,
) -> None:
    """
    Show the number of points required on a day.

    Either from a group file and a date:

      commitment-engine target --group group.json --date 2026-03-02 --mode insane

    or from raw inputs:

      commitment-engine target --day 12 --weekday 3 --rest-days 1 --recovery-days 5
    """
    check_mode(mode)

    if day is not None:
        if weekday is None:
            views.print_error("--weekday is required with --day")
            raise typer.Exit(1)
        try:
            rest = parse_weekday_option(rest_days, "--rest-days")
            recovery = parse_weekday_option(recovery_days, "--recovery-days")
            value = compute_daily_target(day, mode, rest, recovery, weekday)  # type: ignore[arg-type]
        except (ValidationError, InvalidArgument) as e:
            views.print_error(str(e))
            raise typer.Exit(1)
        if json_out:
            print(json.dumps({"day": day, "weekday": weekday, "mode": mode, "target": value}))
            return
        views.console.print(f"Day {day} ({mode}): [bold]{value}[/bold] points")
        return

    if group_path is None:
        views.print_error("Provide --group, or --day with --weekday")
        raise typer.Exit(1)

    group = load_group(group_path)
    on_date = resolve_date(date)
    value = target_for_date(group, mode, on_date)  # type: ignore[arg-type]
    day_number = days_since_start(group.start_date, on_date)

    if json_out:
        print(json.dumps({
            "date": on_date.isoformat(),
            "day": day_number,
            "weekday": day_of_week(on_date),
            "mode": mode,
            "target": value,
            "group": group_config_to_dict(group),
        }))
        return

    views.console.print(views.format_group_summary(group))
    views.console.print(
        f"{on_date.isoformat()} (day {day_number}, {mode}): [bold]{value}[/bold] points"
    )


@app.command()
def score(
    exercise_id: Annotated[
        str,
        typer.Option("--exercise", "-e", help="Exercise ID from the catalog"),
    ],
    quantity: Annotated[
        float,
        typer.Option("--quantity", "-q", help="Repetitions or minutes"),
    ],
    weight: Annotated[
        float,
        typer.Option("--weight", "-w", help="Added weight (0 = bodyweight)"),
    ] = 0.0,
    decreased: Annotated[
        bool,
        typer.Option("--decreased", help="Logged as the decreased variant"),
    ] = False,
    group_path: Annotated[
        Optional[Path],
        typer.Option("--group", "-g", help="Group file, to preview the recovery cap"),
    ] = None,
    logs_path: Annotated[
        Optional[Path],
        typer.Option("--logs", "-l", help="Log export, to preview the recovery cap"),
    ] = None,
    date: DateOption = None,
    mode: ModeOption = "sane",
    json_out: JsonOption = False,
) -> None:
    """
    Show how many points an exercise entry is worth.

    For recovery exercises, pass --group and --logs to see how much of the
    entry would count today once the recovery cap is applied.
    """
    check_mode(mode)
    try:
        exercise = get_exercise(exercise_id)
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    points = score_entry(exercise, quantity, weight, decreased)
    multiplier = weight_multiplier(weight) if exercise.is_weighted else 1.0

    counted: int | None = None
    if exercise.category == "recovery" and group_path is not None and logs_path is not None:
        group = load_group(group_path)
        on_date = resolve_date(date)
        today = aggregate_daily(load_logs(logs_path)).get(on_date)
        counted = preview_recovery_contribution(
            points,
            today.recovery_entries if today else [],
            target_for_date(group, mode, on_date),  # type: ignore[arg-type]
            is_recovery_day(group, on_date),
        )

    if json_out:
        out = {
            "exercise_id": exercise.exercise_id,
            "quantity": quantity,
            "weight": weight,
            "decreased": decreased and exercise.supports_decreased_variant,
            "raw": round(raw_entry_score(exercise, quantity, weight), 4),
            "weight_multiplier": multiplier,
            "points": points,
        }
        if counted is not None:
            out["counted_today"] = counted
        print(json.dumps(out, indent=2))
        return

    unit = "reps" if exercise.unit == "reps" else "min"
    views.console.print(f"{exercise.display_name}: {quantity:g} {unit}")
    if multiplier > 1.0:
        views.console.print(f"- Weight multiplier: x{multiplier:g}")
    if decreased:
        if exercise.supports_decreased_variant:
            views.console.print("- Decreased variant bonus: x1.5")
        else:
            views.print_warning(f"{exercise.display_name} has no decreased variant; no bonus")
    if points == 0:
        views.print_warning("Quantity must be positive; this entry would not be logged")
    views.console.print(f"Points: [bold]{points}[/bold]")
    if counted is not None and counted < points:
        views.print_info(f"Recovery cap: only {counted} of {points} points would count today")


@app.command()
def exercises(
    category: Annotated[
        Optional[str],
        typer.Option("--category", "-c", help="Filter: regular | recovery | sport"),
    ] = None,
    json_out: JsonOption = False,
) -> None:
    """
    List the exercise catalog.
    """
    grouped = exercises_by_category()
    if category is not None:
        items = grouped.get(category, [])
    else:
        items = [ex for cat in sorted(grouped) for ex in grouped[cat]]

    if json_out:
        print(json.dumps([exercise_to_dict(e) for e in items], indent=2))
        return

    if not items:
        views.print_info("No exercises match.")
        return
    views.console.print(views.format_exercise_table(items))
