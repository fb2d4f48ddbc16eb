"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of targets, scores and progress.
"""

from rich.console import Console
from rich.table import Table

from ..core.config import WEEKDAY_NAMES
from ..core.exercises.base import ExerciseDefinition
from ..core.models import DayProgress, GroupConfig, StreakResult
from ..core.targets import day_of_week

console = Console()


def weekday_label(days: frozenset[int]) -> str:
    """Format weekday indices as short names, e.g. "Mon, Fri"."""
    if not days:
        return "none"
    return ", ".join(WEEKDAY_NAMES[d][:3] for d in sorted(days))


def _status_cell(progress: DayProgress) -> str:
    if progress.is_rest_day:
        return "[dim]rest[/dim]"
    if progress.met:
        return "[green]met[/green]"
    return "[red]missed[/red]"


def _recovery_cell(progress: DayProgress) -> str:
    if progress.recovery_raw == progress.recovery_effective:
        return str(progress.recovery_raw)
    # Capped: show what counted and what was logged
    return f"{progress.recovery_effective} [dim](of {progress.recovery_raw})[/dim]"


def format_group_summary(group: GroupConfig) -> str:
    """One-line description of the group's calendar."""
    return (
        f"Start {group.start_date.isoformat()} | "
        f"rest: {weekday_label(group.rest_days)} | "
        f"recovery: {weekday_label(group.recovery_days)}"
    )


def format_progress_table(days: list[DayProgress], title: str = "Daily Progress") -> Table:
    """
    Create a Rich table of day-by-day progress.

    Args:
        days: Progress rows, already in display order
        title: Table title

    Returns:
        Rich Table object
    """
    table = Table(title=title)

    table.add_column("Date", style="cyan")
    table.add_column("Day", style="magenta")
    table.add_column("Target", justify="right", style="bold")
    table.add_column("Regular", justify="right")
    table.add_column("Recovery", justify="right")
    table.add_column("Total", justify="right", style="bold")
    table.add_column("Status")

    for p in days:
        day_name = WEEKDAY_NAMES[day_of_week(p.date)][:3]
        if p.is_recovery_day:
            day_name += " [green](rec)[/green]"
        table.add_row(
            p.date.isoformat(),
            day_name,
            str(p.target),
            str(p.regular_points),
            _recovery_cell(p),
            str(p.total),
            _status_cell(p),
        )

    return table


def format_exercise_table(exercises: list[ExerciseDefinition]) -> Table:
    """Create a Rich table listing catalog exercises."""
    table = Table(title="Exercise Catalog")

    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Category", style="magenta")
    table.add_column("Points", justify="right", style="bold")
    table.add_column("Weighted", justify="center")
    table.add_column("Decreased", justify="center")

    for ex in exercises:
        per = "rep" if ex.unit == "reps" else "min"
        table.add_row(
            ex.exercise_id,
            ex.display_name,
            ex.category,
            f"{ex.points_per_unit:g}/{per}",
            "yes" if ex.is_weighted else "-",
            "yes" if ex.supports_decreased_variant else "-",
        )

    return table


def print_day_progress(progress: DayProgress, mode: str) -> None:
    """Print one day's standing as a short text block."""
    lines = [f"[bold]{progress.date.isoformat()}[/bold] ({mode} mode)"]
    if progress.is_rest_day:
        lines.append("- Rest day: no target")
    else:
        kind = "recovery day" if progress.is_recovery_day else "target"
        lines.append(f"- {kind.capitalize()}: {progress.target} points")
    lines.append(f"- Regular points: {progress.regular_points}")
    lines.append(f"- Recovery points: {_recovery_cell(progress)}")
    lines.append(f"- Total: {progress.total}")
    if not progress.is_rest_day:
        if progress.met:
            lines.append("- [green]Target met[/green]")
        else:
            lines.append(f"- [yellow]{progress.remaining} points to go[/yellow]")
    console.print("\n".join(lines))


def print_streak(streak: StreakResult) -> None:
    console.print(f"Current streak: [bold]{streak.current_streak}[/bold] days")
    console.print(f"Longest streak: [bold]{streak.longest_streak}[/bold] days")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")
