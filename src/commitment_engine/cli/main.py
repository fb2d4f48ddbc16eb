"""
CLI entry point using Typer.

Provides commands for inspecting the commitment rules:
- target: Points required on a day
- score: Points an exercise entry is worth
- exercises: List the exercise catalog
- day: One day's progress, with the recovery cap applied
- streak: Current and longest streak
- missed: Days that fell short of the target
"""

from .app import app
from .commands import history, rules  # noqa: F401  (registers commands)

__all__ = ["app"]


if __name__ == "__main__":
    app()
