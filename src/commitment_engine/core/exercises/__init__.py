"""
Exercise catalog for the commitment rules engine.

Each exercise is described by an ExerciseDefinition that the point scorer
uses to value logged entries.
"""

from .base import ExerciseDefinition
from .registry import EXERCISE_REGISTRY, get_exercise

__all__ = [
    "ExerciseDefinition",
    "EXERCISE_REGISTRY",
    "get_exercise",
]
