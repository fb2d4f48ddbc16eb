"""
Exercise registry.

All catalog exercises are registered here.  Use get_exercise() to look up
an ExerciseDefinition by its exercise_id string.

Exercises are loaded from per-exercise YAML files in the bundled
``src/commitment_engine/exercises/`` directory at import time.  If no
definition can be loaded, a RuntimeError is raised: scoring cannot work
without a catalog.

User overrides: place matching files in ``~/.commitment-engine/exercises/``.
"""

from .base import ExerciseDefinition


def _build_registry() -> dict[str, ExerciseDefinition]:
    from .loader import load_exercises_from_yaml

    loaded = load_exercises_from_yaml()
    if not loaded:
        raise RuntimeError(
            "commitment-engine: no exercise definitions could be loaded from YAML. "
            "Check that src/commitment_engine/exercises/*.yaml files are present and valid."
        )
    return loaded


EXERCISE_REGISTRY: dict[str, ExerciseDefinition] = _build_registry()


def get_exercise(exercise_id: str) -> ExerciseDefinition:
    """
    Return the ExerciseDefinition for the given exercise_id.

    Raises:
        ValueError: If exercise_id is not in the registry
    """
    if exercise_id not in EXERCISE_REGISTRY:
        valid = ", ".join(sorted(EXERCISE_REGISTRY))
        raise ValueError(f"Unknown exercise '{exercise_id}'. Valid IDs: {valid}")
    return EXERCISE_REGISTRY[exercise_id]


def exercises_by_category() -> dict[str, list[ExerciseDefinition]]:
    """Group the catalog by category, each list sorted by display name."""
    grouped: dict[str, list[ExerciseDefinition]] = {}
    for ex in EXERCISE_REGISTRY.values():
        grouped.setdefault(ex.category, []).append(ex)
    for items in grouped.values():
        items.sort(key=lambda e: e.display_name)
    return grouped
