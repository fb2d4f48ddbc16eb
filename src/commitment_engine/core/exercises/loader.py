"""
YAML → ExerciseDefinition loader.

Loads exercise definitions from individual YAML files in the bundled
``src/commitment_engine/exercises/`` directory.  Each file (e.g.
push_up.yaml) contains a flat definition matching the ExerciseDefinition
schema.

User overrides: place matching files in ``~/.commitment-engine/exercises/``.
A user file is deep-merged over the bundled definition, so only changed
keys need to be listed.  A user file whose stem does not match any bundled
file is treated as a new exercise and added to the catalog.

Usage (internal, called by registry.py):
    from .loader import load_exercises_from_yaml
    exercises = load_exercises_from_yaml()   # dict or None when nothing loads
"""

from __future__ import annotations

import warnings
from pathlib import Path

from ..engine.config_loader import deep_merge, get_user_config_dir, load_yaml_file
from .base import ExerciseDefinition

_REQUIRED_EXERCISE_FIELDS: frozenset[str] = frozenset(
    {
        "exercise_id",
        "display_name",
        "points_per_unit",
    }
)


def _as_bool(value, name: str) -> bool:
    if isinstance(value, bool):
        return value
    raise ValueError(f"{name} must be true or false, got {value!r}")


def exercise_from_dict(d: dict) -> ExerciseDefinition:
    """Convert a raw dict (from YAML or JSON) to an ExerciseDefinition.

    Raises ValueError if a required field is absent or a value is invalid.
    """
    missing = _REQUIRED_EXERCISE_FIELDS - set(d)
    if missing:
        raise ValueError(f"ExerciseDefinition missing fields: {sorted(missing)}")

    return ExerciseDefinition(
        exercise_id=str(d["exercise_id"]),
        display_name=str(d["display_name"]),
        points_per_unit=float(d["points_per_unit"]),
        unit=str(d.get("unit", "reps")),  # type: ignore[arg-type]
        is_weighted=_as_bool(d.get("is_weighted", False), "is_weighted"),
        supports_decreased_variant=_as_bool(
            d.get("supports_decreased_variant", False), "supports_decreased_variant"
        ),
        category=str(d.get("category", "regular")),  # type: ignore[arg-type]
    )


def exercise_to_dict(ex: ExerciseDefinition) -> dict:
    """Inverse of exercise_from_dict, for --json output."""
    return {
        "exercise_id": ex.exercise_id,
        "display_name": ex.display_name,
        "points_per_unit": ex.points_per_unit,
        "unit": ex.unit,
        "is_weighted": ex.is_weighted,
        "supports_decreased_variant": ex.supports_decreased_variant,
        "category": ex.category,
    }


def _get_bundled_exercises_dir() -> Path | None:
    """Return path to the bundled exercises/ data directory, or None if not found."""
    # loader.py lives at src/commitment_engine/core/exercises/loader.py
    # three levels up → src/commitment_engine/
    candidate = Path(__file__).parent.parent.parent / "exercises"
    return candidate if candidate.is_dir() else None


def _get_user_exercises_dir() -> Path | None:
    """Return ~/.commitment-engine/exercises/ if it exists, else None."""
    p = get_user_config_dir() / "exercises"
    return p if p.is_dir() else None


def _add_exercise(result: dict[str, ExerciseDefinition], raw: dict, label: str) -> None:
    try:
        ex = exercise_from_dict(raw)
    except (TypeError, ValueError) as exc:
        warnings.warn(f"commitment-engine: skipping exercise '{label}': {exc}", stacklevel=3)
        return
    result[ex.exercise_id] = ex


def load_exercises_from_yaml(
    bundled_dir: Path | None = None,
    user_dir: Path | None = None,
) -> dict[str, ExerciseDefinition] | None:
    """Return {exercise_id: ExerciseDefinition} loaded from per-exercise YAML files.

    Directories default to the bundled catalog and ``~/.commitment-engine/exercises``.
    Invalid files are skipped with a warning.

    Returns None (rather than raising) when nothing could be loaded so the
    registry decides how to fail.
    """
    if bundled_dir is None:
        bundled_dir = _get_bundled_exercises_dir()
    if user_dir is None:
        user_dir = _get_user_exercises_dir()

    if bundled_dir is None and user_dir is None:
        return None

    result: dict[str, ExerciseDefinition] = {}

    stems: dict[str, Path] = {}
    if bundled_dir is not None:
        for p in sorted(bundled_dir.glob("*.yaml")):
            stems[p.stem] = p

    user_only: list[Path] = []
    if user_dir is not None:
        for p in sorted(user_dir.glob("*.yaml")):
            if p.stem not in stems:
                user_only.append(p)

    for stem, bundled_path in stems.items():
        raw = load_yaml_file(bundled_path)
        if not raw:
            continue
        if user_dir is not None:
            user_path = user_dir / f"{stem}.yaml"
            if user_path.exists():
                raw = deep_merge(raw, load_yaml_file(user_path))
        _add_exercise(result, raw, stem)

    for p in user_only:
        raw = load_yaml_file(p)
        if raw:
            _add_exercise(result, raw, p.stem)

    return result if result else None
