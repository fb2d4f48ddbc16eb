"""
Tuning constants for the commitment rules.

All adjustable parameters are centralized here.  Values can be overridden
per installation through rules.yaml (see core/engine/config_loader.py);
the constants below are the defaults used when no YAML is available.
"""

from dataclasses import dataclass
from typing import Final

from .engine.config_loader import load_model_config

# =============================================================================
# WEEKDAYS
# =============================================================================

# Weekday indices follow the stored group settings: 0 = Sunday ... 6 = Saturday
WEEKDAY_NAMES: Final[tuple[str, ...]] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

# =============================================================================
# DAILY TARGET
# =============================================================================

RECOVERY_DAY_TARGET_FRACTION: Final[float] = 0.25  # Recovery day = 25% of full target


@dataclass(frozen=True)
class TargetCurve:
    """
    Ramp of the full-intensity target for one mode.

    target(d) = floor + floor(daily_increment * (d - 1))

    Past ``weekly_after_day`` the ramp only advances once every 7 days.
    """

    floor: int
    daily_increment: float
    weekly_after_day: int | None = None

    def __post_init__(self) -> None:
        if self.floor < 0:
            raise ValueError("TargetCurve.floor must be non-negative")
        if self.daily_increment < 0:
            raise ValueError("TargetCurve.daily_increment must be non-negative")
        if self.weekly_after_day is not None and self.weekly_after_day < 1:
            raise ValueError("TargetCurve.weekly_after_day must be >= 1")


DEFAULT_TARGET_CURVES: Final[dict[str, TargetCurve]] = {
    "sane": TargetCurve(floor=1, daily_increment=1.0, weekly_after_day=449),
    "insane": TargetCurve(floor=2, daily_increment=1.5),
}

# =============================================================================
# POINT SCORING
# =============================================================================

WEIGHT_BAND_START: Final[float] = 10.0  # First weight that earns a bonus
WEIGHT_BAND_WIDTH: Final[float] = 5.0  # Width of each multiplier band
WEIGHT_MULTIPLIER_STEP: Final[float] = 0.5  # Added multiplier per band
DECREASED_VARIANT_BONUS: Final[float] = 1.5

# Float noise tolerance before rounding a score up (0.1 * 3 * 10 != 3.0)
SCORE_ROUNDING_DIGITS: Final[int] = 9

# =============================================================================
# RECOVERY CAP
# =============================================================================

RECOVERY_CAP_FRACTION: Final[float] = 0.25  # Off recovery days, recovery <= 25% of target

# =============================================================================
# PENALTIES
# =============================================================================

DEFAULT_PENALTY_AMOUNT: Final[float] = 10.0  # Shown next to each missed day


def _curve_from_dict(d: dict, fallback: TargetCurve) -> TargetCurve:
    weekly = d.get("weekly_after_day", fallback.weekly_after_day)
    return TargetCurve(
        floor=int(d.get("floor", fallback.floor)),
        daily_increment=float(d.get("daily_increment", fallback.daily_increment)),
        weekly_after_day=int(weekly) if weekly is not None else None,
    )


def curves_are_ordered(sane: TargetCurve, insane: TargetCurve) -> bool:
    """
    Check that the insane curve can never fall below the sane curve.

    Insane must start higher and ramp faster than sane, and taper no earlier
    than sane does.
    """
    if insane.floor <= sane.floor or insane.daily_increment <= sane.daily_increment:
        return False
    if insane.weekly_after_day is None:
        return True
    if sane.weekly_after_day is None:
        return False
    return insane.weekly_after_day >= sane.weekly_after_day


def load_target_curves() -> dict[str, TargetCurve]:
    """
    Return the target curves, applying YAML overrides when they are valid.

    Overrides that break the sane <= insane ordering are ignored with a
    warning so the calculator contract always holds.
    """
    import warnings

    section = load_model_config().get("target_curves") or {}
    if not isinstance(section, dict) or not section:
        return dict(DEFAULT_TARGET_CURVES)

    try:
        curves = {
            mode: _curve_from_dict(section.get(mode) or {}, default)
            for mode, default in DEFAULT_TARGET_CURVES.items()
        }
    except (TypeError, ValueError) as exc:
        warnings.warn(
            f"commitment-engine: invalid target_curves in rules.yaml ({exc}); "
            "using defaults.",
            stacklevel=2,
        )
        return dict(DEFAULT_TARGET_CURVES)

    if not curves_are_ordered(curves["sane"], curves["insane"]):
        warnings.warn(
            "commitment-engine: target_curves override would let the sane target "
            "exceed the insane target; using defaults.",
            stacklevel=2,
        )
        return dict(DEFAULT_TARGET_CURVES)

    return curves


TARGET_CURVES: Final[dict[str, TargetCurve]] = load_target_curves()
