"""
YAML → rules config loader.

Loads tuning overrides from rules.yaml (bundled with the package) and
optionally merges user overrides from ~/.commitment-engine/rules.yaml.

Usage:
    from commitment_engine.core.engine.config_loader import load_model_config
    cfg = load_model_config()
    sane = cfg.get("target_curves", {}).get("sane", {})

If a YAML file cannot be read or parsed, a warning is emitted and the file
is ignored, so lookups fall back to the Python defaults in config.py.
"""

from __future__ import annotations

import os
import warnings
from pathlib import Path
from typing import Any

import yaml

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML mapping; warn and return {} when it is unusable."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"commitment-engine: ignoring {path} ({exc})", stacklevel=2)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        warnings.warn(
            f"commitment-engine: ignoring {path} (top level must be a mapping)",
            stacklevel=2,
        )
        return {}
    return data


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = deep_merge(result[k], v)
        else:
            result[k] = v
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_user_config_dir() -> Path:
    """Return ~/.commitment-engine (may not exist)."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    return home / ".commitment-engine"


def get_bundled_yaml_path() -> Path | None:
    """Return the path to the bundled rules.yaml, or None if not found."""
    # config_loader.py lives at src/commitment_engine/core/engine/config_loader.py
    # three levels up → src/commitment_engine/
    candidate = Path(__file__).parent.parent.parent / "rules.yaml"
    return candidate if candidate.exists() else None


def get_user_yaml_path() -> Path | None:
    """Return ~/.commitment-engine/rules.yaml if it exists, else None."""
    p = get_user_config_dir() / "rules.yaml"
    return p if p.exists() else None


def load_model_config() -> dict[str, Any]:
    """
    Load and merge rules configuration from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/commitment_engine/rules.yaml
    2. User override at ~/.commitment-engine/rules.yaml

    Returns:
        Merged dict of config sections.  Empty dict if no YAML available.
    """
    config: dict[str, Any] = {}

    bundled = get_bundled_yaml_path()
    if bundled is not None:
        config = deep_merge(config, load_yaml_file(bundled))

    user = get_user_yaml_path()
    if user is not None:
        config = deep_merge(config, load_yaml_file(user))

    return config
