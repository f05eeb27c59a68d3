"""
YAML -> exercise-type config loader.

Loads the exercise-type table from exercise_types.yaml (bundled with the
package) over the Python defaults from config.py, then optionally merges
user overrides from ~/.lift-records/exercise_types.yaml.

Usage:
    from lift_records.core.engine.config_loader import load_type_config
    cfg = load_type_config()
    palette = cfg["bands"]["colors"]

If the bundled YAML cannot be parsed the Python defaults are used as-is.
If the user override file exists but cannot be parsed, a warning is issued
and the file is ignored.
"""

from __future__ import annotations

import os
import warnings
from pathlib import Path
from typing import Any

import yaml

from .. import config

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; warn and return {} if it is unreadable."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"lift-records: ignoring {path} ({exc})", stacklevel=3)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        warnings.warn(
            f"lift-records: ignoring {path} (top level must be a mapping)",
            stacklevel=3,
        )
        return {}
    return data


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def python_defaults() -> dict[str, Any]:
    """Config sections built from the constants in config.py."""
    return {
        "factory": {
            "fallback_type": config.FALLBACK_TYPE,
            "cache_strategies": config.CACHE_STRATEGIES,
        },
        "display": {
            "weight_unit": config.WEIGHT_UNIT,
            "precision": config.DISPLAY_PRECISION,
        },
        "bands": {
            "colors": {color: {"order": order} for color, order in config.BAND_COLORS.items()},
            "max_reps_before_band_change": config.MAX_REPS_BEFORE_BAND_CHANGE,
            "default_reps_on_band_change": config.DEFAULT_REPS_ON_BAND_CHANGE,
        },
        "personal_records": {
            "max_rep_count": config.MAX_REP_COUNT_FOR_PR,
            "one_rm_tolerance": config.ONE_RM_TOLERANCE,
            "volume_tolerance_fraction": config.VOLUME_TOLERANCE_FRACTION,
            "weight_bucket_tolerance": config.WEIGHT_BUCKET_TOLERANCE,
            "distance_tolerance": config.DISTANCE_TOLERANCE,
            "max_rounds": config.MAX_ROUNDS_FOR_PR,
            "epley_coefficient": config.EPLEY_COEFFICIENT,
        },
        "types": _type_defaults(),
    }


def _type_defaults() -> dict[str, Any]:
    """Per-type validation ranges and progression steps from config.py."""
    lift_validation = {
        "weight_min": config.WEIGHT_MIN,
        "reps_min": config.REPS_MIN,
        "reps_max": config.REPS_MAX,
    }
    banded = {"validation": dict(lift_validation)}
    return {
        "regular": {
            "validation": dict(lift_validation),
            "progression": {
                "rep_range_low": config.REGULAR_REP_RANGE_LOW,
                "rep_range_high": config.REGULAR_REP_RANGE_HIGH,
                "weight_step": config.REGULAR_WEIGHT_STEP,
            },
        },
        "bodyweight": {
            "validation": dict(lift_validation),
            "progression": {
                "reps_to_add_weight": config.BODYWEIGHT_REPS_TO_ADD_WEIGHT,
                "reps_to_increase_weight": config.BODYWEIGHT_REPS_TO_INCREASE_WEIGHT,
                "weight_step": config.BODYWEIGHT_WEIGHT_STEP,
            },
        },
        "banded": dict(banded),
        "banded_resistance": dict(banded),
        "banded_assistance": dict(banded),
        "cardio": {
            "validation": {
                "distance_min": config.DISTANCE_MIN,
                "distance_max": config.DISTANCE_MAX,
            },
            "progression": {
                "short_distance": config.CARDIO_SHORT_DISTANCE,
                "rounds_threshold": config.CARDIO_ROUNDS_THRESHOLD,
                "short_step": config.CARDIO_SHORT_STEP,
                "long_step": config.CARDIO_LONG_STEP,
                "max_distance": config.CARDIO_MAX_DISTANCE,
                "max_rounds": config.CARDIO_MAX_ROUNDS,
                "default_distance": config.CARDIO_DEFAULT_DISTANCE,
                "default_rounds": config.CARDIO_DEFAULT_ROUNDS,
            },
        },
        "static_hold": {
            "validation": {
                "duration_min": config.DURATION_MIN,
                "duration_max": config.DURATION_MAX,
                "weight_min": config.WEIGHT_MIN,
            },
            "progression": {
                "weight_threshold": config.HOLD_WEIGHT_THRESHOLD,
                "short_duration": config.HOLD_SHORT_DURATION,
                "short_step": config.HOLD_SHORT_STEP,
                "long_step": config.HOLD_LONG_STEP,
                "weight_step": config.HOLD_WEIGHT_STEP,
                "max_sets": config.HOLD_MAX_SETS,
                "max_duration": config.HOLD_MAX_DURATION,
                "default_sets": config.HOLD_DEFAULT_SETS,
                "default_duration": config.HOLD_DEFAULT_DURATION,
            },
        },
    }


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_bundled_yaml_path() -> Path | None:
    """Return the path to the bundled exercise_types.yaml, or None if not found."""
    # config_loader.py lives at src/lift_records/core/engine/config_loader.py
    candidate = Path(__file__).parent.parent.parent / "exercise_types.yaml"
    return candidate if candidate.exists() else None


def get_user_yaml_path() -> Path | None:
    """Return ~/.lift-records/exercise_types.yaml if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / ".lift-records" / "exercise_types.yaml"
    return p if p.exists() else None


def load_type_config() -> dict[str, Any]:
    """
    Load and merge the exercise-type configuration.

    Load order (later overrides earlier):
    1. Python defaults from config.py
    2. Bundled src/lift_records/exercise_types.yaml
    3. User override at ~/.lift-records/exercise_types.yaml

    Returns:
        Merged dict of config sections.
    """
    cfg = python_defaults()

    bundled = get_bundled_yaml_path()
    if bundled is not None:
        cfg = _deep_merge(cfg, _load_yaml_file(bundled))

    user = get_user_yaml_path()
    if user is not None:
        cfg = _deep_merge(cfg, _load_yaml_file(user))

    return cfg
