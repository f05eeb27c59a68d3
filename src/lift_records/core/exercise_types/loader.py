"""
Config dict -> ExerciseTypesConfig loader.

Takes the merged dict from ``core.engine.config_loader`` (Python defaults,
bundled exercise_types.yaml, user overrides) and converts it into frozen
settings objects, checking that every type row carries the required keys.

A user-only type row (one with no strategy class) is loaded like any other;
the resolver decides whether it can be used.

Usage (internal, called by the strategies and the resolver):
    from .loader import load_exercise_types_config
    cfg = load_exercise_types_config()
"""

from __future__ import annotations

import warnings
from typing import Any

from ..engine.config_loader import load_type_config
from .base import BandPalette, ExerciseTypesConfig, PRSettings, TypeSettings

_REQUIRED_TYPE_FIELDS: frozenset[str] = frozenset(
    {
        "name",
        "icon",
        "chart_type",
        "supports_1rm",
        "form_fields",
        "progression_types",
        "display_format",
        "validation",
    }
)

_REQUIRED_PR_FIELDS: frozenset[str] = frozenset(
    {
        "max_rep_count",
        "one_rm_tolerance",
        "volume_tolerance_fraction",
        "weight_bucket_tolerance",
        "distance_tolerance",
        "max_rounds",
        "epley_coefficient",
    }
)

_DIRECTIONS: tuple[str, ...] = ("up", "down")


def type_settings_from_dict(type_name: str, d: dict) -> TypeSettings:
    """Convert one raw type row to TypeSettings.

    Raises ValueError if any required field is absent or malformed.
    """
    missing = _REQUIRED_TYPE_FIELDS - set(d)
    if missing:
        raise ValueError(f"Exercise type '{type_name}' missing fields: {sorted(missing)}")

    direction = d.get("progression_direction")
    if direction is not None and direction not in _DIRECTIONS:
        raise ValueError(
            f"Exercise type '{type_name}': progression_direction must be one of {_DIRECTIONS}"
        )

    validation = d["validation"] or {}
    progression = d.get("progression") or {}
    if not isinstance(validation, dict) or not isinstance(progression, dict):
        raise ValueError(f"Exercise type '{type_name}': validation and progression must be mappings")

    return TypeSettings(
        type_name=type_name,
        display_name=str(d["name"]),
        icon=str(d["icon"]),
        chart_type=str(d["chart_type"]),
        supports_1rm=bool(d["supports_1rm"]),
        form_fields=tuple(str(f) for f in d["form_fields"]),
        progression_types=tuple(str(p) for p in d["progression_types"]),
        display_format=str(d["display_format"]),
        validation={k: float(v) for k, v in validation.items()},
        progression={k: float(v) for k, v in progression.items()},
        progression_direction=direction,
    )


def band_palette_from_dict(d: dict) -> BandPalette:
    """
    Convert the ``bands`` section. Colors accept ``{order: n}`` or a bare int.

    Color names are lower-cased to match validated input; when two names
    differ only in case the later one (the user override) wins.
    """
    raw_colors = d.get("colors") or {}
    colors: dict[str, int] = {}
    for color, entry in raw_colors.items():
        order = entry.get("order") if isinstance(entry, dict) else entry
        if order is None:
            raise ValueError(f"Band color '{color}' has no order")
        colors[str(color).lower()] = int(order)
    if not colors:
        raise ValueError("Band palette must define at least one color")
    if len(set(colors.values())) != len(colors):
        raise ValueError("Band orders must be unique")

    return BandPalette(
        colors=colors,
        max_reps_before_change=int(d["max_reps_before_band_change"]),
        reps_on_change=int(d["default_reps_on_band_change"]),
    )


def pr_settings_from_dict(d: dict) -> PRSettings:
    missing = _REQUIRED_PR_FIELDS - set(d)
    if missing:
        raise ValueError(f"personal_records section missing fields: {sorted(missing)}")
    return PRSettings(
        max_rep_count=int(d["max_rep_count"]),
        one_rm_tolerance=float(d["one_rm_tolerance"]),
        volume_tolerance_fraction=float(d["volume_tolerance_fraction"]),
        weight_bucket_tolerance=float(d["weight_bucket_tolerance"]),
        distance_tolerance=float(d["distance_tolerance"]),
        max_rounds=int(d["max_rounds"]),
        epley_coefficient=float(d["epley_coefficient"]),
    )


def config_from_dict(raw: dict[str, Any]) -> ExerciseTypesConfig:
    """Convert the merged config dict into an ExerciseTypesConfig.

    A malformed type row is skipped with a warning; the rest of the table
    still loads. Malformed shared sections raise ValueError.
    """
    types: dict[str, TypeSettings] = {}
    for type_name, row in (raw.get("types") or {}).items():
        if not isinstance(row, dict):
            warnings.warn(f"lift-records: skipping exercise type '{type_name}' (not a mapping)", stacklevel=2)
            continue
        try:
            types[type_name] = type_settings_from_dict(type_name, row)
        except (ValueError, TypeError) as exc:
            warnings.warn(f"lift-records: skipping exercise type '{type_name}': {exc}", stacklevel=2)

    if not types:
        raise ValueError("No exercise types could be loaded. Check exercise_types.yaml.")

    factory = raw.get("factory") or {}
    display = raw.get("display") or {}
    return ExerciseTypesConfig(
        types=types,
        bands=band_palette_from_dict(raw.get("bands") or {}),
        personal_records=pr_settings_from_dict(raw.get("personal_records") or {}),
        fallback_type=str(factory.get("fallback_type", "regular")),
        cache_strategies=bool(factory.get("cache_strategies", True)),
        weight_unit=str(display.get("weight_unit", "lbs")),
        precision=int(display.get("precision", 1)),
    )


def load_exercise_types_config() -> ExerciseTypesConfig:
    """Load the merged exercise-type table from YAML and the Python defaults."""
    return config_from_dict(load_type_config())
