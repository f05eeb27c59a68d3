"""
Tests for the exercise-type config: Python defaults, the bundled YAML and
user overrides from ~/.lift-records/exercise_types.yaml.
"""

from datetime import datetime

import pytest
import yaml

from lift_records.core.engine.config_loader import (
    _deep_merge,
    get_bundled_yaml_path,
    get_user_yaml_path,
    load_type_config,
    python_defaults,
)
from lift_records.core.exercise_types import (
    BandedResistanceExerciseType,
    RegularExerciseType,
    StaticHoldExerciseType,
    load_exercise_types_config,
)
from lift_records.core.exercise_types.loader import band_palette_from_dict, config_from_dict
from lift_records.core.models import LiftLog, LiftSet


def _write_user_yaml(home, data) -> None:
    path = home / ".lift-records" / "exercise_types.yaml"
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(data, str):
        path.write_text(data, encoding="utf-8")
    else:
        path.write_text(yaml.safe_dump(data), encoding="utf-8")


class TestDefaults:
    def test_bundled_yaml_is_found(self):
        assert get_bundled_yaml_path() is not None

    def test_no_user_yaml_by_default(self):
        assert get_user_yaml_path() is None

    def test_python_defaults_cover_every_type(self):
        assert set(python_defaults()["types"]) == {
            "regular",
            "bodyweight",
            "banded",
            "banded_resistance",
            "banded_assistance",
            "cardio",
            "static_hold",
        }

    def test_bundled_values(self, type_config):
        assert type_config.types["static_hold"].display_name == "Static Hold"
        assert type_config.types["static_hold"].limit("duration_max") == 300
        assert type_config.bands.ordered_colors() == ["red", "blue", "green"]
        assert type_config.personal_records.max_rep_count == 10
        assert type_config.personal_records.epley_coefficient == pytest.approx(0.0333)
        assert type_config.fallback_type == "regular"
        assert type_config.weight_unit == "lbs"

    def test_progression_steps_come_from_defaults(self, type_config):
        assert type_config.types["cardio"].progression["long_step"] == 100
        assert "weight_step" not in type_config.types["cardio"].progression


class TestUserOverride:
    def test_only_listed_keys_change(self, isolated_home):
        _write_user_yaml(isolated_home, {
            "bands": {"colors": {"black": {"order": 4}}},
            "personal_records": {"max_rep_count": 12},
        })
        config = load_exercise_types_config()
        assert config.bands.ordered_colors() == ["red", "blue", "green", "black"]
        assert config.personal_records.max_rep_count == 12
        assert config.personal_records.one_rm_tolerance == pytest.approx(0.1)

    def test_mixed_case_band_color_validates(self, isolated_home):
        _write_user_yaml(isolated_home, {"bands": {"colors": {"Black": {"order": 4}}}})
        config = load_exercise_types_config()
        assert config.bands.ordered_colors() == ["red", "blue", "green", "black"]
        result = BandedResistanceExerciseType(config).normalize({"band_color": "Black", "reps": 10})
        assert result["band_color"] == "black"

    def test_override_changes_strategy_behaviour(self, isolated_home):
        _write_user_yaml(isolated_home, {
            "types": {
                "regular": {"supports_1rm": False},
                "static_hold": {"progression": {"weight_threshold": 45}},
            },
        })
        config = load_exercise_types_config()
        assert not RegularExerciseType(config).can_calculate_1rm()

        log = LiftLog(
            id=1,
            exercise_id=1,
            logged_at=datetime(2026, 1, 1),
            sets=[LiftSet(reps=1, time=50)],
        )
        assert StaticHoldExerciseType(config).format_progression_suggestion(log) == "Try 50s +5 lbs × 1 set"

    def test_broken_yaml_is_ignored_with_warning(self, isolated_home):
        _write_user_yaml(isolated_home, "types: [unclosed\n")
        with pytest.warns(UserWarning, match="ignoring"):
            cfg = load_type_config()
        assert cfg["display"]["weight_unit"] == "lbs"

    def test_non_mapping_yaml_is_ignored_with_warning(self, isolated_home):
        _write_user_yaml(isolated_home, "- just\n- a list\n")
        with pytest.warns(UserWarning, match="must be a mapping"):
            load_type_config()


class TestLoader:
    def test_bad_type_row_is_skipped(self):
        raw = python_defaults()
        raw["types"]["regular"] = {"validation": {}}
        raw["types"]["bodyweight"] = {
            "name": "Bodyweight",
            "icon": "person",
            "chart_type": "bodyweight_progression",
            "supports_1rm": True,
            "form_fields": ["weight", "reps"],
            "progression_types": ["linear"],
            "display_format": "bodyweight_plus_extra",
            "validation": {"reps_min": 1},
        }
        with pytest.warns(UserWarning, match="skipping exercise type 'regular'"):
            config = config_from_dict(raw)
        assert "regular" not in config.types
        assert "bodyweight" in config.types

    def test_no_usable_types_raises(self):
        raw = python_defaults()
        with pytest.warns(UserWarning):
            with pytest.raises(ValueError, match="No exercise types could be loaded"):
                config_from_dict(raw)

    def test_duplicate_band_orders_rejected(self):
        with pytest.raises(ValueError, match="unique"):
            band_palette_from_dict({
                "colors": {"red": 1, "blue": 1},
                "max_reps_before_band_change": 15,
                "default_reps_on_band_change": 8,
            })

    def test_bare_int_band_orders(self):
        palette = band_palette_from_dict({
            "colors": {"green": 3, "red": 1},
            "max_reps_before_band_change": 12,
            "default_reps_on_band_change": 6,
        })
        assert palette.ordered_colors() == ["red", "green"]
        assert palette.order_of("green") == 3
        assert "red" in palette

    def test_band_color_keys_are_lower_cased(self):
        palette = band_palette_from_dict({
            "colors": {"Red": 1, "BLUE": {"order": 2}},
            "max_reps_before_band_change": 15,
            "default_reps_on_band_change": 8,
        })
        assert palette.ordered_colors() == ["red", "blue"]
        assert "Red" not in palette


class TestDeepMerge:
    def test_nested_merge_is_non_destructive(self):
        base = {"a": {"x": 1, "y": 2}, "b": 1}
        merged = _deep_merge(base, {"a": {"y": 3}, "c": 4})
        assert merged == {"a": {"x": 1, "y": 3}, "b": 1, "c": 4}
        assert base == {"a": {"x": 1, "y": 2}, "b": 1}
