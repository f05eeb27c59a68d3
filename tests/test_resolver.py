"""
Tests for exercise -> strategy resolution: type mapping, caching, the
fallback type and resolution failures.
"""

import logging
from dataclasses import replace

import pytest

from lift_records.core.exercise_types import (
    STRATEGY_REGISTRY,
    BandedAssistanceExerciseType,
    BandedResistanceExerciseType,
    BodyweightExerciseType,
    ExerciseTypeResolver,
    ExerciseTypeStrategy,
    RegularExerciseType,
    StaticHoldExerciseType,
    StrategyCache,
    StrategyResolutionFailure,
    determine_type_name,
    get_strategy,
    get_strategy_class,
)
from lift_records.core.models import Exercise


def _exercise(exercise_id=1, **kwargs) -> Exercise:
    return Exercise(id=exercise_id, title="Test exercise", **kwargs)


def _registry_without(*names: str) -> dict:
    return {k: v for k, v in STRATEGY_REGISTRY.items() if k not in names}


class _HalfDoneStrategy(ExerciseTypeStrategy):
    """Registered under a real name but missing its abstract methods."""

    type_name = "static_hold"


# ---------------------------------------------------------------------------
# Type mapping
# ---------------------------------------------------------------------------


class TestDetermineTypeName:
    @pytest.mark.parametrize(
        "kwargs, expected",
        [
            ({}, "regular"),
            ({"is_bodyweight": True}, "bodyweight"),
            ({"band_type": "resistance"}, "banded_resistance"),
            ({"band_type": "assistance"}, "banded_assistance"),
            ({"band_type": "assistance", "is_bodyweight": True}, "banded_assistance"),
            ({"exercise_type": "static_hold"}, "static_hold"),
            ({"exercise_type": "cardio", "is_bodyweight": True}, "cardio"),
            ({"exercise_type": "banded", "band_type": "assistance"}, "banded_assistance"),
            ({"exercise_type": "banded"}, "banded"),
        ],
    )
    def test_mapping(self, kwargs, expected):
        assert determine_type_name(_exercise(**kwargs)) == expected

    def test_none_band_type_is_normalized(self):
        assert _exercise(band_type="none").band_type is None

    def test_invalid_band_type_rejected(self):
        with pytest.raises(ValueError):
            _exercise(band_type="elastic")


class TestRegistry:
    def test_all_types_registered(self):
        assert set(STRATEGY_REGISTRY) == {
            "regular",
            "bodyweight",
            "banded",
            "banded_resistance",
            "banded_assistance",
            "cardio",
            "static_hold",
        }

    def test_unknown_class_lookup(self):
        with pytest.raises(ValueError, match="Valid types: regular"):
            get_strategy_class("yoga")


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


class TestResolve:
    def test_resolves_each_modality(self, type_config):
        resolver = ExerciseTypeResolver(type_config)
        assert isinstance(resolver.resolve(_exercise(1)), RegularExerciseType)
        assert isinstance(resolver.resolve(_exercise(2, is_bodyweight=True)), BodyweightExerciseType)
        assert isinstance(resolver.resolve(_exercise(3, band_type="resistance")), BandedResistanceExerciseType)
        assert isinstance(resolver.resolve(_exercise(4, band_type="assistance")), BandedAssistanceExerciseType)
        assert isinstance(resolver.resolve(_exercise(5, exercise_type="static_hold")), StaticHoldExerciseType)

    def test_available_types(self, type_config):
        resolver = ExerciseTypeResolver(type_config)
        assert set(resolver.available_types()) == set(STRATEGY_REGISTRY)
        assert resolver.is_type_supported("cardio")
        assert not resolver.is_type_supported("yoga")

    def test_unknown_type_name(self, type_config):
        with pytest.raises(ValueError, match="Unknown exercise type 'yoga'"):
            ExerciseTypeResolver(type_config).resolve_type_name("yoga")

    def test_module_level_helper(self):
        assert isinstance(get_strategy(_exercise(exercise_type="static_hold")), StaticHoldExerciseType)


class TestCaching:
    def test_same_exercise_reuses_instance(self, type_config):
        cache = StrategyCache()
        resolver = ExerciseTypeResolver(type_config, cache=cache)
        exercise = _exercise(7, exercise_type="cardio")

        first = resolver.resolve(exercise)
        assert resolver.resolve(exercise) is first
        assert len(cache) == 1
        assert StrategyCache.key_for(exercise) in cache

    def test_changed_attributes_miss_the_cache(self, type_config):
        resolver = ExerciseTypeResolver(type_config)
        plain = resolver.resolve(_exercise(7))
        bodyweight = resolver.resolve(_exercise(7, is_bodyweight=True))
        assert plain is not bodyweight
        assert len(resolver.cache) == 2

    def test_clear(self, type_config):
        resolver = ExerciseTypeResolver(type_config)
        resolver.resolve(_exercise(1))
        resolver.cache.clear()
        assert len(resolver.cache) == 0

    def test_caching_can_be_disabled(self, type_config):
        config = replace(type_config, cache_strategies=False)
        resolver = ExerciseTypeResolver(config)
        exercise = _exercise(1)
        assert resolver.resolve(exercise) is not resolver.resolve(exercise)
        assert len(resolver.cache) == 0

    def test_shared_cache_between_resolvers(self, type_config):
        cache = StrategyCache()
        exercise = _exercise(1, exercise_type="static_hold")
        first = ExerciseTypeResolver(type_config, cache=cache).resolve(exercise)
        assert ExerciseTypeResolver(type_config, cache=cache).resolve(exercise) is first


class TestFallback:
    def test_missing_class_falls_back_to_regular(self, type_config, caplog):
        resolver = ExerciseTypeResolver(type_config, registry=_registry_without("cardio"))
        with caplog.at_level(logging.WARNING, logger="lift_records.core.exercise_types.resolver"):
            strategy = resolver.resolve(_exercise(exercise_type="cardio"))
        assert isinstance(strategy, RegularExerciseType)
        assert "falling back to 'regular'" in caplog.text

    def test_abstract_class_falls_back(self, type_config):
        registry = {**STRATEGY_REGISTRY, "static_hold": _HalfDoneStrategy}
        resolver = ExerciseTypeResolver(type_config, registry=registry)
        assert isinstance(resolver.resolve(_exercise(exercise_type="static_hold")), RegularExerciseType)

    def test_non_strategy_class_falls_back(self, type_config):
        registry = {**STRATEGY_REGISTRY, "cardio": dict}
        resolver = ExerciseTypeResolver(type_config, registry=registry)
        assert isinstance(resolver.resolve(_exercise(exercise_type="cardio")), RegularExerciseType)
        assert not resolver.is_type_supported("cardio")

    def test_unconfigured_type_falls_back(self, type_config):
        types = {k: v for k, v in type_config.types.items() if k != "bodyweight"}
        resolver = ExerciseTypeResolver(replace(type_config, types=types))
        assert isinstance(resolver.resolve(_exercise(is_bodyweight=True)), RegularExerciseType)

    def test_fallback_failure_raises(self, type_config):
        resolver = ExerciseTypeResolver(type_config, registry=_registry_without("cardio", "regular"))
        with pytest.raises(StrategyResolutionFailure) as exc:
            resolver.resolve(_exercise(42, exercise_type="cardio"))
        assert exc.value.type_name == "cardio"
        assert exc.value.exercise_id == 42
        assert isinstance(exc.value.__cause__, ValueError)

    def test_fallback_type_itself_failing(self, type_config):
        resolver = ExerciseTypeResolver(type_config, registry=_registry_without("regular"))
        with pytest.raises(StrategyResolutionFailure, match="'regular'"):
            resolver.resolve(_exercise())
