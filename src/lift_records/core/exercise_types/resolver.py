"""
Exercise -> strategy resolution.

The type name comes from the exercise's static attributes:

    explicit exercise_type tag   -> that type ("banded" maps by band_type)
    band_type set                -> banded_resistance / banded_assistance
    is_bodyweight                -> bodyweight
    otherwise                    -> regular

Resolved strategies are cached in a StrategyCache owned by the caller. A
type whose class is missing, abstract or unconfigured falls back to the
configured fallback type (regular); if that fails too, resolution raises
StrategyResolutionFailure.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..models import Exercise
from .base import ExerciseTypesConfig
from .errors import StrategyResolutionFailure
from .loader import load_exercise_types_config
from .registry import STRATEGY_REGISTRY
from .strategy import ExerciseTypeStrategy

logger = logging.getLogger(__name__)

CacheKey = tuple[Any, Any, bool, Any]


def banded_type_name(band_type: str | None) -> str:
    return "banded_assistance" if band_type == "assistance" else "banded_resistance"


def determine_type_name(exercise: Exercise) -> str:
    """Map an exercise's attributes to a strategy type name."""
    if exercise.exercise_type:
        if exercise.exercise_type == "banded" and exercise.band_type is not None:
            return banded_type_name(exercise.band_type)
        return exercise.exercise_type
    if exercise.band_type is not None:
        return banded_type_name(exercise.band_type)
    if exercise.is_bodyweight:
        return "bodyweight"
    return "regular"


class StrategyCache:
    """
    Strategy instances keyed by (exercise id, band type, bodyweight flag, type tag).

    Writes only happen on a miss and store an equivalent instance, so a
    cache shared between threads needs no locking.
    """

    def __init__(self) -> None:
        self._strategies: dict[CacheKey, ExerciseTypeStrategy] = {}

    @staticmethod
    def key_for(exercise: Exercise) -> CacheKey:
        return (exercise.id, exercise.band_type, bool(exercise.is_bodyweight), exercise.exercise_type)

    def get(self, key: CacheKey) -> ExerciseTypeStrategy | None:
        return self._strategies.get(key)

    def put(self, key: CacheKey, strategy: ExerciseTypeStrategy) -> None:
        self._strategies[key] = strategy

    def clear(self) -> None:
        self._strategies.clear()

    def __len__(self) -> int:
        return len(self._strategies)

    def __contains__(self, key: object) -> bool:
        return key in self._strategies


class ExerciseTypeResolver:
    """Resolve exercises to strategies with caching and a fallback type."""

    def __init__(
        self,
        config: ExerciseTypesConfig | None = None,
        registry: Mapping[str, Any] | None = None,
        cache: StrategyCache | None = None,
    ) -> None:
        self.config = config if config is not None else load_exercise_types_config()
        self.registry: dict[str, Any] = dict(registry) if registry is not None else dict(STRATEGY_REGISTRY)
        self.cache = cache if cache is not None else StrategyCache()

    def available_types(self) -> list[str]:
        """Type names that have both a registered class and a config row."""
        return [name for name in self.registry if name in self.config.types]

    def is_type_supported(self, type_name: str) -> bool:
        try:
            self.resolve_type_name(type_name)
        except (ValueError, TypeError):
            return False
        return True

    def resolve_type_name(self, type_name: str) -> ExerciseTypeStrategy:
        """
        Instantiate the strategy registered for *type_name*.

        Raises:
            ValueError: If the type has no class or no config row
            TypeError: If the registered class is not a usable strategy
        """
        cls = self.registry.get(type_name)
        if cls is None:
            valid = ", ".join(self.registry)
            raise ValueError(f"Unknown exercise type '{type_name}'. Valid types: {valid}")
        if not (isinstance(cls, type) and issubclass(cls, ExerciseTypeStrategy)):
            raise TypeError(f"{cls!r} registered for '{type_name}' is not an ExerciseTypeStrategy")
        return cls(self.config)

    def resolve(self, exercise: Exercise) -> ExerciseTypeStrategy:
        """
        Return the strategy for *exercise*.

        Raises:
            StrategyResolutionFailure: If neither the resolved type nor the
                fallback type can be instantiated
        """
        key = StrategyCache.key_for(exercise)
        if self.config.cache_strategies:
            cached = self.cache.get(key)
            if cached is not None:
                return cached

        type_name = determine_type_name(exercise)
        try:
            strategy = self.resolve_type_name(type_name)
        except (ValueError, TypeError) as exc:
            strategy = self._resolve_fallback(exercise, type_name, exc)

        if self.config.cache_strategies:
            self.cache.put(key, strategy)
        return strategy

    def _resolve_fallback(
        self, exercise: Exercise, type_name: str, error: Exception
    ) -> ExerciseTypeStrategy:
        fallback = self.config.fallback_type
        message = f"No usable exercise type for exercise {exercise.id!r} ('{type_name}'): {error}"
        if fallback == type_name:
            raise StrategyResolutionFailure(message, type_name, exercise.id) from error

        logger.warning(
            "Exercise type '%s' unusable for exercise %r (%s); falling back to '%s'",
            type_name,
            exercise.id,
            error,
            fallback,
        )
        try:
            return self.resolve_type_name(fallback)
        except (ValueError, TypeError) as fallback_error:
            logger.error("Fallback exercise type '%s' unusable: %s", fallback, fallback_error)
            raise StrategyResolutionFailure(message, type_name, exercise.id) from error


def get_strategy(exercise: Exercise, cache: StrategyCache | None = None) -> ExerciseTypeStrategy:
    """Resolve *exercise* with the default configuration."""
    return ExerciseTypeResolver(cache=cache).resolve(exercise)
