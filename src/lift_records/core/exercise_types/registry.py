"""
Strategy registry.

Every exercise-type strategy class is registered here under its type
name. The resolver looks classes up in this table; nothing is resolved by
class name at runtime. Use get_strategy_class() to look a class up by name.
"""

from __future__ import annotations

from .banded import BandedAssistanceExerciseType, BandedExerciseType, BandedResistanceExerciseType
from .bodyweight import BodyweightExerciseType
from .cardio import CardioExerciseType
from .regular import RegularExerciseType
from .static_hold import StaticHoldExerciseType
from .strategy import ExerciseTypeStrategy

STRATEGY_REGISTRY: dict[str, type[ExerciseTypeStrategy]] = {
    cls.type_name: cls
    for cls in (
        RegularExerciseType,
        BodyweightExerciseType,
        BandedExerciseType,
        BandedResistanceExerciseType,
        BandedAssistanceExerciseType,
        CardioExerciseType,
        StaticHoldExerciseType,
    )
}


def get_strategy_class(type_name: str) -> type[ExerciseTypeStrategy]:
    """
    Return the strategy class registered for type_name.

    Args:
        type_name: One of "regular", "bodyweight", "banded", "banded_resistance",
            "banded_assistance", "cardio", "static_hold"

    Returns:
        The strategy class

    Raises:
        ValueError: If type_name is not in the registry
    """
    if type_name not in STRATEGY_REGISTRY:
        valid = ", ".join(STRATEGY_REGISTRY)
        raise ValueError(f"Unknown exercise type '{type_name}'. Valid types: {valid}")
    return STRATEGY_REGISTRY[type_name]
