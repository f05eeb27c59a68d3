"""
Exercise-type strategies for lift-records.

Each modality (regular, bodyweight, banded, cardio, static hold) is an
ExerciseTypeStrategy subclass. ExerciseTypeResolver picks the strategy for
an Exercise.
"""

from .banded import BandedAssistanceExerciseType, BandedExerciseType, BandedResistanceExerciseType
from .base import BandPalette, ExerciseTypesConfig, PRSettings, TypeSettings
from .bodyweight import BodyweightExerciseType
from .cardio import CardioExerciseType
from .errors import ExerciseTypeError, InvalidExerciseData, StrategyResolutionFailure, UnsupportedOperation
from .loader import load_exercise_types_config
from .registry import STRATEGY_REGISTRY, get_strategy_class
from .regular import RegularExerciseType
from .resolver import ExerciseTypeResolver, StrategyCache, determine_type_name, get_strategy
from .static_hold import StaticHoldExerciseType
from .strategy import ExerciseTypeStrategy

__all__ = [
    "BandPalette",
    "BandedAssistanceExerciseType",
    "BandedExerciseType",
    "BandedResistanceExerciseType",
    "BodyweightExerciseType",
    "CardioExerciseType",
    "ExerciseTypeError",
    "ExerciseTypeResolver",
    "ExerciseTypeStrategy",
    "ExerciseTypesConfig",
    "InvalidExerciseData",
    "PRSettings",
    "RegularExerciseType",
    "STRATEGY_REGISTRY",
    "StaticHoldExerciseType",
    "StrategyCache",
    "StrategyResolutionFailure",
    "TypeSettings",
    "UnsupportedOperation",
    "determine_type_name",
    "get_strategy",
    "get_strategy_class",
    "load_exercise_types_config",
]
