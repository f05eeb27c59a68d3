"""
Configuration defaults for exercise types, PR detection and progression.

These are the Python defaults. The bundled ``exercise_types.yaml`` and the
optional user file ``~/.lift-records/exercise_types.yaml`` are merged over
them by ``core.engine.config_loader``.
"""

from typing import Final

# =============================================================================
# FACTORY
# =============================================================================

FALLBACK_TYPE: Final[str] = "regular"  # Used when the resolved type is unusable
CACHE_STRATEGIES: Final[bool] = True

# =============================================================================
# DISPLAY
# =============================================================================

WEIGHT_UNIT: Final[str] = "lbs"
DISPLAY_PRECISION: Final[int] = 1

# =============================================================================
# VALIDATION RANGES
# =============================================================================

WEIGHT_MIN: Final[float] = 0.0
REPS_MIN: Final[int] = 1
REPS_MAX: Final[int] = 100
DISTANCE_MIN: Final[int] = 50  # meters
DISTANCE_MAX: Final[int] = 50_000
DURATION_MIN: Final[int] = 1  # seconds
DURATION_MAX: Final[int] = 300

# =============================================================================
# BANDS
# =============================================================================

# color -> order; higher order = more resistance / more assistance
BAND_COLORS: Final[dict[str, int]] = {
    "red": 1,
    "blue": 2,
    "green": 3,
}
MAX_REPS_BEFORE_BAND_CHANGE: Final[int] = 15
DEFAULT_REPS_ON_BAND_CHANGE: Final[int] = 8

# =============================================================================
# PERSONAL RECORDS
# =============================================================================

MAX_REP_COUNT_FOR_PR: Final[int] = 10  # Sets above this rep count are ignored for 1RM/rep PRs
ONE_RM_TOLERANCE: Final[float] = 0.1  # lbs
VOLUME_TOLERANCE_FRACTION: Final[float] = 0.01  # 1 %
WEIGHT_BUCKET_TOLERANCE: Final[float] = 0.5  # lbs; weights this close share a density bucket
DISTANCE_TOLERANCE: Final[float] = 1.0  # meters
MAX_ROUNDS_FOR_PR: Final[int] = 10

# Epley: 1RM = w * (1 + EPLEY_COEFFICIENT * reps)
EPLEY_COEFFICIENT: Final[float] = 0.0333

# =============================================================================
# PROGRESSION
# =============================================================================

# Regular: double progression inside the rep range, linear outside it
REGULAR_REP_RANGE_LOW: Final[int] = 8
REGULAR_REP_RANGE_HIGH: Final[int] = 12
REGULAR_WEIGHT_STEP: Final[float] = 5.0

# Bodyweight: add extra weight once reps get high
BODYWEIGHT_REPS_TO_ADD_WEIGHT: Final[int] = 12
BODYWEIGHT_REPS_TO_INCREASE_WEIGHT: Final[int] = 15
BODYWEIGHT_WEIGHT_STEP: Final[float] = 5.0

# Cardio
CARDIO_SHORT_DISTANCE: Final[int] = 500  # Below this the distance step is small
CARDIO_ROUNDS_THRESHOLD: Final[int] = 1000  # At or above this, add rounds instead of distance
CARDIO_SHORT_STEP: Final[int] = 50
CARDIO_LONG_STEP: Final[int] = 100
CARDIO_MAX_DISTANCE: Final[int] = 1500
CARDIO_MAX_ROUNDS: Final[int] = 10
CARDIO_DEFAULT_DISTANCE: Final[int] = 500
CARDIO_DEFAULT_ROUNDS: Final[int] = 1

# Static hold
HOLD_WEIGHT_THRESHOLD: Final[int] = 60  # seconds; at or above, progress load instead of time
HOLD_SHORT_DURATION: Final[int] = 30
HOLD_SHORT_STEP: Final[int] = 1
HOLD_LONG_STEP: Final[int] = 2
HOLD_WEIGHT_STEP: Final[float] = 5.0
HOLD_MAX_SETS: Final[int] = 10
HOLD_MAX_DURATION: Final[int] = 300
HOLD_DEFAULT_SETS: Final[int] = 3
HOLD_DEFAULT_DURATION: Final[int] = 30
