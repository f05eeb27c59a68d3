"""
Data models for lift-records.

Exercise, LiftLog and LiftSet mirror the stored rows. LiftSet reuses the
same columns across modalities (``reps`` is meters for cardio, ``time`` is
the hold duration for static holds), so the exercise-type strategies
project raw sets into the typed values below before any metric code reads
them. PR awards carry a typed detail instead of an overloaded count.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal, Union

from .pr_types import PRType

BandType = Literal["resistance", "assistance"]
RecordId = Union[int, str]

_BAND_TYPES: tuple[str, ...] = ("resistance", "assistance")


@dataclass
class Exercise:
    """
    A movement definition.

    ``exercise_type`` is an explicit type tag ("cardio", "static_hold", ...).
    Neither ``band_type`` nor ``is_bodyweight`` can tell cardio or static
    holds apart from regular lifts, so those modalities need the tag.
    """

    id: RecordId
    title: str
    canonical_name: str = ""
    is_bodyweight: bool = False
    band_type: BandType | None = None
    exercise_type: str | None = None
    user_id: RecordId | None = None

    def __post_init__(self) -> None:
        """Validate exercise data."""
        if not self.title or not self.title.strip():
            raise ValueError("title must be non-empty")
        if self.band_type in ("none", ""):
            self.band_type = None
        if self.band_type is not None and self.band_type not in _BAND_TYPES:
            raise ValueError(
                f"band_type must be one of {_BAND_TYPES} or None, got {self.band_type!r}"
            )
        if self.exercise_type == "":
            self.exercise_type = None


@dataclass
class LiftSet:
    """
    One performed set, as stored.

    weight:     working weight (regular), extra weight (bodyweight, static hold),
                0 for banded and cardio
    reps:       repetitions; meters for cardio; always 1 for static holds
    time:       hold duration in seconds (static holds only)
    band_color: palette key (banded only)
    """

    weight: float = 0.0
    reps: int = 0
    time: int | None = None
    band_color: str | None = None

    def __post_init__(self) -> None:
        """Validate set data."""
        if self.reps < 0:
            raise ValueError("reps must be non-negative")
        if self.time is not None and self.time < 0:
            raise ValueError("time must be non-negative")


@dataclass
class LiftLog:
    """
    A logged session: the ordered sets performed for one exercise.

    ``bodyweight`` is the athlete's bodyweight at log time, when known.
    """

    id: RecordId | None
    exercise_id: RecordId
    logged_at: datetime
    sets: list[LiftSet] = field(default_factory=list)
    comments: str = ""
    user_id: RecordId | None = None
    bodyweight: float | None = None

    def __post_init__(self) -> None:
        if self.bodyweight is not None and self.bodyweight < 0:
            raise ValueError("bodyweight must be non-negative")

    @property
    def display_set(self) -> LiftSet | None:
        """The set used for one-line displays and progression: the first one."""
        return self.sets[0] if self.sets else None

    @property
    def set_count(self) -> int:
        return len(self.sets)


# =============================================================================
# Typed set projections
# =============================================================================


@dataclass(frozen=True)
class LoadedSet:
    """Weight x reps set (regular and bodyweight)."""

    weight: float
    reps: int


@dataclass(frozen=True)
class BandSet:
    """Band color x reps set."""

    band_color: str | None
    reps: int


@dataclass(frozen=True)
class DistanceSet:
    """One cardio round."""

    meters: int


@dataclass(frozen=True)
class HoldSet:
    """One static hold."""

    duration_seconds: int
    added_weight: float = 0.0


ProjectedSet = Union[LoadedSet, BandSet, DistanceSet, HoldSet]


# =============================================================================
# PR detail payloads
# =============================================================================


@dataclass(frozen=True)
class RepCountDetail:
    """Best weight at an exact rep count."""

    reps: int
    weight: float = 0.0


@dataclass(frozen=True)
class RoundCountDetail:
    """Best total distance at an exact round count."""

    rounds: int


@dataclass(frozen=True)
class SetCountDetail:
    """Minimum hold held across this many sets."""

    sets: int


@dataclass(frozen=True)
class DurationBucketDetail:
    """Set count at an exact hold duration."""

    seconds: int


@dataclass(frozen=True)
class WeightBucketDetail:
    """Set count at one working weight."""

    weight: float


PRDetail = Union[
    RepCountDetail,
    RoundCountDetail,
    SetCountDetail,
    DurationBucketDetail,
    WeightBucketDetail,
]


@dataclass(frozen=True)
class PersonalRecord:
    """
    One awarded PR.

    ``previous_value`` and ``previous_lift_log_id`` are None for a first
    recorded value. ``rep_count`` and ``weight`` flatten the detail into
    the two storage columns used by the persistence layer.
    """

    pr_type: PRType
    value: float
    previous_value: float | None = None
    previous_lift_log_id: RecordId | None = None
    lift_log_id: RecordId | None = None
    detail: PRDetail | None = None

    @property
    def tag(self) -> str:
        return self.pr_type.tag

    @property
    def is_first(self) -> bool:
        return self.previous_value is None

    @property
    def rep_count(self) -> int | None:
        detail = self.detail
        if isinstance(detail, RepCountDetail):
            return detail.reps
        if isinstance(detail, RoundCountDetail):
            return detail.rounds
        if isinstance(detail, SetCountDetail):
            return detail.sets
        if isinstance(detail, DurationBucketDetail):
            return detail.seconds
        return None

    @property
    def weight(self) -> float:
        detail = self.detail
        if isinstance(detail, RepCountDetail):
            return detail.weight
        if isinstance(detail, WeightBucketDetail):
            return detail.weight
        return 0.0


@dataclass(frozen=True)
class ProgressionSuggestion:
    """
    Targets for the next session.

    Only the fields meaningful for the modality are set: ``reps`` for lifts
    and bands, ``distance`` (meters per round) for cardio, ``time`` (seconds)
    for static holds. ``drop_band`` means "progress to no band at all".
    """

    sets: int
    reps: int | None = None
    time: int | None = None
    distance: int | None = None
    weight: float = 0.0
    band_color: str | None = None
    drop_band: bool = False

    def __post_init__(self) -> None:
        if self.sets < 1:
            raise ValueError("sets must be at least 1")
        if self.weight < 0:
            raise ValueError("weight must be non-negative")
