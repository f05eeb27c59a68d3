"""
Pure per-session metric extraction.

Each modality reduces one session's typed sets to a small snapshot that the
PR comparators diff against history. The functions take typed set
projections, never raw LiftSet rows, so they cannot misread an overloaded
column.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Union

from .config import EPLEY_COEFFICIENT, MAX_REP_COUNT_FOR_PR, MAX_ROUNDS_FOR_PR, WEIGHT_BUCKET_TOLERANCE
from .models import BandSet, DistanceSet, HoldSet, LoadedSet
from .one_rep_max import best_1rm


@dataclass(frozen=True)
class HoldMetrics:
    """
    Static-hold session snapshot.

    Only sets with a positive duration count.
    """

    best_hold: int = 0
    total_volume: int = 0
    min_hold: int = 0
    total_sets: int = 0
    duration_sets: dict[int, int] = field(default_factory=dict)  # exact seconds -> set count
    max_added_weight: float = 0.0


@dataclass(frozen=True)
class LoadMetrics:
    """Weight x reps session snapshot (regular and bodyweight)."""

    best_1rm: float = 0.0
    total_volume: float = 0.0
    total_reps: int = 0
    rep_weights: dict[int, float] = field(default_factory=dict)  # rep count -> heaviest weight
    weight_sets: dict[float, int] = field(default_factory=dict)  # weight bucket -> set count
    is_weighted: bool = False


@dataclass(frozen=True)
class DistanceMetrics:
    """Cardio session snapshot; one set is one round."""

    best_distance: int = 0
    total_distance: int = 0
    rounds: int = 0
    round_distances: dict[int, int] = field(default_factory=dict)  # round count -> total meters


@dataclass(frozen=True)
class BandMetrics:
    """Banded session snapshot."""

    best_reps: int = 0
    total_reps: int = 0
    total_sets: int = 0
    band_sets: dict[str, int] = field(default_factory=dict)  # color -> set count


MetricsSnapshot = Union[HoldMetrics, LoadMetrics, DistanceMetrics, BandMetrics]


def hold_metrics(sets: Iterable[HoldSet]) -> HoldMetrics:
    """
    Reduce static holds to best, total, minimum and per-duration counts.

    Args:
        sets: Hold projections for one session

    Returns:
        HoldMetrics; all zero when no set has a positive duration
    """
    durations: list[int] = []
    duration_sets: dict[int, int] = {}
    max_weight = 0.0
    for s in sets:
        if s.duration_seconds <= 0:
            continue
        durations.append(s.duration_seconds)
        duration_sets[s.duration_seconds] = duration_sets.get(s.duration_seconds, 0) + 1
        max_weight = max(max_weight, s.added_weight)

    if not durations:
        return HoldMetrics()

    return HoldMetrics(
        best_hold=max(durations),
        total_volume=sum(durations),
        min_hold=min(durations),
        total_sets=len(durations),
        duration_sets=duration_sets,
        max_added_weight=max_weight,
    )


def weight_bucket(weight: float, buckets: Iterable[float], tolerance: float = WEIGHT_BUCKET_TOLERANCE) -> float:
    """Return the existing bucket within *tolerance* of *weight*, or *weight* itself."""
    for b in buckets:
        if abs(b - weight) <= tolerance:
            return b
    return weight


def load_metrics(
    sets: Iterable[LoadedSet],
    max_rep_count: int = MAX_REP_COUNT_FOR_PR,
    weight_bucket_tolerance: float = WEIGHT_BUCKET_TOLERANCE,
    epley_coefficient: float = EPLEY_COEFFICIENT,
    bodyweight: bool = False,
) -> LoadMetrics:
    """
    Reduce weight x reps sets.

    Volume is tonnage (Σ weight × reps). For bodyweight movements with no
    extra weight on any set the volume is total reps instead, and only
    weighted sets count toward rep-specific bests.

    Args:
        sets: Loaded-set projections for one session
        max_rep_count: Highest rep count tracked for 1RM and rep bests
        weight_bucket_tolerance: Weights this close count as the same bucket
        epley_coefficient: Coefficient for the 1RM estimate
        bodyweight: Apply the bodyweight volume and rep-best rules

    Returns:
        LoadMetrics
    """
    performed = [s for s in sets if s.reps > 0]
    is_weighted = any(s.weight > 0 for s in performed)
    total_reps = sum(s.reps for s in performed)

    if bodyweight and not is_weighted:
        total_volume = float(total_reps)
    else:
        total_volume = sum(max(s.weight, 0.0) * s.reps for s in performed)

    rep_weights: dict[int, float] = {}
    for s in performed:
        if s.weight <= 0 or s.reps > max_rep_count:
            continue
        rep_weights[s.reps] = max(rep_weights.get(s.reps, 0.0), s.weight)

    weight_sets: dict[float, int] = {}
    for s in performed:
        key = weight_bucket(s.weight, weight_sets, weight_bucket_tolerance)
        weight_sets[key] = weight_sets.get(key, 0) + 1

    one_rm = 0.0 if bodyweight else best_1rm(performed, max_rep_count, epley_coefficient)

    return LoadMetrics(
        best_1rm=one_rm,
        total_volume=total_volume,
        total_reps=total_reps,
        rep_weights=rep_weights,
        weight_sets=weight_sets,
        is_weighted=is_weighted,
    )


def distance_metrics(sets: Iterable[DistanceSet], max_rounds: int = MAX_ROUNDS_FOR_PR) -> DistanceMetrics:
    """Reduce cardio rounds; ``round_distances`` only tracks up to *max_rounds* rounds."""
    distances = [s.meters for s in sets if s.meters > 0]
    if not distances:
        return DistanceMetrics()

    rounds = len(distances)
    total = sum(distances)
    round_distances = {rounds: total} if rounds <= max_rounds else {}
    return DistanceMetrics(
        best_distance=max(distances),
        total_distance=total,
        rounds=rounds,
        round_distances=round_distances,
    )


def band_metrics(sets: Iterable[BandSet]) -> BandMetrics:
    performed = [s for s in sets if s.reps > 0]
    band_sets: dict[str, int] = {}
    for s in performed:
        if s.band_color:
            band_sets[s.band_color] = band_sets.get(s.band_color, 0) + 1
    return BandMetrics(
        best_reps=max((s.reps for s in performed), default=0),
        total_reps=sum(s.reps for s in performed),
        total_sets=len(performed),
        band_sets=band_sets,
    )
