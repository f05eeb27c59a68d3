"""
PR comparators: current session snapshot vs. every previous snapshot.

History is passed as ``(lift_log_id, snapshot)`` pairs in chronological
order. Each rule follows the same skeleton:

  1. take the historical best over the eligible previous sessions
  2. compare strictly (plus the modality's tolerance, if it has one)
  3. emit a PersonalRecord pointing at the session that held the best

A rule with no eligible previous value awards a first-time record with
``previous_value=None``. DENSITY is the exception: a bucket that was never
recorded before cannot earn a density PR.

When several previous sessions share the best value the earliest one is
reported.
"""

from __future__ import annotations

from typing import Callable, Sequence, TypeVar

from .config import (
    DISTANCE_TOLERANCE,
    MAX_REP_COUNT_FOR_PR,
    ONE_RM_TOLERANCE,
    VOLUME_TOLERANCE_FRACTION,
    WEIGHT_BUCKET_TOLERANCE,
)
from .metrics import DistanceMetrics, HoldMetrics, LoadMetrics
from .models import (
    DurationBucketDetail,
    PersonalRecord,
    RecordId,
    RepCountDetail,
    RoundCountDetail,
    SetCountDetail,
    WeightBucketDetail,
)
from .pr_types import PRType

M = TypeVar("M")
History = Sequence[tuple["RecordId | None", M]]


def _historical_best(
    history: History,
    value_of: Callable[[M], float | None],
) -> tuple[float | None, RecordId | None]:
    """
    Return (best value, id of the session holding it) across *history*.

    ``value_of`` returns None for sessions that are not eligible; sessions
    with a non-positive value never count as a precedent.
    """
    best: float | None = None
    best_id: RecordId | None = None
    for log_id, snapshot in history:
        value = value_of(snapshot)
        if value is None or value <= 0:
            continue
        if best is None or value > best:
            best = value
            best_id = log_id
    return best, best_id


def _record(
    pr_type: PRType,
    value: float,
    previous: tuple[float | None, RecordId | None],
    lift_log_id: RecordId | None,
    detail=None,
) -> PersonalRecord:
    previous_value, previous_id = previous
    return PersonalRecord(
        pr_type=pr_type,
        value=value,
        previous_value=previous_value,
        previous_lift_log_id=previous_id,
        lift_log_id=lift_log_id,
        detail=detail,
    )


# =============================================================================
# Static hold
# =============================================================================


def compare_hold(
    current: HoldMetrics,
    history: History[HoldMetrics],
    lift_log_id: RecordId | None = None,
) -> list[PersonalRecord]:
    """
    Award TIME, VOLUME, CONSISTENCY and DENSITY records for a hold session.

    All comparisons are strict; ties never produce a record.

    TIME:        longest single hold vs. longest previous hold
    VOLUME:      total seconds vs. best previous session total
    CONSISTENCY: minimum hold across >1 sets vs. the best minimum of previous
                 sessions that had at least as many sets
    DENSITY:     sets at an exact duration vs. the most sets previously
                 logged at that duration; needs a positive precedent

    Args:
        current: Snapshot of the session being evaluated
        history: (lift_log_id, snapshot) for each previous session
        lift_log_id: Id of the session being evaluated

    Returns:
        Records in rule order: TIME, VOLUME, CONSISTENCY, DENSITY
    """
    records: list[PersonalRecord] = []

    if current.best_hold > 0:
        previous = _historical_best(history, lambda m: m.best_hold)
        if previous[0] is None or current.best_hold > previous[0]:
            records.append(_record(PRType.TIME, current.best_hold, previous, lift_log_id))

    if current.total_volume > 0:
        previous = _historical_best(history, lambda m: m.total_volume)
        if previous[0] is None or current.total_volume > previous[0]:
            records.append(_record(PRType.VOLUME, current.total_volume, previous, lift_log_id))

    if current.total_sets > 1 and current.min_hold > 0:
        sets = current.total_sets
        previous = _historical_best(
            history,
            lambda m: m.min_hold if m.total_sets >= sets else None,
        )
        if previous[0] is None or current.min_hold > previous[0]:
            records.append(
                _record(
                    PRType.CONSISTENCY,
                    current.min_hold,
                    previous,
                    lift_log_id,
                    SetCountDetail(sets),
                )
            )

    for seconds, count in sorted(current.duration_sets.items()):
        previous = _historical_best(history, lambda m: m.duration_sets.get(seconds))
        if previous[0] is not None and count > previous[0]:
            records.append(
                _record(PRType.DENSITY, count, previous, lift_log_id, DurationBucketDetail(seconds))
            )

    return records


# =============================================================================
# Weight x reps
# =============================================================================


def _bucket_count(weight_sets: dict[float, int], weight: float, tolerance: float) -> int | None:
    counts = [n for w, n in weight_sets.items() if abs(w - weight) <= tolerance]
    return max(counts) if counts else None


def compare_load(
    current: LoadMetrics,
    history: History[LoadMetrics],
    lift_log_id: RecordId | None = None,
    include_one_rm: bool = True,
    max_rep_count: int = MAX_REP_COUNT_FOR_PR,
    one_rm_tolerance: float = ONE_RM_TOLERANCE,
    volume_tolerance_fraction: float = VOLUME_TOLERANCE_FRACTION,
    weight_bucket_tolerance: float = WEIGHT_BUCKET_TOLERANCE,
) -> list[PersonalRecord]:
    """
    Award ONE_RM, REP_SPECIFIC, VOLUME and DENSITY records for a lifting session.

    ONE_RM:       best Epley estimate > previous best + tolerance
    REP_SPECIFIC: heaviest weight at each rep count 1..max_rep_count; the first
                  weighted set at a rep count is a record
    VOLUME:       session volume > previous best × (1 + tolerance fraction),
                  only against sessions with the same weighted flag (a bodyweight
                  session without extra weight counts reps, not lbs × reps)
    DENSITY:      sets at a weight bucket > previous best count at that bucket,
                  which must exist

    Returns:
        Records in rule order: ONE_RM, REP_SPECIFIC (ascending reps), VOLUME, DENSITY
    """
    records: list[PersonalRecord] = []

    if include_one_rm and current.best_1rm > 0:
        previous = _historical_best(history, lambda m: m.best_1rm)
        if previous[0] is None or current.best_1rm > previous[0] + one_rm_tolerance:
            records.append(_record(PRType.ONE_RM, current.best_1rm, previous, lift_log_id))

    for reps, weight in sorted(current.rep_weights.items()):
        if reps < 1 or reps > max_rep_count or weight <= 0:
            continue
        previous = _historical_best(history, lambda m: m.rep_weights.get(reps))
        if previous[0] is None or weight > previous[0] + one_rm_tolerance:
            records.append(
                _record(
                    PRType.REP_SPECIFIC,
                    weight,
                    previous,
                    lift_log_id,
                    RepCountDetail(reps=reps, weight=weight),
                )
            )

    if current.total_volume > 0:
        weighted = current.is_weighted
        previous = _historical_best(
            history,
            lambda m: m.total_volume if m.is_weighted == weighted else None,
        )
        if previous[0] is None or current.total_volume > previous[0] * (1 + volume_tolerance_fraction):
            records.append(_record(PRType.VOLUME, current.total_volume, previous, lift_log_id))

    for weight, count in sorted(current.weight_sets.items()):
        previous = _historical_best(
            history,
            lambda m: _bucket_count(m.weight_sets, weight, weight_bucket_tolerance),
        )
        if previous[0] is not None and count > previous[0]:
            records.append(
                _record(PRType.DENSITY, count, previous, lift_log_id, WeightBucketDetail(weight))
            )

    return records


# =============================================================================
# Cardio
# =============================================================================


def compare_distance(
    current: DistanceMetrics,
    history: History[DistanceMetrics],
    lift_log_id: RecordId | None = None,
    distance_tolerance: float = DISTANCE_TOLERANCE,
) -> list[PersonalRecord]:
    """
    Award ENDURANCE, VOLUME and REP_SPECIFIC records for a cardio session.

    ENDURANCE:    longest single round
    VOLUME:       total distance
    REP_SPECIFIC: total distance vs. previous sessions with the same round count

    A value must beat the previous best by more than *distance_tolerance* meters.
    """
    records: list[PersonalRecord] = []

    if current.best_distance > 0:
        previous = _historical_best(history, lambda m: m.best_distance)
        if previous[0] is None or current.best_distance > previous[0] + distance_tolerance:
            records.append(_record(PRType.ENDURANCE, current.best_distance, previous, lift_log_id))

    if current.total_distance > 0:
        previous = _historical_best(history, lambda m: m.total_distance)
        if previous[0] is None or current.total_distance > previous[0] + distance_tolerance:
            records.append(_record(PRType.VOLUME, current.total_distance, previous, lift_log_id))

    for rounds, total in sorted(current.round_distances.items()):
        previous = _historical_best(history, lambda m: m.round_distances.get(rounds))
        if previous[0] is None or total > previous[0] + distance_tolerance:
            records.append(
                _record(PRType.REP_SPECIFIC, total, previous, lift_log_id, RoundCountDetail(rounds))
            )

    return records
