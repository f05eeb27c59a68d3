"""
PR detection service.

Runs a strategy's metric extraction and comparison for one lift log,
filters the result to the PR types the modality supports and combines the
awarded types into a flags integer. Also replays a whole history to find
which logs earned PRs at the time they were logged.

The service never touches storage: callers pass the logs in and persist
the returned records themselves.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any, Iterable, Sequence

from .metrics import MetricsSnapshot
from .models import LiftLog, PersonalRecord, RecordId
from .pr_types import PRType

if TYPE_CHECKING:
    from .exercise_types.strategy import ExerciseTypeStrategy

logger = logging.getLogger(__name__)


@dataclass
class CalculationSnapshot:
    """What a PR decision was based on, for auditing and "why not" displays."""

    current_metrics: dict[str, Any]
    previous_log_count: int
    supported_types: list[str]
    pr_reasons: list[str] = field(default_factory=list)
    why_not_pr: dict[str, str] = field(default_factory=dict)


@dataclass
class PRResult:
    """Outcome of evaluating one lift log."""

    lift_log_id: RecordId | None
    records: list[PersonalRecord]
    flags: int
    snapshot: CalculationSnapshot

    @property
    def is_pr(self) -> bool:
        return bool(self.records)

    @property
    def pr_count(self) -> int:
        return len(self.records)

    @property
    def best_label(self) -> str:
        return PRType.get_best_label(self.flags)

    @property
    def types(self) -> list[PRType]:
        return PRType.get_types(self.flags)


def detect_prs(
    current_metrics: MetricsSnapshot,
    previous_logs: Sequence[LiftLog],
    current_log: LiftLog,
    strategy: ExerciseTypeStrategy,
) -> list[PersonalRecord]:
    """
    Compare *current_metrics* against *previous_logs* with *strategy*.

    Records for PR types the modality does not support are dropped. A
    modality with no supported types always yields an empty list.
    """
    supported = strategy.supported_pr_types()
    if not supported:
        return []
    records = strategy.compare_to_previous(current_metrics, previous_logs, current_log)
    return [r for r in records if r.pr_type in supported]


def pr_flags(records: Iterable[PersonalRecord]) -> int:
    return PRType.combine(r.pr_type for r in records)


def earlier_logs(current_log: LiftLog, logs: Iterable[LiftLog]) -> list[LiftLog]:
    """Logs strictly before *current_log*, oldest first. The current log itself is excluded."""
    previous = [
        log
        for log in logs
        if log is not current_log
        and not (current_log.id is not None and log.id == current_log.id)
        and log.logged_at < current_log.logged_at
    ]
    return sorted(previous, key=lambda log: log.logged_at)


def _type_words(pr_type: PRType) -> str:
    return "1RM" if pr_type is PRType.ONE_RM else pr_type.tag.replace("_", " ")


def build_pr_reason(record: PersonalRecord, strategy: ExerciseTypeStrategy) -> str:
    """
    Human-readable reason for an awarded record.

    e.g. "First recorded time" or
    "New Best Hold: 45s hold (previous: 40s hold from lift #3)"
    """
    if record.previous_value is None:
        return f"First recorded {_type_words(record.pr_type)}"
    label = strategy.pr_label(record)
    value = strategy.format_pr_value(record, record.value)
    previous = strategy.format_pr_value(record, record.previous_value)
    source = f" from lift #{record.previous_lift_log_id}" if record.previous_lift_log_id is not None else ""
    return f"New {label}: {value} (previous: {previous}{source})"


def _why_not(pr_type: PRType, has_history: bool) -> str:
    words = _type_words(pr_type)
    if pr_type is PRType.DENSITY and not has_history:
        return "Density needs an earlier session at the same bucket"
    if not has_history:
        return f"No {words} recorded in this session"
    return f"{words[0].upper()}{words[1:]} did not beat the previous best"


def evaluate_lift_log(
    log: LiftLog,
    previous_logs: Iterable[LiftLog],
    strategy: ExerciseTypeStrategy,
) -> PRResult:
    """
    Evaluate one lift log against the logs recorded before it.

    *previous_logs* may be in any order and may include *log* itself or
    later logs; only logs strictly earlier than *log* are compared.

    Args:
        log: The session being evaluated
        previous_logs: The athlete's logs for the same exercise
        strategy: Strategy resolved for the exercise

    Returns:
        PRResult with the records, combined flags and calculation snapshot
    """
    history = earlier_logs(log, previous_logs)
    current = strategy.metrics(log)
    records = detect_prs(current, history, log, strategy)
    flags = pr_flags(records)

    awarded = {r.pr_type for r in records}
    supported = sorted(strategy.supported_pr_types())
    snapshot = CalculationSnapshot(
        current_metrics=asdict(current),
        previous_log_count=len(history),
        supported_types=[t.tag for t in supported],
        pr_reasons=[build_pr_reason(r, strategy) for r in records],
        why_not_pr={t.tag: _why_not(t, bool(history)) for t in supported if t not in awarded},
    )

    logger.debug(
        "Lift log %r (%s): %d previous logs, %d PRs, flags=%d",
        log.id,
        strategy.type_name,
        len(history),
        len(records),
        flags,
    )
    return PRResult(lift_log_id=log.id, records=records, flags=flags, snapshot=snapshot)


def calculate_pr_log_ids(logs: Iterable[LiftLog], strategy: ExerciseTypeStrategy) -> list[RecordId | None]:
    """
    Replay *logs* chronologically and return the ids of logs that earned a PR.

    Each log is compared only with the logs before it, so the result matches
    what live detection would have awarded at logging time.
    """
    ordered = sorted(logs, key=lambda log: log.logged_at)
    pr_ids: list[RecordId | None] = []
    for index, log in enumerate(ordered):
        records = detect_prs(strategy.metrics(log), ordered[:index], log, strategy)
        if records:
            pr_ids.append(log.id)
    logger.debug("Recalculated %d logs: %d with PRs", len(ordered), len(pr_ids))
    return pr_ids
