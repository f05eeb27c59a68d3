"""
Static holds: the stored ``time`` column holds the hold duration in seconds,
``reps`` is always 1 and ``weight`` is optional added load.

Holds are tracked for TIME (longest hold), VOLUME (total seconds),
CONSISTENCY (minimum hold across several sets) and DENSITY (sets at an
exact duration). There is no 1RM for a hold.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..metrics import HoldMetrics, hold_metrics
from ..models import (
    DurationBucketDetail,
    HoldSet,
    LiftLog,
    LiftSet,
    PersonalRecord,
    ProgressionSuggestion,
    SetCountDetail,
)
from ..pr_comparison import compare_hold
from ..pr_types import PRType
from ..progression import suggest_static_hold
from .strategy import ExerciseTypeStrategy, plural


def format_duration(seconds: int) -> str:
    """``"45s"``, ``"1m"``, ``"1m 30s"``."""
    if seconds < 60:
        return f"{seconds}s"
    minutes, rest = divmod(seconds, 60)
    return f"{minutes}m" if rest == 0 else f"{minutes}m {rest}s"


class StaticHoldExerciseType(ExerciseTypeStrategy):
    """Planks, L-sits, dead hangs and similar isometric holds."""

    type_name = "static_hold"
    SUPPORTED_PR_TYPES = frozenset(
        {PRType.TIME, PRType.VOLUME, PRType.CONSISTENCY, PRType.DENSITY}
    )

    def process_lift_data(self, data: Mapping[str, Any]) -> dict[str, Any]:
        result = dict(data)
        duration = self._to_whole("time", self._require_number(data, "time"))
        self._check_range("time", duration, "duration_min", "duration_max", label="duration")

        weight = self._to_number(data, "weight")
        if weight is None:
            weight = 0.0
        self._check_range("weight", weight, "weight_min", None)

        result["time"] = duration
        result["reps"] = 1
        result["weight"] = weight
        result["band_color"] = None
        return result

    def format_weight_display(self, log: LiftLog) -> str:
        first = log.display_set
        if first is None:
            return "0s hold"
        text = f"{format_duration(first.time or 0)} hold"
        if first.weight > 0:
            text += f" +{self.format_weight(first.weight)}"
        return text

    def format_complete_display(self, log: LiftLog) -> str:
        return f"{self.format_weight_display(log)} × {plural(log.set_count, 'set')}"

    def format_table_cell_display(self, log: LiftLog) -> dict[str, str]:
        return {
            "primary": self.format_weight_display(log),
            "secondary": plural(log.set_count, "set"),
        }

    def chart_title(self) -> str:
        return "Hold Duration Progress"

    def project_set(self, lift_set: LiftSet) -> HoldSet:
        return HoldSet(duration_seconds=lift_set.time or 0, added_weight=max(lift_set.weight, 0.0))

    def metrics(self, log: LiftLog) -> HoldMetrics:
        return hold_metrics(self.project_sets(log))

    def _compare(self, current, history, lift_log_id):
        return compare_hold(current, history, lift_log_id)

    def suggest_next(self, log: LiftLog) -> ProgressionSuggestion:
        first = log.display_set
        steps = self.settings.progression
        return suggest_static_hold(
            (first.time or 0) if first is not None else 0,
            first.weight if first is not None else 0.0,
            log.set_count,
            weight_threshold=int(steps.get("weight_threshold", 60)),
            short_duration=int(steps.get("short_duration", 30)),
            short_step=int(steps.get("short_step", 1)),
            long_step=int(steps.get("long_step", 2)),
            weight_step=float(steps.get("weight_step", 5.0)),
            max_sets=int(steps.get("max_sets", 10)),
            max_duration=int(steps.get("max_duration", 300)),
            default_sets=int(steps.get("default_sets", 3)),
            default_duration=int(steps.get("default_duration", 30)),
        )

    def format_suggestion_text(self, suggestion: ProgressionSuggestion) -> str | None:
        text = f"Try {format_duration(suggestion.time or 0)}"
        if suggestion.weight > 0:
            text += f" +{self.format_weight(suggestion.weight)}"
        return f"{text} × {plural(suggestion.sets, 'set')}"

    def pr_label(self, record: PersonalRecord) -> str:
        detail = record.detail
        if record.pr_type is PRType.TIME:
            return "Best Hold"
        if record.pr_type is PRType.VOLUME:
            return "Total Hold Time"
        if record.pr_type is PRType.CONSISTENCY and isinstance(detail, SetCountDetail):
            return f"Min Hold ({plural(detail.sets, 'set')})"
        if record.pr_type is PRType.DENSITY and isinstance(detail, DurationBucketDetail):
            return f"Sets @ {format_duration(detail.seconds)}"
        return super().pr_label(record)

    def format_pr_value(self, record: PersonalRecord, value: float) -> str:
        if record.pr_type is PRType.DENSITY:
            return plural(int(value), "set")
        if record.pr_type is PRType.VOLUME:
            return format_duration(int(value))
        return f"{format_duration(int(value))} hold"
