"""
Cardio exercises: the stored ``reps`` column holds meters, one set is one round.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..metrics import DistanceMetrics, distance_metrics
from ..models import DistanceSet, LiftLog, LiftSet, PersonalRecord, ProgressionSuggestion, RoundCountDetail
from ..pr_comparison import compare_distance
from ..pr_types import PRType
from ..progression import suggest_cardio
from .strategy import ExerciseTypeStrategy, plural

KILOMETER_DISPLAY_THRESHOLD = 10_000  # meters


def format_distance(meters: int) -> str:
    """``"450m"``, ``"1,500m"``, ``"12.5km"``."""
    if meters >= KILOMETER_DISPLAY_THRESHOLD:
        return f"{meters / 1000:.1f}km"
    return f"{meters:,}m"


class CardioExerciseType(ExerciseTypeStrategy):
    """Runs, rows, carries measured in meters."""

    type_name = "cardio"
    SUPPORTED_PR_TYPES = frozenset({PRType.ENDURANCE, PRType.REP_SPECIFIC, PRType.VOLUME})

    def process_lift_data(self, data: Mapping[str, Any]) -> dict[str, Any]:
        result = dict(data)
        distance = self._to_whole("reps", self._require_number(data, "reps"))
        self._check_range("reps", distance, "distance_min", "distance_max", label="distance")
        result["reps"] = distance
        result["weight"] = 0.0
        result["band_color"] = None
        result["time"] = None
        return result

    def format_weight_display(self, log: LiftLog) -> str:
        first = log.display_set
        return format_distance(first.reps if first is not None else 0)

    def format_complete_display(self, log: LiftLog) -> str:
        return f"{self.format_weight_display(log)} × {plural(log.set_count, 'round')}"

    def format_table_cell_display(self, log: LiftLog) -> dict[str, str]:
        return {
            "primary": self.format_weight_display(log),
            "secondary": plural(log.set_count, "round"),
        }

    def chart_title(self) -> str:
        return "Distance Progress"

    def project_set(self, lift_set: LiftSet) -> DistanceSet:
        return DistanceSet(meters=lift_set.reps)

    def metrics(self, log: LiftLog) -> DistanceMetrics:
        return distance_metrics(self.project_sets(log), self.config.personal_records.max_rounds)

    def _compare(self, current, history, lift_log_id):
        return compare_distance(
            current,
            history,
            lift_log_id,
            distance_tolerance=self.config.personal_records.distance_tolerance,
        )

    def suggest_next(self, log: LiftLog) -> ProgressionSuggestion:
        first = log.display_set
        steps = self.settings.progression
        return suggest_cardio(
            first.reps if first is not None else 0,
            log.set_count,
            short_distance=int(steps.get("short_distance", 500)),
            rounds_threshold=int(steps.get("rounds_threshold", 1000)),
            short_step=int(steps.get("short_step", 50)),
            long_step=int(steps.get("long_step", 100)),
            max_distance=int(steps.get("max_distance", 1500)),
            max_rounds=int(steps.get("max_rounds", 10)),
            default_distance=int(steps.get("default_distance", 500)),
            default_rounds=int(steps.get("default_rounds", 1)),
        )

    def format_suggestion_text(self, suggestion: ProgressionSuggestion) -> str | None:
        return f"Try {format_distance(suggestion.distance or 0)} × {plural(suggestion.sets, 'round')}"

    def pr_label(self, record: PersonalRecord) -> str:
        if record.pr_type is PRType.ENDURANCE:
            return "Best Distance"
        if record.pr_type is PRType.VOLUME:
            return "Total Distance"
        if record.pr_type is PRType.REP_SPECIFIC and isinstance(record.detail, RoundCountDetail):
            return plural(record.detail.rounds, "Round")
        return super().pr_label(record)

    def format_pr_value(self, record: PersonalRecord, value: float) -> str:
        return format_distance(int(value))
