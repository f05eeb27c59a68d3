"""Regular (barbell / dumbbell / machine) exercises: working weight x reps."""

from __future__ import annotations

from typing import Any, Mapping

from ..metrics import LoadMetrics, load_metrics
from ..models import LiftLog, LiftSet, LoadedSet, PersonalRecord, ProgressionSuggestion, RepCountDetail, WeightBucketDetail
from ..pr_comparison import compare_load
from ..pr_types import PRType
from ..progression import suggest_regular
from .strategy import ExerciseTypeStrategy, format_number, plural


class LoadedExerciseType(ExerciseTypeStrategy):
    """Shared weight x reps behaviour for regular and bodyweight exercises."""

    # Bodyweight volume counts reps when no set carries extra weight
    BODYWEIGHT_RULES = False

    def project_set(self, lift_set: LiftSet) -> LoadedSet:
        return LoadedSet(weight=max(lift_set.weight, 0.0), reps=lift_set.reps)

    def metrics(self, log: LiftLog) -> LoadMetrics:
        pr = self.config.personal_records
        return load_metrics(
            self.project_sets(log),
            max_rep_count=pr.max_rep_count,
            weight_bucket_tolerance=pr.weight_bucket_tolerance,
            epley_coefficient=pr.epley_coefficient,
            bodyweight=self.BODYWEIGHT_RULES,
        )

    def _compare(self, current, history, lift_log_id):
        pr = self.config.personal_records
        return compare_load(
            current,
            history,
            lift_log_id,
            include_one_rm=PRType.ONE_RM in self.supported_pr_types(),
            max_rep_count=pr.max_rep_count,
            one_rm_tolerance=pr.one_rm_tolerance,
            volume_tolerance_fraction=pr.volume_tolerance_fraction,
            weight_bucket_tolerance=pr.weight_bucket_tolerance,
        )

    def pr_label(self, record: PersonalRecord) -> str:
        detail = record.detail
        if record.pr_type is PRType.ONE_RM:
            return "1RM"
        if record.pr_type is PRType.REP_SPECIFIC and isinstance(detail, RepCountDetail):
            return plural(detail.reps, "Rep")
        if record.pr_type is PRType.VOLUME:
            return "Total Volume"
        if record.pr_type is PRType.DENSITY and isinstance(detail, WeightBucketDetail):
            return f"Sets @ {self.format_weight(detail.weight)}"
        return super().pr_label(record)

    def format_pr_value(self, record: PersonalRecord, value: float) -> str:
        if record.pr_type is PRType.DENSITY:
            return plural(int(value), "set")
        return self.format_weight(value)


class RegularExerciseType(LoadedExerciseType):
    """Weight is the working weight and is required."""

    type_name = "regular"
    SUPPORTS_1RM = True
    SUPPORTED_PR_TYPES = frozenset(
        {PRType.ONE_RM, PRType.REP_SPECIFIC, PRType.VOLUME, PRType.DENSITY}
    )

    def process_lift_data(self, data: Mapping[str, Any]) -> dict[str, Any]:
        result = dict(data)
        weight = self._require_number(data, "weight")
        self._check_range("weight", weight, "weight_min", None)
        result["weight"] = weight
        reps = self._validate_reps(data)
        if reps is not None:
            result["reps"] = reps
        result["band_color"] = None
        result["time"] = None
        return result

    def format_weight_display(self, log: LiftLog) -> str:
        first = log.display_set
        weight = first.weight if first is not None else 0.0
        return self.format_weight(max(weight, 0.0))

    def suggest_next(self, log: LiftLog) -> ProgressionSuggestion | None:
        first = log.display_set
        if first is None:
            return None
        steps = self.settings.progression
        return suggest_regular(
            first.weight,
            first.reps,
            log.set_count,
            rep_range_low=int(steps.get("rep_range_low", 8)),
            rep_range_high=int(steps.get("rep_range_high", 12)),
            weight_step=float(steps.get("weight_step", 5.0)),
        )

    def format_progression_suggestion(self, log: LiftLog) -> str | None:
        # Regular lifts surface their suggestion through format_suggestion_text only
        return None

    def format_suggestion_text(self, suggestion: ProgressionSuggestion) -> str | None:
        return (
            f"Suggested: {format_number(suggestion.weight, self.config.precision)} "
            f"{self.config.weight_unit} × {suggestion.reps} reps × {suggestion.sets} sets"
        )
