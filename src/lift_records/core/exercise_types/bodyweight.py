"""
Bodyweight exercises: weight is the extra weight on top of bodyweight.

No 1RM PRs are awarded because the athlete's bodyweight is not part of the
logged sets. Volume is tonnage when any set is weighted, total reps otherwise.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..models import LiftLog, PersonalRecord, ProgressionSuggestion, RepCountDetail
from ..one_rep_max import epley_1rm
from ..pr_types import PRType
from ..progression import suggest_bodyweight
from .errors import UnsupportedOperation
from .regular import LoadedExerciseType
from .strategy import format_number, plural


class BodyweightExerciseType(LoadedExerciseType):
    """Pull-ups, dips, push-ups and similar."""

    type_name = "bodyweight"
    SUPPORTS_1RM = True
    SUPPORTED_PR_TYPES = frozenset({PRType.REP_SPECIFIC, PRType.VOLUME, PRType.DENSITY})
    BODYWEIGHT_RULES = True

    def process_lift_data(self, data: Mapping[str, Any]) -> dict[str, Any]:
        result = dict(data)
        weight = self._to_number(data, "weight")
        if weight is None:
            weight = 0.0
        self._check_range("weight", weight, "weight_min", None)
        result["weight"] = weight
        reps = self._validate_reps(data)
        if reps is not None:
            result["reps"] = reps
        result["band_color"] = None
        result["time"] = None
        return result

    def process_exercise_data(self, data: Mapping[str, Any]) -> dict[str, Any]:
        result = super().process_exercise_data(data)
        result["is_bodyweight"] = True
        return result

    def format_weight_display(self, log: LiftLog) -> str:
        first = log.display_set
        extra = first.weight if first is not None else 0.0
        if extra > 0:
            return f"Bodyweight +{self.format_weight(extra)}"
        return "Bodyweight"

    def format_complete_display(self, log: LiftLog) -> str:
        first = log.display_set
        if first is not None and first.weight <= 0:
            return f"{log.set_count} x {first.reps}"
        return super().format_complete_display(log)

    def calculate_1rm(self, weight: float, reps: int, log: LiftLog | None = None) -> float:
        """Epley on bodyweight plus extra weight; bodyweight counts as 0 when unknown."""
        if not self.can_calculate_1rm():
            raise UnsupportedOperation.for_1rm(self.type_name)
        bodyweight = log.bodyweight if log is not None and log.bodyweight else 0.0
        return epley_1rm(weight + bodyweight, reps, self.config.personal_records.epley_coefficient)

    def format_1rm_display(self, log: LiftLog, is_estimated: bool = True) -> str:
        text = super().format_1rm_display(log, is_estimated)
        if text and is_estimated:
            return f"{text} (est.)"
        return text

    def suggest_next(self, log: LiftLog) -> ProgressionSuggestion | None:
        first = log.display_set
        if first is None:
            return None
        steps = self.settings.progression
        return suggest_bodyweight(
            first.reps,
            first.weight,
            log.set_count,
            reps_to_add_weight=int(steps.get("reps_to_add_weight", 12)),
            reps_to_increase_weight=int(steps.get("reps_to_increase_weight", 15)),
            weight_step=float(steps.get("weight_step", 5.0)),
        )

    def format_progression_suggestion(self, log: LiftLog) -> str | None:
        suggestion = self.suggest_next(log)
        if suggestion is None:
            return None
        first = log.display_set
        if first is not None and first.weight <= 0:
            step = suggestion.weight
            unit = self.config.weight_unit
            return f"Consider adding {format_number(step)}-{format_number(step * 2)} {unit} extra weight"
        return self.format_suggestion_text(suggestion)

    def format_suggestion_text(self, suggestion: ProgressionSuggestion) -> str | None:
        if suggestion.weight <= 0:
            return None
        return f"Try {self.format_weight(suggestion.weight)} extra weight"

    def pr_label(self, record: PersonalRecord) -> str:
        detail = record.detail
        if record.pr_type is PRType.REP_SPECIFIC and isinstance(detail, RepCountDetail):
            return f"{plural(detail.reps, 'Rep')} (weighted)"
        return super().pr_label(record)

    def format_pr_value(self, record: PersonalRecord, value: float) -> str:
        if record.pr_type is PRType.VOLUME:
            return format_number(value, self.config.precision)
        if record.pr_type is PRType.REP_SPECIFIC:
            return f"+{self.format_weight(value)}"
        return super().format_pr_value(record, value)
