"""
The exercise-type strategy contract.

One strategy per modality owns everything that depends on what the stored
set columns mean for that modality: validating and normalizing raw input,
projecting stored sets into typed values, extracting metrics, comparing
them against history, formatting displays and proposing the next session.

Strategies hold only read-only configuration, so one instance can be
shared between callers.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Mapping, Sequence

from ..metrics import MetricsSnapshot
from ..models import LiftLog, LiftSet, PersonalRecord, ProgressionSuggestion, ProjectedSet, RecordId
from ..one_rep_max import epley_1rm
from ..pr_types import PRType
from .base import ExerciseTypesConfig
from .errors import InvalidExerciseData, UnsupportedOperation
from .loader import load_exercise_types_config

NO_PREVIOUS = "-"


def format_number(value: float, precision: int = 1) -> str:
    """Round to *precision* decimals and drop trailing zeros: 100.0 -> "100", 100.50 -> "100.5"."""
    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


class ExerciseTypeStrategy(ABC):
    """Base class for all exercise-type strategies."""

    type_name: ClassVar[str]
    SUPPORTS_1RM: ClassVar[bool] = False
    SUPPORTED_PR_TYPES: ClassVar[frozenset[PRType]] = frozenset()

    def __init__(self, config: ExerciseTypesConfig | None = None) -> None:
        self.config = config if config is not None else load_exercise_types_config()
        self.settings = self.config.settings_for(self.type_name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(type_name={self.type_name!r})"

    # -------------------------------------------------------------------------
    # Validation and normalization
    # -------------------------------------------------------------------------

    @abstractmethod
    def process_lift_data(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """
        Validate one raw set and force unused columns to their canonical value.

        Raises:
            InvalidExerciseData: On a missing, malformed or out-of-range field
        """

    def normalize(self, data: Mapping[str, Any]) -> dict[str, Any]:
        return self.process_lift_data(data)

    def process_exercise_data(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Tag raw exercise data with this type and clear flags that contradict it."""
        result = dict(data)
        result["exercise_type"] = self.type_name
        result["is_bodyweight"] = False
        result["band_type"] = None
        return result

    def _to_number(self, data: Mapping[str, Any], field: str) -> float | None:
        """Parse a numeric field; None when absent or blank."""
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        if isinstance(value, bool):
            raise InvalidExerciseData.invalid_value(field, value, self.type_name)
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise InvalidExerciseData.invalid_value(field, value, self.type_name) from None
        if not math.isfinite(number):
            raise InvalidExerciseData.invalid_value(field, value, self.type_name)
        return number

    def _require_number(self, data: Mapping[str, Any], field: str) -> float:
        number = self._to_number(data, field)
        if number is None:
            raise InvalidExerciseData.missing_field(field, self.type_name)
        return number

    def _check_range(
        self,
        field: str,
        value: float,
        low_key: str | None,
        high_key: str | None,
        label: str | None = None,
    ) -> None:
        low = self.settings.limit(low_key) if low_key else None
        high = self.settings.limit(high_key) if high_key else None
        if (low is not None and value < low) or (high is not None and value > high):
            shown = int(value) if float(value).is_integer() else value
            raise InvalidExerciseData.out_of_range(field, shown, low, high, self.type_name, label)

    def _to_whole(self, field: str, value: float) -> int:
        if not float(value).is_integer():
            raise InvalidExerciseData.invalid_value(field, value, self.type_name)
        return int(value)

    def _validate_reps(self, data: Mapping[str, Any]) -> int | None:
        """Reps are optional on input; when given they must be a whole number in range."""
        value = self._to_number(data, "reps")
        if value is None:
            return None
        reps = self._to_whole("reps", value)
        self._check_range("reps", reps, "reps_min", "reps_max")
        return reps

    # -------------------------------------------------------------------------
    # Display
    # -------------------------------------------------------------------------

    def format_weight(self, weight: float) -> str:
        return f"{format_number(weight, self.config.precision)} {self.config.weight_unit}"

    @abstractmethod
    def format_weight_display(self, log: LiftLog) -> str:
        """One-line rendering of the session's load, e.g. ``"Band: Blue"``."""

    def format_complete_display(self, log: LiftLog) -> str:
        """Load plus sets x reps, e.g. ``"100 lbs × 3 x 5"``."""
        weight_text = self.format_weight_display(log)
        first = log.display_set
        if first is None:
            return weight_text
        return f"{weight_text} × {log.set_count} x {first.reps}"

    def format_table_cell_display(self, log: LiftLog) -> dict[str, str]:
        first = log.display_set
        reps = first.reps if first is not None else 0
        return {
            "primary": self.format_weight_display(log),
            "secondary": f"{reps} x {log.set_count}",
        }

    def type_display_info(self) -> dict[str, str]:
        return {"icon": self.settings.icon, "name": self.settings.display_name}

    def chart_title(self) -> str:
        return "1RM Progress" if self.can_calculate_1rm() else "Volume Progress"

    # -------------------------------------------------------------------------
    # One-rep max
    # -------------------------------------------------------------------------

    def can_calculate_1rm(self) -> bool:
        return self.SUPPORTS_1RM and self.settings.supports_1rm

    def calculate_1rm(self, weight: float, reps: int, log: LiftLog | None = None) -> float:
        """
        Epley estimate for one set.

        Raises:
            UnsupportedOperation: If this modality has no 1RM concept
        """
        if not self.can_calculate_1rm():
            raise UnsupportedOperation.for_1rm(self.type_name)
        return epley_1rm(weight, reps, self.config.personal_records.epley_coefficient)

    def estimate_1rm(self, log: LiftLog) -> float:
        """Best estimate over the session's sets; 0.0 when unsupported or empty."""
        if not self.can_calculate_1rm():
            return 0.0
        max_reps = self.config.personal_records.max_rep_count
        estimates = [
            self.calculate_1rm(s.weight, s.reps, log)
            for s in log.sets
            if 1 <= s.reps <= max_reps
        ]
        return max(estimates, default=0.0)

    def format_1rm_display(self, log: LiftLog, is_estimated: bool = True) -> str:
        """Rendered 1RM, or "" when the modality has none. Never raises."""
        if not self.can_calculate_1rm():
            return ""
        value = self.estimate_1rm(log)
        if value <= 0:
            return ""
        return f"{value:.{self.config.precision}f} {self.config.weight_unit}"

    def format_1rm_table_cell(self, log: LiftLog) -> str:
        if not self.can_calculate_1rm():
            return f"N/A ({self.settings.display_name})"
        return f"{round(self.estimate_1rm(log))} {self.config.weight_unit}"

    # -------------------------------------------------------------------------
    # Progression
    # -------------------------------------------------------------------------

    def suggest_next(self, log: LiftLog) -> ProgressionSuggestion | None:
        """Targets for the next session, or None when there is nothing to suggest."""
        return None

    def format_suggestion_text(self, suggestion: ProgressionSuggestion) -> str | None:
        return None

    def format_progression_suggestion(self, log: LiftLog) -> str | None:
        suggestion = self.suggest_next(log)
        if suggestion is None:
            return None
        return self.format_suggestion_text(suggestion)

    # -------------------------------------------------------------------------
    # Metrics and personal records
    # -------------------------------------------------------------------------

    def supported_pr_types(self) -> frozenset[PRType]:
        return self.SUPPORTED_PR_TYPES

    @abstractmethod
    def project_set(self, lift_set: LiftSet) -> ProjectedSet:
        """Typed view of one stored set under this modality's column mapping."""

    def project_sets(self, log: LiftLog) -> list[ProjectedSet]:
        return [self.project_set(s) for s in log.sets]

    @abstractmethod
    def metrics(self, log: LiftLog) -> MetricsSnapshot:
        """Per-session snapshot consumed by compare_to_previous."""

    def compare_to_previous(
        self,
        current: MetricsSnapshot,
        previous_logs: Sequence[LiftLog],
        current_log: LiftLog,
    ) -> list[PersonalRecord]:
        """
        PRs earned by *current* against every log in *previous_logs*.

        Logs are compared in the order given; pass them chronologically so
        ties report the earliest previous session.
        """
        if not self.supported_pr_types():
            return []
        history = [(log.id, self.metrics(log)) for log in previous_logs]
        return self._compare(current, history, current_log.id)

    def _compare(
        self,
        current: MetricsSnapshot,
        history: list[tuple[RecordId | None, MetricsSnapshot]],
        lift_log_id: RecordId | None,
    ) -> list[PersonalRecord]:
        return []

    def format_pr_value(self, record: PersonalRecord, value: float) -> str:
        return format_number(value, self.config.precision)

    def pr_label(self, record: PersonalRecord) -> str:
        return record.pr_type.tag.replace("_", " ").capitalize()

    def format_pr_display(self, record: PersonalRecord) -> dict[str, str]:
        """
        Label plus before/after values for a freshly awarded PR.

        ``value`` is the previous best ("-" for a first record) and
        ``comparison`` the new value.
        """
        previous = (
            NO_PREVIOUS
            if record.previous_value is None
            else self.format_pr_value(record, record.previous_value)
        )
        return {
            "label": self.pr_label(record),
            "value": previous,
            "comparison": self.format_pr_value(record, record.value),
        }

    def format_current_pr_display(self, record: PersonalRecord, is_current: bool) -> dict[str, Any]:
        """Label and value for a standing-records table."""
        return {
            "label": self.pr_label(record),
            "value": self.format_pr_value(record, record.value),
            "is_current": is_current,
        }
