"""
Banded exercises: resistance comes from a colored band, weight is unused.

Resistance bands progress "up" the palette to a heavier band. Assistance
bands progress "down" to a lighter one and eventually to no band at all.
Banded sessions do not take part in PR tracking.
"""

from __future__ import annotations

from typing import Any, ClassVar, Mapping

from ..metrics import BandMetrics, band_metrics
from ..models import BandSet, LiftLog, LiftSet, ProgressionSuggestion
from ..progression import suggest_band
from .errors import InvalidExerciseData
from .strategy import ExerciseTypeStrategy

_BAND_TYPES: tuple[str, ...] = ("resistance", "assistance")


class BandedExerciseType(ExerciseTypeStrategy):
    """Generic banded exercise; direction comes from its settings."""

    type_name = "banded"
    BAND_TYPE: ClassVar[str | None] = None
    DEFAULT_DIRECTION: ClassVar[str] = "up"

    @property
    def direction(self) -> str:
        return self.settings.progression_direction or self.DEFAULT_DIRECTION

    @property
    def is_assistance(self) -> bool:
        return self.direction == "down"

    def process_lift_data(self, data: Mapping[str, Any]) -> dict[str, Any]:
        result = dict(data)
        color = data.get("band_color")
        if color is None or (isinstance(color, str) and not color.strip()):
            raise InvalidExerciseData.missing_field("band_color", self.type_name)
        color = str(color).strip().lower()
        if color not in self.config.bands:
            raise InvalidExerciseData.invalid_band_color(
                color, self.config.bands.ordered_colors(), self.type_name
            )
        result["band_color"] = color
        reps = self._validate_reps(data)
        if reps is not None:
            result["reps"] = reps
        result["weight"] = 0.0
        result["time"] = None
        return result

    def process_exercise_data(self, data: Mapping[str, Any]) -> dict[str, Any]:
        result = super().process_exercise_data(data)
        band_type = self.BAND_TYPE or data.get("band_type")
        result["band_type"] = band_type if band_type in _BAND_TYPES else "resistance"
        return result

    def format_weight_display(self, log: LiftLog) -> str:
        first = log.display_set
        if first is None or not first.band_color:
            return "Band: N/A"
        text = f"Band: {first.band_color.capitalize()}"
        if self.is_assistance:
            text += " assistance"
        return text

    def project_set(self, lift_set: LiftSet) -> BandSet:
        return BandSet(band_color=lift_set.band_color, reps=lift_set.reps)

    def metrics(self, log: LiftLog) -> BandMetrics:
        return band_metrics(self.project_sets(log))

    def suggest_next(self, log: LiftLog) -> ProgressionSuggestion | None:
        first = log.display_set
        if first is None:
            return None
        bands = self.config.bands
        return suggest_band(
            first.band_color,
            first.reps,
            log.set_count,
            bands.colors,
            direction=self.direction,
            max_reps_before_change=bands.max_reps_before_change,
            reps_on_change=bands.reps_on_change,
        )

    def format_suggestion_text(self, suggestion: ProgressionSuggestion) -> str | None:
        if suggestion.drop_band:
            return "Try without assistance band"
        if suggestion.band_color is None:
            return None
        return f"Try {suggestion.band_color} band with {suggestion.reps} reps"


class BandedResistanceExerciseType(BandedExerciseType):
    type_name = "banded_resistance"
    BAND_TYPE = "resistance"
    DEFAULT_DIRECTION = "up"


class BandedAssistanceExerciseType(BandedExerciseType):
    type_name = "banded_assistance"
    BAND_TYPE = "assistance"
    DEFAULT_DIRECTION = "down"
