"""
Settings types for exercise-type strategies.

TypeSettings holds one modality's row of the exercise-type table
(validation ranges, progression steps, display metadata). BandPalette and
PRSettings are shared by every modality. ExerciseTypesConfig bundles them
all and is what a strategy is constructed with.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TypeSettings:
    """Configuration for one exercise type."""

    type_name: str              # e.g. "regular", "static_hold"
    display_name: str           # e.g. "Static Hold"
    icon: str
    chart_type: str
    supports_1rm: bool          # Config can switch 1RM off, never on for non-lifting types
    form_fields: tuple[str, ...]
    progression_types: tuple[str, ...]
    display_format: str

    # Field limits, e.g. {"reps_min": 1, "reps_max": 100}
    validation: dict[str, float] = field(default_factory=dict)

    # Progression step sizes and thresholds for this type
    progression: dict[str, float] = field(default_factory=dict)

    # Banded only: "up" (heavier band) or "down" (less assistance)
    progression_direction: str | None = None

    def limit(self, key: str) -> float | None:
        """Validation limit for *key*, or None when the type sets no such limit."""
        value = self.validation.get(key)
        return None if value is None else float(value)


@dataclass(frozen=True)
class BandPalette:
    """Band colors with their order, plus the band-change thresholds."""

    colors: dict[str, int]      # color -> order (1 = lightest)
    max_reps_before_change: int
    reps_on_change: int

    def order_of(self, color: str | None) -> int | None:
        if color is None:
            return None
        return self.colors.get(color)

    def __contains__(self, color: object) -> bool:
        return color in self.colors

    def ordered_colors(self) -> list[str]:
        return sorted(self.colors, key=lambda c: self.colors[c])


@dataclass(frozen=True)
class PRSettings:
    """Thresholds and tolerances used by the PR comparators."""

    max_rep_count: int
    one_rm_tolerance: float
    volume_tolerance_fraction: float
    weight_bucket_tolerance: float
    distance_tolerance: float
    max_rounds: int
    epley_coefficient: float


@dataclass(frozen=True)
class ExerciseTypesConfig:
    """The full exercise-type table."""

    types: dict[str, TypeSettings]
    bands: BandPalette
    personal_records: PRSettings
    fallback_type: str = "regular"
    cache_strategies: bool = True
    weight_unit: str = "lbs"
    precision: int = 1

    def settings_for(self, type_name: str) -> TypeSettings:
        """
        Return the TypeSettings for *type_name*.

        Raises:
            ValueError: If the type is not configured
        """
        if type_name not in self.types:
            valid = ", ".join(self.types)
            raise ValueError(f"Unknown exercise type '{type_name}'. Valid types: {valid}")
        return self.types[type_name]
