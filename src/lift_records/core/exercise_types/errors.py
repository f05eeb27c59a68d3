"""
Exercise-type errors.

InvalidExerciseData is a field-level validation failure the caller can show
next to the offending input. UnsupportedOperation marks a call the modality
cannot answer (asking a cardio exercise for a 1RM). StrategyResolutionFailure
means an exercise has no usable strategy at all.
"""

from __future__ import annotations

from typing import Any, Iterable


def _readable(type_name: str | None) -> str:
    return (type_name or "unknown").replace("_", " ")


class ExerciseTypeError(Exception):
    """Base class for exercise-type failures."""


class InvalidExerciseData(ExerciseTypeError, ValueError):
    """Raised when lift or exercise data fails a modality's validation."""

    def __init__(self, message: str, field: str | None = None, type_name: str | None = None):
        super().__init__(message)
        self.field = field
        self.type_name = type_name

    @property
    def reason(self) -> str:
        return str(self)

    @classmethod
    def missing_field(cls, field: str, type_name: str) -> InvalidExerciseData:
        return cls(
            f"Required field '{field}' missing for {_readable(type_name)} exercise",
            field=field,
            type_name=type_name,
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, type_name: str) -> InvalidExerciseData:
        return cls(
            f"Invalid {field} value '{value}' for {_readable(type_name)} exercise",
            field=field,
            type_name=type_name,
        )

    @classmethod
    def out_of_range(
        cls,
        field: str,
        value: Any,
        low: float | None,
        high: float | None,
        type_name: str,
        label: str | None = None,
    ) -> InvalidExerciseData:
        if high is None:
            bounds = f"at least {low:g}"
        elif low is None:
            bounds = f"at most {high:g}"
        else:
            bounds = f"between {low:g} and {high:g}"
        return cls(
            f"{(label or field).capitalize()} must be {bounds} for {_readable(type_name)} exercise, got {value}",
            field=field,
            type_name=type_name,
        )

    @classmethod
    def invalid_band_color(
        cls, color: Any, valid: Iterable[str], type_name: str = "banded"
    ) -> InvalidExerciseData:
        return cls(
            f"Invalid band color '{color}'. Valid colors: {', '.join(valid)}",
            field="band_color",
            type_name=type_name,
        )


class UnsupportedOperation(ExerciseTypeError):
    """Raised when a modality is asked for something it does not model."""

    @classmethod
    def for_1rm(cls, type_name: str) -> UnsupportedOperation:
        return cls(f"1RM calculation is not supported for {_readable(type_name)} exercises")


class StrategyResolutionFailure(ExerciseTypeError):
    """Raised when neither the resolved type nor the fallback type is usable."""

    def __init__(self, message: str, type_name: str | None = None, exercise_id: Any = None):
        super().__init__(message)
        self.type_name = type_name
        self.exercise_id = exercise_id
