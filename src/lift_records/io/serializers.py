"""
JSON serialization for lift-records models.

Handles conversion between dataclasses and JSON-compatible dicts. This is
the storage boundary: PR details are flattened to the ``rep_count`` and
``weight`` columns here and nowhere else.
"""

import json
from datetime import datetime
from typing import Any

from ..core.models import Exercise, LiftLog, LiftSet, PersonalRecord


class ValidationError(Exception):
    """Raised when stored data fails validation."""

    pass


def validate_non_negative(value: int | float, name: str) -> int | float:
    """
    Validate that a value is a non-negative number.

    Raises:
        ValidationError: If value is negative or not a number
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


def parse_datetime(value: str) -> datetime:
    """
    Parse an ISO date or datetime string.

    A value with a UTC offset is converted to naive local time, so every
    logged_at in a history compares with every other.

    Args:
        value: "YYYY-MM-DD" or "YYYY-MM-DDTHH:MM[:SS][+HH:MM]"

    Returns:
        Naive datetime (midnight for a bare date)

    Raises:
        ValidationError: If the string is not ISO formatted
    """
    if not isinstance(value, str):
        raise ValidationError(f"Invalid date: {value!r}. Expected ISO format")
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError as e:
        raise ValidationError(f"Invalid date: {value}. Expected YYYY-MM-DD or ISO datetime") from e
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def lift_set_to_dict(lift_set: LiftSet) -> dict[str, Any]:
    """Convert LiftSet to dict, omitting unused columns."""
    d: dict[str, Any] = {"weight": lift_set.weight, "reps": lift_set.reps}
    if lift_set.time is not None:
        d["time"] = lift_set.time
    if lift_set.band_color is not None:
        d["band_color"] = lift_set.band_color
    return d


def dict_to_lift_set(data: dict[str, Any]) -> LiftSet:
    """
    Convert dict to LiftSet.

    Raises:
        ValidationError: If data is invalid
    """
    weight = data.get("weight") or 0.0
    reps = data.get("reps") or 0
    time = data.get("time")
    if not isinstance(weight, (int, float)) or isinstance(weight, bool):
        raise ValidationError(f"weight must be a number, got {weight!r}")
    validate_non_negative(reps, "reps")
    if time is not None:
        validate_non_negative(time, "time")

    band_color = data.get("band_color")
    return LiftSet(
        weight=float(weight),
        reps=int(reps),
        time=int(time) if time is not None else None,
        band_color=str(band_color) if band_color else None,
    )


def lift_log_to_dict(log: LiftLog) -> dict[str, Any]:
    d: dict[str, Any] = {
        "id": log.id,
        "exercise_id": log.exercise_id,
        "logged_at": log.logged_at.isoformat(),
        "sets": [lift_set_to_dict(s) for s in log.sets],
    }
    if log.comments:
        d["comments"] = log.comments
    if log.user_id is not None:
        d["user_id"] = log.user_id
    if log.bodyweight is not None:
        d["bodyweight"] = log.bodyweight
    return d


def dict_to_lift_log(data: dict[str, Any]) -> LiftLog:
    """
    Convert dict to LiftLog.

    Raises:
        ValidationError: If required fields are missing or invalid
    """
    for key in ("exercise_id", "logged_at"):
        if key not in data:
            raise ValidationError(f"Lift log missing field '{key}'")

    raw_sets = data.get("sets") or []
    if not isinstance(raw_sets, list):
        raise ValidationError("sets must be a list")

    bodyweight = data.get("bodyweight")
    if bodyweight is not None:
        validate_non_negative(bodyweight, "bodyweight")

    try:
        return LiftLog(
            id=data.get("id"),
            exercise_id=data["exercise_id"],
            logged_at=parse_datetime(data["logged_at"]),
            sets=[dict_to_lift_set(s) for s in raw_sets],
            comments=str(data.get("comments", "")),
            user_id=data.get("user_id"),
            bodyweight=float(bodyweight) if bodyweight is not None else None,
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e


def exercise_to_dict(exercise: Exercise) -> dict[str, Any]:
    return {
        "id": exercise.id,
        "title": exercise.title,
        "canonical_name": exercise.canonical_name,
        "is_bodyweight": exercise.is_bodyweight,
        "band_type": exercise.band_type,
        "exercise_type": exercise.exercise_type,
        "user_id": exercise.user_id,
    }


def dict_to_exercise(data: dict[str, Any]) -> Exercise:
    """
    Convert dict to Exercise.

    Raises:
        ValidationError: If required fields are missing or invalid
    """
    for key in ("id", "title"):
        if key not in data:
            raise ValidationError(f"Exercise missing field '{key}'")
    try:
        return Exercise(
            id=data["id"],
            title=str(data["title"]),
            canonical_name=str(data.get("canonical_name") or ""),
            is_bodyweight=bool(data.get("is_bodyweight", False)),
            band_type=data.get("band_type"),
            exercise_type=data.get("exercise_type"),
            user_id=data.get("user_id"),
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e


def personal_record_to_dict(record: PersonalRecord) -> dict[str, Any]:
    """Flatten a PersonalRecord into its storage row."""
    return {
        "pr_type": record.tag,
        "value": record.value,
        "previous_value": record.previous_value,
        "previous_lift_log_id": record.previous_lift_log_id,
        "lift_log_id": record.lift_log_id,
        "rep_count": record.rep_count,
        "weight": record.weight,
    }


def record_to_json_line(data: dict[str, Any]) -> str:
    """Serialize a dict to a single JSON line (no trailing newline)."""
    return json.dumps(data, separators=(",", ":"))
