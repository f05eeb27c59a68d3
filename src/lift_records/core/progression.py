"""
Next-session progression rules.

Pure functions: each takes the values read from the last session's display
set (first set) and its set count, and returns a ProgressionSuggestion or
None. Thresholds default to config.py; strategies pass the values from
their TypeSettings.
"""

from __future__ import annotations

from typing import Mapping

from .config import (
    BODYWEIGHT_REPS_TO_ADD_WEIGHT,
    BODYWEIGHT_REPS_TO_INCREASE_WEIGHT,
    BODYWEIGHT_WEIGHT_STEP,
    CARDIO_DEFAULT_DISTANCE,
    CARDIO_DEFAULT_ROUNDS,
    CARDIO_LONG_STEP,
    CARDIO_MAX_DISTANCE,
    CARDIO_MAX_ROUNDS,
    CARDIO_ROUNDS_THRESHOLD,
    CARDIO_SHORT_DISTANCE,
    CARDIO_SHORT_STEP,
    DEFAULT_REPS_ON_BAND_CHANGE,
    HOLD_DEFAULT_DURATION,
    HOLD_DEFAULT_SETS,
    HOLD_LONG_STEP,
    HOLD_MAX_DURATION,
    HOLD_MAX_SETS,
    HOLD_SHORT_DURATION,
    HOLD_SHORT_STEP,
    HOLD_WEIGHT_STEP,
    HOLD_WEIGHT_THRESHOLD,
    MAX_REPS_BEFORE_BAND_CHANGE,
    REGULAR_REP_RANGE_HIGH,
    REGULAR_REP_RANGE_LOW,
    REGULAR_WEIGHT_STEP,
)
from .models import ProgressionSuggestion


def get_next_band(color: str | None, palette: Mapping[str, int], direction: str = "up") -> str | None:
    """
    Find the adjacent band in the palette.

    "up" returns the band with the smallest order above *color*, "down" the
    one with the largest order below it. Palettes are small, so this is a
    linear scan.

    Args:
        color: Current band color
        palette: color -> order
        direction: "up" or "down"

    Returns:
        The adjacent color, or None at the end of the palette or for an
        unknown color
    """
    if color is None or color not in palette:
        return None
    current = palette[color]
    best: str | None = None
    for candidate, order in palette.items():
        if direction == "up":
            if order > current and (best is None or order < palette[best]):
                best = candidate
        elif order < current and (best is None or order > palette[best]):
            best = candidate
    return best


def suggest_bodyweight(
    reps: int,
    extra_weight: float,
    sets: int,
    reps_to_add_weight: int = BODYWEIGHT_REPS_TO_ADD_WEIGHT,
    reps_to_increase_weight: int = BODYWEIGHT_REPS_TO_INCREASE_WEIGHT,
    weight_step: float = BODYWEIGHT_WEIGHT_STEP,
) -> ProgressionSuggestion | None:
    """
    Start adding weight once bodyweight reps get high.

    reps >= 12 with no extra weight  -> first plate (+5)
    reps >= 15 with extra weight     -> +5 on top
    """
    sets = max(sets, 1)
    if extra_weight <= 0:
        if reps >= reps_to_add_weight:
            return ProgressionSuggestion(sets=sets, reps=reps, weight=weight_step)
        return None
    if reps >= reps_to_increase_weight:
        return ProgressionSuggestion(sets=sets, reps=reps, weight=extra_weight + weight_step)
    return None


def suggest_band(
    band_color: str | None,
    reps: int,
    sets: int,
    palette: Mapping[str, int],
    direction: str = "up",
    max_reps_before_change: int = MAX_REPS_BEFORE_BAND_CHANGE,
    reps_on_change: int = DEFAULT_REPS_ON_BAND_CHANGE,
) -> ProgressionSuggestion | None:
    """
    Move one band along the palette once reps reach the change threshold.

    Resistance moves "up" to a heavier band. Assistance moves "down" to a
    lighter one, and past the lightest band drops the band entirely.
    """
    if band_color is None or reps < max_reps_before_change:
        return None
    sets = max(sets, 1)
    next_band = get_next_band(band_color, palette, direction)
    if next_band is not None:
        return ProgressionSuggestion(sets=sets, reps=reps_on_change, band_color=next_band)
    if direction == "down" and band_color in palette:
        return ProgressionSuggestion(sets=sets, reps=reps_on_change, drop_band=True)
    return None


def suggest_cardio(
    distance: int,
    rounds: int,
    short_distance: int = CARDIO_SHORT_DISTANCE,
    rounds_threshold: int = CARDIO_ROUNDS_THRESHOLD,
    short_step: int = CARDIO_SHORT_STEP,
    long_step: int = CARDIO_LONG_STEP,
    max_distance: int = CARDIO_MAX_DISTANCE,
    max_rounds: int = CARDIO_MAX_ROUNDS,
    default_distance: int = CARDIO_DEFAULT_DISTANCE,
    default_rounds: int = CARDIO_DEFAULT_ROUNDS,
) -> ProgressionSuggestion:
    """
    Grow distance until 1000 m, then add rounds.

    Below 500 m the step is 50 m, from 500 m it is 100 m. With no previous
    distance the default (1 × 500 m) is suggested.
    """
    if distance <= 0:
        return ProgressionSuggestion(sets=default_rounds, distance=default_distance)
    rounds = max(rounds, 1)
    if distance < rounds_threshold:
        step = short_step if distance < short_distance else long_step
        return ProgressionSuggestion(sets=rounds, distance=min(distance + step, max_distance))
    return ProgressionSuggestion(sets=min(rounds + 1, max_rounds), distance=distance)


def suggest_static_hold(
    duration: int,
    added_weight: float,
    sets: int,
    weight_threshold: int = HOLD_WEIGHT_THRESHOLD,
    short_duration: int = HOLD_SHORT_DURATION,
    short_step: int = HOLD_SHORT_STEP,
    long_step: int = HOLD_LONG_STEP,
    weight_step: float = HOLD_WEIGHT_STEP,
    max_sets: int = HOLD_MAX_SETS,
    max_duration: int = HOLD_MAX_DURATION,
    default_sets: int = HOLD_DEFAULT_SETS,
    default_duration: int = HOLD_DEFAULT_DURATION,
) -> ProgressionSuggestion:
    """
    Ramp hold time slowly, then load, then sets.

    < 60 s                    -> +1 s (below 30 s) or +2 s, unweighted
    >= 60 s, no added weight  -> start at +5 lbs
    >= 60 s, added weight     -> +1 set, same weight

    Sets are capped at 10 and duration at 300 s. With no previous hold the
    default (3 × 30 s) is suggested.
    """
    if duration <= 0:
        return ProgressionSuggestion(sets=default_sets, time=default_duration)
    sets = min(max(sets, 1), max_sets)
    if duration < weight_threshold:
        step = short_step if duration < short_duration else long_step
        return ProgressionSuggestion(sets=sets, time=min(duration + step, max_duration))
    duration = min(duration, max_duration)
    if added_weight <= 0:
        return ProgressionSuggestion(sets=sets, time=duration, weight=weight_step)
    return ProgressionSuggestion(sets=min(sets + 1, max_sets), time=duration, weight=added_weight)


def suggest_regular(
    weight: float,
    reps: int,
    sets: int,
    rep_range_low: int = REGULAR_REP_RANGE_LOW,
    rep_range_high: int = REGULAR_REP_RANGE_HIGH,
    weight_step: float = REGULAR_WEIGHT_STEP,
) -> ProgressionSuggestion | None:
    """
    Double progression inside the rep range, linear outside it.

    Inside 8-12 reps: add a rep at the same weight; at the top of the range
    add weight and go back to the bottom. Outside the range: add weight and
    keep the reps.
    """
    if weight <= 0 or reps <= 0:
        return None
    sets = max(sets, 1)
    if rep_range_low <= reps <= rep_range_high:
        if reps >= rep_range_high:
            return ProgressionSuggestion(sets=sets, reps=rep_range_low, weight=weight + weight_step)
        return ProgressionSuggestion(sets=sets, reps=reps + 1, weight=weight)
    return ProgressionSuggestion(sets=sets, reps=reps, weight=weight + weight_step)
