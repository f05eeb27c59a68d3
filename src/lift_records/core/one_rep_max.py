"""
One-rep-max estimation.

Epley formula:

    1RM = w × (1 + k × reps)     with k = 0.0333

A single rep is its own 1RM, so ``reps == 1`` returns the weight unchanged.
"""

from __future__ import annotations

from typing import Iterable

from .config import EPLEY_COEFFICIENT
from .models import LoadedSet


def epley_1rm(weight: float, reps: int, coefficient: float = EPLEY_COEFFICIENT) -> float:
    """
    Estimate a one-rep max from a weight x reps set.

    Args:
        weight: Load lifted
        reps: Repetitions performed
        coefficient: Epley coefficient

    Returns:
        Estimated 1RM; 0.0 when weight or reps are not positive
    """
    if weight <= 0 or reps <= 0:
        return 0.0
    if reps == 1:
        return float(weight)
    return weight * (1 + coefficient * reps)


def best_1rm(
    sets: Iterable[LoadedSet],
    max_reps: int,
    coefficient: float = EPLEY_COEFFICIENT,
) -> float:
    """
    Best Epley estimate over sets with at most *max_reps* reps.

    High-rep sets are skipped because the estimate drifts badly past ~10 reps.
    """
    best = 0.0
    for s in sets:
        if s.reps < 1 or s.reps > max_reps:
            continue
        best = max(best, epley_1rm(s.weight, s.reps, coefficient))
    return best
