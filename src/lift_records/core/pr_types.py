"""
Personal-record categories as combinable bit flags.

A single session can earn several PR kinds at once; the detection service
ORs them into one integer that is cheap to store next to the session.
Display code picks one headline label from the combined flags using a
fixed priority order.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import IntFlag


class PRType(IntFlag):
    """Personal-record category."""

    NONE = 0
    ONE_RM = 1
    REP_SPECIFIC = 2
    VOLUME = 4
    DENSITY = 8
    TIME = 16
    ENDURANCE = 32
    CONSISTENCY = 64

    def is_in(self, flags: int) -> bool:
        """True when every bit of this type is set in *flags*."""
        return (int(flags) & int(self)) == int(self)

    @property
    def label(self) -> str:
        return _LABELS.get(self, _LABELS[PRType.ONE_RM])

    @property
    def tag(self) -> str:
        """Lower-case storage tag, e.g. ``"one_rm"``."""
        return (self.name or "none").lower()

    @classmethod
    def from_tag(cls, tag: str) -> PRType:
        """
        Look up a PR type by its storage tag.

        Raises:
            ValueError: If the tag does not name a PR type
        """
        try:
            return cls[tag.strip().upper()]
        except KeyError:
            valid = ", ".join(t.tag for t in _DECLARED)
            raise ValueError(f"Unknown PR type '{tag}'. Valid tags: {valid}") from None

    @classmethod
    def combine(cls, *types: PRType | Iterable[PRType]) -> int:
        """
        OR the given types into one flags integer.

        Accepts types as separate arguments, iterables of types, or a mix:
        ``combine(ONE_RM, TIME) == combine([ONE_RM, TIME])``.
        """
        flags = 0
        for item in types:
            if isinstance(item, int):
                flags |= int(item)
            else:
                for t in item:
                    flags |= int(t)
        return flags

    @classmethod
    def get_types(cls, flags: int) -> list[PRType]:
        """Return every non-NONE type present in *flags*, in declaration order."""
        return [t for t in _DECLARED if t.is_in(flags)]

    @classmethod
    def get_best_label(cls, flags: int) -> str:
        """
        Pick the single headline label for a combination of flags.

        Empty flags give an empty string. Non-empty flags with no match in
        the priority list fall back to the generic ONE_RM celebration.
        """
        if not flags:
            return ""
        for t in LABEL_PRIORITY:
            if t.is_in(flags):
                return t.label
        return _LABELS[PRType.ONE_RM]


_DECLARED: tuple[PRType, ...] = tuple(
    t for t in PRType.__members__.values() if t is not PRType.NONE
)

LABEL_PRIORITY: tuple[PRType, ...] = (
    PRType.ONE_RM,
    PRType.REP_SPECIFIC,
    PRType.VOLUME,
    PRType.DENSITY,
    PRType.TIME,
    PRType.ENDURANCE,
)

_LABELS: dict[PRType, str] = {
    PRType.ONE_RM: "NEW PR!",
    PRType.REP_SPECIFIC: "Rep PR!",
    PRType.VOLUME: "Volume PR!",
    PRType.DENSITY: "Density PR!",
    PRType.TIME: "Time PR!",
    PRType.ENDURANCE: "Endurance PR!",
    PRType.CONSISTENCY: "Consistency PR!",
}
