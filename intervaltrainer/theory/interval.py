from __future__ import annotations

"""Musical intervals measured in half-steps.

An interval is the distance between two notes on a piano. It may be
ascending (positive) or descending (negative); a unison is both.
"""

from dataclasses import dataclass
from typing import Iterator, Union


INTERVAL_NAMES = [
    "Unison",
    "Minor Second",
    "Major Second",
    "Minor Third",
    "Major Third",
    "Perfect Fourth",
    "Tritone",
    "Perfect Fifth",
    "Minor Sixth",
    "Major Sixth",
    "Minor Seventh",
    "Major Seventh",
    "Octave",
]

INTERVAL_ABBREVIATIONS = ["U", "m2", "M2", "m3", "M3", "P4", "TT", "P5", "m6", "M6", "m7", "M7", "8va"]


@dataclass(frozen=True, order=True)
class Interval:
    """A signed interval. Equality and ordering follow the signed value."""

    half_steps: int

    @property
    def name(self) -> str:
        size = abs(self.half_steps)
        if size < len(INTERVAL_NAMES):
            return INTERVAL_NAMES[size]
        return f"Interval<{self.half_steps}>"

    @property
    def abbreviation(self) -> str:
        size = abs(self.half_steps)
        if size < len(INTERVAL_ABBREVIATIONS):
            return INTERVAL_ABBREVIATIONS[size]
        return "?"

    @property
    def short_name(self) -> str:
        return self.abbreviation + ("↑" if self.is_ascending else "↓")

    @property
    def ascii_name(self) -> str:
        return self.abbreviation + ("^" if self.is_ascending else "v")

    @property
    def is_ascending(self) -> bool:
        return self.half_steps >= 0

    @property
    def is_descending(self) -> bool:
        return self.half_steps <= 0

    def add(self, other: "Interval") -> "Interval":
        return Interval(self.half_steps + other.half_steps)

    def reverse(self) -> "Interval":
        """Turn an ascending interval into a descending one and vice versa."""
        return Interval(-self.half_steps)

    def to_ascending(self) -> "Interval":
        return Interval(abs(self.half_steps))

    def up(self) -> "Interval":
        """The interval one half-step higher."""
        return Interval(self.half_steps + 1)

    def __str__(self) -> str:
        return self.short_name

    @staticmethod
    def range(lowest: "Interval", highest: "Interval") -> "IntervalRange":
        """All intervals from lowest to highest, inclusive."""
        return IntervalRange(lowest, highest)

    @classmethod
    def from_name(cls, value: Union[str, int, "Interval"]) -> "Interval":
        """Parse an interval from a full name, an abbreviation or a half-step count.

        Abbreviations are case sensitive ("m3" vs "M3"); full names are not.
        A trailing arrow or "^"/"v" selects the direction.

        Raises:
            ValueError: if the value names no known interval.
        """
        if isinstance(value, Interval):
            return value
        if isinstance(value, int):
            return cls(value)
        text = str(value).strip()
        sign = 1
        if text[-1:] in ("↓", "v") and text[:-1] in INTERVAL_ABBREVIATIONS:
            sign = -1
            text = text[:-1]
        elif text[-1:] in ("↑", "^"):
            text = text[:-1]
        if text in INTERVAL_ABBREVIATIONS:
            return cls(sign * INTERVAL_ABBREVIATIONS.index(text))
        normalized = text.replace("_", " ").replace("-", " ").lower()
        for i, name in enumerate(INTERVAL_NAMES):
            if name.lower() == normalized:
                return cls(i)
        try:
            return cls(int(text))
        except ValueError:
            raise ValueError(f"Unknown interval: {value}") from None


class IntervalRange:
    """A lazy, restartable sequence of consecutive intervals."""

    def __init__(self, lowest: Interval, highest: Interval) -> None:
        self.lowest = lowest
        self.highest = highest

    def __iter__(self) -> Iterator[Interval]:
        candidate = self.lowest
        while candidate <= self.highest:
            yield candidate
            candidate = candidate.up()

    def __len__(self) -> int:
        return max(0, self.highest.half_steps - self.lowest.half_steps + 1)

    def __contains__(self, item: object) -> bool:
        return isinstance(item, Interval) and self.lowest <= item <= self.highest


UNISON = Interval(0)
MINOR_SECOND = Interval(1)
MAJOR_SECOND = Interval(2)
MINOR_THIRD = Interval(3)
MAJOR_THIRD = Interval(4)
PERFECT_FOURTH = Interval(5)
TRITONE = Interval(6)
PERFECT_FIFTH = Interval(7)
MINOR_SIXTH = Interval(8)
MAJOR_SIXTH = Interval(9)
MINOR_SEVENTH = Interval(10)
MAJOR_SEVENTH = Interval(11)
OCTAVE = Interval(12)

# Every interval that has a name, used to populate answer buttons.
ALL_NAMED = Interval.range(UNISON, OCTAVE)
