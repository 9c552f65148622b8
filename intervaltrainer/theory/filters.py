from __future__ import annotations

"""Filters deciding which intervals may appear in generated phrases."""

from enum import Enum
from typing import TYPE_CHECKING, FrozenSet, Iterable, Iterator, List

from .interval import PERFECT_FIFTH, PERFECT_FOURTH, Interval

if TYPE_CHECKING:  # pragma: no cover
    from .phrase import Phrase
    from .scale import Scale


class DirectionFilter(Enum):
    """Filters intervals based on their direction."""

    ASCENDING = "Up"
    DESCENDING = "Down"
    BOTH = "Both"

    @property
    def label(self) -> str:
        return self.value

    def allows(self, interval: Interval) -> bool:
        return (
            self is DirectionFilter.BOTH
            or (self is DirectionFilter.ASCENDING and interval.is_ascending)
            or (self is DirectionFilter.DESCENDING and interval.is_descending)
        )

    def allows_phrase(self, phrase: "Phrase") -> bool:
        return all(self.allows(i) for i in phrase.intervals)

    def next(self) -> "DirectionFilter":
        """The following policy, cycling Up -> Down -> Both -> Up."""
        members = list(DirectionFilter)
        return members[(members.index(self) + 1) % len(members)]

    @classmethod
    def parse(cls, value: str) -> "DirectionFilter":
        t = str(value).strip().lower()
        for member in cls:
            if t in (member.name.lower(), member.value.lower()):
                return member
        raise ValueError(f"Unknown direction: {value}")


DEFAULT_DIRECTION = DirectionFilter.ASCENDING


class IntervalFilter:
    """An immutable set of enabled intervals, stored ascending-normalized."""

    __slots__ = ("_enabled",)

    def __init__(self, intervals: Iterable[Interval] = ()) -> None:
        self._enabled: FrozenSet[Interval] = frozenset(i.to_ascending() for i in intervals)

    def enable(self, choice: Interval) -> "IntervalFilter":
        return IntervalFilter(self._enabled | {choice.to_ascending()})

    def disable(self, choice: Interval) -> "IntervalFilter":
        return IntervalFilter(self._enabled - {choice.to_ascending()})

    def intersect_scale(self, scale: "Scale") -> "IntervalFilter":
        """Drop every interval that appears nowhere in the scale."""
        return IntervalFilter(i for i in self._enabled if scale.contains_anywhere(i))

    def allows(self, interval: Interval) -> bool:
        return interval.to_ascending() in self._enabled

    def allows_phrase(self, phrase: "Phrase") -> bool:
        return all(self.allows(i) for i in phrase.intervals)

    def generate(self, direction: DirectionFilter) -> List[Interval]:
        """Concrete signed intervals permitted by the direction policy, sorted."""
        result = set()
        for interval in self._enabled:
            if direction.allows(interval):
                result.add(interval)
            if direction.allows(interval.reverse()):
                result.add(interval.reverse())
        return sorted(result)

    @property
    def smallest(self) -> Interval:
        return self._sorted()[0]

    @property
    def second_smallest(self) -> Interval:
        """Second smallest enabled interval; the only one when just one is enabled."""
        ordered = self._sorted()
        return ordered[1] if len(ordered) > 1 else ordered[0]

    @property
    def largest(self) -> Interval:
        return self._sorted()[-1]

    def is_empty(self) -> bool:
        return not self._enabled

    def _sorted(self) -> List[Interval]:
        if not self._enabled:
            raise ValueError("interval filter is empty")
        return sorted(self._enabled)

    def __iter__(self) -> Iterator[Interval]:
        return iter(sorted(self._enabled))

    def __len__(self) -> int:
        return len(self._enabled)

    def __contains__(self, interval: object) -> bool:
        return isinstance(interval, Interval) and self.allows(interval)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, IntervalFilter) and self._enabled == other._enabled

    def __hash__(self) -> int:
        return hash(self._enabled)

    def __repr__(self) -> str:
        return "IntervalFilter(" + " ".join(i.abbreviation for i in self) + ")"


DEFAULT_FILTER = IntervalFilter([PERFECT_FOURTH, PERFECT_FIFTH])
