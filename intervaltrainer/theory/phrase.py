from __future__ import annotations

"""Phrases: melodic shapes that may be played from any starting note."""

import random
from functools import total_ordering
from typing import Iterable, List, Optional, Sequence, Tuple

from .interval import Interval
from .scale import Scale


@total_ordering
class Phrase:
    """An immutable sequence of signed intervals.

    Phrases compare by length first, then position by position.
    """

    __slots__ = ("_steps",)

    def __init__(self, intervals: Iterable[Interval]) -> None:
        self._steps: Tuple[int, ...] = tuple(i.half_steps for i in intervals)

    @property
    def intervals(self) -> List[Interval]:
        return [Interval(s) for s in self._steps]

    @property
    def note_count(self) -> int:
        return len(self._steps) + 1

    def get_notes(self, start_note: int) -> List[int]:
        """The notes of the phrase starting from start_note, inclusive."""
        notes = [start_note]
        for step in self._steps:
            start_note += step
            notes.append(start_note)
        return notes

    def min_note(self, start_note: int = 0) -> int:
        return min(self.get_notes(start_note))

    def max_note(self, start_note: int = 0) -> int:
        return max(self.get_notes(start_note))

    @property
    def range(self) -> int:
        return self.max_note(0) - self.min_note(0)

    def get_scale(self) -> Scale:
        """The pitch classes the phrase touches, relative to its first note."""
        return Scale.from_notes(0, self.get_notes(0))

    def can_transpose_to_scale(self, candidate: Scale) -> bool:
        return candidate.contains_anywhere(self.get_scale())

    def choose_random_start_note(self, rng: random.Random, lowest_note: int, highest_note: int) -> Optional[int]:
        """Pick a start note keeping every note within [lowest_note, highest_note].

        Returns None when the phrase does not fit in that window.
        """
        min_start = lowest_note - self.min_note(0)
        max_start = highest_note - self.max_note(0)
        if min_start > max_start:
            return None
        return rng.randint(min_start, max_start)

    def contains_intervals_in_order(self, ascending_intervals: Sequence[Interval]) -> bool:
        """True if the answers name this phrase's intervals, ignoring direction."""
        if len(ascending_intervals) != len(self._steps):
            return False
        return all(
            Interval(step).to_ascending() == answer
            for step, answer in zip(self._steps, ascending_intervals)
        )

    def _key(self) -> Tuple[int, Tuple[int, ...]]:
        return (len(self._steps), self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Phrase) and self._steps == other._steps

    def __lt__(self, other: "Phrase") -> bool:
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._steps)

    def __repr__(self) -> str:
        return "Phrase(" + " ".join(str(i) for i in self.intervals) + ")"

    def describe(self) -> str:
        """Comma separated interval names, for score tables."""
        parts = []
        for interval in self.intervals:
            if interval.half_steps > 0:
                parts.append(f"{interval.name} up")
            elif interval.half_steps < 0:
                parts.append(f"{interval.name} down")
            else:
                parts.append(interval.name)
        return ", ".join(parts)


class PhraseBuilder:
    """Mutable variant of a phrase, used while searching."""

    def __init__(self) -> None:
        self._intervals: List[Interval] = []
        self._position = 0
        self._low = 0
        self._high = 0
        self._history: List[Tuple[int, int, int]] = []

    def add(self, interval: Interval) -> None:
        self._history.append((self._position, self._low, self._high))
        self._intervals.append(interval)
        self._position += interval.half_steps
        self._low = min(self._low, self._position)
        self._high = max(self._high, self._position)

    def pop(self) -> None:
        self._intervals.pop()
        self._position, self._low, self._high = self._history.pop()

    @property
    def position(self) -> int:
        """Current note relative to the first note."""
        return self._position

    def range(self) -> int:
        return self._high - self._low

    def __len__(self) -> int:
        return len(self._intervals)

    def build(self) -> Phrase:
        return Phrase(self._intervals)
