from __future__ import annotations

"""Keeps track of the intervals still selectable for the current answer step."""

from typing import Callable, Dict, List, Set

from ..theory.filters import IntervalFilter
from ..theory.interval import Interval


class IntervalChoices:
    def __init__(self) -> None:
        self._enabled = IntervalFilter()
        self._wrong: Set[Interval] = set()
        self._watchers: Dict[Interval, List[Callable[[], None]]] = {}

    def watch(self, interval: Interval, listener: Callable[[], None]) -> None:
        """Call listener whenever interval may have become (un)selectable."""
        self._watchers.setdefault(interval, []).append(listener)

    def reset(self, choices: IntervalFilter) -> None:
        """Offer a fresh answer set; earlier removals no longer apply."""
        self._enabled = choices
        self._wrong.clear()
        for listeners in list(self._watchers.values()):
            for listener in listeners:
                listener()

    def remove_choice(self, answer: Interval) -> None:
        """Disable answer until the next reset."""
        self._wrong.add(answer)
        for listener in self._watchers.get(answer, []):
            listener()

    def allows(self, candidate: Interval) -> bool:
        return self._enabled.allows(candidate) and candidate not in self._wrong

    @property
    def removed(self) -> Set[Interval]:
        return set(self._wrong)
