from __future__ import annotations

"""Constrained phrase generation.

Phrases are found by an exhaustive, bounded depth-first search: starting on
every note of the scale, intervals are chosen position by position from those
that land back on the scale, and a partial phrase is abandoned as soon as its
running range exceeds the budget. The distinct results are sorted and sampled
uniformly, so a fixed seed always gives the same phrases.

When the search space is too large to enumerate, a scale-aware random walk
takes over.
"""

import random
from typing import Dict, List, Optional, Tuple

from ..app.explain import trace as xtrace
from ..theory.filters import DirectionFilter, IntervalFilter
from ..theory.interval import Interval
from ..theory.phrase import Phrase, PhraseBuilder
from ..theory.scale import Scale, ScaleNote
from ..util.randomness import choose

_CacheKey = Tuple[IntervalFilter, Scale, DirectionFilter, int, int]

_MAX_CACHED = 32


class _SearchAbandoned(Exception):
    pass


class PhraseSampler:
    """Generates phrases whose every interval is in filter, scale and direction.

    The filter passed in should already be intersected with the scale.
    """

    def __init__(self, rng: random.Random, *, max_search_nodes: int = 50000, max_walk_tries: int = 100) -> None:
        self.rng = rng
        self.max_search_nodes = int(max_search_nodes)
        self.max_walk_tries = int(max_walk_tries)
        # None marks a search that was abandoned
        self._cache: Dict[_CacheKey, Optional[List[Phrase]]] = {}

    # -------- public API --------
    def sample(
        self,
        intervals: IntervalFilter,
        scale: Scale,
        direction: DirectionFilter,
        interval_count: int,
        max_range: int,
    ) -> Optional[Phrase]:
        """Return one legal phrase, or None if none exists within the budget."""
        phrases = self.enumerate(intervals, scale, direction, interval_count, max_range)
        if phrases is None:
            return self._walk(intervals, scale, direction, interval_count, max_range)
        if not phrases:
            return None
        return choose(self.rng, phrases)

    def enumerate(
        self,
        intervals: IntervalFilter,
        scale: Scale,
        direction: DirectionFilter,
        interval_count: int,
        max_range: int,
    ) -> Optional[List[Phrase]]:
        """All distinct legal phrases in sorted order.

        Returns None when the search visits more than max_search_nodes
        candidates.
        """
        key = (intervals, scale, direction, interval_count, max_range)
        if key not in self._cache:
            if len(self._cache) >= _MAX_CACHED:
                self._cache.clear()
            self._cache[key] = self._search(*key)
        return self._cache[key]

    # -------- core logic --------
    def _search(
        self,
        intervals: IntervalFilter,
        scale: Scale,
        direction: DirectionFilter,
        interval_count: int,
        max_range: int,
    ) -> Optional[List[Phrase]]:
        found = set()
        nodes = 0
        builder = PhraseBuilder()

        def extend(note: int, moves: Dict[int, List[Interval]]) -> None:
            nonlocal nodes
            if len(builder) == interval_count:
                found.add(builder.build())
                return
            for interval in moves[note]:
                nodes += 1
                if nodes > self.max_search_nodes:
                    raise _SearchAbandoned()
                builder.add(interval)
                if builder.range() <= max_range:
                    extend((note + interval.half_steps) % 12, moves)
                builder.pop()

        try:
            for rotation in scale.get_rotations():
                if not rotation.tonic.in_scale():
                    continue
                moves = {pc: ScaleNote(rotation, pc).generate(direction, intervals) for pc in range(12)}
                extend(0, moves)
        except _SearchAbandoned:
            xtrace("enumeration_abandoned", {"nodes": nodes, "length": interval_count, "budget": max_range})
            return None

        phrases = sorted(found)
        xtrace("phrases_enumerated", {"count": len(phrases), "nodes": nodes, "budget": max_range})
        return phrases

    def _walk(
        self,
        intervals: IntervalFilter,
        scale: Scale,
        direction: DirectionFilter,
        interval_count: int,
        max_range: int,
    ) -> Optional[Phrase]:
        """Random walk over scale notes, retried a bounded number of times."""
        starts = [pc for pc in range(12) if scale.contains_from_tonic(pc)]
        if not starts:
            return None
        for _ in range(self.max_walk_tries):
            note = ScaleNote(scale, choose(self.rng, starts))
            builder = PhraseBuilder()
            while len(builder) < interval_count:
                options = note.generate(direction, intervals)
                if not options:
                    break
                interval = choose(self.rng, options)
                builder.add(interval)
                if builder.range() > max_range:
                    break
                note = note.add(interval)
            else:
                return builder.build()
        return None
