from __future__ import annotations

"""A configurable source of randomly generated questions.

Recently missed phrases are asked again while they still fit the current
settings; the rest of the candidate pool is filled with fresh phrases.
"""

import random
from typing import List, Optional

from ..app.explain import trace as xtrace
from ..config.settings import ChooserSettings
from ..errors import UnavailableError
from ..samplers.phrase_sampler import PhraseSampler
from ..stats.score_keeper import ScoreKeeper
from ..theory import scale as scales
from ..theory.filters import DEFAULT_DIRECTION, DEFAULT_FILTER, DirectionFilter, IntervalFilter
from ..theory.interval import OCTAVE, PERFECT_FIFTH, Interval
from ..theory.keys import MIDDLE_C
from ..theory.phrase import Phrase
from ..theory.scale import Scale
from ..util.randomness import choose
from .question import Question

# Two octaves and a fifth centered on middle C.
LOWEST_NOTE = MIDDLE_C - OCTAVE.half_steps - PERFECT_FIFTH.half_steps
HIGHEST_NOTE = MIDDLE_C + OCTAVE.half_steps + PERFECT_FIFTH.half_steps

DEFAULT_NOTES_IN_PHRASE = 2
MIN_NOTES_IN_PHRASE = 2


class QuestionChooser:
    def __init__(
        self,
        rng: random.Random,
        score_keeper: ScoreKeeper,
        *,
        settings: Optional[ChooserSettings] = None,
        lowest_note: int = LOWEST_NOTE,
        highest_note: int = HIGHEST_NOTE,
    ) -> None:
        if lowest_note > highest_note:
            raise ValueError("lowest_note must not be above highest_note")
        self.rng = rng
        self.score_keeper = score_keeper
        self.settings = settings or ChooserSettings()
        self.lowest_note = int(lowest_note)
        self.highest_note = int(highest_note)
        self._sampler = PhraseSampler(rng, max_search_nodes=self.settings.max_search_nodes)

        self._scale: Scale = scales.DEFAULT
        self._interval_filter: IntervalFilter = DEFAULT_FILTER
        self._direction_filter: DirectionFilter = DEFAULT_DIRECTION
        self._note_count = DEFAULT_NOTES_IN_PHRASE

    # -------- configuration --------
    def set_interval_allowed(self, choice: Interval, allowed: bool) -> None:
        if allowed:
            self._interval_filter = self._interval_filter.enable(choice)
        else:
            self._interval_filter = self._interval_filter.disable(choice)

    def is_interval_allowed(self, choice: Interval) -> bool:
        return self._interval_filter.allows(choice)

    def set_interval_filter(self, intervals: IntervalFilter) -> None:
        self._interval_filter = intervals

    def set_scale(self, scale: Scale) -> None:
        self._scale = scale

    def set_note_count(self, count: int) -> None:
        if int(count) < MIN_NOTES_IN_PHRASE:
            raise ValueError(f"a phrase needs at least {MIN_NOTES_IN_PHRASE} notes, got {count}")
        self._note_count = int(count)

    def set_direction_filter(self, direction: DirectionFilter) -> None:
        self._direction_filter = direction

    @property
    def scale(self) -> Scale:
        return self._scale

    @property
    def interval_filter(self) -> IntervalFilter:
        return self._interval_filter

    @property
    def direction_filter(self) -> DirectionFilter:
        return self._direction_filter

    @property
    def note_count(self) -> int:
        return self._note_count

    def effective_filter(self) -> IntervalFilter:
        """The enabled intervals that occur somewhere in the scale."""
        return self._interval_filter.intersect_scale(self._scale)

    # -------- question generation --------
    def choose_question(self) -> Question:
        """Pick the next question.

        Raises:
            UnavailableError: if no phrase fits the current settings.
        """
        effective = self.effective_filter()
        if effective.is_empty():
            xtrace("question_unavailable", {"reason": "no interval enabled in scale"})
            raise UnavailableError("no enabled interval occurs in the selected scale")

        max_range = min(self.highest_note - self.lowest_note, self._largest_phrase_range(effective))
        last = self.score_keeper.last_phrase
        for attempt in range(self.settings.max_question_tries):
            choices = self._candidate_pool(effective, max_range, last)
            if not choices:
                continue
            phrase = choose(self.rng, choices)
            if phrase.range > max_range:
                continue
            start_note = phrase.choose_random_start_note(self.rng, self.lowest_note, self.highest_note)
            if start_note is None:
                continue
            xtrace(
                "question_created",
                {"phrase": repr(phrase), "start": start_note, "pool": len(choices), "attempt": attempt},
            )
            return Question(phrase, start_note, effective)

        xtrace("question_unavailable", {"reason": "no phrase fits", "notes": self._note_count, "budget": max_range})
        raise UnavailableError(
            f"no {self._note_count}-note phrase fits the current settings"
        )

    def _candidate_pool(self, effective: IntervalFilter, max_range: int, last: Optional[Phrase]) -> List[Phrase]:
        # repeat recently missed phrases, if still valid
        choices: List[Phrase] = [
            candidate
            for candidate in self.score_keeper.phrases_needing_practice()
            if candidate != last
            and candidate.note_count == self._note_count
            and self._interval_filter.allows_phrase(candidate)
            and self._direction_filter.allows_phrase(candidate)
            and candidate.can_transpose_to_scale(self._scale)
            and candidate.range <= max_range
        ]
        repeats = len(choices)
        saw_last = False
        tries = 0
        while tries < self.settings.max_fresh_tries and len(choices) < self.settings.min_choices:
            tries += 1
            candidate = self._sampler.sample(
                effective, self._scale, self._direction_filter, self._note_count - 1, max_range
            )
            if candidate is None:
                break
            if candidate == last:
                saw_last = True
            elif candidate not in choices:
                choices.append(candidate)
        if not choices and saw_last:
            # the previous phrase is the only one that fits
            choices.append(last)
        xtrace("phrase_pool", {"repeats": repeats, "fresh": len(choices) - repeats})
        return choices

    def _largest_phrase_range(self, effective: IntervalFilter) -> int:
        """Range of a phrase made of the largest interval, the second smallest
        interval, and padded out with the smallest interval.
        """
        largest_range = effective.largest.half_steps
        if self._note_count > 2:
            largest_range += effective.second_smallest.half_steps
        for _ in range(3, self._note_count):
            largest_range += effective.smallest.half_steps
        return largest_range
