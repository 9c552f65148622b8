from __future__ import annotations

"""A question the trainer can ask: a phrase at a concrete pitch plus the answers on offer."""

from dataclasses import dataclass
from typing import List

from ..audio.synthesis import Player
from ..theory.filters import IntervalFilter
from ..theory.interval import Interval
from ..theory.phrase import Phrase


@dataclass(frozen=True)
class Question:
    """A phrase bound to a start note.

    `choices` is the interval filter intersected with the scale when the
    question was created, so later configuration changes never invalidate a
    question in progress.
    """

    phrase: Phrase
    start_note: int
    choices: IntervalFilter

    def is_correct(self, candidate: Interval, position: int) -> bool:
        answer = self.phrase.intervals[position].to_ascending()
        return answer == candidate

    @property
    def answer_count(self) -> int:
        return len(self.phrase)

    @property
    def notes(self) -> List[int]:
        return self.phrase.get_notes(self.start_note)

    def play(self, player: Player) -> None:
        player.play(self.phrase, self.start_note)
