from __future__ import annotations

"""Keeps track of which phrases the user answered correctly.

One outcome is recorded per completed phrase, however many tries each
interval of it took. Phrases that were missed recently, or not yet answered
often enough, are reported as needing practice so the question chooser can
bring them back.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from ..app.events import EventBus, Listener
from ..app.explain import trace as xtrace
from ..audio.synthesis import Player
from ..theory.interval import Interval
from ..theory.keys import MIDDLE_C
from ..theory.phrase import Phrase
from .schema import PhraseScoreRow

SCORE_CHANGED = "score_changed"

DEFAULT_PRACTICE_WINDOW = 3


class PhraseRow:
    """Ordered attempt outcomes for one phrase."""

    def __init__(self, phrase: Phrase) -> None:
        self.phrase = phrase
        self.attempts: List[Tuple[int, bool]] = []
        self._replay_index = -1

    def add_result(self, start_note: int, was_right: bool) -> None:
        self.attempts.append((start_note, was_right))

    @property
    def num_tries(self) -> int:
        return len(self.attempts)

    @property
    def num_right(self) -> int:
        return sum(1 for _, right in self.attempts if right)

    @property
    def num_wrong(self) -> int:
        return self.num_tries - self.num_right

    def num_wrong_in_last(self, count: int) -> int:
        """Wrong outcomes among the most recent count attempts."""
        if count <= 0:
            return 0
        return sum(1 for _, right in self.attempts[-count:] if not right)

    @property
    def last_start_note(self) -> Optional[int]:
        return self.attempts[-1][0] if self.attempts else None

    def play(self, player: Player) -> None:
        """Replay the phrase, cycling through the start notes it was asked at."""
        if not self.attempts:
            player.play(self.phrase, MIDDLE_C)
            return
        self._replay_index = (self._replay_index + 1) % len(self.attempts)
        player.play(self.phrase, self.attempts[self._replay_index][0])


class ScoreKeeper:
    def __init__(self, practice_window: int = DEFAULT_PRACTICE_WINDOW) -> None:
        self.practice_window = int(practice_window)
        self._num_right = 0
        self._num_wrong = 0
        self._rows: Dict[Phrase, PhraseRow] = {}
        self._last_phrase: Optional[Phrase] = None
        self._events = EventBus()

    def add_score_change_listener(self, listener: Listener) -> None:
        self._events.subscribe(SCORE_CHANGED, listener)

    def reset(self) -> None:
        self._num_right = 0
        self._num_wrong = 0
        self._rows.clear()
        self._last_phrase = None
        xtrace("score_reset")
        self._events.emit(SCORE_CHANGED)

    def add_result(self, question, answers: Sequence[Interval]) -> bool:
        """Record one outcome for the question's phrase.

        Args:
            question: The completed question.
            answers: The first answer given for each interval, ascending.

        Returns:
            True if every first answer was right.
        """
        phrase = question.phrase
        is_right = phrase.contains_intervals_in_order(list(answers))

        self._last_phrase = phrase
        if is_right:
            self._num_right += 1
        else:
            self._num_wrong += 1
        row = self._rows.get(phrase)
        if row is None:
            row = PhraseRow(phrase)
            self._rows[phrase] = row
        row.add_result(question.start_note, is_right)
        xtrace("result_recorded", {"phrase": repr(phrase), "right": is_right, "tries": row.num_tries})
        self._events.emit(SCORE_CHANGED)
        return is_right

    # -------- queries --------
    @property
    def total(self) -> int:
        return self._num_right + self._num_wrong

    @property
    def num_right(self) -> int:
        return self._num_right

    @property
    def num_wrong(self) -> int:
        return self._num_wrong

    @property
    def last_phrase(self) -> Optional[Phrase]:
        return self._last_phrase

    def needs_practice(self, row: PhraseRow) -> bool:
        n = self.practice_window
        return row.num_tries < n or row.num_wrong_in_last(n) > 0

    def phrases_needing_practice(self) -> List[Phrase]:
        """Phrases to bring back, in phrase order."""
        return sorted(row.phrase for row in self._rows.values() if self.needs_practice(row))

    def phrase_rows(self) -> List[PhraseRow]:
        return [self._rows[p] for p in sorted(self._rows)]

    def row_for(self, phrase: Phrase) -> Optional[PhraseRow]:
        return self._rows.get(phrase)

    def score_text(self) -> str:
        total = self.total
        if total == 0:
            return ""
        percent = self._num_right * 100.0 / total
        return f"Score: {percent:.0f}% ({self._num_right} of {total})"

    def score_rows(self) -> List[PhraseScoreRow]:
        """Validated rows for the score table, in phrase order."""
        return [
            PhraseScoreRow(
                phrase=repr(row.phrase),
                description=row.phrase.describe(),
                notes=row.phrase.note_count,
                tries=row.num_tries,
                right=row.num_right,
                wrong=row.num_wrong,
                needs_practice=self.needs_practice(row),
                last_start_note=row.last_start_note,
            )
            for row in self.phrase_rows()
        ]
