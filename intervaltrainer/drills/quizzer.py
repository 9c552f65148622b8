from __future__ import annotations

"""The quiz loop: play a phrase, then collect one interval answer per step.

A question is answered interval by interval. A wrong answer greys out that
choice and replays the phrase; a right answer moves on to the next interval
with a fresh set of choices. Only the first answer given at each position
counts toward the score.
"""

from typing import List, Optional

from ..app.events import EventBus, Listener
from ..app.explain import trace as xtrace
from ..audio.synthesis import Player
from ..stats.score_keeper import ScoreKeeper
from ..theory.filters import IntervalFilter
from ..theory.interval import Interval
from .choices import IntervalChoices
from .question import Question
from .question_chooser import QuestionChooser

ANSWER_CHOSEN = "answer_chosen"


class Quizzer:
    def __init__(
        self,
        chooser: QuestionChooser,
        choices: IntervalChoices,
        player: Player,
        score_keeper: ScoreKeeper,
    ) -> None:
        self.chooser = chooser
        self.choices = choices
        self.player = player
        self.score_keeper = score_keeper
        self._events = EventBus()

        self._question: Optional[Question] = None
        self._position = 0
        self._answers: List[Interval] = []

    def add_answer_chosen_listener(self, listener: Listener) -> None:
        self._events.subscribe(ANSWER_CHOSEN, listener)

    # -------- state --------
    def is_started(self) -> bool:
        return self._question is not None

    @property
    def current_question(self) -> Optional[Question]:
        return self._question

    @property
    def current_position(self) -> int:
        """Index of the interval being asked about."""
        return self._position

    @property
    def answers(self) -> List[Interval]:
        """First answers given so far, one per position."""
        return list(self._answers)

    # -------- actions --------
    def start_question(self) -> None:
        """Ask the next question and play it.

        Raises:
            UnavailableError: if no question fits the chooser's settings. The
                quiz is left as it was.
        """
        question = self.chooser.choose_question()
        self._question = question
        self._position = 0
        self._answers = []
        self.choices.reset(question.choices)
        question.play(self.player)

    def play_question(self) -> None:
        if self._question is None:
            raise RuntimeError("no question has been started")
        self._question.play(self.player)

    def check_answer(self, candidate: Interval) -> bool:
        """Check candidate against the interval at the current position.

        Returns:
            True if the answer was right.

        Raises:
            ValueError: if candidate is not ascending.
            RuntimeError: if no question is active.
        """
        if not candidate.is_ascending:
            raise ValueError(f"answers must be ascending intervals, got {candidate}")
        question = self._question
        if question is None:
            raise RuntimeError("no question has been started")

        try:
            if len(self._answers) == self._position:
                self._answers.append(candidate)
            is_correct = question.is_correct(candidate, self._position)
            xtrace(
                "answer_checked",
                {"position": self._position, "answer": candidate.abbreviation, "correct": is_correct},
            )
            if not is_correct:
                self.choices.remove_choice(candidate)
                question.play(self.player)
            elif self._position + 1 >= question.answer_count:
                self.score_keeper.add_result(question, self._answers)
                self._question = None
                self.choices.reset(IntervalFilter())
                self.start_question()
            else:
                self._position += 1
                self.choices.reset(question.choices)
                question.play(self.player)
            return is_correct
        finally:
            self._events.emit(ANSWER_CHOSEN)

    # -------- display text --------
    def question_text(self) -> str:
        if self._question is None:
            return ""
        first = self._position + 1
        return f"What's the difference in pitch between notes {first} and {first + 1}?"

    def phrase_so_far(self) -> str:
        """Names of the intervals answered so far, each followed by a comma."""
        if self._question is None:
            return ""
        intervals = self._question.phrase.intervals[: self._position]
        return "".join(f"{interval.name}, " for interval in intervals)
