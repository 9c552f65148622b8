"""Interval ear trainer package initialization.

Exposes the quiz engine pieces so hosts can simply `import intervaltrainer`.
"""

from __future__ import annotations

from .errors import UnavailableError
from .theory import DirectionFilter, Interval, IntervalFilter, Phrase, Scale
from .drills.question import Question
from .drills.question_chooser import QuestionChooser
from .drills.choices import IntervalChoices
from .drills.quizzer import Quizzer
from .stats.score_keeper import ScoreKeeper

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "UnavailableError",
    "DirectionFilter",
    "Interval",
    "IntervalFilter",
    "Phrase",
    "Scale",
    "Question",
    "QuestionChooser",
    "IntervalChoices",
    "Quizzer",
    "ScoreKeeper",
]
