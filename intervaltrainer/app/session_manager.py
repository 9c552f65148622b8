from __future__ import annotations

"""Session Manager: wires one quiz engine together from configuration.

The manager owns the randomness source, the score ledger, the chooser, the
answer choices and the quizzer, and hands them to whatever front end drives
the quiz. It is UI-agnostic.
"""

from typing import Any, Dict, Optional

import pandas as pd

from ..audio.playback import make_player_from_config
from ..audio.synthesis import Player
from ..config.config import apply_quiz_settings, chooser_settings, validate_config
from ..drills.choices import IntervalChoices
from ..drills.question_chooser import QuestionChooser
from ..drills.quizzer import Quizzer
from ..stats.score_keeper import ScoreKeeper
from ..stats.stats import format_summary, score_frame
from ..theory.scale import scale_name
from ..util.randomness import make_rng, resolve_seed
from . import explain
from .explain import trace as xtrace


class SessionManager:
    def __init__(self, cfg: Dict[str, Any], player: Optional[Player] = None) -> None:
        """Build the engine for a configuration.

        Args:
            cfg: Raw or validated configuration dictionary.
            player: Playback backend. When None one is created from the
                `audio` section.

        Raises:
            UnavailableError: if the audio backend cannot be started.
        """
        self.cfg = validate_config(cfg)
        explain.enable(self.cfg["explain"])

        quiz = self.cfg["quiz"]
        window = self.cfg["window"]
        settings = chooser_settings(self.cfg)

        self.seed = resolve_seed(quiz.get("seed"))
        self.rng = make_rng(self.seed)
        self.player = player if player is not None else make_player_from_config(self.cfg)
        self.score_keeper = ScoreKeeper(practice_window=settings.practice_window)
        self.chooser = QuestionChooser(
            self.rng,
            self.score_keeper,
            settings=settings,
            lowest_note=window["lowest_note"],
            highest_note=window["highest_note"],
        )
        apply_quiz_settings(self.chooser, self.cfg)
        self.choices = IntervalChoices()
        self.quizzer = Quizzer(self.chooser, self.choices, self.player, self.score_keeper)
        xtrace(
            "session_started",
            {
                "preset": quiz["preset"],
                "scale": scale_name(self.chooser.scale),
                "direction": self.chooser.direction_filter.label,
                "notes": self.chooser.note_count,
                "intervals": repr(self.chooser.interval_filter),
                "seed": self.seed,
            },
        )

    def start(self) -> None:
        """Ask the first question.

        Raises:
            UnavailableError: if no question fits the configuration.
        """
        self.quizzer.start_question()

    def summary(self) -> str:
        return format_summary(self.score_keeper)

    def scores(self) -> pd.DataFrame:
        """Per-phrase score table with fixed dtypes and an accuracy column."""
        return score_frame(self.score_keeper.score_rows())

    def close(self) -> None:
        xtrace("session_ended", {"total": self.score_keeper.total, "right": self.score_keeper.num_right})
        self.player.shutdown()
