from __future__ import annotations

"""Abstract-ish playback interface.

The quiz engine only ever asks a player to play a phrase from a start note,
and to release its resources once at shutdown.
"""

import time
from typing import List

from ..theory.phrase import Phrase


class Player:
    """Abstract-like player interface for playback engines."""

    def __init__(self, tempo_bpm: int = 80, note_ms: int | None = None) -> None:
        self.tempo_bpm = tempo_bpm
        # one beat per note unless overridden
        self.note_ms = note_ms if note_ms is not None else int(60000 / max(1, tempo_bpm))

    def play(self, phrase: Phrase, start_note: int) -> None:
        """Stop any prior playback and start playing phrase from start_note.

        Returns immediately; playback continues in the background.
        """
        raise NotImplementedError

    def shutdown(self) -> None:
        """Release resources."""
        pass

    def midi_notes(self, phrase: Phrase, start_note: int) -> List[int]:
        return [max(0, min(127, n)) for n in phrase.get_notes(start_note)]

    def sleep_ms(self, ms: int) -> None:
        time.sleep(ms / 1000.0)
