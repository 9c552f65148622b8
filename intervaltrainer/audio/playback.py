from __future__ import annotations

"""FluidSynth-based phrase playback."""

import sys
import threading
from pathlib import Path
from typing import Dict, Optional

from ..app.explain import trace as xtrace
from ..errors import UnavailableError
from ..theory.phrase import Phrase
from .synthesis import Player


class FluidSynthPlayer(Player):
    """Concrete Player using pyfluidsynth.

    Each phrase plays on a daemon thread; starting a new phrase cancels the
    one still sounding.
    """

    def __init__(
        self,
        soundfont_path: str,
        sample_rate: int = 44100,
        gain: float = 0.5,
        *,
        channel: int = 0,
        program: int = 0,
        velocity: int = 90,
        tempo_bpm: int = 80,
        note_ms: int | None = None,
    ) -> None:
        super().__init__(tempo_bpm=tempo_bpm, note_ms=note_ms)
        try:
            import fluidsynth  # type: ignore
        except Exception as e:  # pragma: no cover - runtime dependency
            raise UnavailableError("pyfluidsynth is not installed") from e

        sf_path = Path(soundfont_path or "").expanduser()
        if not sf_path.is_file():
            raise UnavailableError(f"SoundFont not found at '{sf_path}'")

        self._channel = int(channel)
        self._velocity = max(0, min(127, int(velocity)))
        self._lock = threading.Lock()
        self._cancel = threading.Event()
        self._thread: Optional[threading.Thread] = None

        try:
            self._fs = fluidsynth.Synth(samplerate=sample_rate, gain=gain)
            # Prefer CoreAudio on macOS to avoid SDL warnings
            driver = "coreaudio" if sys.platform == "darwin" else None
            try:
                if driver:
                    self._fs.start(driver=driver)
                else:
                    self._fs.start()
            except Exception:
                # Fallback to default driver if preferred one fails
                self._fs.start()
            self._sfid = self._fs.sfload(str(sf_path))
            self._fs.program_select(self._channel, self._sfid, 0, int(program))
        except Exception as e:  # pragma: no cover - depends on native library
            raise UnavailableError(f"FluidSynth could not start: {e}") from e

    def play(self, phrase: Phrase, start_note: int) -> None:
        self._stop_current()
        cancel = threading.Event()
        self._cancel = cancel
        notes = self.midi_notes(phrase, start_note)
        self._thread = threading.Thread(target=self._run, args=(notes, cancel), daemon=True)
        self._thread.start()
        xtrace("playback_started", {"notes": notes})

    def _run(self, notes, cancel: threading.Event) -> None:
        for midi in notes:
            if cancel.is_set():
                return
            with self._lock:
                self._fs.noteon(self._channel, midi, self._velocity)
            interrupted = cancel.wait(self.note_ms / 1000.0)
            with self._lock:
                self._fs.noteoff(self._channel, midi)
            if interrupted:
                return

    def _stop_current(self) -> None:
        self._cancel.set()
        thread = self._thread
        if thread is not None and thread.is_alive():
            thread.join(timeout=1.0)
        self._thread = None
        with self._lock:
            # CC#123 = All Notes Off
            self._fs.cc(self._channel, 123, 0)

    def shutdown(self) -> None:
        self._stop_current()
        try:
            self._fs.delete()
        except Exception as e:  # pragma: no cover - native teardown
            xtrace("playback_failed", {"stage": "shutdown", "error": str(e)})


def make_player_from_config(cfg: Dict) -> Player:
    """Factory for Player from config dict.

    Raises:
        UnavailableError: if the configured backend cannot be started.
    """
    audio = cfg.get("audio", {})
    backend = audio.get("backend", "fluidsynth")
    if backend == "fluidsynth":
        return FluidSynthPlayer(
            soundfont_path=audio.get("soundfont_path"),
            sample_rate=int(audio.get("sample_rate", 44100)),
            gain=float(audio.get("gain", 0.5)),
            program=int(audio.get("program", 0)),
            velocity=int(audio.get("velocity", 90)),
            tempo_bpm=int(audio.get("tempo_bpm", 80)),
            note_ms=audio.get("note_ms"),
        )
    raise UnavailableError(f"Unsupported backend: {backend}")
