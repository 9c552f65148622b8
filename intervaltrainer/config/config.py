from __future__ import annotations

"""Configuration loading and validation for the interval trainer.

This module loads YAML configuration, applies presets and defaults, and
validates that enumerations, note names and intervals are sane. Invalid
values are reported with a WARNING line and replaced by their defaults.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from ..app.presets import DEFAULT_PRESET, QUIZ_PRESETS
from ..theory.filters import DEFAULT_DIRECTION, DirectionFilter, IntervalFilter
from ..theory.interval import Interval
from ..theory.keys import midi_to_note_str, note_str_to_midi
from ..theory.scale import Scale
from ..theory.scales import DEFAULT_SCALE_NAME
from .settings import ChooserSettings

ALLOWED_BACKENDS = {"fluidsynth"}

DEFAULT_LOWEST_NOTE = "F2"
DEFAULT_HIGHEST_NOTE = "G5"


def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.

    Raises:
        FileNotFoundError: if path does not exist.
    """
    if path:
        return _load_yaml(Path(path))
    return _load_yaml(Path(__file__).with_name("defaults.yml"))


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply presets and defaults, and validate configuration values.

    Args:
        cfg: The raw configuration dictionary. It is updated in place.

    Returns:
        The validated and merged configuration dictionary.
    """
    # Shallow defaults for missing sections
    for section in ("audio", "quiz", "window", "generation"):
        if not isinstance(cfg.get(section), dict):
            cfg[section] = {}
    cfg.setdefault("explain", False)

    audio = cfg["audio"]
    quiz = cfg["quiz"]
    window = cfg["window"]

    audio.setdefault("backend", "fluidsynth")
    audio.setdefault("soundfont_path", "./soundfonts/GrandPiano.sf2")
    audio.setdefault("sample_rate", 44100)
    audio.setdefault("gain", 0.5)
    audio.setdefault("program", 0)
    audio.setdefault("velocity", 90)
    audio.setdefault("tempo_bpm", 80)

    backend = audio.get("backend")
    if backend not in ALLOWED_BACKENDS:
        print(f"WARNING: Unsupported audio backend '{backend}', falling back to 'fluidsynth'.")
        audio["backend"] = "fluidsynth"

    # Preset first, so explicit quiz keys win
    preset = quiz.setdefault("preset", DEFAULT_PRESET)
    if preset not in QUIZ_PRESETS:
        print(f"WARNING: Unknown preset '{preset}', using '{DEFAULT_PRESET}'.")
        quiz["preset"] = preset = DEFAULT_PRESET
    for key, value in QUIZ_PRESETS[preset].items():
        quiz.setdefault(key, value)
    quiz.setdefault("seed", None)

    try:
        Scale.named(str(quiz["scale"]))
    except ValueError:
        print(f"WARNING: Unsupported scale '{quiz['scale']}', using '{DEFAULT_SCALE_NAME}'.")
        quiz["scale"] = DEFAULT_SCALE_NAME

    try:
        quiz["direction"] = DirectionFilter.parse(quiz["direction"]).name.lower()
    except ValueError:
        print(f"WARNING: Unsupported direction '{quiz['direction']}', using 'ascending'.")
        quiz["direction"] = DEFAULT_DIRECTION.name.lower()

    try:
        note_count = int(quiz["note_count"])
    except (TypeError, ValueError):
        note_count = 0
    if note_count < 2:
        print(f"WARNING: Unsupported note_count '{quiz['note_count']}', using 2.")
        note_count = 2
    quiz["note_count"] = note_count

    quiz["intervals"] = _validate_intervals(quiz.get("intervals") or [])

    window.setdefault("lowest_note", DEFAULT_LOWEST_NOTE)
    window.setdefault("highest_note", DEFAULT_HIGHEST_NOTE)
    for key, fallback in (("lowest_note", DEFAULT_LOWEST_NOTE), ("highest_note", DEFAULT_HIGHEST_NOTE)):
        try:
            window[key] = _note_to_midi(window[key])
        except ValueError:
            print(f"WARNING: Invalid {key} '{window[key]}', using '{fallback}'.")
            window[key] = note_str_to_midi(fallback)
    if window["lowest_note"] > window["highest_note"]:
        print(
            f"WARNING: Window {midi_to_note_str(window['lowest_note'])}.."
            f"{midi_to_note_str(window['highest_note'])} is empty, using "
            f"{DEFAULT_LOWEST_NOTE}..{DEFAULT_HIGHEST_NOTE}."
        )
        window["lowest_note"] = note_str_to_midi(DEFAULT_LOWEST_NOTE)
        window["highest_note"] = note_str_to_midi(DEFAULT_HIGHEST_NOTE)

    try:
        cfg["generation"] = ChooserSettings.model_validate(cfg["generation"]).model_dump()
    except ValidationError as e:
        print(f"WARNING: Invalid generation settings ({e.error_count()} errors), using defaults.")
        cfg["generation"] = ChooserSettings().model_dump()

    cfg["explain"] = bool(cfg["explain"])
    return cfg


def _note_to_midi(value: Any) -> int:
    if isinstance(value, int):
        if not 0 <= value <= 127:
            raise ValueError("MIDI out of range")
        return value
    return note_str_to_midi(str(value))


def _validate_intervals(names: List[Any]) -> List[str]:
    result = []
    for name in names:
        try:
            interval = Interval.from_name(name).to_ascending()
        except ValueError:
            print(f"WARNING: Unknown interval '{name}', ignoring it.")
            continue
        if interval.abbreviation not in result:
            result.append(interval.abbreviation)
    if not result:
        print("WARNING: No valid intervals configured, using 'P4' and 'P5'.")
        result = ["P4", "P5"]
    return result


def chooser_settings(cfg: Dict[str, Any]) -> ChooserSettings:
    return ChooserSettings.model_validate(cfg.get("generation", {}))


def interval_filter(cfg: Dict[str, Any]) -> IntervalFilter:
    return IntervalFilter(Interval.from_name(n) for n in cfg["quiz"]["intervals"])


def apply_quiz_settings(chooser, cfg: Dict[str, Any]) -> None:
    """Push the validated `quiz` section into a QuestionChooser."""
    quiz = cfg["quiz"]
    chooser.set_interval_filter(interval_filter(cfg))
    chooser.set_scale(Scale.named(str(quiz["scale"])))
    chooser.set_direction_filter(DirectionFilter.parse(quiz["direction"]))
    chooser.set_note_count(int(quiz["note_count"]))
