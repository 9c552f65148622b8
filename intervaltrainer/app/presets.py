from __future__ import annotations

"""Curated quiz presets.

Presets help users select sensible defaults quickly. Any key set explicitly
in the `quiz` config section wins over the preset.
"""

QUIZ_PRESETS = {
    "beginner": {
        "intervals": ["P4", "P5"],
        "scale": "major_pentatonic",
        "direction": "ascending",
        "note_count": 2,
    },
    "default": {
        "intervals": ["M2", "m3", "M3", "P4", "P5"],
        "scale": "major",
        "direction": "ascending",
        "note_count": 3,
    },
    "advanced": {
        "intervals": ["m2", "M2", "m3", "M3", "P4", "TT", "P5", "m6", "M6", "m7", "M7", "8va"],
        "scale": "chromatic",
        "direction": "both",
        "note_count": 4,
    },
}

DEFAULT_PRESET = "beginner"


def preset_names():
    return list(QUIZ_PRESETS.keys())
