from __future__ import annotations

"""Scale catalog for 12-TET.

Scales are described either by step patterns (half-steps between
consecutive degrees) or by literal 12-character bit strings, lowest note first.
"""

from typing import Dict, List


SCALE_PATTERNS = {
    "major": [2, 2, 1, 2, 2, 2, 1],
    "natural_minor": [2, 1, 2, 2, 1, 2, 2],
    "harmonic_minor": [2, 1, 2, 2, 1, 3, 1],
    "melodic_minor": [2, 1, 2, 2, 2, 2, 1],
}

# Scales without a seven-degree step pattern.
BIT_PATTERNS: Dict[str, str] = {
    "major_pentatonic": "101010010100",
    "blues": "101101110010",
    "chromatic": "111111111111",
}

ALIASES = {
    "pentatonic": "major_pentatonic",
    "harmonic": "harmonic_minor",
    "melodic": "melodic_minor",
    "minor": "natural_minor",
    "ionian": "major",
    "aeolian": "natural_minor",
}

# Order in which scales are offered to the user.
CATALOG_ORDER = [
    "major",
    "major_pentatonic",
    "blues",
    "harmonic_minor",
    "natural_minor",
    "melodic_minor",
    "chromatic",
]

DEFAULT_SCALE_NAME = "major_pentatonic"


def build_scale_pcs(steps: List[int]) -> List[int]:
    """Return pitch-class offsets (0..11) reached by walking a step pattern.

    Args:
        steps: Half-steps between consecutive degrees.

    Returns:
        Offsets from the tonic, starting with 0.
    """
    pcs = [0]
    total = 0
    for step in steps[:-1]:
        total += step
        pcs.append(total % 12)
    return pcs


def normalize_scale_name(name: str) -> str:
    t = name.strip().lower().replace("-", "_").replace(" ", "_")
    return ALIASES.get(t, t)
