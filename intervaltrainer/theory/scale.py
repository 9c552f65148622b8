from __future__ import annotations

"""Scales as 12-bit pitch-class masks.

A scale is a set of up to 12 notes to choose from, relative to a starting
note (major, pentatonic, blues, ...). Bit i is set when the note i half-steps
above the tonic belongs to the scale; the tonic is bit 0.
"""

from functools import total_ordering
from typing import TYPE_CHECKING, Iterable, List, Union

from .interval import Interval
from .scales import (
    BIT_PATTERNS,
    CATALOG_ORDER,
    DEFAULT_SCALE_NAME,
    SCALE_PATTERNS,
    build_scale_pcs,
    normalize_scale_name,
)

if TYPE_CHECKING:  # pragma: no cover
    from .filters import DirectionFilter, IntervalFilter

OCTAVE = 12
ALL_BITS = (1 << OCTAVE) - 1


def _normalize(half_steps: int) -> int:
    return half_steps % OCTAVE


def _rotate_left(bits: int) -> int:
    return (bits << 1 | bits >> (OCTAVE - 1)) & ALL_BITS


@total_ordering
class Scale:
    """An immutable pitch-class set relative to an implicit tonic."""

    __slots__ = ("_bits",)

    def __init__(self, bit_string: str) -> None:
        """Create the scale for a bit string.

        Args:
            bit_string: 12 characters, "1" for notes in the scale and "0" for
                notes not in it, from lowest note to highest. The lowest note
                is the tonic.

        Raises:
            ValueError: if the string is not 12 characters of "0" and "1".
        """
        if len(bit_string) != OCTAVE:
            raise ValueError(f"bad bit string: {bit_string}")
        bits = 0
        for i, ch in enumerate(bit_string):
            if ch == "1":
                bits |= 1 << i
            elif ch != "0":
                raise ValueError(f"bad bit string: {bit_string}")
        self._bits = bits

    # ---- alternate constructors ----
    @classmethod
    def from_bits(cls, bits: int) -> "Scale":
        scale = cls.__new__(cls)
        scale._bits = bits & ALL_BITS
        return scale

    @classmethod
    def from_notes(cls, tonic: int, notes: Iterable[int]) -> "Scale":
        """Fold absolute notes into pitch classes relative to tonic."""
        bits = 0
        for note in notes:
            bits |= 1 << _normalize(note - tonic)
        return cls.from_bits(bits)

    @classmethod
    def from_steps(cls, steps: List[int]) -> "Scale":
        return cls.from_notes(0, build_scale_pcs(steps))

    @classmethod
    def named(cls, name: str) -> "Scale":
        """Look up a catalog scale by name, or parse a literal bit string."""
        if len(name) == OCTAVE and set(name) <= {"0", "1"}:
            return cls(name)
        key = normalize_scale_name(name)
        if key in SCALE_PATTERNS:
            return cls.from_steps(SCALE_PATTERNS[key])
        if key in BIT_PATTERNS:
            return cls(BIT_PATTERNS[key])
        raise ValueError(f"Unknown scale: {name}")

    # ---- queries ----
    @property
    def bits(self) -> int:
        return self._bits

    @property
    def tonic(self) -> "ScaleNote":
        return ScaleNote(self, 0)

    def contains_from_tonic(self, half_steps: int) -> bool:
        return bool(self._bits & (1 << _normalize(half_steps)))

    def rotate(self, interval: Interval) -> "Scale":
        shift = _normalize(interval.half_steps)
        return Scale.from_bits(self._bits << shift | self._bits >> (OCTAVE - shift))

    def get_rotations(self) -> List["Scale"]:
        """Distinct rotations of this scale, ordered by mask.

        Rotates one bit at a time and stops as soon as a rotation repeats, so
        symmetric scales yield fewer than 12 entries.
        """
        seen = set()
        bits = self._bits
        while bits not in seen:
            seen.add(bits)
            bits = _rotate_left(bits)
        return [Scale.from_bits(b) for b in sorted(seen)]

    def contains_anywhere(self, candidate: Union["Scale", Interval]) -> bool:
        """True if some rotation of candidate fits inside this scale.

        An Interval is tested as the two-note scale {0, interval}.
        """
        if isinstance(candidate, Interval):
            candidate = Scale.from_notes(0, [0, candidate.half_steps])
        return any(self.contains_without_rotation(s) for s in candidate.get_rotations())

    def contains_without_rotation(self, candidate: "Scale") -> bool:
        return (self._bits | candidate._bits) == self._bits

    def bit_string(self) -> str:
        return "".join("1" if self._bits & (1 << i) else "0" for i in range(OCTAVE))

    def __len__(self) -> int:
        return bin(self._bits).count("1")

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Scale) and self._bits == other._bits

    def __lt__(self, other: "Scale") -> bool:
        return self._bits < other._bits

    def __hash__(self) -> int:
        return self._bits

    def __repr__(self) -> str:
        return f"Scale({self.bit_string()})"


class ScaleNote:
    """A note relative to the tonic of a scale (0 is the tonic)."""

    __slots__ = ("scale", "half_steps")

    def __init__(self, scale: Scale, half_steps: int) -> None:
        self.scale = scale
        self.half_steps = _normalize(half_steps)

    def in_scale(self) -> bool:
        return self.scale.contains_from_tonic(self.half_steps)

    def add(self, interval: Interval) -> "ScaleNote":
        return ScaleNote(self.scale, self.half_steps + interval.half_steps)

    def generate(self, direction: "DirectionFilter", intervals: "IntervalFilter") -> List[Interval]:
        """Intervals from this note that land on the scale and pass both filters."""
        return [i for i in intervals.generate(direction) if self.add(i).in_scale()]

    def __repr__(self) -> str:
        return f"ScaleNote({self.half_steps} in {self.scale.bit_string()})"


def catalog() -> List[tuple]:
    """(name, Scale) pairs in menu order."""
    return [(name, Scale.named(name)) for name in CATALOG_ORDER]


def scale_name(scale: Scale) -> str:
    """Catalog name of a scale, or its bit string when it is not in the catalog."""
    for name, candidate in catalog():
        if candidate == scale:
            return name
    return scale.bit_string()


MAJOR = Scale.named("major")
MAJOR_PENTATONIC = Scale.named("major_pentatonic")
BLUES = Scale.named("blues")
HARMONIC_MINOR = Scale.named("harmonic_minor")
CHROMATIC = Scale.named("chromatic")
DEFAULT = Scale.named(DEFAULT_SCALE_NAME)
