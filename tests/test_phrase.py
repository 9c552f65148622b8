import random
import unittest

from intervaltrainer.theory import scale as scales
from intervaltrainer.theory.interval import (
    MAJOR_SECOND,
    MAJOR_THIRD,
    MINOR_SECOND,
    PERFECT_FIFTH,
    PERFECT_FOURTH,
)
from intervaltrainer.theory.phrase import Phrase, PhraseBuilder
from intervaltrainer.theory.scale import Scale


class PhraseTests(unittest.TestCase):
    def test_get_scale(self) -> None:
        cases = [
            ("100001000000", [PERFECT_FOURTH]),
            ("100001010000", [PERFECT_FOURTH, MAJOR_SECOND]),
            ("100000010000", [PERFECT_FOURTH.reverse()]),
        ]
        for expected, intervals in cases:
            self.assertEqual(Phrase(intervals).get_scale().bit_string(), expected)

    def test_can_transpose_to_scale(self) -> None:
        cases = [
            (True, Scale("100001000000"), [PERFECT_FOURTH]),
            (True, Scale("010000100000"), [PERFECT_FOURTH]),
            (True, Scale("001000010000"), [PERFECT_FOURTH]),
            (False, Scale("110000000000"), [PERFECT_FOURTH]),
            (True, scales.MAJOR, [PERFECT_FOURTH]),
            (True, scales.MAJOR, [PERFECT_FOURTH, MAJOR_SECOND]),
            (True, scales.MAJOR, [PERFECT_FOURTH, MINOR_SECOND]),
            (False, scales.MAJOR, [MINOR_SECOND, MINOR_SECOND]),
        ]
        for expected, scale, intervals in cases:
            with self.subTest(scale=scale, intervals=intervals):
                self.assertEqual(Phrase(intervals).can_transpose_to_scale(scale), expected)

    def test_notes_and_range(self) -> None:
        p = Phrase([PERFECT_FOURTH, PERFECT_FIFTH.reverse()])
        self.assertEqual(p.get_notes(60), [60, 65, 58])
        self.assertEqual(p.note_count, 3)
        self.assertEqual(len(p), 2)
        self.assertEqual(p.min_note(60), 58)
        self.assertEqual(p.max_note(60), 65)
        self.assertEqual(p.range, 7)
        self.assertEqual(repr(p), "Phrase(P4↑ P5↓)")
        self.assertEqual(p.describe(), "Perfect Fourth up, Perfect Fifth down")

    def test_random_start_note_stays_in_window(self) -> None:
        rng = random.Random(3)
        p = Phrase([PERFECT_FIFTH, MAJOR_THIRD.reverse(), PERFECT_FIFTH.reverse()])
        for _ in range(200):
            start = p.choose_random_start_note(rng, 41, 79)
            for note in p.get_notes(start):
                self.assertTrue(41 <= note <= 79)

    def test_random_start_note_exact_fit_and_no_fit(self) -> None:
        rng = random.Random(0)
        p = Phrase([PERFECT_FIFTH])
        self.assertEqual(p.choose_random_start_note(rng, 60, 67), 60)
        self.assertIsNone(p.choose_random_start_note(rng, 60, 66))

    def test_contains_intervals_in_order(self) -> None:
        p = Phrase([PERFECT_FOURTH, PERFECT_FIFTH.reverse()])
        self.assertTrue(p.contains_intervals_in_order([PERFECT_FOURTH, PERFECT_FIFTH]))
        self.assertFalse(p.contains_intervals_in_order([PERFECT_FIFTH, PERFECT_FOURTH]))
        self.assertFalse(p.contains_intervals_in_order([PERFECT_FOURTH]))

    def test_ordering_and_hashing(self) -> None:
        short = Phrase([PERFECT_FIFTH])
        longer = Phrase([MINOR_SECOND, MINOR_SECOND])
        self.assertLess(short, longer)
        self.assertLess(Phrase([PERFECT_FOURTH.reverse()]), Phrase([PERFECT_FOURTH]))
        self.assertEqual(Phrase([PERFECT_FOURTH]), Phrase([PERFECT_FOURTH]))
        self.assertEqual(len({Phrase([PERFECT_FOURTH]), Phrase([PERFECT_FOURTH])}), 1)


class PhraseBuilderTests(unittest.TestCase):
    def test_pop_restores_range(self) -> None:
        b = PhraseBuilder()
        b.add(PERFECT_FIFTH)
        b.add(PERFECT_FIFTH.reverse())
        b.add(PERFECT_FIFTH.reverse())
        self.assertEqual(b.range(), 14)
        self.assertEqual(b.position, -7)
        b.pop()
        self.assertEqual(b.range(), 7)
        self.assertEqual(b.position, 0)
        self.assertEqual(b.build(), Phrase([PERFECT_FIFTH, PERFECT_FIFTH.reverse()]))


if __name__ == "__main__":
    unittest.main()
