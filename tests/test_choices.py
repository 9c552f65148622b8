import unittest

from intervaltrainer.drills.choices import IntervalChoices
from intervaltrainer.theory.filters import IntervalFilter
from intervaltrainer.theory.interval import MAJOR_THIRD, PERFECT_FIFTH, PERFECT_FOURTH


class IntervalChoicesTests(unittest.TestCase):
    def test_removal_is_sticky_until_reset(self) -> None:
        choices = IntervalChoices()
        choices.reset(IntervalFilter([PERFECT_FOURTH, PERFECT_FIFTH]))
        choices.remove_choice(PERFECT_FOURTH)
        choices.remove_choice(PERFECT_FOURTH)
        self.assertFalse(choices.allows(PERFECT_FOURTH))
        self.assertTrue(choices.allows(PERFECT_FIFTH))
        self.assertFalse(choices.allows(MAJOR_THIRD))
        self.assertEqual(choices.removed, {PERFECT_FOURTH})

        choices.reset(IntervalFilter([PERFECT_FOURTH, PERFECT_FIFTH]))
        self.assertTrue(choices.allows(PERFECT_FOURTH))
        self.assertEqual(choices.removed, set())

    def test_watchers(self) -> None:
        choices = IntervalChoices()
        seen = []
        for interval in (PERFECT_FOURTH, PERFECT_FIFTH):
            choices.watch(interval, lambda i=interval: seen.append((i, choices.allows(i))))

        choices.reset(IntervalFilter([PERFECT_FOURTH, PERFECT_FIFTH]))
        self.assertEqual(sorted(seen), [(PERFECT_FOURTH, True), (PERFECT_FIFTH, True)])

        seen.clear()
        choices.remove_choice(PERFECT_FIFTH)
        self.assertEqual(seen, [(PERFECT_FIFTH, False)])

        seen.clear()
        choices.remove_choice(MAJOR_THIRD)
        self.assertEqual(seen, [])


if __name__ == "__main__":
    unittest.main()
