import unittest

from intervaltrainer.audio.synthesis import Player
from intervaltrainer.drills.question import Question
from intervaltrainer.stats.score_keeper import PhraseRow, ScoreKeeper
from intervaltrainer.theory.filters import IntervalFilter
from intervaltrainer.theory.interval import MAJOR_THIRD, PERFECT_FIFTH, PERFECT_FOURTH
from intervaltrainer.theory.phrase import Phrase

PHRASE = Phrase([PERFECT_FOURTH, PERFECT_FIFTH.reverse()])
RIGHT = [PERFECT_FOURTH, PERFECT_FIFTH]
WRONG = [MAJOR_THIRD, PERFECT_FIFTH]


class RecordingPlayer(Player):
    def __init__(self) -> None:
        super().__init__()
        self.calls = []

    def play(self, phrase, start_note) -> None:
        self.calls.append((phrase, start_note))


def _question(start_note: int = 60) -> Question:
    return Question(PHRASE, start_note, IntervalFilter([PERFECT_FOURTH, PERFECT_FIFTH]))


class ScoreKeeperTests(unittest.TestCase):
    def test_one_outcome_per_phrase(self) -> None:
        keeper = ScoreKeeper()
        self.assertEqual(keeper.score_text(), "")
        self.assertFalse(keeper.add_result(_question(), WRONG))
        self.assertEqual((keeper.total, keeper.num_right, keeper.num_wrong), (1, 0, 1))
        self.assertEqual(keeper.last_phrase, PHRASE)
        self.assertTrue(keeper.add_result(_question(), RIGHT))
        self.assertTrue(keeper.add_result(_question(), RIGHT))
        self.assertEqual(keeper.score_text(), "Score: 67% (2 of 3)")
        row = keeper.row_for(PHRASE)
        self.assertEqual((row.num_tries, row.num_right, row.num_wrong), (3, 2, 1))

    def test_needs_practice_window(self) -> None:
        keeper = ScoreKeeper(practice_window=3)
        for _ in range(3):
            keeper.add_result(_question(), RIGHT)
        self.assertEqual(keeper.phrases_needing_practice(), [])
        keeper.add_result(_question(), WRONG)
        self.assertEqual(keeper.phrases_needing_practice(), [PHRASE])
        keeper.add_result(_question(), RIGHT)
        keeper.add_result(_question(), RIGHT)
        self.assertEqual(keeper.phrases_needing_practice(), [PHRASE])
        keeper.add_result(_question(), RIGHT)
        self.assertEqual(keeper.phrases_needing_practice(), [])

    def test_new_phrase_needs_practice(self) -> None:
        keeper = ScoreKeeper()
        keeper.add_result(_question(), RIGHT)
        self.assertTrue(keeper.needs_practice(keeper.row_for(PHRASE)))

    def test_listeners_and_reset(self) -> None:
        keeper = ScoreKeeper()
        calls = []
        keeper.add_score_change_listener(lambda: calls.append(keeper.total))
        keeper.add_result(_question(), RIGHT)
        keeper.reset()
        self.assertEqual(calls, [1, 0])
        self.assertIsNone(keeper.last_phrase)
        self.assertEqual(keeper.phrase_rows(), [])
        self.assertEqual(keeper.score_text(), "")

    def test_listener_errors_propagate(self) -> None:
        keeper = ScoreKeeper()

        def boom():
            raise KeyError("listener")

        keeper.add_score_change_listener(boom)
        with self.assertRaises(KeyError):
            keeper.add_result(_question(), RIGHT)

    def test_score_rows(self) -> None:
        keeper = ScoreKeeper()
        keeper.add_result(_question(50), WRONG)
        keeper.add_result(_question(55), RIGHT)
        (row,) = keeper.score_rows()
        self.assertEqual(row.phrase, "Phrase(P4↑ P5↓)")
        self.assertEqual(row.description, "Perfect Fourth up, Perfect Fifth down")
        self.assertEqual((row.notes, row.tries, row.right, row.wrong), (3, 2, 1, 1))
        self.assertTrue(row.needs_practice)
        self.assertEqual(row.last_start_note, 55)


class PhraseRowTests(unittest.TestCase):
    def test_replay_cycles_start_notes(self) -> None:
        player = RecordingPlayer()
        row = PhraseRow(PHRASE)
        row.play(player)
        row.add_result(50, True)
        row.add_result(62, False)
        row.play(player)
        row.play(player)
        row.play(player)
        self.assertEqual([start for _, start in player.calls], [60, 50, 62, 50])
        self.assertEqual(row.num_wrong_in_last(1), 1)
        self.assertEqual(row.num_wrong_in_last(0), 0)


if __name__ == "__main__":
    unittest.main()
