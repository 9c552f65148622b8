import io
import unittest
from contextlib import redirect_stdout

from intervaltrainer.app import explain
from intervaltrainer.app.session_manager import SessionManager
from intervaltrainer.audio.synthesis import Player
from intervaltrainer.config.config import load_config
from intervaltrainer.errors import UnavailableError
from intervaltrainer.theory.interval import PERFECT_FIFTH


class RecordingPlayer(Player):
    def __init__(self) -> None:
        super().__init__()
        self.calls = []
        self.closed = False

    def play(self, phrase, start_note) -> None:
        self.calls.append((phrase, start_note))

    def shutdown(self) -> None:
        self.closed = True


class SessionManagerTests(unittest.TestCase):
    def tearDown(self) -> None:
        explain.enable(False)

    def test_session_runs_a_question(self) -> None:
        cfg = load_config()
        cfg["quiz"]["seed"] = 11
        player = RecordingPlayer()
        session = SessionManager(cfg, player=player)
        session.start()
        question = session.quizzer.current_question
        self.assertIsNotNone(question)
        self.assertEqual(player.calls, [(question.phrase, question.start_note)])

        answer = question.phrase.intervals[0].to_ascending()
        self.assertTrue(session.quizzer.check_answer(answer))
        self.assertEqual(session.score_keeper.total, 1)
        self.assertTrue(session.summary().startswith("Score: 100% (1 of 1)"))
        df = session.scores()
        self.assertEqual(len(df), 1)
        self.assertEqual(df["phrase"].iloc[0], repr(question.phrase))
        self.assertEqual(int(df["right"].iloc[0]), 1)
        self.assertAlmostEqual(float(df["acc"].iloc[0]), 1.0)

        session.close()
        self.assertTrue(player.closed)

    def test_same_seed_same_first_questions(self) -> None:
        def first_questions():
            cfg = load_config()
            cfg["quiz"].update({"seed": 3, "preset": "default"})
            session = SessionManager(cfg, player=RecordingPlayer())
            return [session.chooser.choose_question() for _ in range(5)]

        self.assertEqual(first_questions(), first_questions())

    def test_explain_traces(self) -> None:
        cfg = load_config()
        cfg["explain"] = True
        out = io.StringIO()
        with redirect_stdout(out):
            SessionManager(cfg, player=RecordingPlayer()).start()
        self.assertIn("[EXPLAIN] session_started", out.getvalue())
        self.assertIn("[EXPLAIN] question_created", out.getvalue())

    def test_unavailable_configuration(self) -> None:
        cfg = load_config()
        cfg["quiz"].update({"scale": "major_pentatonic", "intervals": ["m2"]})
        session = SessionManager(cfg, player=RecordingPlayer())
        with self.assertRaises(UnavailableError):
            session.start()
        self.assertFalse(session.quizzer.is_started())
        self.assertFalse(session.chooser.is_interval_allowed(PERFECT_FIFTH))


if __name__ == "__main__":
    unittest.main()
