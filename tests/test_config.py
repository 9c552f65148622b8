import io
import random
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from intervaltrainer.config.config import (
    apply_quiz_settings,
    chooser_settings,
    load_config,
    validate_config,
)
from intervaltrainer.drills.question_chooser import QuestionChooser
from intervaltrainer.stats.score_keeper import ScoreKeeper
from intervaltrainer.theory import scale as scales
from intervaltrainer.theory.filters import DirectionFilter, IntervalFilter
from intervaltrainer.theory.interval import MAJOR_THIRD, PERFECT_FIFTH, PERFECT_FOURTH


def _validate(cfg):
    out = io.StringIO()
    with redirect_stdout(out):
        result = validate_config(cfg)
    return result, out.getvalue()


class ConfigTests(unittest.TestCase):
    def test_package_defaults(self) -> None:
        cfg, warnings = _validate(load_config())
        self.assertEqual(warnings, "")
        self.assertEqual(cfg["quiz"]["preset"], "beginner")
        self.assertEqual(cfg["quiz"]["intervals"], ["P4", "P5"])
        self.assertEqual(cfg["quiz"]["scale"], "major_pentatonic")
        self.assertEqual(cfg["quiz"]["direction"], "ascending")
        self.assertEqual(cfg["quiz"]["note_count"], 2)
        self.assertEqual((cfg["window"]["lowest_note"], cfg["window"]["highest_note"]), (41, 79))
        self.assertEqual(chooser_settings(cfg).practice_window, 3)
        self.assertFalse(cfg["explain"])

    def test_load_from_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "quiz.yml"
            path.write_text("quiz:\n  preset: advanced\n  note_count: 3\n", encoding="utf-8")
            cfg, _ = _validate(load_config(str(path)))
        self.assertEqual(cfg["quiz"]["scale"], "chromatic")
        self.assertEqual(cfg["quiz"]["direction"], "both")
        self.assertEqual(cfg["quiz"]["note_count"], 3)
        self.assertEqual(cfg["generation"]["max_search_nodes"], 50000)

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_config("/nonexistent/intervaltrainer.yml")

    def test_invalid_values_fall_back(self) -> None:
        cfg, warnings = _validate(
            {
                "audio": {"backend": "midi"},
                "quiz": {
                    "preset": "expert",
                    "scale": "lydian dominant",
                    "direction": "sideways",
                    "note_count": 1,
                    "intervals": ["P4", "P4v", "ninth"],
                },
                "window": {"lowest_note": "H2", "highest_note": "C4"},
                "generation": {"min_choices": 0},
            }
        )
        self.assertEqual(cfg["audio"]["backend"], "fluidsynth")
        self.assertEqual(cfg["quiz"]["preset"], "beginner")
        self.assertEqual(cfg["quiz"]["scale"], "major_pentatonic")
        self.assertEqual(cfg["quiz"]["direction"], "ascending")
        self.assertEqual(cfg["quiz"]["note_count"], 2)
        self.assertEqual(cfg["quiz"]["intervals"], ["P4"])
        self.assertEqual(cfg["window"]["lowest_note"], 41)
        self.assertEqual(cfg["window"]["highest_note"], 60)
        self.assertEqual(cfg["generation"]["min_choices"], 3)
        self.assertEqual(warnings.count("WARNING:"), 8)

    def test_apply_quiz_settings(self) -> None:
        cfg, _ = _validate(
            {
                "quiz": {
                    "scale": "major",
                    "direction": "Both",
                    "note_count": 3,
                    "intervals": ["M3", "perfect fourth", 7],
                }
            }
        )
        chooser = QuestionChooser(random.Random(1), ScoreKeeper())
        apply_quiz_settings(chooser, cfg)
        self.assertEqual(chooser.scale, scales.MAJOR)
        self.assertIs(chooser.direction_filter, DirectionFilter.BOTH)
        self.assertEqual(chooser.note_count, 3)
        self.assertEqual(
            chooser.interval_filter, IntervalFilter([MAJOR_THIRD, PERFECT_FOURTH, PERFECT_FIFTH])
        )


if __name__ == "__main__":
    unittest.main()
