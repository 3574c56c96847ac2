import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from algorithms import Capabilities, FieldKind, MathTools, legal_fields, prune_set


class MathToolsTestCase(unittest.TestCase):
    def test_constants(self) -> None:
        self.assertAlmostEqual(MathTools.EPLEY_DIVISOR, 30.0)
        self.assertEqual(MathTools.DAY_KEY_LENGTH, 10)

    def test_epley_1rm(self) -> None:
        self.assertAlmostEqual(MathTools.epley_1rm(100, 5), 116.6666666, places=5)
        self.assertAlmostEqual(MathTools.epley_1rm(110, 6), 132.0)
        self.assertEqual(MathTools.epley_1rm(80, 0), 80)
        with self.assertRaises(ValueError):
            MathTools.epley_1rm(100, -1)

    def test_set_volume(self) -> None:
        self.assertEqual(MathTools.set_volume(100.0, 5), 500.0)
        self.assertEqual(MathTools.set_volume(None, 5), 0.0)
        self.assertEqual(MathTools.set_volume(100.0, None), 0.0)
        self.assertEqual(MathTools.set_volume(0, 10), 0.0)

    def test_day_key(self) -> None:
        self.assertEqual(MathTools.day_key("2024-03-05"), "2024-03-05")
        self.assertEqual(MathTools.day_key("2024-03-05T18:30:00Z"), "2024-03-05")


class ColumnRulesTestCase(unittest.TestCase):
    def test_strength_fields(self) -> None:
        caps = Capabilities(has_load=True, has_reps=True)
        self.assertEqual(
            legal_fields(caps), (FieldKind.REPS, FieldKind.WEIGHT, FieldKind.NOTES)
        )

    def test_order_with_every_flag(self) -> None:
        caps = Capabilities(True, True, True, True)
        self.assertEqual(
            [f.value for f in legal_fields(caps)],
            [
                "reps",
                "weight",
                "durationSec",
                "distanceM",
                "intervals",
                "workSec",
                "restSec",
                "notes",
            ],
        )

    def test_notes_always_legal(self) -> None:
        self.assertEqual(legal_fields(Capabilities()), (FieldKind.NOTES,))

    def test_from_row_reads_sqlite_flags(self) -> None:
        caps = Capabilities.from_row(
            {"hasLoad": 0, "hasReps": 1, "hasDuration": 0, "hasIntervals": 1}
        )
        self.assertEqual(caps, Capabilities(has_reps=True, has_intervals=True))

    def test_prune_set_drops_illegal_fields(self) -> None:
        caps = Capabilities(has_duration=True)
        pruned = prune_set(
            {"reps": 5, "weight": 100, "durationSec": 1500, "distanceM": 5000, "notes": "easy"},
            caps,
        )
        self.assertIsNone(pruned["reps"])
        self.assertIsNone(pruned["weight"])
        self.assertEqual(pruned["durationSec"], 1500)
        self.assertEqual(pruned["distanceM"], 5000)
        self.assertEqual(pruned["notes"], "easy")
        self.assertEqual(set(pruned), {f.value for f in FieldKind})


if __name__ == "__main__":
    unittest.main()
