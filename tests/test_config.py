import io
import tempfile
import unittest
from contextlib import redirect_stderr
from pathlib import Path

from timestables.config.config import load_config, validate_config
from timestables.scoring.config import ScoringConfig


class LoadConfigTests(unittest.TestCase):
    def test_package_defaults(self) -> None:
        cfg = load_config()
        self.assertEqual(cfg["round"]["questions"], 15)
        self.assertEqual(cfg["stats"]["storage_key"], "timesTableTurboStats")
        self.assertEqual(cfg["stats"]["min_attempts"], 5)
        self.assertAlmostEqual(cfg["scoring"]["ema_alpha"], 0.3)

    def test_user_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            p = Path(tmp) / "cfg.yml"
            p.write_text("stats:\n  min_attempts: 3\n", encoding="utf-8")
            cfg = load_config(str(p))
        self.assertEqual(cfg, {"stats": {"min_attempts": 3}})

    def test_missing_file_exits(self) -> None:
        with redirect_stderr(io.StringIO()) as err, self.assertRaises(SystemExit) as ctx:
            load_config("/nonexistent/timestables.yml")
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("ERROR", err.getvalue())


class ValidateConfigTests(unittest.TestCase):
    def test_fills_defaults(self) -> None:
        cfg = validate_config({})
        self.assertEqual(cfg["round"]["questions"], 15)
        self.assertEqual(cfg["round"]["max_digits"], 3)
        self.assertEqual(cfg["feedback"]["correct_delay_ms"], 800)
        self.assertEqual(cfg["feedback"]["incorrect_delay_ms"], 1500)
        self.assertIsInstance(cfg["scoring"], ScoringConfig)
        self.assertAlmostEqual(cfg["scoring"].speed_weight, 0.3)
        self.assertFalse(cfg["stats"]["data_dir"].startswith("~"))

    def test_bad_values_fall_back(self) -> None:
        raw = {"round": {"questions": "lots"}, "stats": {"min_attempts": -2, "storage_key": " "}}
        with redirect_stderr(io.StringIO()) as err:
            cfg = validate_config(raw)
        self.assertEqual(cfg["round"]["questions"], 15)
        self.assertEqual(cfg["stats"]["min_attempts"], 5)
        self.assertEqual(cfg["stats"]["storage_key"], "timesTableTurboStats")
        self.assertIn("WARNING", err.getvalue())

    def test_bad_scoring_falls_back(self) -> None:
        with redirect_stderr(io.StringIO()) as err:
            cfg = validate_config({"scoring": {"fast_seconds": 10, "slow_seconds": 5}})
        self.assertEqual(cfg["scoring"], ScoringConfig())
        self.assertIn("WARNING", err.getvalue())

    def test_custom_scoring(self) -> None:
        cfg = validate_config({"scoring": {"ema_alpha": 0.5}})
        self.assertAlmostEqual(cfg["scoring"].ema_alpha, 0.5)


if __name__ == "__main__":
    unittest.main()
