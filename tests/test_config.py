"""Config loader tests."""

import tempfile
import unittest
from pathlib import Path

from slidecraft.config import load_config


class TestConfig(unittest.TestCase):
    def test_load_config_success(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            config = load_config(root)
        self.assertEqual(Path(config.project_root), root)
        self.assertEqual(Path(config.inputs_dir), root / "inputs")
        self.assertEqual(Path(config.runs_dir), root / "runs")
        self.assertEqual(Path(config.sample_deck_path), root / "inputs" / "sample_deck.json")
        self.assertEqual((config.canvas_width, config.canvas_height), (1920, 1080))
        self.assertEqual(config.preview_padding, 40)

    def test_load_config_missing_root(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            missing = Path(temp_dir) / "nope"
            with self.assertRaises(FileNotFoundError):
                load_config(missing)

    def test_default_root_has_sample_deck(self) -> None:
        config = load_config()
        self.assertTrue(Path(config.sample_deck_path).exists())


if __name__ == "__main__":
    unittest.main()
