"""CLI tests."""

import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from slidecraft.cli import build_parser, cmd_export, cmd_layout, cmd_lint, cmd_scale, cmd_theme
from slidecraft.config import load_config
from slidecraft.logging_utils import read_events


class MockArgs:
    """Mock argparse.Namespace for testing."""
    def __init__(self, **kwargs):
        for k, v in kwargs.items():
            setattr(self, k, v)


def _run(func, **kwargs):
    buffer = io.StringIO()
    with redirect_stdout(buffer):
        result = func(MockArgs(**kwargs))
    return result, buffer.getvalue()


class TestCLI(unittest.TestCase):
    def setUp(self) -> None:
        self._temp = tempfile.TemporaryDirectory()
        self.root = Path(self._temp.name)
        self.sample_deck = load_config().sample_deck_path
        self.bad_deck = self.root / "bad_deck.json"
        with open(self.bad_deck, "w", encoding="utf-8") as f:
            json.dump({
                "title": "Bad",
                "theme": {"bg": "#12345", "accent1": "#3B82F6"},
                "slides": [{"slideType": "stats", "stats": [{"value": "1", "label": "x"}] * 6}],
            }, f)

    def tearDown(self) -> None:
        self._temp.cleanup()

    def test_theme_command(self) -> None:
        result, output = _run(cmd_theme, project_root=str(self.root), deck=self.sample_deck)
        self.assertEqual(result, 0)
        theme = json.loads(output)
        self.assertEqual(theme["bg"], "0F172A")
        self.assertEqual(theme["textColor"], "F1F5F9")

    def test_missing_deck(self) -> None:
        for func in (cmd_theme, cmd_lint, cmd_export):
            with self.subTest(command=func.__name__):
                result, output = _run(
                    func, project_root=str(self.root), deck="/nonexistent/deck.json",
                    strict=False, run_id="r", compact=False,
                )
                self.assertEqual(result, 1)
                self.assertIn("ERROR:", output)

    def test_invalid_json(self) -> None:
        broken = self.root / "broken.json"
        broken.write_text("{not json", encoding="utf-8")
        result, output = _run(cmd_layout, project_root=str(self.root), deck=str(broken), compact=False, out=None)
        self.assertEqual(result, 1)
        self.assertIn("Invalid deck JSON", output)

    def test_missing_project_root(self) -> None:
        result, output = _run(cmd_scale, project_root=str(self.root / "nope"), width=960, height=600, padding=None)
        self.assertEqual(result, 1)
        self.assertIn("ERROR:", output)

    def test_layout_command_writes_json(self) -> None:
        out_path = self.root / "layout" / "deck_layout.json"
        result, _ = _run(cmd_layout, project_root=str(self.root), deck=self.sample_deck, compact=True, out=str(out_path))
        self.assertEqual(result, 0)
        with open(out_path, "r", encoding="utf-8") as f:
            layout = json.load(f)
        with open(self.sample_deck, "r", encoding="utf-8") as f:
            deck = json.load(f)
        self.assertEqual(len(layout["slides"]), len(deck["slides"]) + 1)
        self.assertEqual(layout["slides"][0]["slide_type"], "title")

    def test_lint_strict(self) -> None:
        result, output = _run(cmd_lint, project_root=str(self.root), deck=str(self.bad_deck), strict=True)
        self.assertEqual(result, 1)
        self.assertIn("MALFORMED_COLOR", output)
        self.assertIn("EXCESS_ITEMS", output)
        result, _ = _run(cmd_lint, project_root=str(self.root), deck=str(self.bad_deck), strict=False)
        self.assertEqual(result, 0)

    def test_scale_command(self) -> None:
        result, output = _run(cmd_scale, project_root=str(self.root), width=960, height=600, padding=None)
        self.assertEqual(result, 0)
        transform = json.loads(output)
        self.assertAlmostEqual(transform["scale"], 920 / 1920)

    def test_export_command(self) -> None:
        result, _ = _run(cmd_export, project_root=str(self.root), deck=self.sample_deck, run_id="test_run", strict=True)
        self.assertEqual(result, 0)
        run_dir = self.root / "runs" / "test_run"
        for name in ("deck.pptx", "layout.json", "validation_report.json", "render_map.json", "run_log.jsonl"):
            self.assertTrue((run_dir / name).exists(), msg=name)
        events = [event["event_type"] for event in read_events(run_dir / "run_log.jsonl")]
        self.assertEqual(events, ["EXPORT_START", "DECK_LOADED", "LINT_DONE", "LAYOUT_DONE", "EXPORT_DONE"])

    def test_export_strict_aborts(self) -> None:
        result, output = _run(cmd_export, project_root=str(self.root), deck=str(self.bad_deck), run_id="strict_run", strict=True)
        self.assertEqual(result, 1)
        self.assertIn("MALFORMED_COLOR", output)
        run_dir = self.root / "runs" / "strict_run"
        self.assertFalse((run_dir / "deck.pptx").exists())
        events = [event["event_type"] for event in read_events(run_dir / "run_log.jsonl")]
        self.assertEqual(events[-1], "EXPORT_ABORTED")

    def test_export_lenient_renders_bad_deck(self) -> None:
        result, _ = _run(cmd_export, project_root=str(self.root), deck=str(self.bad_deck), run_id="lenient_run", strict=False)
        self.assertEqual(result, 0)
        self.assertTrue((self.root / "runs" / "lenient_run" / "deck.pptx").exists())

    def test_parser_structure(self) -> None:
        parser = build_parser()
        args = parser.parse_args(["theme"])
        self.assertEqual(args.command, "theme")
        self.assertIsNone(args.deck)

        args = parser.parse_args(["layout", "--deck", "d.json", "--compact", "--out", "o.json"])
        self.assertEqual((args.deck, args.compact, args.out), ("d.json", True, "o.json"))

        args = parser.parse_args(["lint", "--strict"])
        self.assertTrue(args.strict)

        args = parser.parse_args(["scale", "--width", "960", "--height", "600"])
        self.assertEqual((args.width, args.height, args.padding), (960.0, 600.0, None))

        args = parser.parse_args(["export", "--run-id", "abc"])
        self.assertEqual(args.run_id, "abc")
        self.assertFalse(args.strict)


if __name__ == "__main__":
    unittest.main()
