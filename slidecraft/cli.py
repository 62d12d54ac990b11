"""CLI entry point for the SlideCraft layout engine."""

from __future__ import annotations

import argparse
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from .config import load_config
from .layout.dispatcher import layout_deck
from .layout.fit import fit_transform
from .logging_utils import log_event, read_events
from .models.config import Config
from .normalize.slides import parse_deck
from .render.pptx_exporter import PptxExporter
from .theme.resolver import resolve_theme
from .validate.preflight import lint_deck


def _generate_run_id() -> str:
    """Generate a timestamp-based run ID."""
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--project-root",
        type=str,
        default=None,
        help="Path to project root (default: auto-detect)",
    )


def _load_config(args: argparse.Namespace) -> Optional[Config]:
    try:
        return load_config(Path(args.project_root) if args.project_root else None)
    except FileNotFoundError as exc:
        print(f"ERROR: {exc}")
        return None


def _deck_path(args: argparse.Namespace, config: Config) -> Path:
    return Path(args.deck) if args.deck else Path(config.sample_deck_path)


def _load_deck_json(deck_path: Path) -> Optional[Any]:
    if not deck_path.exists():
        print(f"ERROR: Deck file not found: {deck_path}")
        return None
    try:
        with open(deck_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        print(f"ERROR: Invalid deck JSON in {deck_path}: {exc}")
        return None


def cmd_theme(args: argparse.Namespace) -> int:
    """Print the resolved theme of a deck."""
    config = _load_config(args)
    if config is None:
        return 1
    raw = _load_deck_json(_deck_path(args, config))
    if raw is None:
        return 1
    theme_raw = raw.get("theme") if isinstance(raw, dict) else None
    print(json.dumps(resolve_theme(theme_raw).to_dict(), indent=2, sort_keys=True))
    return 0


def cmd_layout(args: argparse.Namespace) -> int:
    """Lay out a deck and write the DeckLayout JSON."""
    config = _load_config(args)
    if config is None:
        return 1
    raw = _load_deck_json(_deck_path(args, config))
    if raw is None:
        return 1

    deck_layout = layout_deck(parse_deck(raw), compact=args.compact)
    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(deck_layout.to_json())
        print(f"Laid out {len(deck_layout.slides)} slides to: {out_path}")
    else:
        print(deck_layout.to_json())
    return 0


def cmd_lint(args: argparse.Namespace) -> int:
    """Report what the engine will silently absorb in a deck."""
    config = _load_config(args)
    if config is None:
        return 1
    raw = _load_deck_json(_deck_path(args, config))
    if raw is None:
        return 1

    report = lint_deck(raw)
    for violation in report.violations:
        where = "deck" if violation.slide_index is None else f"slide {violation.slide_index}"
        print(
            f"{violation.severity}: {violation.violation_type} at {where} "
            f"[{violation.field_key}] {violation.recommended_action}"
        )
    print(f"{len(report.violations)} violations ({len(report.blocking)} blocking)")
    if args.strict and report.blocking:
        return 1
    return 0


def cmd_scale(args: argparse.Namespace) -> int:
    """Print the preview transform for a container size."""
    config = _load_config(args)
    if config is None:
        return 1
    padding = args.padding if args.padding is not None else config.preview_padding
    transform = fit_transform(
        args.width, args.height, padding, config.canvas_width, config.canvas_height
    )
    print(json.dumps(transform._asdict(), sort_keys=True))
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    """Lint, lay out and export a deck to PPTX with run artifacts."""
    config = _load_config(args)
    if config is None:
        return 1
    deck_path = _deck_path(args, config)
    raw = _load_deck_json(deck_path)
    if raw is None:
        return 1

    run_id = args.run_id if args.run_id else _generate_run_id()
    run_dir = Path(config.runs_dir) / run_id
    run_dir.mkdir(parents=True, exist_ok=True)
    log_path = run_dir / "run_log.jsonl"

    log_event(log_path, "EXPORT_START", {"run_id": run_id, "deck_path": str(deck_path)})

    deck = parse_deck(raw)
    log_event(log_path, "DECK_LOADED", {
        "title": deck.title,
        "theme": deck.theme.name,
        "slide_count": len(deck.slides),
    })

    report = lint_deck(raw)
    validation_report_path = run_dir / "validation_report.json"
    with open(validation_report_path, "w", encoding="utf-8") as f:
        f.write(report.to_json())
    log_event(log_path, "LINT_DONE", {
        "violations_count": len(report.violations),
        "blocking_count": len(report.blocking),
    })

    if args.strict and report.blocking:
        log_event(log_path, "EXPORT_ABORTED", {"run_id": run_id, "reason": "blocking violations"})
        for violation in report.blocking:
            print(f"ERROR: {violation.violation_type} [{violation.field_key}] {violation.recommended_action}")
        return 1

    deck_layout = layout_deck(deck)
    layout_path = run_dir / "layout.json"
    with open(layout_path, "w", encoding="utf-8") as f:
        f.write(deck_layout.to_json())
    log_event(log_path, "LAYOUT_DONE", {
        "slides": len(deck_layout.slides),
        "commands": sum(len(slide.commands) for slide in deck_layout.slides),
    })

    output_path = run_dir / "deck.pptx"
    render_map = PptxExporter(image_root=deck_path.parent).export(deck_layout, output_path)
    render_map_path = run_dir / "render_map.json"
    with open(render_map_path, "w", encoding="utf-8") as f:
        f.write(render_map.to_json())
    log_event(log_path, "EXPORT_DONE", {
        "output_path": str(output_path),
        "slides_rendered": len(render_map.entries),
    })

    print(f"Exported {len(render_map.entries)} slides to: {output_path}")
    print(f"Lint: {len(report.violations)} violations ({len(report.blocking)} blocking)")
    print(f"Run artifacts in: {run_dir} ({len(read_events(log_path))} events logged)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="SlideCraft CLI - slide layout and theming engine")
    subparsers = parser.add_subparsers(dest="command", required=True)

    theme_parser = subparsers.add_parser("theme", help="Print the resolved theme of a deck")
    _add_common_args(theme_parser)
    theme_parser.add_argument(
        "--deck", type=str, default=None, help="Path to deck JSON (default: inputs/sample_deck.json)"
    )
    theme_parser.set_defaults(func=cmd_theme)

    layout_parser = subparsers.add_parser("layout", help="Write the draw commands of a deck as JSON")
    _add_common_args(layout_parser)
    layout_parser.add_argument(
        "--deck", type=str, default=None, help="Path to deck JSON (default: inputs/sample_deck.json)"
    )
    layout_parser.add_argument(
        "--compact", action="store_true", help="Use thumbnail presets"
    )
    layout_parser.add_argument(
        "--out", type=str, default=None, help="Output path (default: stdout)"
    )
    layout_parser.set_defaults(func=cmd_layout)

    lint_parser = subparsers.add_parser("lint", help="Report data-shape problems in a deck")
    _add_common_args(lint_parser)
    lint_parser.add_argument(
        "--deck", type=str, default=None, help="Path to deck JSON (default: inputs/sample_deck.json)"
    )
    lint_parser.add_argument(
        "--strict", action="store_true", help="Exit 1 when any violation is BLOCKING"
    )
    lint_parser.set_defaults(func=cmd_lint)

    scale_parser = subparsers.add_parser("scale", help="Compute the preview scale for a container")
    _add_common_args(scale_parser)
    scale_parser.add_argument("--width", type=float, required=True, help="Container width")
    scale_parser.add_argument("--height", type=float, required=True, help="Container height")
    scale_parser.add_argument(
        "--padding", type=float, default=None, help="Container padding (default: from config)"
    )
    scale_parser.set_defaults(func=cmd_scale)

    export_parser = subparsers.add_parser("export", help="Lint, lay out and export a deck to PPTX")
    _add_common_args(export_parser)
    export_parser.add_argument(
        "--deck", type=str, default=None, help="Path to deck JSON (default: inputs/sample_deck.json)"
    )
    export_parser.add_argument(
        "--run-id", type=str, default=None, help="Run ID (default: auto-generated timestamp)"
    )
    export_parser.add_argument(
        "--strict", action="store_true", help="Abort before rendering on BLOCKING violations"
    )
    export_parser.set_defaults(func=cmd_export)

    return parser


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
