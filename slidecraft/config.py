"""Runtime configuration loader."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .layout.fit import DEFAULT_PADDING
from .layout.primitives import CANVAS_HEIGHT, CANVAS_WIDTH
from .models.config import Config


def _require_dir(path: Path, label: str) -> None:
    if not path.is_dir():
        raise FileNotFoundError(f"Missing {label}: {path}")


def load_config(project_root: Optional[Path] = None) -> Config:
    """Load configuration with canonical defaults rooted at ``project_root``."""
    root = project_root or Path(__file__).resolve().parents[1]
    _require_dir(root, "project_root")
    inputs_dir = root / "inputs"

    return Config(
        project_root=str(root),
        inputs_dir=str(inputs_dir),
        runs_dir=str(root / "runs"),
        sample_deck_path=str(inputs_dir / "sample_deck.json"),
        canvas_width=CANVAS_WIDTH,
        canvas_height=CANVAS_HEIGHT,
        preview_padding=DEFAULT_PADDING,
    )
