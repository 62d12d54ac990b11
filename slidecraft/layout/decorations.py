"""Decorative background accents for content slides.

Purely cosmetic: patterns sit on the background layer and never move
content. The pattern is chosen by ``slide index % 5``.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Dict, List

from ..models.draw import DrawCommand, Ellipse, Polygon, Rectangle
from ..models.theme import Theme
from .primitives import CANVAS_HEIGHT

TAG = "decoration"


class DecorationPattern(IntEnum):
    ORBS_CORNER = 0
    SIDE_BAND = 1
    CORNER_TRIANGLE = 2
    EDGE_STRIPE = 3
    LAYERED_ORBS = 4

    @classmethod
    def for_index(cls, slide_index: int) -> "DecorationPattern":
        return cls(slide_index % len(cls))


def _orb(x: float, y: float, size: float, color: str, opacity: float) -> Ellipse:
    return Ellipse(x=x, y=y, width=size, height=size, fill=color, opacity=opacity, tag=TAG)


def _orbs_corner(theme: Theme) -> List[DrawCommand]:
    return [
        _orb(1498, -115, 576, theme.accent1, 0.12),
        _orb(-230, 792, 480, theme.accent2, 0.12),
    ]


def _side_band(theme: Theme) -> List[DrawCommand]:
    return [
        Rectangle(
            x=1728, y=0, width=192, height=CANVAS_HEIGHT,
            fill=theme.accent1, opacity=0.08, tag=TAG,
        ),
        _orb(-115, -86, 346, theme.accent2, 0.10),
    ]


def _corner_triangle(theme: Theme) -> List[DrawCommand]:
    return [
        Polygon.from_points(
            [(-96, -72), (-96, 245), (326, 245)],
            fill=theme.accent1, opacity=0.12, tag=TAG,
        ),
        _orb(1536, 720, 384, theme.accent2, 0.10),
    ]


def _edge_stripe(theme: Theme) -> List[DrawCommand]:
    return [
        Rectangle(x=0, y=0, width=23, height=CANVAS_HEIGHT, fill=theme.accent1, tag=TAG),
        _orb(1536, 72, 307, theme.accent2, 0.15),
        _orb(1632, 749, 192, theme.accent1, 0.12),
    ]


def _layered_orbs(theme: Theme) -> List[DrawCommand]:
    return [
        _orb(1440, -216, 768, theme.accent1, 0.08),
        _orb(1574, 29, 480, theme.accent2, 0.10),
        _orb(-288, 576, 576, theme.accent1, 0.07),
    ]


PATTERNS: Dict[DecorationPattern, Callable[[Theme], List[DrawCommand]]] = {
    DecorationPattern.ORBS_CORNER: _orbs_corner,
    DecorationPattern.SIDE_BAND: _side_band,
    DecorationPattern.CORNER_TRIANGLE: _corner_triangle,
    DecorationPattern.EDGE_STRIPE: _edge_stripe,
    DecorationPattern.LAYERED_ORBS: _layered_orbs,
}


def decorations(theme: Theme, slide_index: int) -> List[DrawCommand]:
    """Return the 1-3 decorative shapes for the slide at ``slide_index``."""
    return PATTERNS[DecorationPattern.for_index(slide_index)](theme)
