"""Shared building blocks for slide archetypes.

All geometry is in design units on a 1920x1080 canvas.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from ..models.draw import (
    DrawCommand,
    Ellipse,
    ImageRef,
    Rectangle,
    RoundedRectangle,
    Shadow,
    TextBlock,
)
from ..models.theme import Theme
from ..theme.colors import adjust
from ..theme.resolver import fonts_for

CANVAS_WIDTH = 1920
CANVAS_HEIGHT = 1080

MARGIN_X = 96
TITLE_BAR_HEIGHT = 150
CONTENT_TOP = 187
CONTENT_HEIGHT = 763

FOOTER_TOP = 994
BADGE_SIZE = 72
BADGE_X = 1776
BADGE_Y = 920

WHITE = "FFFFFF"
BLACK = "000000"

CARD_SHADOW = Shadow(blur=10, offset=4, color=BLACK, opacity=0.07)
TEXT_SHADOW = Shadow(blur=12, offset=3, color=BLACK, opacity=0.35)


def divider_color(theme: Theme, amount: float = 15) -> str:
    """A background shade slightly off the slide background."""
    return adjust(theme.bg, amount if theme.is_dark else -amount)


def background(theme: Theme) -> Rectangle:
    return Rectangle(
        x=0, y=0, width=CANVAS_WIDTH, height=CANVAS_HEIGHT,
        fill=theme.bg, tag="background",
    )


def title_bar(title: str, theme: Theme) -> List[DrawCommand]:
    fonts = fonts_for(theme.font_style)
    return [
        Rectangle(
            x=0, y=0, width=CANVAS_WIDTH, height=TITLE_BAR_HEIGHT,
            fill=theme.accent1, fill_end=theme.accent2, tag="title_bar",
        ),
        TextBlock(
            x=MARGIN_X, y=23, width=1632, height=104,
            text=title, font_size=44, font_family=fonts.heading, bold=True,
            color=WHITE, valign="middle", tag="title",
        ),
    ]


def footer(theme: Theme) -> List[DrawCommand]:
    fonts = fonts_for(theme.font_style)
    return [
        Rectangle(
            x=0, y=FOOTER_TOP, width=CANVAS_WIDTH, height=CANVAS_HEIGHT - FOOTER_TOP,
            fill=theme.accent1, opacity=0.07, tag="chrome.footer",
        ),
        TextBlock(
            x=58, y=1014, width=1200, height=46,
            text=theme.name.upper(), font_size=16, font_family=fonts.body,
            color=divider_color(theme, 35), valign="middle", tag="chrome.footer_label",
        ),
    ]


def slide_number_badge(theme: Theme, index: int) -> List[DrawCommand]:
    return [
        Ellipse(
            x=BADGE_X, y=BADGE_Y, width=BADGE_SIZE, height=BADGE_SIZE,
            fill=theme.accent1, tag="chrome.badge",
        ),
        TextBlock(
            x=BADGE_X, y=BADGE_Y, width=BADGE_SIZE, height=BADGE_SIZE,
            text=str(index + 1), font_size=24, bold=True, color=WHITE,
            align="center", valign="middle", tag="chrome.badge_label",
        ),
    ]


def image_panel(
    ref: str, x: float, y: float, width: float, height: float, theme: Theme
) -> List[DrawCommand]:
    """A framed image slot; the reference is passed through untouched."""
    return [
        RoundedRectangle(
            x=x - 10, y=y - 10, width=width + 20, height=height + 20,
            fill=theme.accent1, opacity=0.2, stroke=theme.accent1, stroke_width=2,
            corner_radius=28, tag="image.frame",
        ),
        ImageRef(
            x=x, y=y, width=width, height=height, ref=ref,
            corner_radius=20, tag="image",
        ),
    ]


def image_backdrop(ref: str) -> List[DrawCommand]:
    """Full-bleed image under a dark overlay that keeps text legible."""
    return [
        ImageRef(
            x=0, y=0, width=CANVAS_WIDTH, height=CANVAS_HEIGHT, ref=ref, tag="image.backdrop",
        ),
        Rectangle(
            x=0, y=0, width=CANVAS_WIDTH, height=CANVAS_HEIGHT,
            fill=BLACK, opacity=0.4, tag="image.overlay",
        ),
    ]


def place(
    commands: Iterable[DrawCommand], dx: float, dy: float, scale: float = 1.0
) -> List[DrawCommand]:
    """Scale commands around the origin, then move them by (dx, dy)."""
    return [command.transformed(dx, dy, scale) for command in commands]


def tagged(commands: Sequence[DrawCommand], tag: str) -> List[DrawCommand]:
    """Commands whose tag equals ``tag``."""
    return [command for command in commands if command.tag == tag]
