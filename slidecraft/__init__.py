"""SlideCraft: slide layout and theming engine."""

from .layout.dispatcher import layout_deck, layout_slide
from .layout.fit import compute_scale
from .normalize.slides import parse_deck
from .theme.resolver import resolve_theme

__all__ = [
    "compute_scale",
    "layout_deck",
    "layout_slide",
    "parse_deck",
    "resolve_theme",
]
