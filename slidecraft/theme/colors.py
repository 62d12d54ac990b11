"""Hex color helpers shared by the layout archetypes and the exporter."""

from __future__ import annotations

import math
import re
from typing import Tuple

_HEX_COLOR = re.compile(r"^#?[0-9a-fA-F]{6}$")


def _channel(hex_color: str, start: int) -> int:
    try:
        return int(hex_color[start:start + 2], 16)
    except (TypeError, ValueError):
        return 0


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Split a 6-digit hex color into (r, g, b); unparseable channels read as 0."""
    return _channel(hex_color, 0), _channel(hex_color, 2), _channel(hex_color, 4)


def to_rgba(hex_color: str, alpha: float) -> str:
    """Return an ``rgba(r, g, b, a)`` descriptor for a theme-resolved color."""
    r, g, b = hex_to_rgb(hex_color)
    return f"rgba({r}, {g}, {b}, {alpha})"


def _clamp(value: int) -> int:
    return min(255, max(0, value))


def adjust(hex_color: str, percent: float) -> str:
    """Lighten (positive) or darken (negative) every channel by ``percent``.

    Each channel moves by ``2.55 * percent`` rounded half up, clamped to 0-255.
    """
    shift = math.floor(2.55 * percent + 0.5)
    r, g, b = (_clamp(channel + shift) for channel in hex_to_rgb(hex_color))
    return f"{r:02X}{g:02X}{b:02X}"


def is_hex_color(value: object) -> bool:
    """True for ``RRGGBB`` or ``#RRGGBB`` strings."""
    return isinstance(value, str) and bool(_HEX_COLOR.match(value))
