"""Theme resolution.

Normalizes the theme supplied alongside AI-generated slide content into the
canonical :class:`Theme`, falling back to the built-in palette whenever the
input lacks a background or primary accent.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from ..models.theme import FontPair, Theme

DARK_TEXT = "1E293B"
LIGHT_TEXT = "F1F5F9"

DEFAULT_THEME = Theme(
    name="Default",
    bg="0F172A",
    accent1="3B82F6",
    accent2="8B5CF6",
    text_color=LIGHT_TEXT,
    card_bg=DARK_TEXT,
    is_dark=True,
    font_style="modern",
)

FONT_PAIRS = {
    "classic": FontPair(heading="Cambria", body="Garamond"),
    "playful": FontPair(heading="Trebuchet MS", body="Verdana"),
    "modern": FontPair(heading="Segoe UI", body="Calibri"),
}

QUOTE_FONT = "Georgia"


def fonts_for(font_style: Optional[str]) -> FontPair:
    """Return the heading/body font pair for a theme's font style."""
    return FONT_PAIRS.get(font_style or "", FONT_PAIRS["modern"])


def _clean(color: Any) -> str:
    """Drop leading marker characters such as ``#`` (idempotent)."""
    value = str(color).strip()
    while value and not value[0].isalnum():
        value = value[1:]
    return value


def _pick(raw: Mapping[str, Any], *keys: str) -> str:
    """Return the first cleaned, non-empty value among ``keys``."""
    for key in keys:
        value = raw.get(key)
        if value is not None and _clean(value):
            return _clean(value)
    return ""


def resolve_theme(raw: Union[Mapping[str, Any], Theme, None]) -> Theme:
    """Resolve a possibly partial or malformed theme into a :class:`Theme`.

    Never raises: a ``bg``/``accent1`` that is missing or empty once the
    marker is stripped yields :data:`DEFAULT_THEME`, and malformed hex strings
    pass through with only the marker stripped.
    """
    if isinstance(raw, Theme):
        raw = raw.to_dict()
    if not isinstance(raw, Mapping):
        return DEFAULT_THEME
    bg = _pick(raw, "bg")
    accent1 = _pick(raw, "accent1")
    if not bg or not accent1:
        return DEFAULT_THEME

    is_dark = raw.get("isDark", raw.get("is_dark")) is not False
    font_style = raw.get("fontStyle") or raw.get("font_style")

    return Theme(
        name=str(raw.get("name") or "Custom"),
        bg=bg,
        accent1=accent1,
        accent2=_pick(raw, "accent2") or accent1,
        text_color=_pick(raw, "textColor", "text_color") or (LIGHT_TEXT if is_dark else DARK_TEXT),
        card_bg=_pick(raw, "cardBg", "card_bg") or (DARK_TEXT if is_dark else LIGHT_TEXT),
        is_dark=is_dark,
        font_style=str(font_style or "modern"),
    )
