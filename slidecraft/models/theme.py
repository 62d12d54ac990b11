"""Theme contracts."""

from __future__ import annotations

from pydantic import Field

from .base import FrozenModel


class Theme(FrozenModel):
    name: str = "Default"
    bg: str = Field(..., description="Background color, 6-digit hex without marker")
    accent1: str
    accent2: str
    text_color: str = Field(..., alias="textColor")
    card_bg: str = Field(..., alias="cardBg")
    is_dark: bool = Field(True, alias="isDark")
    font_style: str = Field("modern", alias="fontStyle")


class FontPair(FrozenModel):
    heading: str
    body: str
