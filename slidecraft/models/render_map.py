"""RenderMap contracts."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import Field

from .base import LayoutBaseModel


class RenderMapEntry(LayoutBaseModel):
    slide_index: Optional[int] = None
    pptx_index: int
    slide_type: str
    command_count: int = 0
    tags: List[str] = Field(default_factory=list)


class RenderMap(LayoutBaseModel):
    entries: Dict[str, RenderMapEntry] = Field(default_factory=dict)
