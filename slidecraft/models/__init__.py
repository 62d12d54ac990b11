"""Pydantic models for SlideCraft contracts."""

from .base import FrozenModel, LayoutBaseModel
from .config import Config
from .draw import (
    DeckLayout,
    DrawCommand,
    Ellipse,
    ImageRef,
    Line,
    Polygon,
    Rectangle,
    RoundedRectangle,
    Shadow,
    SlideLayout,
    TextBlock,
)
from .render_map import RenderMap, RenderMapEntry
from .slide import (
    BulletsSlide,
    ComparisonColumn,
    ComparisonSlide,
    Deck,
    Diagram,
    DiagramConnection,
    DiagramNode,
    DiagramSlide,
    NodeKind,
    QuoteSlide,
    SectionSlide,
    SlideModel,
    SlideType,
    StatItem,
    StatsSlide,
    TimelineEntry,
    TimelineSlide,
)
from .theme import FontPair, Theme
from .validation import ValidationReport, ValidationViolation

__all__ = [
    "Config",
    "FrozenModel",
    "LayoutBaseModel",
    "Theme",
    "FontPair",
    "SlideType",
    "SlideModel",
    "BulletsSlide",
    "SectionSlide",
    "QuoteSlide",
    "StatsSlide",
    "StatItem",
    "ComparisonSlide",
    "ComparisonColumn",
    "TimelineSlide",
    "TimelineEntry",
    "DiagramSlide",
    "Diagram",
    "DiagramNode",
    "DiagramConnection",
    "NodeKind",
    "Deck",
    "DrawCommand",
    "Rectangle",
    "RoundedRectangle",
    "Ellipse",
    "Polygon",
    "Line",
    "TextBlock",
    "ImageRef",
    "Shadow",
    "SlideLayout",
    "DeckLayout",
    "ValidationReport",
    "ValidationViolation",
    "RenderMap",
    "RenderMapEntry",
]
