"""SlideModel contracts.

Slides are a tagged union keyed by ``slideType``; each variant only carries
the structured fields its archetype renders.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import Field, TypeAdapter, field_validator

from .base import FrozenModel
from .theme import Theme


class SlideType(str, Enum):
    BULLETS = "bullets"
    SECTION = "section"
    QUOTE = "quote"
    STATS = "stats"
    COMPARISON = "comparison"
    TIMELINE = "timeline"
    DIAGRAM = "diagram"

    @classmethod
    def _missing_(cls, value: object) -> "SlideType":
        return cls.BULLETS


class NodeKind(str, Enum):
    START = "start"
    END = "end"
    DECISION = "decision"
    DATA = "data"
    PROCESS = "process"

    @classmethod
    def _missing_(cls, value: object) -> "NodeKind":
        return cls.PROCESS


class StatItem(FrozenModel):
    value: str = ""
    label: str = ""


class ComparisonColumn(FrozenModel):
    title: str = ""
    points: List[str] = Field(default_factory=list)


class TimelineEntry(FrozenModel):
    year: str = ""
    event: str = ""


class DiagramNode(FrozenModel):
    id: str
    label: str = ""
    type: NodeKind = NodeKind.PROCESS

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_kind(cls, value: Any) -> NodeKind:
        if isinstance(value, NodeKind):
            return value
        return NodeKind(value if value is not None else NodeKind.PROCESS.value)


class DiagramConnection(FrozenModel):
    from_id: str = Field(..., alias="from")
    to_id: str = Field(..., alias="to")
    label: Optional[str] = None


class Diagram(FrozenModel):
    nodes: List[DiagramNode] = Field(default_factory=list)
    connections: List[DiagramConnection] = Field(default_factory=list)


class _SlideBase(FrozenModel):
    title: str = ""
    content: List[str] = Field(default_factory=list)
    image_ref: Optional[str] = Field(None, alias="imageRef")


class BulletsSlide(_SlideBase):
    slide_type: Literal["bullets"] = Field("bullets", alias="slideType")


class SectionSlide(_SlideBase):
    slide_type: Literal["section"] = Field("section", alias="slideType")


class QuoteSlide(_SlideBase):
    slide_type: Literal["quote"] = Field("quote", alias="slideType")


class StatsSlide(_SlideBase):
    slide_type: Literal["stats"] = Field("stats", alias="slideType")
    stats: List[StatItem] = Field(default_factory=list)


class ComparisonSlide(_SlideBase):
    slide_type: Literal["comparison"] = Field("comparison", alias="slideType")
    columns: List[ComparisonColumn] = Field(default_factory=list)


class TimelineSlide(_SlideBase):
    slide_type: Literal["timeline"] = Field("timeline", alias="slideType")
    timeline: List[TimelineEntry] = Field(default_factory=list)


class DiagramSlide(_SlideBase):
    slide_type: Literal["diagram"] = Field("diagram", alias="slideType")
    diagram: Optional[Diagram] = None


SlideModel = Annotated[
    Union[
        BulletsSlide,
        SectionSlide,
        QuoteSlide,
        StatsSlide,
        ComparisonSlide,
        TimelineSlide,
        DiagramSlide,
    ],
    Field(discriminator="slide_type"),
]

SLIDE_ADAPTER: TypeAdapter = TypeAdapter(SlideModel)


class Deck(FrozenModel):
    title: str = ""
    mode: Optional[str] = None
    theme: Theme
    slides: List[SlideModel] = Field(default_factory=list)


SLIDE_VARIANTS = (
    BulletsSlide,
    SectionSlide,
    QuoteSlide,
    StatsSlide,
    ComparisonSlide,
    TimelineSlide,
    DiagramSlide,
)
