"""DrawCommand contracts.

Every command is expressed in the fixed design canvas (1920x1080 units) and
carries no renderer-specific fields, so the preview and the exporter consume
identical lists.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, Iterable, List, Literal, Optional, Tuple, Union

from pydantic import Field

from .base import FrozenModel
from .theme import Theme

Point = Tuple[float, float]
HorizontalAlign = Literal["left", "center", "right"]
VerticalAlign = Literal["top", "middle", "bottom"]


class Shadow(FrozenModel):
    blur: float = 6.0
    offset: float = 2.0
    color: str = "000000"
    opacity: float = 0.25


class _Shape(FrozenModel):
    x: float
    y: float
    width: float
    height: float
    fill: Optional[str] = None
    fill_end: Optional[str] = Field(None, description="Gradient end color, left to right")
    opacity: float = 1.0
    stroke: Optional[str] = None
    stroke_width: float = 0.0
    shadow: Optional[Shadow] = None
    blur: float = 0.0
    tag: Optional[str] = None

    def _transform_update(self, dx: float, dy: float, scale: float) -> Dict[str, Any]:
        return {
            "x": dx + self.x * scale,
            "y": dy + self.y * scale,
            "width": self.width * scale,
            "height": self.height * scale,
            "stroke_width": self.stroke_width * scale,
            "blur": self.blur * scale,
        }

    def transformed(self, dx: float, dy: float, scale: float = 1.0):
        """Return a copy moved by (dx, dy) after scaling around the origin."""
        return self.model_copy(update=self._transform_update(dx, dy, scale))


class Rectangle(_Shape):
    kind: Literal["rectangle"] = "rectangle"


class RoundedRectangle(_Shape):
    kind: Literal["rounded_rectangle"] = "rounded_rectangle"
    corner_radius: float = 0.0

    def _transform_update(self, dx: float, dy: float, scale: float) -> Dict[str, Any]:
        update = super()._transform_update(dx, dy, scale)
        update["corner_radius"] = self.corner_radius * scale
        return update


class Ellipse(_Shape):
    kind: Literal["ellipse"] = "ellipse"


class Polygon(_Shape):
    kind: Literal["polygon"] = "polygon"
    points: Tuple[Point, ...]

    @classmethod
    def from_points(cls, points: Iterable[Point], **style: Any) -> "Polygon":
        """Build a polygon whose bounding box is derived from its vertices."""
        vertices = tuple((float(px), float(py)) for px, py in points)
        xs = [px for px, _ in vertices]
        ys = [py for _, py in vertices]
        return cls(
            x=min(xs),
            y=min(ys),
            width=max(xs) - min(xs),
            height=max(ys) - min(ys),
            points=vertices,
            **style,
        )

    def _transform_update(self, dx: float, dy: float, scale: float) -> Dict[str, Any]:
        update = super()._transform_update(dx, dy, scale)
        update["points"] = tuple((dx + px * scale, dy + py * scale) for px, py in self.points)
        return update


class Line(FrozenModel):
    kind: Literal["line"] = "line"
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str
    stroke_width: float = 1.0
    opacity: float = 1.0
    dash: Optional[Tuple[float, float]] = Field(None, description="Dash and gap lengths")
    arrow_end: bool = False
    tag: Optional[str] = None

    def transformed(self, dx: float, dy: float, scale: float = 1.0) -> "Line":
        update: Dict[str, Any] = {
            "x1": dx + self.x1 * scale,
            "y1": dy + self.y1 * scale,
            "x2": dx + self.x2 * scale,
            "y2": dy + self.y2 * scale,
            "stroke_width": self.stroke_width * scale,
        }
        if self.dash is not None:
            update["dash"] = (self.dash[0] * scale, self.dash[1] * scale)
        return self.model_copy(update=update)


class TextBlock(FrozenModel):
    kind: Literal["text_block"] = "text_block"
    x: float
    y: float
    width: float
    height: float
    text: str
    font_size: float
    font_family: str = "Calibri"
    bold: bool = False
    italic: bool = False
    color: str = "FFFFFF"
    opacity: float = 1.0
    align: HorizontalAlign = "left"
    valign: VerticalAlign = "top"
    line_spacing: float = 1.0
    shadow: Optional[Shadow] = None
    tag: Optional[str] = None

    def transformed(self, dx: float, dy: float, scale: float = 1.0) -> "TextBlock":
        return self.model_copy(
            update={
                "x": dx + self.x * scale,
                "y": dy + self.y * scale,
                "width": self.width * scale,
                "height": self.height * scale,
                "font_size": self.font_size * scale,
            }
        )


class ImageRef(FrozenModel):
    kind: Literal["image_ref"] = "image_ref"
    x: float
    y: float
    width: float
    height: float
    ref: str = Field(..., description="Opaque image reference; never fetched by the engine")
    corner_radius: float = 0.0
    opacity: float = 1.0
    tag: Optional[str] = None

    def transformed(self, dx: float, dy: float, scale: float = 1.0) -> "ImageRef":
        return self.model_copy(
            update={
                "x": dx + self.x * scale,
                "y": dy + self.y * scale,
                "width": self.width * scale,
                "height": self.height * scale,
                "corner_radius": self.corner_radius * scale,
            }
        )


DrawCommand = Annotated[
    Union[Rectangle, RoundedRectangle, Ellipse, Polygon, Line, TextBlock, ImageRef],
    Field(discriminator="kind"),
]


class SlideLayout(FrozenModel):
    index: Optional[int] = Field(None, description="Position in the deck's slides; None for the title slide")
    slide_type: str
    commands: List[DrawCommand] = Field(default_factory=list)


class DeckLayout(FrozenModel):
    title: str = ""
    theme: Theme
    canvas_width: int = 1920
    canvas_height: int = 1080
    slides: List[SlideLayout] = Field(default_factory=list)
