"""DeckLayout to PPTX exporter.

Maps every draw command onto one native python-pptx shape on a blank 16:9
slide. Geometry is scaled from the design canvas with the same fit
calculation the preview uses, so both targets consume identical commands.
"""

from __future__ import annotations

import base64
import io
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.shapes import MSO_CONNECTOR, MSO_SHAPE
from pptx.enum.dml import MSO_LINE_DASH_STYLE
from pptx.enum.text import MSO_ANCHOR, MSO_AUTO_SIZE, PP_ALIGN
from pptx.oxml.ns import qn
from pptx.oxml.xmlchemy import OxmlElement
from pptx.util import Emu, Pt

from ..layout.fit import compute_scale
from ..models.draw import (
    DeckLayout,
    Ellipse,
    ImageRef,
    Line,
    Polygon,
    Rectangle,
    RoundedRectangle,
    Shadow,
    TextBlock,
)
from ..models.render_map import RenderMap, RenderMapEntry
from ..theme.colors import hex_to_rgb

SLIDE_WIDTH = Emu(12192000)  # 13.333 in
SLIDE_HEIGHT = Emu(6858000)  # 7.5 in
BLANK_LAYOUT_INDEX = 6

POINTS_PER_UNIT = 0.5
MIN_FONT_POINTS = 1.0
PLACEHOLDER_FILL = "334155"

ALIGNMENTS = {"left": PP_ALIGN.LEFT, "center": PP_ALIGN.CENTER, "right": PP_ALIGN.RIGHT}
ANCHORS = {"top": MSO_ANCHOR.TOP, "middle": MSO_ANCHOR.MIDDLE, "bottom": MSO_ANCHOR.BOTTOM}
AUTO_SHAPES = {
    "rectangle": MSO_SHAPE.RECTANGLE,
    "rounded_rectangle": MSO_SHAPE.ROUNDED_RECTANGLE,
    "ellipse": MSO_SHAPE.OVAL,
}


def _rgb(hex_color: str) -> RGBColor:
    return RGBColor(*hex_to_rgb(hex_color))


def _add_alpha(parent, opacity: float) -> None:
    """Attach an ``a:alpha`` to every srgbClr below ``parent``."""
    if parent is None or opacity >= 1:
        return
    for color in parent.iter(qn("a:srgbClr")):
        alpha = OxmlElement("a:alpha")
        alpha.set("val", str(int(round(max(0.0, opacity) * 100000))))
        color.append(alpha)


def _set_picture_alpha(picture, opacity: float) -> None:
    """Fade an embedded picture with an ``a:alphaModFix`` on its blip."""
    if opacity >= 1:
        return
    blip = picture._element.find(qn("p:blipFill")).find(qn("a:blip"))
    alpha = OxmlElement("a:alphaModFix")
    alpha.set("amt", str(int(round(max(0.0, opacity) * 100000))))
    blip.append(alpha)


def _set_alt_text(shape, text: str) -> None:
    elem = shape.element
    for container in ("p:nvSpPr", "p:nvPicPr", "p:nvCxnSpPr"):
        nv_pr = elem.find(qn(container))
        if nv_pr is None:
            continue
        c_nv_pr = nv_pr.find(qn("p:cNvPr"))
        if c_nv_pr is not None:
            c_nv_pr.set("descr", text)
            return


def _decode_data_uri(ref: str) -> Optional[io.BytesIO]:
    header, _, data = ref.partition(",")
    if not header.startswith("data:") or ";base64" not in header:
        return None
    return io.BytesIO(base64.b64decode(data, validate=False))


class PptxExporter:
    """Writes a :class:`DeckLayout` to a .pptx file."""

    def __init__(self, image_root: Optional[Path] = None) -> None:
        self.image_root = image_root
        self.unit = 1.0
        self._builders: Dict[type, Callable[[Any, Any], Any]] = {
            Rectangle: self._add_auto_shape,
            RoundedRectangle: self._add_auto_shape,
            Ellipse: self._add_auto_shape,
            Polygon: self._add_polygon,
            Line: self._add_line,
            TextBlock: self._add_text,
            ImageRef: self._add_image,
        }

    def export(self, deck_layout: DeckLayout, output_path: Path) -> RenderMap:
        """Render every slide layout and return a RenderMap keyed by slide."""
        prs = Presentation()
        prs.slide_width = SLIDE_WIDTH
        prs.slide_height = SLIDE_HEIGHT
        self.unit = compute_scale(
            SLIDE_WIDTH, SLIDE_HEIGHT, 0, deck_layout.canvas_width, deck_layout.canvas_height
        )
        blank = prs.slide_layouts[BLANK_LAYOUT_INDEX]
        render_map = RenderMap()

        for slide_layout in deck_layout.slides:
            slide = prs.slides.add_slide(blank)
            tags = set()
            for command in slide_layout.commands:
                shape = self._builders[type(command)](slide, command)
                label = command.tag or command.kind
                shape.name = label
                _set_alt_text(shape, label)
                if command.tag:
                    tags.add(command.tag)

            key = "title" if slide_layout.index is None else f"slide_{slide_layout.index}"
            render_map.entries[key] = RenderMapEntry(
                slide_index=slide_layout.index,
                pptx_index=len(prs.slides) - 1,
                slide_type=slide_layout.slide_type,
                command_count=len(slide_layout.commands),
                tags=sorted(tags),
            )

        output_path.parent.mkdir(parents=True, exist_ok=True)
        prs.save(str(output_path))
        return render_map

    # Geometry ----------------------------------------------------------------

    def _emu(self, value: float) -> Emu:
        return Emu(int(round(value * self.unit)))

    def _box(self, command) -> tuple:
        return (
            self._emu(command.x),
            self._emu(command.y),
            self._emu(max(command.width, 0)),
            self._emu(max(command.height, 0)),
        )

    # Styling -----------------------------------------------------------------

    def _style_shape(self, shape, command) -> None:
        fill = shape.fill
        if command.fill and command.fill_end:
            fill.gradient()
            fill.gradient_angle = 0
            stops = fill.gradient_stops
            stops[0].color.rgb = _rgb(command.fill)
            stops[1].color.rgb = _rgb(command.fill_end)
        elif command.fill:
            fill.solid()
            fill.fore_color.rgb = _rgb(command.fill)
        else:
            fill.background()
        sp_pr = shape._element.spPr
        for tag in ("a:solidFill", "a:gradFill"):
            _add_alpha(sp_pr.find(qn(tag)), command.opacity)

        if command.stroke and command.stroke_width > 0:
            shape.line.color.rgb = _rgb(command.stroke)
            shape.line.width = self._emu(command.stroke_width)
        else:
            shape.line.fill.background()
        self._apply_effects(shape, command.shadow, command.blur)

    def _apply_effects(self, shape, shadow: Optional[Shadow], blur: float) -> None:
        shape.shadow.inherit = False
        effect_lst = shape._element.spPr.find(qn("a:effectLst"))
        if shadow is not None:
            outer = OxmlElement("a:outerShdw")
            outer.set("blurRad", str(self._emu(shadow.blur)))
            outer.set("dist", str(self._emu(shadow.offset)))
            outer.set("dir", "5400000")
            outer.set("rotWithShape", "0")
            color = OxmlElement("a:srgbClr")
            color.set("val", "%02X%02X%02X" % hex_to_rgb(shadow.color))
            outer.append(color)
            _add_alpha(outer, shadow.opacity)
            effect_lst.append(outer)
        if blur > 0:
            soft_edge = OxmlElement("a:softEdge")
            soft_edge.set("rad", str(self._emu(blur)))
            effect_lst.append(soft_edge)

    # Builders ----------------------------------------------------------------

    def _add_auto_shape(self, slide, command):
        shape = slide.shapes.add_shape(AUTO_SHAPES[command.kind], *self._box(command))
        if isinstance(command, RoundedRectangle):
            shortest = min(command.width, command.height)
            if shortest > 0:
                shape.adjustments[0] = min(0.5, command.corner_radius / shortest)
        self._style_shape(shape, command)
        return shape

    def _add_polygon(self, slide, command: Polygon):
        points = [(self._emu(px), self._emu(py)) for px, py in command.points]
        builder = slide.shapes.build_freeform(points[0][0], points[0][1], scale=1.0)
        builder.add_line_segments(points[1:], close=True)
        shape = builder.convert_to_shape()
        self._style_shape(shape, command)
        return shape

    def _add_line(self, slide, command: Line):
        connector = slide.shapes.add_connector(
            MSO_CONNECTOR.STRAIGHT,
            self._emu(command.x1),
            self._emu(command.y1),
            self._emu(command.x2),
            self._emu(command.y2),
        )
        line = connector.line
        line.color.rgb = _rgb(command.stroke)
        line.width = self._emu(command.stroke_width)
        if command.dash is not None:
            line.dash_style = MSO_LINE_DASH_STYLE.DASH
        ln = line._get_or_add_ln()
        _add_alpha(ln, command.opacity)
        if command.arrow_end:
            tail = OxmlElement("a:tailEnd")
            tail.set("type", "triangle")
            ln.append(tail)
        return connector

    def _add_text(self, slide, command: TextBlock):
        box = slide.shapes.add_textbox(*self._box(command))
        frame = box.text_frame
        frame.word_wrap = True
        frame.auto_size = MSO_AUTO_SIZE.NONE
        frame.margin_left = frame.margin_right = 0
        frame.margin_top = frame.margin_bottom = 0
        frame.vertical_anchor = ANCHORS[command.valign]
        frame.text = command.text
        for paragraph in frame.paragraphs:
            paragraph.alignment = ALIGNMENTS[command.align]
            paragraph.line_spacing = command.line_spacing
            for run in paragraph.runs:
                font = run.font
                font.size = Pt(max(MIN_FONT_POINTS, command.font_size * POINTS_PER_UNIT))
                font.name = command.font_family
                font.bold = command.bold
                font.italic = command.italic
                font.color.rgb = _rgb(command.color)
                _add_alpha(run._r, command.opacity)
        if command.shadow is not None:
            self._apply_effects(box, command.shadow, 0)
        return box

    def _resolve_image(self, ref: str) -> Union[str, io.BytesIO, None]:
        if ref.startswith("data:"):
            return _decode_data_uri(ref)
        if "://" in ref:
            return None
        path = Path(ref)
        if not path.is_absolute() and self.image_root is not None:
            path = self.image_root / path
        return str(path) if path.is_file() else None

    def _add_image(self, slide, command: ImageRef):
        try:
            source = self._resolve_image(command.ref)
            if source is not None:
                picture = slide.shapes.add_picture(source, *self._box(command))
                if command.corner_radius > 0:
                    picture.auto_shape_type = MSO_SHAPE.ROUNDED_RECTANGLE
                _set_picture_alpha(picture, command.opacity)
                return picture
        except (OSError, ValueError):
            pass
        placeholder = slide.shapes.add_shape(MSO_SHAPE.RECTANGLE, *self._box(command))
        placeholder.fill.solid()
        placeholder.fill.fore_color.rgb = _rgb(PLACEHOLDER_FILL)
        _add_alpha(placeholder._element.spPr.find(qn("a:solidFill")), command.opacity)
        placeholder.line.fill.background()
        return placeholder
