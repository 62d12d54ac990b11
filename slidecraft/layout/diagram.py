"""Flowchart layout: grid placement of nodes and straight connector routing.

Nodes fill a grid of at most four columns in insertion order. Connectors are
straight segments between facing edge midpoints; there is no crossing
minimization or collision avoidance, so the result is deterministic and
linear in the number of nodes and connections.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..models.draw import (
    DrawCommand,
    Ellipse,
    Line,
    Polygon,
    RoundedRectangle,
    Shadow,
    TextBlock,
)
from ..models.slide import DiagramConnection, DiagramNode, NodeKind
from ..models.theme import Theme
from ..theme.resolver import DEFAULT_THEME, fonts_for

MAX_COLUMNS = 4
HORIZONTAL_TOLERANCE = 10

NODE_SHADOW = Shadow(blur=6, offset=2, color="000000", opacity=0.3)


@dataclass(frozen=True)
class DiagramPreset:
    node_width: float
    node_height: float
    gap_x: float
    gap_y: float
    start_x: float
    start_y: float
    font_size: float
    label_font_size: float
    stroke_width: float
    dash: Tuple[float, float]
    label_offset: float
    corner_radius: float


FULL_PRESET = DiagramPreset(
    node_width=140, node_height=50, gap_x=160, gap_y=100, start_x=30, start_y=20,
    font_size=12, label_font_size=10, stroke_width=2, dash=(6, 4),
    label_offset=5, corner_radius=8,
)
COMPACT_PRESET = DiagramPreset(
    node_width=70, node_height=30, gap_x=80, gap_y=55, start_x=10, start_y=8,
    font_size=7, label_font_size=6, stroke_width=1, dash=(3, 2),
    label_offset=3, corner_radius=4,
)


def preset_for(compact: bool) -> DiagramPreset:
    return COMPACT_PRESET if compact else FULL_PRESET


def _column_count(node_count: int) -> int:
    return min(node_count, MAX_COLUMNS)


def diagram_canvas_size(node_count: int, compact: bool = False) -> Tuple[float, float]:
    """Size of the local diagram canvas for ``node_count`` nodes."""
    preset = preset_for(compact)
    columns = _column_count(node_count)
    rows = math.ceil(node_count / columns) if columns else 0
    return (
        preset.start_x * 2 + columns * preset.gap_x,
        preset.start_y * 2 + rows * preset.gap_y,
    )


def grid_cell(index: int, columns: int) -> Tuple[int, int]:
    """(column, row) of the node at ``index``."""
    return index % columns, index // columns


def node_origins(nodes: Sequence[DiagramNode], compact: bool = False) -> List[Tuple[float, float]]:
    """Top-left corner of every node, in insertion order."""
    preset = preset_for(compact)
    columns = _column_count(len(nodes))
    origins = []
    for index in range(len(nodes)):
        column, row = grid_cell(index, columns)
        origins.append((
            preset.start_x + column * preset.gap_x,
            preset.start_y + row * preset.gap_y,
        ))
    return origins


# Node styling ---------------------------------------------------------------

NodeShapeBuilder = Callable[[float, float, float, float, DiagramPreset, dict], DrawCommand]


def _ellipse(x: float, y: float, w: float, h: float, preset: DiagramPreset, style: dict) -> DrawCommand:
    return Ellipse(x=x, y=y, width=w, height=h, **style)


def _diamond(x: float, y: float, w: float, h: float, preset: DiagramPreset, style: dict) -> DrawCommand:
    cx, cy = x + w / 2, y + h / 2
    return Polygon.from_points([(cx, y), (x + w, cy), (cx, y + h), (x, cy)], **style)


def _parallelogram(x: float, y: float, w: float, h: float, preset: DiagramPreset, style: dict) -> DrawCommand:
    skew = w * 0.15
    return Polygon.from_points([(x + skew, y), (x + w, y), (x + w - skew, y + h), (x, y + h)], **style)


def _rounded(x: float, y: float, w: float, h: float, preset: DiagramPreset, style: dict) -> DrawCommand:
    return RoundedRectangle(x=x, y=y, width=w, height=h, corner_radius=preset.corner_radius, **style)


NODE_SHAPES: Dict[NodeKind, NodeShapeBuilder] = {
    NodeKind.START: _ellipse,
    NodeKind.END: _ellipse,
    NodeKind.DECISION: _diamond,
    NodeKind.DATA: _parallelogram,
    NodeKind.PROCESS: _rounded,
}

NODE_FILLS: Dict[NodeKind, Callable[[Theme], str]] = {
    NodeKind.START: lambda theme: "10B981",
    NodeKind.END: lambda theme: "EF4444",
    NodeKind.DECISION: lambda theme: "F59E0B",
    NodeKind.DATA: lambda theme: theme.accent2,
    NodeKind.PROCESS: lambda theme: theme.accent1,
}


def _node_commands(
    node: DiagramNode, origin: Tuple[float, float], preset: DiagramPreset, theme: Theme
) -> List[DrawCommand]:
    x, y = origin
    w, h = preset.node_width, preset.node_height
    style = {
        "fill": NODE_FILLS[node.type](theme),
        "stroke": "FFFFFF" if theme.is_dark else "000000",
        "stroke_width": preset.stroke_width / 2,
        "shadow": NODE_SHADOW,
        "tag": "diagram.node",
    }
    return [
        NODE_SHAPES[node.type](x, y, w, h, preset, style),
        TextBlock(
            x=x, y=y, width=w, height=h, text=node.label,
            font_size=preset.font_size, font_family=fonts_for(theme.font_style).body,
            bold=True, color="FFFFFF", align="center", valign="middle",
            tag="diagram.node_label",
        ),
    ]


# Connectors -----------------------------------------------------------------

def route_connector(
    source: Tuple[float, float], target: Tuple[float, float], preset: DiagramPreset
) -> Tuple[float, float, float, float, bool]:
    """Endpoints (x1, y1, x2, y2) between facing edge midpoints, plus orientation.

    Nodes whose top edges differ by less than the tolerance are joined
    side to side; all others are joined bottom to top (or top to bottom).
    """
    (fx, fy), (tx, ty) = source, target
    w, h = preset.node_width, preset.node_height
    horizontal = abs(fy - ty) < HORIZONTAL_TOLERANCE
    if horizontal:
        if tx >= fx:
            return fx + w, fy + h / 2, tx, ty + h / 2, True
        return fx, fy + h / 2, tx + w, ty + h / 2, True
    if ty >= fy:
        return fx + w / 2, fy + h, tx + w / 2, ty, False
    return fx + w / 2, fy, tx + w / 2, ty + h, False


def _connector_commands(
    connection: DiagramConnection,
    source: Tuple[float, float],
    target: Tuple[float, float],
    preset: DiagramPreset,
    theme: Theme,
) -> List[DrawCommand]:
    x1, y1, x2, y2, horizontal = route_connector(source, target, preset)
    commands: List[DrawCommand] = [
        Line(
            x1=x1, y1=y1, x2=x2, y2=y2,
            stroke=theme.accent1, stroke_width=preset.stroke_width, opacity=0.5,
            dash=preset.dash, arrow_end=True, tag="diagram.connector",
        )
    ]
    if connection.label:
        mx, my = (x1 + x2) / 2, (y1 + y2) / 2
        width = preset.gap_x * 0.8
        height = preset.label_font_size * 1.6
        if horizontal:
            box = (mx - width / 2, my - preset.label_offset - height, "center")
        else:
            box = (mx + preset.label_offset, my - height / 2, "left")
        commands.append(
            TextBlock(
                x=box[0], y=box[1], width=width, height=height, text=connection.label,
                font_size=preset.label_font_size, font_family=fonts_for(theme.font_style).body,
                italic=True, color=theme.accent2, align=box[2], valign="middle",
                tag="diagram.connector_label",
            )
        )
    return commands


def layout_diagram(
    nodes: Sequence[DiagramNode],
    connections: Sequence[DiagramConnection],
    compact: bool = False,
    theme: Optional[Theme] = None,
) -> List[DrawCommand]:
    """Lay out a flowchart in its own local canvas (see :func:`diagram_canvas_size`).

    Connectors whose endpoints are missing, and self-loops, are skipped.
    Connectors are emitted first so nodes paint over their ends.
    """
    theme = theme or DEFAULT_THEME
    preset = preset_for(compact)
    origins = node_origins(nodes, compact)
    positions = {node.id: origin for node, origin in zip(nodes, origins)}

    commands: List[DrawCommand] = []
    for connection in connections:
        source = positions.get(connection.from_id)
        target = positions.get(connection.to_id)
        if source is None or target is None or connection.from_id == connection.to_id:
            continue
        commands.extend(_connector_commands(connection, source, target, preset, theme))

    for node, origin in zip(nodes, origins):
        commands.extend(_node_commands(node, origin, preset, theme))
    return commands
