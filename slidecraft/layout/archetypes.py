"""Archetype layout functions.

Each function maps one slide variant plus the deck theme to the draw
commands for its content area. Background, decorations, footer and the
slide-number badge are added by the dispatcher. Missing structured data is
never an error: the archetype renders whatever is present.
"""

from __future__ import annotations

from typing import List, Sequence

from ..models.draw import (
    DrawCommand,
    Ellipse,
    ImageRef,
    Rectangle,
    RoundedRectangle,
    Shadow,
    TextBlock,
)
from ..models.slide import (
    BulletsSlide,
    ComparisonColumn,
    ComparisonSlide,
    DiagramSlide,
    QuoteSlide,
    SectionSlide,
    StatItem,
    StatsSlide,
    TimelineEntry,
    TimelineSlide,
)
from ..models.theme import FontPair, Theme
from ..theme.colors import adjust
from ..theme.resolver import QUOTE_FONT, fonts_for
from .diagram import diagram_canvas_size, layout_diagram
from .fit import fit_ratio
from .primitives import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    CARD_SHADOW,
    CONTENT_HEIGHT,
    CONTENT_TOP,
    MARGIN_X,
    TEXT_SHADOW,
    WHITE,
    divider_color,
    image_backdrop,
    image_panel,
    place,
    title_bar,
)

MAX_COMPACT_BULLETS = 4
MAX_STATS = 4
MAX_COLUMNS = 2
MAX_POINTS = 5
MAX_TIMELINE_ENTRIES = 6

PANEL_GAP = 48
GLOW_SHADOW = Shadow(blur=10, offset=0, color="000000", opacity=0.18)


def _first(content: Sequence[str], index: int = 0) -> str:
    return content[index] if len(content) > index and content[index] else ""


def _orbs(theme: Theme, blurred: bool) -> List[DrawCommand]:
    blur = 60 if blurred else 0
    return [
        Ellipse(x=-192, y=-162, width=720, height=720, fill=theme.accent2, opacity=0.3,
                blur=blur, tag="decoration"),
        Ellipse(x=1344, y=648, width=540, height=540, fill=WHITE, opacity=0.1,
                blur=blur * 2 / 3, tag="decoration"),
        Ellipse(x=1536, y=-216, width=576, height=576, fill=theme.accent2, opacity=0.25,
                blur=blur, tag="decoration"),
    ]


# Bullets --------------------------------------------------------------------

BULLET_IMAGE_WIDTH = 768
MIN_BULLET_FONT = 10


def layout_bullets(slide: BulletsSlide, theme: Theme, compact: bool = False) -> List[DrawCommand]:
    """Title bar, bullet card and, with an image, a panel on the right 40%."""
    fonts = fonts_for(theme.font_style)
    commands = title_bar(slide.title, theme)

    card_x, card_y, card_h = MARGIN_X, CONTENT_TOP, CONTENT_HEIGHT
    image_x = CANVAS_WIDTH - MARGIN_X - BULLET_IMAGE_WIDTH
    if slide.image_ref:
        card_w = image_x - PANEL_GAP - card_x
    else:
        card_w = CANVAS_WIDTH - 2 * MARGIN_X

    commands.append(
        RoundedRectangle(
            x=card_x, y=card_y, width=card_w, height=card_h,
            fill=theme.card_bg, opacity=0.7 if theme.is_dark else 0.85,
            stroke=adjust(theme.card_bg, 20 if theme.is_dark else -20), stroke_width=1,
            corner_radius=24, tag="bullets.card",
        )
    )

    shown = list(slide.content[:MAX_COMPACT_BULLETS]) if compact else list(slide.content)
    hidden = len(slide.content) - len(shown)
    reserved = 56 if hidden else 0
    pitch = min(120.0, (card_h - 80 - reserved) / max(len(shown), 1))
    font_size = max(MIN_BULLET_FONT, min(28 if slide.image_ref else 30, pitch * 0.8))

    for i, text in enumerate(shown):
        y = card_y + 40 + i * pitch
        commands.append(
            Ellipse(
                x=card_x + 40, y=y + font_size * 0.45, width=14, height=14,
                fill=theme.accent1, fill_end=theme.accent2, tag="bullets.marker",
            )
        )
        commands.append(
            TextBlock(
                x=card_x + 72, y=y, width=card_w - 112, height=pitch,
                text=text, font_size=font_size, font_family=fonts.body,
                color=theme.text_color, opacity=0.9, line_spacing=1.3, tag="bullets.item",
            )
        )
    if hidden:
        commands.append(
            TextBlock(
                x=card_x + 40, y=card_y + card_h - 40 - reserved, width=card_w - 80, height=reserved,
                text=f"+{hidden} more", font_size=20, font_family=fonts.body,
                color=theme.text_color, opacity=0.35, valign="middle", tag="bullets.more",
            )
        )

    if slide.image_ref:
        commands.extend(image_panel(slide.image_ref, image_x, card_y, BULLET_IMAGE_WIDTH, card_h, theme))
    return commands


# Section --------------------------------------------------------------------

def layout_section(slide: SectionSlide, theme: Theme, compact: bool = False) -> List[DrawCommand]:
    """Full-bleed divider slide with a centered title and optional subtitle."""
    fonts = fonts_for(theme.font_style)
    commands: List[DrawCommand] = []
    if slide.image_ref:
        commands.append(
            ImageRef(x=0, y=0, width=CANVAS_WIDTH, height=CANVAS_HEIGHT,
                     ref=slide.image_ref, tag="image.backdrop")
        )
        commands.append(
            Rectangle(x=0, y=0, width=CANVAS_WIDTH, height=CANVAS_HEIGHT,
                      fill=theme.accent1, opacity=0.75, tag="image.overlay")
        )
    else:
        commands.append(
            Rectangle(x=0, y=0, width=CANVAS_WIDTH, height=CANVAS_HEIGHT,
                      fill=theme.accent1, fill_end=theme.accent2, tag="section.background")
        )
        commands.extend(_orbs(theme, blurred=True))

    commands.append(
        TextBlock(
            x=192, y=259, width=1536, height=360, text=slide.title,
            font_size=84, font_family=fonts.heading, bold=True, color=WHITE,
            align="center", valign="middle", line_spacing=1.2, shadow=TEXT_SHADOW, tag="title",
        )
    )
    subtitle = _first(slide.content)
    if subtitle:
        commands.append(
            Rectangle(x=816, y=640, width=288, height=6, fill=WHITE, opacity=0.5, tag="section.divider")
        )
        commands.append(
            TextBlock(
                x=192, y=670, width=1536, height=96, text=subtitle,
                font_size=32, font_family=fonts.body, color=WHITE, opacity=0.8,
                align="center", valign="middle", tag="section.subtitle",
            )
        )
    return commands


# Quote ----------------------------------------------------------------------

QUOTE_TEXT_X = 230
QUOTE_IMAGE_WIDTH = 576


def layout_quote(slide: QuoteSlide, theme: Theme, compact: bool = False) -> List[DrawCommand]:
    """Quote glyph, centered quotation, attribution and optional image (30%)."""
    fonts = fonts_for(theme.font_style)
    image_x = CANVAS_WIDTH - MARGIN_X - QUOTE_IMAGE_WIDTH
    if slide.image_ref:
        text_w = image_x - PANEL_GAP - QUOTE_TEXT_X
    else:
        text_w = CANVAS_WIDTH - 2 * QUOTE_TEXT_X

    commands: List[DrawCommand] = [
        TextBlock(
            x=MARGIN_X, y=29, width=384, height=317, text="“",
            font_size=260, font_family=QUOTE_FONT, color=theme.accent1, opacity=0.25,
            tag="quote.glyph",
        ),
        TextBlock(
            x=QUOTE_TEXT_X, y=259, width=text_w, height=461,
            text=_first(slide.content) or slide.title,
            font_size=42 if slide.image_ref else 48, font_family=QUOTE_FONT, italic=True,
            color=theme.text_color, align="center", valign="middle", line_spacing=1.5,
            tag="quote.text",
        ),
    ]

    attribution = _first(slide.content, 1)
    if attribution:
        center = QUOTE_TEXT_X + text_w / 2
        commands.append(
            Rectangle(x=center - 144, y=742, width=288, height=6, fill=theme.accent1, tag="quote.divider")
        )
        commands.append(
            TextBlock(
                x=QUOTE_TEXT_X, y=770, width=text_w, height=72, text=attribution,
                font_size=26, font_family=fonts.body, bold=True, color=theme.accent2,
                align="center", valign="middle", tag="quote.attribution",
            )
        )

    if slide.image_ref:
        commands.extend(image_panel(slide.image_ref, image_x, 230, QUOTE_IMAGE_WIDTH, 504, theme))
    return commands


# Stats ----------------------------------------------------------------------

STATS_TOP = 259
STATS_IMAGE_WIDTH = 576
STATS_IMAGE_HEIGHT = 648
STATS_GRID_X = MARGIN_X + STATS_IMAGE_WIDTH + PANEL_GAP
STATS_GRID_GAP = 32
STATS_ROW_GAP = 58
STATS_ROW_HEIGHT = 619


def _stat_card(
    stat: StatItem, x: float, y: float, w: float, h: float, theme: Theme, fonts: FontPair
) -> List[DrawCommand]:
    return [
        RoundedRectangle(
            x=x, y=y, width=w, height=h,
            fill=theme.card_bg, opacity=0.8 if theme.is_dark else 0.9,
            stroke=theme.accent1, stroke_width=2, corner_radius=24,
            shadow=CARD_SHADOW, tag="stats.card",
        ),
        Rectangle(x=x, y=y, width=w, height=8, fill=theme.accent1, fill_end=theme.accent2, tag="stats.stripe"),
        TextBlock(
            x=x, y=y + h * 0.15, width=w, height=h * 0.4, text=stat.value,
            font_size=64, font_family=fonts.heading, bold=True, color=theme.accent1,
            align="center", valign="middle", tag="stats.value",
        ),
        TextBlock(
            x=x + 16, y=y + h * 0.6, width=w - 32, height=h * 0.3, text=stat.label,
            font_size=24, font_family=fonts.body, color=theme.text_color, opacity=0.65,
            align="center", valign="top", tag="stats.label",
        ),
    ]


def _row_card_width(count: int) -> float:
    if count <= 2:
        return 730
    if count == 3:
        return 518
    return 394


def layout_stats(slide: StatsSlide, theme: Theme, compact: bool = False) -> List[DrawCommand]:
    """Up to four metric cards: a 2x2 grid beside an image, or one centered row."""
    fonts = fonts_for(theme.font_style)
    commands = title_bar(slide.title, theme)

    context = _first(slide.content)
    if context:
        commands.append(
            TextBlock(
                x=MARGIN_X, y=165, width=CANVAS_WIDTH - 2 * MARGIN_X, height=70, text=context,
                font_size=24, font_family=fonts.body, color=theme.text_color, opacity=0.6,
                valign="middle", tag="stats.context",
            )
        )

    stats = slide.stats[:MAX_STATS]
    if slide.image_ref:
        commands.extend(
            image_panel(slide.image_ref, MARGIN_X, STATS_TOP, STATS_IMAGE_WIDTH, STATS_IMAGE_HEIGHT, theme)
        )
        grid_w = CANVAS_WIDTH - MARGIN_X - STATS_GRID_X
        col_w = (grid_w - STATS_GRID_GAP) / 2
        row_h = (STATS_IMAGE_HEIGHT - STATS_GRID_GAP) / 2
        for i, stat in enumerate(stats):
            col, row = i % 2, i // 2
            commands.extend(
                _stat_card(
                    stat,
                    STATS_GRID_X + col * (col_w + STATS_GRID_GAP),
                    STATS_TOP + row * (row_h + STATS_GRID_GAP),
                    col_w, row_h, theme, fonts,
                )
            )
        return commands

    count = len(stats)
    card_w = _row_card_width(count)
    total_w = count * card_w + max(count - 1, 0) * STATS_ROW_GAP
    start_x = (CANVAS_WIDTH - total_w) / 2
    for i, stat in enumerate(stats):
        commands.extend(
            _stat_card(stat, start_x + i * (card_w + STATS_ROW_GAP), STATS_TOP, card_w,
                       STATS_ROW_HEIGHT, theme, fonts)
        )
    return commands


# Comparison -----------------------------------------------------------------

COMPARISON_X = (77, 1018)
COMPARISON_CARD_WIDTH = 826
COMPARISON_HEADER_HEIGHT = 96
COMPARISON_POINT_PITCH = 120
VS_SIZE = 144


def _comparison_card(
    column: ComparisonColumn, x: float, accent: str, theme: Theme, fonts: FontPair, backdrop: bool
) -> List[DrawCommand]:
    y, w = CONTENT_TOP, COMPARISON_CARD_WIDTH
    if backdrop:
        card_opacity = 0.9
    else:
        card_opacity = 0.65 if theme.is_dark else 0.85
    commands: List[DrawCommand] = [
        RoundedRectangle(
            x=x, y=y, width=w, height=CONTENT_HEIGHT,
            fill=theme.card_bg, opacity=card_opacity, stroke=accent, stroke_width=2,
            corner_radius=20, tag="comparison.card",
        ),
        RoundedRectangle(
            x=x, y=y, width=w, height=COMPARISON_HEADER_HEIGHT,
            fill=accent, opacity=0.9, corner_radius=20, tag="comparison.header",
        ),
        TextBlock(
            x=x + 24, y=y, width=w - 48, height=COMPARISON_HEADER_HEIGHT, text=column.title,
            font_size=34, font_family=fonts.heading, bold=True, color=WHITE,
            align="center", valign="middle", tag="comparison.heading",
        ),
    ]
    top = y + COMPARISON_HEADER_HEIGHT + 32
    for i, point in enumerate(column.points[:MAX_POINTS]):
        py = top + i * COMPARISON_POINT_PITCH
        commands.append(
            Ellipse(x=x + 40, y=py + 14, width=12, height=12, fill=accent, tag="comparison.marker")
        )
        commands.append(
            TextBlock(
                x=x + 68, y=py, width=w - 108, height=COMPARISON_POINT_PITCH - 10, text=point,
                font_size=26, font_family=fonts.body, color=theme.text_color,
                line_spacing=1.3, tag="comparison.point",
            )
        )
    return commands


def layout_comparison(slide: ComparisonSlide, theme: Theme, compact: bool = False) -> List[DrawCommand]:
    """Two side-by-side cards with a VS badge on the divider between them."""
    fonts = fonts_for(theme.font_style)
    commands: List[DrawCommand] = []
    if slide.image_ref:
        commands.extend(image_backdrop(slide.image_ref))
    commands.extend(title_bar(slide.title, theme))

    columns = slide.columns[:MAX_COLUMNS]
    paired = len(columns) == MAX_COLUMNS
    if paired:
        commands.append(
            Rectangle(
                x=931, y=CONTENT_TOP, width=58, height=CONTENT_HEIGHT,
                fill=divider_color(theme, 15 if theme.is_dark else 10), opacity=0.4,
                tag="comparison.divider",
            )
        )
    accents = (theme.accent1, theme.accent2)
    for i, column in enumerate(columns):
        commands.extend(
            _comparison_card(column, COMPARISON_X[i], accents[i], theme, fonts, bool(slide.image_ref))
        )
    if paired:
        badge_x = CANVAS_WIDTH / 2 - VS_SIZE / 2
        badge_y = CONTENT_TOP + CONTENT_HEIGHT / 2 - VS_SIZE / 2
        commands.append(
            Ellipse(
                x=badge_x, y=badge_y, width=VS_SIZE, height=VS_SIZE,
                fill=theme.accent1, fill_end=theme.accent2, shadow=GLOW_SHADOW, tag="comparison.vs",
            )
        )
        commands.append(
            TextBlock(
                x=badge_x, y=badge_y, width=VS_SIZE, height=VS_SIZE, text="VS",
                font_size=32, font_family=fonts.heading, bold=True, color=WHITE,
                align="center", valign="middle", tag="comparison.vs_label",
            )
        )
    return commands


# Timeline -------------------------------------------------------------------

BASELINE_Y = 548
BASELINE_X = 154
BASELINE_WIDTH = 1612
TICK_SIZE = 58
STEM_HEIGHT = 110
YEAR_WIDTH = 211
YEAR_HEIGHT = 65
EVENT_WIDTH = 269
EVENT_HEIGHT = 86
TIMELINE_SPACING = 8


def _timeline_entry(
    entry: TimelineEntry, cx: float, above: bool, theme: Theme, fonts: FontPair, backdrop: bool
) -> List[DrawCommand]:
    accent = theme.accent1 if above else theme.accent2
    half_tick = TICK_SIZE / 2
    if above:
        stem_y = BASELINE_Y - half_tick - STEM_HEIGHT
        year_y = stem_y - TIMELINE_SPACING - YEAR_HEIGHT
        event_y = year_y - TIMELINE_SPACING - EVENT_HEIGHT
    else:
        stem_y = BASELINE_Y + half_tick
        year_y = stem_y + STEM_HEIGHT + TIMELINE_SPACING
        event_y = year_y + YEAR_HEIGHT + TIMELINE_SPACING
    return [
        Ellipse(
            x=cx - half_tick, y=BASELINE_Y - half_tick, width=TICK_SIZE, height=TICK_SIZE,
            fill=accent, stroke=WHITE if theme.is_dark else theme.bg, stroke_width=4,
            shadow=GLOW_SHADOW, tag="timeline.tick",
        ),
        Rectangle(x=cx - 2, y=stem_y, width=4, height=STEM_HEIGHT, fill=accent, opacity=0.4, tag="timeline.stem"),
        RoundedRectangle(
            x=cx - YEAR_WIDTH / 2, y=year_y, width=YEAR_WIDTH, height=YEAR_HEIGHT,
            fill=accent, corner_radius=12, tag="timeline.year_badge",
        ),
        TextBlock(
            x=cx - YEAR_WIDTH / 2, y=year_y, width=YEAR_WIDTH, height=YEAR_HEIGHT, text=entry.year,
            font_size=22, font_family=fonts.heading, bold=True, color=WHITE,
            align="center", valign="middle", tag="timeline.year",
        ),
        TextBlock(
            x=cx - EVENT_WIDTH / 2, y=event_y, width=EVENT_WIDTH, height=EVENT_HEIGHT, text=entry.event,
            font_size=18, font_family=fonts.body, color=WHITE if backdrop else theme.text_color,
            opacity=0.85, align="center", valign="bottom" if above else "top", tag="timeline.event",
        ),
    ]


def layout_timeline(slide: TimelineSlide, theme: Theme, compact: bool = False) -> List[DrawCommand]:
    """Baseline with up to six entries, alternating above (even) and below (odd)."""
    fonts = fonts_for(theme.font_style)
    commands: List[DrawCommand] = []
    if slide.image_ref:
        commands.extend(image_backdrop(slide.image_ref))
    commands.extend(title_bar(slide.title, theme))
    commands.append(
        Rectangle(
            x=BASELINE_X, y=BASELINE_Y - 3, width=BASELINE_WIDTH, height=6,
            fill=theme.accent1, fill_end=theme.accent2, tag="timeline.baseline",
        )
    )

    entries = slide.timeline[:MAX_TIMELINE_ENTRIES]
    if not entries:
        return commands
    slot = BASELINE_WIDTH / len(entries)
    for i, entry in enumerate(entries):
        cx = BASELINE_X + (i + 0.5) * slot
        commands.extend(_timeline_entry(entry, cx, i % 2 == 0, theme, fonts, bool(slide.image_ref)))
    return commands


# Diagram --------------------------------------------------------------------

DIAGRAM_REGION = (58, 173, 1805, 720)
DIAGRAM_PADDING = 48


def layout_diagram_slide(slide: DiagramSlide, theme: Theme, compact: bool = False) -> List[DrawCommand]:
    """Bordered canvas region with the flowchart fitted inside it."""
    fonts = fonts_for(theme.font_style)
    commands = title_bar(slide.title, theme)

    rx, ry, rw, rh = DIAGRAM_REGION
    commands.append(
        RoundedRectangle(
            x=rx, y=ry, width=rw, height=rh,
            fill=adjust(theme.bg, 8) if theme.is_dark else WHITE, opacity=0.85,
            stroke=divider_color(theme, 20 if theme.is_dark else 15), stroke_width=1,
            corner_radius=16, tag="diagram.canvas",
        )
    )

    diagram = slide.diagram
    if diagram is not None and diagram.nodes:
        local_w, local_h = diagram_canvas_size(len(diagram.nodes), compact)
        scale = fit_ratio(rw, rh, DIAGRAM_PADDING, local_w, local_h)
        commands.extend(
            place(
                layout_diagram(diagram.nodes, diagram.connections, compact, theme),
                rx + (rw - local_w * scale) / 2,
                ry + (rh - local_h * scale) / 2,
                scale,
            )
        )

    caption = _first(slide.content)
    if caption:
        commands.append(
            TextBlock(
                x=MARGIN_X, y=905, width=1536, height=50, text=caption,
                font_size=20, font_family=fonts.body, italic=True, color=theme.text_color,
                opacity=0.5, align="center", valign="middle", tag="diagram.caption",
            )
        )
    return commands


# Title ----------------------------------------------------------------------

def layout_title(title: str, theme: Theme) -> List[DrawCommand]:
    """Deck cover: gradient, orbs, deck title and the theme name."""
    fonts = fonts_for(theme.font_style)
    commands: List[DrawCommand] = [
        Rectangle(
            x=0, y=0, width=CANVAS_WIDTH, height=CANVAS_HEIGHT,
            fill=theme.accent1, fill_end=theme.accent2, tag="title.background",
        )
    ]
    commands.extend(_orbs(theme, blurred=False))
    commands.extend([
        TextBlock(
            x=154, y=216, width=1536, height=360, text=title,
            font_size=88, font_family=fonts.heading, bold=True, color=WHITE,
            valign="middle", line_spacing=1.2, shadow=TEXT_SHADOW, tag="title",
        ),
        Rectangle(x=154, y=605, width=672, height=9, fill=WHITE, opacity=0.5, tag="title.divider"),
        TextBlock(
            x=154, y=648, width=1536, height=60, text=f"{theme.name.upper()} THEME",
            font_size=28, font_family=fonts.body, color=WHITE, opacity=0.6,
            valign="middle", tag="title.caption",
        ),
    ])
    return commands
