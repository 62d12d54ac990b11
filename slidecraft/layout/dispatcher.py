"""Archetype dispatch: one slide in, one draw-command list out."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Union

from ..models.draw import DeckLayout, DrawCommand, SlideLayout
from ..models.slide import Deck, SlideModel, SlideType
from ..models.theme import Theme
from ..normalize.slides import parse_slide
from .archetypes import (
    layout_bullets,
    layout_comparison,
    layout_diagram_slide,
    layout_quote,
    layout_section,
    layout_stats,
    layout_timeline,
    layout_title,
)
from .decorations import decorations
from .primitives import background, footer, slide_number_badge

TITLE_SLIDE_TYPE = "title"

LayoutFunction = Callable[[Any, Theme, bool], List[DrawCommand]]


@dataclass(frozen=True)
class Archetype:
    layout: LayoutFunction
    chrome: bool = True
    image_backdrop: bool = False


ARCHETYPES: Dict[SlideType, Archetype] = {
    SlideType.BULLETS: Archetype(layout_bullets),
    SlideType.SECTION: Archetype(layout_section, chrome=False),
    SlideType.QUOTE: Archetype(layout_quote),
    SlideType.STATS: Archetype(layout_stats),
    SlideType.COMPARISON: Archetype(layout_comparison, image_backdrop=True),
    SlideType.TIMELINE: Archetype(layout_timeline, image_backdrop=True),
    SlideType.DIAGRAM: Archetype(layout_diagram_slide),
}


def layout_slide(
    slide: Union[SlideModel, Mapping[str, Any]],
    theme: Theme,
    index: int,
    compact: bool = False,
) -> List[DrawCommand]:
    """Render one slide into draw commands on the 1920x1080 canvas.

    ``slide`` may be a raw mapping straight from the generator; it is
    normalized first, so unknown slide types land on the bullets archetype.
    """
    if isinstance(slide, Mapping):
        slide = parse_slide(slide)
    archetype = ARCHETYPES[SlideType(slide.slide_type)]

    commands: List[DrawCommand] = [background(theme)]
    if archetype.chrome and not (archetype.image_backdrop and slide.image_ref):
        commands.extend(decorations(theme, index))
    commands.extend(archetype.layout(slide, theme, compact))
    if archetype.chrome:
        commands.extend(footer(theme))
        commands.extend(slide_number_badge(theme, index))
    return commands


def layout_title_slide(title: str, theme: Theme) -> List[DrawCommand]:
    """Deck cover slide; no badge and no footer."""
    return [background(theme)] + layout_title(title, theme)


def layout_deck(deck: Deck, compact: bool = False) -> DeckLayout:
    """Lay out the cover followed by every slide of ``deck``."""
    slides = [
        SlideLayout(
            index=None,
            slide_type=TITLE_SLIDE_TYPE,
            commands=layout_title_slide(deck.title, deck.theme),
        )
    ]
    for index, slide in enumerate(deck.slides):
        slides.append(
            SlideLayout(
                index=index,
                slide_type=slide.slide_type,
                commands=layout_slide(slide, deck.theme, index, compact),
            )
        )
    return DeckLayout(title=deck.title, theme=deck.theme, slides=slides)
