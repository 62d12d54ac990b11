"""Raw slide JSON to SlideModel normalization.

The generator's JSON is unpredictable: slide types drift, structured fields
show up on the wrong slides, lists arrive as strings. Everything here is
tolerant. A slide that cannot be coerced into its variant degrades to a
bullets slide carrying whatever title and content it had; nothing raises.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import ValidationError

from ..models.slide import SLIDE_ADAPTER, SLIDE_VARIANTS, BulletsSlide, Deck, SlideModel, SlideType
from ..theme.resolver import resolve_theme

STRUCTURED_FIELDS: Dict[SlideType, str] = {
    SlideType.STATS: "stats",
    SlideType.COMPARISON: "columns",
    SlideType.TIMELINE: "timeline",
    SlideType.DIAGRAM: "diagram",
}

# Inlined image data wins over a plain reference, which wins over a URL.
IMAGE_KEYS = ("imageData", "imageRef", "image_ref", "imageUrl")


def normalize_slide_type(value: Any) -> SlideType:
    """Map a raw ``slideType`` onto :class:`SlideType`; unknown means bullets."""
    if isinstance(value, SlideType):
        return value
    if isinstance(value, str):
        return SlideType(value.strip().lower())
    return SlideType.BULLETS


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _text_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, Iterable) and not isinstance(value, Mapping):
        return [_text(item) for item in value if item is not None]
    return [_text(value)]


def _mappings(value: Any) -> List[Mapping[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def _image_ref(raw: Mapping[str, Any]) -> Optional[str]:
    for key in IMAGE_KEYS:
        value = raw.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


def _stats(value: Any) -> List[Dict[str, str]]:
    return [
        {"value": _text(item.get("value")), "label": _text(item.get("label"))}
        for item in _mappings(value)
    ]


def _columns(value: Any) -> List[Dict[str, Any]]:
    return [
        {"title": _text(item.get("title")), "points": _text_list(item.get("points"))}
        for item in _mappings(value)
    ]


def _timeline(value: Any) -> List[Dict[str, str]]:
    return [
        {"year": _text(item.get("year")), "event": _text(item.get("event"))}
        for item in _mappings(value)
    ]


def _diagram(value: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(value, Mapping):
        return None
    nodes = [
        {
            "id": _text(item.get("id")),
            "label": _text(item.get("label")),
            "type": item.get("type") if isinstance(item.get("type"), str) else None,
        }
        for item in _mappings(value.get("nodes"))
        if item.get("id") is not None
    ]
    connections = []
    for item in _mappings(value.get("connections")):
        if item.get("from") is None or item.get("to") is None:
            continue
        label = item.get("label")
        connections.append({
            "from": _text(item.get("from")),
            "to": _text(item.get("to")),
            "label": _text(label) if label else None,
        })
    return {"nodes": nodes, "connections": connections}


COERCERS = {
    "stats": _stats,
    "columns": _columns,
    "timeline": _timeline,
    "diagram": _diagram,
}


def coerce_slide(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """Build the aliased payload for one slide variant from raw JSON.

    Structured fields belonging to other slide types are dropped.
    """
    slide_type = normalize_slide_type(raw.get("slideType", raw.get("slide_type")))
    payload: Dict[str, Any] = {
        "slideType": slide_type.value,
        "title": _text(raw.get("title")),
        "content": _text_list(raw.get("content")),
        "imageRef": _image_ref(raw),
    }
    field = STRUCTURED_FIELDS.get(slide_type)
    if field is not None:
        payload[field] = COERCERS[field](raw.get(field))
    return payload


def parse_slide(raw: Any) -> SlideModel:
    """Normalize one raw slide; never raises."""
    if isinstance(raw, SLIDE_VARIANTS):
        return raw
    if not isinstance(raw, Mapping):
        return BulletsSlide()
    payload = coerce_slide(raw)
    try:
        return SLIDE_ADAPTER.validate_python(payload)
    except ValidationError:
        return BulletsSlide(
            title=payload["title"], content=payload["content"], image_ref=payload["imageRef"]
        )


def parse_slides(raw_slides: Any) -> List[SlideModel]:
    if not isinstance(raw_slides, list):
        return []
    return [parse_slide(raw) for raw in raw_slides]


def parse_deck(raw: Any) -> Deck:
    """Normalize a full generator response ``{title, mode, theme, slides}``."""
    if not isinstance(raw, Mapping):
        raw = {}
    mode = raw.get("mode")
    return Deck(
        title=_text(raw.get("title")),
        mode=mode if isinstance(mode, str) else None,
        theme=resolve_theme(raw.get("theme")),
        slides=parse_slides(raw.get("slides")),
    )
