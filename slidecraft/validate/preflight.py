"""Preflight linting for raw generator decks.

The layout engine absorbs malformed input silently. This pass records what
it will absorb so a strict run can refuse to render and a normal run can
still report what was dropped.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ..models.slide import SlideType
from ..models.validation import ValidationReport, ValidationViolation
from ..normalize.slides import STRUCTURED_FIELDS, normalize_slide_type
from ..theme.colors import is_hex_color
from ..theme.resolver import DEFAULT_THEME, resolve_theme

THEME_COLOR_KEYS = ("bg", "accent1", "accent2", "textColor", "text_color", "cardBg", "card_bg")

ITEM_LIMITS: Dict[SlideType, int] = {
    SlideType.STATS: 4,
    SlideType.COMPARISON: 2,
    SlideType.TIMELINE: 6,
}
MAX_COMPARISON_POINTS = 5


def _lint_theme(theme: Any) -> List[ValidationViolation]:
    violations: List[ValidationViolation] = []
    if resolve_theme(theme) is DEFAULT_THEME:
        violations.append(ValidationViolation(
            field_key="theme",
            violation_type="THEME_FALLBACK",
            severity="WARN",
            recommended_action="Supply bg and accent1 or accept the default theme",
        ))
        return violations

    for key in THEME_COLOR_KEYS:
        value = theme.get(key)
        if value in (None, ""):
            continue
        if not is_hex_color(value):
            violations.append(ValidationViolation(
                field_key=f"theme.{key}",
                violation_type="MALFORMED_COLOR",
                severity="BLOCKING",
                recommended_action=f"Use a 6-digit hex color for {key}, got {value!r}",
            ))
    return violations


def _violation(
    index: int,
    slide_type: Optional[str],
    field_key: str,
    violation_type: str,
    action: str,
) -> ValidationViolation:
    return ValidationViolation(
        slide_index=index,
        slide_type=slide_type,
        field_key=field_key,
        violation_type=violation_type,
        severity="WARN",
        recommended_action=action,
    )


def _lint_diagram(index: int, diagram: Any) -> List[ValidationViolation]:
    violations: List[ValidationViolation] = []
    nodes = diagram.get("nodes") if isinstance(diagram, Mapping) else None
    if not isinstance(nodes, list) or not nodes:
        violations.append(_violation(
            index, "diagram", "diagram.nodes", "MISSING_STRUCTURED_FIELD",
            "Add at least one node; the diagram region will be empty",
        ))
        return violations

    seen = set()
    for node in nodes:
        node_id = node.get("id") if isinstance(node, Mapping) else None
        if node_id is None:
            continue
        node_id = str(node_id)
        if node_id in seen:
            violations.append(_violation(
                index, "diagram", f"diagram.nodes.{node_id}", "DUPLICATE_NODE_ID",
                "Node ids must be unique; connectors attach to the last node with this id",
            ))
        seen.add(node_id)

    connections = diagram.get("connections")
    for position, connection in enumerate(connections if isinstance(connections, list) else []):
        if not isinstance(connection, Mapping):
            continue
        ends = (connection.get("from"), connection.get("to"))
        if any(end is None or str(end) not in seen for end in ends):
            violations.append(_violation(
                index, "diagram", f"diagram.connections.{position}", "DANGLING_CONNECTION",
                f"Connector {connection.get('from')!r} -> {connection.get('to')!r} "
                "references a missing node and will be omitted",
            ))
    return violations


def _lint_slide(index: int, raw: Any) -> List[ValidationViolation]:
    if not isinstance(raw, Mapping):
        return [_violation(
            index, None, "slide", "MISSING_STRUCTURED_FIELD",
            "Slide is not an object; it renders as an empty bullets slide",
        )]

    violations: List[ValidationViolation] = []
    type_key = "slideType" if "slideType" in raw else "slide_type"
    raw_type = raw.get(type_key)
    slide_type = normalize_slide_type(raw_type)
    if raw_type is not None and slide_type.value != str(raw_type).strip().lower():
        violations.append(_violation(
            index, slide_type.value, type_key, "UNKNOWN_SLIDE_TYPE",
            f"Unknown slide type {raw_type!r}; rendering as bullets",
        ))

    if slide_type == SlideType.DIAGRAM:
        violations.extend(_lint_diagram(index, raw.get("diagram")))
        return violations

    field = STRUCTURED_FIELDS.get(slide_type)
    if field is None:
        return violations
    items = raw.get(field)
    if not isinstance(items, list) or not items:
        violations.append(_violation(
            index, slide_type.value, field, "MISSING_STRUCTURED_FIELD",
            f"No {field} data; only the title bar and partial content render",
        ))
        return violations

    limit = ITEM_LIMITS[slide_type]
    if len(items) > limit:
        violations.append(_violation(
            index, slide_type.value, field, "EXCESS_ITEMS",
            f"{len(items)} {field} entries; only the first {limit} render",
        ))
    if slide_type == SlideType.COMPARISON:
        for position, column in enumerate(items[:limit]):
            points = column.get("points") if isinstance(column, Mapping) else None
            if isinstance(points, list) and len(points) > MAX_COMPARISON_POINTS:
                violations.append(_violation(
                    index, slide_type.value, f"columns.{position}.points", "EXCESS_ITEMS",
                    f"{len(points)} points; only the first {MAX_COMPARISON_POINTS} render",
                ))
    return violations


def lint_deck(raw_deck: Any) -> ValidationReport:
    """Report every data-shape problem the layout engine will absorb.

    Only malformed theme colors are BLOCKING; everything else is a warning
    describing how the slide will degrade.
    """
    report = ValidationReport()
    if not isinstance(raw_deck, Mapping):
        raw_deck = {}
    report.violations.extend(_lint_theme(raw_deck.get("theme")))
    slides = raw_deck.get("slides")
    for index, raw in enumerate(slides if isinstance(slides, list) else []):
        report.violations.extend(_lint_slide(index, raw))
    return report
