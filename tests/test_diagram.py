"""Diagram grid layout and connector routing tests."""

import unittest

from slidecraft.layout.diagram import (
    COMPACT_PRESET,
    FULL_PRESET,
    diagram_canvas_size,
    grid_cell,
    layout_diagram,
    node_origins,
    route_connector,
)
from slidecraft.layout.primitives import tagged
from slidecraft.models.draw import Ellipse, Line, Polygon, RoundedRectangle
from slidecraft.models.slide import DiagramConnection, DiagramNode
from slidecraft.theme.resolver import DEFAULT_THEME


def _nodes(*ids, kind="process"):
    return [DiagramNode(id=node_id, label=node_id.upper(), type=kind) for node_id in ids]


def _connection(source, target, label=None):
    return DiagramConnection.model_validate({"from": source, "to": target, "label": label})


class TestGridPlacement(unittest.TestCase):
    def test_five_nodes_wrap_to_second_row(self) -> None:
        origins = node_origins(_nodes("a", "b", "c", "d", "e"))
        self.assertEqual(grid_cell(4, 4), (0, 1))
        self.assertEqual(origins[4], (FULL_PRESET.start_x, FULL_PRESET.start_y + FULL_PRESET.gap_y))
        self.assertEqual(origins[3], (FULL_PRESET.start_x + 3 * FULL_PRESET.gap_x, FULL_PRESET.start_y))

    def test_fewer_than_four_nodes_use_one_row(self) -> None:
        origins = node_origins(_nodes("a", "b", "c"))
        self.assertEqual({y for _, y in origins}, {FULL_PRESET.start_y})

    def test_canvas_size_grows_with_grid(self) -> None:
        self.assertEqual(diagram_canvas_size(5), (700, 240))
        self.assertEqual(diagram_canvas_size(2), (380, 140))
        self.assertEqual(diagram_canvas_size(5, compact=True), (340, 126))
        self.assertEqual(diagram_canvas_size(0), (60, 40))

    def test_compact_preset_is_smaller(self) -> None:
        full = node_origins(_nodes("a", "b"))
        compact = node_origins(_nodes("a", "b"), compact=True)
        self.assertEqual(compact[1], (COMPACT_PRESET.start_x + COMPACT_PRESET.gap_x, COMPACT_PRESET.start_y))
        self.assertLess(compact[1][0], full[1][0])


class TestConnectorRouting(unittest.TestCase):
    def test_horizontal_right_to_left_edge(self) -> None:
        self.assertEqual(route_connector((30, 20), (190, 20), FULL_PRESET), (170, 45, 190, 45, True))

    def test_horizontal_reversed(self) -> None:
        self.assertEqual(route_connector((190, 20), (30, 20), FULL_PRESET), (190, 45, 170, 45, True))

    def test_within_tolerance_is_horizontal(self) -> None:
        self.assertTrue(route_connector((30, 20), (190, 29), FULL_PRESET)[4])
        self.assertFalse(route_connector((30, 20), (190, 30), FULL_PRESET)[4])

    def test_vertical_bottom_to_top_edge(self) -> None:
        self.assertEqual(route_connector((30, 20), (30, 120), FULL_PRESET), (100, 70, 100, 120, False))

    def test_vertical_reversed(self) -> None:
        self.assertEqual(route_connector((30, 120), (30, 20), FULL_PRESET), (100, 120, 100, 70, False))


class TestLayoutDiagram(unittest.TestCase):
    def test_dangling_connector_dropped(self) -> None:
        commands = layout_diagram(_nodes("A", "B"), [_connection("A", "C")])
        self.assertEqual(len(tagged(commands, "diagram.connector")), 0)
        self.assertEqual(len(tagged(commands, "diagram.node")), 2)

    def test_self_loop_skipped(self) -> None:
        commands = layout_diagram(_nodes("A", "B"), [_connection("A", "A"), _connection("A", "B")])
        self.assertEqual(len(tagged(commands, "diagram.connector")), 1)

    def test_connectors_painted_before_nodes(self) -> None:
        commands = layout_diagram(_nodes("A", "B"), [_connection("A", "B")])
        tags = [command.tag for command in commands]
        self.assertLess(tags.index("diagram.connector"), tags.index("diagram.node"))

    def test_connector_style(self) -> None:
        commands = layout_diagram(_nodes("A", "B"), [_connection("A", "B")], theme=DEFAULT_THEME)
        line = tagged(commands, "diagram.connector")[0]
        self.assertIsInstance(line, Line)
        self.assertTrue(line.arrow_end)
        self.assertEqual(line.dash, FULL_PRESET.dash)
        self.assertEqual(line.stroke, DEFAULT_THEME.accent1)

    def test_connector_labels(self) -> None:
        commands = layout_diagram(
            _nodes("A", "B", "C", "D", "E"),
            [_connection("A", "B", "yes"), _connection("A", "E", "no"), _connection("B", "C")],
        )
        labels = tagged(commands, "diagram.connector_label")
        self.assertEqual([label.text for label in labels], ["yes", "no"])
        # Horizontal labels sit above the midpoint, vertical ones beside it.
        self.assertLess(labels[0].y + labels[0].height, 45)
        self.assertGreater(labels[1].x, 100)

    def test_node_shapes_and_fills(self) -> None:
        nodes = [
            DiagramNode(id="s", type="start"),
            DiagramNode(id="e", type="end"),
            DiagramNode(id="q", type="decision"),
            DiagramNode(id="d", type="data"),
            DiagramNode(id="p", type="process"),
            DiagramNode(id="x"),
        ]
        shapes = tagged(layout_diagram(nodes, [], theme=DEFAULT_THEME), "diagram.node")
        self.assertIsInstance(shapes[0], Ellipse)
        self.assertIsInstance(shapes[1], Ellipse)
        self.assertIsInstance(shapes[2], Polygon)
        self.assertEqual(len(shapes[2].points), 4)
        self.assertIsInstance(shapes[3], Polygon)
        self.assertIsInstance(shapes[4], RoundedRectangle)
        self.assertIsInstance(shapes[5], RoundedRectangle)
        self.assertEqual(
            [shape.fill for shape in shapes],
            ["10B981", "EF4444", "F59E0B", DEFAULT_THEME.accent2, DEFAULT_THEME.accent1, DEFAULT_THEME.accent1],
        )

    def test_node_labels(self) -> None:
        labels = tagged(layout_diagram(_nodes("a", "b"), []), "diagram.node_label")
        self.assertEqual([label.text for label in labels], ["A", "B"])

    def test_empty_diagram(self) -> None:
        self.assertEqual(layout_diagram([], [_connection("A", "B")]), [])

    def test_deterministic(self) -> None:
        nodes = _nodes("a", "b", "c", "d", "e")
        connections = [_connection("a", "b", "go"), _connection("b", "e")]
        self.assertEqual(layout_diagram(nodes, connections), layout_diagram(nodes, connections))


if __name__ == "__main__":
    unittest.main()
