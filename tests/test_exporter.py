"""PPTX exporter tests."""

import json
import tempfile
import unittest
from pathlib import Path

from pptx import Presentation
from pptx.enum.shapes import MSO_SHAPE_TYPE
from pptx.oxml.ns import qn
from pptx.util import Pt

from slidecraft.layout.dispatcher import layout_deck
from slidecraft.models.draw import DeckLayout, ImageRef, Line, SlideLayout
from slidecraft.normalize.slides import parse_deck
from slidecraft.render.pptx_exporter import MIN_FONT_POINTS, SLIDE_HEIGHT, SLIDE_WIDTH, PptxExporter
from slidecraft.theme.resolver import DEFAULT_THEME

SAMPLE_DECK = Path(__file__).resolve().parents[1] / "inputs" / "sample_deck.json"


def _alt_text(shape):
    for container in ("p:nvSpPr", "p:nvPicPr", "p:nvCxnSpPr"):
        nv_pr = shape.element.find(qn(container))
        if nv_pr is not None:
            return nv_pr.find(qn("p:cNvPr")).get("descr")
    return None


class TestPptxExporter(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        with open(SAMPLE_DECK, "r", encoding="utf-8") as f:
            cls.deck_layout = layout_deck(parse_deck(json.load(f)))
        cls.temp_dir = tempfile.TemporaryDirectory()
        cls.output_path = Path(cls.temp_dir.name) / "out" / "deck.pptx"
        cls.render_map = PptxExporter(image_root=SAMPLE_DECK.parent).export(cls.deck_layout, cls.output_path)
        cls.prs = Presentation(str(cls.output_path))

    @classmethod
    def tearDownClass(cls) -> None:
        cls.temp_dir.cleanup()

    def test_slide_size(self) -> None:
        self.assertEqual((self.prs.slide_width, self.prs.slide_height), (SLIDE_WIDTH, SLIDE_HEIGHT))

    def test_one_slide_per_layout(self) -> None:
        self.assertEqual(len(self.prs.slides), len(self.deck_layout.slides))

    def test_one_shape_per_command(self) -> None:
        for slide, layout in zip(self.prs.slides, self.deck_layout.slides):
            with self.subTest(slide_type=layout.slide_type, index=layout.index):
                self.assertEqual(len(slide.shapes), len(layout.commands))

    def test_shape_names_and_alt_text_follow_tags(self) -> None:
        for slide, layout in zip(self.prs.slides, self.deck_layout.slides):
            for shape, command in zip(slide.shapes, layout.commands):
                expected = command.tag or command.kind
                self.assertEqual(shape.name, expected)
                self.assertEqual(_alt_text(shape), expected)

    def test_background_spans_slide(self) -> None:
        background = self.prs.slides[1].shapes[0]
        self.assertEqual((background.left, background.top), (0, 0))
        self.assertEqual((background.width, background.height), (SLIDE_WIDTH, SLIDE_HEIGHT))

    def test_title_text(self) -> None:
        titles = [shape for shape in self.prs.slides[0].shapes if shape.name == "title"]
        self.assertEqual(titles[0].text_frame.text, self.deck_layout.title)

    def test_connectors_exported(self) -> None:
        diagram_index = [s.slide_type for s in self.deck_layout.slides].index("diagram")
        lines = [c for c in self.deck_layout.slides[diagram_index].commands if isinstance(c, Line)]
        connectors = [
            shape for shape in self.prs.slides[diagram_index].shapes
            if shape.shape_type == MSO_SHAPE_TYPE.LINE
        ]
        self.assertGreater(len(lines), 0)
        self.assertEqual(len(connectors), len(lines))
        tail = connectors[0].element.find(qn("p:spPr")).find(qn("a:ln")).find(qn("a:tailEnd"))
        self.assertEqual(tail.get("type"), "triangle")

    def test_data_uri_embedded_and_url_placeholder(self) -> None:
        pictures = []
        placeholders = []
        for slide in self.prs.slides:
            for shape in slide.shapes:
                if shape.name in ("image", "image.backdrop"):
                    if shape.shape_type == MSO_SHAPE_TYPE.PICTURE:
                        pictures.append(shape)
                    else:
                        placeholders.append(shape)
        self.assertEqual(len(pictures), 1)
        self.assertEqual(len(placeholders), 1)
        self.assertEqual(placeholders[0].name, "image.backdrop")

    def test_render_map(self) -> None:
        entries = self.render_map.entries
        self.assertEqual(len(entries), len(self.deck_layout.slides))
        self.assertEqual(entries["title"].pptx_index, 0)
        self.assertEqual(entries["slide_0"].slide_type, "section")
        self.assertEqual(entries["slide_0"].pptx_index, 1)
        self.assertIn("stats.card", entries["slide_4"].tags)
        self.assertEqual(entries["slide_4"].command_count, len(self.deck_layout.slides[5].commands))


class TestPptxExporterImages(unittest.TestCase):
    def test_missing_local_file_becomes_placeholder(self) -> None:
        deck_layout = layout_deck(parse_deck({
            "title": "T",
            "slides": [{"slideType": "bullets", "title": "B", "imageRef": "missing/photo.png"}],
        }))
        with tempfile.TemporaryDirectory() as temp_dir:
            output_path = Path(temp_dir) / "deck.pptx"
            PptxExporter(image_root=Path(temp_dir)).export(deck_layout, output_path)
            prs = Presentation(str(output_path))
        image = [shape for shape in prs.slides[1].shapes if shape.name == "image"][0]
        self.assertNotEqual(image.shape_type, MSO_SHAPE_TYPE.PICTURE)


PIXEL_PNG = (
    "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


def _export(deck_layout, temp_dir):
    output_path = Path(temp_dir) / "deck.pptx"
    PptxExporter().export(deck_layout, output_path)
    return Presentation(str(output_path))


class TestPptxExporterEffects(unittest.TestCase):
    def test_title_text_keeps_shadow(self) -> None:
        deck_layout = layout_deck(parse_deck({"title": "Shadowed", "slides": []}))
        with tempfile.TemporaryDirectory() as temp_dir:
            prs = _export(deck_layout, temp_dir)
        title = [shape for shape in prs.slides[0].shapes if shape.name == "title"][0]
        effect_lst = title.element.find(qn("p:spPr")).find(qn("a:effectLst"))
        self.assertIsNotNone(effect_lst.find(qn("a:outerShdw")))

    def test_image_opacity_applied(self) -> None:
        commands = [
            ImageRef(x=0, y=0, width=100, height=100, ref=PIXEL_PNG, opacity=0.5, tag="picture"),
            ImageRef(x=0, y=0, width=100, height=100, ref="https://example.com/a.png", opacity=0.5, tag="remote"),
        ]
        deck_layout = DeckLayout(
            theme=DEFAULT_THEME, slides=[SlideLayout(index=0, slide_type="bullets", commands=commands)]
        )
        with tempfile.TemporaryDirectory() as temp_dir:
            prs = _export(deck_layout, temp_dir)
        picture, remote = prs.slides[0].shapes
        self.assertEqual(picture.shape_type, MSO_SHAPE_TYPE.PICTURE)
        blip = picture.element.find(qn("p:blipFill")).find(qn("a:blip"))
        self.assertEqual(blip.find(qn("a:alphaModFix")).get("amt"), "50000")
        color = remote.element.find(qn("p:spPr")).find(qn("a:solidFill")).find(qn("a:srgbClr"))
        self.assertEqual(color.find(qn("a:alpha")).get("val"), "50000")

    def test_crowded_slides_still_export(self) -> None:
        deck = parse_deck({
            "title": "Crowded",
            "slides": [
                {"slideType": "bullets", "title": "Many", "content": [f"p{i}" for i in range(300)]},
                {
                    "slideType": "diagram",
                    "title": "Huge",
                    "diagram": {"nodes": [{"id": str(i), "label": str(i)} for i in range(400)]},
                },
            ],
        })
        deck_layout = layout_deck(deck)
        with tempfile.TemporaryDirectory() as temp_dir:
            prs = _export(deck_layout, temp_dir)
        self.assertEqual(len(prs.slides), 3)
        sizes = [
            run.font.size
            for slide in prs.slides
            for shape in slide.shapes
            if shape.has_text_frame
            for paragraph in shape.text_frame.paragraphs
            for run in paragraph.runs
        ]
        self.assertTrue(all(size >= Pt(MIN_FONT_POINTS) for size in sizes))


if __name__ == "__main__":
    unittest.main()
