"""Tests for the Final Draft XML renderer."""

import re
from xml.etree import ElementTree

import pytest

from scenewright.exceptions import UnsupportedLayoutError
from scenewright.export import FdxRenderer, build_fdx
from scenewright.export.fdx import DUAL_DIALOGUE_DIVIDER, DUAL_DIALOGUE_MARKER
from scenewright.models import Screenplay
from scenewright.parser import (
    Action,
    Character,
    Dialogue,
    SceneHeading,
    parse_fountain,
)

DUAL_SCENE = (
    "INT. GARAGE - DAY\n\n"
    "BRICK\nScrew retirement.\n\n"
    "STEEL ^\nScrew retirement."
)


def paragraphs(document: str) -> list[tuple[str, str]]:
    """(type, text) pairs of the script body."""
    root = ElementTree.fromstring(document)
    return [
        (p.get("Type"), p.findtext("Text"))
        for p in root.find("Content").findall("Paragraph")
    ]


class TestBuildFdx:
    """Test full document rendering."""

    def test_document_structure(self, make_scene):
        """Test the XML envelope and title page."""
        screenplay = Screenplay(id=1, title="Heist", scenes=[make_scene(1)])

        root = ElementTree.fromstring(build_fdx(screenplay))

        assert root.tag == "FinalDraft"
        assert root.get("DocumentType") == "Script"
        title_page = [
            (p.get("Type"), p.findtext("Text"))
            for p in root.find("TitlePage/Content").findall("Paragraph")
        ]
        assert title_page == [
            ("Title", "Heist"),
            ("Credit", "Written by"),
            ("Author", "Author"),
        ]

    def test_scene_numbers_follow_order(self, make_scene):
        """Test that scenes are numbered by position after sorting."""
        screenplay = Screenplay(
            id=1,
            title="Heist",
            scenes=[
                make_scene(1, 3, location="c"),
                make_scene(2, 1, location="a"),
                make_scene(3, 2, location="b"),
            ],
        )

        headings = [
            text
            for kind, text in paragraphs(build_fdx(screenplay))
            if kind == "Scene Heading"
        ]

        assert headings == [
            "INT. A - NIGHT [#1]",
            "INT. B - NIGHT [#2]",
            "INT. C - NIGHT [#3]",
        ]

    def test_authored_scene_paragraphs(self, make_scene):
        """Test the paragraph types of an authored scene."""
        scene = make_scene(
            1,
            formatted_text=(
                "EXT. DOCK - DAWN\n\nGulls.\n\nROSA\n(quiet)\nNow.\n\nCUT TO:"
            ),
        )
        screenplay = Screenplay(id=1, title="Heist", scenes=[scene])

        assert paragraphs(build_fdx(screenplay)) == [
            ("Scene Heading", "EXT. DOCK - DAWN [#1]"),
            ("Action", "Gulls."),
            ("Character", "ROSA"),
            ("Parenthetical", "(quiet)"),
            ("Dialogue", "Now."),
            ("Transition", "CUT TO:"),
        ]

    def test_only_first_heading_is_numbered(self, make_scene):
        """Test that later headings in a scene carry no number."""
        scene = make_scene(
            1, formatted_text="INT. A - DAY\n\nOne.\n\nINT. B - DAY\n\nTwo."
        )
        screenplay = Screenplay(id=1, title="Heist", scenes=[scene])

        headings = [
            text
            for kind, text in paragraphs(build_fdx(screenplay))
            if kind == "Scene Heading"
        ]

        assert headings == ["INT. A - DAY [#1]", "INT. B - DAY"]

    def test_missing_heading_is_synthesized(self, make_scene):
        """Test that text without a heading gets the scene's slugline."""
        scene = make_scene(1, formatted_text="Rosa waits.")
        screenplay = Screenplay(id=1, title="Heist", scenes=[scene])

        assert paragraphs(build_fdx(screenplay)) == [
            ("Scene Heading", "INT. WAREHOUSE - NIGHT [#1]"),
            ("Action", "Rosa waits."),
        ]

    def test_special_characters_are_escaped(self, make_scene):
        """Test that markup characters survive as text."""
        scene = make_scene(1, formatted_text="INT. A & B - DAY\n\n<Rosa> waits.")
        screenplay = Screenplay(id=1, title="Cats & <Dogs>", scenes=[scene])

        document = build_fdx(screenplay)

        assert "Cats &amp; &lt;Dogs&gt;" in document
        assert ("Action", "<Rosa> waits.") in paragraphs(document)

    def test_control_characters_are_dropped(self, make_scene):
        """Test that text with control characters still yields valid XML."""
        scene = make_scene(1, formatted_text="INT. A - DAY\n\nRosa\x01waits.")
        screenplay = Screenplay(id=1, title="Heist\x0b", scenes=[scene])

        document = build_fdx(screenplay)

        root = ElementTree.fromstring(document)
        assert root.findtext("TitlePage/Content/Paragraph/Text") == "Heist"
        assert ("Action", "Rosawaits.") in paragraphs(document)

    def test_rendered_heading_parses_as_heading(self, complete_screenplay):
        """Test that a numbered heading from the output is still a heading."""
        heading = next(
            text
            for kind, text in paragraphs(build_fdx(complete_screenplay))
            if kind == "Scene Heading"
        )

        assert isinstance(parse_fountain(heading)[0], SceneHeading)

    def test_rendering_is_idempotent(self, complete_screenplay):
        """Test that rendering twice gives identical output."""
        assert build_fdx(complete_screenplay) == build_fdx(complete_screenplay)

    def test_untitled_screenplay(self):
        """Test the placeholder title and an empty body."""
        document = build_fdx(Screenplay(id=1, title=""))

        assert "<Text>Untitled Screenplay</Text>" in document
        assert paragraphs(document) == []


class TestDualDialogue:
    """Test the dual dialogue fallback."""

    def test_flattened_by_default(self, make_scene):
        """Test marker, left speaker, divider, right speaker."""
        screenplay = Screenplay(
            id=1, title="Heist", scenes=[make_scene(1, formatted_text=DUAL_SCENE)]
        )

        assert paragraphs(build_fdx(screenplay))[1:] == [
            ("Action", DUAL_DIALOGUE_MARKER),
            ("Character", "BRICK"),
            ("Dialogue", "Screw retirement."),
            ("Action", DUAL_DIALOGUE_DIVIDER),
            ("Character", "STEEL"),
            ("Dialogue", "Screw retirement."),
        ]

    def test_strict_mode_raises(self, make_scene):
        """Test that strict mode refuses to flatten."""
        screenplay = Screenplay(
            id=1, title="Heist", scenes=[make_scene(1, formatted_text=DUAL_SCENE)]
        )

        with pytest.raises(UnsupportedLayoutError) as exc_info:
            build_fdx(screenplay, strict_dual_dialogue=True)

        assert exc_info.value.details == {"left": 2, "right": 2}


class TestRenderParagraph:
    """Test single paragraph rendering."""

    @pytest.fixture
    def renderer(self):
        return FdxRenderer()

    def test_character(self, renderer):
        """Test a character cue element."""
        assert renderer.render_paragraph(Character("ROSA")) == [
            '<Paragraph Type="Character"><Text>ROSA</Text></Paragraph>'
        ]

    def test_multiline_dialogue_stays_one_element(self, renderer):
        """Test that line breaks stay inside one Dialogue element."""
        rendered = renderer.render_paragraph(Dialogue("One.\nTwo."))
        assert len(rendered) == 1
        assert "One.\nTwo." in rendered[0]

    def test_suffix_only_applies_to_headings(self, renderer):
        """Test that the number suffix is ignored for other kinds."""
        rendered = renderer.render_paragraph(Action("Gulls."), suffix=" [#1]")
        assert not re.search(r"\[#1\]", rendered[0])
