"""Tests for compiling screenplays to Fountain."""

from scenewright.export import compile_fountain
from scenewright.export.fountain import compile_scene, scene_skeleton
from scenewright.models import SceneHeadingType, Screenplay, TimeOfDay
from scenewright.parser import SceneHeading, parse_fountain

HEADER = "Title: Heist\nCredit: Written by\nAuthor: Author\n\n"


class TestCompileScene:
    """Test rendering of a single scene block."""

    def test_authored_text_with_heading_is_kept(self, make_scene):
        """Test that authored text opening with the heading prefix is trusted."""
        scene = make_scene(
            1, formatted_text="\n\nINT. VAULT - NIGHT\n\nRosa listens.\n\n"
        )
        assert compile_scene(scene) == "INT. VAULT - NIGHT\n\nRosa listens."

    def test_authored_text_without_heading_gets_slugline(self, make_scene):
        """Test that a computed slugline is prepended to bare text."""
        scene = make_scene(1, formatted_text="Rosa listens.")
        assert compile_scene(scene) == "INT. WAREHOUSE - NIGHT\n\nRosa listens."

    def test_heading_prefix_must_match_scene(self, make_scene):
        """Test that text opening with a different prefix is not trusted."""
        scene = make_scene(
            1,
            heading=SceneHeadingType.EXT,
            formatted_text="INT. VAULT - NIGHT\n\nRosa listens.",
        )
        assert compile_scene(scene).startswith(
            "EXT. WAREHOUSE - NIGHT\n\nINT. VAULT - NIGHT"
        )

    def test_skeleton_from_metadata(self, make_scene):
        """Test the outline used when nothing is authored yet."""
        scene = make_scene(
            1,
            synopsis="Rosa cracks the safe.",
            goal="Open it",
            conflict="Alarm",
            outcome=None,
        )
        assert compile_scene(scene) == (
            "INT. WAREHOUSE - NIGHT\n\n"
            "Rosa cracks the safe.\n> GOAL: Open it\n> CONFLICT: Alarm"
        )

    def test_bare_scene_is_just_a_slugline(self, make_scene):
        """Test a scene without any text or outline."""
        scene = make_scene(
            1, heading=None, location=None, time_of_day=None, synopsis=None
        )
        assert scene_skeleton(scene) == ""
        assert compile_scene(scene) == "INT. LOCATION - DAY"


class TestCompileFountain:
    """Test whole-document compilation."""

    def test_empty_screenplay_has_title_page_only(self):
        """Test a screenplay without scenes."""
        screenplay = Screenplay(id=1, title="Heist")
        assert compile_fountain(screenplay) == HEADER

    def test_default_title(self):
        """Test the placeholder title for untitled screenplays."""
        screenplay = Screenplay(id=1, title="")
        assert compile_fountain(screenplay).startswith("Title: Untitled Screenplay\n")

    def test_scenes_in_order(self, make_scene):
        """Test that scene blocks follow ``order``, not list position."""
        screenplay = Screenplay(
            id=1,
            title="Heist",
            scenes=[
                make_scene(1, 2, location="vault"),
                make_scene(2, 1, location="street", heading=SceneHeadingType.EXT),
            ],
        )

        document = compile_fountain(screenplay)

        assert document.startswith(HEADER + "EXT. STREET - NIGHT")
        assert document.index("EXT. STREET") < document.index("INT. VAULT")
        assert document.endswith("\n")
        assert "\n\n\n" not in document

    def test_explicit_scene_subset(self, make_scene):
        """Test compiling a caller-supplied scene list."""
        screenplay = Screenplay(
            id=1, title="Heist", scenes=[make_scene(1, location="vault")]
        )
        other = make_scene(9, location="dock", time_of_day=TimeOfDay.DAWN)

        document = compile_fountain(screenplay, scenes=[other])

        assert "INT. DOCK - DAWN" in document
        assert "VAULT" not in document

    def test_compiled_document_parses(self, complete_screenplay):
        """Test that the compiled document yields one heading per scene."""
        paragraphs = parse_fountain(compile_fountain(complete_screenplay))

        headings = [p for p in paragraphs if isinstance(p, SceneHeading)]
        assert len(headings) == len(complete_screenplay.scenes)
