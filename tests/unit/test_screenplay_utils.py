"""Tests for screenplay utility functions."""

import pytest

from scenewright.models import SceneHeadingType, TimeOfDay
from scenewright.utils import ScreenplayUtils


class TestMakeSlugline:
    """Test slugline formatting."""

    def test_full_metadata(self):
        """Test a slugline built from every part."""
        slugline = ScreenplayUtils.make_slugline(
            SceneHeadingType.EXT, "rooftop", TimeOfDay.DUSK
        )
        assert slugline == "EXT. ROOFTOP - DUSK"

    def test_defaults(self):
        """Test that missing parts fall back to INT, LOCATION and DAY."""
        assert ScreenplayUtils.make_slugline() == "INT. LOCATION - DAY"

    def test_blank_location_uses_default(self):
        """Test that a whitespace location counts as missing."""
        assert ScreenplayUtils.make_slugline("INT", "   ", "NIGHT") == (
            "INT. LOCATION - NIGHT"
        )

    def test_int_ext_heading(self):
        """Test the combined interior/exterior prefix."""
        slugline = ScreenplayUtils.make_slugline(
            SceneHeadingType.INT_EXT, "car", TimeOfDay.DAY
        )
        assert slugline == "INT/EXT. CAR - DAY"

    def test_plain_strings_are_uppercased(self):
        """Test that string parts are normalized to upper case."""
        assert ScreenplayUtils.make_slugline("ext", "Main Street", "dawn") == (
            "EXT. MAIN STREET - DAWN"
        )


class TestSceneText:
    """Test helpers that derive text from scenes."""

    def test_scene_slugline(self, make_scene):
        """Test the slugline computed from scene metadata."""
        scene = make_scene(1, location="vault")
        assert ScreenplayUtils.scene_slugline(scene) == "INT. VAULT - NIGHT"

    def test_source_text_prefers_authored_text(self, make_scene):
        """Test that authored Fountain text is used when present."""
        scene = make_scene(1, formatted_text="EXT. ROOF - DAY\n\nWind.")
        assert ScreenplayUtils.scene_source_text(scene) == "EXT. ROOF - DAY\n\nWind."

    def test_source_text_falls_back_to_skeleton(self, make_scene):
        """Test that blank authored text yields slugline plus synopsis."""
        scene = make_scene(1, formatted_text="  \n ", synopsis="Rosa waits.")
        assert ScreenplayUtils.scene_source_text(scene) == (
            "INT. WAREHOUSE - NIGHT\n\nRosa waits."
        )

    def test_sorted_scenes_is_stable(self, make_scene):
        """Test ordering by ``order`` keeping ties in input order."""
        scenes = [make_scene(1, 3), make_scene(2, 1), make_scene(3, 3)]
        ordered = ScreenplayUtils.sorted_scenes(scenes)
        assert [scene.id for scene in ordered] == [2, 1, 3]


class TestCounting:
    """Test word and length measures used by the guards."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            (None, 0),
            ("", 0),
            ("   ", 0),
            ("one", 1),
            ("one two\nthree\tfour", 4),
            ("  padded   words  ", 2),
        ],
    )
    def test_word_count(self, text, expected):
        """Test whitespace-separated word counting."""
        assert ScreenplayUtils.word_count(text) == expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [(None, 0), ("", 0), ("  abc  ", 3), ("a b", 3)],
    )
    def test_trimmed_length(self, text, expected):
        """Test length measured without surrounding whitespace."""
        assert ScreenplayUtils.trimmed_length(text) == expected
