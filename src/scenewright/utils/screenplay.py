"""Screenplay-specific utility functions."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from scenewright.models import Scene


def _text(value: str | Enum | None) -> str | None:
    if isinstance(value, Enum):
        return str(value.value)
    return value


class ScreenplayUtils:
    """Utility functions shared by the compilers and the workflow guards."""

    DEFAULT_HEADING = "INT"
    DEFAULT_LOCATION = "LOCATION"
    DEFAULT_TIME = "DAY"

    @staticmethod
    def make_slugline(
        heading: str | Enum | None = None,
        location: str | None = None,
        time_of_day: str | Enum | None = None,
    ) -> str:
        """Build a normalized scene heading.

        Args:
            heading: INT, EXT or INT/EXT (defaults to INT)
            location: Location name (blank defaults to LOCATION)
            time_of_day: DAY, NIGHT, DAWN or DUSK (defaults to DAY)

        Returns:
            Slugline such as ``"INT. KITCHEN - NIGHT"``
        """
        head = (_text(heading) or ScreenplayUtils.DEFAULT_HEADING).upper()
        place = (
            location.upper()
            if location and location.strip()
            else ScreenplayUtils.DEFAULT_LOCATION
        )
        time = (_text(time_of_day) or ScreenplayUtils.DEFAULT_TIME).upper()
        return f"{head}. {place} - {time}"

    @staticmethod
    def scene_slugline(scene: Scene) -> str:
        """Slugline computed from a scene's heading metadata."""
        return ScreenplayUtils.make_slugline(
            scene.heading, scene.location, scene.time_of_day
        )

    @staticmethod
    def scene_source_text(scene: Scene) -> str:
        """Return the Fountain text a renderer should parse for ``scene``.

        Authored text wins when it has any non-whitespace content; otherwise a
        skeleton of slugline plus synopsis stands in for it.
        """
        if scene.formatted_text and scene.formatted_text.strip():
            return scene.formatted_text
        return f"{ScreenplayUtils.scene_slugline(scene)}\n\n{scene.synopsis or ''}"

    @staticmethod
    def sorted_scenes(scenes: Iterable[Scene]) -> list[Scene]:
        """Scenes in ascending ``order``; ties keep their input order."""
        return sorted(scenes, key=lambda scene: scene.order)

    @staticmethod
    def word_count(text: str | None) -> int:
        """Count whitespace-separated words."""
        return len(text.split()) if text else 0

    @staticmethod
    def trimmed_length(text: str | None) -> int:
        """Length of ``text`` without surrounding whitespace."""
        return len(text.strip()) if text else 0
