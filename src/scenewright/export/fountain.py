"""Compile a screenplay into a single Fountain document."""

from __future__ import annotations

from collections.abc import Sequence

from scenewright.config import get_logger
from scenewright.models import Scene, Screenplay
from scenewright.utils.screenplay import ScreenplayUtils

logger = get_logger(__name__)

DEFAULT_TITLE = "Untitled Screenplay"
DEFAULT_CREDIT = "Written by"
DEFAULT_AUTHOR = "Author"


def title_page_header(title: str | None) -> str:
    """Fountain title page block, including its trailing blank line."""
    return (
        f"Title: {title or DEFAULT_TITLE}\n"
        f"Credit: {DEFAULT_CREDIT}\n"
        f"Author: {DEFAULT_AUTHOR}\n\n"
    )


def scene_skeleton(scene: Scene) -> str:
    """Outline lines derived from scene metadata, empty parts omitted."""
    lines = [
        (scene.synopsis or "").strip(),
        f"> GOAL: {scene.goal}" if scene.goal else "",
        f"> CONFLICT: {scene.conflict}" if scene.conflict else "",
        f"> OUTCOME: {scene.outcome}" if scene.outcome else "",
    ]
    return "\n".join(line for line in lines if line)


def compile_scene(scene: Scene) -> str:
    """Render one scene block.

    Authored text that already opens with this scene's heading prefix
    (``"INT."``, ``"EXT."``...) is trusted as-is. Anything else gets the
    computed slugline in front of it.
    """
    slugline = ScreenplayUtils.scene_slugline(scene)
    authored = (scene.formatted_text or "").strip()
    if authored:
        prefix = f"{scene.heading.value if scene.heading else 'INT'}."
        if authored.upper().startswith(prefix):
            return authored
        return f"{slugline}\n\n{authored}"

    skeleton = scene_skeleton(scene)
    return f"{slugline}\n\n{skeleton}" if skeleton else slugline


def compile_fountain(
    screenplay: Screenplay, scenes: Sequence[Scene] | None = None
) -> str:
    """Compile the screenplay's scenes into Fountain text.

    Args:
        screenplay: Screenplay providing the title
        scenes: Scenes to compile, defaults to ``screenplay.scenes``

    Returns:
        Fountain document: title page, then scene blocks in ascending
        ``order`` separated by blank lines
    """
    ordered = ScreenplayUtils.sorted_scenes(
        screenplay.scenes if scenes is None else scenes
    )
    body = "\n\n".join(compile_scene(scene) for scene in ordered)
    logger.debug(
        "Compiled fountain document",
        screenplay_id=screenplay.id,
        scenes=len(ordered),
    )
    header = title_page_header(screenplay.title)
    return f"{header}{body}\n" if body else header
