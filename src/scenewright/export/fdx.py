"""Render a screenplay as Final Draft XML (FDX)."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import assert_never
from xml.sax.saxutils import escape

from scenewright.config import get_logger
from scenewright.exceptions import UnsupportedLayoutError
from scenewright.export.fountain import DEFAULT_AUTHOR, DEFAULT_CREDIT, DEFAULT_TITLE
from scenewright.models import Scene, Screenplay
from scenewright.parser import (
    Action,
    Character,
    Dialogue,
    DualDialogue,
    Paragraph,
    ParagraphKind,
    Parenthetical,
    SceneHeading,
    Transition,
    parse_fountain,
)
from scenewright.utils.screenplay import ScreenplayUtils

logger = get_logger(__name__)

DUAL_DIALOGUE_MARKER = "[DUAL DIALOGUE]"
DUAL_DIALOGUE_DIVIDER = "[—]"
# Characters XML 1.0 does not allow, even as character references
INVALID_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")

FDX_TEMPLATE = """\
<?xml version="1.0" encoding="UTF-8" standalone="no"?>
<FinalDraft DocumentType="Script" Version="1">
  <Content>
    {paragraphs}
  </Content>
  <TitlePage>
    <Content>
      <Paragraph Type="Title"><Text>{title}</Text></Paragraph>
      <Paragraph Type="Credit"><Text>{credit}</Text></Paragraph>
      <Paragraph Type="Author"><Text>{author}</Text></Paragraph>
    </Content>
  </TitlePage>
</FinalDraft>"""


def scene_number_suffix(number: int) -> str:
    """Bracketed scene number appended to a scene heading."""
    return f" [#{number}]"


def xml_text(text: str) -> str:
    """Escape text for an XML element, dropping disallowed control characters."""
    return escape(INVALID_XML_CHARS.sub("", text))


def fdx_paragraph(paragraph_type: str, text: str) -> str:
    """One ``<Paragraph>`` element with escaped text."""
    return (
        f'<Paragraph Type="{paragraph_type}">'
        f"<Text>{xml_text(text)}</Text></Paragraph>"
    )


class FdxRenderer:
    """Map parsed paragraphs onto FDX paragraph elements.

    Dual dialogue is flattened into a marker line, the left speaker, a divider
    line and the right speaker. With ``strict_dual_dialogue`` it raises
    instead.
    """

    def __init__(self, strict_dual_dialogue: bool = False) -> None:
        self.strict_dual_dialogue = strict_dual_dialogue

    def render_paragraph(self, paragraph: Paragraph, suffix: str = "") -> list[str]:
        """Render one paragraph.

        Args:
            paragraph: Parsed paragraph
            suffix: Text appended to a scene heading (scene number annotation)

        Returns:
            XML lines for the paragraph
        """
        match paragraph:
            case SceneHeading(text=text):
                return [fdx_paragraph(paragraph.kind.value, text + suffix)]
            case Action(text=text) | Parenthetical(text=text) | Transition(text=text):
                return [fdx_paragraph(paragraph.kind.value, text)]
            case Character(character=name):
                return [fdx_paragraph(paragraph.kind.value, name)]
            case Dialogue(dialogue=lines):
                return [fdx_paragraph(paragraph.kind.value, lines)]
            case DualDialogue(left=left, right=right):
                if self.strict_dual_dialogue:
                    raise UnsupportedLayoutError(
                        message="Dual dialogue cannot be exported to FDX",
                        hint="Disable strict_dual_dialogue to export it as "
                        "sequential dialogue blocks",
                        details={"left": len(left), "right": len(right)},
                    )
                rendered = [
                    fdx_paragraph(ParagraphKind.ACTION.value, DUAL_DIALOGUE_MARKER)
                ]
                for side in left:
                    rendered.extend(self.render_paragraph(side))
                rendered.append(
                    fdx_paragraph(ParagraphKind.ACTION.value, DUAL_DIALOGUE_DIVIDER)
                )
                for side in right:
                    rendered.extend(self.render_paragraph(side))
                return rendered
            case _:
                assert_never(paragraph)

    def render_scene(self, scene: Scene, number: int) -> list[str]:
        """Render a scene, numbering its first scene heading.

        A scene whose text has no heading gets a synthesized one built from
        its slugline.
        """
        paragraphs = parse_fountain(ScreenplayUtils.scene_source_text(scene))
        suffix = scene_number_suffix(number)
        first_heading = next(
            (i for i, p in enumerate(paragraphs) if isinstance(p, SceneHeading)),
            None,
        )

        lines: list[str] = []
        if first_heading is None:
            slugline = ScreenplayUtils.scene_slugline(scene).upper()
            lines.append(
                fdx_paragraph(ParagraphKind.SCENE_HEADING.value, slugline + suffix)
            )
        for index, paragraph in enumerate(paragraphs):
            lines.extend(
                self.render_paragraph(
                    paragraph, suffix if index == first_heading else ""
                )
            )
        return lines

    def render(
        self, screenplay: Screenplay, scenes: Sequence[Scene] | None = None
    ) -> str:
        """Render the whole document.

        Args:
            screenplay: Screenplay providing the title
            scenes: Scenes to render, defaults to ``screenplay.scenes``

        Returns:
            FDX XML document
        """
        ordered = ScreenplayUtils.sorted_scenes(
            screenplay.scenes if scenes is None else scenes
        )
        paragraphs: list[str] = []
        for number, scene in enumerate(ordered, start=1):
            paragraphs.extend(self.render_scene(scene, number))

        logger.debug(
            "Rendered FDX document",
            screenplay_id=screenplay.id,
            scenes=len(ordered),
            paragraphs=len(paragraphs),
        )
        return FDX_TEMPLATE.format(
            paragraphs="\n    ".join(paragraphs),
            title=xml_text(screenplay.title or DEFAULT_TITLE),
            credit=DEFAULT_CREDIT,
            author=DEFAULT_AUTHOR,
        )


def build_fdx(
    screenplay: Screenplay,
    scenes: Sequence[Scene] | None = None,
    strict_dual_dialogue: bool = False,
) -> str:
    """Render ``screenplay`` as an FDX document string."""
    renderer = FdxRenderer(strict_dual_dialogue=strict_dual_dialogue)
    return renderer.render(screenplay, scenes)
