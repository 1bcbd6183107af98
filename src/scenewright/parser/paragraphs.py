"""Paragraph model: the classified units produced by the Fountain parser.

The set of paragraph kinds is closed. Renderers dispatch with ``match`` and
finish with ``assert_never`` so that adding a kind here breaks every renderer
that does not handle it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class ParagraphKind(str, Enum):
    """Paragraph kinds, valued by their Final Draft paragraph type names."""

    SCENE_HEADING = "Scene Heading"
    ACTION = "Action"
    CHARACTER = "Character"
    PARENTHETICAL = "Parenthetical"
    DIALOGUE = "Dialogue"
    TRANSITION = "Transition"
    DUAL_DIALOGUE = "DualDialogue"


@dataclass(frozen=True, slots=True)
class SceneHeading:
    """Scene heading line (slugline), upper-cased by the parser.

    ``scene_number`` holds an explicit ``#n#`` marker from the source only.
    """

    kind: ClassVar[ParagraphKind] = ParagraphKind.SCENE_HEADING
    text: str
    scene_number: str | None = None


@dataclass(frozen=True, slots=True)
class Action:
    """Action/description text, possibly spanning several lines."""

    kind: ClassVar[ParagraphKind] = ParagraphKind.ACTION
    text: str


@dataclass(frozen=True, slots=True)
class Character:
    """Speaker cue above a dialogue block."""

    kind: ClassVar[ParagraphKind] = ParagraphKind.CHARACTER
    character: str


@dataclass(frozen=True, slots=True)
class Parenthetical:
    """Actor direction such as ``(quietly)``."""

    kind: ClassVar[ParagraphKind] = ParagraphKind.PARENTHETICAL
    text: str


@dataclass(frozen=True, slots=True)
class Dialogue:
    """Spoken lines of a dialogue block."""

    kind: ClassVar[ParagraphKind] = ParagraphKind.DIALOGUE
    dialogue: str


@dataclass(frozen=True, slots=True)
class Transition:
    """Transition such as ``CUT TO:``."""

    kind: ClassVar[ParagraphKind] = ParagraphKind.TRANSITION
    text: str


DualSide = tuple[Character | Parenthetical | Dialogue, ...]


@dataclass(frozen=True, slots=True)
class DualDialogue:
    """Two speakers talking at the same time.

    Each side holds only Character, Parenthetical and Dialogue paragraphs.
    """

    kind: ClassVar[ParagraphKind] = ParagraphKind.DUAL_DIALOGUE
    left: DualSide
    right: DualSide

    def __post_init__(self) -> None:
        for side in (self.left, self.right):
            for para in side:
                if not isinstance(para, Character | Parenthetical | Dialogue):
                    raise ValueError(
                        "DualDialogue sides may only contain Character, "
                        f"Parenthetical or Dialogue, got {type(para).__name__}"
                    )


Paragraph = (
    SceneHeading
    | Action
    | Character
    | Parenthetical
    | Dialogue
    | Transition
    | DualDialogue
)

PARAGRAPH_TYPES: dict[ParagraphKind, type] = {
    ParagraphKind.SCENE_HEADING: SceneHeading,
    ParagraphKind.ACTION: Action,
    ParagraphKind.CHARACTER: Character,
    ParagraphKind.PARENTHETICAL: Parenthetical,
    ParagraphKind.DIALOGUE: Dialogue,
    ParagraphKind.TRANSITION: Transition,
    ParagraphKind.DUAL_DIALOGUE: DualDialogue,
}
