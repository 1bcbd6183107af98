"""Fountain screenplay parser using the jouvence library."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from jouvence.document import (
    TYPE_ACTION,
    TYPE_CENTEREDACTION,
    TYPE_CHARACTER,
    TYPE_DIALOG,
    TYPE_LYRICS,
    TYPE_PARENTHETICAL,
    TYPE_SECTION,
    TYPE_SYNOPSIS,
    TYPE_TRANSITION,
)
from jouvence.parser import JouvenceParser, JouvenceParserError

from scenewright.config import get_logger
from scenewright.exceptions import ParseError
from scenewright.parser.paragraphs import (
    Action,
    Character,
    Dialogue,
    DualDialogue,
    Paragraph,
    Parenthetical,
    SceneHeading,
    Transition,
)

logger = get_logger(__name__)

# jouvence element types that survive only as plain action text
DEGRADED_TYPES = frozenset(
    {TYPE_ACTION, TYPE_CENTEREDACTION, TYPE_LYRICS, TYPE_SECTION, TYPE_SYNOPSIS}
)

BONEYARD_PATTERN = re.compile(r"/\*.*?(?:\*/|\Z)", re.DOTALL)
BLANK_LINES_PATTERN = re.compile(r"\n\s*\n")
SCENE_NUMBER_PATTERN = re.compile(r"\s*#([^#\s]+)#\s*$")
# Same heading test jouvence applies, which also wants a blank line after it
SCENE_HEADING_PATTERN = re.compile(r"^(int|ext|est|int/ext|int\./ext|i/e)[\s.]", re.I)
DUAL_DIALOGUE_CUE_PATTERN = re.compile(r"^\s*[^\s@!.~>=#(].*\^\s*$")
CLOSING_TRANSITIONS = frozenset({"FADE OUT.", "FADE TO BLACK.", "CUT TO BLACK."})


def pair_dual_dialogue(paragraphs: list[Paragraph]) -> list[Paragraph]:
    """Merge caret-marked dialogue blocks with the block before them.

    A dialogue block is a Character followed by its Parenthetical and Dialogue
    paragraphs. A block whose cue ends in ``^`` becomes the right side of a
    DualDialogue whose left side is the dialogue block right before it. With no
    such block the caret is dropped and the block stays ordinary dialogue.
    """
    paired: list[Paragraph] = []
    # Start, within ``paired``, of a trailing dialogue block that may pair
    open_block: int | None = None
    index = 0
    while index < len(paragraphs):
        current = paragraphs[index]
        if not isinstance(current, Character):
            paired.append(current)
            open_block = None
            index += 1
            continue

        end = index + 1
        while end < len(paragraphs) and isinstance(
            paragraphs[end], Parenthetical | Dialogue
        ):
            end += 1
        block: list[Paragraph] = list(paragraphs[index:end])
        name = current.character.rstrip()

        if not name.endswith("^"):
            open_block = len(paired)
            paired.extend(block)
        else:
            block[0] = Character(name[:-1].rstrip())
            if open_block is None:
                open_block = len(paired)
                paired.extend(block)
            else:
                left = paired[open_block:]
                del paired[open_block:]
                paired.append(
                    DualDialogue(tuple(left), tuple(block))  # type: ignore[arg-type]
                )
                open_block = None
        index = end
    return paired


class FountainParser:
    """Parse Fountain text into an ordered list of paragraphs using jouvence.

    Parsing is total: any string yields a (possibly empty) paragraph list and
    unrecognized constructs degrade to Action paragraphs.
    """

    def _apply_jouvence_workaround(self, content: str) -> str:
        """Strip boneyard comments before handing text to jouvence.

        jouvence 0.4.2 can loop forever while scanning for the end of a
        boneyard comment, and never returns on an unclosed one. Every
        ``/* ... */`` span is removed up front; an unclosed comment hides the
        rest of the text, as Fountain specifies.

        Args:
            content: Raw Fountain text

        Returns:
            Content with boneyard comments removed
        """
        return BONEYARD_PATTERN.sub("", content)

    def _prepare(self, content: str) -> str:
        """Normalize text into the shape jouvence classifies reliably.

        Line endings become ``\\n`` and whitespace-only lines become blank.
        A scene heading directly followed by text gets a blank line after it.
        Caret dual-dialogue cues and closing transitions such as ``FADE OUT.``
        are forced with ``@`` and ``>`` since jouvence does not detect them.
        """
        text = content.replace("\r\n", "\n").replace("\r", "\n")
        lines = [
            line if line.strip() else ""
            for line in self._apply_jouvence_workaround(text).split("\n")
        ]

        prepared: list[str] = []
        for index, line in enumerate(lines):
            after_blank = not prepared or not prepared[-1]
            before_blank = index + 1 >= len(lines) or not lines[index + 1]
            if after_blank and line:
                if SCENE_HEADING_PATTERN.match(line) and not before_blank:
                    prepared.extend([line, ""])
                    continue
                if DUAL_DIALOGUE_CUE_PATTERN.match(line) and not before_blank:
                    line = "@" + line.lstrip()
                elif line.strip() in CLOSING_TRANSITIONS and before_blank:
                    line = ">" + line.strip()
            prepared.append(line)
        return "\n".join(prepared)

    @staticmethod
    def _scene_heading(header: str) -> SceneHeading:
        text = header.strip()
        scene_number = None
        match = SCENE_NUMBER_PATTERN.search(text)
        if match:
            scene_number = match.group(1)
            text = text[: match.start()]
        return SceneHeading(text.strip().upper(), scene_number)

    @staticmethod
    def _convert(element: Any) -> list[Paragraph]:
        text = element.text or ""
        if element.type == TYPE_CHARACTER:
            return [Character(text.strip().upper())] if text.strip() else []
        if element.type == TYPE_PARENTHETICAL:
            return [Parenthetical(text.strip())] if text.strip() else []
        if element.type == TYPE_DIALOG:
            return [Dialogue(text.strip())] if text.strip() else []
        if element.type == TYPE_TRANSITION:
            return [Transition(text.strip().upper())] if text.strip() else []
        if element.type in DEGRADED_TYPES:
            # jouvence folds blank-line separated action into one element
            return [
                Action(block.strip("\n"))
                for block in BLANK_LINES_PATTERN.split(text)
                if block.strip()
            ]
        return []

    def _paragraphs(self, doc: Any) -> list[Paragraph]:
        paragraphs: list[Paragraph] = [
            Action(value.strip())
            for value in (doc.title_values or {}).values()
            if value and value.strip()
        ]
        for scene in doc.scenes:
            if scene.header is not None:
                paragraphs.append(self._scene_heading(scene.header))
            for element in scene.paragraphs:
                paragraphs.extend(self._convert(element))
        return pair_dual_dialogue(paragraphs)

    def parse(self, content: str | None) -> list[Paragraph]:
        """Parse Fountain content into paragraphs.

        Args:
            content: Raw Fountain text, may be ``None``

        Returns:
            Paragraphs in source line order
        """
        prepared = self._prepare(content or "")
        try:
            doc = JouvenceParser().parseString(prepared)
        except JouvenceParserError as e:
            logger.warning(
                "Fountain text could not be classified, keeping it as action",
                error=str(e),
            )
            return [
                Action(block.strip("\n"))
                for block in BLANK_LINES_PATTERN.split(prepared)
                if block.strip()
            ]

        paragraphs = self._paragraphs(doc)
        logger.debug(
            "Parsed fountain text", scenes=len(doc.scenes), paragraphs=len(paragraphs)
        )
        return paragraphs

    def parse_file(self, file_path: Path) -> list[Paragraph]:
        """Parse a Fountain file.

        Args:
            file_path: Path to a UTF-8 Fountain file

        Returns:
            Paragraphs in source line order

        Raises:
            ParseError: If the file cannot be read
        """
        logger.debug(f"Parsing fountain file: {file_path}")
        try:
            content = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(
                message=f"Failed to read Fountain file: {file_path}",
                hint="Check that the file exists and is UTF-8 encoded.",
                details={"file": str(file_path), "reason": str(e)},
            ) from e
        paragraphs = self.parse(content)
        logger.info(
            "Parsed fountain file", file=str(file_path), paragraphs=len(paragraphs)
        )
        return paragraphs


_default_parser = FountainParser()


def parse_fountain(content: str | None) -> list[Paragraph]:
    """Parse Fountain text with a shared parser instance."""
    return _default_parser.parse(content)
