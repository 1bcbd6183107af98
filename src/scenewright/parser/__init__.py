"""Fountain screenplay format parser for Scenewright."""

from __future__ import annotations

from .fountain_parser import FountainParser, pair_dual_dialogue, parse_fountain
from .paragraphs import (
    PARAGRAPH_TYPES,
    Action,
    Character,
    Dialogue,
    DualDialogue,
    Paragraph,
    ParagraphKind,
    Parenthetical,
    SceneHeading,
    Transition,
)

__all__ = [
    "PARAGRAPH_TYPES",
    "Action",
    "Character",
    "Dialogue",
    "DualDialogue",
    "FountainParser",
    "Paragraph",
    "ParagraphKind",
    "Parenthetical",
    "SceneHeading",
    "Transition",
    "pair_dual_dialogue",
    "parse_fountain",
]
