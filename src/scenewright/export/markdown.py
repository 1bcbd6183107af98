"""Markdown exports produced at the final workflow stage."""

from __future__ import annotations

import re

from scenewright.models import Screenplay

PATH_SEPARATORS = re.compile(r"[\\/]+")


def _or_dash(value: str | None) -> str:
    return value if value else "-"


def build_beat_sheet(screenplay: Screenplay) -> str:
    """Beat sheet listing the turning points in order.

    Args:
        screenplay: Screenplay to summarize

    Returns:
        Markdown document
    """
    lines = [f"# Beat Sheet — {screenplay.title or 'Untitled'}", ""]
    for tp in sorted(screenplay.turning_points, key=lambda tp: tp.order):
        lines.append(f"TP#{tp.order} — {tp.type.value}")
        lines.append(tp.summary or "")
        lines.append("")
    return "\n".join(lines)


def build_character_bios(screenplay: Screenplay) -> str:
    """Character bios with role, motivation, need and flaw.

    Args:
        screenplay: Screenplay to summarize

    Returns:
        Markdown document
    """
    lines = [f"# Character Bios — {screenplay.title or 'Untitled'}", ""]
    for character in screenplay.characters:
        lines.extend(
            [
                f"## {character.name}",
                f"Role: {character.structural_role.value}",
                f"Motivation: {_or_dash(character.goal)}",
                f"Need: {_or_dash(character.need)}",
                f"Flaw: {_or_dash(character.flaw)}",
                "",
            ]
        )
    return "\n".join(lines)


def export_filename(screenplay: Screenplay, suffix: str) -> str:
    """Download filename, e.g. ``"Heist.fountain"`` or ``"Heist-beats.md"``."""
    stem = PATH_SEPARATORS.sub("-", screenplay.title or "").strip(" .-")
    return f"{stem or 'screenplay'}{suffix}"
