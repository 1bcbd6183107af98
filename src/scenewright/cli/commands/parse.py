"""Parse command: classify a Fountain file into paragraphs."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, assert_never

import typer
from rich.console import Console
from rich.markup import escape

from scenewright.cli.formatters import JsonFormatter
from scenewright.cli.utils.cli_handler import CLIHandler
from scenewright.parser import (
    Action,
    Character,
    Dialogue,
    DualDialogue,
    FountainParser,
    Paragraph,
    Parenthetical,
    SceneHeading,
    Transition,
)

console = Console()


def _describe(paragraph: Paragraph) -> str:
    match paragraph:
        case DualDialogue(left=left, right=right):
            sides = [" / ".join(_describe(p) for p in side) for side in (left, right)]
            return f"{sides[0]} || {sides[1]}"
        case Character(character=text) | Dialogue(dialogue=text):
            return text.replace("\n", " / ")
        case (
            SceneHeading(text=text)
            | Action(text=text)
            | Parenthetical(text=text)
            | Transition(text=text)
        ):
            return text.replace("\n", " / ")
        case _:
            assert_never(paragraph)


def parse_command(
    file: Annotated[
        Path,
        typer.Argument(help="Fountain file to parse", exists=True, dir_okay=False),
    ],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Parse a Fountain file and list its paragraphs."""
    handler = CLIHandler(console)
    try:
        paragraphs = FountainParser().parse_file(file)
    except Exception as e:
        handler.handle_error(e, json_output)
        return

    if json_output:
        print(JsonFormatter().format(paragraphs))
        return

    for paragraph in paragraphs:
        console.print(
            f"[cyan]{paragraph.kind.value:>14}[/cyan]  "
            f"{escape(_describe(paragraph))}",
            highlight=False,
        )
