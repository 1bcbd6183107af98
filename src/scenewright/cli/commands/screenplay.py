"""Screenplay lifecycle commands: new, show and advance."""

from __future__ import annotations

import asyncio
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from scenewright.cli.formatters import JsonFormatter, OutputFormat, ScreenplayFormatter
from scenewright.cli.utils.cli_handler import CLIHandler
from scenewright.cli.utils.store import open_store
from scenewright.config import get_logger
from scenewright.models import Screenplay
from scenewright.workflow import TransitionResult, WorkflowStateMachine, parse_stage

logger = get_logger(__name__)
console = Console()


def new_command(
    title: Annotated[str, typer.Argument(help="Working title of the screenplay")],
    logline: Annotated[
        str | None, typer.Option("--logline", "-l", help="One-sentence logline")
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Create a screenplay at the synopsis stage."""
    handler = CLIHandler(console)

    async def create() -> Screenplay:
        async with open_store() as store:
            return await store.create(title, logline=logline)

    try:
        screenplay = asyncio.run(create())
    except Exception as e:
        handler.handle_error(e, json_output)
        return

    if json_output:
        print(JsonFormatter().format(screenplay))
    else:
        handler.handle_success(f"Created screenplay #{screenplay.id}: {title}")


def show_command(
    screenplay_id: Annotated[int, typer.Argument(help="Screenplay id")],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show a screenplay summary and its scenes."""
    handler = CLIHandler(console)

    async def load() -> Screenplay:
        async with open_store() as store:
            return await store.get(screenplay_id)

    try:
        screenplay = asyncio.run(load())
    except Exception as e:
        handler.handle_error(e, json_output)
        return

    if json_output:
        print(JsonFormatter().format(screenplay))
    else:
        ScreenplayFormatter(console).print(screenplay, OutputFormat.TEXT)


def advance_command(
    screenplay_id: Annotated[int, typer.Argument(help="Screenplay id")],
    stage: Annotated[
        str, typer.Argument(help="Target stage, e.g. S2 or S2_TREATMENT")
    ],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Move a screenplay to another workflow stage.

    Exits with status 1 and prints the guard hint when the move is refused.
    """
    handler = CLIHandler(console)

    async def transition() -> TransitionResult:
        async with open_store() as store:
            machine = await WorkflowStateMachine.load(store, screenplay_id)
            return await machine.request_transition(parse_stage(stage))

    try:
        result = asyncio.run(transition())
    except Exception as e:
        handler.handle_error(e, json_output)
        return

    data = {
        "source": result.source.value,
        "target": result.target.value,
        "hint": result.hint,
    }
    if result:
        handler.handle_success(
            f"Moved screenplay #{screenplay_id} from {result.source.value} "
            f"to {result.target.value}",
            data,
            json_output,
        )
        return

    if json_output:
        print(JsonFormatter().format({"success": False, **data}))
    else:
        console.print(
            f"[yellow]Cannot enter {result.target.value}[/yellow]\n"
            f"{escape(result.hint or '')}",
            highlight=False,
        )
    raise typer.Exit(1)
