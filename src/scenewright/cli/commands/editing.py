"""Editing commands: update, add-scene and propose."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml
from rich.console import Console
from rich.markup import escape

from scenewright.cli.formatters import JsonFormatter
from scenewright.cli.utils.cli_handler import CLIHandler
from scenewright.cli.utils.store import open_store
from scenewright.config import get_logger
from scenewright.exceptions import EntityNotFoundError, ParseError
from scenewright.models import (
    Scene,
    SceneHeadingType,
    SceneStatus,
    Screenplay,
    TimeOfDay,
)
from scenewright.proposals import SceneDraft, create_proposal_client, draft_scene

logger = get_logger(__name__)
console = Console()


def load_patch(path: Path) -> dict[str, Any]:
    """Read a YAML or JSON mapping of screenplay fields.

    Raises:
        ParseError: If the file cannot be read or does not hold a mapping
    """
    try:
        with path.open(encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, ValueError, yaml.YAMLError) as e:
        raise ParseError(
            message=f"Failed to read patch file: {path}",
            hint="Provide a UTF-8 YAML or JSON file.",
            details={"file": str(path), "reason": str(e)},
        ) from e

    if not isinstance(data, dict):
        raise ParseError(
            message=f"Patch file must contain a mapping of fields: {path}",
            hint="Use top-level keys such as synopsis, treatment or characters.",
            details={"file": str(path), "type": type(data).__name__},
        )
    return data


def update_command(
    screenplay_id: Annotated[int, typer.Argument(help="Screenplay id")],
    patch_file: Annotated[
        Path,
        typer.Argument(
            help="YAML or JSON file with the fields to replace",
            exists=True,
            dir_okay=False,
        ),
    ],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Replace top-level screenplay fields from a YAML or JSON file.

    Example patch:

        synopsis: A safecracker takes one last job ...
        treatment:
          act1: ...
    """
    handler = CLIHandler(console)

    async def apply(changes: dict[str, Any]) -> Screenplay:
        async with open_store() as store:
            return await store.update(screenplay_id, changes)

    try:
        changes = load_patch(patch_file)
        screenplay = asyncio.run(apply(changes))
    except Exception as e:
        handler.handle_error(e, json_output)
        return

    if json_output:
        print(JsonFormatter().format(screenplay))
    else:
        handler.handle_success(
            f"Updated screenplay #{screenplay_id}: {', '.join(sorted(changes))}"
        )


def add_scene_command(
    screenplay_id: Annotated[int, typer.Argument(help="Screenplay id")],
    heading: Annotated[
        SceneHeadingType | None,
        typer.Option("--heading", help="Interior/exterior prefix"),
    ] = None,
    location: Annotated[
        str | None, typer.Option("--location", help="Slugline location")
    ] = None,
    time_of_day: Annotated[
        TimeOfDay | None, typer.Option("--time", help="Slugline time of day")
    ] = None,
    title: Annotated[str | None, typer.Option("--title", help="Scene title")] = None,
    synopsis: Annotated[
        str | None, typer.Option("--synopsis", "-s", help="What happens")
    ] = None,
    key: Annotated[bool, typer.Option("--key", help="Mark as a key scene")] = False,
    turning_point: Annotated[
        int | None,
        typer.Option(
            "--turning-point", "-t", min=1, max=5, help="Linked turning point (1-5)"
        ),
    ] = None,
    text_file: Annotated[
        Path | None,
        typer.Option(
            "--text",
            help="Fountain file with the authored scene text",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Append a scene to a screenplay."""
    handler = CLIHandler(console)

    async def add(fields: dict[str, Any]) -> Scene:
        async with open_store() as store:
            return await store.add_scene(screenplay_id, fields)

    try:
        fields: dict[str, Any] = {
            "heading": heading,
            "location": location,
            "time_of_day": time_of_day,
            "title": title,
            "synopsis": synopsis,
            "is_key": key,
            "linked_turning_point": turning_point,
        }
        if text_file is not None:
            fields["formatted_text"] = text_file.read_text(encoding="utf-8")
        scene = asyncio.run(add(fields))
    except Exception as e:
        handler.handle_error(e, json_output)
        return

    handler.handle_success(
        f"Added scene #{scene.id} at position {scene.order}",
        {"screenplay_id": screenplay_id, "scene_id": scene.id, "order": scene.order},
        json_output,
    )


def propose_command(
    screenplay_id: Annotated[int, typer.Argument(help="Screenplay id")],
    scene_id: Annotated[int, typer.Argument(help="Scene to draft")],
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show the draft without saving it"),
    ] = False,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Draft a scene's Fountain text with the proposal service.

    Uses the configured proposal endpoint, or the offline mock client when
    none is set. The draft replaces the scene text unless --dry-run is given.
    """
    handler = CLIHandler(console)

    async def propose() -> SceneDraft:
        client = create_proposal_client()
        try:
            async with open_store() as store:
                screenplay = await store.get(screenplay_id)
                scene = next((s for s in screenplay.scenes if s.id == scene_id), None)
                if scene is None:
                    raise EntityNotFoundError("scenes", scene_id, screenplay_id)
                draft = await draft_scene(client, screenplay, scene)
                if not dry_run:
                    await store.update_scene(
                        screenplay_id,
                        scene.model_copy(
                            update={
                                "formatted_text": draft.text,
                                "status": SceneStatus.DRAFTED,
                            }
                        ),
                    )
                return draft
        finally:
            await client.aclose()

    try:
        draft = asyncio.run(propose())
    except Exception as e:
        handler.handle_error(e, json_output)
        return

    logger.info(
        "Scene draft proposed",
        screenplay_id=screenplay_id,
        scene_id=scene_id,
        saved=not dry_run,
    )
    if json_output:
        print(
            JsonFormatter().format(
                {
                    "scene_id": scene_id,
                    "saved": not dry_run,
                    "fountain": draft.text,
                    "paragraphs": draft.paragraphs,
                }
            )
        )
        return

    console.print(escape(draft.text), highlight=False)
    if not dry_run:
        handler.handle_success(f"Saved draft to scene #{scene_id}")
