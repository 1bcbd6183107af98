"""Export command: write a screenplay in one of the supported formats."""

from __future__ import annotations

import asyncio
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from scenewright.cli.utils.cli_handler import CLIHandler
from scenewright.cli.utils.store import open_store
from scenewright.config import get_logger, get_settings
from scenewright.export import (
    build_beat_sheet,
    build_character_bios,
    build_fdx,
    compile_fountain,
    export_filename,
    render_pdf,
)
from scenewright.models import Screenplay

logger = get_logger(__name__)
console = Console()


class ExportFormat(str, Enum):
    """Formats understood by ``scenewright export``."""

    FOUNTAIN = "fountain"
    FDX = "fdx"
    PDF = "pdf"
    BEATS = "beats"
    CHARACTERS = "characters"


EXPORT_SUFFIXES = {
    ExportFormat.FOUNTAIN: ".fountain",
    ExportFormat.FDX: ".fdx",
    ExportFormat.PDF: ".pdf",
    ExportFormat.BEATS: "-beats.md",
    ExportFormat.CHARACTERS: "-characters.md",
}


async def render_export(screenplay: Screenplay, export_format: ExportFormat) -> bytes:
    """Render ``screenplay`` in ``export_format`` as file bytes."""
    settings = get_settings()
    match export_format:
        case ExportFormat.FOUNTAIN:
            text = compile_fountain(screenplay)
        case ExportFormat.FDX:
            text = build_fdx(
                screenplay, strict_dual_dialogue=settings.strict_dual_dialogue
            )
        case ExportFormat.PDF:
            return await render_pdf(screenplay, settings=settings)
        case ExportFormat.BEATS:
            text = build_beat_sheet(screenplay)
        case ExportFormat.CHARACTERS:
            text = build_character_bios(screenplay)
    return text.encode("utf-8")


def export_command(
    screenplay_id: Annotated[int, typer.Argument(help="Screenplay id")],
    export_format: Annotated[
        ExportFormat,
        typer.Argument(help="Export format", case_sensitive=False),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output file (defaults to the screenplay title plus extension)",
        ),
    ] = None,
) -> None:
    """Export a screenplay as Fountain, FDX, PDF or markdown summaries."""
    handler = CLIHandler(console)

    async def run() -> tuple[Screenplay, bytes]:
        async with open_store() as store:
            screenplay = await store.get(screenplay_id)
        return screenplay, await render_export(screenplay, export_format)

    try:
        screenplay, data = asyncio.run(run())
        target = output or Path(
            export_filename(screenplay, EXPORT_SUFFIXES[export_format])
        )
        target.write_bytes(data)
    except Exception as e:
        handler.handle_error(e)
        return

    logger.info(
        "Exported screenplay",
        screenplay_id=screenplay_id,
        format=export_format.value,
        path=str(target),
        size=len(data),
    )
    handler.handle_success(f"Wrote {target} ({len(data)} bytes)")
