"""Rich text rendering of a screenplay summary."""

from __future__ import annotations

from rich.table import Table

from scenewright.cli.formatters.base import OutputFormat, OutputFormatter
from scenewright.cli.formatters.json_formatter import JsonFormatter
from scenewright.models import Screenplay
from scenewright.utils.screenplay import ScreenplayUtils


class ScreenplayFormatter(OutputFormatter[Screenplay]):
    """Summarize a screenplay as a header plus a scene table."""

    def format(
        self, data: Screenplay, format_type: OutputFormat = OutputFormat.TEXT
    ) -> str:
        if format_type == OutputFormat.JSON:
            return JsonFormatter(self.console).format(data)
        return (
            f"[bold cyan]{data.title}[/bold cyan] (#{data.id})\n"
            f"  Stage: {data.current_state.value}\n"
            f"  Turning points: {len(data.turning_points)}\n"
            f"  Characters: {len(data.characters)}\n"
            f"  Subplots: {len(data.subplots)}\n"
            f"  Scenes: {len(data.scenes)}"
        )

    def scene_table(self, screenplay: Screenplay) -> Table:
        """Scenes in order with their slugline and draft status."""
        table = Table(title="Scenes", show_lines=False)
        table.add_column("#", justify="right", style="cyan")
        table.add_column("Slugline")
        table.add_column("Key", justify="center")
        table.add_column("TP", justify="right")
        table.add_column("Status")
        for scene in ScreenplayUtils.sorted_scenes(screenplay.scenes):
            table.add_row(
                str(scene.order),
                ScreenplayUtils.scene_slugline(scene),
                "★" if scene.is_key else "",
                str(scene.linked_turning_point or ""),
                scene.status.value,
            )
        return table

    def print(
        self, data: Screenplay, format_type: OutputFormat = OutputFormat.TEXT
    ) -> None:
        super().print(data, format_type)
        if format_type == OutputFormat.TEXT and data.scenes:
            self.console.print(self.scene_table(data))
