"""Unified CLI handler for standardized error handling and output."""

from __future__ import annotations

from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from scenewright.cli.formatters.json_formatter import JsonFormatter
from scenewright.config import get_logger
from scenewright.exceptions import ScenewrightError

logger = get_logger(__name__)


class CLIHandler:
    """Unified handler for CLI commands."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize CLI handler.

        Args:
            console: Rich console for output
        """
        self.console = console or Console()
        self.json_formatter = JsonFormatter()

    def handle_error(
        self, error: Exception, json_output: bool = False, exit_code: int = 1
    ) -> None:
        """Handle and display errors consistently.

        Args:
            error: Exception to handle
            json_output: Whether to output JSON
            exit_code: Exit code to use
        """
        error_msg = str(error)
        logger.error(f"Command failed: {error_msg}", exc_info=error)

        if json_output:
            print(self.json_formatter.format_error_response(error, exit_code))
        elif isinstance(error, ScenewrightError):
            # Already formatted with Error:/Hint:/Details:
            self.console.print(f"[red]{escape(error_msg)}[/red]")
        else:
            self.console.print(f"[red]Error: {escape(error_msg)}[/red]")

        raise typer.Exit(exit_code)

    def handle_success(
        self, message: str, data: Any = None, json_output: bool = False
    ) -> None:
        """Handle success responses consistently.

        Args:
            message: Success message
            data: Optional data to include
            json_output: Whether to output JSON
        """
        if json_output:
            print(self.json_formatter.format_success(message, data))
        else:
            self.console.print(f"[green]{escape(message)}[/green]")
