"""Main CLI entry point."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from scenewright import __version__
from scenewright.cli.commands import (
    add_scene_command,
    advance_command,
    export_command,
    new_command,
    parse_command,
    propose_command,
    show_command,
    update_command,
)
from scenewright.cli.formatters.json_formatter import JsonFormatter
from scenewright.cli.utils.cli_handler import CLIHandler
from scenewright.config import (
    clear_settings_cache,
    configure_logging,
    get_logger,
    get_settings,
    get_settings_for_cli,
    set_settings,
)

logger = get_logger(__name__)
console = Console()

DESCRIPTION = "Guided screenplay development with Fountain, FDX and PDF export"

app = typer.Typer(
    name="scenewright",
    help=DESCRIPTION,
    pretty_exceptions_enable=False,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="new")(new_command)
app.command(name="show")(show_command)
app.command(name="update")(update_command)
app.command(name="add-scene")(add_scene_command)
app.command(name="propose")(propose_command)
app.command(name="advance")(advance_command)
app.command(name="export")(export_command)
app.command(name="parse")(parse_command)


@app.command()
def version(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show Scenewright version."""
    version_info = {
        "name": "Scenewright",
        "version": __version__,
        "description": DESCRIPTION,
    }

    if json_output:
        # Output pure JSON without ANSI escape codes
        print(JsonFormatter().format(version_info))
    else:
        console.print(f"Scenewright v{version_info['version']}")


@app.callback()
def main_callback(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            envvar="SCENEWRIGHT_CONFIG",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging (INFO level)"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug", help="Enable debug logging", envvar="SCENEWRIGHT_DEBUG"
        ),
    ] = False,
) -> None:
    """Configure global options."""
    if debug:
        os.environ["SCENEWRIGHT_LOG_LEVEL"] = "DEBUG"
        os.environ["SCENEWRIGHT_DEBUG"] = "true"
        clear_settings_cache()
    elif verbose:
        os.environ["SCENEWRIGHT_LOG_LEVEL"] = "INFO"
        clear_settings_cache()

    if config:
        try:
            set_settings(get_settings_for_cli(config_file=config))
        except Exception as e:
            CLIHandler(console).handle_error(e)
        logger.debug(f"Loaded configuration from {config}")

    if config or debug or verbose:
        configure_logging(get_settings())
        logger.debug("Logging reconfigured", debug=debug, verbose=verbose)


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
