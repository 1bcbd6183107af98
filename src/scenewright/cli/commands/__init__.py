"""CLI command implementations."""

from scenewright.cli.commands.editing import (
    add_scene_command,
    propose_command,
    update_command,
)
from scenewright.cli.commands.export import export_command
from scenewright.cli.commands.parse import parse_command
from scenewright.cli.commands.screenplay import (
    advance_command,
    new_command,
    show_command,
)

__all__ = [
    "add_scene_command",
    "advance_command",
    "export_command",
    "new_command",
    "parse_command",
    "propose_command",
    "show_command",
    "update_command",
]
