"""Output formatters for CLI commands."""

from scenewright.cli.formatters.base import OutputFormat, OutputFormatter
from scenewright.cli.formatters.json_formatter import JsonFormatter
from scenewright.cli.formatters.screenplay_formatter import ScreenplayFormatter

__all__ = ["JsonFormatter", "OutputFormat", "OutputFormatter", "ScreenplayFormatter"]
