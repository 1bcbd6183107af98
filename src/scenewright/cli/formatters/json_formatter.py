"""JSON output formatter for CLI."""

from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from typing import Any

from scenewright.cli.formatters.base import OutputFormat, OutputFormatter


class JsonFormatter(OutputFormatter[Any]):
    """Generic JSON formatter for CLI output."""

    def format(self, data: Any, format_type: OutputFormat = OutputFormat.JSON) -> str:  # noqa: ARG002
        """Format data as JSON.

        Args:
            data: Data to format
            format_type: Output format type (ignored, always JSON)

        Returns:
            JSON string
        """
        if hasattr(data, "model_dump"):
            # Pydantic models
            return json.dumps(data.model_dump(mode="json"), default=str, indent=2)
        if isinstance(data, dict | list | tuple):
            return json.dumps(self._plain(data), default=str, indent=2)
        return json.dumps({"value": data}, default=str, indent=2)

    def _plain(self, data: Any) -> Any:
        if is_dataclass(data) and not isinstance(data, type):
            # Paragraphs carry their kind as a class attribute
            kind = getattr(data, "kind", None)
            values = {f.name: self._plain(getattr(data, f.name)) for f in fields(data)}
            return {"kind": kind.value, **values} if kind is not None else values
        if isinstance(data, dict):
            return {k: self._plain(v) for k, v in data.items()}
        if isinstance(data, list | tuple):
            return [self._plain(item) for item in data]
        if hasattr(data, "model_dump"):
            return data.model_dump(mode="json")
        return data

    def format_success(self, message: str, data: Any = None) -> str:
        """Format a success response.

        Args:
            message: Success message
            data: Optional additional data

        Returns:
            JSON string
        """
        response: dict[str, Any] = {"success": True, "message": message}
        if data is not None:
            response["data"] = self._plain(data)
        return json.dumps(response, default=str, indent=2)

    def format_error_response(self, error: str | Exception, code: int = 1) -> str:
        """Format an error response.

        Args:
            error: Error message or exception
            code: Error code

        Returns:
            JSON string
        """
        error_msg = str(error) if isinstance(error, Exception) else error
        response = {"success": False, "error": error_msg, "code": code}
        return json.dumps(response, indent=2)
