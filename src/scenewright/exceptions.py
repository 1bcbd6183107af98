"""Custom exception hierarchy for Scenewright with helpful error messages."""

from __future__ import annotations

from typing import Any


class ScenewrightError(Exception):
    """Base exception with helpful formatting for all Scenewright errors.

    Provides structured error messages with hints and details to help users
    understand and fix problems.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize exception with structured error information.

        Args:
            message: Primary error message describing what went wrong
            hint: Optional hint suggesting how to fix the problem
            details: Optional dictionary with additional debugging information
        """
        self.message = message
        self.hint = hint
        self.details = details
        super().__init__(self.format_error())

    def format_error(self) -> str:
        """Format the error message with hint and details.

        Returns:
            Formatted error string with all available information
        """
        output = f"Error: {self.message}"
        if self.hint:
            output += f"\nHint: {self.hint}"
        if self.details:
            details_str = "\n".join(
                f"  {key}: {value}" for key, value in self.details.items()
            )
            output += f"\nDetails:\n{details_str}"
        return output


class ConfigurationError(ScenewrightError):
    """Configuration errors including invalid settings and missing config files."""

    pass


class ParseError(ScenewrightError):
    """Fountain source could not be read (content itself never fails to parse)."""

    pass


class StoreError(ScenewrightError):
    """Document store failures including connection and persistence issues."""

    pass


class ScreenplayNotFoundError(StoreError):
    """The requested screenplay does not exist in the store."""

    def __init__(self, screenplay_id: int) -> None:
        """Initialize with the missing screenplay id.

        Args:
            screenplay_id: Identifier that was looked up
        """
        self.screenplay_id = screenplay_id
        super().__init__(
            message=f"Screenplay {screenplay_id} not found",
            hint="Run 'scenewright new' to create a screenplay first",
            details={"screenplay_id": screenplay_id},
        )


class EntityNotFoundError(StoreError):
    """A character, relationship, subplot or scene id is unknown."""

    def __init__(self, collection: str, entity_id: int, screenplay_id: int) -> None:
        """Initialize with the collection and id that failed to resolve.

        Args:
            collection: Name of the screenplay collection (e.g. "scenes")
            entity_id: Identifier that was looked up
            screenplay_id: Owning screenplay
        """
        self.collection = collection
        self.entity_id = entity_id
        super().__init__(
            message=f"No {collection} entry with id {entity_id}",
            details={
                "collection": collection,
                "entity_id": entity_id,
                "screenplay_id": screenplay_id,
            },
        )


class ProposalError(ScenewrightError):
    """AI proposal service failures. Surfaced to the caller, never retried."""

    pass


class ExportError(ScenewrightError):
    """Export generation errors."""

    pass


class UnsupportedLayoutError(ExportError):
    """A paragraph layout cannot be represented faithfully in the target format."""

    pass


def check_config_keys(config: dict[str, Any]) -> None:
    """Check for common configuration mistakes.

    Args:
        config: Configuration dictionary to validate

    Raises:
        ConfigurationError: With hints about correct configuration keys
    """
    wrong_keys = {
        "db_path": "database_path",
        "api_key": "proposal_api_key",  # pragma: allowlist secret
        "endpoint": "proposal_endpoint",
        "fonts_url": "font_base_url",
    }

    for wrong, correct in wrong_keys.items():
        if wrong in config:
            raise ConfigurationError(
                message=f"Invalid configuration key '{wrong}'",
                hint=f"Use '{correct}' instead of '{wrong}'",
                details={
                    "found_keys": list(config.keys()),
                    "invalid_key": wrong,
                    "correct_key": correct,
                },
            )
