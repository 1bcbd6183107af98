"""Tests for custom exception classes."""

import pytest

from scenewright.exceptions import (
    ConfigurationError,
    EntityNotFoundError,
    ExportError,
    ParseError,
    ProposalError,
    ScenewrightError,
    ScreenplayNotFoundError,
    StoreError,
    UnsupportedLayoutError,
    check_config_keys,
)


class TestScenewrightError:
    """Test the base exception formatting."""

    def test_message_only(self):
        """Test an error without hint or details."""
        error = ScenewrightError("Something broke")
        assert str(error) == "Error: Something broke"
        assert error.hint is None
        assert error.details is None

    def test_full_formatting(self):
        """Test that hint and details are rendered on their own lines."""
        error = ScenewrightError(
            message="Export failed",
            hint="Try again",
            details={"format": "pdf", "pages": 3},
        )
        error_str = str(error)
        assert error_str.startswith("Error: Export failed")
        assert "\nHint: Try again" in error_str
        assert "Details:" in error_str
        assert "  format: pdf" in error_str
        assert "  pages: 3" in error_str


class TestStoreErrors:
    """Test store-related exceptions."""

    def test_screenplay_not_found(self):
        """Test the missing screenplay error."""
        error = ScreenplayNotFoundError(42)
        assert isinstance(error, StoreError)
        assert error.screenplay_id == 42
        assert error.message == "Screenplay 42 not found"
        assert "scenewright new" in error.hint
        assert error.details == {"screenplay_id": 42}

    def test_entity_not_found(self):
        """Test the missing entity error."""
        error = EntityNotFoundError("scenes", 7, 1)
        assert isinstance(error, StoreError)
        assert error.collection == "scenes"
        assert error.entity_id == 7
        assert "No scenes entry with id 7" in str(error)
        assert error.details["screenplay_id"] == 1


@pytest.mark.parametrize(
    "error_class",
    [ConfigurationError, ParseError, StoreError, ProposalError, ExportError],
)
def test_errors_share_base(error_class):
    """Test that every error derives from ScenewrightError."""
    assert issubclass(error_class, ScenewrightError)


def test_unsupported_layout_is_export_error():
    """Test that layout errors are export errors."""
    error = UnsupportedLayoutError("Dual dialogue", details={"left": 2})
    assert isinstance(error, ExportError)


class TestCheckConfigKeys:
    """Test detection of misspelled configuration keys."""

    def test_valid_keys_pass(self):
        """Test that correct keys raise nothing."""
        check_config_keys({"database_path": "x.db", "log_level": "INFO"})

    @pytest.mark.parametrize(
        ("wrong", "correct"),
        [
            ("db_path", "database_path"),
            ("api_key", "proposal_api_key"),
            ("endpoint", "proposal_endpoint"),
            ("fonts_url", "font_base_url"),
        ],
    )
    def test_wrong_key_raises(self, wrong, correct):
        """Test that a known mistake points at the correct key."""
        with pytest.raises(ConfigurationError) as exc_info:
            check_config_keys({wrong: "value"})

        assert exc_info.value.hint == f"Use '{correct}' instead of '{wrong}'"
        assert exc_info.value.details["invalid_key"] == wrong
