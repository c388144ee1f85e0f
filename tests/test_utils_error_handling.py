"""
Tests for the import error taxonomy.
"""

import pytest

from bookmark_importer.utils.error_handler import (
    BookmarkImportError,
    ConfigurationError,
    FileReadError,
    FormatError,
    InvalidFormatError,
    SecurityViolationError,
    SizeExceededError,
    UnrecognizedFormatError,
    compose_import_error,
)


class TestErrorHierarchy:
    """Every import error derives from BookmarkImportError."""

    @pytest.mark.parametrize(
        "error_class",
        [
            FormatError,
            UnrecognizedFormatError,
            InvalidFormatError,
            SecurityViolationError,
            SizeExceededError,
            FileReadError,
            ConfigurationError,
        ],
    )
    def test_subclasses(self, error_class):
        assert issubclass(error_class, BookmarkImportError)

    def test_unrecognized_is_format_error(self):
        assert issubclass(UnrecognizedFormatError, FormatError)

    def test_message_and_stage(self):
        error = SizeExceededError("File too large", stage="validation")

        assert error.message == "File too large"
        assert error.stage == "validation"


class TestComposeImportError:
    """Errors surfaced by an aborted import."""

    def test_keeps_known_class(self):
        error = compose_import_error(
            SecurityViolationError("Potentially malicious content detected"), "validation"
        )

        assert type(error) is SecurityViolationError
        assert str(error) == "Import error: Potentially malicious content detected"
        assert error.stage == "validation"

    def test_wraps_unknown_errors(self):
        error = compose_import_error(KeyError("boom"), "parsing")

        assert type(error) is BookmarkImportError
        assert str(error).startswith("Import error: ")
        assert error.stage == "parsing"
