"""
Error taxonomy for the Bookmark Importer.

All exceptions raised by the import pipeline derive from
``BookmarkImportError``. Messages are phrased for direct display to end users.
"""

from typing import Optional


# ============================================================================
# Unified Exception Hierarchy for Bookmark Importer
# ============================================================================
# Import these exceptions from bookmark_importer.utils.error_handler
# ============================================================================


class BookmarkImportError(Exception):
    """Base exception for all bookmark import errors."""

    def __init__(self, message: str = "", stage: Optional[str] = None):
        super().__init__(message)
        self.stage = stage

    @property
    def message(self) -> str:
        return str(self)


# ============================================================================
# Format Errors
# ============================================================================


class FormatError(BookmarkImportError):
    """The file could not be classified as a supported bookmark format."""

    pass


class UnrecognizedFormatError(FormatError):
    """No detection rule matched the file."""

    pass


class InvalidFormatError(BookmarkImportError):
    """Content lacks the markers every export of its format carries."""

    pass


# ============================================================================
# Content Errors
# ============================================================================


class SecurityViolationError(BookmarkImportError):
    """Content matched a known-dangerous pattern."""

    pass


class SizeExceededError(BookmarkImportError):
    """Content is larger than its format ceiling."""

    pass


# ============================================================================
# I/O and Configuration Errors
# ============================================================================


class FileReadError(BookmarkImportError):
    """The file could not be read as text."""

    pass


class ConfigurationError(BookmarkImportError):
    """Configuration-related errors."""

    pass


def compose_import_error(
    error: Exception, stage: Optional[str] = None
) -> BookmarkImportError:
    """
    Build the single error an aborted import surfaces to its caller.

    Known errors keep their class so callers can still tell a hostile file
    from a malformed one; anything else is wrapped in BookmarkImportError.

    Args:
        error: The exception that aborted the pipeline
        stage: Pipeline stage that was running

    Returns:
        Error whose message carries the "Import error:" prefix
    """
    error_class = (
        type(error) if isinstance(error, BookmarkImportError) else BookmarkImportError
    )
    return error_class(f"Import error: {error}", stage=stage)


__all__ = [
    "BookmarkImportError",
    "FormatError",
    "UnrecognizedFormatError",
    "InvalidFormatError",
    "SecurityViolationError",
    "SizeExceededError",
    "FileReadError",
    "ConfigurationError",
    "compose_import_error",
]
