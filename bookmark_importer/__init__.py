"""
Bookmark Importer.

Imports bookmark exports from any browser (generic bookmark HTML, Netscape
Bookmark files and JSON trees) into normalized, storage-ready records.
"""

from .core.data_models import BookmarkFormat, BookmarkRecord, ImportResult, ImportStats
from .core.import_module import (
    BookmarkFile,
    BookmarkImporter,
    ImportOptions,
    ImportStep,
    import_content,
    import_file,
)
from .utils.error_handler import (
    BookmarkImportError,
    FileReadError,
    FormatError,
    InvalidFormatError,
    SecurityViolationError,
    SizeExceededError,
    UnrecognizedFormatError,
)

__version__ = "1.0.0"

__all__ = [
    "import_file",
    "import_content",
    "BookmarkImporter",
    "BookmarkFile",
    "ImportOptions",
    "ImportStep",
    "BookmarkFormat",
    "BookmarkRecord",
    "ImportResult",
    "ImportStats",
    "BookmarkImportError",
    "FormatError",
    "UnrecognizedFormatError",
    "InvalidFormatError",
    "SecurityViolationError",
    "SizeExceededError",
    "FileReadError",
]
