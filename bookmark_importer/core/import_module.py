"""
Main import module interface for bookmark exports.

This module provides the high-level API for importing bookmark export files
from any browser and turning them into normalized, storage-ready records.
The pipeline runs a fixed sequence of stages and either returns a complete
result or raises a single error; partial results are never returned.
"""

import asyncio
import logging
import os
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from ..config.pydantic_config import ImporterConfig
from ..utils.encoding import decode_content
from ..utils.error_handler import FileReadError, compose_import_error
from .content_validator import ContentValidator
from .data_models import (
    BookmarkFormat,
    BookmarkRecord,
    ImportResult,
    ImportStats,
    unique_strings,
)
from .format_detector import FormatDetector
from .parsers import get_parser
from .post_processor import PostProcessor

ProgressCallback = Callable[[str, int], None]


class ImportStep(Enum):
    """Pipeline stages, in the order they run."""

    VALIDATION = "validation"
    PARSING = "parsing"
    PROCESSING = "processing"
    FILTERING = "filtering"
    COMPLETED = "completed"

    @property
    def percent(self) -> int:
        return STEP_PERCENT[self]


STEP_PERCENT = {
    ImportStep.VALIDATION: 10,
    ImportStep.PARSING: 30,
    ImportStep.PROCESSING: 60,
    ImportStep.FILTERING: 80,
    ImportStep.COMPLETED: 100,
}


@dataclass
class ImportOptions:
    """Configuration options for one import call."""

    max_bookmarks: int = 5000  # Cap, keeps the first N in source order
    validate_urls: bool = True  # Drop records without an absolute URL
    include_folders: bool = True  # Return folder names with the records
    filter_duplicates: bool = True  # Keep the first record per URL
    progress_callback: Optional[ProgressCallback] = None  # (step, percent)

    def __post_init__(self):
        if self.max_bookmarks < 0:
            raise ValueError("max_bookmarks cannot be negative")

    @classmethod
    def from_config(
        cls,
        config: ImporterConfig,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> "ImportOptions":
        """Build options from configured defaults."""
        defaults = config.defaults
        return cls(
            max_bookmarks=defaults.max_bookmarks,
            validate_urls=defaults.validate_urls,
            include_folders=defaults.include_folders,
            filter_duplicates=defaults.filter_duplicates,
            progress_callback=progress_callback,
        )


@dataclass
class BookmarkFile:
    """An export already held in memory, such as an uploaded file."""

    name: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


FileSource = Union[str, os.PathLike, BookmarkFile]


class BookmarkImporter:
    """
    High-level interface for importing bookmark exports.

    The importer holds only configuration; every call builds its own
    collections, so one instance can serve concurrent imports.
    """

    def __init__(
        self,
        options: Optional[ImportOptions] = None,
        config: Optional[ImporterConfig] = None,
    ):
        """
        Initialize the bookmark importer.

        Args:
            options: Default import options
            config: Limits and defaults; built-in values when omitted
        """
        self.config = config or ImporterConfig()
        self.options = options or ImportOptions.from_config(self.config)
        self.logger = logging.getLogger(__name__)

        self.detector = FormatDetector()
        self.validator = ContentValidator(
            max_bytes={
                BookmarkFormat(name): limit
                for name, limit in self.config.limits.max_bytes().items()
            }
        )

    async def import_file(
        self, file: FileSource, options: Optional[ImportOptions] = None
    ) -> ImportResult:
        """
        Read a bookmark export and import it.

        Reading the whole file is the only suspension point; the pipeline
        then runs to completion synchronously.

        Args:
            file: Path to the export, or an in-memory BookmarkFile
            options: Override default import options

        Returns:
            ImportResult for the file

        Raises:
            FileReadError: If the file cannot be read
            BookmarkImportError: If any pipeline stage fails
        """
        name, data = await self._read_file(file)

        try:
            self.validator.check_size(len(data))
        except Exception as e:
            raise compose_import_error(e, ImportStep.VALIDATION.value) from e

        content = decode_content(data)
        return self.import_content(content, name, len(data), options)

    async def _read_file(self, file: FileSource) -> Tuple[str, bytes]:
        if isinstance(file, BookmarkFile):
            return file.name, file.data

        path = Path(file)
        loop = asyncio.get_running_loop()
        try:
            data = await loop.run_in_executor(None, path.read_bytes)
        except OSError as e:
            self.logger.error(f"Error reading file {path}: {e}")
            raise FileReadError(f"Error reading file: {path.name}") from e

        self.logger.info(f"Read {len(data)} bytes from {path}")
        return path.name, data

    def import_content(
        self,
        content: str,
        filename: str,
        source_byte_size: Optional[int] = None,
        options: Optional[ImportOptions] = None,
    ) -> ImportResult:
        """
        Run the import pipeline on export text.

        Args:
            content: Export text
            filename: Original file name, used for format detection
            source_byte_size: Size of the source file; the UTF-8 length of
                the content when omitted
            options: Override default import options

        Returns:
            ImportResult with records, folders and statistics

        Raises:
            BookmarkImportError: The first stage failure, message prefixed
                with "Import error:" and chained to the original error
        """
        import_options = options or self.options
        if source_byte_size is None:
            source_byte_size = len(content.encode("utf-8"))

        start_time = time.time()
        stage = ImportStep.VALIDATION

        self.logger.info(f"Starting bookmark import: {filename}")

        try:
            self._notify(import_options, stage)
            detection = self.detector.classify(content, filename)
            fmt = detection.format
            self.validator.validate(content, fmt)

            stage = ImportStep.PARSING
            self._notify(import_options, stage)
            parser = get_parser(fmt, max_depth=self.config.limits.max_nesting_depth)
            parsed = parser.parse(content, detection.parsed_json)

            stage = ImportStep.PROCESSING
            self._notify(import_options, stage)
            processor = PostProcessor(
                max_bookmarks=import_options.max_bookmarks,
                validate_urls=import_options.validate_urls,
                filter_duplicates=import_options.filter_duplicates,
            )

            def enter_filtering():
                nonlocal stage
                stage = ImportStep.FILTERING
                self._notify(import_options, stage)

            processed = processor.process(parsed.records, enter_filtering)

            folders = self._referenced_folders(parsed.folders, processed.records)
            stats = ImportStats(
                total=len(processed.records),
                folder_count=len(folders),
                detected_format=fmt,
                source_byte_size=source_byte_size,
                parsed_count=len(parsed.records),
                truncated_count=processed.truncated_count,
                invalid_url_count=processed.invalid_url_count,
                duplicate_count=processed.duplicate_count,
                processing_time=time.time() - start_time,
            )
            result = ImportResult(
                records=processed.records,
                folders=folders if import_options.include_folders else [],
                stats=stats,
            )

            stage = ImportStep.COMPLETED
            self._notify(import_options, stage)

        except Exception as e:
            self.logger.error(
                f"Import of {filename} failed during {stage.value}: {e}"
            )
            raise compose_import_error(e, stage.value) from e

        self.logger.info(
            f"Import completed: {stats.total} bookmarks, "
            f"{stats.folder_count} folders ({fmt.value})"
        )
        self.logger.info(f"Processing time: {stats.processing_time:.2f}s")
        return result

    def _notify(self, options: ImportOptions, step: ImportStep) -> None:
        self.logger.debug(f"Import step {step.value} ({step.percent}%)")
        if options.progress_callback:
            options.progress_callback(step.value, step.percent)

    def _referenced_folders(
        self, parsed_folders: List[str], records: List[BookmarkRecord]
    ) -> List[str]:
        """Folder names used by surviving records, in parser order."""
        referenced = unique_strings(record.folder for record in records)
        used = set(referenced)
        ordered = [name for name in parsed_folders if name in used]
        ordered.extend(name for name in referenced if name not in ordered)
        return ordered


# Convenience functions for simple use cases


async def import_file(
    file: FileSource,
    options: Optional[ImportOptions] = None,
    config: Optional[ImporterConfig] = None,
) -> ImportResult:
    """
    Import a bookmark export file.

    Args:
        file: Path to the export, or an in-memory BookmarkFile
        options: Import options; configured defaults when omitted
        config: Limits and defaults

    Returns:
        ImportResult for the file
    """
    return await BookmarkImporter(options, config).import_file(file)


def import_content(
    content: str,
    filename: str,
    options: Optional[ImportOptions] = None,
    config: Optional[ImporterConfig] = None,
) -> ImportResult:
    """
    Import bookmark export text that is already in memory.

    Args:
        content: Export text
        filename: Original file name
        options: Import options; configured defaults when omitted
        config: Limits and defaults

    Returns:
        ImportResult for the content
    """
    return BookmarkImporter(options, config).import_content(content, filename)


__all__ = [
    "ImportStep",
    "ImportOptions",
    "BookmarkFile",
    "BookmarkImporter",
    "import_file",
    "import_content",
    "STEP_PERCENT",
]
