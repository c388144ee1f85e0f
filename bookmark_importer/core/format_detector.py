"""
Bookmark export format detection.

Classifies raw export text as generic bookmark HTML, Netscape bookmark HTML
or JSON, using the file extension first and the content when the extension
is inconclusive.
"""

import json
import logging
import re
from dataclasses import dataclass
from pathlib import PurePath
from typing import Any, Optional, Tuple

from ..utils.error_handler import FormatError, UnrecognizedFormatError
from .data_models import BookmarkFormat

NETSCAPE_DOCTYPE_PATTERN = re.compile(
    r"<!DOCTYPE\s+NETSCAPE-Bookmark-file-1>", re.IGNORECASE
)
DT_TAG_PATTERN = re.compile(r"<dt>", re.IGNORECASE)

HTML_EXTENSIONS = {".html", ".htm"}
JSON_EXTENSIONS = {".json"}


@dataclass
class DetectionResult:
    """Detected format, plus the decoded JSON value when it was parsed."""

    format: BookmarkFormat
    parsed_json: Any = None


class FormatDetector:
    """Classifies bookmark exports by extension and content sniffing."""

    def __init__(self):
        """Initialize the format detector."""
        self.logger = logging.getLogger(__name__)

    def detect(self, content: str, filename: str) -> BookmarkFormat:
        """
        Detect the format of a bookmark export.

        Args:
            content: Export text
            filename: Original file name, used for its extension

        Returns:
            Detected BookmarkFormat

        Raises:
            FormatError: If a .json file does not parse
            UnrecognizedFormatError: If no rule matches
        """
        return self.classify(content, filename).format

    def classify(self, content: str, filename: str) -> DetectionResult:
        """
        Detect the format and keep the parsed JSON value for reuse.

        Args:
            content: Export text
            filename: Original file name

        Returns:
            DetectionResult for the content
        """
        extension = PurePath(filename or "").suffix.lower()

        if extension in JSON_EXTENSIONS:
            parsed, value = self._try_parse_json(content)
            if not parsed:
                raise FormatError("Invalid JSON file")
            return self._detected(BookmarkFormat.JSON, filename, value)

        if extension in HTML_EXTENSIONS:
            if NETSCAPE_DOCTYPE_PATTERN.search(content):
                return self._detected(BookmarkFormat.NETSCAPE, filename)
            return self._detected(BookmarkFormat.HTML, filename)

        # Extension is inconclusive, sniff the content
        if NETSCAPE_DOCTYPE_PATTERN.search(content):
            return self._detected(BookmarkFormat.NETSCAPE, filename)

        if DT_TAG_PATTERN.search(content):
            return self._detected(BookmarkFormat.HTML, filename)

        parsed, value = self._try_parse_json(content)
        if parsed:
            return self._detected(BookmarkFormat.JSON, filename, value)

        raise UnrecognizedFormatError(
            "Unrecognized file format. Supported formats: HTML, JSON, "
            "Netscape Bookmark"
        )

    def _detected(
        self, fmt: BookmarkFormat, filename: str, value: Any = None
    ) -> DetectionResult:
        self.logger.debug(f"Detected {fmt.value} format for {filename}")
        return DetectionResult(format=fmt, parsed_json=value)

    def _try_parse_json(self, content: str) -> Tuple[bool, Optional[Any]]:
        """Parse JSON, reporting failure instead of raising."""
        try:
            return True, json.loads(content)
        except (ValueError, RecursionError) as e:
            self.logger.debug(f"Content is not valid JSON: {e}")
            return False, None


__all__ = ["FormatDetector", "DetectionResult", "NETSCAPE_DOCTYPE_PATTERN"]
