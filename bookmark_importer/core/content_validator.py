"""
Content Validation Module

Textual checks run on raw export content before any parser builds a tree
from it: a per-format size ceiling, a denylist of dangerous patterns and an
allowlist of markers every genuine export carries.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Pattern

from ..utils.error_handler import (
    InvalidFormatError,
    SecurityViolationError,
    SizeExceededError,
)
from .data_models import BookmarkFormat

MB = 1024 * 1024

DEFAULT_MAX_BYTES = {
    BookmarkFormat.HTML: 50 * MB,
    BookmarkFormat.NETSCAPE: 30 * MB,
    BookmarkFormat.JSON: 20 * MB,
}

# Content that must never reach a parser, per format. Bookmarklets in
# Netscape exports are dropped by the parser instead.
SCHEME_PATTERNS = [
    r"javascript:",  # JavaScript protocol
    r"data:text/html",  # HTML data URLs
    r"vbscript:",  # VBScript protocol
]

DANGEROUS_PATTERNS = {
    BookmarkFormat.HTML: [
        r"<script",  # Script tags
        *SCHEME_PATTERNS,
        r"<[^<>]*\son[a-z]+\s*=",  # Inline event handlers (onload=, onerror=, ...)
    ],
    BookmarkFormat.NETSCAPE: [],
    BookmarkFormat.JSON: list(SCHEME_PATTERNS),
}

# Markers a genuine export of each format contains
REQUIRED_PATTERNS = {
    BookmarkFormat.HTML: [
        r"<dt>",  # Definition-list item
        r"href\s*=",  # Link attribute
    ],
    BookmarkFormat.NETSCAPE: [
        r"<!DOCTYPE\s+NETSCAPE-Bookmark-file-1>",
        r"<a\s+href\s*=",
    ],
    BookmarkFormat.JSON: [],
}


@dataclass
class FormatRules:
    """Compiled checks for one format."""

    max_bytes: int
    dangerous_patterns: List[Pattern] = field(default_factory=list)
    required_patterns: List[Pattern] = field(default_factory=list)


class ContentValidator:
    """Rejects oversized, hostile or implausible export content."""

    def __init__(self, max_bytes: Optional[Dict[BookmarkFormat, int]] = None):
        """
        Initialize content validator.

        Args:
            max_bytes: Optional byte ceilings overriding the defaults per format
        """
        self.logger = logging.getLogger(__name__)

        ceilings = dict(DEFAULT_MAX_BYTES)
        ceilings.update(max_bytes or {})

        self.rules = {
            fmt: FormatRules(
                max_bytes=ceilings[fmt],
                dangerous_patterns=[
                    re.compile(p, re.IGNORECASE) for p in DANGEROUS_PATTERNS[fmt]
                ],
                required_patterns=[
                    re.compile(p, re.IGNORECASE) for p in REQUIRED_PATTERNS[fmt]
                ],
            )
            for fmt in BookmarkFormat
        }

    @property
    def largest_ceiling(self) -> int:
        """Largest byte ceiling across all formats."""
        return max(rules.max_bytes for rules in self.rules.values())

    def validate(self, content: str, fmt: BookmarkFormat) -> None:
        """
        Validate export content for its detected format.

        Checks run in a fixed order: size, denylist, allowlist.

        Args:
            content: Export text
            fmt: Detected format

        Raises:
            SizeExceededError: If the content is larger than the ceiling
            SecurityViolationError: If a dangerous pattern is present
            InvalidFormatError: If a required marker is missing
        """
        rules = self.rules[fmt]

        self.check_size(len(content.encode("utf-8")), fmt)

        for pattern in rules.dangerous_patterns:
            if pattern.search(content):
                self.logger.warning(
                    f"Dangerous pattern detected in {fmt.value} content: "
                    f"{pattern.pattern}"
                )
                raise SecurityViolationError(
                    "Potentially malicious content detected"
                )

        for pattern in rules.required_patterns:
            if not pattern.search(content):
                self.logger.info(
                    f"Required {fmt.value} marker missing: {pattern.pattern}"
                )
                raise InvalidFormatError(
                    "The file does not appear to contain valid bookmarks"
                )

    def check_size(self, byte_size: int, fmt: Optional[BookmarkFormat] = None) -> None:
        """
        Check a byte size against a format ceiling.

        Without a format the largest ceiling applies, which lets callers
        reject hopeless files before decoding them.

        Raises:
            SizeExceededError: If the size is over the ceiling
        """
        limit = self.rules[fmt].max_bytes if fmt else self.largest_ceiling
        if byte_size > limit:
            raise SizeExceededError(
                f"File too large (max: {limit / MB:g}MB)"
            )


__all__ = [
    "ContentValidator",
    "FormatRules",
    "DEFAULT_MAX_BYTES",
    "DANGEROUS_PATTERNS",
    "SCHEME_PATTERNS",
    "REQUIRED_PATTERNS",
]
