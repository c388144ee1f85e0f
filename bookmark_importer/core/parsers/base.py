"""
Base class for bookmark format parsers.

A parser builds an owned node tree from export content; the walker defined
here flattens that tree into records, threading the nearest folder name
downward through the recursion.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Union

from ...utils.error_handler import InvalidFormatError
from ...utils.url_validation import has_excluded_scheme
from ..data_models import BookmarkFormat, BookmarkRecord
from .nodes import ContainerNode, FolderNode, Node, UrlNode

DEFAULT_MAX_DEPTH = 100


@dataclass
class ParsedBookmarks:
    """Records and folder names produced by a parser, in document order."""

    records: List[BookmarkRecord] = field(default_factory=list)
    folders: List[str] = field(default_factory=list)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _from_epoch(seconds: float) -> Optional[datetime]:
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None


def parse_epoch_seconds(value: Union[str, int, float, None]) -> Optional[datetime]:
    """
    Parse a seconds-since-epoch attribute (ADD_DATE, LAST_VISIT).

    Returns:
        Timezone-aware datetime, or None if the value is missing or invalid
    """
    if value is None or value == "":
        return None
    try:
        return _from_epoch(int(str(value).strip()))
    except ValueError:
        return None


def parse_epoch_micros(value: Union[str, int, float, None]) -> Optional[datetime]:
    """Parse a microseconds-since-epoch value (JSON ``date_added``)."""
    if value is None or value == "":
        return None
    try:
        return _from_epoch(int(str(value).strip()) / 1_000_000)
    except ValueError:
        return None


def parse_date_value(value: Any) -> Optional[datetime]:
    """
    Parse a free-form date: an ISO 8601 string or milliseconds since epoch.

    Naive ISO values are taken as UTC.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _from_epoch(value / 1000)
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    return None


class BookmarkParser(ABC):
    """
    Common behaviour of the HTML, Netscape and JSON parsers.

    Subclasses implement ``build_tree``; ``parse`` flattens the tree.
    """

    format: BookmarkFormat

    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the parser.

        Args:
            max_depth: Deepest nesting accepted before the input is rejected
            clock: Source of the import time used for missing dates
        """
        self.max_depth = max_depth
        self.clock = clock or utc_now
        self.logger = logging.getLogger(self.__class__.__module__)

    @abstractmethod
    def build_tree(self, content: str, parsed_json: Any = None) -> Node:
        """Build the owned node tree for export content."""

    def parse(self, content: str, parsed_json: Any = None) -> ParsedBookmarks:
        """
        Parse export content into records and folder names.

        Args:
            content: Export text
            parsed_json: Already decoded JSON value, when available

        Returns:
            ParsedBookmarks in document order

        Raises:
            InvalidFormatError: If the structure is nested too deeply
        """
        tree = self.build_tree(content, parsed_json)
        result = self.flatten(tree)
        self.logger.info(
            f"Parsed {len(result.records)} bookmarks and "
            f"{len(result.folders)} folders from {self.format.value} content"
        )
        return result

    def flatten(self, root: Node) -> ParsedBookmarks:
        """Walk a node tree and emit one record per usable UrlNode."""
        result = ParsedBookmarks()
        imported_at = self.clock()
        self._walk(root, None, 0, result, imported_at)
        return result

    def check_depth(self, depth: int) -> None:
        """
        Raises:
            InvalidFormatError: If depth is beyond the configured maximum
        """
        if depth > self.max_depth:
            raise InvalidFormatError(
                f"Bookmark structure is nested too deeply "
                f"(max depth: {self.max_depth})"
            )

    def _walk(
        self,
        node: Node,
        current_folder: Optional[str],
        depth: int,
        result: ParsedBookmarks,
        imported_at: datetime,
    ) -> None:
        if isinstance(node, UrlNode):
            record = self._build_record(node, current_folder, imported_at)
            if record:
                result.records.append(record)
            return

        # Only folders and containers count toward the nesting limit
        self.check_depth(depth)

        if isinstance(node, FolderNode):
            if node.name not in result.folders:
                result.folders.append(node.name)
            current_folder = node.name
        for child in node.children:
            self._walk(child, current_folder, depth + 1, result, imported_at)

    def _build_record(
        self, node: UrlNode, current_folder: Optional[str], imported_at: datetime
    ) -> Optional[BookmarkRecord]:
        """Turn a UrlNode into a record, or None when it must be dropped."""
        url = node.url.strip() if isinstance(node.url, str) else ""
        if not url:
            return None
        if has_excluded_scheme(url):
            self.logger.debug(f"Skipping bookmark with excluded scheme: {url[:40]}")
            return None

        if node.tags is not None:
            tags = node.tags
        else:
            tags = [current_folder] if current_folder else []

        return BookmarkRecord(
            url=url,
            title=node.title or "",
            description=node.description or "",
            tags=tags,
            folder=node.folder or current_folder,
            date_added=node.date_added or imported_at,
            last_visit=node.last_visit,
            favicon=node.favicon or None,
            is_favorite=bool(node.is_favorite),
            is_read=bool(node.is_read),
        )


__all__ = [
    "BookmarkParser",
    "ParsedBookmarks",
    "DEFAULT_MAX_DEPTH",
    "parse_epoch_seconds",
    "parse_epoch_micros",
    "parse_date_value",
]
