"""
Data models for the Bookmark Importer.

This module defines the normalized records and result structures produced
by an import. Records are storage-ready: the caller owns persistence.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

DEFAULT_TITLE = "Untitled"


class BookmarkFormat(Enum):
    """Textual dialects a bookmark export can be written in."""

    HTML = "html"
    NETSCAPE = "netscape"
    JSON = "json"


def unique_strings(values) -> List[str]:
    """Deduplicate strings keeping first-seen order, dropping blanks."""
    seen = set()
    result = []
    for value in values or []:
        if value is None:
            continue
        value = str(value).strip()
        if value and value not in seen:
            seen.add(value)
            result.append(value)
    return result


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class BookmarkRecord:
    """
    Normalized representation of one imported bookmark.

    Records only keep the name of their nearest enclosing folder; the source
    hierarchy is flattened on import.
    """

    url: str
    title: str = DEFAULT_TITLE
    description: str = ""
    tags: List[str] = field(default_factory=list)
    folder: Optional[str] = None
    date_added: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    last_visit: Optional[datetime] = None
    favicon: Optional[str] = None
    is_favorite: bool = False
    is_read: bool = False

    def __post_init__(self):
        """Apply defaults for blank fields and deduplicate tags."""
        self.title = (self.title or "").strip() or DEFAULT_TITLE
        self.description = self.description or ""
        self.tags = unique_strings(self.tags)
        if not self.folder:
            self.folder = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "title": self.title,
            "url": self.url,
            "description": self.description,
            "tags": list(self.tags),
            "folder": self.folder,
            "date_added": _isoformat(self.date_added),
            "last_visit": _isoformat(self.last_visit),
            "favicon": self.favicon,
            "is_favorite": self.is_favorite,
            "is_read": self.is_read,
        }


@dataclass
class ImportStats:
    """Statistics describing a finished import."""

    total: int = 0
    folder_count: int = 0
    detected_format: Optional[BookmarkFormat] = None
    source_byte_size: int = 0

    # Diagnostics gathered along the pipeline
    parsed_count: int = 0
    truncated_count: int = 0
    invalid_url_count: int = 0
    duplicate_count: int = 0
    processing_time: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "total": self.total,
            "folder_count": self.folder_count,
            "detected_format": (
                self.detected_format.value if self.detected_format else None
            ),
            "source_byte_size": self.source_byte_size,
            "parsed_count": self.parsed_count,
            "truncated_count": self.truncated_count,
            "invalid_url_count": self.invalid_url_count,
            "duplicate_count": self.duplicate_count,
            "processing_time": self.processing_time,
        }

    def get_summary(self) -> str:
        """Get human-readable summary"""
        detected = self.detected_format.value if self.detected_format else "unknown"
        return (
            f"Import Summary:\n"
            f"  Format: {detected}\n"
            f"  Source size: {self.source_byte_size} bytes\n"
            f"  Parsed: {self.parsed_count}\n"
            f"  Truncated: {self.truncated_count}\n"
            f"  Invalid URLs: {self.invalid_url_count}\n"
            f"  Duplicates: {self.duplicate_count}\n"
            f"  Imported: {self.total} bookmarks in {self.folder_count} folders\n"
            f"  Processing time: {self.processing_time:.2f}s"
        )


@dataclass
class ImportResult:
    """Records, folder names and statistics returned by one import call."""

    records: List[BookmarkRecord] = field(default_factory=list)
    folders: List[str] = field(default_factory=list)
    stats: ImportStats = field(default_factory=ImportStats)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "records": [record.to_dict() for record in self.records],
            "folders": list(self.folders),
            "stats": self.stats.to_dict(),
        }
