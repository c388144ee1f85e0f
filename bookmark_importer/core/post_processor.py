"""
Post-processing of parsed bookmark records.

Caps the record count, drops records without an absolute URL and removes
duplicate URLs, in that order.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set

from ..utils.url_validation import is_absolute_url
from .data_models import BookmarkRecord


@dataclass
class PostProcessingResult:
    """Surviving records and what each step removed"""

    records: List[BookmarkRecord] = field(default_factory=list)
    truncated_count: int = 0
    invalid_url_count: int = 0
    duplicate_count: int = 0

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary for serialization"""
        return {
            "kept": len(self.records),
            "truncated_count": self.truncated_count,
            "invalid_url_count": self.invalid_url_count,
            "duplicate_count": self.duplicate_count,
        }


class PostProcessor:
    """Applies count, URL and duplicate filtering to parsed records"""

    def __init__(
        self,
        max_bookmarks: int = 5000,
        validate_urls: bool = True,
        filter_duplicates: bool = True,
    ):
        """
        Initialize post-processor.

        Args:
            max_bookmarks: Number of records kept, first ones in source order
            validate_urls: Whether to drop records without an absolute URL
            filter_duplicates: Whether to keep only the first record per URL
        """
        self.max_bookmarks = max_bookmarks
        self.validate_urls = validate_urls
        self.filter_duplicates = filter_duplicates

        self.logger = logging.getLogger(__name__)

    def process(
        self,
        records: List[BookmarkRecord],
        before_filtering: Optional[Callable[[], None]] = None,
    ) -> PostProcessingResult:
        """
        Run every enabled step in order.

        Args:
            records: Parsed records in source order
            before_filtering: Called once URL checks are done, before
                duplicates are removed

        Returns:
            PostProcessingResult with the surviving records
        """
        result = PostProcessingResult()

        kept = self.truncate(records)
        result.truncated_count = len(records) - len(kept)

        if self.validate_urls:
            before = len(kept)
            kept = self.drop_invalid_urls(kept)
            result.invalid_url_count = before - len(kept)

        if before_filtering:
            before_filtering()

        if self.filter_duplicates:
            before = len(kept)
            kept = self.remove_duplicates(kept)
            result.duplicate_count = before - len(kept)

        result.records = kept
        self.logger.info(
            f"Post-processing kept {len(kept)} of {len(records)} bookmarks "
            f"(truncated: {result.truncated_count}, "
            f"invalid URLs: {result.invalid_url_count}, "
            f"duplicates: {result.duplicate_count})"
        )
        return result

    def truncate(self, records: List[BookmarkRecord]) -> List[BookmarkRecord]:
        """Keep the first max_bookmarks records."""
        if len(records) > self.max_bookmarks:
            self.logger.warning(
                f"Import limited to the first {self.max_bookmarks} of "
                f"{len(records)} bookmarks"
            )
        return records[: self.max_bookmarks]

    def drop_invalid_urls(self, records: List[BookmarkRecord]) -> List[BookmarkRecord]:
        """Drop records whose URL does not parse as an absolute URL."""
        valid = []
        for record in records:
            if is_absolute_url(record.url):
                valid.append(record)
            else:
                self.logger.debug(f"Dropping bookmark with invalid URL: {record.url}")
        return valid

    def remove_duplicates(self, records: List[BookmarkRecord]) -> List[BookmarkRecord]:
        """Keep the first record for each distinct URL."""
        seen: Set[str] = set()
        unique = []
        for record in records:
            if record.url in seen:
                continue
            seen.add(record.url)
            unique.append(record)
        return unique


__all__ = ["PostProcessor", "PostProcessingResult"]
