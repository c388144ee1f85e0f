"""
Tests for post-processing of parsed records.
"""

from bookmark_importer.core.data_models import BookmarkRecord
from bookmark_importer.core.post_processor import PostProcessor
from tests.fixtures.test_data import numbered_urls


def make_records(urls):
    return [BookmarkRecord(url=url, title=f"Title {i}") for i, url in enumerate(urls)]


class TestPostProcessor:
    """Truncation, URL checks and duplicate removal, in that order."""

    def setup_method(self):
        self.processor = PostProcessor()

    def test_keeps_first_records_in_order(self):
        records = make_records(numbered_urls(100))

        result = PostProcessor(max_bookmarks=10).process(records)

        assert result.records == records[:10]
        assert result.truncated_count == 90

    def test_drops_invalid_urls(self):
        records = make_records(
            ["https://a.example.com/", "not a url", "http://", "/relative", "mailto:me@example.com"]
        )

        result = self.processor.process(records)

        assert [r.url for r in result.records] == [
            "https://a.example.com/",
            "mailto:me@example.com",
        ]
        assert result.invalid_url_count == 3

    def test_keeps_invalid_urls_when_disabled(self):
        records = make_records(["not a url"])

        result = PostProcessor(validate_urls=False).process(records)

        assert len(result.records) == 1
        assert result.invalid_url_count == 0

    def test_first_duplicate_wins(self):
        records = [
            BookmarkRecord(url="https://dup.example.com/", title="First"),
            BookmarkRecord(url="https://other.example.com/", title="Other"),
            BookmarkRecord(url="https://dup.example.com/", title="Second"),
        ]

        result = self.processor.process(records)

        assert [r.title for r in result.records] == ["First", "Other"]
        assert result.duplicate_count == 1

    def test_duplicates_compare_exact_strings(self):
        records = make_records(["https://a.example.com/", "https://a.example.com"])
        assert len(self.processor.process(records).records) == 2

    def test_keeps_duplicates_when_disabled(self):
        records = make_records(["https://a.example.com/"] * 3)

        result = PostProcessor(filter_duplicates=False).process(records)

        assert len(result.records) == 3

    def test_truncation_happens_before_deduplication(self):
        records = make_records(["https://a.example.com/"] * 5 + ["https://b.example.com/"])

        result = PostProcessor(max_bookmarks=5).process(records)

        assert [r.url for r in result.records] == ["https://a.example.com/"]
        assert result.truncated_count == 1
        assert result.duplicate_count == 4

    def test_hook_runs_between_url_checks_and_deduplication(self):
        calls = []

        self.processor.process(make_records(["https://a.example.com/"]), lambda: calls.append(1))

        assert calls == [1]

    def test_empty_input(self):
        result = self.processor.process([])

        assert result.records == []
        assert result.to_dict() == {
            "kept": 0,
            "truncated_count": 0,
            "invalid_url_count": 0,
            "duplicate_count": 0,
        }
