"""
Tests for bookmark export format detection.
"""

import pytest

from bookmark_importer.core.data_models import BookmarkFormat
from bookmark_importer.core.format_detector import FormatDetector
from bookmark_importer.utils.error_handler import FormatError, UnrecognizedFormatError
from tests.fixtures.test_data import (
    CHROME_JSON_EXPORT,
    CHROME_NETSCAPE_EXPORT,
    GENERIC_HTML_EXPORT,
    to_json,
)


class TestExtensionRules:
    """Detection driven by the file extension."""

    def setup_method(self):
        self.detector = FormatDetector()

    def test_json_extension_with_valid_json(self):
        result = self.detector.classify(to_json(CHROME_JSON_EXPORT), "Bookmarks.json")

        assert result.format == BookmarkFormat.JSON
        assert result.parsed_json == CHROME_JSON_EXPORT

    def test_json_extension_is_case_insensitive(self):
        assert self.detector.detect("[]", "EXPORT.JSON") == BookmarkFormat.JSON

    def test_json_extension_with_invalid_json(self):
        with pytest.raises(FormatError, match="Invalid JSON file"):
            self.detector.detect("{not json", "bookmarks.json")

    def test_json_extension_never_falls_back_to_sniffing(self):
        with pytest.raises(FormatError):
            self.detector.detect(CHROME_NETSCAPE_EXPORT, "bookmarks.json")

    def test_html_extension_with_netscape_doctype(self):
        assert (
            self.detector.detect(CHROME_NETSCAPE_EXPORT, "bookmarks.html")
            == BookmarkFormat.NETSCAPE
        )

    def test_netscape_doctype_matched_case_insensitively(self):
        content = "<!doctype netscape-bookmark-file-1>\n<dl><dt><a href='x'>x</a></dl>"
        assert self.detector.detect(content, "b.htm") == BookmarkFormat.NETSCAPE

    def test_html_extension_without_doctype(self):
        assert (
            self.detector.detect(GENERIC_HTML_EXPORT, "exported.htm")
            == BookmarkFormat.HTML
        )

    def test_html_extension_does_not_need_markers(self):
        assert self.detector.detect("plain text", "notes.html") == BookmarkFormat.HTML


class TestContentSniffing:
    """Detection when the extension is missing or unknown."""

    def setup_method(self):
        self.detector = FormatDetector()

    def test_netscape_marker_wins(self):
        assert self.detector.detect(CHROME_NETSCAPE_EXPORT, "export.txt") == (
            BookmarkFormat.NETSCAPE
        )

    def test_dt_tag_means_html(self):
        assert self.detector.detect(GENERIC_HTML_EXPORT, "export") == BookmarkFormat.HTML

    def test_dt_tag_is_case_insensitive(self):
        assert self.detector.detect("<dl><dt>item</dl>", "") == BookmarkFormat.HTML

    def test_parsable_json_without_extension(self):
        result = self.detector.classify('[{"url": "https://a.com"}]', "download")

        assert result.format == BookmarkFormat.JSON
        assert result.parsed_json == [{"url": "https://a.com"}]

    def test_unrecognized_content(self):
        with pytest.raises(UnrecognizedFormatError) as exc_info:
            self.detector.detect("just some notes", "notes.txt")

        message = str(exc_info.value)
        assert "HTML" in message
        assert "JSON" in message
        assert "Netscape" in message

    def test_unrecognized_is_a_format_error(self):
        with pytest.raises(FormatError):
            self.detector.detect("", "empty")

    def test_absurdly_deep_json_is_not_json(self):
        content = "[" * 100000 + "]" * 100000

        with pytest.raises(UnrecognizedFormatError):
            self.detector.detect(content, "deep.dat")

    def test_html_detection_does_not_parse_json(self):
        result = self.detector.classify(GENERIC_HTML_EXPORT, "exported.html")
        assert result.parsed_json is None
