"""
Tests for the Netscape bookmark file parser.
"""

from datetime import datetime, timezone

import pytest

from bookmark_importer.core.parsers import NetscapeParser
from bookmark_importer.utils.error_handler import InvalidFormatError
from tests.fixtures.test_data import (
    CHROME_NETSCAPE_EXPORT,
    CHROME_NETSCAPE_URLS,
    make_netscape_export,
    nested_netscape_export,
    numbered_urls,
)

IMPORT_TIME = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class TestNetscapeParser:
    """Flat link scan with folder context carried downward."""

    def setup_method(self):
        self.parser = NetscapeParser(clock=lambda: IMPORT_TIME)

    def test_every_anchor_becomes_a_record(self):
        result = self.parser.parse(CHROME_NETSCAPE_EXPORT)

        assert [record.url for record in result.records] == CHROME_NETSCAPE_URLS

    @pytest.mark.parametrize("count", [1, 7, 120])
    def test_n_anchors_give_n_records(self, count):
        result = self.parser.parse(make_netscape_export(numbered_urls(count)))
        assert len(result.records) == count

    def test_folder_attribution(self):
        result = self.parser.parse(CHROME_NETSCAPE_EXPORT)

        folders = {record.url: record.folder for record in result.records}
        assert folders["https://www.python.org/"] == "Bookmarks bar"
        assert folders["https://work.example.com/dashboard"] == "Work"
        assert folders["https://wiki.example.com/"] == "Work"
        assert folders["https://news.example.com/"] == "Bookmarks bar"
        assert folders["https://top.example.org/"] is None

    def test_folders_in_document_order(self):
        result = self.parser.parse(CHROME_NETSCAPE_EXPORT)
        assert result.folders == ["Bookmarks bar", "Work"]

    def test_folder_is_initial_tag(self):
        result = self.parser.parse(CHROME_NETSCAPE_EXPORT)

        assert result.records[1].tags == ["Work"]
        assert result.records[4].tags == []

    def test_dates_and_icon(self):
        result = self.parser.parse(CHROME_NETSCAPE_EXPORT)

        python, dashboard = result.records[0], result.records[1]
        assert python.date_added == datetime.fromtimestamp(1600000001, tz=timezone.utc)
        assert python.favicon == "data:image/png;base64,iVBORw0KGgo="
        assert python.last_visit is None
        assert dashboard.last_visit == datetime.fromtimestamp(
            1600000100, tz=timezone.utc
        )

    def test_titles(self):
        result = self.parser.parse(CHROME_NETSCAPE_EXPORT)
        assert [record.title for record in result.records] == [
            "Python",
            "Dashboard",
            "Wiki",
            "News",
            "Top level",
        ]

    def test_excluded_schemes_are_skipped(self):
        urls = ["https://a.example.com/", "javascript:void(0)", "data:text/plain,hi"]
        result = self.parser.parse(make_netscape_export(urls))

        assert [record.url for record in result.records] == ["https://a.example.com/"]

    def test_missing_date_uses_import_time(self):
        content = (
            "<!DOCTYPE NETSCAPE-Bookmark-file-1>\n"
            '<DL><p>\n<DT><A HREF="https://a.example.com/">A</A>\n</DL><p>\n'
        )

        assert self.parser.parse(content).records[0].date_added == IMPORT_TIME

    def test_closed_items(self):
        content = """<!DOCTYPE NETSCAPE-Bookmark-file-1>
<DL>
    <DT><H3>Tools</H3></DT>
    <DL>
        <DT><A HREF="https://tools.example.com/">Tool</A></DT>
    </DL>
    <DT><A HREF="https://loose.example.com/">Loose</A></DT>
</DL>
"""
        result = self.parser.parse(content)

        assert [(r.title, r.folder) for r in result.records] == [
            ("Tool", "Tools"),
            ("Loose", None),
        ]

    def test_anchors_outside_lists_are_found(self):
        content = """<!DOCTYPE NETSCAPE-Bookmark-file-1>
<H1>Bookmarks</H1>
<P><A HREF="https://stray.example.com/">Stray</A></P>
<DL><p>
    <DT><A HREF="https://listed.example.com/">Listed</A>
</DL><p>
"""
        result = self.parser.parse(content)

        assert [record.title for record in result.records] == ["Stray", "Listed"]

    def test_nesting_at_limit(self):
        result = NetscapeParser(max_depth=10).parse(nested_netscape_export(10))

        assert [record.url for record in result.records] == ["https://deep.example.com/"]
        assert result.records[0].folder == "F9"

    def test_nesting_over_limit(self):
        with pytest.raises(InvalidFormatError, match="nested too deeply"):
            NetscapeParser(max_depth=10).parse(nested_netscape_export(11))
