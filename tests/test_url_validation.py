"""
Tests for URL syntax checks and text decoding utilities.
"""

import pytest

from bookmark_importer.utils.encoding import decode_content
from bookmark_importer.utils.url_validation import has_excluded_scheme, is_absolute_url


class TestAbsoluteUrls:
    """Strict absolute URL checks."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://www.python.org/",
            "http://example.com:8080/path?q=1#frag",
            "https://192.168.0.1/admin",
            "http://[::1]:8000/",
            "ftp://files.example.com/pub",
            "mailto:someone@example.com",
            "file:///home/user/notes.html",
            "chrome://settings",
            "about:blank",
        ],
    )
    def test_valid(self, url):
        assert is_absolute_url(url)

    @pytest.mark.parametrize(
        "url",
        [
            "",
            None,
            "example.com",
            "/relative/path",
            "not a url",
            "http://",
            "https:example.com",
            "https://exa mple.com/",
            "https://example.com:99999/",
            "https://example.com:port/",
            "1http://example.com",
            "http://exa\tmple.com",
        ],
    )
    def test_invalid(self, url):
        assert not is_absolute_url(url)


class TestExcludedSchemes:
    """Schemes dropped while parsing."""

    @pytest.mark.parametrize(
        "url", ["javascript:alert(1)", "  JavaScript:void(0)", "data:text/plain,hi"]
    )
    def test_excluded(self, url):
        assert has_excluded_scheme(url)

    @pytest.mark.parametrize("url", ["https://a.com", "", None, "https://a.com/?javascript:"])
    def test_not_excluded(self, url):
        assert not has_excluded_scheme(url)


class TestDecodeContent:
    """Decoding raw export bytes."""

    def test_utf8(self):
        assert decode_content("Café".encode("utf-8")) == "Café"

    def test_utf8_bom_is_removed(self):
        assert decode_content(b"\xef\xbb\xbf<DL>") == "<DL>"

    def test_fallback_never_raises(self):
        text = decode_content(b"<DL> bookmarks \xc3\x28 end")
        assert "bookmarks" in text

    def test_legacy_encoding(self):
        content = (
            "<DT><A HREF=\"https://example.fr/\">Les préférences de l'été "
            "à côté du café</A>\n" * 20
        ).encode("latin-1")

        text = decode_content(content)

        assert 'HREF="https://example.fr/"' in text
        assert text.count("<DT>") == 20
