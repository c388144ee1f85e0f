"""
Bookmark format parsers.

One independent strategy per export dialect, all producing the same node
tree and records.
"""

from typing import Dict, Type

from ..data_models import BookmarkFormat
from .base import BookmarkParser, ParsedBookmarks
from .html_parser import HtmlFolderParser
from .json_parser import JsonTreeParser
from .netscape_parser import NetscapeParser
from .nodes import ContainerNode, FolderNode, Node, UrlNode

PARSERS: Dict[BookmarkFormat, Type[BookmarkParser]] = {
    BookmarkFormat.HTML: HtmlFolderParser,
    BookmarkFormat.NETSCAPE: NetscapeParser,
    BookmarkFormat.JSON: JsonTreeParser,
}


def get_parser(fmt: BookmarkFormat, **kwargs) -> BookmarkParser:
    """Create the parser for a detected format."""
    return PARSERS[fmt](**kwargs)


__all__ = [
    "BookmarkParser",
    "ParsedBookmarks",
    "HtmlFolderParser",
    "NetscapeParser",
    "JsonTreeParser",
    "UrlNode",
    "FolderNode",
    "ContainerNode",
    "Node",
    "PARSERS",
    "get_parser",
]
