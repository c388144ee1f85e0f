"""
Netscape bookmark file parser.

Netscape exports are not always cleanly nested, so instead of descending the
item structure this parser scans every link in document order, wherever it
sits, and labels it with its nearest enclosing folder: the closest enclosing
<DL> that is opened by an <H3> heading. The folder name is carried down the
walk rather than looked up from each link.
"""

from typing import Any, Iterator, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from ..data_models import BookmarkFormat
from .base import BookmarkParser, parse_epoch_seconds
from .nodes import ContainerNode, FolderNode, Node, UrlNode

FOLDER_HEADING = "h3"


class NetscapeParser(BookmarkParser):
    """Parser for the Netscape Bookmark file format."""

    format = BookmarkFormat.NETSCAPE

    def build_tree(self, content: str, parsed_json: Any = None) -> Node:
        soup = BeautifulSoup(content, "lxml")

        root = ContainerNode()
        group: Optional[FolderNode] = None

        # Consecutive links sharing a folder are grouped under one FolderNode
        for anchor, folder in self._scan(soup):
            node = self._url_node(anchor)
            if folder is None:
                root.children.append(node)
                group = None
                continue
            if group is None or group.name != folder:
                group = FolderNode(name=folder)
                root.children.append(group)
            group.children.append(node)

        return root

    def _scan(self, soup: BeautifulSoup) -> Iterator[Tuple[Tag, Optional[str]]]:
        """
        Yield every link in document order with its folder name.

        Uses an explicit stack so sloppily nested exports cannot exhaust the
        interpreter's recursion limit.
        """
        stack: List[Tuple[Tag, Optional[str], int]] = [(soup, None, 0)]

        while stack:
            element, folder, depth = stack.pop()

            if element.name == "a":
                if element.get("href") is not None:
                    yield element, folder
                continue

            if element.name == "dl":
                name = self._list_heading(element)
                if name:
                    depth += 1
                    self.check_depth(depth)
                    folder = name

            children = [child for child in element.children if isinstance(child, Tag)]
            for child in reversed(children):
                stack.append((child, folder, depth))

    def _list_heading(self, folder_list: Tag) -> Optional[str]:
        """
        Name of the heading that opens a list, if any.

        The heading is the closest element before the list, skipping item
        and paragraph tags, and must sit in the same enclosing list. This
        holds whether the heading's <DT> was left open around the list or
        closed before it.
        """
        for element in folder_list.previous_elements:
            if not isinstance(element, Tag):
                continue
            if element.name == FOLDER_HEADING:
                if element.find_parent("dl") is not folder_list.find_parent("dl"):
                    return None
                return element.get_text().strip() or None
            if element.name not in ("dt", "p"):
                return None
        return None

    def _url_node(self, anchor: Tag) -> UrlNode:
        return UrlNode(
            url=anchor.get("href", ""),
            title=anchor.get_text().strip(),
            date_added=parse_epoch_seconds(anchor.get("add_date")),
            last_visit=parse_epoch_seconds(anchor.get("last_visit")),
            favicon=anchor.get("icon") or anchor.get("icon_uri"),
        )


__all__ = ["NetscapeParser"]
