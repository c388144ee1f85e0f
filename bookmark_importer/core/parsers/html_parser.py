"""
Generic bookmark HTML parser.

Descends the definition-list structure of a bookmark export: an item holding
a link is a bookmark, an item holding a heading names the list that follows
it. Browsers rarely close their <DT> items, so list membership is decided by
the nearest enclosing <DL> rather than by direct parentage.
"""

from typing import Any, Iterator, List, Optional, Set, Tuple

from bs4 import BeautifulSoup, Tag

from ..data_models import BookmarkFormat
from .base import BookmarkParser, parse_epoch_seconds
from .nodes import ContainerNode, FolderNode, Node, UrlNode

FOLDER_HEADING = "h3"


def _nearest(tag: Tag, name: str) -> Optional[Tag]:
    return tag.find_parent(name)


def _descendants(root: Tag, stop: Tuple[str, ...]) -> Iterator[Tag]:
    """
    Yield the tags below root in document order.

    Elements named in ``stop`` are yielded but not entered, so each list is
    only scanned by the call that owns it.
    """
    stack = [child for child in reversed(root.contents) if isinstance(child, Tag)]
    while stack:
        element = stack.pop()
        yield element
        if element.name not in stop:
            stack.extend(
                child for child in reversed(element.contents) if isinstance(child, Tag)
            )


class HtmlFolderParser(BookmarkParser):
    """Parser for generic bookmark HTML using nested list descent."""

    format = BookmarkFormat.HTML

    def build_tree(self, content: str, parsed_json: Any = None) -> Node:
        soup = BeautifulSoup(content, "lxml")
        body = soup.body
        if body is None:
            self.logger.debug("Document has no body, nothing to import")
            return ContainerNode()

        return ContainerNode(self._parse_list(body, depth=0))

    def _parse_list(self, container: Tag, depth: int) -> List[Node]:
        """
        Parse the items and nested lists owned by a list element.

        Lists directly in the body form the document root and share its
        depth; any other list without a heading is one level deeper.

        Args:
            container: A <dl> element, or the document body for the top level
            depth: Current list nesting depth

        Returns:
            Nodes for the owned entries, in document order
        """
        self.check_depth(depth)

        claimed: Set[int] = set()
        nodes: List[Node] = []

        for element in _descendants(container, stop=("dl",)):
            if element.name == "dt":
                node = self._parse_item(element, depth, claimed)
                if node is not None:
                    nodes.append(node)
            elif element.name == "dl" and id(element) not in claimed:
                if container.name != "dl":
                    nodes.extend(self._parse_list(element, depth))
                else:
                    # A list with no heading keeps the surrounding folder
                    nodes.append(ContainerNode(self._parse_list(element, depth + 1)))

        return nodes

    def _parse_item(self, item: Tag, depth: int, claimed: Set[int]) -> Optional[Node]:
        """Parse one <dt> as a bookmark or a folder marker."""
        anchor = self._own_child(item, "a", "href")
        if anchor is not None:
            return self._url_node(anchor)

        heading = self._own_child(item, FOLDER_HEADING)
        if heading is None:
            return None

        folder_list = self._find_folder_list(item, heading)
        children: List[Node] = []
        if folder_list is not None:
            claimed.add(id(folder_list))
            children = self._parse_list(folder_list, depth + 1)

        name = heading.get_text().strip()
        if not name:
            return ContainerNode(children)
        return FolderNode(name=name, children=children)

    def _own_child(self, item: Tag, name: str, *attrs: str) -> Optional[Tag]:
        """Find the first element of a kind that belongs to this item."""
        for element in _descendants(item, stop=("dt",)):
            if element.name == name and all(element.has_attr(a) for a in attrs):
                return element
        return None

    def _find_folder_list(self, item: Tag, heading: Tag) -> Optional[Tag]:
        """
        Find the list immediately following a folder heading.

        Depending on how the item was closed the list ends up inside the
        item or right after it, so the first list after the heading in
        document order is taken, as long as no other item, link or heading
        comes first and it belongs to the same list as the item.
        """
        owner = _nearest(item, "dl")
        for element in heading.next_elements:
            if not isinstance(element, Tag):
                continue
            if element.name == "dl":
                return element if _nearest(element, "dl") is owner else None
            if element.name in ("dt", "a", FOLDER_HEADING):
                return None
        return None

    def _url_node(self, anchor: Tag) -> UrlNode:
        return UrlNode(
            url=anchor.get("href", ""),
            title=anchor.get_text().strip(),
            date_added=parse_epoch_seconds(anchor.get("add_date")),
            favicon=anchor.get("icon") or anchor.get("icon_uri"),
        )


__all__ = ["HtmlFolderParser"]
