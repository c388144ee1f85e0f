"""
JSON bookmark parser.

Bookmark JSON is not standardized across exporting tools, so each object is
decoded by the shape of its fields, tried in a fixed priority order:

1. ``{"type": "url", "url": ...}``        Chrome/Edge bookmark
2. ``{"type": "folder", "children": ...}`` Chrome/Edge folder
3. ``{"children": ...}``                   anonymous container
4. ``{"url": ...}``                        flat bookmark with optional metadata
5. any other object                        container over its nested values

Arrays are containers over their elements; scalars are ignored.
"""

import json
from typing import Any, List, Optional

from ...utils.error_handler import InvalidFormatError
from ..data_models import BookmarkFormat
from .base import BookmarkParser, parse_date_value, parse_epoch_micros
from .nodes import ContainerNode, FolderNode, Node, UrlNode


def _present(value: Any) -> bool:
    """Presence test where empty lists and objects still count."""
    if isinstance(value, (list, dict)):
        return True
    return bool(value)


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _flag(item: dict, *keys: str) -> bool:
    return any(bool(item.get(key)) for key in keys)


def _tags(value: Any) -> Optional[List[str]]:
    if isinstance(value, list):
        return [str(tag) for tag in value if isinstance(tag, (str, int, float))]
    if isinstance(value, str):
        return [tag.strip() for tag in value.split(",")]
    return None


class JsonTreeParser(BookmarkParser):
    """Parser for the JSON bookmark dialects."""

    format = BookmarkFormat.JSON

    def build_tree(self, content: str, parsed_json: Any = None) -> Node:
        data = parsed_json
        if data is None:
            try:
                data = json.loads(content)
            except (ValueError, RecursionError) as e:
                raise InvalidFormatError("Invalid JSON format") from e

        # The document itself is the root container at depth 0
        values = data if isinstance(data, list) else [data]
        return ContainerNode(self._decode_all(values, depth=0))

    def _decode(self, value: Any, depth: int) -> Optional[Node]:
        """Decode one JSON value into a node, or None for scalars."""
        if isinstance(value, list):
            self.check_depth(depth)
            return ContainerNode(self._decode_all(value, depth))
        if not isinstance(value, dict):
            return None

        node_type = value.get("type")

        if node_type == "url" and _present(value.get("url")):
            return self._typed_url(value)

        if node_type == "folder" and _present(value.get("children")):
            self.check_depth(depth)
            children = self._decode_children(value["children"], depth)
            name = _text(value.get("name")) or _text(value.get("title"))
            name = name.strip() if name else ""
            if not name:
                return ContainerNode(children)
            return FolderNode(name=name, children=children)

        if _present(value.get("children")):
            self.check_depth(depth)
            return ContainerNode(self._decode_children(value["children"], depth))

        if _present(value.get("url")):
            return self._plain_url(value)

        self.check_depth(depth)
        return ContainerNode(
            self._decode_all(
                [v for v in value.values() if isinstance(v, (dict, list))], depth
            )
        )

    def _decode_children(self, value: Any, depth: int) -> List[Node]:
        """A group's ``children``; an array is spliced in rather than nested."""
        return self._decode_all(value if isinstance(value, list) else [value], depth)

    def _decode_all(self, values: List[Any], depth: int) -> List[Node]:
        """Decode the members of a group at depth, one level below it."""
        children = []
        for item in values:
            node = self._decode(item, depth + 1)
            if node is not None:
                children.append(node)
        return children

    def _typed_url(self, item: dict) -> Optional[UrlNode]:
        """Chrome/Edge style bookmark entry."""
        url = _text(item.get("url"))
        if url is None:
            return None
        return UrlNode(
            url=url,
            title=_text(item.get("name")) or _text(item.get("title")),
            date_added=parse_epoch_micros(item.get("date_added")),
        )

    def _plain_url(self, item: dict) -> Optional[UrlNode]:
        """Flat bookmark entry; explicit metadata wins over folder context."""
        url = _text(item.get("url"))
        if url is None:
            return None
        return UrlNode(
            url=url,
            title=_text(item.get("title")) or _text(item.get("name")),
            description=_text(item.get("description")) or "",
            tags=_tags(item.get("tags")) if _present(item.get("tags")) else None,
            folder=_text(item.get("folder")),
            date_added=parse_date_value(
                item.get("dateAdded", item.get("date_added"))
            ),
            favicon=_text(item.get("favicon")),
            is_favorite=_flag(item, "is_favorite", "isFavorite"),
            is_read=_flag(item, "is_read", "isRead"),
        )


__all__ = ["JsonTreeParser"]
