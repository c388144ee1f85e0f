"""
Owned bookmark tree shared by all parsers.

Each parser turns its input into this small tagged union and the common
walker in ``base`` turns the tree into records. The tree never references
the document it was built from.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Union


@dataclass
class UrlNode:
    """A single bookmark."""

    url: str
    title: Optional[str] = None
    date_added: Optional[datetime] = None
    last_visit: Optional[datetime] = None
    favicon: Optional[str] = None
    description: str = ""
    # None means "derive from the enclosing folder"
    tags: Optional[List[str]] = None
    folder: Optional[str] = None
    is_favorite: bool = False
    is_read: bool = False


@dataclass
class FolderNode:
    """A named group; its name becomes the folder of everything below it."""

    name: str
    children: List["Node"] = field(default_factory=list)


@dataclass
class ContainerNode:
    """An anonymous group that leaves the folder context unchanged."""

    children: List["Node"] = field(default_factory=list)


Node = Union[UrlNode, FolderNode, ContainerNode]


__all__ = ["UrlNode", "FolderNode", "ContainerNode", "Node"]
