from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Union

from .errors import MalformedId


@dataclass
class Title:
    text: str = ""


@dataclass
class Bookmark:
    id: str
    href: str
    title: Title = field(default_factory=Title)

    @staticmethod
    def new(id: str, url: str, title: str) -> "Bookmark":
        return Bookmark(id=id, href=url, title=Title(title))


@dataclass
class Folder:
    id: str
    title: Title = field(default_factory=Title)
    items: List["Item"] = field(default_factory=list)

    @staticmethod
    def new(id: str, title: str, items: List["Item"] | None = None) -> "Folder":
        return Folder(id=id, title=Title(title), items=list(items or []))


# Closed union: every item in the tree is exactly one of these two.
Item = Union[Bookmark, Folder]


@dataclass(frozen=True)
class FolderEnd:
    """Marker emitted by the nesting traversal once a folder's subtree is done."""

    id: str


def parse_id(value: str) -> int:
    v = value or ""
    if not v.isdigit() or not v.isascii():
        raise MalformedId(value)
    return int(v)


def item_url(item: Item) -> str | None:
    if isinstance(item, Bookmark):
        return item.href
    return None


class Placement(str, Enum):
    BEFORE = "before"
    AFTER = "after"
    PREPEND = "prepend"
    APPEND = "append"


@dataclass(frozen=True)
class Root:
    def __str__(self) -> str:
        return "root"


@dataclass(frozen=True)
class IdAddress:
    id: int
    placement: Placement = Placement.APPEND

    def __str__(self) -> str:
        return f"id = {self.id}"


@dataclass(frozen=True)
class PathAddress:
    path: str

    @property
    def segments(self) -> List[str]:
        return self.path.split("/")

    def __str__(self) -> str:
        return f"path = {self.path}"


Address = Union[Root, IdAddress, PathAddress]
