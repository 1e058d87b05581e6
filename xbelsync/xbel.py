from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Union

from .errors import AddressNotFound, NotAFolder, RootNotSupported
from .log import get_logger
from .model import (
    Address,
    Bookmark,
    Folder,
    FolderEnd,
    IdAddress,
    Item,
    PathAddress,
    Placement,
    Root,
)
from .resolve import Location, resolve
from .traverse import highest_id, iter_items, iter_nesting

log = get_logger(__name__)

XBEL_VERSION = "1.0"


class HighestIdMinter:
    """New id = current highest id + 1, computed when asked.

    Nothing is reserved: minting twice against the same tree without adding
    the first item in between returns the same id twice.
    """

    def next_id(self, xbel: "Xbel") -> str:
        return str(xbel.highest_id() + 1)


class ReservingIdMinter:
    """Like HighestIdMinter, but never hands out the same id twice."""

    def __init__(self) -> None:
        self._last = 0

    def next_id(self, xbel: "Xbel") -> str:
        n = max(xbel.highest_id(), self._last) + 1
        self._last = n
        return str(n)


@dataclass
class Xbel:
    version: str = XBEL_VERSION
    items: List[Item] = field(default_factory=list)
    minter: Any = field(default_factory=HighestIdMinter, compare=False, repr=False)

    def __iter__(self) -> Iterator[Item]:
        return iter_items(self.items)

    def iter_nesting(self) -> Iterator[Union[Item, FolderEnd]]:
        return iter_nesting(self.items)

    def highest_id(self) -> int:
        return highest_id(self.items)

    def count(self) -> int:
        return sum(1 for _ in self)

    def get_items(self, address: Address) -> Location:
        """Resolve ``address`` to ``(index, sibling_list)`` or raise AddressNotFound."""
        found = resolve(self.items, address)
        if found is None:
            raise AddressNotFound(address)
        return found

    def new_bookmark(self, url: str, title: str) -> Bookmark:
        return Bookmark.new(self.minter.next_id(self), url, title)

    def add(self, address: Address, item: Item, placement: Optional[Placement] = None) -> None:
        """Insert ``item`` at ``address``.

        ``placement`` only matters for id addresses and defaults to the one the
        address carries. Every check happens before the tree is touched.
        """
        idx, siblings = self.get_items(address)

        if isinstance(address, Root):
            siblings.append(item)
        elif isinstance(address, IdAddress):
            placement = placement or address.placement
            if placement is Placement.BEFORE:
                siblings.insert(idx, item)
            elif placement is Placement.AFTER:
                siblings.insert(idx + 1, item)
            else:
                target = _as_folder(siblings[idx])
                if placement is Placement.PREPEND:
                    target.items.insert(0, item)
                else:
                    target.items.append(item)
        elif isinstance(address, PathAddress):
            _as_folder(siblings[idx]).items.append(item)
        else:
            raise TypeError(f"Unsupported address: {address!r}")

        log.debug("Added %s (id=%s) at %s", type(item).__name__.lower(), item.id, address)

    def add_bookmark(
        self,
        address: Address,
        url: str,
        title: str,
        placement: Optional[Placement] = None,
    ) -> Bookmark:
        bookmark = self.new_bookmark(url, title)
        self.add(address, bookmark, placement)
        return bookmark

    def remove(self, address: Address, dry_run: bool = False) -> Item:
        """Remove the addressed item (with its whole subtree) and return it.

        With ``dry_run`` the item is only located and returned.
        """
        if isinstance(address, Root):
            raise RootNotSupported("remove")
        idx, siblings = self.get_items(address)
        if dry_run:
            return siblings[idx]
        return siblings.pop(idx)


def _as_folder(item: Item) -> Folder:
    if not isinstance(item, Folder):
        raise NotAFolder(item.id)
    return item


def describe_item(item: Item) -> str:
    if isinstance(item, Folder):
        n = sum(1 for _ in iter_items(item.items))
        return f"folder [{item.id}] {item.title.text!r} ({n} nested item{'' if n == 1 else 's'})"
    return f"bookmark [{item.id}] {item.title.text!r} -> {item.href}"
