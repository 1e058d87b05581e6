from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional, Tuple

from .log import get_logger
from .model import Address, Folder, IdAddress, Item, PathAddress, Root, parse_id

log = get_logger(__name__)

Location = Tuple[int, List[Item]]


def resolve(items: List[Item], address: Address) -> Optional[Location]:
    """Locate ``address`` in the tree rooted at ``items``.

    Returns the index of the addressed item together with the (mutable) list
    that holds it, or None when nothing matches. ``Root`` is a handle on the
    top-level list itself and always resolves to ``(0, items)``.

    Ambiguous ids or titles are not an error: the first match wins (breadth
    first for ids, in sibling order for each path segment).
    """
    if isinstance(address, Root):
        return 0, items
    if isinstance(address, IdAddress):
        return _resolve_id(items, address.id)
    if isinstance(address, PathAddress):
        return _resolve_path(items, address.segments)
    raise TypeError(f"Unsupported address: {address!r}")


def _resolve_id(items: List[Item], wanted: int) -> Optional[Location]:
    to_process: Deque[List[Item]] = deque([items])
    while to_process:
        siblings = to_process.popleft()
        for idx, item in enumerate(siblings):
            if parse_id(item.id) == wanted:
                return idx, siblings
        to_process.extend(i.items for i in siblings if isinstance(i, Folder))
    log.debug("No item with id %d", wanted)
    return None


def _resolve_path(items: List[Item], segments: List[str]) -> Optional[Location]:
    siblings = items
    last = len(segments) - 1
    for depth, segment in enumerate(segments):
        idx = _index_of_title(siblings, segment)
        if idx is None:
            log.debug("Path segment %r not found", segment)
            return None
        if depth == last:
            return idx, siblings
        found = siblings[idx]
        if not isinstance(found, Folder):
            log.debug("Path segment %r is a bookmark, cannot descend", segment)
            return None
        siblings = found.items
    return None


def _index_of_title(siblings: List[Item], title: str) -> Optional[int]:
    for idx, item in enumerate(siblings):
        if item.title.text == title:
            return idx
    return None
