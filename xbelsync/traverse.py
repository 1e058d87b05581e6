from __future__ import annotations

from typing import Iterator, List, Optional, Tuple, Union

from .model import Folder, FolderEnd, Item, parse_id


def iter_items(items: List[Item]) -> Iterator[Item]:
    """Depth-first, preorder walk: a folder's subtree comes before its next sibling."""
    stack: List[Iterator[Item]] = [iter(items)]
    while stack:
        for item in stack[-1]:
            yield item
            if isinstance(item, Folder):
                stack.append(iter(item.items))
                break
        else:
            stack.pop()


def iter_nesting(items: List[Item]) -> Iterator[Union[Item, FolderEnd]]:
    """Same order as iter_items, plus a FolderEnd right after each folder's last descendant."""
    stack: List[Tuple[Optional[str], Iterator[Item]]] = [(None, iter(items))]
    while stack:
        folder_id, it = stack[-1]
        for item in it:
            yield item
            if isinstance(item, Folder):
                stack.append((item.id, iter(item.items)))
                break
        else:
            stack.pop()
            if folder_id is not None:
                yield FolderEnd(folder_id)


def highest_id(items: List[Item]) -> int:
    return max((parse_id(item.id) for item in iter_items(items)), default=0)
