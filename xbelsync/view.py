from __future__ import annotations

from typing import List

from .model import Bookmark, Folder, FolderEnd, Item, item_url
from .xbel import Xbel

FOLDER_ICON = "\U0001F4C1"
LINK_ICON = "\U0001F517"

FIND_KINDS = ("all", "folder", "bookmark")
FIND_WHERE = ("all", "title", "url")


def render_tree(xbel: Xbel, indent: int = 2) -> List[str]:
    lines: List[str] = []
    depth = 0
    for entry in xbel.iter_nesting():
        if isinstance(entry, FolderEnd):
            depth -= 1
            continue
        pad = " " * (depth * indent)
        if isinstance(entry, Folder):
            lines.append(f"{pad}[{FOLDER_ICON} {entry.id}] {entry.title.text}")
            depth += 1
        else:
            lines.append(f"{pad}[{LINK_ICON} {entry.id}] {entry.title.text}")
            lines.append(f"{pad}- {entry.href}")
    return lines


def find_items(xbel: Xbel, needle: str, *, kind: str = "all", where: str = "all") -> List[Item]:
    if kind not in FIND_KINDS:
        raise ValueError(f"Unknown kind: {kind}")
    if where not in FIND_WHERE:
        raise ValueError(f"Unknown search field: {where}")

    out: List[Item] = []
    for item in xbel:
        if kind == "folder" and not isinstance(item, Folder):
            continue
        if kind == "bookmark" and not isinstance(item, Bookmark):
            continue
        in_title = needle in item.title.text
        in_url = needle in (item_url(item) or "")
        if (where == "title" and in_title) or (where == "url" and in_url) or (
            where == "all" and (in_title or in_url)
        ):
            out.append(item)
    return out


def found_summary(count: int, kind: str = "all") -> str:
    def plural(word: str) -> str:
        return word if count <= 1 else word + "s"

    if kind == "folder":
        return f"Found {count} {plural('folder')}"
    if kind == "bookmark":
        return f"Found {count} {plural('bookmark')}"
    return f"Found {count} {plural('folder')} or {plural('bookmark')}"
