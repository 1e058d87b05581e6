from __future__ import annotations

import html
from pathlib import Path
from typing import List

from .errors import XbelIOError
from .log import get_logger
from .model import Folder, Item
from .xbel import XBEL_VERSION, Xbel

log = get_logger(__name__)

XML_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<!DOCTYPE xbel PUBLIC "+//IDN python.org//DTD XML Bookmark Exchange Language 1.0//EN//XML" '
    '"http://pyxml.sourceforge.net/topics/dtds/xbel.dtd">\n'
)
INDENT = "  "


def highest_id_comment(highest: int) -> str:
    # Floccus reads this back with a regex, not as XML.
    return f"<!-- highestId :{highest}: for Floccus bookmark sync browser extension -->"


def to_string(xbel: Xbel) -> str:
    """Serialize to the layout Floccus writes itself.

    Top-level items start at column 0 right after the highestId comment and a
    blank line; each nesting level indents by two spaces. There is no trailing
    newline.
    """
    lines: List[str] = []
    for item in xbel.items:
        _write_item(lines, item, depth=0)

    out = [XML_HEADER, f'<xbel version="{XBEL_VERSION}">\n']
    out.append(highest_id_comment(xbel.highest_id()))
    out.append("\n\n")
    out.append("\n".join(lines))
    out.append("\n</xbel>")
    return "".join(out)


def write_xbel(xbel: Xbel, path: Path) -> None:
    # Written in place: a crash mid-write leaves a truncated file.
    text = to_string(xbel)
    try:
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
    except OSError as e:
        raise XbelIOError(f"Error while writing Xbel file {path}: {e}") from e
    log.info("Wrote bookmarks: %s", path)


def _write_item(lines: List[str], item: Item, depth: int) -> None:
    pad = INDENT * depth
    inner = INDENT * (depth + 1)
    if isinstance(item, Folder):
        lines.append(f'{pad}<folder id="{_attr(item.id)}">')
        lines.append(f"{inner}<title>{_text(item.title.text)}</title>")
        for child in item.items:
            _write_item(lines, child, depth + 1)
        lines.append(f"{pad}</folder>")
    else:
        lines.append(f'{pad}<bookmark href="{_attr(item.href)}" id="{_attr(item.id)}">')
        lines.append(f"{inner}<title>{_text(item.title.text)}</title>")
        lines.append(f"{pad}</bookmark>")


def _attr(value: str) -> str:
    return html.escape(value, quote=True)


def _text(value: str) -> str:
    return html.escape(value, quote=False)
