from __future__ import annotations

from pathlib import Path
from typing import List, Union

from bs4 import BeautifulSoup  # type: ignore
from lxml import etree

from .errors import XbelFormatError, XbelIOError
from .log import get_logger
from .model import Bookmark, Folder, Item, Title, parse_id
from .xbel import XBEL_VERSION, Xbel

log = get_logger(__name__)

# No DTD fetching, no entity expansion, and no recovery from broken markup.
_STRICT_PARSER = etree.XMLParser(recover=False, resolve_entities=False, no_network=True, load_dtd=False)


def load_xbel(path: Path) -> Xbel:
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise XbelIOError(f"Error while reading Xbel file {path}: {e}") from e
    xbel = parse_xbel(data)
    log.debug("Loaded %d items from %s", xbel.count(), path)
    return xbel


def parse_xbel(text: Union[str, bytes]) -> Xbel:
    """Parse an XBEL document.

    The input must be well-formed XML: truncated or mismatched markup raises
    XbelFormatError instead of loading a partial tree. Comments (including the
    highestId one) and whitespace are dropped; the serializer regenerates them.
    Title text is stripped, so outer whitespace in a title does not survive a
    save and reload.
    """
    data = text.encode("utf-8") if isinstance(text, str) else text
    try:
        etree.fromstring(data, _STRICT_PARSER)
    except etree.XMLSyntaxError as e:
        raise XbelFormatError(f"Cannot parse Xbel file: {e}") from e

    soup = BeautifulSoup(data, "xml")
    root = soup.find("xbel")
    if root is None:
        raise XbelFormatError("Cannot parse Xbel file: no <xbel> root element")
    return Xbel(version=root.get("version") or XBEL_VERSION, items=_read_items(root))


def _read_items(node) -> List[Item]:
    out: List[Item] = []
    for child in node.find_all(["folder", "bookmark"], recursive=False):
        item_id = child.get("id", "")
        parse_id(item_id)
        title = _read_title(child)
        if child.name == "folder":
            out.append(Folder(id=item_id, title=title, items=_read_items(child)))
            continue
        href = child.get("href")
        if href is None:
            raise XbelFormatError(f"Cannot parse Xbel file: bookmark {item_id} has no href")
        out.append(Bookmark(id=item_id, href=href, title=title))
    return out


def _read_title(node) -> Title:
    t = node.find("title", recursive=False)
    if t is None:
        return Title()
    return Title(t.get_text().strip())
