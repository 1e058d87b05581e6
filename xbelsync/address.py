from __future__ import annotations

from .model import Address, IdAddress, PathAddress, Placement, Root

ROOT_KEYWORD = "root"

_PLACEMENT_PREFIXES = (
    ("after=", Placement.AFTER),
    ("before=", Placement.BEFORE),
    ("append=", Placement.APPEND),
    ("prepend=", Placement.PREPEND),
)


def parse_address(text: str) -> Address:
    """Turn the user-facing address syntax into an address.

    - ``root`` is the top level of the document.
    - ``<n>``, ``before=<n>``, ``after=<n>``, ``append=<n>``, ``prepend=<n>``
      address the item with id ``n``; an unprefixed id appends inside it.
    - anything else is a ``/``-separated path of titles.
    """
    if text == ROOT_KEYWORD:
        return Root()

    rest, placement = text, Placement.APPEND
    for prefix, p in _PLACEMENT_PREFIXES:
        if text.startswith(prefix):
            rest, placement = text[len(prefix):], p
            break

    if rest.isascii() and rest.isdigit():
        return IdAddress(int(rest), placement)
    return PathAddress(text)
