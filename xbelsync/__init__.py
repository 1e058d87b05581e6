"""xbelsync: command line manager for Floccus XBEL bookmarks kept in a git repository."""

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path


def _read_version() -> str:
    # A source checkout carries VERSION; an installed wheel only has metadata.
    p = Path(__file__).resolve().parents[1] / "VERSION"
    try:
        return p.read_text(encoding="utf-8").strip()
    except OSError:
        pass
    try:
        return version("xbelsync")
    except PackageNotFoundError:
        return "0+unknown"


__version__ = _read_version()
