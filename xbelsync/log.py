from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass

from rich.console import Console
from rich.logging import RichHandler

_LEVELS = ("ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class LogConfig:
    level: str = "INFO"
    no_color: bool = False


def level_from_flags(base: str, verbose: int = 0, quiet: int = 0) -> str:
    """Shift ``base`` by -v/-q counts, clamped to ERROR..DEBUG."""
    name = base.upper()
    if name == "WARN":
        name = "WARNING"
    idx = _LEVELS.index(name) if name in _LEVELS else _LEVELS.index("INFO")
    idx = max(0, min(len(_LEVELS) - 1, idx + verbose - quiet))
    return _LEVELS[idx]


def setup_logging(cfg: LogConfig) -> None:
    level = getattr(logging, level_from_flags(cfg.level), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    for h in list(root.handlers):
        root.removeHandler(h)

    plain = cfg.no_color or os.getenv("NO_COLOR") is not None or not sys.stderr.isatty()
    if plain:
        handler: logging.Handler = logging.StreamHandler()
        fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    else:
        handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            show_time=False,
            show_path=False,
        )
        fmt = "%(message)s"

    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
