"""Logging setup.

Attaches a single stderr handler to the project's top-level loggers.
Stdout stays reserved for the MCP stdio transport. Calling
configure_logging again only updates the level.
"""

from __future__ import annotations

import logging
import sys
from typing import Dict, Optional, TextIO

_HANDLER_TAG_ATTR = "_file_normaliser_handler"

LOGGER_NAMES = ("core", "normalise", "sources", "tools", "server")

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_level(level: str) -> int:
    return _LEVEL_MAP.get((level or "").strip().upper(), logging.WARNING)


def configure_logging(level: str = "WARNING", *, stream: Optional[TextIO] = None) -> None:
    lvl = resolve_level(level)

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(lvl)

        if any(getattr(h, _HANDLER_TAG_ATTR, False) for h in logger.handlers):
            continue

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        setattr(handler, _HANDLER_TAG_ATTR, True)
        logger.addHandler(handler)
