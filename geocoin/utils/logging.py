"""Logging setup shared by the server and the headless ``play`` command."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

GAME_FORMAT = "%(asctime)s %(levelname)-5s %(name)s | %(message)s"

# Per-request access lines drown out cache and tracking events
_NOISY_LOGGERS = ("uvicorn.access", "httpx")


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> logging.Handler:
    """Route all records at *level* or above to *stream* (stdout by default).

    Unknown level names fall back to INFO. Calling this again replaces the
    previous handler instead of stacking a second one.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt=GAME_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))
    return handler
