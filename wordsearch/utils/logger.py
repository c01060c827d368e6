"""Logging utilities tailored for word search generation."""

from __future__ import annotations

import logging
from typing import Optional, TextIO, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(threadName)s | %(name)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"


def parse_level(name: str) -> int:
    """Translate a CLI level name into a ``logging`` constant (INFO when unknown)."""

    level = getattr(logging, name.upper(), None)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: Union[int, str] = logging.INFO, stream: Optional[TextIO] = None) -> None:
    """Install a single stderr handler on the root logger.

    Puzzles are generated on worker threads, so every record names its
    thread. Calling this again replaces the previous handler.
    """

    if isinstance(level, str):
        level = parse_level(level)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or "wordsearch")
