"""Plain-text puzzle output."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import TextIO

from ..core.exceptions import OutputError
from ..core.models import PuzzleResult
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


def format_puzzle(result: PuzzleResult) -> str:
    """``Puzzle <n>:`` header, one line per grid row, then a blank separator line."""

    return "\n".join([result.label, *result.rows]) + "\n\n"


class TextPuzzleWriter:
    """Appends finished puzzles to one text file, one writer at a time.

    The file is truncated when the writer is created so each batch starts
    from an empty destination. A destination that cannot be opened is
    logged here and reported again by every :meth:`write`.
    """

    def __init__(self, path: Path | str, *, truncate: bool = True) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()
        if truncate:
            try:
                self.path.write_text("", encoding="utf-8")
            except OSError as exc:
                LOGGER.error("Error opening output file %s: %s", self.path, exc)

    def write(self, result: PuzzleResult) -> None:
        block = format_puzzle(result)
        with self._lock:
            try:
                with self.path.open("a", encoding="utf-8") as handle:
                    handle.write(block)
            except OSError as exc:
                raise OutputError(f"Cannot append puzzle {result.index} to {self.path}: {exc}") from exc


class StreamPuzzleWriter:
    """Writes puzzles to an already open text stream such as stdout."""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream
        self._lock = threading.Lock()

    def write(self, result: PuzzleResult) -> None:
        with self._lock:
            try:
                self.stream.write(format_puzzle(result))
                self.stream.flush()
            except OSError as exc:
                raise OutputError(f"Cannot write puzzle {result.index} to stream: {exc}") from exc
