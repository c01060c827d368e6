"""Interactive collection of puzzle settings."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Deque, List, Optional

from ..core.constants import INPUT_SENTINEL
from ..core.exceptions import ConfigurationError


InputFn = Callable[[str], str]


@dataclass
class PromptAnswers:
    rows: int
    cols: int
    letters: List[str]
    words: List[str] = field(default_factory=list)
    banned: List[str] = field(default_factory=list)
    count: int = 1
    output: Optional[Path] = None


def parse_words_file(path: Path) -> List[str]:
    """Read words from a file, one entry per line. Blank lines and # comments are skipped."""
    entries: List[str] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(line)
    return entries


def parse_letters(text: str) -> List[str]:
    """Every non-space character of ``text`` is one letter."""
    return [ch for ch in text if not ch.isspace()]


class PromptSession:
    """Reads whitespace-separated tokens that may span several input lines."""

    def __init__(self, input_fn: Optional[InputFn] = None, sentinel: str = INPUT_SENTINEL) -> None:
        self.input_fn = input_fn or input
        self.sentinel = sentinel
        self._tokens: Deque[str] = deque()

    def _read_line(self, prompt: str) -> Optional[str]:
        try:
            return self.input_fn(prompt)
        except EOFError:
            return None

    def token(self, prompt: str) -> Optional[str]:
        while not self._tokens:
            line = self._read_line(prompt)
            if line is None:
                return None
            prompt = ""
            self._tokens.extend(line.split())
        return self._tokens.popleft()

    def line(self, prompt: str) -> str:
        # Leftovers on the previous line are dropped, like the rows/cols answer's newline.
        self._tokens.clear()
        return self._read_line(prompt) or ""

    def integer(self, prompt: str, name: str) -> int:
        raw = self.token(prompt)
        if raw is None:
            raise ConfigurationError(f"Missing {name}")
        try:
            value = int(raw)
        except ValueError as exc:
            raise ConfigurationError(f"{name} must be an integer, got '{raw}'") from exc
        if value < 1:
            raise ConfigurationError(f"{name} must be positive, got {value}")
        return value

    def until_sentinel(self, prompt: str) -> List[str]:
        entries: List[str] = []
        while True:
            raw = self.token(prompt)
            prompt = ""
            if raw is None or raw == self.sentinel:
                return entries
            entries.append(raw)


def prompt_for_settings(input_fn: Optional[InputFn] = None) -> PromptAnswers:
    """Ask for every setting in turn. An empty letter line is a configuration error."""

    session = PromptSession(input_fn)
    rows = session.integer("Enter number of rows (e.g., 30): ", "rows")
    cols = session.integer("Enter number of columns (e.g., 25): ", "columns")
    letters = parse_letters(session.line("Enter letters (e.g., A B C D): "))
    if not letters:
        raise ConfigurationError("No letters provided")
    words = session.until_sentinel(f"Enter words (type '{INPUT_SENTINEL}' when finished): ")
    banned = session.until_sentinel(f"Enter banned words (type '{INPUT_SENTINEL}' when finished): ")
    count = session.integer("Enter number of puzzles to generate: ", "puzzle count")
    output = session.token("Enter output file name: ")
    if not output:
        raise ConfigurationError("Missing output file name")
    return PromptAnswers(
        rows=rows,
        cols=cols,
        letters=letters,
        words=words,
        banned=banned,
        count=count,
        output=Path(output),
    )
