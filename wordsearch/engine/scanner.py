"""Detection of banned words along the eight scan directions."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set, Tuple

from ..core.constants import SCAN_DIRECTIONS, Direction
from ..core.models import BannedHit
from .grid import WordSearchGrid


class BannedScanner:
    """Looks for banned runs in a grid.

    Two levels of work are offered. :meth:`find_banned` rescans every start
    cell, banned word and direction, costing ``O(rows * cols * B * L)`` per
    call; it backs the rescan fill strategy and final validation.
    :meth:`completes_banned` and :meth:`safe_letters` only inspect the runs
    passing through a single cell, ``O(8 * B * L)``, which is all a one-cell
    write can change.
    """

    def __init__(self, banned: Iterable[str]) -> None:
        self.words: Tuple[str, ...] = tuple(sorted({word for word in banned if word}))

    def __bool__(self) -> bool:
        return bool(self.words)

    # ------------------------------------------------------------------
    # Full-grid scan
    # ------------------------------------------------------------------
    @staticmethod
    def matches_at(grid: WordSearchGrid, word: str, row: int, col: int, direction: Direction) -> bool:
        return grid.read(row, col, direction, len(word)) == word

    def find_banned(self, grid: WordSearchGrid) -> Optional[BannedHit]:
        for r in range(grid.rows):
            for c in range(grid.cols):
                for word in self.words:
                    if grid.cell(r, c) != word[0]:
                        continue
                    for direction in SCAN_DIRECTIONS:
                        if self.matches_at(grid, word, r, c, direction):
                            return BannedHit(word=word, row=r, col=c, direction=direction)
        return None

    def contains_banned(self, grid: WordSearchGrid) -> bool:
        return self.find_banned(grid) is not None

    # ------------------------------------------------------------------
    # Single-cell checks
    # ------------------------------------------------------------------
    @staticmethod
    def _completes_at(
        grid: WordSearchGrid, word: str, index: int, row: int, col: int
    ) -> bool:
        # Every cell of the run except (row, col) already spells the word.
        for direction in SCAN_DIRECTIONS:
            dr, dc = direction.step
            coords = grid.line(row - dr * index, col - dc * index, direction, len(word))
            if coords is None:
                continue
            if all(
                grid.cell(r, c) == word[j]
                for j, (r, c) in enumerate(coords)
                if j != index
            ):
                return True
        return False

    def completes_banned(self, grid: WordSearchGrid, row: int, col: int, letter: str) -> bool:
        """True if ``letter`` at ``(row, col)`` would finish a banned run with the fixed cells."""

        for word in self.words:
            for index, expected in enumerate(word):
                if expected == letter and self._completes_at(grid, word, index, row, col):
                    return True
        return False

    def unsafe_letters(self, grid: WordSearchGrid, row: int, col: int) -> Set[str]:
        unsafe: Set[str] = set()
        for word in self.words:
            for index, expected in enumerate(word):
                if expected in unsafe:
                    continue
                if self._completes_at(grid, word, index, row, col):
                    unsafe.add(expected)
        return unsafe

    def safe_letters(
        self, grid: WordSearchGrid, row: int, col: int, alphabet: Sequence[str]
    ) -> List[str]:
        """Alphabet entries (duplicates kept) that complete no banned run at the cell."""

        unsafe = self.unsafe_letters(grid, row, col)
        return [letter for letter in alphabet if letter not in unsafe]

    def touches_banned(self, grid: WordSearchGrid, cells: Iterable[Tuple[int, int]]) -> bool:
        """True if any fully written banned run passes through one of ``cells``."""

        for r, c in cells:
            letter = grid.cell(r, c)
            if letter is not None and self.completes_banned(grid, r, c, letter):
                return True
        return False
