"""Data models supporting the word search generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .constants import Direction, FillStrategy


@dataclass
class PlacedWord:
    """A word written into the grid along a straight line."""

    text: str
    start_row: int
    start_col: int
    direction: Direction
    _cells: Optional[List[Tuple[int, int]]] = field(default=None, repr=False, compare=False)

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def cells(self) -> List[Tuple[int, int]]:
        if self._cells is None:
            dr, dc = self.direction.step
            self._cells = [
                (self.start_row + dr * i, self.start_col + dc * i) for i in range(self.length)
            ]
        return self._cells

    @property
    def end(self) -> Tuple[int, int]:
        return self.cells[-1]


@dataclass(frozen=True)
class BannedHit:
    """Location of a banned run found in the grid."""

    word: str
    row: int
    col: int
    direction: Direction


@dataclass
class PuzzleResult:
    """A finished puzzle together with the placement report."""

    index: int
    rows: List[str]
    placed_words: List[PlacedWord] = field(default_factory=list)
    skipped_words: List[str] = field(default_factory=list)
    unplaced_words: List[str] = field(default_factory=list)
    seed: Optional[int] = None
    fill_strategy: FillStrategy = FillStrategy.SAFE_SET
    solver_used: bool = False
    elapsed: float = 0.0

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def label(self) -> str:
        return f"Puzzle {self.index}:"

    def letter(self, row: int, col: int) -> str:
        return self.rows[row][col]
