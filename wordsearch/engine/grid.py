"""Grid representation and helper utilities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple

from ..core.constants import Bounds, Direction
from ..core.exceptions import ConfigurationError, PlacementError
from ..core.models import PlacedWord
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

Cell = Optional[str]


@dataclass
class GridConfig:
    """Dimensions of a word search grid."""

    rows: int
    cols: int

    def bounds(self) -> Bounds:
        if self.rows < 1 or self.cols < 1:
            raise ConfigurationError(
                f"Grid needs at least one row and one column, got {self.rows}x{self.cols}"
            )
        return Bounds(rows=self.rows, cols=self.cols)


@dataclass
class GridSnapshot:
    cells: List[List[Cell]]
    placed_words: List[PlacedWord]


class WordSearchGrid:
    """Rectangular letter buffer; ``None`` marks an empty cell."""

    def __init__(self, config: GridConfig) -> None:
        self.config = config
        self.bounds = config.bounds()
        self.cells: List[List[Cell]] = [
            [None for _ in range(self.bounds.cols)] for _ in range(self.bounds.rows)
        ]
        self.placed_words: List[PlacedWord] = []
        self._filled_count = 0

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------
    @property
    def rows(self) -> int:
        return self.bounds.rows

    @property
    def cols(self) -> int:
        return self.bounds.cols

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def is_empty(self, row: int, col: int) -> bool:
        return self.cells[row][col] is None

    def set_letter(self, row: int, col: int, letter: str) -> None:
        if self.cells[row][col] is None:
            self._filled_count += 1
        self.cells[row][col] = letter

    def clear(self, row: int, col: int) -> None:
        if self.cells[row][col] is not None:
            self._filled_count -= 1
        self.cells[row][col] = None

    @property
    def filled_count(self) -> int:
        return self._filled_count

    @property
    def is_complete(self) -> bool:
        return self._filled_count == self.bounds.size

    def empty_cells(self) -> Iterator[Tuple[int, int]]:
        """Yield empty cells in row-major order."""

        for r in range(self.bounds.rows):
            for c in range(self.bounds.cols):
                if self.cells[r][c] is None:
                    yield r, c

    def line(self, row: int, col: int, direction: Direction, length: int) -> Optional[List[Tuple[int, int]]]:
        """Return the coordinates of a straight run, or ``None`` when it leaves the grid."""

        if length < 1:
            return None
        dr, dc = direction.step
        end_row = row + dr * (length - 1)
        end_col = col + dc * (length - 1)
        if not (self.bounds.contains(row, col) and self.bounds.contains(end_row, end_col)):
            return None
        return [(row + dr * i, col + dc * i) for i in range(length)]

    # ------------------------------------------------------------------
    # Word placement
    # ------------------------------------------------------------------
    def can_place(self, word: str, row: int, col: int, direction: Direction) -> bool:
        coords = self.line(row, col, direction, len(word))
        if coords is None:
            return False
        for index, (r, c) in enumerate(coords):
            existing = self.cells[r][c]
            if existing is not None and existing != word[index]:
                return False
        return True

    def place_word(self, word: str, row: int, col: int, direction: Direction) -> PlacedWord:
        placed, _ = self.place_word_undoable(word, row, col, direction)
        return placed

    def place_word_undoable(
        self, word: str, row: int, col: int, direction: Direction
    ) -> Tuple[PlacedWord, Callable[[], None]]:
        """Write a word and return an undo callable restoring the previous cells."""

        coords = self.line(row, col, direction, len(word))
        if coords is None:
            raise PlacementError(f"'{word}' extends outside grid from {(row, col)} {direction.value}")
        for index, (r, c) in enumerate(coords):
            existing = self.cells[r][c]
            if existing is not None and existing != word[index]:
                raise PlacementError(f"Letter conflict at {(r, c)}: {existing} != {word[index]}")

        previous = [self.cells[r][c] for r, c in coords]
        for index, (r, c) in enumerate(coords):
            self.set_letter(r, c, word[index])
        placed = PlacedWord(text=word, start_row=row, start_col=col, direction=direction)
        self.placed_words.append(placed)

        def undo() -> None:
            for (r, c), old in zip(coords, previous):
                if old is None:
                    self.clear(r, c)
                else:
                    self.cells[r][c] = old
            if placed in self.placed_words:
                self.placed_words.remove(placed)

        return placed, undo

    def read(self, row: int, col: int, direction: Direction, length: int) -> Optional[str]:
        """Letters along a run, or ``None`` if it leaves the grid or crosses an empty cell."""

        coords = self.line(row, col, direction, length)
        if coords is None:
            return None
        letters = [self.cells[r][c] for r, c in coords]
        if any(letter is None for letter in letters):
            return None
        return "".join(letters)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    def snapshot(self) -> GridSnapshot:
        return GridSnapshot(
            cells=[list(row) for row in self.cells],
            placed_words=list(self.placed_words),
        )

    def restore(self, snapshot: GridSnapshot) -> None:
        self.cells = [list(row) for row in snapshot.cells]
        self.placed_words = list(snapshot.placed_words)
        self._filled_count = sum(1 for row in self.cells for cell in row if cell is not None)

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------
    def to_rows(self, empty: str = " ") -> List[str]:
        return ["".join(cell if cell is not None else empty for cell in row) for row in self.cells]
