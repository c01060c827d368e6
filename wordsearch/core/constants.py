"""Shared constants and enumerations for the word search generator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


DEFAULT_MAX_ATTEMPTS = 100
INPUT_SENTINEL = "done"


class Direction(str, Enum):
    """Straight-line directions across the grid."""

    EAST = "E"
    SOUTH = "S"
    SOUTH_EAST = "SE"
    WEST = "W"
    NORTH = "N"
    NORTH_WEST = "NW"
    NORTH_EAST = "NE"
    SOUTH_WEST = "SW"

    @property
    def step(self) -> Tuple[int, int]:
        return DIRECTION_STEPS[self]


DIRECTION_STEPS: Dict[Direction, Tuple[int, int]] = {
    Direction.EAST: (0, 1),
    Direction.SOUTH: (1, 0),
    Direction.SOUTH_EAST: (1, 1),
    Direction.WEST: (0, -1),
    Direction.NORTH: (-1, 0),
    Direction.NORTH_WEST: (-1, -1),
    Direction.NORTH_EAST: (-1, 1),
    Direction.SOUTH_WEST: (1, -1),
}

# Words are laid along these six; the two anti-diagonals are only scanned.
PLACEMENT_DIRECTIONS: Tuple[Direction, ...] = (
    Direction.EAST,
    Direction.SOUTH,
    Direction.SOUTH_EAST,
    Direction.WEST,
    Direction.NORTH,
    Direction.NORTH_WEST,
)
SCAN_DIRECTIONS: Tuple[Direction, ...] = PLACEMENT_DIRECTIONS + (
    Direction.SOUTH_WEST,
    Direction.NORTH_EAST,
)


class FillStrategy(str, Enum):
    """How empty cells are assigned letters after word placement."""

    SAFE_SET = "safe_set"
    RESCAN = "rescan"


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    @property
    def size(self) -> int:
        return self.rows * self.cols
