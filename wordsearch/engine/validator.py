"""Deterministic rule validation for generated word search grids."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..core.exceptions import ValidationError
from ..core.models import PlacedWord
from .grid import WordSearchGrid
from .scanner import BannedScanner
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class GridValidator:
    """Runs deterministic validation over the final grid."""

    def __init__(self, scanner: BannedScanner) -> None:
        self.scanner = scanner

    def validate(
        self, grid: WordSearchGrid, placed_words: Optional[Sequence[PlacedWord]] = None
    ) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_complete(grid)
            self._check_no_banned(grid)
            self._check_placements(grid, placed_words if placed_words is not None else grid.placed_words)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    def _check_complete(self, grid: WordSearchGrid) -> None:
        for r, c in grid.empty_cells():
            raise ValidationError(f"Cell ({r},{c}) left empty")

    def _check_no_banned(self, grid: WordSearchGrid) -> None:
        hit = self.scanner.find_banned(grid)
        if hit is not None:
            raise ValidationError(
                f"Banned word '{hit.word}' at ({hit.row},{hit.col}) {hit.direction.value}"
            )

    def _check_placements(self, grid: WordSearchGrid, placed_words: Sequence[PlacedWord]) -> None:
        for placed in placed_words:
            found = grid.read(placed.start_row, placed.start_col, placed.direction, placed.length)
            if found != placed.text:
                raise ValidationError(
                    f"Placed word '{placed.text}' reads '{found}' at "
                    f"({placed.start_row},{placed.start_col}) {placed.direction.value}"
                )
