"""Word search generator orchestration.

Two-phase approach:
  1. Placement: shuffle the word list, then lay each allowed word along one
     of six directions within a bounded number of random attempts.
  2. Fill: give every remaining cell an alphabet letter that completes no
     banned word, falling back to CP-SAT when the greedy pass dead-ends.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable, List, Optional, Sequence, Tuple

from ..core.constants import DEFAULT_MAX_ATTEMPTS, PLACEMENT_DIRECTIONS, FillStrategy
from ..core.exceptions import ConfigurationError, FillError, PlacementError, ValidationError
from ..core.models import PlacedWord, PuzzleResult
from ..utils.logger import get_logger
from .grid import GridConfig, WordSearchGrid
from .scanner import BannedScanner
from .validator import GridValidator


LOGGER = get_logger(__name__)


def _split_letters(letters: Iterable[str]) -> Tuple[str, ...]:
    # Each non-space character is one fill letter, as with "A B C" or "ABC".
    return tuple(ch for token in letters for ch in token if not ch.isspace())


@dataclass
class GeneratorConfig:
    rows: int
    cols: int
    letters: Sequence[str]
    words: Sequence[str] = ()
    banned: Iterable[str] = frozenset()
    seed: Optional[int] = None
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    fill_strategy: FillStrategy = FillStrategy.SAFE_SET
    solver_fallback: bool = True
    solver_timeout_seconds: float = 10.0

    def __post_init__(self) -> None:
        self.letters = _split_letters(self.letters)
        self.words = tuple(self.words)
        self.banned = frozenset(word for word in self.banned if word)
        self.fill_strategy = FillStrategy(self.fill_strategy)
        if not self.letters:
            raise ConfigurationError("No letters provided")
        if self.max_attempts < 1:
            raise ConfigurationError(f"max_attempts must be positive, got {self.max_attempts}")
        self.to_grid_config().bounds()

    def to_grid_config(self) -> GridConfig:
        return GridConfig(rows=self.rows, cols=self.cols)

    def with_seed(self, seed: Optional[int]) -> "GeneratorConfig":
        return replace(self, seed=seed)


@dataclass
class PlacementReport:
    placed: List[PlacedWord] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    unplaced: List[str] = field(default_factory=list)


class WordSearchGenerator:
    """Builds one puzzle. Owns its grid and random state; safe to run beside others."""

    def __init__(
        self,
        config: GeneratorConfig,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None,
        index: int = 1,
    ) -> None:
        self.config = config
        self.index = index
        self.rng = rng or random.Random(config.seed)
        self.log = logger or LOGGER
        self.alphabet: Tuple[str, ...] = tuple(config.letters)
        self.banned: FrozenSet[str] = frozenset(config.banned)
        self.scanner = BannedScanner(self.banned)
        self.validator = GridValidator(self.scanner)
        self._used = False
        self._reset()

    def _reset(self) -> None:
        self.grid = WordSearchGrid(self.config.to_grid_config())
        self.report = PlacementReport()
        self.solver_used = False

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self) -> PuzzleResult:
        """Build a fresh puzzle; repeated calls start from an empty grid."""
        started = time.perf_counter()
        if self._used:
            self._reset()
        self._used = True
        self.place_words()
        self.fill()
        validation = self.validator.validate(self.grid, self.report.placed)
        if not validation.ok:
            raise ValidationError(f"Grid validation failed: {validation.messages}")
        elapsed = time.perf_counter() - started
        self.log.debug(
            "Puzzle %s complete in %.3fs: %d placed, %d unplaced, %d skipped",
            self.index,
            elapsed,
            len(self.report.placed),
            len(self.report.unplaced),
            len(self.report.skipped),
        )
        return PuzzleResult(
            index=self.index,
            rows=self.grid.to_rows(),
            placed_words=list(self.report.placed),
            skipped_words=list(self.report.skipped),
            unplaced_words=list(self.report.unplaced),
            seed=self.config.seed,
            fill_strategy=self.config.fill_strategy,
            solver_used=self.solver_used,
            elapsed=elapsed,
        )

    # ------------------------------------------------------------------
    # Phase A: placement
    # ------------------------------------------------------------------
    def place_words(self) -> PlacementReport:
        order = list(self.config.words)
        self.log.debug("Shuffling %d words...", len(order))
        self.rng.shuffle(order)
        for word in order:
            if word in self.banned:
                self.log.debug("Skipping banned word: %s", word)
                self.report.skipped.append(word)
                continue
            self.log.debug("Placing word: %s", word)
            placed = self._place_word(word)
            if placed is None:
                self.log.warning(
                    "Failed to place word: %s after %d attempts.", word, self.config.max_attempts
                )
                self.report.unplaced.append(word)
            else:
                self.report.placed.append(placed)
        return self.report

    def _place_word(self, word: str) -> Optional[PlacedWord]:
        if not word:
            return None
        for _ in range(self.config.max_attempts):
            direction = self.rng.choice(PLACEMENT_DIRECTIONS)
            row = self.rng.randrange(self.grid.rows)
            col = self.rng.randrange(self.grid.cols)
            if not self.grid.can_place(word, row, col, direction):
                continue
            try:
                placed, undo = self.grid.place_word_undoable(word, row, col, direction)
            except PlacementError as exc:
                self.log.debug("Placement rejected: %s", exc)
                continue
            if self.scanner and self.scanner.touches_banned(self.grid, placed.cells):
                self.log.debug(
                    "Placement of %s at (%d,%d) %s would spell a banned word",
                    word, row, col, direction.value,
                )
                undo()
                continue
            return placed
        return None

    # ------------------------------------------------------------------
    # Phase B: fill
    # ------------------------------------------------------------------
    def fill(self) -> None:
        self.log.debug("Filling the grid...")
        if self.config.fill_strategy == FillStrategy.RESCAN:
            self._fill_rescan()
        else:
            self._fill_safe_set()

    def _fill_rescan(self) -> None:
        """Reference fill: try letters in random order, rescanning the whole grid each time."""

        for r, c in list(self.grid.empty_cells()):
            candidates = list(self.alphabet)
            self.rng.shuffle(candidates)
            for letter in dict.fromkeys(candidates):
                self.grid.set_letter(r, c, letter)
                if not self.scanner.contains_banned(self.grid):
                    break
                self.grid.clear(r, c)
            else:
                raise FillError(f"Every letter forms a banned word at ({r},{c})")

    def _fill_safe_set(self) -> None:
        placed_state = self.grid.snapshot()
        for r, c in list(self.grid.empty_cells()):
            safe = self.scanner.safe_letters(self.grid, r, c, self.alphabet)
            if not safe:
                if not self.config.solver_fallback:
                    raise FillError(f"Every letter forms a banned word at ({r},{c})")
                self.log.info(
                    "Puzzle %s: no safe letter at (%d,%d); handing fill to CP-SAT", self.index, r, c
                )
                self.grid.restore(placed_state)
                self._solver_fill()
                return
            self.grid.set_letter(r, c, self.rng.choice(safe))

    def _solver_fill(self) -> None:
        from .solver import solve_fill

        assignment = solve_fill(
            self.grid,
            self.scanner,
            self.alphabet,
            rng=self.rng,
            timeout=self.config.solver_timeout_seconds,
        )
        if assignment is None:
            raise FillError("No letter assignment avoids every banned word")
        for (r, c), letter in assignment.items():
            self.grid.set_letter(r, c, letter)
        self.solver_used = True


def generate_puzzle(config: GeneratorConfig, index: int = 1) -> PuzzleResult:
    """Convenience wrapper building and running a single generator."""

    return WordSearchGenerator(config, index=index).generate()
