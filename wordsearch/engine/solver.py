"""CP-SAT fill solver for grids the greedy fill cannot finish."""

from __future__ import annotations

import random
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ortools.sat.python import cp_model

from ..core.constants import SCAN_DIRECTIONS
from ..utils.logger import get_logger
from .grid import WordSearchGrid
from .scanner import BannedScanner

LOGGER = get_logger(__name__)


def solve_fill(
    grid: WordSearchGrid,
    scanner: BannedScanner,
    alphabet: Sequence[str],
    rng: Optional[random.Random] = None,
    timeout: float = 10.0,
    num_workers: int = 1,
) -> Optional[Dict[Tuple[int, int], str]]:
    """Assign alphabet letters to every empty cell with no banned run anywhere.

    Args:
        grid: Grid whose occupied cells are treated as fixed.
        scanner: Banned words to forbid along all eight scan directions.
        alphabet: Fill letters. Duplicates are collapsed in the variable
            domain but still weight the per-cell hints.
        rng: Seeds the solver and the per-cell hints so fills vary per puzzle.
        timeout: Solver time limit in seconds.
        num_workers: CP-SAT search workers. One worker keeps seeded runs
            reproducible.

    Returns:
        Mapping of empty cell to letter, or None if unsolvable within the limit.
    """
    rng = rng or random.Random()
    letters: List[str] = list(dict.fromkeys(alphabet))
    if not letters:
        return None
    index_of = {letter: i for i, letter in enumerate(letters)}
    empty = list(grid.empty_cells())
    if not empty:
        return {}

    model = cp_model.CpModel()

    # ------------------------------------------------------------------
    # Step 1: Cell letter variables for the empty cells
    # ------------------------------------------------------------------
    cell_vars: Dict[Tuple[int, int], cp_model.IntVar] = {}
    hints = _hint_indices(empty, alphabet, index_of, rng)
    for r, c in empty:
        var = model.new_int_var(0, len(letters) - 1, f"L_{r}_{c}")
        cell_vars[(r, c)] = var
        model.add_hint(var, hints[(r, c)])

    # ------------------------------------------------------------------
    # Step 2: Forbid every banned run that can still be completed
    # ------------------------------------------------------------------
    seen: Set[Tuple] = set()
    constraint_count = 0
    for word in scanner.words:
        for r in range(grid.rows):
            for c in range(grid.cols):
                for direction in SCAN_DIRECTIONS:
                    coords = grid.line(r, c, direction, len(word))
                    if coords is None:
                        continue
                    forbidden = _forbidden_tuple(grid, cell_vars, index_of, word, coords)
                    if forbidden is None:
                        continue
                    run_vars, values = forbidden
                    if not run_vars:
                        LOGGER.warning(
                            "CP-SAT: banned '%s' already spelled at (%d,%d) %s",
                            word, r, c, direction.value,
                        )
                        return None
                    key = (tuple(cell for cell in coords if cell in cell_vars), tuple(values))
                    if key in seen:
                        continue
                    seen.add(key)
                    model.add_forbidden_assignments(run_vars, [values])
                    constraint_count += 1

    # ------------------------------------------------------------------
    # Step 3: Solve
    # ------------------------------------------------------------------
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.num_workers = num_workers
    solver.parameters.random_seed = rng.randint(0, 1_000_000)

    LOGGER.info(
        "CP-SAT: %d empty cells, %d banned-run constraints, solving (timeout=%0.1fs)...",
        len(empty),
        constraint_count,
        timeout,
    )
    status = solver.solve(model)

    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        LOGGER.warning("CP-SAT: no fill found (status=%s)", solver.status_name(status))
        return None

    LOGGER.info("CP-SAT: fill found in %.2fs", solver.wall_time)
    return {cell: letters[solver.value(var)] for cell, var in cell_vars.items()}


def _forbidden_tuple(
    grid: WordSearchGrid,
    cell_vars: Dict[Tuple[int, int], cp_model.IntVar],
    index_of: Dict[str, int],
    word: str,
    coords: List[Tuple[int, int]],
) -> Optional[Tuple[List[cp_model.IntVar], List[int]]]:
    """Variables and values that would spell ``word`` along ``coords``.

    Returns None when a fixed cell or the alphabet already rules the run out.
    """
    run_vars: List[cp_model.IntVar] = []
    values: List[int] = []
    for (r, c), expected in zip(coords, word):
        existing = grid.cell(r, c)
        if existing is not None:
            if existing != expected:
                return None
            continue
        if expected not in index_of:
            return None
        run_vars.append(cell_vars[(r, c)])
        values.append(index_of[expected])
    return run_vars, values


def _hint_indices(
    cells: Sequence[Tuple[int, int]],
    alphabet: Sequence[str],
    index_of: Dict[str, int],
    rng: random.Random,
) -> Dict[Tuple[int, int], int]:
    """Draw a starting letter per cell, weighted by repeats in ``alphabet``."""
    return {cell: index_of[rng.choice(alphabet)] for cell in cells}
