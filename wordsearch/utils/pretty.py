"""Pretty-print helpers for word search grids."""

from __future__ import annotations

import sys
from collections import Counter
from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:
    from ..core.models import PuzzleResult


def format_grid(rows: Sequence[str], highlight: Optional[set] = None) -> str:
    """Render rows with column/row indices; highlighted cells are bracketed."""

    width = len(rows[0]) if rows else 0
    lines = ["    " + "".join(f"{c:^3}" for c in range(width))]
    lines.append("    " + "-" * (3 * width))
    for r, row in enumerate(rows):
        symbols: List[str] = []
        for c, letter in enumerate(row):
            if highlight and (r, c) in highlight:
                symbols.append(f"[{letter}]")
            else:
                symbols.append(f" {letter} ")
        lines.append(f"{r:>2} |" + "".join(symbols))
    return "\n".join(lines)


def pretty_print_grid(
    result: PuzzleResult,
    *,
    label: str | None = None,
    show_words: bool = False,
    stream=None,
) -> None:
    """Print the puzzle grid in a human-friendly format."""

    stream = stream or sys.stdout
    print(label or result.label, file=stream)
    highlight = None
    if show_words:
        highlight = {cell for placed in result.placed_words for cell in placed.cells}
    print(format_grid(result.rows, highlight), file=stream)


def print_puzzle_stats(result: PuzzleResult, *, stream=None) -> None:
    """Print grid + placement stats for a completed puzzle."""

    stream = stream or sys.stdout
    pretty_print_grid(result, show_words=True, stream=stream)

    total_cells = result.height * result.width
    word_cells = {cell for placed in result.placed_words for cell in placed.cells}

    print(file=stream)
    print("--- Grid ---", file=stream)
    print(f"  Size:          {result.height} x {result.width} ({total_cells} cells)", file=stream)
    if total_cells:
        print(
            f"  Word cells:    {len(word_cells)} ({len(word_cells) / total_cells * 100:.0f}%)",
            file=stream,
        )
    print(f"  Fill:          {result.fill_strategy.value}"
          f"{' (CP-SAT fallback)' if result.solver_used else ''}", file=stream)

    print(file=stream)
    print("--- Words ---", file=stream)
    print(f"  Placed:        {len(result.placed_words)}", file=stream)
    for placed in result.placed_words:
        print(
            f"    {placed.text:<15} ({placed.start_row},{placed.start_col}) {placed.direction.value}",
            file=stream,
        )
    if result.unplaced_words:
        print(f"  Unplaced:      {', '.join(result.unplaced_words)}", file=stream)
    if result.skipped_words:
        print(f"  Banned/skip:   {', '.join(result.skipped_words)}", file=stream)

    letters = Counter("".join(result.rows))
    if letters:
        print(file=stream)
        print("--- Letters ---", file=stream)
        dist_parts = [f"{letter}:{count}" for letter, count in sorted(letters.items())]
        print(f"  Distribution:  {' '.join(dist_parts)}", file=stream)

    print(file=stream)
    print(f"Generated in {result.elapsed:.3f}s", file=stream)
    if result.seed is not None:
        print(f"Seed: {result.seed}", file=stream)
