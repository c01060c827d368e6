"""Convenience entrypoint with predefined generator settings for debugging.

Usage in a Python console (Jupyter-style)::

    import debug_main
    state = debug_main.prepare_state(rows=8, cols=10)
    debug_main.step_place(state)
    debug_main.step_fill(state)
    debug_main.step_validate(state)
    result = debug_main.build_result(state)

Call :func:`run_debug` for a one-liner, or execute the functions above one by
one to inspect intermediate state.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Dict

from wordsearch.core.constants import FillStrategy
from wordsearch.core.exceptions import FillError, WordSearchError
from wordsearch.core.models import PuzzleResult
from wordsearch.engine.generator import GeneratorConfig, WordSearchGenerator
from wordsearch.engine.validator import ValidationResult
from wordsearch.utils.logger import configure_logging
from wordsearch.utils.pretty import format_grid, print_puzzle_stats

DEFAULT_DEBUG_ARGS: Dict[str, Any] = {
    "rows": 12,
    "cols": 12,
    "letters": "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    "words": ["PYTHON", "THREAD", "GRID", "LETTER", "SEARCH", "PUZZLE"],
    "banned": ["ASS", "DAMN", "HELL"],
    "seed": None,
    "max_attempts": 100,
    "fill_strategy": FillStrategy.SAFE_SET,
    "solver_fallback": True,
}

LOGGER = logging.getLogger(__name__)


def prepare_state(**overrides: Any) -> Dict[str, Any]:
    args = dict(DEFAULT_DEBUG_ARGS)
    args.update(overrides)
    config = GeneratorConfig(**args)
    return {"config": config, "generator": WordSearchGenerator(config)}


def _show(state: Dict[str, Any]) -> None:
    print(format_grid(state["generator"].grid.to_rows(empty=".")))


def step_place(state: Dict[str, Any]) -> None:
    report = state["generator"].place_words()
    LOGGER.info(
        "Placed %d words, %d unplaced, %d skipped",
        len(report.placed),
        len(report.unplaced),
        len(report.skipped),
    )
    _show(state)


def step_fill(state: Dict[str, Any]) -> None:
    state["generator"].fill()
    _show(state)


def step_validate(state: Dict[str, Any]) -> ValidationResult:
    generator: WordSearchGenerator = state["generator"]
    validation = generator.validator.validate(generator.grid, generator.report.placed)
    state["validation"] = validation
    return validation


def build_result(state: Dict[str, Any]) -> PuzzleResult:
    generator: WordSearchGenerator = state["generator"]
    return PuzzleResult(
        index=generator.index,
        rows=generator.grid.to_rows(),
        placed_words=list(generator.report.placed),
        skipped_words=list(generator.report.skipped),
        unplaced_words=list(generator.report.unplaced),
        seed=generator.config.seed,
        fill_strategy=generator.config.fill_strategy,
        solver_used=generator.solver_used,
    )


def run_debug(**overrides: Any) -> PuzzleResult:
    """Execute the pipeline, retrying with fresh seeds when the fill dead-ends."""

    max_runs = int(overrides.pop("max_runs", 5))
    requested_seed = overrides.pop("seed", DEFAULT_DEBUG_ARGS.get("seed"))
    last_error: Exception | None = None
    for attempt_no in range(1, max_runs + 1):
        seed = (
            requested_seed
            if requested_seed is not None and attempt_no == 1
            else random.randint(0, 1_000_000)
        )
        state = prepare_state(seed=seed, **overrides)
        try:
            step_place(state)
            step_fill(state)
        except FillError as exc:
            LOGGER.warning("Attempt %s/%s failed with seed %s: %s", attempt_no, max_runs, seed, exc)
            last_error = exc
            continue
        validation = step_validate(state)
        if not validation.ok:
            raise WordSearchError(f"Validation failed: {validation.messages}")
        result = build_result(state)
        print_puzzle_stats(result)
        return result
    raise WordSearchError("Unable to generate puzzle after retries") from last_error


def main() -> None:  # pragma: no cover - manual helper
    configure_logging(logging.DEBUG)
    result = run_debug()
    print(f"Placed {len(result.placed_words)} of {len(DEFAULT_DEBUG_ARGS['words'])} words")


if __name__ == "__main__":
    main()
