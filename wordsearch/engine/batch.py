"""Concurrent generation of independent puzzles."""

from __future__ import annotations

import random
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Sequence

from ..core.exceptions import ConfigurationError, OutputError, WordSearchError
from ..core.models import PuzzleResult
from ..utils.logger import get_logger
from .generator import GeneratorConfig, WordSearchGenerator


LOGGER = get_logger(__name__)


class PuzzleSink(Protocol):
    """Destination for finished puzzles; implementations serialize their own writes."""

    def write(self, result: PuzzleResult) -> None:
        ...


@dataclass
class BatchConfig:
    count: int
    workers: Optional[int] = None
    base_seed: Optional[int] = None
    ordered: bool = False

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ConfigurationError(f"Puzzle count must be positive, got {self.count}")
        if self.workers is not None and self.workers < 1:
            raise ConfigurationError(f"Worker count must be positive, got {self.workers}")

    def seed_for(self, index: int, rng: random.Random) -> int:
        if self.base_seed is not None:
            return self.base_seed + index
        return rng.randint(0, 2**31 - 1)


@dataclass
class BatchReport:
    results: List[PuzzleResult] = field(default_factory=list)
    failures: Dict[int, str] = field(default_factory=dict)
    write_errors: Dict[int, str] = field(default_factory=dict)
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        return not self.failures and not self.write_errors


def _run_single_puzzle(config: GeneratorConfig, index: int) -> PuzzleResult:
    LOGGER.info("Generating puzzle %s...", index)
    return WordSearchGenerator(config, index=index).generate()


def _deliver(result: PuzzleResult, sinks: Sequence[PuzzleSink], report: BatchReport) -> None:
    for sink in sinks:
        try:
            sink.write(result)
        except OutputError as exc:
            LOGGER.error("Puzzle %s could not be written: %s", result.index, exc)
            report.write_errors[result.index] = str(exc)


def generate_batch(
    config: GeneratorConfig,
    batch: BatchConfig,
    sinks: Sequence[PuzzleSink] = (),
) -> BatchReport:
    """Generate ``batch.count`` puzzles on a thread pool and hand each to ``sinks``.

    Every puzzle gets its own generator and seed. Results reach the sinks as
    they complete, or in puzzle order when ``batch.ordered`` is set. A failed
    puzzle is logged and recorded without stopping the others.
    """

    seed_rng = random.Random(batch.base_seed)
    jobs = {index: config.with_seed(batch.seed_for(index, seed_rng)) for index in range(1, batch.count + 1)}
    report = BatchReport()
    pending: Dict[int, Optional[PuzzleResult]] = {}
    next_index = 1

    started = time.perf_counter()
    with ThreadPoolExecutor(max_workers=batch.workers or batch.count) as executor:
        futures = {
            executor.submit(_run_single_puzzle, job_config, index): index
            for index, job_config in jobs.items()
        }
        for future in as_completed(futures):
            index = futures[future]
            result: Optional[PuzzleResult] = None
            try:
                result = future.result()
            except WordSearchError as exc:
                LOGGER.error(
                    "Puzzle %s failed with seed %s: %s", index, jobs[index].seed, exc
                )
                report.failures[index] = str(exc)
            except Exception as exc:
                LOGGER.exception("Puzzle %s crashed with seed %s", index, jobs[index].seed)
                report.failures[index] = f"{type(exc).__name__}: {exc}"
            if result is not None:
                report.results.append(result)
            if not batch.ordered:
                if result is not None:
                    _deliver(result, sinks, report)
                continue
            pending[index] = result
            while next_index in pending:
                ready = pending.pop(next_index)
                if ready is not None:
                    _deliver(ready, sinks, report)
                next_index += 1

    report.results.sort(key=lambda item: item.index)
    report.elapsed = time.perf_counter() - started
    LOGGER.info("All puzzles generated in %.3f seconds.", report.elapsed)
    return report
