import threading
import unittest
from typing import List
from unittest import mock

from wordsearch.core.exceptions import ConfigurationError, FillError, OutputError
from wordsearch.core.models import PuzzleResult
from wordsearch.engine import batch as batch_module
from wordsearch.engine.batch import BatchConfig, generate_batch
from wordsearch.engine.generator import GeneratorConfig
from wordsearch.engine.grid import GridConfig, WordSearchGrid
from wordsearch.engine.scanner import BannedScanner
from wordsearch.io.output import StreamPuzzleWriter


class CollectingSink:
    def __init__(self) -> None:
        self.results: List[PuzzleResult] = []
        self._lock = threading.Lock()

    def write(self, result: PuzzleResult) -> None:
        with self._lock:
            self.results.append(result)


class BrokenSink:
    def write(self, result: PuzzleResult) -> None:
        raise OutputError("disk full")


def make_config() -> GeneratorConfig:
    return GeneratorConfig(
        rows=6,
        cols=6,
        letters="ABCDEFGHIJKLMNOPQRSTUVWXYZ",
        words=["TREE", "LEAF", "ROOT"],
        banned=["BAD", "SAD"],
    )


class BatchConfigTests(unittest.TestCase):
    def test_count_and_workers_must_be_positive(self) -> None:
        with self.assertRaises(ConfigurationError):
            BatchConfig(count=0)
        with self.assertRaises(ConfigurationError):
            BatchConfig(count=2, workers=0)

    def test_base_seed_offsets_by_index(self) -> None:
        config = BatchConfig(count=3, base_seed=100)
        self.assertEqual(config.seed_for(2, mock.MagicMock()), 102)


class GenerateBatchTests(unittest.TestCase):
    def test_independent_puzzles_each_satisfy_invariants(self) -> None:
        sink = CollectingSink()
        report = generate_batch(make_config(), BatchConfig(count=4, base_seed=10), [sink])
        self.assertTrue(report.ok)
        self.assertEqual([r.index for r in report.results], [1, 2, 3, 4])
        self.assertEqual(sorted(r.index for r in sink.results), [1, 2, 3, 4])
        self.assertEqual([r.seed for r in report.results], [11, 12, 13, 14])
        scanner = BannedScanner(["BAD", "SAD"])
        for result in report.results:
            grid = WordSearchGrid(GridConfig(rows=6, cols=6))
            for r, row in enumerate(result.rows):
                for c, letter in enumerate(row):
                    grid.set_letter(r, c, letter)
            self.assertTrue(grid.is_complete)
            self.assertIsNone(scanner.find_banned(grid))

    def test_ordered_batch_writes_in_puzzle_order(self) -> None:
        sink = CollectingSink()
        generate_batch(make_config(), BatchConfig(count=5, base_seed=1, ordered=True, workers=3), [sink])
        self.assertEqual([r.index for r in sink.results], [1, 2, 3, 4, 5])

    def test_failed_puzzle_does_not_stop_the_batch(self) -> None:
        real_run = batch_module._run_single_puzzle

        def flaky(config: GeneratorConfig, index: int) -> PuzzleResult:
            if index == 2:
                raise FillError("no safe letter")
            return real_run(config, index)

        sink = CollectingSink()
        with mock.patch.object(batch_module, "_run_single_puzzle", side_effect=flaky):
            with self.assertLogs("wordsearch.engine.batch", level="ERROR"):
                report = generate_batch(
                    make_config(), BatchConfig(count=3, base_seed=0, ordered=True), [sink]
                )
        self.assertEqual(list(report.failures), [2])
        self.assertEqual([r.index for r in sink.results], [1, 3])
        self.assertFalse(report.ok)

    def test_sink_errors_are_reported_per_puzzle(self) -> None:
        good = CollectingSink()
        with self.assertLogs("wordsearch.engine.batch", level="ERROR") as logs:
            report = generate_batch(make_config(), BatchConfig(count=2, base_seed=5), [BrokenSink(), good])
        self.assertEqual(sorted(report.write_errors), [1, 2])
        self.assertEqual(len(good.results), 2)
        self.assertTrue(any("could not be written" in line for line in logs.output))

    def test_unexpected_worker_error_stays_with_its_puzzle(self) -> None:
        real_run = batch_module._run_single_puzzle

        def crashing(config: GeneratorConfig, index: int) -> PuzzleResult:
            if index == 2:
                raise RuntimeError("solver backend missing")
            return real_run(config, index)

        sink = CollectingSink()
        with mock.patch.object(batch_module, "_run_single_puzzle", side_effect=crashing):
            with self.assertLogs("wordsearch.engine.batch", level="ERROR"):
                report = generate_batch(
                    make_config(), BatchConfig(count=3, base_seed=0, ordered=True), [sink]
                )
        self.assertEqual(report.failures, {2: "RuntimeError: solver backend missing"})
        self.assertEqual([r.index for r in sink.results], [1, 3])

    def test_broken_stream_only_marks_write_errors(self) -> None:
        stream = mock.MagicMock()
        stream.write.side_effect = BrokenPipeError("pipe closed")
        good = CollectingSink()
        with self.assertLogs("wordsearch.engine.batch", level="ERROR"):
            report = generate_batch(
                make_config(), BatchConfig(count=2, base_seed=8), [StreamPuzzleWriter(stream), good]
            )
        self.assertEqual(report.failures, {})
        self.assertEqual(sorted(report.write_errors), [1, 2])
        self.assertEqual(len(good.results), 2)

    def test_duration_is_logged(self) -> None:
        with self.assertLogs("wordsearch.engine.batch", level="INFO") as logs:
            report = generate_batch(make_config(), BatchConfig(count=1, base_seed=3))
        self.assertGreaterEqual(report.elapsed, 0.0)
        self.assertTrue(any("All puzzles generated in" in line for line in logs.output))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
