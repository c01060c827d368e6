"""CLI entrypoint for the word search puzzle generator."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

from wordsearch.core.constants import DEFAULT_MAX_ATTEMPTS, FillStrategy
from wordsearch.core.exceptions import ConfigurationError, OutputError
from wordsearch.engine.batch import BatchConfig, PuzzleSink, generate_batch
from wordsearch.engine.generator import GeneratorConfig
from wordsearch.io.output import StreamPuzzleWriter, TextPuzzleWriter
from wordsearch.io.prompts import PromptAnswers, parse_letters, parse_words_file, prompt_for_settings
from wordsearch.io.store import PuzzleStore
from wordsearch.utils.logger import configure_logging, get_logger
from wordsearch.utils.pretty import print_puzzle_stats


LOGGER = get_logger("wordsearch.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate batches of word search puzzles that never spell banned words",
    )
    parser.add_argument("--rows", type=int, help="Grid height in cells")
    parser.add_argument("--cols", type=int, help="Grid width in cells")
    parser.add_argument(
        "--letters",
        nargs="+",
        metavar="LETTER",
        help="Fill letters (e.g. A B C D); every non-space character counts",
    )
    parser.add_argument("--words", nargs="*", default=[], metavar="WORD", help="Words to hide")
    parser.add_argument(
        "--words-file",
        type=Path,
        metavar="FILE",
        help="File with one word per line (# comments and blank lines ignored)",
    )
    parser.add_argument(
        "--banned", nargs="*", default=[], metavar="WORD", help="Words that must never appear"
    )
    parser.add_argument(
        "--banned-file",
        type=Path,
        metavar="FILE",
        help="File with one banned word per line",
    )
    parser.add_argument("--count", type=int, default=1, help="Number of puzzles to generate")
    parser.add_argument("--output", type=Path, help="Text file receiving all puzzles ('-' for stdout)")
    parser.add_argument("--seed", type=int, default=None, help="Base seed; puzzle n uses seed+n")
    parser.add_argument("--workers", type=int, default=None, help="Thread pool size (default: one per puzzle)")
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=DEFAULT_MAX_ATTEMPTS,
        help="Random placement attempts per word",
    )
    parser.add_argument(
        "--fill-strategy",
        type=str,
        choices=[s.value for s in FillStrategy],
        default=FillStrategy.SAFE_SET.value,
        help="safe_set draws only letters that cannot spell a banned word; rescan is the full-grid baseline",
    )
    parser.add_argument(
        "--no-solver-fallback",
        action="store_true",
        help="Fail a puzzle instead of calling CP-SAT when the greedy fill dead-ends",
    )
    parser.add_argument(
        "--ordered",
        action="store_true",
        help="Write puzzles in puzzle order instead of completion order",
    )
    parser.add_argument("--json-dir", type=Path, help="Also save every puzzle as a JSON document here")
    parser.add_argument("--show", action="store_true", help="Print each grid and its stats to stdout")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def _settings_from_args(args: argparse.Namespace) -> PromptAnswers:
    letters = parse_letters(" ".join(args.letters))
    words: List[str] = list(args.words)
    if args.words_file:
        words.extend(parse_words_file(args.words_file))
    banned: List[str] = list(args.banned)
    if args.banned_file:
        banned.extend(parse_words_file(args.banned_file))
    if not letters:
        raise ConfigurationError("No letters provided")
    return PromptAnswers(
        rows=args.rows,
        cols=args.cols,
        letters=letters,
        words=words,
        banned=banned,
        count=args.count,
        output=args.output,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    interactive = args.rows is None or args.cols is None or not args.letters
    try:
        if interactive:
            settings = prompt_for_settings()
        else:
            if args.output is None and not args.show and args.json_dir is None:
                parser.error("--output is required unless --show or --json-dir is given")
            settings = _settings_from_args(args)

        config = GeneratorConfig(
            rows=settings.rows,
            cols=settings.cols,
            letters=settings.letters,
            words=settings.words,
            banned=settings.banned,
            max_attempts=args.max_attempts,
            fill_strategy=FillStrategy(args.fill_strategy),
            solver_fallback=not args.no_solver_fallback,
        )
        batch = BatchConfig(
            count=settings.count,
            workers=args.workers,
            base_seed=args.seed,
            ordered=args.ordered,
        )
    except (ConfigurationError, OSError) as exc:
        print(f"Error: {exc}. Exiting.", file=sys.stderr)
        return 1

    sinks: List[PuzzleSink] = []
    if settings.output == Path("-"):
        sinks.append(StreamPuzzleWriter(sys.stdout))
    elif settings.output is not None:
        sinks.append(TextPuzzleWriter(settings.output))
    if args.json_dir is not None:
        try:
            sinks.append(PuzzleStore(args.json_dir, config=config))
        except OutputError as exc:
            LOGGER.error("JSON store disabled: %s", exc)

    report = generate_batch(config, batch, sinks)

    if args.show:
        for result in report.results:
            print_puzzle_stats(result)
            print()
    if report.failures:
        LOGGER.warning(
            "%d of %d puzzles failed: %s",
            len(report.failures),
            batch.count,
            ", ".join(str(index) for index in sorted(report.failures)),
        )
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
