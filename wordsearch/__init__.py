"""Word search puzzle generator with banned-word avoidance.

This package exposes the public API surface via:

- ``wordsearch.engine.generator.WordSearchGenerator``: places words and fills one grid.
- ``wordsearch.engine.batch.generate_batch``: runs independent puzzles on a thread pool.
- ``wordsearch.io`` helpers: prompts, text output and the JSON puzzle store.
"""

from .engine.generator import GeneratorConfig, WordSearchGenerator, generate_puzzle
from .engine.batch import BatchConfig, BatchReport, generate_batch

__all__ = [
    "GeneratorConfig",
    "WordSearchGenerator",
    "generate_puzzle",
    "BatchConfig",
    "BatchReport",
    "generate_batch",
]

__version__ = "0.1.0"
