"""Persistent puzzle document store.

Each finished puzzle can be saved as a JSON document under a store
directory, next to the plain-text batch file. Documents carry the grid rows,
the placement report and a few stats.
"""

from __future__ import annotations

import json
import threading
import uuid
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional

from ..core.exceptions import OutputError
from ..utils.logger import get_logger

if TYPE_CHECKING:
    from ..core.models import PuzzleResult
    from ..engine.generator import GeneratorConfig


LOGGER = get_logger(__name__)

DEFAULT_STORE_DIR = Path("local_db/puzzles")


class PuzzleStore:
    """Save puzzle results as structured JSON documents."""

    def __init__(
        self,
        store_dir: Path | str = DEFAULT_STORE_DIR,
        config: Optional["GeneratorConfig"] = None,
    ) -> None:
        self.store_dir = Path(store_dir)
        self.config = config
        self._lock = threading.Lock()
        try:
            self.store_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputError(f"Cannot create store directory {self.store_dir}: {exc}") from exc

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def write(self, result: "PuzzleResult") -> None:
        self.save(result)

    def save(self, result: "PuzzleResult") -> str:
        """Persist a puzzle and return its document ID."""
        doc_id = self._new_id()
        doc = {
            "id": doc_id,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "puzzle": result.index,
            "seed": result.seed,
            "config": self._serialize_config(self.config),
            "grid": list(result.rows),
            "placed_words": [
                {
                    "word": placed.text,
                    "start": [placed.start_row, placed.start_col],
                    "end": list(placed.end),
                    "direction": placed.direction.value,
                }
                for placed in result.placed_words
            ],
            "unplaced_words": list(result.unplaced_words),
            "skipped_words": list(result.skipped_words),
            "stats": self._compute_stats(result),
        }

        path = self.store_dir / f"{doc_id}.json"
        try:
            with self._lock:
                path.write_text(json.dumps(doc, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError as exc:
            raise OutputError(f"Cannot save puzzle {result.index} to {path}: {exc}") from exc
        LOGGER.info("Puzzle %s saved: %s", result.index, doc_id)
        return doc_id

    def load(self, doc_id: str) -> Dict[str, Any]:
        path = self.store_dir / f"{doc_id}.json"
        return json.loads(path.read_text(encoding="utf-8"))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _new_id() -> str:
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        return f"{timestamp}_{uuid.uuid4().hex[:8]}"

    @staticmethod
    def _serialize_config(config: Optional["GeneratorConfig"]) -> Optional[Dict[str, Any]]:
        if config is None:
            return None
        return {
            "rows": config.rows,
            "cols": config.cols,
            "letters": list(config.letters),
            "words": list(config.words),
            "banned": sorted(config.banned),
            "max_attempts": config.max_attempts,
            "fill_strategy": config.fill_strategy.value,
            "solver_fallback": config.solver_fallback,
        }

    @staticmethod
    def _compute_stats(result: "PuzzleResult") -> Dict[str, Any]:
        total = result.height * result.width
        word_cells = {cell for placed in result.placed_words for cell in placed.cells}
        letters = Counter("".join(result.rows))
        return {
            "size": [result.height, result.width],
            "total_cells": total,
            "word_cells": len(word_cells),
            "word_coverage": round(len(word_cells) / total, 4) if total else 0.0,
            "letter_counts": dict(sorted(letters.items())),
            "fill_strategy": result.fill_strategy.value,
            "solver_used": result.solver_used,
            "elapsed_seconds": round(result.elapsed, 4),
        }
