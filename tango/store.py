# --- File: tango/store.py ---
# Description: A small puzzle database keyed by puzzle number.
#
# The store is the uniqueness gate for generated puzzles: a puzzle is only
# accepted if its canonical form has not been seen, it is numbered
# sequentially, and a sha256 hash of its solution is kept alongside it. When
# a path is given, the whole store is a JSON document on disk, sorted by
# integer key, rewritten on every change.
import hashlib
import json
import logging
import os
import random
import shutil
import tempfile
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterator, Optional

from tango.errors import DuplicatePuzzleError, PuzzleStoreError
from tango.grid import serialize_grid
from tango.puzzle import Puzzle

logger = logging.getLogger(__name__)


def solution_hash(solution, attempt=0) -> str:
    return hashlib.sha256(f"{serialize_grid(solution)}|{attempt}".encode('utf-8')).hexdigest()


@dataclass(frozen=True)
class StoredPuzzle:
    puzzle: Puzzle
    puzzle_number: int
    solution_hash: str
    created_at: str

    def to_dict(self):
        data = self.puzzle.to_dict()
        data.update({
            'puzzleNumber': self.puzzle_number,
            'solutionHash': self.solution_hash,
            'createdAt': self.created_at,
        })
        return data

    @classmethod
    def from_dict(cls, data):
        return cls(
            puzzle=Puzzle.from_dict(data),
            puzzle_number=int(data['puzzleNumber']),
            solution_hash=data['solutionHash'],
            created_at=data.get('createdAt', ''),
        )


class PuzzleStore:
    """
    Thread-safe puzzle storage, in memory or backed by a JSON file.

    Args:
        path: Optional JSON file. Loaded on construction if it exists.
        backup: Copy the previous file to '<path>.bak' before each rewrite.
    """

    def __init__(self, path=None, backup=False):
        self.path = Path(path) if path else None
        self.backup = backup
        self._lock = threading.Lock()
        self._puzzles: Dict[int, StoredPuzzle] = {}
        self._by_canonical: Dict[str, int] = {}
        if self.path is not None:
            self._load()

    # --- Queries ---

    def exists(self, canonical_form: str) -> bool:
        with self._lock:
            return canonical_form in self._by_canonical

    def get(self, puzzle_number: int) -> Optional[StoredPuzzle]:
        with self._lock:
            return self._puzzles.get(puzzle_number)

    def count(self) -> int:
        with self._lock:
            return len(self._puzzles)

    def __len__(self):
        return self.count()

    def __iter__(self) -> Iterator[StoredPuzzle]:
        with self._lock:
            entries = [self._puzzles[n] for n in sorted(self._puzzles)]
        return iter(entries)

    def random_existing(self, size, difficulty=None, rng=None) -> Optional[StoredPuzzle]:
        """Samples a stored puzzle of the given size (and difficulty, if given)."""
        rng = rng or random.Random()
        with self._lock:
            matches = [
                entry for n, entry in sorted(self._puzzles.items())
                if entry.puzzle.size == size
                and (difficulty is None or entry.puzzle.difficulty == difficulty)
            ]
        if not matches:
            return None
        return rng.choice(matches)

    # --- Updates ---

    def add(self, puzzle: Puzzle, attempt=0) -> StoredPuzzle:
        """
        Stores a new puzzle under the next puzzle number.

        Raises:
            DuplicatePuzzleError: a puzzle with the same canonical form is stored.
        """
        with self._lock:
            if puzzle.canonical_form in self._by_canonical:
                raise DuplicatePuzzleError(puzzle.canonical_form)
            entry = StoredPuzzle(
                puzzle=puzzle,
                puzzle_number=len(self._puzzles) + 1,
                solution_hash=solution_hash(puzzle.solution, attempt),
                created_at=datetime.now(timezone.utc).isoformat(),
            )
            self._puzzles[entry.puzzle_number] = entry
            self._by_canonical[puzzle.canonical_form] = entry.puzzle_number
            if self.path is not None:
                try:
                    self._save()
                except PuzzleStoreError:
                    del self._puzzles[entry.puzzle_number]
                    del self._by_canonical[puzzle.canonical_form]
                    raise
        logger.info("Stored puzzle #%d (%dx%d, %s)", entry.puzzle_number,
                    puzzle.size, puzzle.size, puzzle.difficulty)
        return entry

    # --- File I/O ---

    def _load(self):
        if not self.path.exists():
            return
        try:
            with self.path.open('r', encoding='utf-8') as f:
                data = json.load(f)
            for key, raw in data.items():
                entry = StoredPuzzle.from_dict(raw)
                if entry.puzzle_number != int(key):
                    raise ValueError(f"key {key} does not match puzzle number {entry.puzzle_number}")
                self._puzzles[entry.puzzle_number] = entry
                self._by_canonical[entry.puzzle.canonical_form] = entry.puzzle_number
        except json.JSONDecodeError as e:
            raise PuzzleStoreError(f"The file '{self.path}' contains invalid JSON: {e}") from e
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise PuzzleStoreError(f"The file '{self.path}' is not a valid puzzle store: {e}") from e
        except OSError as e:
            raise PuzzleStoreError(f"Could not read file '{self.path}': {e}") from e
        logger.debug("Loaded %d puzzles from %s", len(self._puzzles), self.path)

    def _save(self):
        sorted_data = {str(n): self._puzzles[n].to_dict() for n in sorted(self._puzzles)}
        self.path.parent.mkdir(parents=True, exist_ok=True)

        if self.backup and self.path.exists():
            backup_path = self.path.with_suffix(self.path.suffix + '.bak')
            try:
                shutil.copy2(self.path, backup_path)
            except OSError as e:
                logger.warning("Could not create backup for '%s': %s", self.path, e)

        # Write to a temp file in the same directory, then swap it in.
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(sorted_data, f, indent=4)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise PuzzleStoreError(f"Could not write to '{self.path}': {e}") from e
