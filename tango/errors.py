# --- File: tango/errors.py ---
# Description: Exception types raised by the puzzle engine and its services.


class TangoError(Exception):
    """Base class for all errors raised by this package."""


class InvalidSizeError(TangoError, ValueError):
    """Grid size is not an even integer of at least 2."""

    def __init__(self, size):
        super().__init__(f"Grid size must be an even integer of at least 2, got {size!r}")
        self.size = size


class InvalidDifficultyError(TangoError, ValueError):
    def __init__(self, difficulty):
        super().__init__(f"Unknown difficulty {difficulty!r}")
        self.difficulty = difficulty


class GenerationFailure(TangoError, RuntimeError):
    """
    The backtracking search exhausted every option at the root.

    For a valid even size a solution always exists, so this points at a defect
    in the generator rather than at bad input. It is never retried internally.
    """


class SearchBudgetExceeded(GenerationFailure):
    """The search hit its caller-imposed step budget. Safe to retry with a new seed."""

    def __init__(self, max_steps):
        super().__init__(f"Search exceeded its budget of {max_steps} steps")
        self.max_steps = max_steps


class DuplicatePuzzleError(TangoError):
    def __init__(self, canonical_form):
        super().__init__(f"A puzzle with canonical form {canonical_form!r} is already stored")
        self.canonical_form = canonical_form


class NoPuzzlesAvailableError(TangoError):
    def __init__(self, size, difficulty=None):
        message = f"No puzzles available for size {size}"
        if difficulty:
            message += f" and difficulty {difficulty!r}"
        super().__init__(message)
        self.size = size
        self.difficulty = difficulty


class LockedCellError(TangoError):
    """Attempted to change a pre-filled clue cell."""

    def __init__(self, row, col):
        super().__init__(f"Cell ({row}, {col}) is a clue and cannot be changed")
        self.row = row
        self.col = col


class PuzzleStoreError(TangoError):
    """The puzzle store file could not be read or written."""


class PuzzleNotFoundError(TangoError):
    def __init__(self, puzzle_number):
        super().__init__(f"Puzzle #{puzzle_number} not found")
        self.puzzle_number = puzzle_number
