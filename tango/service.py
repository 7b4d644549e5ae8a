# --- File: tango/service.py ---
# Description: Serves a game: generate a new unique puzzle if possible,
# otherwise fall back to one already in the store.
import logging
import secrets

from tango.constants import (
    DEFAULT_GAME_DIFFICULTY, DEFAULT_GAME_SIZE, DEFAULT_MAX_ATTEMPTS, DEFAULT_MAX_RESTARTS,
    VARIANT_SEED_STRIDE
)
from tango.errors import DuplicatePuzzleError, NoPuzzlesAvailableError, SearchBudgetExceeded
from tango.generator import generate_puzzle
from tango.grid import clone_grid

logger = logging.getLogger(__name__)


def format_puzzle_response(entry, is_new):
    """Shapes a StoredPuzzle the way the game client consumes it, copying its grids."""
    puzzle = entry.puzzle
    return {
        'grid': clone_grid(puzzle.grid),
        'solution': clone_grid(puzzle.solution),
        'constraints': puzzle.constraints.to_dict(),
        'difficulty': puzzle.difficulty,
        'size': puzzle.size,
        'puzzleNumber': entry.puzzle_number,
        'isUnique': is_new,
    }


def initialize_game(store, difficulty=DEFAULT_GAME_DIFFICULTY, size=DEFAULT_GAME_SIZE,
                    max_attempts=DEFAULT_MAX_ATTEMPTS, seed=None, max_steps=None,
                    max_restarts=DEFAULT_MAX_RESTARTS, rng=None):
    """
    Returns a game response for a newly generated puzzle, or a stored one.

    Each attempt generates with variant=attempt and its own seed derived from
    seed (fresh entropy when seed is None). With max_steps set, each attempt
    searches under that budget with up to max_restarts restarts. The first
    puzzle whose canonical form is not yet stored is saved and returned with
    isUnique=True. If every attempt produces a duplicate, a random stored
    puzzle of the same size is returned with isUnique=False.

    Raises:
        InvalidSizeError, InvalidDifficultyError: bad request parameters.
        GenerationFailure: the generator itself is broken.
        NoPuzzlesAvailableError: nothing new and nothing stored for this size.
    """
    base_seed = seed if seed is not None else secrets.randbits(32)

    for attempt in range(max_attempts):
        try:
            puzzle = generate_puzzle(
                size, difficulty, variant=attempt,
                seed=base_seed + attempt * VARIANT_SEED_STRIDE,
                max_steps=max_steps, max_restarts=max_restarts,
            )
        except SearchBudgetExceeded as e:
            logger.warning("Attempt %d: %s, retrying", attempt + 1, e)
            continue

        if store.exists(puzzle.canonical_form):
            logger.debug("Attempt %d: duplicate canonical form, retrying", attempt + 1)
            continue

        try:
            entry = store.add(puzzle, attempt=attempt)
        except DuplicatePuzzleError:
            # Another request stored the same puzzle in the meantime.
            continue
        return format_puzzle_response(entry, is_new=True)

    logger.warning("No unique %dx%d puzzle after %d attempts, falling back to stored puzzles",
                   size, size, max_attempts)
    existing = store.random_existing(size, rng=rng)
    if existing is None:
        raise NoPuzzlesAvailableError(size)
    return format_puzzle_response(existing, is_new=False)
