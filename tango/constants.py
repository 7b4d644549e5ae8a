# --- File: tango/constants.py ---
# Description: Contains all the static DATA constants for the Tango puzzle engine.
import math

SYMBOLS = (0, 1)
EMPTY = None

DIFFICULTIES = ('easy', 'medium', 'hard')

# Multiplier applied to the per-type clue count (size // 4).
CONSTRAINT_MULTIPLIERS = {
    'easy': 0.5,
    'medium': 1.0,
    'hard': 1.5,
}

# Fraction of the N*N cells left filled after clue reduction.
TARGET_CLUE_PERCENTAGES = {
    'easy': 0.25,
    'medium': 0.15,
    'hard': 0.10,
}

EQUALS = 'equals'
OPPOSITE = 'opposite'
HORIZONTAL = 'horizontal'
VERTICAL = 'vertical'

# A 2x2 grid has exactly two complete solutions under the balance rule.
SIZE_TWO_SOLUTIONS = (
    ((0, 1), (1, 0)),
    ((1, 0), (0, 1)),
)
SIZE_TWO_CELL_POSITIONS = ((0, 0), (0, 1), (1, 0), (1, 1))
SIZE_TWO_VARIANTS = len(SIZE_TWO_SOLUTIONS) * len(SIZE_TWO_CELL_POSITIONS)

# Seed spacing between consecutive variants, as the generator was first tuned with.
VARIANT_SEED_STRIDE = 1000

# Budgeted searches give up after this many trial placements per cell and
# restart from a fresh seed.
RESTART_STEPS_PER_CELL = 20
DEFAULT_MAX_RESTARTS = 20

# --- Service / API defaults ---
DEFAULT_SIZE = 6
DEFAULT_DIFFICULTY = 'medium'
DEFAULT_GAME_SIZE = 8
DEFAULT_GAME_DIFFICULTY = 'easy'
DEFAULT_MAX_ATTEMPTS = 8
DEFAULT_MAX_API_SIZE = 16

# --- Terminal display ---
DISPLAY_SYMBOLS = {0: '0', 1: '1', None: '.'}
EQUALS_MARKER = '='
OPPOSITE_MARKER = 'x'


def round_half_up(value):
    """Rounds .5 away from zero for positive values (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))
