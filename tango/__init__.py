"""Generation, validation and de-duplication of Tango logic-grid puzzles."""

from .canonical import get_canonical_form
from .constraints import Constraint, ConstraintSet, generate_constraints
from .errors import (
    TangoError, InvalidSizeError, InvalidDifficultyError, GenerationFailure,
    SearchBudgetExceeded,
)
from .generator import (
    generate_puzzle, generate_solution, generate_solution_with_restarts, reduce_clues,
)
from .logical_solver import solve_logically
from .puzzle import Puzzle

__all__ = [
    "Constraint",
    "ConstraintSet",
    "Puzzle",
    "TangoError",
    "InvalidSizeError",
    "InvalidDifficultyError",
    "GenerationFailure",
    "SearchBudgetExceeded",
    "generate_constraints",
    "generate_puzzle",
    "generate_solution",
    "generate_solution_with_restarts",
    "get_canonical_form",
    "reduce_clues",
    "solve_logically",
]
