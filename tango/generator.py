# --- File: tango/generator.py ---
# Description: Builds complete Tango puzzles.
#
# Pipeline:
# 1. Generate a complete solution grid with a propagation-guided backtracking
#    search (minimum-remaining-values, seeded random tie-breaking).
# 2. Extract a few equals/opposite clue markers from the solution.
# 3. Clear solution cells while the logical solver can still recover the
#    whole grid without guessing.
# 4. Compute the canonical form used for duplicate detection.
#
# All randomness comes from a random.Random owned by the call, so the same
# (size, difficulty, variant, seed) always yields the same puzzle and
# concurrent calls never share state.
import logging
import random

from tango.constants import (
    EMPTY, DIFFICULTIES, TARGET_CLUE_PERCENTAGES, SIZE_TWO_SOLUTIONS,
    SIZE_TWO_CELL_POSITIONS, SIZE_TWO_VARIANTS, VARIANT_SEED_STRIDE, RESTART_STEPS_PER_CELL,
    DEFAULT_MAX_RESTARTS, round_half_up
)
from tango.canonical import get_canonical_form, size_two_canonical_form
from tango.constraints import ConstraintSet, generate_constraints
from tango.errors import GenerationFailure, InvalidDifficultyError, SearchBudgetExceeded
from tango.grid import (
    validate_size, empty_grid, full_domains, clone_grid, clone_domains,
    column, count_symbol, filled_count
)
from tango.logical_solver import solve_logically
from tango.propagation import propagate_to_fixpoint, has_empty_domain
from tango.puzzle import Puzzle

logger = logging.getLogger(__name__)


# =============================================================================
# Solution Generation
# =============================================================================

def can_place(grid, row, col, symbol, size):
    """Checks the balance and no-three rules for placing symbol at (row, col)."""
    half = size // 2
    if count_symbol(grid[row], symbol) >= half:
        return False
    if count_symbol(column(grid, col), symbol) >= half:
        return False

    def same(r, c):
        return 0 <= r < size and 0 <= c < size and grid[r][c] == symbol

    for d1, d2 in ((-2, -1), (-1, 1), (1, 2)):
        if same(row, col + d1) and same(row, col + d2):
            return False
        if same(row + d1, col) and same(row + d2, col):
            return False
    return True


def find_next_cell(grid, domains, rng):
    """Picks an unfilled cell with the smallest domain, breaking ties at random."""
    min_domain = None
    candidates = []
    for r, row in enumerate(grid):
        for c, cell in enumerate(row):
            if cell is not EMPTY:
                continue
            domain_size = len(domains[r][c])
            if min_domain is None or domain_size < min_domain:
                min_domain = domain_size
                candidates = [(r, c)]
            elif domain_size == min_domain:
                candidates.append((r, c))
    if not candidates:
        return None
    return rng.choice(candidates)


def generate_solution(size, seed=0, rng=None, max_steps=None):
    """
    Generates one complete, rule-valid grid.

    Args:
        size: Even grid size, at least 2.
        seed: Seed for the call-local random source (and the 2x2 selector).
        rng: Optional random.Random to draw from instead of seeding a new one.
        max_steps: Optional cap on trial assignments; exceeding it raises
            SearchBudgetExceeded so the caller can retry with another seed.

    Raises:
        InvalidSizeError: size is not an even integer >= 2.
        GenerationFailure: the search exhausted every option at the root.
    """
    validate_size(size)
    if size == 2:
        return [list(row) for row in SIZE_TWO_SOLUTIONS[seed % 2]]

    rng = rng or random.Random(seed)
    grid = empty_grid(size)
    stats = {'steps': 0, 'backtracks': 0}

    def solve(domains):
        propagate_to_fixpoint(grid, domains, size)
        if has_empty_domain(grid, domains):
            return False

        cell = find_next_cell(grid, domains, rng)
        if cell is None:
            return True  # Grid is complete

        r, c = cell
        values = sorted(domains[r][c])
        rng.shuffle(values)
        for symbol in values:
            if not can_place(grid, r, c, symbol, size):
                continue
            stats['steps'] += 1
            if max_steps is not None and stats['steps'] > max_steps:
                raise SearchBudgetExceeded(max_steps)

            # Each trial works on its own snapshot; a failed branch leaves
            # this frame's domains untouched.
            trial_domains = clone_domains(domains)
            grid[r][c] = symbol
            trial_domains[r][c] = {symbol}
            if solve(trial_domains):
                return True
            grid[r][c] = EMPTY
            stats['backtracks'] += 1
        return False

    if not solve(full_domains(size)):
        raise GenerationFailure(f"Failed to generate a valid {size}x{size} solution")

    logger.debug("Generated %dx%d solution in %d steps (%d backtracks)",
                 size, size, stats['steps'], stats['backtracks'])
    return grid


def restart_budget(size):
    """Default step budget for one restart: a fixed allowance per cell."""
    return RESTART_STEPS_PER_CELL * size * size


def generate_solution_with_restarts(size, rng, max_steps=None, max_restarts=DEFAULT_MAX_RESTARTS):
    """
    Budgeted solution search that restarts rather than running long.

    Each restart runs generate_solution under max_steps (restart_budget(size)
    when not given) with a fresh seed drawn from rng, so the result is still
    fully determined by the state of rng.

    Raises:
        SearchBudgetExceeded: every restart ran out of budget.
    """
    validate_size(size)
    if max_steps is None:
        max_steps = restart_budget(size)
    for restart in range(max_restarts):
        try:
            return generate_solution(size, seed=rng.getrandbits(32), max_steps=max_steps)
        except SearchBudgetExceeded:
            logger.debug("Restart %d/%d of the %dx%d search hit its %d-step budget",
                         restart + 1, max_restarts, size, size, max_steps)
    raise SearchBudgetExceeded(max_steps)


# =============================================================================
# Clue Reduction
# =============================================================================

def target_clues_for(size, difficulty):
    if difficulty not in TARGET_CLUE_PERCENTAGES:
        raise InvalidDifficultyError(difficulty)
    return max(1, round_half_up(size * size * TARGET_CLUE_PERCENTAGES[difficulty]))


def reduce_clues(solution, constraints, target_clues, size, rng):
    """
    Clears solution cells while the puzzle stays solvable by pure deduction.

    Cells are visited in a random order. A cleared cell stays cleared only if
    the logical solver still completes the grid back to the solution;
    otherwise it is restored. Stops once no more than target_clues remain.
    """
    expected = clone_grid(solution)
    clue_grid = clone_grid(solution)

    positions = [(r, c) for r in range(size) for c in range(size)]
    rng.shuffle(positions)

    for r, c in positions:
        if filled_count(clue_grid) <= target_clues:
            break
        saved = clue_grid[r][c]
        clue_grid[r][c] = EMPTY
        solved, complete = solve_logically(clue_grid, constraints, size)
        if not complete or solved != expected:
            clue_grid[r][c] = saved

    logger.debug("Reduced %dx%d grid to %d clues (target %d)",
                 size, size, filled_count(clue_grid), target_clues)
    return clue_grid


# =============================================================================
# Main Generation Function
# =============================================================================

def _generate_size_two(difficulty, variant):
    """
    A 2x2 grid has two solutions and four cells to reveal, giving 8 variants:
    variant // 4 picks the solution and variant % 4 the revealed cell.
    """
    variant %= SIZE_TWO_VARIANTS
    solution = [list(row) for row in SIZE_TWO_SOLUTIONS[variant // len(SIZE_TWO_CELL_POSITIONS)]]
    r, c = SIZE_TWO_CELL_POSITIONS[variant % len(SIZE_TWO_CELL_POSITIONS)]
    grid = empty_grid(2)
    grid[r][c] = solution[r][c]
    return Puzzle(
        size=2,
        grid=grid,
        solution=solution,
        constraints=ConstraintSet(),
        difficulty=difficulty,
        canonical_form=size_two_canonical_form(solution, variant),
    )


def generate_puzzle(size=6, difficulty='medium', variant=0, seed=None, max_steps=None,
                    max_restarts=DEFAULT_MAX_RESTARTS):
    """
    Runs the full pipeline and returns an immutable Puzzle.

    Args:
        size: Even grid size, at least 2.
        difficulty: "easy", "medium" or "hard".
        variant: Selects among the 8 puzzles at size 2; for larger grids it
            seeds the generator when no explicit seed is given.
        seed: Explicit seed for the call-local random source.
        max_steps: Optional per-restart step budget. When given, the solution
            comes from generate_solution_with_restarts; when None, from a
            single unbudgeted search.
        max_restarts: Restart limit for the budgeted search.

    Raises:
        SearchBudgetExceeded: every budgeted restart ran out of steps.
    """
    validate_size(size)
    if difficulty not in DIFFICULTIES:
        raise InvalidDifficultyError(difficulty)

    if size == 2:
        return _generate_size_two(difficulty, variant)

    rng = random.Random(seed if seed is not None else variant * VARIANT_SEED_STRIDE)
    if max_steps is None:
        solution = generate_solution(size, rng=rng)
    else:
        solution = generate_solution_with_restarts(size, rng, max_steps, max_restarts)
    constraints = generate_constraints(solution, difficulty, size, rng=rng)
    grid = reduce_clues(solution, constraints, target_clues_for(size, difficulty), size, rng=rng)

    return Puzzle(
        size=size,
        grid=grid,
        solution=solution,
        constraints=constraints,
        difficulty=difficulty,
        canonical_form=get_canonical_form(solution),
    )
