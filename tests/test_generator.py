"""Tests for solution generation, clue reduction and the full pipeline."""

import random

import pytest

from tango.canonical import get_canonical_form
from tango.errors import InvalidDifficultyError, InvalidSizeError, SearchBudgetExceeded
from tango.generator import (
    can_place, find_next_cell, generate_puzzle, generate_solution, generate_solution_with_restarts,
    reduce_clues, restart_budget, target_clues_for,
)
from tango.constraints import ConstraintSet, generate_constraints
from tango.grid import empty_grid, filled_count, full_domains, is_valid_solution
from tango.logical_solver import solve_logically


@pytest.mark.parametrize("size", [2, 4, 6, 8, 10])
@pytest.mark.parametrize("seed", [0, 1, 42, 1234])
def test_generated_solutions_follow_the_rules(size, seed):
    grid = generate_solution_with_restarts(size, random.Random(seed))
    assert len(grid) == size
    assert is_valid_solution(grid)


def test_generation_is_reproducible():
    assert generate_solution(6, seed=42) == generate_solution(6, seed=42)
    assert generate_solution(6, rng=random.Random(7)) == generate_solution(6, rng=random.Random(7))


def test_different_seeds_give_variety():
    forms = {get_canonical_form(generate_solution(6, seed=seed)) for seed in range(20)}
    assert len(forms) > 1


def test_size_two_selects_by_seed_parity():
    assert generate_solution(2, seed=0) == [[0, 1], [1, 0]]
    assert generate_solution(2, seed=1) == [[1, 0], [0, 1]]
    assert generate_solution(2, seed=7) == [[1, 0], [0, 1]]


@pytest.mark.parametrize("size", [0, 3, 7, -4])
def test_invalid_sizes_are_rejected_before_solving(size):
    with pytest.raises(InvalidSizeError):
        generate_solution(size)
    with pytest.raises(InvalidSizeError):
        generate_puzzle(size)


def test_search_budget_is_enforced():
    with pytest.raises(SearchBudgetExceeded):
        generate_solution(6, seed=3, max_steps=0)


def test_can_place_checks_balance_and_runs():
    grid = [
        [0, 0, None, None],
        [None, None, None, None],
        [None, 1, None, None],
        [None, 1, None, None],
    ]
    assert not can_place(grid, 0, 2, 0, 4)  # row already holds two 0s
    assert can_place(grid, 0, 2, 1, 4)
    assert not can_place(grid, 1, 1, 1, 4)  # column already holds two 1s

    grid = [
        [1, None, 1, None, None, None],
        [None] * 6,
        [None] * 6,
        [None] * 6,
        [None] * 6,
        [None] * 6,
    ]
    assert not can_place(grid, 0, 1, 1, 6)  # would sit between two 1s
    assert can_place(grid, 0, 1, 0, 6)


def test_find_next_cell_prefers_smallest_domain():
    grid = empty_grid(4)
    domains = full_domains(4)
    domains[2][3] = {1}
    assert find_next_cell(grid, domains, random.Random(0)) == (2, 3)

    grid = [[0, 1], [1, 0]]
    assert find_next_cell(grid, full_domains(2), random.Random(0)) is None


@pytest.mark.parametrize("difficulty,expected", [("easy", 9), ("medium", 5), ("hard", 4)])
def test_target_clues_for_six_by_six(difficulty, expected):
    assert target_clues_for(6, difficulty) == expected


def test_target_clues_rounds_half_up_and_floors_at_one():
    assert target_clues_for(4, "hard") == 2   # 1.6
    assert target_clues_for(10, "easy") == 25
    assert target_clues_for(2, "hard") == 1   # 0.4


def test_target_clues_rejects_unknown_difficulty():
    with pytest.raises(InvalidDifficultyError):
        target_clues_for(6, "extreme")


def test_reduce_clues_keeps_puzzle_logically_solvable():
    rng = random.Random(5)
    solution = generate_solution(6, rng=rng)
    constraints = generate_constraints(solution, "medium", 6, rng=rng)

    clue_grid = reduce_clues(solution, constraints, 5, 6, rng=rng)

    assert filled_count(clue_grid) < 36
    assert all(
        cell is None or cell == solution[r][c]
        for r, row in enumerate(clue_grid) for c, cell in enumerate(row)
    )
    solved, complete = solve_logically(clue_grid, constraints, 6)
    assert complete
    assert solved == solution


def test_reduce_clues_does_not_touch_the_solution():
    solution = generate_solution(4, seed=9)
    before = [list(row) for row in solution]
    reduce_clues(solution, ConstraintSet(), 1, 4, rng=random.Random(9))
    assert solution == before


def test_reduce_clues_stops_at_target():
    solution = generate_solution(6, seed=11)
    clue_grid = reduce_clues(solution, ConstraintSet(), 36, 6, rng=random.Random(0))
    assert clue_grid == solution


@pytest.mark.parametrize("size", [4, 6, 8])
@pytest.mark.parametrize("difficulty", ["easy", "medium", "hard"])
def test_pipeline_puzzles_are_recoverable_by_deduction(size, difficulty):
    puzzle = generate_puzzle(size, difficulty, variant=3)

    assert puzzle.size == size
    assert puzzle.difficulty == difficulty
    assert is_valid_solution(puzzle.solution)
    assert puzzle.canonical_form == get_canonical_form(puzzle.solution)
    solved, complete = solve_logically(puzzle.grid, puzzle.constraints, size)
    assert complete
    assert solved == puzzle.solution


def test_pipeline_is_deterministic_for_a_seed():
    first = generate_puzzle(6, "hard", seed=2024)
    second = generate_puzzle(6, "hard", seed=2024)
    assert first == second


def test_variant_seeds_the_pipeline_when_no_seed_given():
    assert generate_puzzle(6, "easy", variant=4) == generate_puzzle(6, "easy", seed=4000)


def test_pipeline_rejects_unknown_difficulty():
    with pytest.raises(InvalidDifficultyError):
        generate_puzzle(6, "extreme")


def test_size_two_variant_five():
    puzzle = generate_puzzle(2, "easy", variant=5)

    assert puzzle.solution == [[1, 0], [0, 1]]
    assert puzzle.grid == [[None, 0], [None, None]]
    assert len(puzzle.constraints) == 0
    assert puzzle.canonical_form == "1001|5"


def test_size_two_has_eight_distinct_variants():
    puzzles = [generate_puzzle(2, "medium", variant=v) for v in range(8)]
    assert len({p.canonical_form for p in puzzles}) == 8
    assert all(filled_count(p.grid) == 1 for p in puzzles)
    # Variants wrap around modulo 8.
    assert generate_puzzle(2, "medium", variant=13) == puzzles[5]


def test_restart_budget_scales_with_cells():
    assert restart_budget(4) == 320
    assert restart_budget(10) == 2000


def test_restarts_are_reproducible():
    first = generate_solution_with_restarts(8, random.Random(5))
    second = generate_solution_with_restarts(8, random.Random(5))
    assert first == second
    assert is_valid_solution(first)


def test_restarts_finish_ten_by_ten_grids():
    grid = generate_solution_with_restarts(10, random.Random(0))
    assert is_valid_solution(grid)


def test_restarts_give_up_after_the_limit():
    class CountingRandom(random.Random):
        draws = 0

        def getrandbits(self, k):
            self.draws += 1
            return super().getrandbits(k)

    rng = CountingRandom(1)
    with pytest.raises(SearchBudgetExceeded):
        generate_solution_with_restarts(6, rng, max_steps=0, max_restarts=3)
    assert rng.draws == 3


def test_budgeted_pipeline():
    puzzle = generate_puzzle(6, "easy", seed=3, max_steps=restart_budget(6))
    solved, complete = solve_logically(puzzle.grid, puzzle.constraints, 6)
    assert complete
    assert solved == puzzle.solution
    assert generate_puzzle(6, "easy", seed=3, max_steps=restart_budget(6)) == puzzle

    with pytest.raises(SearchBudgetExceeded):
        generate_puzzle(6, "easy", seed=3, max_steps=0, max_restarts=2)


def test_reduce_clues_needs_a_caller_supplied_rng():
    with pytest.raises(TypeError):
        reduce_clues(generate_solution(4, seed=9), ConstraintSet(), 1, 4)
