"""Uniqueness proofs with the Z3 solver."""

import pytest

from tango.constraints import Constraint, ConstraintSet
from tango.generator import generate_puzzle
from tango.grid import empty_grid, is_valid_solution
from tango.z3_solver import Z3TangoSolver, count_solutions, format_duration, has_unique_solution


@pytest.mark.parametrize("size,difficulty,seed", [(4, "easy", 1), (6, "medium", 2), (8, "hard", 3)])
def test_pipeline_puzzles_have_exactly_one_solution(size, difficulty, seed):
    puzzle = generate_puzzle(size, difficulty, seed=seed)
    solutions = Z3TangoSolver(puzzle.grid, puzzle.constraints).solve()
    assert solutions == [puzzle.solution]
    assert has_unique_solution(puzzle.grid, puzzle.constraints)


def test_size_two_variants_are_unique():
    for variant in range(8):
        puzzle = generate_puzzle(2, "easy", variant=variant)
        assert has_unique_solution(puzzle.grid, puzzle.constraints)


def test_empty_grid_has_many_solutions():
    solutions = Z3TangoSolver(empty_grid(4)).solve(max_solutions=5)
    assert len(solutions) == 5
    assert all(is_valid_solution(s) for s in solutions)
    assert len({str(s) for s in solutions}) == 5


def test_contradictory_clues_have_no_solution():
    grid = empty_grid(4)
    grid[0][0] = 0
    grid[0][1] = 1
    constraints = ConstraintSet(equals=[Constraint(((0, 0), (0, 1)), "equals")])
    assert count_solutions(grid, constraints) == 0


def test_format_duration():
    assert format_duration(0.0125) == "12.50 ms"
    assert format_duration(2.5) == "2.500 s"
    assert format_duration(75) == "1 min 15.00 s"
