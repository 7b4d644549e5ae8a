import itertools

import pytest

from tango.grid import has_triple, is_valid_solution


def _all_solutions(size):
    """Every valid complete grid of the given size, by brute force over rows."""
    rows = [
        list(bits) for bits in itertools.product((0, 1), repeat=size)
        if sum(bits) == size // 2 and not has_triple(bits)
    ]
    found = []
    for combo in itertools.product(rows, repeat=size):
        grid = [list(row) for row in combo]
        if is_valid_solution(grid):
            found.append(grid)
    return found


@pytest.fixture(scope="session")
def all_4x4_solutions():
    return _all_solutions(4)
