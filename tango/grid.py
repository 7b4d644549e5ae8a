# --- File: tango/grid.py ---
# Description: Grid and domain-grid value helpers shared by every solver.
#
# A grid is a list of rows holding 0, 1 or None (empty). A domain grid holds,
# for each cell, the set of symbols still considered legal for it.
from tango.constants import SYMBOLS, EMPTY
from tango.errors import InvalidSizeError


def validate_size(size):
    """Raises InvalidSizeError unless size is an even integer >= 2."""
    if isinstance(size, bool) or not isinstance(size, int) or size < 2 or size % 2 != 0:
        raise InvalidSizeError(size)
    return size


def empty_grid(size):
    return [[EMPTY] * size for _ in range(size)]


def full_domains(size):
    return [[set(SYMBOLS) for _ in range(size)] for _ in range(size)]


def clone_grid(grid):
    return [list(row) for row in grid]


def clone_domains(domains):
    return [[set(domain) for domain in row] for row in domains]


def opposite(symbol):
    return 1 - symbol


def column(grid, col):
    return [row[col] for row in grid]


def count_symbol(cells, symbol):
    return sum(1 for cell in cells if cell == symbol)


def flatten(grid):
    return [cell for row in grid for cell in row]


def serialize_grid(grid):
    """Concatenates rows into one string, e.g. [[0, 1], [1, 0]] -> '0110'."""
    return ''.join(''.join(str(cell) for cell in row) for row in grid)


def filled_count(grid):
    return sum(1 for cell in flatten(grid) if cell is not EMPTY)


def is_complete(grid):
    return all(cell is not EMPTY for cell in flatten(grid))


def lines(grid):
    """Yields every row followed by every column."""
    size = len(grid)
    for row in grid:
        yield row
    for c in range(size):
        yield column(grid, c)


def has_triple(line):
    return any(
        line[i] is not EMPTY and line[i] == line[i + 1] == line[i + 2]
        for i in range(len(line) - 2)
    )


def is_valid_solution(grid):
    """
    Checks a complete grid against the balance and adjacency rules.

    Returns False for grids with empty cells, non-square shapes, odd sizes or
    symbols outside {0, 1}.
    """
    size = len(grid)
    if size < 2 or size % 2 != 0 or any(len(row) != size for row in grid):
        return False
    if any(cell not in SYMBOLS for cell in flatten(grid)):
        return False
    half = size // 2
    for line in lines(grid):
        if count_symbol(line, 0) != half or count_symbol(line, 1) != half:
            return False
        if has_triple(line):
            return False
    return True
