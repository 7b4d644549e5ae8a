# --- File: tango/canonical.py ---
# Description: Symmetry- and colour-invariant signatures of solution grids,
# used to recognise puzzles that are the same up to rotation, reflection or
# swapping the two symbols.
from tango.grid import serialize_grid, flatten


# --- Grid Transformation Functions ---

def rotate_grid_90_clockwise(grid):
    """ Rotates a 2D list (grid) 90 degrees clockwise. """
    if not grid or not grid[0]:
        return grid
    return [list(reversed(row)) for row in zip(*grid)]


def flip_grid_horizontally(grid):
    """ Mirrors each row left to right. """
    return [row[::-1] for row in grid]


def flip_grid_vertically(grid):
    """ Reverses the order of the rows. """
    return [list(row) for row in grid[::-1]]


def invert_grid(grid):
    """ Swaps the two symbols, leaving empty cells alone. """
    return [[cell if cell is None else 1 - cell for cell in row] for row in grid]


def orientations(grid):
    """
    The eight members of the square's symmetry group: four rotations, the two
    axis reflections, and the two diagonal reflections (reflections rotated).
    """
    rotated90 = rotate_grid_90_clockwise(grid)
    rotated180 = rotate_grid_90_clockwise(rotated90)
    rotated270 = rotate_grid_90_clockwise(rotated180)
    horizontal = flip_grid_horizontally(grid)
    vertical = flip_grid_vertically(grid)
    return [
        [list(row) for row in grid], rotated90, rotated180, rotated270,
        horizontal, vertical,
        rotate_grid_90_clockwise(horizontal), rotate_grid_90_clockwise(vertical),
    ]


def symmetry_variants(grid):
    """All 16 grids: 8 orientations of the original and of its colour inverse."""
    return orientations(grid) + orientations(invert_grid(grid))


def get_canonical_form(solution):
    """Lexicographically smallest serialisation among the 16 symmetry variants."""
    return min(serialize_grid(variant) for variant in symmetry_variants(solution))


def size_two_canonical_form(solution, variant):
    """
    At size 2 only two solutions exist, so identity also depends on which
    cell is revealed: the signature is the flat solution plus the variant.
    """
    return f"{''.join(str(cell) for cell in flatten(solution))}|{variant}"
