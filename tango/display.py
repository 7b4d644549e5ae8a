# --- File: tango/display.py ---
# Description: Plain-text rendering of Tango grids for the terminal.
#
# Each cell is printed as 0, 1 or '.', with clue markers between cells: a
# marker for a horizontal pair sits to the right of its first (left) cell, and
# a marker for a vertical pair sits under its first (top) cell.
from tango.constants import (
    DISPLAY_SYMBOLS, EQUALS_MARKER, OPPOSITE_MARKER, HORIZONTAL, VERTICAL
)


def constraint_markers(constraints):
    """Maps (row, col, direction) of each pair's first cell to its marker."""
    markers = {}
    if constraints is None:
        return markers
    pairs = [(c, EQUALS_MARKER) for c in constraints.equals]
    pairs += [(c, OPPOSITE_MARKER) for c in constraints.opposite]
    for constraint, marker in pairs:
        (r, c), _ = constraint.cells
        markers[(r, c, constraint.direction)] = marker
    return markers


def render_grid(grid, constraints=None):
    markers = constraint_markers(constraints)
    dim = len(grid)
    lines = []
    for r in range(dim):
        row_chars = []
        for c in range(dim):
            row_chars.append(DISPLAY_SYMBOLS[grid[r][c]])
            if c < dim - 1:
                row_chars.append(f" {markers.get((r, c, HORIZONTAL), ' ')} ")
        lines.append("".join(row_chars).rstrip())
        if r < dim - 1:
            gap = "   ".join(markers.get((r, c, VERTICAL), ' ') for c in range(dim))
            lines.append(gap.rstrip())
    return "\n".join(lines)


def display_terminal_grid(grid, title, constraints=None):
    """Prints a grid (and its clue markers) to the terminal."""
    if not grid: return
    print(f"\n--- {title} ---")
    print(render_grid(grid, constraints))
    print("-" * (len(grid) * 4 - 3))
