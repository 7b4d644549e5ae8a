# --- File: tango/game_state.py ---
# Description: The player's working grid for one puzzle.
#
# Clue cells are locked. Every other cell cycles Empty -> 0 -> 1 -> Empty.
from tango.constants import EMPTY
from tango.errors import LockedCellError
from tango.grid import clone_grid, is_complete

CELL_CYCLE = {EMPTY: 0, 0: 1, 1: EMPTY}


def next_cell_state(value):
    return CELL_CYCLE[value]


def locked_cells_intact(puzzle_grid, player_grid):
    """True if every pre-filled clue cell still holds its original value."""
    return all(
        player_grid[r][c] == value
        for r, row in enumerate(puzzle_grid)
        for c, value in enumerate(row)
        if value is not EMPTY
    )


class GameState:
    """Tracks a player's progress on a clue grid."""

    def __init__(self, puzzle_grid, player_grid=None):
        self.puzzle_grid = clone_grid(puzzle_grid)
        self.player_grid = clone_grid(player_grid if player_grid is not None else puzzle_grid)
        self.size = len(self.puzzle_grid)

    def is_locked(self, row, col):
        return self.puzzle_grid[row][col] is not EMPTY

    def toggle(self, row, col):
        """Advances the cell to its next state and returns the new value."""
        if self.is_locked(row, col):
            raise LockedCellError(row, col)
        self.player_grid[row][col] = next_cell_state(self.player_grid[row][col])
        return self.player_grid[row][col]

    def is_complete(self):
        return is_complete(self.player_grid)

    def check(self, solution):
        """True once the player's grid matches the solution exactly."""
        return self.player_grid == [list(row) for row in solution]
