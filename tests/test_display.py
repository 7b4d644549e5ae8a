"""Tests for terminal rendering."""

from tango.constraints import Constraint, ConstraintSet
from tango.display import constraint_markers, display_terminal_grid, render_grid

CONSTRAINTS = ConstraintSet(
    equals=[Constraint(((0, 1), (1, 1)), "equals")],
    opposite=[Constraint(((0, 0), (0, 1)), "opposite")],
)


def test_constraint_markers():
    assert constraint_markers(CONSTRAINTS) == {
        (0, 1, "vertical"): "=",
        (0, 0, "horizontal"): "x",
    }
    assert constraint_markers(None) == {}


def test_render_grid_places_markers_between_cells():
    grid = [[0, 1], [None, 1]]
    assert render_grid(grid, CONSTRAINTS) == "0 x 1\n    =\n.   1"


def test_render_grid_without_constraints():
    assert render_grid([[1, 0], [0, 1]]) == "1   0\n\n0   1"


def test_display_terminal_grid_prints_title(capsys):
    display_terminal_grid([[1, 0], [0, 1]], "Solution")
    out = capsys.readouterr().out
    assert "--- Solution ---" in out
    assert "1   0" in out
