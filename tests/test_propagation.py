"""Unit tests for the generation-time constraint propagator."""

import operator

from tango.grid import empty_grid, full_domains
from tango.propagation import (
    has_empty_domain, line_coordinates, propagate_constraints, propagate_to_fixpoint,
    prune_adjacency, prune_balance,
)


def test_line_coordinates_covers_rows_then_columns():
    lines = line_coordinates(2)
    assert lines == [
        [(0, 0), (0, 1)],
        [(1, 0), (1, 1)],
        [(0, 0), (1, 0)],
        [(0, 1), (1, 1)],
    ]


def test_balance_removes_symbol_once_line_is_full():
    grid = empty_grid(4)
    grid[0][0] = grid[0][2] = 1
    domains = full_domains(4)

    assert prune_balance(grid, domains, 4)
    assert domains[0][1] == {0}
    assert domains[0][3] == {0}
    # Column 0 holds a single 1, so nothing changes there.
    assert domains[1][0] == {0, 1}


def test_balance_trigger_at_least_versus_exactly():
    grid = empty_grid(4)
    grid[0][:3] = [0, 0, 0]

    at_least = full_domains(4)
    prune_balance(grid, at_least, 4, trigger=operator.ge)
    assert at_least[0][3] == {1}

    exactly = full_domains(4)
    prune_balance(grid, exactly, 4, trigger=operator.eq)
    assert exactly[0][3] == {0, 1}


def test_adjacency_forces_cell_after_pair():
    grid = empty_grid(6)
    grid[2][1] = grid[2][2] = 0
    domains = full_domains(6)

    assert prune_adjacency(grid, domains, 6)
    assert domains[2][3] == {1}
    assert domains[2][0] == {1}


def test_adjacency_works_vertically():
    grid = empty_grid(6)
    grid[3][4] = grid[4][4] = 1
    domains = full_domains(6)

    prune_adjacency(grid, domains, 6)
    assert domains[5][4] == {0}
    assert domains[2][4] == {0}


def test_adjacency_leaves_narrowed_domains_alone():
    grid = empty_grid(4)
    grid[0][0] = grid[0][1] = 1
    domains = full_domains(4)
    domains[0][2] = {1}

    assert not prune_adjacency(grid, domains, 4)
    assert domains[0][2] == {1}


def test_propagate_reports_no_change_on_empty_grid():
    grid = empty_grid(6)
    domains = full_domains(6)
    assert not propagate_constraints(grid, domains, 6)
    assert propagate_to_fixpoint(grid, domains, 6) == 0


def test_has_empty_domain_only_counts_unfilled_cells():
    grid = empty_grid(2)
    domains = full_domains(2)
    grid[0][0] = 0
    domains[0][0] = set()
    assert not has_empty_domain(grid, domains)

    domains[1][1] = set()
    assert has_empty_domain(grid, domains)
