# --- File: tango/propagation.py ---
# Description: Domain-narrowing rules for the balance and no-three-in-a-row rules.
#
# The generator calls propagate_constraints() to a fixpoint before every
# branching decision. The logical solver reuses the same rule helpers, but
# with its own balance trigger (see logical_solver.py).
import operator

from tango.constants import SYMBOLS, EMPTY
from tango.grid import opposite


def line_coordinates(size):
    """Every row and then every column, each as a list of (row, col) tuples."""
    rows = [[(r, c) for c in range(size)] for r in range(size)]
    cols = [[(r, c) for r in range(size)] for c in range(size)]
    return rows + cols


def prune_balance(grid, domains, size, trigger=operator.ge):
    """
    Removes a symbol from the empty cells of any line where its placed count
    satisfies trigger(count, size // 2).
    """
    changed = False
    half = size // 2
    for coords in line_coordinates(size):
        values = [grid[r][c] for r, c in coords]
        for symbol in SYMBOLS:
            if not trigger(values.count(symbol), half):
                continue
            for r, c in coords:
                if grid[r][c] is EMPTY and symbol in domains[r][c]:
                    domains[r][c].discard(symbol)
                    changed = True
    return changed


def prune_adjacency(grid, domains, size):
    """
    Two equal symbols side by side force the opposite symbol into the empty
    cell directly after them, or directly before them.
    """
    changed = False
    for coords in line_coordinates(size):
        for i in range(size - 2):
            window = coords[i:i + 3]
            first, second, third = (grid[r][c] for r, c in window)
            if first is not EMPTY and first == second and third is EMPTY:
                changed |= _force(domains, window[2], opposite(first))
            if second is not EMPTY and second == third and first is EMPTY:
                changed |= _force(domains, window[0], opposite(second))
    return changed


def _force(domains, cell, symbol):
    r, c = cell
    domain = domains[r][c]
    if len(domain) > 1 and symbol in domain:
        domains[r][c] = {symbol}
        return True
    return False


def propagate_constraints(grid, domains, size):
    """
    One propagation pass: balance pruning ("at least" size // 2 placed), then
    adjacency pruning. Mutates domains in place; returns whether anything changed.
    """
    changed = prune_balance(grid, domains, size, trigger=operator.ge)
    changed |= prune_adjacency(grid, domains, size)
    return changed


def propagate_to_fixpoint(grid, domains, size):
    rounds = 0
    while propagate_constraints(grid, domains, size):
        rounds += 1
    return rounds


def has_empty_domain(grid, domains):
    """True when some unfilled cell has no legal symbol left."""
    return any(
        cell is EMPTY and not domains[r][c]
        for r, row in enumerate(grid)
        for c, cell in enumerate(row)
    )
