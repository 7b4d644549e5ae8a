# --- File: tango/z3_solver.py ---
# Description: An independent uniqueness check for Tango clue grids using the
# Z3 SMT solver. Each cell is a Boolean (True means symbol 1); the rules are
# encoded as pseudo-Boolean and clause constraints, and blocking clauses are
# added between models to look for a second solution.
import logging
import time

from z3 import Solver, Bool, PbEq, Or, Not, Xor, is_true, sat

from tango.constraints import ConstraintSet

logger = logging.getLogger(__name__)


def format_duration(seconds):
    if seconds >= 60: return f"{int(seconds//60)} min {seconds%60:.2f} s"
    if seconds >= 1: return f"{seconds:.3f} s"
    return f"{seconds*1000:.2f} ms"


class Z3TangoSolver:
    """Finds up to max_solutions completions of a (partial) Tango grid."""

    def __init__(self, grid, constraints=None):
        self.grid = grid
        self.dim = len(grid)
        self.constraints = constraints if constraints is not None else ConstraintSet()
        self.solver = Solver()
        self.X = [[Bool(f"cell_{r}_{c}") for c in range(self.dim)] for r in range(self.dim)]

    def _add_constraints(self):
        half = self.dim // 2
        cols = [[self.X[r][c] for r in range(self.dim)] for c in range(self.dim)]

        # Rule 1: exactly half of each row and column holds symbol 1.
        for line in self.X + cols:
            self.solver.add(PbEq([(var, 1) for var in line], half))
            # Rule 2: no three equal symbols in a row.
            for i in range(self.dim - 2):
                window = line[i:i + 3]
                self.solver.add(Or(window))
                self.solver.add(Or([Not(var) for var in window]))

        # Rule 3: clue markers between adjacent cells.
        for constraint in self.constraints.equals:
            (r1, c1), (r2, c2) = constraint.cells
            self.solver.add(self.X[r1][c1] == self.X[r2][c2])
        for constraint in self.constraints.opposite:
            (r1, c1), (r2, c2) = constraint.cells
            self.solver.add(Xor(self.X[r1][c1], self.X[r2][c2]))

        # Rule 4: pre-filled cells are fixed.
        for r, row in enumerate(self.grid):
            for c, value in enumerate(row):
                if value is not None:
                    self.solver.add(self.X[r][c] if value == 1 else Not(self.X[r][c]))

    def solve(self, max_solutions=2):
        """Returns a list of up to max_solutions solution grids."""
        start_time = time.monotonic()
        self._add_constraints()

        solutions = []
        while len(solutions) < max_solutions and self.solver.check() == sat:
            model = self.solver.model()
            solution = [
                [1 if is_true(model.evaluate(self.X[r][c], model_completion=True)) else 0
                 for c in range(self.dim)]
                for r in range(self.dim)
            ]
            solutions.append(solution)
            self.solver.add(Or([
                Not(var) if solution[r][c] else var
                for r, row in enumerate(self.X)
                for c, var in enumerate(row)
            ]))

        logger.debug("Z3 solve time: %s (%d solution(s))",
                     format_duration(time.monotonic() - start_time), len(solutions))
        return solutions


def count_solutions(grid, constraints=None, max_count=2):
    return len(Z3TangoSolver(grid, constraints).solve(max_solutions=max_count))


def has_unique_solution(grid, constraints=None):
    return count_solutions(grid, constraints, max_count=2) == 1
