# --- File: tango/constraints.py ---
# Description: Equals/opposite clue markers between orthogonally adjacent cells,
# and their extraction from a solved grid.
from dataclasses import dataclass, field

from tango.constants import (
    CONSTRAINT_MULTIPLIERS, EQUALS, OPPOSITE, HORIZONTAL, VERTICAL, round_half_up
)
from tango.errors import InvalidDifficultyError


@dataclass(frozen=True)
class Constraint:
    """A clue stating that two adjacent cells hold equal or opposite symbols."""
    cells: tuple
    kind: str

    def __post_init__(self):
        first, second = sorted(tuple(cell) for cell in self.cells)
        if abs(first[0] - second[0]) + abs(first[1] - second[1]) != 1:
            raise ValueError(f"Constraint cells must be orthogonally adjacent: {self.cells}")
        if self.kind not in (EQUALS, OPPOSITE):
            raise ValueError(f"Unknown constraint kind {self.kind!r}")
        object.__setattr__(self, 'cells', (first, second))

    @property
    def direction(self):
        return HORIZONTAL if self.cells[0][0] == self.cells[1][0] else VERTICAL

    def is_satisfied_by(self, grid):
        (r1, c1), (r2, c2) = self.cells
        a, b = grid[r1][c1], grid[r2][c2]
        if a is None or b is None:
            return True
        return (a == b) if self.kind == EQUALS else (a != b)

    def to_dict(self):
        return {
            'cells': [{'row': r, 'col': c} for r, c in self.cells],
            'direction': self.direction,
        }

    @classmethod
    def from_dict(cls, data, kind):
        cells = tuple((cell['row'], cell['col']) for cell in data['cells'])
        return cls(cells=cells, kind=kind)


@dataclass
class ConstraintSet:
    equals: list = field(default_factory=list)
    opposite: list = field(default_factory=list)

    def __iter__(self):
        yield from self.equals
        yield from self.opposite

    def __len__(self):
        return len(self.equals) + len(self.opposite)

    def to_dict(self):
        return {
            'equals': [c.to_dict() for c in self.equals],
            'opposite': [c.to_dict() for c in self.opposite],
        }

    @classmethod
    def from_dict(cls, data):
        if not data:
            return cls()
        return cls(
            equals=[Constraint.from_dict(d, EQUALS) for d in data.get('equals', [])],
            opposite=[Constraint.from_dict(d, OPPOSITE) for d in data.get('opposite', [])],
        )


def adjacent_pairs(size):
    """All horizontal pairs (row-major), then all vertical pairs."""
    pairs = [((r, c), (r, c + 1)) for r in range(size) for c in range(size - 1)]
    pairs += [((r, c), (r + 1, c)) for r in range(size - 1) for c in range(size)]
    return pairs


def constraints_per_type(size, difficulty):
    if difficulty not in CONSTRAINT_MULTIPLIERS:
        raise InvalidDifficultyError(difficulty)
    base = max(1, size // 4)
    return max(1, round_half_up(base * CONSTRAINT_MULTIPLIERS[difficulty]))


def generate_constraints(solution, difficulty, size, rng):
    """
    Derives a sparse ConstraintSet from a solved grid.

    Every adjacent pair is classified as equals or opposite, each class is
    shuffled independently, and the front of each list is kept. The per-type
    count is max(1, size // 4) scaled by the difficulty multiplier. A 2x2 grid
    gets no constraints at all. rng is the caller's random.Random.
    """
    count = constraints_per_type(size, difficulty)

    equal_pairs, opposite_pairs = [], []
    for (r1, c1), (r2, c2) in adjacent_pairs(size):
        a, b = solution[r1][c1], solution[r2][c2]
        if a is None or b is None:
            continue
        target = equal_pairs if a == b else opposite_pairs
        target.append(((r1, c1), (r2, c2)))

    rng.shuffle(equal_pairs)
    rng.shuffle(opposite_pairs)

    if size == 2:
        return ConstraintSet()

    return ConstraintSet(
        equals=[Constraint(cells, EQUALS) for cells in equal_pairs[:count]],
        opposite=[Constraint(cells, OPPOSITE) for cells in opposite_pairs[:count]],
    )
