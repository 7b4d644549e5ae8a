# --- File: tango/puzzle.py ---
# Description: The immutable puzzle record handed from the generator to storage
# and to API clients.
from dataclasses import dataclass

from tango.constraints import ConstraintSet
from tango.grid import clone_grid


@dataclass(frozen=True)
class Puzzle:
    size: int
    grid: list
    solution: list
    constraints: ConstraintSet
    difficulty: str
    canonical_form: str

    def to_dict(self):
        return {
            'size': self.size,
            'grid': clone_grid(self.grid),
            'solution': clone_grid(self.solution),
            'constraints': self.constraints.to_dict(),
            'difficulty': self.difficulty,
            'canonicalForm': self.canonical_form,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            size=data['size'],
            grid=clone_grid(data['grid']),
            solution=clone_grid(data['solution']),
            constraints=ConstraintSet.from_dict(data.get('constraints')),
            difficulty=data['difficulty'],
            canonical_form=data['canonicalForm'],
        )
