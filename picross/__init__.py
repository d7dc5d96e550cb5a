"""Nonogram ("picross") solver.

This package exposes the public API surface via:

- ``picross.engine.solver.PuzzleSolver``: arrangement generation, propagation and search.
- ``picross.engine.solver.solve_puzzle`` / ``solutions_for_puzzle``: one-call entry points.
- ``picross.core.models.PuzzleHints``: the hint exchange model.
"""

from .core.models import PuzzleHints, SolveResult, SolverConfig
from .engine.solver import PuzzleSolver, solutions_for_puzzle, solve_puzzle

__all__ = [
    "PuzzleHints",
    "PuzzleSolver",
    "SolveResult",
    "SolverConfig",
    "solutions_for_puzzle",
    "solve_puzzle",
]

__version__ = "0.1.0"
