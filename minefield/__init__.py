"""
Minefield generator and solver

Two pipelines over the same grid geometry:
- Generation: independent per-cell mine draws at a given density, then
  derivation of the clue grid (mined-neighbour counts)
- Reconstruction: depth-first backtracking search that recovers a mine
  placement consistent with a given clue grid
"""

from .engine import Minefield, derive_clues, generate
from .errors import (
    ConfigurationError,
    DimensionMismatchError,
    MinefieldError,
    UnsatisfiableError,
)
from .geometry import NEIGHBOR_OFFSETS, Geometry
from .presenter import (
    EMPTY_TOKEN,
    MINE_TOKEN,
    NO_SOLUTION_MESSAGE,
    format_clue_grid,
    format_mine_grid,
    format_solution,
    parse_clue_grid,
)
from .solver import REFERENCE_CLUES, MinefieldSolver, is_consistent, solve_clues
from .analysis import (
    run_density_sweep,
    run_round_trip_many_tests,
    run_round_trip_single_test,
)

__version__ = "1.0.0"

__all__ = [
    # Core classes
    "Geometry",
    "Minefield",
    "MinefieldSolver",
    # Functions
    "derive_clues",
    "generate",
    "solve_clues",
    "is_consistent",
    # Text rendering
    "format_mine_grid",
    "format_clue_grid",
    "format_solution",
    "parse_clue_grid",
    # Analysis functions
    "run_round_trip_single_test",
    "run_round_trip_many_tests",
    "run_density_sweep",
    # Errors
    "MinefieldError",
    "ConfigurationError",
    "DimensionMismatchError",
    "UnsatisfiableError",
    # Constants
    "NEIGHBOR_OFFSETS",
    "REFERENCE_CLUES",
    "MINE_TOKEN",
    "EMPTY_TOKEN",
    "NO_SOLUTION_MESSAGE",
]
