"""Round-trip benchmarking tools for the minefield generator and solver."""

import logging
import random
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

import numpy as np

from .engine import Minefield
from .presenter import format_solution
from .solver import MinefieldSolver, is_consistent

logger = logging.getLogger(__name__)


def run_round_trip_single_test(
    rows: int,
    cols: int,
    density_percent: int,
    *,
    rng: Optional[random.Random] = None,
    include_self: bool = False,
    lookahead: bool = True,
    show_boards: bool = False,
) -> Dict[str, object]:
    """
    Generate one minefield, solve its clues and check the reconstruction.

    Args:
        rows: Board rows.
        cols: Board columns.
        density_percent: Mine density in percent.
        rng: Random source for generation; fresh per call when omitted.
        include_self: If True, clues also count a mine on their own cell.
        lookahead: Passed to the solver. The plain search is exponential, so
            benchmarks default to pruning.
        show_boards: If True, print the generated mines, the clues and the
            reconstruction.

    Returns:
        The solver's metrics augmented with:
        - "status": 1 if a consistent placement was found, -1 otherwise
        - "mines_count": mines placed by the generator
        - "solution_mines_count": mines in the reconstruction (0 if none)
        - "matches_original": True if the reconstruction equals the generated grid
    """
    field = Minefield(rows, cols, density_percent, rng=rng, include_self=include_self)
    mines, clues = field.generate()

    solver = MinefieldSolver(
        clues, field.geometry, include_self=include_self, lookahead=lookahead
    )
    solution = solver.solve()

    if show_boards:
        print(f"Board {rows}x{cols} at {density_percent}% density")
        print("Generated mines:")
        print(field.format_board(reveal_mines=True))
        print()
        print("Clues:")
        print(field.format_board(reveal_mines=False))
        print()
        print("Reconstruction:")
        print(format_solution(solution))

    consistent = solution is not None and is_consistent(
        solution, clues, include_self=include_self
    )
    if solution is not None and not consistent:
        logger.warning("Solver returned a placement that does not match its clues")

    out: Dict[str, object] = dict(solver.metrics())
    out["status"] = 1 if consistent else -1
    out["mines_count"] = field.mines_count
    out["solution_mines_count"] = (
        sum(sum(1 for v in row if v) for row in solution) if solution is not None else 0
    )
    out["matches_original"] = solution == mines
    return out


def run_round_trip_many_tests(
    rows: int,
    cols: int,
    density_percent: int,
    runs: int,
    *,
    rng: Optional[random.Random] = None,
    include_self: bool = False,
    lookahead: bool = True,
) -> Dict[str, float]:
    """
    Run many independent round trips and aggregate their metrics.

    Args:
        rows: Board rows.
        cols: Board columns.
        density_percent: Mine density in percent.
        runs: Number of independent boards, must be positive.
        rng: Random source shared by all runs; each run gets a fresh one when
            omitted.
        include_self: If True, clues also count a mine on their own cell.
        lookahead: Passed to the solver.

    Returns:
        For every numeric metric ``k``: ``avg_k``, ``std_k`` and ``max_k``, plus
        - solve_rate: fraction of boards reconstructed consistently
        - exact_recovery_rate: fraction reconstructed to the generated grid

    Raises:
        ValueError: If runs is not positive.
    """
    if runs <= 0:
        raise ValueError("runs must be positive.")

    samples: Dict[str, List[float]] = defaultdict(list)
    solved = 0
    exact = 0

    for _ in range(runs):
        result = run_round_trip_single_test(
            rows,
            cols,
            density_percent,
            rng=rng,
            include_self=include_self,
            lookahead=lookahead,
        )

        status = result["status"]
        if status == 1:
            solved += 1
        elif status != -1:
            raise RuntimeError(f"Unexpected round-trip status: {status}")
        if result["matches_original"]:
            exact += 1

        for k, v in result.items():
            if k == "status":
                continue
            if isinstance(v, (int, float)) and not isinstance(v, bool):
                samples[k].append(float(v))

    out: Dict[str, float] = {}
    for k, values in samples.items():
        arr = np.asarray(values, dtype=float)
        out[f"avg_{k}"] = float(arr.mean())
        out[f"std_{k}"] = float(arr.std())
        out[f"max_{k}"] = float(arr.max())

    out["solve_rate"] = solved / runs
    out["exact_recovery_rate"] = exact / runs

    logger.debug(
        "%d round trips on %dx%d at %d%%: solve rate %.3f",
        runs,
        rows,
        cols,
        density_percent,
        out["solve_rate"],
    )
    return out


def run_density_sweep(
    rows: int,
    cols: int,
    densities: Iterable[int],
    runs: int,
    *,
    rng: Optional[random.Random] = None,
    include_self: bool = False,
    lookahead: bool = True,
) -> Dict[int, Dict[str, float]]:
    """
    Run run_round_trip_many_tests() for each density.

    Returns:
        Mapping from density percent to its aggregated statistics.
    """
    results: Dict[int, Dict[str, float]] = {}
    for density in densities:
        results[density] = run_round_trip_many_tests(
            rows,
            cols,
            density,
            runs,
            rng=rng,
            include_self=include_self,
            lookahead=lookahead,
        )
    return results
