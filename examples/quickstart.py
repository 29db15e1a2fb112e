"""
Quickstart example for the minefield generator and solver.

This script demonstrates basic usage of both pipelines.
"""

import logging

from minefield import (
    REFERENCE_CLUES,
    MinefieldSolver,
    format_clue_grid,
    format_solution,
    generate,
    run_round_trip_many_tests,
)


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("Minefield generator and solver - Quickstart Example")
    print("=" * 60)

    # Example 1: Generate a board
    print("\n1. Generating a 7x7 board at 20% density...")
    print("-" * 60)

    mines, clues = generate(7, 7, 20)
    print(format_clue_grid(clues))

    # Example 2: Reconstruct the generated board from its clues
    print("\n2. Reconstructing a placement from those clues...")
    print("-" * 60)

    solver = MinefieldSolver(clues, lookahead=True)
    print(format_solution(solver.solve()))
    print(f"Placements tried: {solver.placements_count}")
    print(f"Backtracks: {solver.backtracks_count}")

    # Example 3: The hard-coded reference grid (clues count their own cell)
    print("\n3. Solving the reference clue grid...")
    print("-" * 60)

    solver = MinefieldSolver(REFERENCE_CLUES, include_self=True, lookahead=True)
    print(format_solution(solver.solve()))

    # Example 4: Round-trip statistics by density
    print("\n4. Round trips on 6x6 boards (20 boards per density)...")
    print("-" * 60)

    for density in (10, 20, 30, 40):
        results = run_round_trip_many_tests(6, 6, density, runs=20)
        print(
            f"{density:3d}% density: "
            f"{results['solve_rate']*100:5.1f}% solved, "
            f"{results['exact_recovery_rate']*100:5.1f}% exact, "
            f"{results['avg_placements_count']:8.1f} avg placements"
        )

    print("\n" + "=" * 60)
    print("Done!")
    print("=" * 60)


if __name__ == "__main__":
    main()
