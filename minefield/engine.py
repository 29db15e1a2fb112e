"""Random minefield generation and clue-grid derivation."""

import logging
import random
from typing import List, Optional, Sequence, Tuple

from .errors import ConfigurationError
from .geometry import Geometry
from .presenter import format_clue_grid, format_mine_grid

logger = logging.getLogger(__name__)

DENSITY_RANGE: Tuple[int, int] = (0, 100)

MineGrid = List[List[bool]]
ClueGrid = List[List[int]]


def derive_clues(
    mines: Sequence[Sequence[bool]],
    geometry: Optional[Geometry] = None,
    *,
    include_self: bool = False,
) -> ClueGrid:
    """
    Count mined neighbours for every cell of a mine grid.

    Args:
        mines: Mine grid, ``mines[r][c]`` True where a mine lies.
        geometry: Shape to check ``mines`` against. Inferred from ``mines``
            when omitted.
        include_self: If True, each clue also counts a mine on its own cell
            (3x3 block count, values 0..9).

    Returns:
        A new clue grid of the same shape. Mined cells get a clue too.

    Raises:
        DimensionMismatchError: If ``mines`` does not match ``geometry``.
    """
    if geometry is None:
        geometry = Geometry.of(mines)
    else:
        geometry.check_grid(mines, "mine grid")

    clues: ClueGrid = geometry.empty_grid(0)
    for r, c in geometry.cells():
        clues[r][c] = sum(
            1
            for nr, nc in geometry.neighborhood(r, c, include_self)
            if mines[nr][nc]
        )
    return clues


class Minefield:
    """Minefield generator placing mines by independent per-cell draws."""

    def __init__(
        self,
        rows: int,
        cols: int,
        density_percent: int,
        rng: Optional[random.Random] = None,
        *,
        include_self: bool = False,
    ) -> None:
        """
        Initialize a minefield generator.

        Args:
            rows: Number of rows, must be > 0.
            cols: Number of columns, must be > 0.
            density_percent: Chance in percent that any one cell holds a mine,
                an integer in [0, 100].
            rng: Source of uniform integers (anything with ``randrange``).
                A freshly seeded ``random.Random`` is used when omitted.
            include_self: If True, clues also count a mine on their own cell.

        Raises:
            ConfigurationError: If dimensions or density are invalid.
        """
        self.geometry: Geometry = Geometry(rows, cols)

        if isinstance(density_percent, bool) or not isinstance(density_percent, int):
            raise ConfigurationError("density_percent must be an integer.")
        low, high = DENSITY_RANGE
        if not low <= density_percent <= high:
            raise ConfigurationError(
                f"density_percent must be between {low} and {high}, "
                f"got {density_percent}."
            )

        self.rows: int = rows
        self.cols: int = cols
        self.density_percent: int = density_percent
        self.rng: random.Random = rng if rng is not None else random.Random()
        self.include_self: bool = include_self

        self.mines: MineGrid = self.geometry.empty_grid(False)
        self.clues: ClueGrid = self.geometry.empty_grid(0)
        self.mines_count: int = 0
        self.board_blank: bool = True

    def place_mines(self) -> None:
        """
        Place mines on the board (one-time).

        Each cell, in row-major order, draws once from [0, 100) and is mined
        iff the draw is below ``density_percent``.

        Raises:
            ValueError: If mines were already placed.
        """
        if not self.board_blank:
            raise ValueError("The board is not blank.")

        for r, c in self.geometry.cells():
            if self.rng.randrange(100) < self.density_percent:
                self.mines[r][c] = True
                self.mines_count += 1

        self.board_blank = False
        logger.debug(
            "Placed %d mines on %dx%d board at %d%% density",
            self.mines_count,
            self.rows,
            self.cols,
            self.density_percent,
        )

    def get_adjacent_mine_counts(self) -> None:
        """Populate the clue grid from the placed mines."""
        self.clues = derive_clues(
            self.mines, self.geometry, include_self=self.include_self
        )

    def generate(self) -> Tuple[MineGrid, ClueGrid]:
        """
        Place mines and derive clues.

        Returns:
            Copies of the (mine grid, clue grid) pair.
        """
        self.place_mines()
        self.get_adjacent_mine_counts()
        return [row[:] for row in self.mines], [row[:] for row in self.clues]

    def format_board(self, reveal_mines: bool = False) -> str:
        """
        Render the board as text.

        Args:
            reveal_mines: If True, render the mine grid instead of the clues.
        """
        if reveal_mines:
            return format_mine_grid(self.mines)
        return format_clue_grid(self.clues)

    def print_board(self) -> None:
        """Print the clue grid to stdout."""
        print(self.format_board(reveal_mines=False))


def generate(
    rows: int,
    cols: int,
    density_percent: int,
    rng: Optional[random.Random] = None,
    *,
    include_self: bool = False,
) -> Tuple[MineGrid, ClueGrid]:
    """Generate a random mine grid and its clue grid in one call."""
    return Minefield(
        rows, cols, density_percent, rng=rng, include_self=include_self
    ).generate()
