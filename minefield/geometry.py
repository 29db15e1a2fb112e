"""Grid geometry shared by the generator and the solver."""

from typing import Any, Iterator, List, Sequence, Tuple

from .errors import ConfigurationError, DimensionMismatchError

Cell = Tuple[int, int]

# Fixed 8-neighbourhood, row offset first. The order is part of the solver's
# contract: it decides which neighbour budgets are checked and updated first.
NEIGHBOR_OFFSETS: Tuple[Cell, ...] = tuple(
    (dr, dc)
    for dr in (-1, 0, 1)
    for dc in (-1, 0, 1)
    if not (dr == 0 and dc == 0)
)

# Same table with the centre cell, for clues that count the cell itself.
CLOSED_NEIGHBOR_OFFSETS: Tuple[Cell, ...] = tuple(
    (dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1)
)


class Geometry:
    """Immutable ``rows x cols`` grid shape with bounds checks and adjacency."""

    __slots__ = ("_rows", "_cols")

    def __init__(self, rows: int, cols: int) -> None:
        """
        Args:
            rows: Number of rows, must be a positive integer.
            cols: Number of columns, must be a positive integer.

        Raises:
            ConfigurationError: If either dimension is not a positive integer.
        """
        for name, value in (("rows", rows), ("cols", cols)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer.")
        if rows <= 0 or cols <= 0:
            raise ConfigurationError("rows and cols must be positive.")

        self._rows = rows
        self._cols = cols

    @classmethod
    def of(cls, grid: Sequence[Sequence[Any]]) -> "Geometry":
        """
        Build the geometry matching an existing rectangular grid.

        Raises:
            DimensionMismatchError: If the grid is empty or ragged.
        """
        if len(grid) == 0 or len(grid[0]) == 0:
            raise DimensionMismatchError("grid must have at least one cell.")

        width = len(grid[0])
        for r, row in enumerate(grid):
            if len(row) != width:
                raise DimensionMismatchError(
                    f"row {r} has {len(row)} cells, expected {width}."
                )
        return cls(len(grid), width)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def size(self) -> int:
        return self._rows * self._cols

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Geometry):
            return NotImplemented
        return (self._rows, self._cols) == (other._rows, other._cols)

    def __hash__(self) -> int:
        return hash((self._rows, self._cols))

    def __repr__(self) -> str:
        return f"Geometry(rows={self._rows}, cols={self._cols})"

    def is_valid(self, r: int, c: int) -> bool:
        """Return True iff (r, c) lies inside the grid."""
        return 0 <= r < self._rows and 0 <= c < self._cols

    def neighbors(self, r: int, c: int) -> Iterator[Cell]:
        """
        Yield the up-to-8 in-bounds neighbours of (r, c) in NEIGHBOR_OFFSETS order.

        Recomputed from coordinates on every call.
        """
        return self.neighborhood(r, c, include_self=False)

    def neighborhood(self, r: int, c: int, include_self: bool = False) -> Iterator[Cell]:
        """
        Yield the in-bounds cells a clue at (r, c) counts.

        Args:
            r: Row of the clue cell.
            c: Column of the clue cell.
            include_self: If True, (r, c) itself is part of the neighbourhood
                (yielded in the middle of the offset order).
        """
        offsets = CLOSED_NEIGHBOR_OFFSETS if include_self else NEIGHBOR_OFFSETS
        for dr, dc in offsets:
            nr, nc = r + dr, c + dc
            if self.is_valid(nr, nc):
                yield nr, nc

    def cells(self) -> Iterator[Cell]:
        """Yield every cell in row-major order."""
        for r in range(self._rows):
            for c in range(self._cols):
                yield r, c

    def empty_grid(self, fill: Any) -> List[List[Any]]:
        """Return a new ``rows x cols`` grid with every cell set to ``fill``."""
        return [[fill for _ in range(self._cols)] for _ in range(self._rows)]

    def check_grid(self, grid: Sequence[Sequence[Any]], name: str = "grid") -> None:
        """
        Verify that ``grid`` is exactly ``rows x cols``.

        Raises:
            DimensionMismatchError: On any row-count or row-length mismatch.
        """
        if len(grid) != self._rows:
            raise DimensionMismatchError(
                f"{name} has {len(grid)} rows, expected {self._rows}."
            )
        for r, row in enumerate(grid):
            if len(row) != self._cols:
                raise DimensionMismatchError(
                    f"{name} row {r} has {len(row)} cells, expected {self._cols}."
                )
