"""Backtracking reconstruction of a mine placement from a clue grid."""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .engine import ClueGrid, MineGrid, derive_clues
from .errors import ConfigurationError, UnsatisfiableError
from .geometry import Cell, Geometry

logger = logging.getLogger(__name__)

# Hard-coded 7x7 clue grid the solver was first exercised on. Its clues count
# the clue cell itself, so it is only solvable with include_self=True.
REFERENCE_CLUES: Tuple[Tuple[int, ...], ...] = (
    (1, 1, 0, 0, 1, 1, 1),
    (2, 3, 2, 1, 1, 2, 2),
    (3, 5, 3, 2, 1, 2, 2),
    (3, 6, 5, 3, 0, 2, 2),
    (2, 4, 3, 2, 0, 1, 1),
    (2, 3, 3, 2, 1, 2, 1),
    (1, 1, 1, 1, 1, 1, 0),
)

MINE = "M"
EMPTY = "S"


class _Frame:
    """One committed decision on the search stack."""

    __slots__ = ("cell", "branch")

    def __init__(self, cell: Cell, branch: str) -> None:
        self.cell = cell
        self.branch = branch


class MinefieldSolver:
    """
    Depth-first backtracking solver for clue grids.

    Cells are decided in row-major order. Each cell first tries a mine, which
    is allowed only while every clue that would see it still has budget left,
    then tries leaving the cell empty. A leaf is accepted only when every
    clue's remaining budget is exactly zero.

    The search keeps an explicit stack of decision frames instead of
    recursing, so grid size is not limited by the interpreter's stack.
    """

    def __init__(
        self,
        clues: Sequence[Sequence[int]],
        geometry: Optional[Geometry] = None,
        *,
        include_self: bool = False,
        lookahead: bool = False,
        record_steps: bool = False,
    ) -> None:
        """
        Initialize a solver bound to one clue grid.

        Args:
            clues: Clue grid, ``clues[r][c]`` the number of mines around (r, c).
            geometry: Grid shape the clues must have. Inferred from ``clues``
                when omitted.
            include_self: If True, each clue also counts a mine on its own cell.
            lookahead: If True, also abandon a branch as soon as some clue
                needs more mines than it has undecided cells left. This only
                cuts branches without solutions, so the result is unchanged.
            record_steps: If True, record every decision with a budget
                snapshot in ``steps_history``.

        Raises:
            DimensionMismatchError: If the clue grid does not match ``geometry``.
            ConfigurationError: If a clue value is not an integer.
        """
        if geometry is None:
            geometry = Geometry.of(clues)
        else:
            geometry.check_grid(clues, "clue grid")

        for r, c in geometry.cells():
            v = clues[r][c]
            if isinstance(v, bool) or not isinstance(v, int):
                raise ConfigurationError(
                    f"Clue at ({r}, {c}) must be an integer, got {v!r}."
                )

        self.geometry: Geometry = geometry
        self.include_self: bool = include_self
        self.lookahead: bool = lookahead
        self.record_steps: bool = record_steps
        self.clues: ClueGrid = [list(row) for row in clues]

        self._reset()

    def _reset(self) -> None:
        """Discard all search state from a previous run."""
        self.visited: List[List[bool]] = self.geometry.empty_grid(False)
        self.mines: MineGrid = self.geometry.empty_grid(False)

        # budget[r][c]: how many more mines clue (r, c) can still absorb.
        self.budget: List[List[int]] = [row[:] for row in self.clues]

        # open_cells[r][c]: undecided cells clue (r, c) still counts.
        self.open_cells: List[List[int]] = self.geometry.empty_grid(0)
        for r, c in self.geometry.cells():
            self.open_cells[r][c] = len(self._clue_cells(r, c))

        self._stack: List[_Frame] = []

        # Metrics / counters (for analysis)
        self.placements_count: int = 0
        self.backtracks_count: int = 0
        self.leaves_count: int = 0
        self.pruned_count: int = 0
        self.max_depth: int = 0

        self.steps_history: List[Dict[str, Any]] = []

    # -------------------------------------------------------------------------
    # Cell bookkeeping
    # -------------------------------------------------------------------------

    def _clue_cells(self, r: int, c: int) -> List[Cell]:
        """Cells whose clues a mine at (r, c) counts towards."""
        return list(self.geometry.neighborhood(r, c, self.include_self))

    def _index(self, cell: Cell) -> int:
        return cell[0] * self.geometry.cols + cell[1]

    def _next_unvisited(self, start: int) -> Optional[Cell]:
        """First unvisited cell in row-major order at or after flat index ``start``."""
        cols = self.geometry.cols
        for i in range(start, self.geometry.size):
            r, c = divmod(i, cols)
            if not self.visited[r][c]:
                return r, c
        return None

    def is_safe(self, r: int, c: int) -> bool:
        """
        Return True if a mine may be placed at (r, c) without overdrawing a clue.

        Every clue that would count the mine must still have budget left. A
        cell no clue can see (the single cell of a 1x1 grid without
        include_self) never takes a mine.
        """
        if not self.geometry.is_valid(r, c):
            return False
        cells = self._clue_cells(r, c)
        if not cells:
            return False
        return all(self.budget[nr][nc] > 0 for nr, nc in cells)

    def _place_mine(self, cell: Cell) -> None:
        r, c = cell
        self.mines[r][c] = True
        for nr, nc in self._clue_cells(r, c):
            self.budget[nr][nc] -= 1
            if self.budget[nr][nc] < 0:
                raise RuntimeError(
                    f"Remaining budget of ({nr}, {nc}) went negative."
                )
        self.placements_count += 1

    def _remove_mine(self, cell: Cell) -> None:
        r, c = cell
        self.mines[r][c] = False
        for nr, nc in self._clue_cells(r, c):
            self.budget[nr][nc] += 1

    def _visit(self, cell: Cell) -> None:
        r, c = cell
        self.visited[r][c] = True
        for nr, nc in self._clue_cells(r, c):
            self.open_cells[nr][nc] -= 1

    def _unvisit(self, cell: Cell) -> None:
        r, c = cell
        self.visited[r][c] = False
        for nr, nc in self._clue_cells(r, c):
            self.open_cells[nr][nc] += 1

    def _all_budgets_spent(self) -> bool:
        return all(v == 0 for row in self.budget for v in row)

    def _clues_in_range(self) -> bool:
        """Every clue lies between 0 and the number of cells it counts."""
        return all(
            0 <= self.clues[r][c] <= self.open_cells[r][c]
            for r, c in self.geometry.cells()
        )

    def _reachable_around(self, cell: Cell) -> bool:
        """
        Check that clues touched by the latest decision can still be met.

        Always True without lookahead.
        """
        if not self.lookahead:
            return True
        for nr, nc in self._clue_cells(*cell):
            if self.budget[nr][nc] > self.open_cells[nr][nc]:
                self.pruned_count += 1
                return False
        return True

    def _record_step(self, action: str, cell: Cell) -> None:
        """Record a step for replay and invariant checks."""
        if not self.record_steps:
            return
        self.steps_history.append({
            "action": action,  # "mine", "empty" or "undo"
            "cell": cell,
            "depth": len(self._stack),
            "step_number": len(self.steps_history),
            "budget_snapshot": [row[:] for row in self.budget],
        })

    # -------------------------------------------------------------------------
    # Decision frames
    # -------------------------------------------------------------------------

    def _push(self, cell: Cell) -> _Frame:
        """Commit to a cell: a mine if feasible, otherwise empty."""
        frame = _Frame(cell, EMPTY)
        self._stack.append(frame)
        self._visit(cell)
        self.max_depth = max(self.max_depth, len(self._stack))

        if self.is_safe(*cell):
            self._place_mine(cell)
            frame.branch = MINE
            self._record_step("mine", cell)
        else:
            self._record_step("empty", cell)
        return frame

    def _switch_to_empty(self, frame: _Frame) -> None:
        """Undo a frame's mine and leave its cell empty instead."""
        self._remove_mine(frame.cell)
        frame.branch = EMPTY
        self._record_step("empty", frame.cell)

    def _pop(self) -> _Frame:
        """Undo a frame completely and drop it from the stack."""
        frame = self._stack.pop()
        if frame.branch == MINE:
            self._remove_mine(frame.cell)
        self._unvisit(frame.cell)
        self._record_step("undo", frame.cell)
        return frame

    def _unwind(self) -> None:
        """Undo every frame still on the stack."""
        while self._stack:
            self._pop()

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def solve(self) -> Optional[MineGrid]:
        """
        Search for a mine placement matching every clue.

        Returns:
            A new mine grid, the first match in row-major mine-first order, or
            None if no placement matches. Search state is fully undone before
            returning, so ``budget`` equals the clues again afterwards.
        """
        self._reset()
        g = self.geometry
        logger.debug(
            "Solving %dx%d clue grid (include_self=%s, lookahead=%s)",
            g.rows,
            g.cols,
            self.include_self,
            self.lookahead,
        )

        if not self._clues_in_range():
            logger.debug("Clue grid holds a value no placement can reach")
            return None

        solution: Optional[MineGrid] = None
        descending = True
        next_cell = self._next_unvisited(0)

        while True:
            if descending:
                if next_cell is None:
                    self.leaves_count += 1
                    if self._all_budgets_spent():
                        solution = [row[:] for row in self.mines]
                        break
                    descending = False
                    continue

                frame = self._push(next_cell)
                if self._reachable_around(frame.cell):
                    next_cell = self._next_unvisited(self._index(frame.cell) + 1)
                else:
                    descending = False
                continue

            if not self._stack:
                break

            frame = self._stack[-1]
            if frame.branch == MINE:
                self._switch_to_empty(frame)
                if self._reachable_around(frame.cell):
                    next_cell = self._next_unvisited(self._index(frame.cell) + 1)
                    descending = True
            else:
                self._pop()
                self.backtracks_count += 1

        self._unwind()

        logger.debug(
            "Search %s after %d placements, %d backtracks, %d leaves",
            "succeeded" if solution is not None else "exhausted",
            self.placements_count,
            self.backtracks_count,
            self.leaves_count,
        )
        return solution

    def solve_or_raise(self) -> MineGrid:
        """
        Like solve(), but treat exhaustion as an error.

        Raises:
            UnsatisfiableError: If no mine placement matches the clues.
        """
        solution = self.solve()
        if solution is None:
            raise UnsatisfiableError("No mine placement matches the clue grid.")
        return solution

    def metrics(self) -> Dict[str, int]:
        """Counters from the most recent solve() call."""
        return {
            "placements_count": self.placements_count,
            "backtracks_count": self.backtracks_count,
            "leaves_count": self.leaves_count,
            "pruned_count": self.pruned_count,
            "max_depth": self.max_depth,
        }


def solve_clues(
    clues: Sequence[Sequence[int]],
    *,
    include_self: bool = False,
    lookahead: bool = False,
) -> Optional[MineGrid]:
    """Solve a clue grid in one call; None when no placement matches."""
    return MinefieldSolver(
        clues, include_self=include_self, lookahead=lookahead
    ).solve()


def is_consistent(
    mines: Sequence[Sequence[bool]],
    clues: Sequence[Sequence[int]],
    *,
    include_self: bool = False,
) -> bool:
    """Return True if ``mines`` produces exactly ``clues``."""
    geometry = Geometry.of(clues)
    if len(mines) != geometry.rows or any(len(row) != geometry.cols for row in mines):
        return False
    derived = derive_clues(mines, geometry, include_self=include_self)
    return derived == [list(row) for row in clues]
