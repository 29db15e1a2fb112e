"""Plain-text rendering and parsing of mine grids and clue grids."""

from typing import List, Optional, Sequence

from .errors import ConfigurationError, DimensionMismatchError

MINE_TOKEN = "x"
EMPTY_TOKEN = "_"
NO_SOLUTION_MESSAGE = "no solution exists"


def format_mine_grid(mines: Sequence[Sequence[bool]]) -> str:
    """Render a mine grid as ``x`` / ``_`` tokens, one row per line."""
    return "\n".join(
        " ".join(MINE_TOKEN if mined else EMPTY_TOKEN for mined in row)
        for row in mines
    )


def format_clue_grid(clues: Sequence[Sequence[int]]) -> str:
    """Render a clue grid as space-separated integers, one row per line."""
    return "\n".join(" ".join(str(v) for v in row) for row in clues)


def format_solution(mines: Optional[Sequence[Sequence[bool]]]) -> str:
    """Render a solver result, or the fixed message when there is none."""
    if mines is None:
        return NO_SOLUTION_MESSAGE
    return format_mine_grid(mines)


def parse_clue_grid(text: str) -> List[List[int]]:
    """
    Parse text produced by format_clue_grid back into a clue grid.

    Blank lines are ignored. Tokens may be separated by any whitespace.

    Raises:
        ConfigurationError: If a token is not an integer or no rows are present.
        DimensionMismatchError: If rows have different lengths.
    """
    clues: List[List[int]] = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        tokens = line.split()
        if not tokens:
            continue
        try:
            row = [int(t) for t in tokens]
        except ValueError:
            raise ConfigurationError(
                f"Line {line_no}: clue values must be integers, got {line.strip()!r}."
            ) from None
        if clues and len(row) != len(clues[0]):
            raise DimensionMismatchError(
                f"Line {line_no}: expected {len(clues[0])} values, got {len(row)}."
            )
        clues.append(row)

    if not clues:
        raise ConfigurationError("Clue grid text contains no rows.")
    return clues
