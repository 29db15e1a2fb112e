import random

import pytest

from minefield.engine import Minefield, derive_clues, generate
from minefield.errors import ConfigurationError, DimensionMismatchError
from minefield.geometry import Geometry


class ScriptedRng:
    """Returns queued draws and records the bounds it was asked for."""

    def __init__(self, draws):
        self.draws = list(draws)
        self.calls = []

    def randrange(self, stop):
        self.calls.append(stop)
        return self.draws.pop(0)


def test_derive_clues_counts_neighbours_only():
    mines = [
        [False, False, False],
        [False, True, False],
        [False, False, False],
    ]
    assert derive_clues(mines) == [[1, 1, 1], [1, 0, 1], [1, 1, 1]]


def test_derive_clues_with_self():
    mines = [
        [False, False, False],
        [False, True, False],
        [False, False, False],
    ]
    assert derive_clues(mines, include_self=True) == [[1, 1, 1], [1, 1, 1], [1, 1, 1]]


def test_derive_clues_is_idempotent():
    mines, _ = generate(5, 6, 40, rng=random.Random(3))
    assert derive_clues(mines) == derive_clues(mines)


def test_derive_clues_checks_geometry():
    with pytest.raises(DimensionMismatchError):
        derive_clues([[True, False]], Geometry(2, 2))


def test_draws_decide_mines_in_row_major_order():
    rng = ScriptedRng([10, 50, 19, 20])
    field = Minefield(2, 2, 20, rng=rng)
    mines, clues = field.generate()

    assert rng.calls == [100, 100, 100, 100]
    assert mines == [[True, False], [True, False]]
    assert clues == [[1, 2], [1, 2]]
    assert field.mines_count == 2


def test_zero_density_places_no_mines():
    mines, clues = generate(4, 4, 0, rng=random.Random(1))
    assert not any(any(row) for row in mines)
    assert clues == [[0] * 4 for _ in range(4)]


def test_full_density_mines_every_cell():
    mines, clues = generate(3, 3, 100, rng=random.Random(1))
    assert all(all(row) for row in mines)
    assert clues == [[3, 5, 3], [5, 8, 5], [3, 5, 3]]


def test_seeded_rng_is_reproducible():
    a = generate(6, 6, 30, rng=random.Random(42))
    b = generate(6, 6, 30, rng=random.Random(42))
    assert a == b


def test_fresh_rng_per_generation():
    a, _ = generate(10, 10, 50)
    b, _ = generate(10, 10, 50)
    assert a != b


@pytest.mark.parametrize("density", [-1, 101, 20.5, True, "20"])
def test_rejects_bad_density(density):
    with pytest.raises(ConfigurationError):
        Minefield(3, 3, density)


def test_rejects_bad_dimensions():
    with pytest.raises(ConfigurationError):
        Minefield(0, 3, 10)
    with pytest.raises(ValueError):
        generate(3, -2, 10)


def test_place_mines_is_one_time():
    field = Minefield(2, 2, 50, rng=random.Random(0))
    field.place_mines()
    with pytest.raises(ValueError):
        field.place_mines()


def test_generate_returns_copies():
    field = Minefield(2, 2, 100, rng=random.Random(0))
    mines, clues = field.generate()
    mines[0][0] = False
    clues[0][0] = 7
    assert field.mines[0][0] is True
    assert field.clues[0][0] == 3


def test_format_board():
    field = Minefield(2, 2, 20, rng=ScriptedRng([0, 99, 99, 99]))
    field.generate()
    assert field.format_board() == "0 1\n1 1"
    assert field.format_board(reveal_mines=True) == "x _\n_ _"


def test_print_board(capsys):
    field = Minefield(1, 2, 0, rng=random.Random(0))
    field.generate()
    field.print_board()
    assert capsys.readouterr().out == "0 0\n"
