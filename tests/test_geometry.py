import pytest

from minefield.errors import ConfigurationError, DimensionMismatchError
from minefield.geometry import NEIGHBOR_OFFSETS, Geometry


def test_offsets_are_fixed_and_exclude_centre():
    assert NEIGHBOR_OFFSETS == (
        (-1, -1), (-1, 0), (-1, 1),
        (0, -1), (0, 1),
        (1, -1), (1, 0), (1, 1),
    )


def test_is_valid_bounds():
    g = Geometry(2, 3)
    assert g.is_valid(0, 0)
    assert g.is_valid(1, 2)
    assert not g.is_valid(2, 0)
    assert not g.is_valid(0, 3)
    assert not g.is_valid(-1, 0)
    assert not g.is_valid(0, -1)


def test_interior_neighbors_in_offset_order():
    g = Geometry(3, 3)
    assert list(g.neighbors(1, 1)) == [
        (0, 0), (0, 1), (0, 2), (1, 0), (1, 2), (2, 0), (2, 1), (2, 2),
    ]


def test_corner_and_edge_neighbors_are_filtered():
    g = Geometry(3, 3)
    assert list(g.neighbors(0, 0)) == [(0, 1), (1, 0), (1, 1)]
    assert list(g.neighbors(0, 1)) == [(0, 0), (0, 2), (1, 0), (1, 1), (1, 2)]
    assert list(Geometry(1, 1).neighbors(0, 0)) == []


def test_neighbors_are_restartable():
    g = Geometry(4, 4)
    assert list(g.neighbors(2, 1)) == list(g.neighbors(2, 1))


def test_closed_neighborhood_includes_cell():
    g = Geometry(3, 3)
    assert list(g.neighborhood(0, 0, include_self=True)) == [
        (0, 0), (0, 1), (1, 0), (1, 1),
    ]
    assert len(list(g.neighborhood(1, 1, include_self=True))) == 9
    assert list(Geometry(1, 1).neighborhood(0, 0, include_self=True)) == [(0, 0)]


def test_cells_are_row_major():
    assert list(Geometry(2, 2).cells()) == [(0, 0), (0, 1), (1, 0), (1, 1)]


def test_size_and_empty_grid():
    g = Geometry(2, 3)
    assert g.size == 6
    grid = g.empty_grid(0)
    assert grid == [[0, 0, 0], [0, 0, 0]]
    grid[0][0] = 5
    assert grid[1][0] == 0


@pytest.mark.parametrize("rows, cols", [(0, 3), (3, 0), (-1, 2), (2.5, 2), (True, 2)])
def test_rejects_bad_dimensions(rows, cols):
    with pytest.raises(ConfigurationError):
        Geometry(rows, cols)


def test_of_matches_grid_shape():
    assert Geometry.of([[0, 1, 2], [3, 4, 5]]) == Geometry(2, 3)


def test_of_rejects_ragged_and_empty_grids():
    with pytest.raises(DimensionMismatchError):
        Geometry.of([[0, 1], [2]])
    with pytest.raises(DimensionMismatchError):
        Geometry.of([])
    with pytest.raises(DimensionMismatchError):
        Geometry.of([[]])


def test_check_grid():
    g = Geometry(2, 2)
    g.check_grid([[0, 0], [0, 0]])
    with pytest.raises(DimensionMismatchError):
        g.check_grid([[0, 0]])
    with pytest.raises(DimensionMismatchError):
        g.check_grid([[0, 0], [0, 0, 0]])
