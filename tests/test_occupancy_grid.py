import pytest

from keycrawl.dungeon.grid import OccupancyGrid
from keycrawl.exceptions import GenerationError


def test_bounds_checks():
    grid = OccupancyGrid(width=4, height=3)
    assert grid.in_bounds(0, 0)
    assert grid.in_bounds(2, 3)
    assert not grid.in_bounds(3, 0)
    assert not grid.in_bounds(0, 4)
    assert not grid.in_bounds(-1, 0)

    with pytest.raises(IndexError):
        grid.is_occupied(3, 0)
    # is_free treats out-of-bounds as unavailable without raising
    assert grid.is_free(3, 0) is False


def test_adjacent_tiles_order_and_edges():
    grid = OccupancyGrid(width=3, height=3)
    # Center: UP, LEFT, DOWN, RIGHT
    assert grid.adjacent_tiles(1, 1) == [(0, 1), (1, 0), (2, 1), (1, 2)]
    # Corner drops out-of-bounds neighbours
    assert grid.adjacent_tiles(0, 0) == [(1, 0), (0, 1)]


def test_free_adjacent_tiles_skips_occupied():
    grid = OccupancyGrid(width=3, height=3)
    grid.occupy(1, 1)
    grid.occupy(0, 1)
    assert grid.free_adjacent_tiles(1, 1) == [(1, 0), (2, 1), (1, 2)]
    assert grid.occupied_count == 2


def test_predicate_filter():
    grid = OccupancyGrid(width=3, height=3)
    only_row_zero = grid.adjacent_tiles(1, 1, lambda r, c: r == 0)
    assert only_row_zero == [(0, 1)]


def test_occupy_twice_or_out_of_bounds_raises():
    grid = OccupancyGrid(width=2, height=2)
    grid.occupy(0, 0)
    with pytest.raises(GenerationError):
        grid.occupy(0, 0)
    with pytest.raises(GenerationError):
        grid.occupy(5, 5)


def test_invalid_dimensions():
    with pytest.raises(ValueError):
        OccupancyGrid(width=0, height=3)
