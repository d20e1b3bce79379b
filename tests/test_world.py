"""Tests for isoterra.world.grid and isoterra.world.tile."""

import numpy as np
import pytest

from isoterra.errors import InvalidDimensionError, OutOfBoundsError
from isoterra.world.grid import Grid
from isoterra.world.tile import TerrainKind, Tile, Vector3


class TestTile:
    """Tests for the Tile dataclass and its value types."""

    def test_default_values(self) -> None:
        tile = Tile(x=0, y=0, position=Vector3())
        assert tile.terrain is TerrainKind.GRASS
        assert tile.building is None

    def test_vector_addition(self) -> None:
        assert Vector3(1.0, 2.0, 3.0) + Vector3(0.5, -2.0, 1.0) == Vector3(1.5, 0.0, 4.0)

    def test_glyphs_are_distinct(self) -> None:
        glyphs = {kind.glyph for kind in TerrainKind}
        assert len(glyphs) == len(TerrainKind)


class TestGridConstruction:
    """Tests for Grid.create."""

    def test_dimensions(self, small_grid: Grid) -> None:
        assert small_grid.width == 8
        assert small_grid.height == 8
        assert len(small_grid.cells) == 8
        assert all(len(row) == 8 for row in small_grid.cells)

    def test_non_square(self) -> None:
        grid = Grid.create(5, 3)
        assert len(grid.cells) == 3
        assert len(grid.cells[0]) == 5
        assert grid.tile_at(4, 2).x == 4

    def test_all_grass(self, small_grid: Grid) -> None:
        assert all(t.terrain is TerrainKind.GRASS for t in small_grid.iter_tiles())

    def test_positions_use_tile_size_and_origin(self) -> None:
        grid = Grid.create(4, 3, tile_size=2.0, origin=Vector3(-10.0, -1.0, 5.0))
        assert grid.tile_at(0, 0).position == Vector3(-10.0, -1.0, 5.0)
        assert grid.tile_at(3, 2).position == Vector3(-4.0, -1.0, 9.0)

    @pytest.mark.parametrize(("width", "height"), [(0, 5), (5, 0), (-1, 3)])
    def test_invalid_dimensions(self, width: int, height: int) -> None:
        with pytest.raises(InvalidDimensionError):
            Grid.create(width, height)

    def test_invalid_tile_size(self) -> None:
        with pytest.raises(InvalidDimensionError):
            Grid.create(4, 4, tile_size=0.0)


class TestGridQueries:
    """Tests for tile lookup and neighbour queries."""

    def test_tile_at_valid(self, small_grid: Grid) -> None:
        tile = small_grid.tile_at(3, 5)
        assert tile.x == 3
        assert tile.y == 5

    @pytest.mark.parametrize(("x", "y"), [(8, 0), (0, 8), (-1, 0), (0, -1)])
    def test_tile_at_out_of_bounds(self, small_grid: Grid, x: int, y: int) -> None:
        with pytest.raises(OutOfBoundsError):
            small_grid.tile_at(x, y)

    def test_out_of_bounds_is_an_index_error(self, small_grid: Grid) -> None:
        with pytest.raises(IndexError):
            small_grid.tile_at(99, 99)

    def test_neighbours_corner(self) -> None:
        grid = Grid.create(5, 5)
        assert sorted(grid.neighbours(0, 0)) == [(0, 1), (1, 0), (1, 1)]

    def test_neighbours_edge(self, small_grid: Grid) -> None:
        assert len(small_grid.neighbours(0, 4)) == 5

    def test_neighbours_center(self, small_grid: Grid) -> None:
        neighbours = small_grid.neighbours(3, 3)
        assert len(neighbours) == 8
        assert (3, 3) not in neighbours

    def test_neighbours_off_grid(self, small_grid: Grid) -> None:
        assert small_grid.neighbours(-1, 0) == []
        assert small_grid.neighbours(8, 8) == []

    def test_neighbour_symmetry(self) -> None:
        grid = Grid.create(6, 4)
        for y in range(grid.height):
            for x in range(grid.width):
                for nx, ny in grid.neighbours(x, y):
                    assert (x, y) in grid.neighbours(nx, ny)

    def test_count_neighbours_of_type(self, small_grid: Grid) -> None:
        small_grid.change_tile_type(2, 2, TerrainKind.WATER)
        small_grid.change_tile_type(3, 2, TerrainKind.WATER)
        small_grid.change_tile_type(3, 3, TerrainKind.MOUNTAIN)
        assert small_grid.count_neighbours_of_type(2, 3, TerrainKind.WATER) == 2
        assert small_grid.count_neighbours_of_type(2, 3, TerrainKind.MOUNTAIN) == 1
        assert small_grid.count_neighbours_of_type(2, 3, TerrainKind.GRASS) == 5

    def test_change_tile_type_touches_one_tile(self, small_grid: Grid) -> None:
        small_grid.change_tile_type(1, 6, TerrainKind.SAND)
        counts = small_grid.terrain_counts()
        assert small_grid.tile_at(1, 6).terrain is TerrainKind.SAND
        assert counts[TerrainKind.SAND] == 1
        assert counts[TerrainKind.GRASS] == 63

    def test_change_tile_type_out_of_bounds(self, small_grid: Grid) -> None:
        with pytest.raises(OutOfBoundsError):
            small_grid.change_tile_type(8, 1, TerrainKind.SAND)


class TestGridExport:
    """Tests for the array and text views of a grid."""

    def test_terrain_array(self) -> None:
        grid = Grid.create(3, 2)
        grid.change_tile_type(2, 1, TerrainKind.MOUNTAIN)
        arr = grid.terrain_array()
        assert arr.shape == (2, 3)
        assert arr.dtype == np.int8
        assert arr[1, 2] == TerrainKind.MOUNTAIN.value
        assert arr[0, 0] == TerrainKind.GRASS.value

    def test_render_text(self) -> None:
        grid = Grid.create(3, 2)
        grid.change_tile_type(0, 0, TerrainKind.WATER)
        grid.change_tile_type(1, 1, TerrainKind.SAND)
        assert grid.render_text() == "~..\n.:."
