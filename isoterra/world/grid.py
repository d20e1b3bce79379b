"""Grid — the spatial container for the terrain.

The Grid owns tiles arranged in a 2D array and provides the spatial
queries (bounds checks, Moore neighbours, neighbour counts) that the
terraforming passes and the building layer rely on.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from isoterra.errors import InvalidDimensionError, OutOfBoundsError
from isoterra.world.tile import TerrainKind, Tile, Vector3

# Row-major over the 3x3 block, centre skipped.  Fill passes walk
# neighbours in this order, so it must stay fixed.
MOORE_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (0, -1),
    (1, -1),
    (-1, 0),
    (1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)


@dataclass
class Grid:
    """A ``width x height`` grid of terrain tiles.

    Attributes:
        width: Number of columns in the grid.
        height: Number of rows in the grid.
        tile_size: World-space edge length of one tile.
        origin: World-space position of tile ``(0, 0)``.
        cells: 2D list of Tile objects indexed as ``cells[y][x]``.
    """

    width: int
    height: int
    tile_size: float = 4.0
    origin: Vector3 = field(default_factory=Vector3)
    cells: list[list[Tile]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate dimensions and fill the grid with grass tiles."""
        if self.width <= 0 or self.height <= 0:
            msg = f"grid dimensions must be positive, got {self.width}x{self.height}"
            raise InvalidDimensionError(msg)
        if self.tile_size <= 0:
            msg = f"tile size must be positive, got {self.tile_size}"
            raise InvalidDimensionError(msg)

        size = self.tile_size
        self.cells = [
            [
                Tile(x=x, y=y, position=self.origin + Vector3(x * size, 0.0, y * size))
                for x in range(self.width)
            ]
            for y in range(self.height)
        ]

    @classmethod
    def create(
        cls,
        width: int,
        height: int,
        tile_size: float = 4.0,
        origin: Vector3 | None = None,
    ) -> Grid:
        """Build an all-grass grid.

        Args:
            width: Number of columns (must be > 0).
            height: Number of rows (must be > 0).
            tile_size: World-space edge length of one tile (must be > 0).
            origin: World-space offset of tile ``(0, 0)``.

        Raises:
            InvalidDimensionError: If any size argument is not positive.
        """
        return cls(
            width=width,
            height=height,
            tile_size=tile_size,
            origin=origin if origin is not None else Vector3(),
        )

    def in_bounds(self, x: int, y: int) -> bool:
        """Return True if ``(x, y)`` lies on the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, x: int, y: int) -> Tile:
        """Return the tile at grid coordinates ``(x, y)``.

        Args:
            x: Column index.
            y: Row index.

        Raises:
            OutOfBoundsError: If coordinates are out of bounds.
        """
        if not self.in_bounds(x, y):
            msg = f"({x}, {y}) out of bounds for {self.width}x{self.height}"
            raise OutOfBoundsError(msg)
        return self.cells[y][x]

    def neighbours(self, x: int, y: int) -> list[tuple[int, int]]:
        """Return the in-bounds Moore neighbours of ``(x, y)``.

        Edge and corner tiles have fewer than 8 neighbours.  A position
        that is itself off the grid has none.

        Args:
            x: Column index.
            y: Row index.

        Returns:
            Neighbour coordinates in a fixed row-major order.
        """
        if not self.in_bounds(x, y):
            return []

        result: list[tuple[int, int]] = []
        for dx, dy in MOORE_OFFSETS:
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.width and 0 <= ny < self.height:
                result.append((nx, ny))
        return result

    def count_neighbours_of_type(self, x: int, y: int, kind: TerrainKind) -> int:
        """Count the neighbours of ``(x, y)`` whose terrain is ``kind``."""
        return sum(
            1 for nx, ny in self.neighbours(x, y) if self.cells[ny][nx].terrain is kind
        )

    def change_tile_type(self, x: int, y: int, kind: TerrainKind) -> None:
        """Set the terrain of a single tile.

        Raises:
            OutOfBoundsError: If coordinates are out of bounds.
        """
        self.tile_at(x, y).terrain = kind

    def iter_tiles(self) -> Iterator[Tile]:
        """Yield every tile in row-major order."""
        for row in self.cells:
            yield from row

    def terrain_counts(self) -> dict[TerrainKind, int]:
        """Return how many tiles carry each terrain kind (zeros included)."""
        counts = Counter(tile.terrain for tile in self.iter_tiles())
        return {kind: counts.get(kind, 0) for kind in TerrainKind}

    def terrain_array(self) -> NDArray[np.int8]:
        """Return terrain codes as a ``(height, width)`` array."""
        return np.array(
            [[tile.terrain.value for tile in row] for row in self.cells],
            dtype=np.int8,
        )

    def render_text(self) -> str:
        """Return the grid as rows of terrain glyphs, top row first."""
        return "\n".join(
            "".join(tile.terrain.glyph for tile in row) for row in self.cells
        )
