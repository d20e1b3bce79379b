"""Tile — a single cell in the terrain grid.

Each tile holds its terrain kind and a fixed world-space position.  The
visual representation of a tile belongs to whatever renders the grid,
so the tile itself stays a plain record.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from isoterra.economy.buildings import Building


class TerrainKind(Enum):
    """Terrain painted onto a tile.  Values are stable integer codes."""

    GRASS = 0
    WATER = 1
    SAND = 2
    MOUNTAIN = 3

    @property
    def glyph(self) -> str:
        """Return the single character used in text dumps of the grid."""
        return _GLYPHS[self]


_GLYPHS: dict[TerrainKind, str] = {
    TerrainKind.GRASS: ".",
    TerrainKind.WATER: "~",
    TerrainKind.SAND: ":",
    TerrainKind.MOUNTAIN: "^",
}


@dataclass(frozen=True)
class Vector3:
    """An immutable world-space coordinate."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)


@dataclass
class Tile:
    """A single tile in the terrain grid.

    Attributes:
        x: Column position.
        y: Row position.
        position: World-space position, fixed at creation.
        terrain: Terrain kind, reassigned by generation passes.
        building: Building standing on this tile, if any.
    """

    x: int
    y: int
    position: Vector3
    terrain: TerrainKind = TerrainKind.GRASS
    building: Building | None = None
