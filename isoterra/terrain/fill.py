"""Fill passes — deterministic smoothing after the random walk.

Both passes work in *waves*: every coordinate of the current seed list
is processed before the coordinates converted during that wave become
the seeds of the next one.  Conversions take effect immediately, so
later checks within the same wave see them.

- ``fill_in_terrain`` grows a terrain blob into tiles that are already
  densely surrounded by it, for a bounded number of waves.
- ``fill_water`` floods water outward until it reaches a stable
  coastline, turning every non-flooded tile it touches into sand.
  Mountains are never touched.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from isoterra.world.tile import TerrainKind

if TYPE_CHECKING:
    from isoterra.world.grid import Grid

logger = structlog.get_logger()

WATER_NEIGHBOUR_THRESHOLD = 5


@dataclass
class FillResult:
    """Outcome of a fill pass.

    Attributes:
        converted: Every tile converted to the grown terrain, in
            conversion order.
        waves: Number of waves processed, including a final wave that
            converted nothing.
    """

    converted: list[tuple[int, int]] = field(default_factory=list)
    waves: int = 0


def fill_in_terrain(
    grid: Grid,
    seeds: Iterable[tuple[int, int]],
    kind: TerrainKind,
    threshold: int,
    max_passes: int = 1,
) -> FillResult:
    """Convert tiles next to ``seeds`` that have ``threshold`` or more ``kind`` neighbours.

    Args:
        grid: The grid to modify in place.
        seeds: Coordinates to grow from.
        kind: Terrain to grow.
        threshold: Minimum number of ``kind`` neighbours a tile needs
            before it is converted.
        max_passes: Maximum number of waves.

    Returns:
        The converted coordinates and the number of waves run.
    """
    wave = list(seeds)
    result = FillResult()

    while result.waves < max_passes:
        result.waves += 1
        changed: list[tuple[int, int]] = []
        for x, y in wave:
            for nx, ny in grid.neighbours(x, y):
                tile = grid.cells[ny][nx]
                if tile.terrain is kind:
                    continue
                if grid.count_neighbours_of_type(nx, ny, kind) >= threshold:
                    tile.terrain = kind
                    changed.append((nx, ny))

        if not changed:
            break
        result.converted.extend(changed)
        wave = changed

    return result


def fill_water(
    grid: Grid,
    seeds: Iterable[tuple[int, int]],
) -> FillResult:
    """Flood water outward from ``seeds`` until no new water appears.

    Each neighbour of a seed that is neither water nor mountain becomes
    water if at least ``WATER_NEIGHBOUR_THRESHOLD`` of its own neighbours
    are water, and sand otherwise.  Each tile turns to water at most
    once, so the number of waves is bounded by the tile count.

    Args:
        grid: The grid to modify in place.
        seeds: Water coordinates to flood from.

    Returns:
        Every tile converted to water, and the number of waves run.
    """
    wave = list(seeds)
    result = FillResult()

    while wave:
        result.waves += 1
        changed: list[tuple[int, int]] = []
        for x, y in wave:
            for nx, ny in grid.neighbours(x, y):
                tile = grid.cells[ny][nx]
                if tile.terrain in (TerrainKind.WATER, TerrainKind.MOUNTAIN):
                    continue
                water = grid.count_neighbours_of_type(nx, ny, TerrainKind.WATER)
                if water >= WATER_NEIGHBOUR_THRESHOLD:
                    tile.terrain = TerrainKind.WATER
                    changed.append((nx, ny))
                else:
                    tile.terrain = TerrainKind.SAND
        result.converted.extend(changed)
        wave = changed

    logger.debug("water filled", waves=result.waves, flooded=len(result.converted))
    return result
