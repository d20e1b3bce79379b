"""Terraformer — random-walk agent used while seeding one terrain phase.

A terraformer starts on an untouched grass tile and wanders one step
per iteration in one of eight directions.  A step onto grass paints
the tile with the phase's target terrain; a step off the grid or onto
anything else is rolled back, so the walker stalls for that iteration.

Walkers are discarded once their phase finishes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from isoterra.world.tile import TerrainKind

if TYPE_CHECKING:
    from numpy.random import Generator

    from isoterra.world.grid import Grid

# Facing index -> (dx, dy)
FACINGS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (0, -1),
    (1, -1),
    (1, 0),
    (-1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)


@dataclass
class Terraformer:
    """A single random walker.

    Attributes:
        x: Current column.
        y: Current row.
        target: Terrain painted onto each accepted step.
        facing: Index into ``FACINGS`` of the last step taken.
        old_x: Column before the last step.
        old_y: Row before the last step.
    """

    x: int
    y: int
    target: TerrainKind
    facing: int = 0
    old_x: int = 0
    old_y: int = 0

    def __post_init__(self) -> None:
        self.old_x = self.x
        self.old_y = self.y

    def step(self, grid: Grid, rng: Generator) -> tuple[int, int] | None:
        """Take one random step and paint the destination if allowed.

        Args:
            grid: The grid being terraformed.
            rng: Seeded random generator.

        Returns:
            The painted coordinate, or None if the walker stalled.
        """
        self.facing = int(rng.integers(0, len(FACINGS)))
        dx, dy = FACINGS[self.facing]

        self.old_x, self.old_y = self.x, self.y
        self.x += dx
        self.y += dy

        if not is_open_ground(grid, self.x, self.y):
            self.x, self.y = self.old_x, self.old_y
            return None

        grid.cells[self.y][self.x].terrain = self.target
        return (self.x, self.y)


def is_open_ground(grid: Grid, x: int, y: int) -> bool:
    """Return True if ``(x, y)`` is on the grid and still grass."""
    return grid.in_bounds(x, y) and grid.cells[y][x].terrain is TerrainKind.GRASS


def spawn_terraformers(
    grid: Grid,
    target: TerrainKind,
    count: int,
    rng: Generator,
) -> list[Terraformer]:
    """Place ``count`` walkers on random grass tiles.

    Start positions are drawn by rejection sampling; several walkers may
    share a start tile.  The caller must make sure at least one grass
    tile exists.

    Args:
        grid: The grid being terraformed.
        target: Terrain the walkers will paint.
        count: Number of walkers to create.
        rng: Seeded random generator.

    Returns:
        Walkers in creation order.
    """
    formers: list[Terraformer] = []
    for _ in range(count):
        while True:
            x = int(rng.integers(0, grid.width))
            y = int(rng.integers(0, grid.height))
            if is_open_ground(grid, x, y):
                break
        formers.append(Terraformer(x=x, y=y, target=target))
    return formers
