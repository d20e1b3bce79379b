"""Terrain generator — the three-phase terraforming pipeline.

A fresh grid is all grass.  ``generate`` then runs one terraform phase
per terrain kind in a fixed order:

1. Mountain (15% coverage)
2. Water (20% coverage)
3. Sand (10% coverage)

Each phase scatters random walkers over the remaining grass, lets them
paint a trail of the target terrain, and then smooths the trails with a
fill pass.  Mountains and sand get a single thickening wave; water
floods until its coastline is stable.  Phase order matters because
walkers only ever start on, or step onto, grass.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from isoterra.terrain.fill import fill_in_terrain, fill_water
from isoterra.terrain.terraformer import spawn_terraformers
from isoterra.world.tile import TerrainKind

if TYPE_CHECKING:
    from numpy.random import Generator

    from isoterra.world.grid import Grid

logger = structlog.get_logger()

DEFAULT_COVERAGE = 0.2
DEFAULT_FORMER_DENSITY = 0.02

# kind -> (neighbour threshold, max waves) for the single-wave fills
_BLOB_FILLS: dict[TerrainKind, tuple[int, int]] = {
    TerrainKind.MOUNTAIN: (4, 1),
    TerrainKind.SAND: (5, 1),
}


@dataclass(frozen=True)
class PhaseSettings:
    """Tuning for one terraform phase.

    Attributes:
        target: Terrain painted by this phase.
        coverage_percent: Fraction of all tiles the random walk aims to
            paint (before smoothing).
        former_density: Walkers spawned per target tile.
    """

    target: TerrainKind
    coverage_percent: float = DEFAULT_COVERAGE
    former_density: float = DEFAULT_FORMER_DENSITY


DEFAULT_PHASES: tuple[PhaseSettings, ...] = (
    PhaseSettings(TerrainKind.MOUNTAIN, coverage_percent=0.15),
    PhaseSettings(TerrainKind.WATER, coverage_percent=0.20),
    PhaseSettings(TerrainKind.SAND, coverage_percent=0.10),
)


@dataclass(frozen=True)
class PhaseResult:
    """Summary of a finished terraform phase.

    Attributes:
        target: Terrain painted by the phase.
        formers: Number of walkers spawned.
        iterations: Steps taken by each walker.
        placed: Tiles painted by the random walk.
        filled: Tiles converted to ``target`` by the smoothing pass.
    """

    target: TerrainKind
    formers: int = 0
    iterations: int = 0
    placed: int = 0
    filled: int = 0

    @property
    def skipped(self) -> bool:
        """Return True if the phase had no walkers to run."""
        return self.formers == 0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    Python's built-in ``round`` rounds halves to even, which would shift
    walker counts on grids whose sizes land exactly on ``.5``.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def terraform(
    grid: Grid,
    target: TerrainKind,
    rng: Generator,
    coverage_percent: float = DEFAULT_COVERAGE,
    former_density: float = DEFAULT_FORMER_DENSITY,
) -> PhaseResult:
    """Paint ``target`` onto roughly ``coverage_percent`` of the grid.

    Args:
        grid: The grid to modify in place.
        target: Terrain to paint.
        rng: Seeded random generator.  Start positions are drawn first,
            walker by walker, then one facing per walker per iteration.
        coverage_percent: Fraction of tiles the random walk aims for.
        former_density: Walkers per target tile.

    Returns:
        A PhaseResult describing what the phase did.  Phases with no
        walkers (tiny grids, or no grass left) change nothing.
    """
    target_cells = round_half_up(grid.width * grid.height * coverage_percent)
    former_count = round_half_up(target_cells * former_density)
    if former_count <= 0:
        logger.debug("terraform skipped", target=target.name, target_cells=target_cells)
        return PhaseResult(target=target)

    if grid.terrain_counts()[TerrainKind.GRASS] == 0:
        logger.warning("terraform skipped, no grass left", target=target.name)
        return PhaseResult(target=target)

    iterations = round_half_up(target_cells / former_count)
    formers = spawn_terraformers(grid, target, former_count, rng)

    newly_placed: list[tuple[int, int]] = []
    for _ in range(iterations):
        for former in formers:
            placed = former.step(grid, rng)
            if placed is not None:
                newly_placed.append(placed)

    if target is TerrainKind.WATER:
        filled = fill_water(grid, newly_placed).converted
    elif target in _BLOB_FILLS:
        threshold, max_passes = _BLOB_FILLS[target]
        filled = fill_in_terrain(
            grid,
            newly_placed,
            target,
            threshold,
            max_passes,
        ).converted
    else:
        filled = []

    result = PhaseResult(
        target=target,
        formers=former_count,
        iterations=iterations,
        placed=len(newly_placed),
        filled=len(filled),
    )
    logger.info(
        "terraform complete",
        target=target.name,
        formers=result.formers,
        iterations=result.iterations,
        placed=result.placed,
        filled=result.filled,
    )
    return result


def generate(
    grid: Grid,
    rng: Generator,
    phases: Sequence[PhaseSettings] | None = None,
) -> list[PhaseResult]:
    """Run every terraform phase over ``grid`` in order.

    Args:
        grid: A freshly created grid.
        rng: Seeded random generator shared by all phases.
        phases: Phase tuning in run order; defaults to ``DEFAULT_PHASES``.

    Returns:
        One PhaseResult per phase.
    """
    if phases is None:
        phases = DEFAULT_PHASES

    results = [
        terraform(
            grid,
            phase.target,
            rng,
            coverage_percent=phase.coverage_percent,
            former_density=phase.former_density,
        )
        for phase in phases
    ]
    logger.info(
        "map generated",
        width=grid.width,
        height=grid.height,
        **{kind.name.lower(): n for kind, n in grid.terrain_counts().items()},
    )
    return results
