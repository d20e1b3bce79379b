"""CityEngine — world generation plus the economy tick loop.

Owns all top-level state.  On construction it generates the terrain
from the configured seed; afterwards each tick advances every building
in placement order and pays their income into the ledger.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
import structlog
from numpy.random import Generator

from isoterra.economy.buildings import Building, BuildingKind, can_place
from isoterra.economy.ledger import ResourceLedger
from isoterra.errors import PlacementError
from isoterra.simulation.config import SimulationConfig
from isoterra.terrain.generator import PhaseResult, generate
from isoterra.world.grid import Grid

logger = structlog.get_logger()


@dataclass
class CityEngine:
    """Drives the city forward tick by tick.

    Attributes:
        config: Loaded configuration.
        grid: The generated terrain grid.
        ledger: Resource balances.
        buildings: Placed buildings, in placement order.
        phase_results: What each terraform phase did.
        rng: Master seeded random generator.
        tick: Current tick count.
    """

    config: SimulationConfig
    grid: Grid = field(init=False)
    ledger: ResourceLedger = field(init=False)
    buildings: list[Building] = field(init=False, default_factory=list)
    phase_results: list[PhaseResult] = field(init=False, default_factory=list)
    rng: Generator = field(init=False)
    tick: int = 0

    def __post_init__(self) -> None:
        """Build the RNG, generate the grid and open the ledger."""
        self.rng = np.random.default_rng(self.config.seed)
        self.grid = Grid.create(
            self.config.width,
            self.config.height,
            tile_size=self.config.tile_size,
            origin=self.config.origin,
        )
        self.phase_results = generate(self.grid, self.rng, self.config.phases)
        self.ledger = ResourceLedger(balances=dict(self.config.starting_resources))

    def place_building(self, kind: BuildingKind, x: int, y: int) -> Building:
        """Pay for and place a building on tile ``(x, y)``.

        Args:
            kind: Which building to place.
            x: Column index.
            y: Row index.

        Returns:
            The newly placed Building.

        Raises:
            OutOfBoundsError: If ``(x, y)`` is off the grid.
            PlacementError: If the tile is occupied or has the wrong terrain.
            InsufficientResourcesError: If the ledger cannot pay.
        """
        tile = self.grid.tile_at(x, y)
        profile = self.config.building_profiles[kind]
        if tile.building is not None:
            msg = f"tile ({x}, {y}) is already occupied"
            raise PlacementError(msg)
        if not can_place(self.grid, profile, x, y):
            terrain = tile.terrain.name.lower()
            msg = f"cannot place {kind.name.lower()} on {terrain} at ({x}, {y})"
            raise PlacementError(msg)

        self.ledger.spend(profile.cost)
        building = Building(
            kind=kind,
            x=x,
            y=y,
            profile=profile,
            income_interval=self.config.income_interval,
        )
        tile.building = building
        self.buildings.append(building)
        logger.info("building placed", kind=kind.name, x=x, y=y, tick=self.tick)
        return building

    def step(self) -> None:
        """Advance the economy by one tick."""
        for building in self.buildings:
            income = building.update()
            if income:
                self.ledger.add(building.profile.income_type, income)
        self.tick += 1

    def run(self, ticks: int) -> None:
        """Run the economy for a fixed number of ticks.

        Args:
            ticks: Number of ticks to advance.
        """
        for _ in range(ticks):
            self.step()
