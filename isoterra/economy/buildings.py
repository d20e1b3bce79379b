"""Buildings — structures placed on tiles that produce resources.

Each building kind has a profile: what it costs, what it yields, and
which terrain it may stand on.  Placed buildings pay their income into
the ledger once every ``income_interval`` ticks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

from isoterra.economy.ledger import ResourceType
from isoterra.world.tile import TerrainKind

if TYPE_CHECKING:
    from isoterra.world.grid import Grid


class BuildingKind(Enum):
    """Kinds of building the player can place."""

    MINE = auto()
    FARM = auto()


@dataclass
class BuildingProfile:
    """Cost, yield and terrain rules for one building kind.

    Attributes:
        cost: Resources spent when the building is placed.
        income_type: Resource the building produces.
        income: Amount produced per payout.
        allowed_terrain: Terrain kinds the building may stand on.
    """

    cost: dict[ResourceType, float]
    income_type: ResourceType
    income: float
    allowed_terrain: frozenset[TerrainKind]


def default_profiles() -> dict[BuildingKind, BuildingProfile]:
    """Return a fresh copy of the stock building profiles."""
    return {
        BuildingKind.MINE: BuildingProfile(
            cost={ResourceType.MINERALS: 20.0},
            income_type=ResourceType.MINERALS,
            income=10.0,
            allowed_terrain=frozenset({TerrainKind.MOUNTAIN}),
        ),
        BuildingKind.FARM: BuildingProfile(
            cost={ResourceType.MINERALS: 15.0},
            income_type=ResourceType.FOOD,
            income=5.0,
            allowed_terrain=frozenset({TerrainKind.GRASS}),
        ),
    }


@dataclass
class Building:
    """A building standing on the grid.

    Attributes:
        kind: Which building this is.
        x: Column of the tile it stands on.
        y: Row of the tile it stands on.
        profile: Cost/yield rules in effect for this building.
        income_interval: Ticks between payouts.
        ticks_since_income: Ticks elapsed since the last payout.
    """

    kind: BuildingKind
    x: int
    y: int
    profile: BuildingProfile = field(repr=False)
    income_interval: int = 10
    ticks_since_income: int = 0

    def __post_init__(self) -> None:
        if self.income_interval < 1:
            msg = f"income_interval must be at least 1, got {self.income_interval}"
            raise ValueError(msg)

    def update(self) -> float:
        """Advance the income timer by one tick.

        Returns:
            Income earned this tick (zero between payouts).
        """
        self.ticks_since_income += 1
        if self.ticks_since_income < self.income_interval:
            return 0.0
        self.ticks_since_income = 0
        return self.profile.income


def can_place(grid: Grid, profile: BuildingProfile, x: int, y: int) -> bool:
    """Return True if a building with ``profile`` may stand on ``(x, y)``.

    The tile must be on the grid, unoccupied, and of an allowed terrain.
    """
    if not grid.in_bounds(x, y):
        return False
    tile = grid.cells[y][x]
    return tile.building is None and tile.terrain in profile.allowed_terrain
