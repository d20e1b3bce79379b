"""Tests for isoterra.economy — ledger and buildings."""

import pytest

from isoterra.economy.buildings import (
    Building,
    BuildingKind,
    can_place,
    default_profiles,
)
from isoterra.economy.ledger import ResourceLedger, ResourceType
from isoterra.errors import InsufficientResourcesError
from isoterra.world.grid import Grid
from isoterra.world.tile import TerrainKind


class TestResourceLedger:
    """Tests for ledger arithmetic."""

    def test_default_balances(self) -> None:
        ledger = ResourceLedger()
        assert ledger.get(ResourceType.MINERALS) == 50.0
        assert ledger.get(ResourceType.FOOD) == 10.0

    def test_missing_types_start_at_zero(self) -> None:
        ledger = ResourceLedger(balances={ResourceType.MINERALS: 5.0})
        assert ledger.get(ResourceType.FOOD) == 0.0

    def test_set_and_add(self) -> None:
        ledger = ResourceLedger()
        ledger.set(ResourceType.FOOD, 3.0)
        ledger.add(ResourceType.FOOD, 4.5)
        assert ledger.get(ResourceType.FOOD) == 7.5

    def test_spend(self) -> None:
        ledger = ResourceLedger()
        ledger.spend({ResourceType.MINERALS: 20.0, ResourceType.FOOD: 10.0})
        assert ledger.get(ResourceType.MINERALS) == 30.0
        assert ledger.get(ResourceType.FOOD) == 0.0

    def test_spend_is_all_or_nothing(self) -> None:
        ledger = ResourceLedger()
        with pytest.raises(InsufficientResourcesError):
            ledger.spend({ResourceType.MINERALS: 20.0, ResourceType.FOOD: 11.0})
        assert ledger.get(ResourceType.MINERALS) == 50.0
        assert ledger.get(ResourceType.FOOD) == 10.0

    def test_can_afford(self) -> None:
        ledger = ResourceLedger()
        assert ledger.can_afford({ResourceType.MINERALS: 50.0})
        assert not ledger.can_afford({ResourceType.MINERALS: 50.5})


class TestBuildings:
    """Tests for building profiles, income timers and placement rules."""

    def test_stock_profiles(self) -> None:
        profiles = default_profiles()
        mine = profiles[BuildingKind.MINE]
        assert mine.cost == {ResourceType.MINERALS: 20.0}
        assert mine.income == 10.0
        assert mine.allowed_terrain == {TerrainKind.MOUNTAIN}
        assert profiles[BuildingKind.FARM].income_type is ResourceType.FOOD

    def test_profiles_are_fresh_copies(self) -> None:
        first = default_profiles()
        first[BuildingKind.MINE].income = 99.0
        assert default_profiles()[BuildingKind.MINE].income == 10.0

    def test_income_paid_every_interval(self) -> None:
        profile = default_profiles()[BuildingKind.MINE]
        mine = Building(BuildingKind.MINE, 0, 0, profile=profile, income_interval=3)
        payouts = [mine.update() for _ in range(7)]
        assert payouts == [0.0, 0.0, 10.0, 0.0, 0.0, 10.0, 0.0]

    def test_income_interval_must_be_positive(self) -> None:
        profile = default_profiles()[BuildingKind.FARM]
        with pytest.raises(ValueError, match="income_interval"):
            Building(BuildingKind.FARM, 0, 0, profile=profile, income_interval=0)

    def test_can_place_checks_terrain(self) -> None:
        grid = Grid.create(4, 4)
        grid.change_tile_type(1, 1, TerrainKind.MOUNTAIN)
        mine = default_profiles()[BuildingKind.MINE]
        assert can_place(grid, mine, 1, 1)
        assert not can_place(grid, mine, 2, 2)

    def test_can_place_rejects_occupied_and_off_grid(self) -> None:
        grid = Grid.create(4, 4)
        farm = default_profiles()[BuildingKind.FARM]
        grid.tile_at(0, 0).building = Building(BuildingKind.FARM, 0, 0, profile=farm)
        assert not can_place(grid, farm, 0, 0)
        assert not can_place(grid, farm, 4, 0)
        assert can_place(grid, farm, 1, 0)
