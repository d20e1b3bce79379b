"""Config — load generation and economy parameters from YAML files.

All tunable constants (grid size, phase coverage, starting resources,
building costs) live in YAML and are parsed into typed dataclasses here.
Keys missing from the file keep their defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from isoterra.economy.buildings import BuildingKind, BuildingProfile, default_profiles
from isoterra.economy.ledger import ResourceType
from isoterra.terrain.generator import DEFAULT_PHASES, PhaseSettings
from isoterra.world.tile import Vector3


@dataclass
class SimulationConfig:
    """Top-level configuration.

    Attributes:
        seed: RNG seed for deterministic generation.
        width: Number of grid columns.
        height: Number of grid rows.
        tile_size: World-space edge length of one tile.
        origin: World-space position of tile ``(0, 0)``.
        phases: Terraform phase tuning, in run order.
        starting_resources: Initial ledger balances.
        income_interval: Ticks between building payouts.
        building_profiles: Cost/yield rules per building kind.
    """

    seed: int = 42
    width: int = 100
    height: int = 100
    tile_size: float = 1.0
    origin: Vector3 = field(default_factory=Vector3)
    phases: tuple[PhaseSettings, ...] = DEFAULT_PHASES
    starting_resources: dict[ResourceType, float] = field(
        default_factory=lambda: {ResourceType.MINERALS: 50.0, ResourceType.FOOD: 10.0},
    )
    income_interval: int = 10
    building_profiles: dict[BuildingKind, BuildingProfile] = field(
        default_factory=default_profiles,
    )

    def __post_init__(self) -> None:
        """Reject payout intervals shorter than one tick."""
        if self.income_interval < 1:
            msg = f"income_interval must be at least 1, got {self.income_interval}"
            raise ValueError(msg)

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ValueError: If the file names an unknown phase, resource or
                building, gives a section as a plain value instead of a
                mapping, or sets a non-positive ``income_interval``.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        defaults = cls()
        origin = data.get("origin")
        return cls(
            seed=data.get("seed", defaults.seed),
            width=data.get("width", defaults.width),
            height=data.get("height", defaults.height),
            tile_size=float(data.get("tile_size", defaults.tile_size)),
            origin=Vector3(*map(float, origin)) if origin else defaults.origin,
            phases=_parse_phases(_mapping(data.get("phases"), "phases")),
            starting_resources=_parse_resources(
                _mapping(data.get("starting_resources"), "starting_resources"),
                defaults.starting_resources,
            ),
            income_interval=data.get("income_interval", defaults.income_interval),
            building_profiles=_parse_buildings(
                _mapping(data.get("buildings"), "buildings"),
            ),
        )


def _parse_phases(raw: dict[str, dict[str, float]]) -> tuple[PhaseSettings, ...]:
    """Apply per-phase overrides on top of ``DEFAULT_PHASES``.

    Phase order is fixed; the file can only retune each phase.
    """
    by_name = {phase.target.name.lower(): phase for phase in DEFAULT_PHASES}
    unknown = set(raw) - set(by_name)
    if unknown:
        msg = f"unknown terraform phase(s): {sorted(unknown)}"
        raise ValueError(msg)

    phases = []
    for phase in DEFAULT_PHASES:
        name = phase.target.name.lower()
        overrides = _mapping(raw.get(name), f"phase {name!r}")
        phases.append(
            replace(
                phase,
                coverage_percent=float(
                    overrides.get("percent_coverage", phase.coverage_percent),
                ),
                former_density=float(
                    overrides.get("terraformer_factor", phase.former_density),
                ),
            ),
        )
    return tuple(phases)


def _mapping(value: Any, what: str) -> dict[str, Any]:
    """Return ``value`` as a mapping, treating a blank entry as empty."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"{what} must be a mapping of settings, got {value!r}"
        raise ValueError(msg)
    return value


def _resource(name: str) -> ResourceType:
    try:
        return ResourceType[name.upper()]
    except KeyError:
        msg = f"unknown resource: {name!r}"
        raise ValueError(msg) from None


def _parse_resources(
    raw: dict[str, float],
    defaults: dict[ResourceType, float],
) -> dict[ResourceType, float]:
    balances = dict(defaults)
    for name, amount in raw.items():
        balances[_resource(name)] = float(amount)
    return balances


def _parse_buildings(raw: dict[str, dict[str, Any]]) -> dict[BuildingKind, BuildingProfile]:
    """Apply ``cost``/``income`` overrides on top of the stock profiles.

    ``cost`` is a number (paid in minerals) or a mapping of resource
    name to amount.
    """
    profiles = default_profiles()
    for name, overrides in raw.items():
        try:
            kind = BuildingKind[name.upper()]
        except KeyError:
            msg = f"unknown building: {name!r}"
            raise ValueError(msg) from None

        profile = profiles[kind]
        overrides = _mapping(overrides, f"building {name!r}")
        if "cost" in overrides:
            cost = overrides["cost"]
            if isinstance(cost, dict):
                profile.cost = {_resource(k): float(v) for k, v in cost.items()}
            else:
                profile.cost = {ResourceType.MINERALS: float(cost)}
        if "income" in overrides:
            profile.income = float(overrides["income"])
    return profiles
