"""ResourceLedger — the city's stockpile of resources.

Buildings draw their construction cost from the ledger and pay their
income into it on a fixed tick schedule.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, auto

from isoterra.errors import InsufficientResourcesError


class ResourceType(Enum):
    """Resources tracked by the ledger."""

    MINERALS = auto()
    FOOD = auto()


def _default_balances() -> dict[ResourceType, float]:
    return {ResourceType.MINERALS: 50.0, ResourceType.FOOD: 10.0}


@dataclass
class ResourceLedger:
    """Current resource balances.

    Attributes:
        balances: Amount held per resource type.
    """

    balances: dict[ResourceType, float] = field(default_factory=_default_balances)

    def __post_init__(self) -> None:
        for rtype in ResourceType:
            self.balances.setdefault(rtype, 0.0)

    def get(self, rtype: ResourceType) -> float:
        """Return the balance held for ``rtype``."""
        return self.balances[rtype]

    def set(self, rtype: ResourceType, value: float) -> None:
        """Overwrite the balance for ``rtype``."""
        self.balances[rtype] = value

    def add(self, rtype: ResourceType, amount: float) -> None:
        """Add ``amount`` (may be negative) to the balance for ``rtype``."""
        self.balances[rtype] += amount

    def can_afford(self, costs: Mapping[ResourceType, float]) -> bool:
        """Return True if every cost in ``costs`` is covered."""
        return all(self.balances[rtype] >= amount for rtype, amount in costs.items())

    def spend(self, costs: Mapping[ResourceType, float]) -> None:
        """Deduct ``costs`` from the ledger, all or nothing.

        Raises:
            InsufficientResourcesError: If any balance is too low.  The
                ledger is left unchanged.
        """
        if not self.can_afford(costs):
            short = {
                rtype.name.lower(): amount - self.balances[rtype]
                for rtype, amount in costs.items()
                if self.balances[rtype] < amount
            }
            msg = f"insufficient resources, short by {short}"
            raise InsufficientResourcesError(msg)
        for rtype, amount in costs.items():
            self.balances[rtype] -= amount
