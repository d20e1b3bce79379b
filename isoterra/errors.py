"""Exception hierarchy shared by the grid, terrain and economy layers."""

from __future__ import annotations


class IsoterraError(Exception):
    """Base class for all isoterra errors."""


class InvalidDimensionError(IsoterraError, ValueError):
    """Raised when a grid is created with a non-positive size."""


class OutOfBoundsError(IsoterraError, IndexError):
    """Raised when a direct grid query receives coordinates off the grid."""


class PlacementError(IsoterraError):
    """Raised when a building cannot stand on the requested tile."""


class InsufficientResourcesError(IsoterraError):
    """Raised when the ledger cannot pay a building's cost."""
