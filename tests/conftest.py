"""Shared fixtures for the Isoterra test suite."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from isoterra.simulation.config import SimulationConfig
from isoterra.world.grid import Grid


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def small_grid() -> Grid:
    """A small 8x8 all-grass grid for fast tests."""
    return Grid.create(8, 8)


@pytest.fixture
def small_config() -> SimulationConfig:
    """A 32x32 config (no YAML file needed)."""
    return SimulationConfig(seed=2024, width=32, height=32)
