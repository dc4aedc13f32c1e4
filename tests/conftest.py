"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest

from attractorscope.engine import EngineConfig, SimulationController

# Small buffer so eviction is exercised quickly
TEST_CAPACITY = 64


@pytest.fixture
def capacity() -> int:
    """Trail capacity used by the small controller fixtures."""
    return TEST_CAPACITY


@pytest.fixture
def controller(capacity: int) -> SimulationController:
    """Fresh lorenz controller with a small trail."""
    return SimulationController(EngineConfig(capacity=capacity))


@pytest.fixture
def strict_controller(capacity: int) -> SimulationController:
    """Controller that raises on rejected parameter writes."""
    return SimulationController(EngineConfig(capacity=capacity, strict=True))


@pytest.fixture
def lorenz_cloud() -> np.ndarray:
    """
    A settled lorenz trajectory.

    Returns:
        (2000, 3) float64 array of positions.
    """
    ctrl = SimulationController(EngineConfig(capacity=2000))
    ctrl.run(3000)
    return ctrl.trail.points()
