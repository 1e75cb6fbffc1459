"""Root conftest.py - Shared pytest fixtures for all tests."""

import numpy as np
import pytest

from kalman1d import KalmanConfig, KalmanState


@pytest.fixture
def rng():
    """Seeded random number generator for reproducibility."""
    return np.random.default_rng(42)


@pytest.fixture
def lateral_config():
    """Configuration used by the reference driver."""
    return KalmanConfig(dt=0.03, process_var=0.0001, measurement_var=1.01)


@pytest.fixture
def lateral_init():
    """Initial state used by the reference driver."""
    return KalmanState(pos=100.0, speed=0.0)
