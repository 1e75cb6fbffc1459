"""Shared pytest fixtures for unit tests."""

import numpy as np
import pytest

from kalman1d import KalmanConfig, KalmanState


@pytest.fixture
def tracking_config():
    """Moderate noise configuration with a coarse time step."""
    return KalmanConfig(dt=0.1, process_var=0.01, measurement_var=0.25)


@pytest.fixture
def moving_init():
    """Object starting away from the origin with nonzero speed."""
    return KalmanState(pos=2.0, speed=1.5)


@pytest.fixture
def random_inputs(rng):
    """Arbitrary measurement/acceleration stream."""
    T = 300
    zs = 10.0 * rng.standard_normal(T)
    accs = 3.0 * rng.standard_normal(T)
    return zs, accs


def check_psd(matrix, tol=1e-10):
    """Check if matrix is positive semi-definite."""
    return np.all(np.linalg.eigvalsh(matrix) >= -tol)


def check_symmetric(matrix, tol=1e-12):
    """Check if matrix is symmetric up to a relative tolerance."""
    scale = max(np.abs(matrix).max(), 1.0)
    return np.abs(matrix - matrix.T).max() <= tol * scale
