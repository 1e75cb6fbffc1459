"""
kalman1d: Position/Velocity Kalman Filter

This package contains implementations of:
- The two-state (position, speed) linear Kalman filter with acceleration input
- Configuration and state containers
- A kinematic simulation harness
- Metrics, plotting and experiment logging utilities
"""
from .config import KalmanConfig, KalmanState, KalmanInput
from .exceptions import ConfigurationError, SingularInnovationError, FilterDestroyedError
from .filters import KalmanFilter1D, kalman_create, kalman_run, kalman_destroy, kalman_filter

__all__ = [
    'KalmanConfig',
    'KalmanState',
    'KalmanInput',
    'ConfigurationError',
    'SingularInnovationError',
    'FilterDestroyedError',
    'KalmanFilter1D',
    'kalman_create',
    'kalman_run',
    'kalman_destroy',
    'kalman_filter',
]
