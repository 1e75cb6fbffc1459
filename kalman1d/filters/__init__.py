"""Filtering algorithm implementations."""
from .kf import KalmanFilter1D, kalman_create, kalman_run, kalman_destroy, kalman_filter
from .linalg import LinalgProvider, NumpyLinalg, kalman_gain, solve_lu, solve_cholesky, solve_inv
from .common import joseph_update, standard_update, check_invertible

__all__ = [
    # Main filter
    'KalmanFilter1D',
    'kalman_create',
    'kalman_run',
    'kalman_destroy',
    'kalman_filter',
    # Linear algebra backend
    'LinalgProvider',
    'NumpyLinalg',
    'kalman_gain',
    'solve_lu',
    'solve_cholesky',
    'solve_inv',
    # Utilities
    'joseph_update',
    'standard_update',
    'check_invertible',
]
