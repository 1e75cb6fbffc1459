"""
Utility Functions.

This module contains utility functions for:
- Metrics computation
- Visualization
- Experiment logging
"""
from .metrics import (
    compute_mse,
    compute_rmse,
    compute_nees,
    compute_nis,
    compute_symmetry_error,
    compute_min_eigenvalues,
    compute_traces,
    stability_summary,
)
from .experiment_logger import ExperimentLogger
from .visualization import plot_kalman_1d, plot_measurement_model_comparison

__all__ = [
    # metrics
    'compute_mse',
    'compute_rmse',
    'compute_nees',
    'compute_nis',
    'compute_symmetry_error',
    'compute_min_eigenvalues',
    'compute_traces',
    'stability_summary',
    # experiment logger
    'ExperimentLogger',
    # visualization
    'plot_kalman_1d',
    'plot_measurement_model_comparison',
]
