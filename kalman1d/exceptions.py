"""Exceptions raised by the Kalman filter."""
import numpy as np


class ConfigurationError(ValueError):
    """Invalid filter configuration or option, raised at creation time."""


class SingularInnovationError(np.linalg.LinAlgError):
    """Innovation covariance S cannot be inverted reliably."""

    def __init__(self, S, cond):
        self.S = S
        self.cond = cond
        super().__init__(f"Singular innovation covariance (cond={cond:.3e})")


class FilterDestroyedError(RuntimeError):
    """Operation attempted on a filter that has already been destroyed."""
