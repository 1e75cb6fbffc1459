"""Configuration, input and output containers for the 1-D Kalman filter."""
import math
from dataclasses import dataclass

from .exceptions import ConfigurationError


@dataclass(frozen=True)
class KalmanConfig:
    """
    Filter configuration. Fixed for the lifetime of a filter.

    Parameters
    ----------
    dt : float
        Time step in seconds, must be > 0
    process_var : float
        Process noise variance, Q = process_var * I
    measurement_var : float
        Measurement noise variance, R = measurement_var * I
    """
    dt: float
    process_var: float
    measurement_var: float

    def validate(self) -> None:
        """Raise ConfigurationError if the configuration is unusable."""
        for name in ('dt', 'process_var', 'measurement_var'):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ConfigurationError(f"{name} must be finite, got {value}")
        if self.dt <= 0:
            raise ConfigurationError(f"dt must be > 0, got {self.dt}")
        if self.process_var < 0:
            raise ConfigurationError(f"process_var must be >= 0, got {self.process_var}")
        if self.measurement_var < 0:
            raise ConfigurationError(f"measurement_var must be >= 0, got {self.measurement_var}")


@dataclass(frozen=True)
class KalmanState:
    """Position and speed estimate."""
    pos: float
    speed: float


@dataclass(frozen=True)
class KalmanInput:
    """One cycle of input: measured position and commanded acceleration."""
    pos: float
    acc: float
