"""Simulation harness for the 1-D kinematic model."""
from .kinematic import kinematic_ssm, ramp_driver_inputs, transition_matrices

__all__ = [
    'kinematic_ssm',
    'ramp_driver_inputs',
    'transition_matrices',
]
