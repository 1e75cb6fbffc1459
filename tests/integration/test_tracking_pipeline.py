"""Integration tests: simulated kinematic tracks through the filter."""

import numpy as np
import pytest

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from kalman1d import KalmanConfig, KalmanState, kalman_filter
from kalman1d.ssm import kinematic_ssm
from kalman1d.utils.metrics import compute_nees, compute_rmse, stability_summary


@pytest.fixture
def track(rng):
    """Simulated track whose noise matches the filter's model."""
    config = KalmanConfig(dt=0.1, process_var=0.01, measurement_var=0.25)
    init = KalmanState(pos=0.0, speed=1.0)
    xs, zs, accs = kinematic_ssm(config, init, 500, rng)
    return config, init, xs, zs, accs


class TestTrackingPipeline:
    """Filter on matched-model simulated data."""

    @pytest.mark.parametrize("measurement_model", ['full', 'scalar'])
    def test_consistent(self, track, measurement_model):
        """Mean NEES should be approximately n_x = 2 for a matched model."""
        config, init, xs, zs, accs = track

        m_filt, P_filt, _ = kalman_filter(config, init, zs, accs, measurement_model=measurement_model)

        mean_nees = np.mean(compute_nees(m_filt, P_filt, xs))
        assert 1.0 < mean_nees < 3.5, f"Mean NEES = {mean_nees}"

    def test_filter_beats_raw_measurements(self, track):
        """Filtered position is closer to the truth than the raw measurement."""
        config, init, xs, zs, accs = track

        m_filt, _, _ = kalman_filter(config, init, zs, accs)

        assert compute_rmse(m_filt[:, 0], xs[:, 0]) < 0.8 * compute_rmse(zs, xs[:, 0])

    def test_speed_inferred(self, track):
        """Inferred speed beats differencing the raw measurements."""
        config, init, xs, zs, accs = track

        m_filt, _, _ = kalman_filter(config, init, zs, accs)

        naive_speed = np.diff(zs) / config.dt
        assert compute_rmse(m_filt[1:, 1], xs[1:, 1]) < 0.2 * compute_rmse(naive_speed, xs[1:, 1])

    def test_stability(self, track):
        """Covariance stays well conditioned."""
        config, init, xs, zs, accs = track

        _, P_filt, cond_nums = kalman_filter(config, init, zs, accs, joseph=True)
        summary = stability_summary(cond_nums, P_filt=P_filt)

        assert summary['max_cond'] < 1e3
        assert summary['min_eigenvalue'] > 0.0
        assert summary['max_symmetry_error'] < 1e-10


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
