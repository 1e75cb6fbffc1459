"""Unit tests for metrics utility functions."""

import numpy as np
import pytest

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', '..'))

from kalman1d.utils.metrics import (
    compute_mse, compute_rmse, compute_nees, compute_nis, stability_summary,
    compute_symmetry_error, compute_min_eigenvalues, compute_traces,
)


class TestComputeMSE:
    """Tests for MSE and RMSE computation."""

    def test_known_value(self):
        """MSE should match hand-computed value."""
        estimated = np.array([1.0, 2.0, 3.0])
        true = np.array([0.0, 0.0, 0.0])

        # MSE = (1 + 4 + 9) / 3 = 14/3
        np.testing.assert_allclose(compute_mse(estimated, true), 14.0 / 3.0)

    def test_rmse_is_sqrt_of_mse(self):
        """RMSE should be square root of MSE."""
        estimated = np.array([1.0, 2.0, 3.0])
        true = np.array([0.5, 0.0, -1.0])

        np.testing.assert_allclose(compute_rmse(estimated, true), np.sqrt(compute_mse(estimated, true)))


class TestComputeNEES:
    """Tests for NEES computation."""

    def test_identity_covariance(self):
        """With P = I, NEES is the squared error norm."""
        m_filt = np.zeros((3, 2))
        P_filt = np.tile(np.eye(2), (3, 1, 1))
        xs = np.array([[1.0, 0.0], [1.0, 1.0], [0.0, 3.0]])

        np.testing.assert_allclose(compute_nees(m_filt, P_filt, xs), [1.0, 2.0, 9.0])

    def test_scaled_covariance(self):
        """NEES scales inversely with covariance."""
        m_filt = np.zeros((1, 2))
        P_filt = np.array([[[4.0, 0.0], [0.0, 0.25]]])
        xs = np.array([[2.0, 1.0]])

        np.testing.assert_allclose(compute_nees(m_filt, P_filt, xs), [1.0 + 4.0])


class TestComputeNIS:
    """Tests for NIS computation."""

    def test_scalar_innovation(self):
        """NIS of a scalar innovation is v^2 / S."""
        innovations = np.array([[2.0], [-1.0]])
        S_innov = np.array([[[4.0]], [[0.5]]])

        np.testing.assert_allclose(compute_nis(innovations, S_innov), [1.0, 2.0])


class TestCovarianceMetrics:
    """Tests for symmetry, eigenvalue and trace metrics."""

    def test_symmetric_matrices(self):
        """Symmetric matrices have zero symmetry error."""
        P_filt = np.array([[[2.0, 0.5], [0.5, 1.0]], [[0.0, 0.0], [0.0, 0.0]]])

        np.testing.assert_array_equal(compute_symmetry_error(P_filt), [0.0, 0.0])

    def test_asymmetric_matrix(self):
        """Relative Frobenius error for a known asymmetric matrix."""
        P = np.array([[1.0, 1.0], [0.0, 1.0]])

        err = compute_symmetry_error(P[None])

        np.testing.assert_allclose(err, [np.sqrt(2.0) / np.sqrt(3.0)])

    def test_min_eigenvalues(self):
        """Minimum eigenvalue per time step, negative when not PSD."""
        P_filt = np.array([np.diag([3.0, 1.0]), [[1.0, 2.0], [2.0, 1.0]]])

        np.testing.assert_allclose(compute_min_eigenvalues(P_filt), [1.0, -1.0])

    def test_traces(self):
        """Trace of each covariance."""
        P_filt = np.array([np.eye(2), np.diag([0.5, 0.25])])

        np.testing.assert_allclose(compute_traces(P_filt), [2.0, 0.75])


class TestStabilitySummary:
    """Tests for stability summary."""

    def test_summary_keys(self):
        """Summary contains condition statistics and optional extras."""
        cond_nums = np.array([1.0, 3.0, 2.0])
        P_filt = np.tile(np.eye(2), (3, 1, 1))

        summary = stability_summary(cond_nums, P_filt=P_filt, mse=0.1)

        assert summary['mean_cond'] == pytest.approx(2.0)
        assert summary['max_cond'] == 3.0
        assert summary['max_symmetry_error'] == 0.0
        assert summary['min_eigenvalue'] == pytest.approx(1.0)
        assert summary['mse'] == 0.1

    def test_minimal_summary(self):
        """Without optional inputs only condition statistics are reported."""
        summary = stability_summary(np.array([1.0]))

        assert set(summary) == {'mean_cond', 'max_cond'}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
