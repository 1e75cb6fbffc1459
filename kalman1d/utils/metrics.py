"""
Metrics for evaluating filter performance and covariance health.
"""
import numpy as np


def compute_mse(estimated, true):
    """
    Compute Mean Squared Error.

    Parameters
    ----------
    estimated : ndarray
        Estimated values
    true : ndarray
        True values

    Returns
    -------
    float
        Mean squared error
    """
    return np.mean((estimated - true)**2)


def compute_rmse(estimated, true):
    """Root Mean Squared Error."""
    return np.sqrt(compute_mse(estimated, true))


def compute_nees(m_filt, P_filt, xs):
    """
    Compute Normalized Estimation Error Squared (NEES).

    NEES = (x - m)' P^{-1} (x - m), chi-squared(2) for a consistent filter.

    Parameters
    ----------
    m_filt : ndarray [T, 2]
        Filtered means
    P_filt : ndarray [T, 2, 2]
        Filtered covariances
    xs : ndarray [T, 2]
        True states

    Returns
    -------
    ndarray [T]
        NEES values at each time step
    """
    err = xs - m_filt
    return np.einsum('ti,ti->t', err, np.linalg.solve(P_filt, err[..., None])[..., 0])


def compute_nis(innovations, S_innov):
    """
    Compute Normalized Innovation Squared (NIS).

    NIS = v' S^{-1} v with v = z - H x.

    Parameters
    ----------
    innovations : ndarray [T, n_y]
        Innovation vectors
    S_innov : ndarray [T, n_y, n_y]
        Innovation covariances

    Returns
    -------
    ndarray [T]
        NIS values at each time step
    """
    T = innovations.shape[0]
    nis = np.zeros(T)
    for t in range(T):
        v = innovations[t]
        nis[t] = v @ np.linalg.solve(S_innov[t], v)
    return nis


def compute_symmetry_error(P_filt):
    """
    Relative symmetry error ||P - P'||_F / ||P||_F at each time step.

    Parameters
    ----------
    P_filt : ndarray [T, n_x, n_x]
        Covariance matrices

    Returns
    -------
    ndarray [T]
        Relative symmetry error, 0 where P is all zeros
    """
    diff = np.linalg.norm(P_filt - np.swapaxes(P_filt, -1, -2), axis=(-2, -1))
    norm_P = np.linalg.norm(P_filt, axis=(-2, -1))
    return np.divide(diff, norm_P, out=np.zeros_like(diff), where=norm_P > 0)


def compute_min_eigenvalues(P_filt):
    """Minimum eigenvalue of each P; negative values mean P lost PSD."""
    return np.linalg.eigvalsh(P_filt).min(axis=-1)


def compute_traces(P_filt):
    """Trace of each covariance, the total estimated variance."""
    return np.trace(P_filt, axis1=-2, axis2=-1)


def stability_summary(cond_nums, P_filt=None, mse=None):
    """
    Generate summary statistics for numerical stability metrics.

    Parameters
    ----------
    cond_nums : ndarray [T]
        Condition numbers of P
    P_filt : ndarray [T, n_x, n_x], optional
        Covariances, adds symmetry and eigenvalue statistics
    mse : float, optional
        Mean squared error

    Returns
    -------
    dict
        Summary statistics
    """
    summary = {
        'mean_cond': np.mean(cond_nums),
        'max_cond': np.max(cond_nums),
    }
    if P_filt is not None:
        summary['max_symmetry_error'] = np.max(compute_symmetry_error(P_filt))
        summary['min_eigenvalue'] = np.min(compute_min_eigenvalues(P_filt))
    if mse is not None:
        summary['mse'] = mse
    return summary
