"""Covariance update forms and numerical checks shared by the filter."""
import numpy as np

from ..exceptions import SingularInnovationError
from .linalg import NumpyLinalg

_DEFAULT_LINALG = NumpyLinalg()


def joseph_update(P_pred, K, H, R, linalg=_DEFAULT_LINALG):
    """
    Compute Joseph-stabilized covariance update.

    P = (I - K H) P_pred (I - K H)' + K R K'

    Parameters
    ----------
    P_pred : ndarray [n_x, n_x]
        Predicted covariance
    K : ndarray [n_x, n_y]
        Kalman gain
    H : ndarray [n_y, n_x]
        Observation matrix
    R : ndarray [n_y, n_y]
        Observation noise covariance
    linalg : LinalgProvider
        Matrix backend

    Returns
    -------
    ndarray [n_x, n_x]
        Updated covariance
    """
    IKH = linalg.sub(linalg.identity(P_pred.shape[0]), linalg.mul(K, H))
    KRKt = linalg.mul_transpose(linalg.mul(K, R), K)
    return linalg.add(linalg.mul_transpose(linalg.mul(IKH, P_pred), IKH), KRKt)


def standard_update(P_pred, K, H, linalg=_DEFAULT_LINALG):
    """
    Compute standard covariance update: P = (I - K H) P_pred.

    Parameters
    ----------
    P_pred : ndarray [n_x, n_x]
        Predicted covariance
    K : ndarray [n_x, n_y]
        Kalman gain
    H : ndarray [n_y, n_x]
        Observation matrix
    linalg : LinalgProvider
        Matrix backend

    Returns
    -------
    ndarray [n_x, n_x]
        Updated covariance
    """
    IKH = linalg.sub(linalg.identity(P_pred.shape[0]), linalg.mul(K, H))
    return linalg.mul(IKH, P_pred)


def check_invertible(S, tol=None):
    """
    Raise SingularInnovationError if S is singular or ill-conditioned.

    Parameters
    ----------
    S : ndarray [n_y, n_y]
        Innovation covariance
    tol : float, optional
        Largest acceptable condition number (default: 1 / machine epsilon)

    Returns
    -------
    float
        Condition number of S
    """
    if not np.all(np.isfinite(S)):
        raise SingularInnovationError(S.copy(), np.nan)
    if tol is None:
        tol = 1.0 / np.finfo(S.dtype).eps
    cond = np.linalg.cond(S)
    if not np.isfinite(cond) or cond > tol:
        raise SingularInnovationError(S.copy(), cond)
    return cond
