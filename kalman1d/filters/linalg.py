"""
Linear-algebra primitives used by the 1-D Kalman filter.

The filter only talks to a LinalgProvider, so the concrete matrix backend can
be swapped without touching the recursion. NumpyLinalg is the default.
"""
from abc import ABC, abstractmethod

import numpy as np
from scipy import linalg as sla


def solve_lu(S, B):
    """Solve S @ X = B using LU factorization (np.linalg.solve)."""
    return np.linalg.solve(S, B)


def solve_cholesky(S, B):
    """Solve S @ X = B using Cholesky factorization (assumes S is SPD)."""
    L = sla.cholesky(S, lower=True)
    return sla.cho_solve((L, True), B)


def solve_inv(S, B):
    """Solve S @ X = B using explicit matrix inversion."""
    return np.linalg.inv(S) @ B


SOLVERS = {
    'inv': solve_inv,
    'lu': solve_lu,
    'cholesky': solve_cholesky,
}


class LinalgProvider(ABC):
    """
    Fixed-size matrix operations required by the filter.

    Matrices are 2-D arrays, vectors are 1-D arrays. Implementations return
    new arrays and never modify their arguments.
    """

    @abstractmethod
    def identity(self, n):
        ...

    @abstractmethod
    def add(self, X, Y):
        ...

    @abstractmethod
    def sub(self, X, Y):
        ...

    @abstractmethod
    def mul(self, X, Y):
        """Matrix-matrix or matrix-vector product X @ Y."""

    @abstractmethod
    def mul_transpose(self, X, Y):
        """Product with the transpose of the right operand, X @ Y.T."""

    @abstractmethod
    def scale(self, s, X):
        ...

    @abstractmethod
    def inverse(self, X):
        ...

    @abstractmethod
    def solve(self, S, B, method='lu'):
        """Solve S @ X = B with one of the SOLVERS."""


class NumpyLinalg(LinalgProvider):
    """LinalgProvider backed by numpy, with scipy for the Cholesky solve."""

    def identity(self, n):
        return np.eye(n)

    def add(self, X, Y):
        return X + Y

    def sub(self, X, Y):
        return X - Y

    def mul(self, X, Y):
        return X @ Y

    def mul_transpose(self, X, Y):
        return X @ Y.T

    def scale(self, s, X):
        return s * X

    def inverse(self, X):
        return np.linalg.inv(X)

    def solve(self, S, B, method='lu'):
        return SOLVERS[method](S, B)


def kalman_gain(linalg, P, H, S, solver='inv'):
    """
    Compute the Kalman gain K = P @ H.T @ S^{-1}.

    Parameters
    ----------
    linalg : LinalgProvider
        Matrix backend
    P : ndarray [n_x, n_x]
        Predicted covariance
    H : ndarray [n_y, n_x]
        Observation matrix
    S : ndarray [n_y, n_y]
        Innovation covariance
    solver : str
        'inv' multiplies by the explicit inverse of S; 'lu' and 'cholesky'
        solve S.T @ K.T = H @ P.T instead

    Returns
    -------
    ndarray [n_x, n_y]
        Kalman gain
    """
    PHt = linalg.mul_transpose(P, H)
    if solver == 'inv':
        return linalg.mul(PHt, linalg.inverse(S))
    return linalg.solve(S.T, PHt.T, method=solver).T
