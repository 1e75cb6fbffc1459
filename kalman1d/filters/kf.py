"""
Kalman Filter (KF) for 1-D position/velocity tracking.

State x = [pos, speed], control u = [acc]:

    x_k = A x_{k-1} + B u_k,   A = | 1  dt |,   B = | 0.5 dt^2 |
                                   | 0   1 |        |    dt    |

Only position is measured; speed is inferred through the correlation that the
predict step builds up in P.
"""
import logging

import numpy as np

from ..config import KalmanInput, KalmanState
from ..exceptions import ConfigurationError, FilterDestroyedError
from ..ssm.kinematic import transition_matrices
from .common import check_invertible, joseph_update, standard_update
from .linalg import SOLVERS, NumpyLinalg, kalman_gain

logger = logging.getLogger(__name__)

MEASUREMENT_MODELS = ('full', 'scalar')


class KalmanFilter1D:
    """
    Two-state linear Kalman filter with acceleration as control input.

    Not thread-safe: concurrent calls on one instance must be serialized by
    the caller.

    Parameters
    ----------
    config : KalmanConfig
        Time step and noise variances
    init_state : KalmanState
        Initial position and speed; P starts at the identity
    measurement_model : str
        'full' uses the 2x2 H = [[1, 0], [0, 0]] with R = measurement_var * I
        and z = [pos, 0]. 'scalar' uses H = [[1, 0]], R = [[measurement_var]].
        Both give the same estimates (default: 'full')
    joseph : bool
        Use Joseph stabilized covariance update (default: False)
    solver : str
        Solver for Kalman gain: 'inv', 'lu' or 'cholesky' (default: 'inv')
    linalg : LinalgProvider, optional
        Matrix backend (default: NumpyLinalg)

    Raises
    ------
    ConfigurationError
        If the configuration or an option is invalid
    """

    def __init__(self, config, init_state, measurement_model='full', joseph=False,
                 solver='inv', linalg=None):
        config.validate()
        if measurement_model not in MEASUREMENT_MODELS:
            raise ConfigurationError(
                f"measurement_model must be one of {MEASUREMENT_MODELS}, got '{measurement_model}'")
        if solver not in SOLVERS:
            raise ConfigurationError(
                f"solver must be one of {tuple(SOLVERS)}, got '{solver}'")

        self.config = config
        self.measurement_model = measurement_model
        self.joseph = joseph
        self.solver = solver
        self._linalg = linalg if linalg is not None else NumpyLinalg()
        la = self._linalg
        dt = config.dt

        self.I = la.identity(2)
        self.A, self.B = transition_matrices(dt)
        self.Q = la.scale(config.process_var, la.identity(2))
        if measurement_model == 'full':
            self.H = np.array([[1.0, 0.0], [0.0, 0.0]])
            self.R = la.scale(config.measurement_var, la.identity(2))
        else:
            self.H = np.array([[1.0, 0.0]])
            self.R = la.scale(config.measurement_var, la.identity(1))
        # Measurement rows that observe something; S is block diagonal over them
        self._observed = np.flatnonzero(np.any(self.H != 0, axis=1))
        for M in (self.I, self.A, self.B, self.Q, self.H, self.R):
            M.flags.writeable = False

        self._x = np.array([init_state.pos, init_state.speed], dtype=float)
        self._P = np.array(la.identity(2), dtype=float)

        # Per-cycle diagnostics, overwritten by every correct step
        self._K = None
        self._S = None
        self._innovation = None

        self._destroyed = False
        logger.debug("Created KalmanFilter1D(dt=%g, q=%g, r=%g, model=%s, solver=%s, joseph=%s)",
                     dt, config.process_var, config.measurement_var,
                     measurement_model, solver, joseph)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __repr__(self):
        if self._destroyed:
            return "KalmanFilter1D(<destroyed>)"
        return f"KalmanFilter1D(config={self.config!r}, state={self.state!r})"

    def _check_alive(self):
        if self._destroyed:
            raise FilterDestroyedError("KalmanFilter1D has been destroyed")

    @property
    def destroyed(self):
        return self._destroyed

    @property
    def x(self):
        """Copy of the state vector [pos, speed]."""
        self._check_alive()
        return self._x.copy()

    @property
    def P(self):
        """Copy of the error covariance."""
        self._check_alive()
        return self._P.copy()

    @property
    def state(self):
        self._check_alive()
        return KalmanState(pos=float(self._x[0]), speed=float(self._x[1]))

    @property
    def gain(self):
        """Kalman gain from the last correct step, or None."""
        self._check_alive()
        return None if self._K is None else self._K.copy()

    @property
    def innovation(self):
        """Innovation z - H x from the last correct step, or None."""
        self._check_alive()
        return None if self._innovation is None else self._innovation.copy()

    @property
    def innovation_cov(self):
        """Innovation covariance S from the last correct step, or None."""
        self._check_alive()
        return None if self._S is None else self._S.copy()

    def _measurement(self, pos):
        if self.measurement_model == 'full':
            return np.array([pos, 0.0])
        return np.array([pos], dtype=float)

    def predict(self, acc):
        """Propagate x and P one time step with acceleration acc."""
        self._check_alive()
        la = self._linalg
        u = np.array([acc], dtype=float)

        # x = A x + B u
        self._x[:] = la.add(la.mul(self.A, self._x), la.mul(self.B, u))
        # P = A P A' + Q
        self._P[:] = la.add(la.mul_transpose(la.mul(self.A, self._P), self.A), self.Q)

    def correct(self, pos):
        """
        Update x and P with a position measurement.

        Raises
        ------
        SingularInnovationError
            If the observed block of S = H P H' + R cannot be inverted.
            x and P are left unchanged.
        """
        self._check_alive()
        la = self._linalg
        z = self._measurement(pos)

        # S = H P H' + R, K = P H' S^{-1}
        # Rows of H that are all zero contribute zero gain columns
        S = la.add(la.mul_transpose(la.mul(self.H, self._P), self.H), self.R)
        obs = self._observed
        S_obs = S[np.ix_(obs, obs)]
        check_invertible(S_obs)
        K = np.zeros((2, self.H.shape[0]))
        K[:, obs] = kalman_gain(la, self._P, self.H[obs], S_obs, self.solver)

        # x = x + K (z - H x)
        innovation = la.sub(z, la.mul(self.H, self._x))
        self._x[:] = la.add(self._x, la.mul(K, innovation))

        if self.joseph:
            self._P[:] = joseph_update(self._P, K, self.H, self.R, la)
        else:
            self._P[:] = standard_update(self._P, K, self.H, la)

        self._K, self._S, self._innovation = K, S, innovation
        logger.debug("innovation=%.6g gain=(%.6g, %.6g)", innovation[0], K[0, 0], K[1, 0])

    def run(self, inp):
        """
        Execute one predict and correct cycle.

        Parameters
        ----------
        inp : KalmanInput
            Measured position and acceleration for this cycle

        Returns
        -------
        KalmanState
            Filtered position and speed
        """
        self.predict(inp.acc)
        self.correct(inp.pos)
        return self.state

    def close(self):
        """Release the filter's matrices. Calling it again has no effect."""
        if self._destroyed:
            return
        self._x = self._P = None
        self._K = self._S = self._innovation = None
        self.I = self.A = self.B = self.Q = self.H = self.R = None
        self._destroyed = True
        logger.debug("Destroyed KalmanFilter1D")


def kalman_create(config, init_state, **options):
    """Allocate and initialize a filter. See KalmanFilter1D for options."""
    return KalmanFilter1D(config, init_state, **options)


def kalman_run(kf, inp):
    """Execute the predict and correct steps, returning the new estimate."""
    return kf.run(inp)


def kalman_destroy(kf):
    """Release the filter."""
    kf.close()


def kalman_filter(config, init_state, zs, accs, **options):
    """
    Run a fresh filter over a sequence of measurements and accelerations.

    Parameters
    ----------
    config : KalmanConfig
        Filter configuration
    init_state : KalmanState
        Initial state estimate
    zs : array_like [T]
        Measured positions
    accs : array_like [T]
        Accelerations
    **options
        Passed to KalmanFilter1D (measurement_model, joseph, solver, linalg)

    Returns
    -------
    m_filt : ndarray [T, 2]
        Filtered states [pos, speed]
    P_filt : ndarray [T, 2, 2]
        Filtered covariances
    cond_nums : ndarray [T]
        Condition numbers of P
    """
    zs = np.asarray(zs, dtype=float)
    accs = np.asarray(accs, dtype=float)
    if zs.shape != accs.shape or zs.ndim != 1:
        raise ValueError(f"zs and accs must be 1-D with equal length, got {zs.shape} and {accs.shape}")

    T = zs.shape[0]
    m_filt = np.zeros((T, 2))
    P_filt = np.zeros((T, 2, 2))
    cond_nums = np.zeros(T)

    with KalmanFilter1D(config, init_state, **options) as kf:
        for t in range(T):
            kf.run(KalmanInput(pos=zs[t], acc=accs[t]))
            m_filt[t], P_filt[t] = kf.x, kf.P
            cond_nums[t] = np.linalg.cond(P_filt[t])

    return m_filt, P_filt, cond_nums
