"""1-D kinematic State Space Model with acceleration input."""
import numpy as np


def transition_matrices(dt):
    """
    Transition and control matrices of the constant-acceleration step.

    Parameters
    ----------
    dt : float
        Time step

    Returns
    -------
    A : ndarray [2, 2]
        State transition matrix
    B : ndarray [2, 1]
        Control matrix
    """
    A = np.array([[1.0, dt], [0.0, 1.0]])
    B = np.array([[0.5 * dt * dt], [dt]])
    return A, B


def kinematic_ssm(config, init_state, T, rng, acc_mean=0.0, acc_std=1.0):
    """
    Simulate a 1-D object under random accelerations.

    The true state follows x_t = A x_{t-1} + B a_t + v_t with
    v_t ~ N(0, process_var * I), and the measurement is
    z_t = pos_t + w_t with w_t ~ N(0, measurement_var).

    Parameters
    ----------
    config : KalmanConfig
        Time step and noise variances
    init_state : KalmanState
        Starting position and speed
    T : int
        Number of time steps
    rng : np.random.Generator
        Random number generator
    acc_mean : float
        Mean of the acceleration input
    acc_std : float
        Std of the acceleration input

    Returns
    -------
    xs : ndarray [T, 2]
        True states [pos, speed]
    zs : ndarray [T]
        Measured positions
    accs : ndarray [T]
        Acceleration inputs
    """
    A, B = transition_matrices(config.dt)
    q_std = np.sqrt(config.process_var)
    r_std = np.sqrt(config.measurement_var)

    x = np.array([init_state.pos, init_state.speed], dtype=float)
    xs = np.zeros((T, 2))
    zs = np.zeros(T)
    accs = acc_mean + acc_std * rng.standard_normal(T)

    for t in range(T):
        x = A @ x + B[:, 0] * accs[t] + q_std * rng.standard_normal(2)
        xs[t] = x
        zs[t] = x[0] + r_std * rng.standard_normal()

    return xs, zs, accs


def ramp_driver_inputs(T, rng):
    """
    Generate the reference driver's measurement/control stream.

    z_i = 5 + 2 U_i + i / 100 and a_i = 1 - 0.5 U'_i, with U, U' uniform on
    [0, 1). The two uniforms of step i are drawn back to back, z first.

    Parameters
    ----------
    T : int
        Number of samples
    rng : np.random.Generator
        Random number generator

    Returns
    -------
    zs : ndarray [T]
        Measured positions
    accs : ndarray [T]
        Accelerations
    """
    u = rng.random((T, 2))
    i = np.arange(T)
    zs = 5.0 + 2.0 * u[:, 0] + i / 100.0
    accs = 1.0 - 0.5 * u[:, 1]
    return zs, accs
