"""Reference driver: seeded ramp stream through the lateral filter configuration."""
import os
import sys
import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from kalman1d import KalmanConfig, KalmanState, KalmanInput, kalman_create, kalman_run, kalman_destroy
from kalman1d.ssm import ramp_driver_inputs
from kalman1d.utils import plot_kalman_1d

LATERAL_CONFIG = KalmanConfig(dt=0.03, process_var=0.0001, measurement_var=1.01)
INIT_STATE = KalmanState(pos=100.0, speed=0.0)
T = 1000
SEED = 1


def run(T=T, seed=SEED):
    """Feed the ramp stream through a fresh filter, one cycle at a time."""
    zs, accs = ramp_driver_inputs(T, np.random.default_rng(seed))
    m_filt = np.zeros((T, 2))
    P_filt = np.zeros((T, 2, 2))

    kalman = kalman_create(LATERAL_CONFIG, INIT_STATE)
    try:
        for i in range(T):
            out = kalman_run(kalman, KalmanInput(pos=zs[i], acc=accs[i]))
            m_filt[i] = out.pos, out.speed
            P_filt[i] = kalman.P
    finally:
        kalman_destroy(kalman)
    return zs, accs, m_filt, P_filt


if __name__ == "__main__":
    save_path = os.path.join(os.path.dirname(__file__), '..', 'results', 'exp_reference_driver')
    os.makedirs(save_path, exist_ok=True)

    zs, accs, m_filt, P_filt = run()
    for z, (pos, speed) in zip(zs, m_filt):
        print(f"{z:f} {pos:f} {speed:f}")

    np.savetxt(os.path.join(save_path, 'output.txt'),
               np.column_stack([zs, m_filt]), fmt='%f')
    t = LATERAL_CONFIG.dt * np.arange(1, T + 1)
    plot_kalman_1d(t, m_filt, P_filt, zs=zs, title='Reference Driver',
                   save_path=os.path.join(save_path, 'reference_driver.png'))
