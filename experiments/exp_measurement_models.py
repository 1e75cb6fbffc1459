"""Compare measurement models, gain solvers and covariance updates."""
import os
import sys
import time
from dataclasses import dataclass

import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from kalman1d import KalmanConfig, KalmanState, kalman_filter
from kalman1d.ssm import kinematic_ssm
from kalman1d.utils import ExperimentLogger, compute_rmse, plot_measurement_model_comparison

# (measurement_model, solver, joseph)
VARIANTS = {
    'full/inv': ('full', 'inv', False),
    'full/lu': ('full', 'lu', False),
    'full/cholesky': ('full', 'cholesky', False),
    'scalar/inv': ('scalar', 'inv', False),
    'scalar/joseph': ('scalar', 'inv', True),
}
REFERENCE = 'full/inv'


@dataclass
class RunSettings:
    dt: float = 0.03
    process_var: float = 0.0001
    measurement_var: float = 1.01
    T: int = 1000
    seed: int = 42

    @property
    def config(self):
        return KalmanConfig(self.dt, self.process_var, self.measurement_var)

    def as_dict(self):
        return {'dt': self.dt, 'process_var': self.process_var,
                'measurement_var': self.measurement_var, 'T': self.T, 'seed': self.seed}


def run_variant(settings, xs, zs, accs, init, model, solver, joseph):
    """Run one variant, returning (result dict, arrays or None)."""
    result = {'failed': False}
    try:
        t0 = time.perf_counter()
        m, P, cond = kalman_filter(settings.config, init, zs, accs,
                                   measurement_model=model, solver=solver, joseph=joseph)
        result['runtime_ms'] = (time.perf_counter() - t0) * 1000
    except np.linalg.LinAlgError as e:
        result['failed'], result['reason'] = True, str(e)
        return result, None

    result.update({
        'rmse_pos': compute_rmse(m[:, 0], xs[:, 0]),
        'rmse_speed': compute_rmse(m[:, 1], xs[:, 1]),
        'max_cond': np.max(cond),
    })
    return result, (m, P, cond)


def run_all(settings, logger):
    """Run every variant on one simulated trajectory."""
    init = KalmanState(pos=0.0, speed=0.0)
    rng = np.random.default_rng(settings.seed)
    xs, zs, accs = kinematic_ssm(settings.config, init, settings.T, rng)
    config = settings.as_dict()

    results, arrays = {}, {}
    for name, (model, solver, joseph) in VARIANTS.items():
        if logger.result_exists(name, **config):
            cached = logger.load_result(name, **config)
            arrays[name] = (cached['m_filt'], cached['P_filt'], cached['cond_nums'])
            results[name] = {
                'failed': False,
                'rmse_pos': compute_rmse(cached['m_filt'][:, 0], xs[:, 0]),
                'rmse_speed': compute_rmse(cached['m_filt'][:, 1], xs[:, 1]),
                'max_cond': np.max(cached['cond_nums']),
                'runtime_ms': 0.0,
            }
            continue

        res, out = run_variant(settings, xs, zs, accs, init, model, solver, joseph)
        results[name] = res
        if out is None:
            logger.save_result(name, config, {}, status='failed', notes=res['reason'])
            continue
        arrays[name] = out
        m, P, cond = out
        logger.save_result(name, config, {'m_filt': m, 'P_filt': P, 'cond_nums': cond},
                           metrics=res, runtime_ms=res['runtime_ms'])
    return xs, results, arrays


def print_table(results, title):
    print(title)
    print(f"{'Variant':<16} {'RMSE pos':<12} {'RMSE speed':<12} {'max cond':<12} {'Status'}")
    for name, r in results.items():
        if r['failed']:
            print(f"{name:<16} {'---':<12} {'---':<12} {'---':<12} FAIL ({r['reason']})")
        else:
            print(f"{name:<16} {r['rmse_pos']:<12.6f} {r['rmse_speed']:<12.6f} "
                  f"{r['max_cond']:<12.2f} OK")


if __name__ == "__main__":
    results_root = os.path.join(os.path.dirname(__file__), '..', 'results')
    logger = ExperimentLogger('exp_measurement_models', results_root=results_root)
    logger.create_timestamped_run_dir()

    settings = RunSettings()
    xs, results, arrays = run_all(settings, logger)
    print_table(results, "TABLE 1: Lateral configuration")
    if REFERENCE in arrays:
        t = settings.dt * np.arange(1, settings.T + 1)
        plot_measurement_model_comparison(
            t, arrays, REFERENCE,
            save_path=os.path.join(logger.get_figures_dir(), 'model_comparison.png'))

    # Noiseless sensor: every variant snaps position to the measurement
    exact = RunSettings(measurement_var=0.0)
    _, results_exact, _ = run_all(exact, logger)
    print_table(results_exact, "TABLE 2: measurement_var = 0")
