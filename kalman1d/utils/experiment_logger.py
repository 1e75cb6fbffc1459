"""
Experiment Logger - Cache filter runs and keep a CSV log of them.

Each (variant, configuration) pair is cached as a compressed .npz file, so an
experiment script can mix cached and fresh runs.
"""
import os
import csv
import hashlib
import numpy as np
from datetime import datetime
from typing import Dict, List, Optional, Any


class ExperimentLogger:
    """
    Logger for filter runs keyed by variant name and configuration.

    Usage:
        logger = ExperimentLogger('measurement_models', results_root='results')
        config = {'dt': 0.03, 'process_var': 1e-4, 'measurement_var': 1.01,
                  'T': 1000, 'seed': 1}

        if logger.result_exists('full/inv', **config):
            result = logger.load_result('full/inv', **config)
        else:
            m_filt, P_filt, cond = kalman_filter(...)
            logger.save_result('full/inv', config, {'m_filt': m_filt, 'P_filt': P_filt})
    """

    LOG_COLUMNS = [
        'timestamp', 'experiment_name', 'variant',
        'dt', 'process_var', 'measurement_var', 'T', 'seed',
        'rmse_pos', 'rmse_speed', 'max_cond', 'runtime_ms',
        'cache_file', 'status', 'notes'
    ]

    # Config keys used for cache matching
    CACHE_KEYS = ['dt', 'process_var', 'measurement_var', 'T', 'seed']

    def __init__(self, experiment_name: str, results_root: Optional[str] = None):
        """
        Parameters
        ----------
        experiment_name : str
            Logs are stored in {results_root}/{experiment_name}/
        results_root : str, optional
            Root directory for results (default: ./results)
        """
        if results_root is None:
            results_root = os.path.join(os.getcwd(), 'results')

        self.experiment_name = experiment_name
        self.log_dir = os.path.join(results_root, experiment_name)
        self.log_file = os.path.join(self.log_dir, "run_log.csv")
        self.cache_dir = os.path.join(self.log_dir, "cache")

        os.makedirs(self.cache_dir, exist_ok=True)
        if not os.path.exists(self.log_file):
            with open(self.log_file, 'w', newline='') as f:
                csv.DictWriter(f, fieldnames=self.LOG_COLUMNS).writeheader()

        self._current_run_dir: Optional[str] = None

    def _config_hash(self, variant: str, config: Dict) -> str:
        key_parts = [variant]
        for k in self.CACHE_KEYS:
            if k in config:
                key_parts.append(f"{k}={config[k]}")
        return hashlib.md5("_".join(key_parts).encode()).hexdigest()[:12]

    def get_cache_path(self, variant: str, config: Dict) -> str:
        """Full path of the cache file for a variant + config."""
        safe_name = variant.replace('/', '_').replace(' ', '_')
        filename = f"{safe_name}_{self._config_hash(variant, config)}.npz"
        return os.path.join(self.cache_dir, filename)

    def result_exists(self, variant: str, **config) -> bool:
        return os.path.exists(self.get_cache_path(variant, config))

    def save_result(
        self,
        variant: str,
        config: Dict[str, Any],
        data: Dict[str, Any],
        metrics: Optional[Dict[str, float]] = None,
        runtime_ms: float = 0.0,
        status: str = 'completed',
        notes: str = ''
    ) -> str:
        """
        Save a run to the cache and append a row to the CSV log.

        Parameters
        ----------
        variant : str
            Filter variant name (e.g., 'full/inv', 'scalar/joseph')
        config : dict
            Run configuration
        data : dict
            Arrays to cache, e.g. {'m_filt': ..., 'P_filt': ...}.
            Empty for failed runs, which are logged but not cached
        metrics : dict, optional
            {rmse_pos, rmse_speed, max_cond}
        runtime_ms : float
            Filter runtime in milliseconds
        status : str
            'completed' or 'failed'
        notes : str
            Optional notes

        Returns
        -------
        str
            Path to saved cache file
        """
        cache_path = self.get_cache_path(variant, config)
        if data:
            np.savez_compressed(cache_path, **data)

        metrics = metrics or {}
        row = {
            'timestamp': datetime.now().strftime('%Y-%m-%d_%H-%M-%S'),
            'experiment_name': self.experiment_name,
            'variant': variant,
            'cache_file': os.path.basename(cache_path) if data else '',
            'runtime_ms': f"{runtime_ms:.3f}",
            'status': status,
            'notes': notes,
        }
        for k in self.CACHE_KEYS:
            row[k] = config.get(k, '')
        for k in ('rmse_pos', 'rmse_speed', 'max_cond'):
            row[k] = f"{metrics[k]:.6g}" if metrics.get(k) is not None else ''

        with open(self.log_file, 'a', newline='') as f:
            csv.DictWriter(f, fieldnames=self.LOG_COLUMNS).writerow(row)

        if data:
            print(f"  Cached {variant}: {os.path.basename(cache_path)}")
        return cache_path

    def load_result(self, variant: str, **config) -> Optional[Dict[str, np.ndarray]]:
        """Load a cached run, or None if it does not exist."""
        cache_path = self.get_cache_path(variant, config)
        if not os.path.exists(cache_path):
            return None
        with np.load(cache_path) as data:
            return {k: data[k] for k in data.files}

    def read_log(self) -> List[Dict[str, str]]:
        """Rows of the CSV log, oldest first."""
        with open(self.log_file, newline='') as f:
            return list(csv.DictReader(f))

    def create_timestamped_run_dir(self, timestamp: Optional[str] = None) -> str:
        """Create {log_dir}/{timestamp}/ for plots and reports."""
        if timestamp is None:
            timestamp = datetime.now().strftime('%Y-%m-%d_%H-%M-%S')
        self._current_run_dir = os.path.join(self.log_dir, timestamp)
        os.makedirs(self._current_run_dir, exist_ok=True)
        return self._current_run_dir

    def get_figures_dir(self) -> str:
        """Figures directory of the current run."""
        if self._current_run_dir is None:
            raise RuntimeError("Call create_timestamped_run_dir() first")
        figs_dir = os.path.join(self._current_run_dir, 'figures')
        os.makedirs(figs_dir, exist_ok=True)
        return figs_dir

    def clear_cache(self) -> int:
        """Remove all cached results; returns the number of files removed."""
        count = 0
        for f in os.listdir(self.cache_dir):
            if f.endswith('.npz'):
                os.remove(os.path.join(self.cache_dir, f))
                count += 1
        return count
