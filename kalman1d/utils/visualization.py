"""
Visualization functions for 1-D Kalman filter results.
"""
import os

import numpy as np
import matplotlib.pyplot as plt

STATE_LABELS = ('Position', 'Speed')


def plot_kalman_1d(t, m_filt, P_filt, zs=None, xs=None, save_path=None,
                   title="Kalman Filter", n_sigma=2.0):
    """
    Plot filtered position and speed with uncertainty bands.

    Parameters
    ----------
    t : ndarray [T]
        Time array
    m_filt : ndarray [T, 2]
        Filtered states [pos, speed]
    P_filt : ndarray [T, 2, 2]
        Filtered covariances
    zs : ndarray [T], optional
        Measured positions, drawn on the position panel
    xs : ndarray [T, 2], optional
        True states
    save_path : str, optional
        Path to save figure
    title : str
        Plot title
    n_sigma : float
        Width of the uncertainty band in standard deviations
    """
    fig, axes = plt.subplots(2, 1, figsize=(12, 8), sharex=True)

    for i, ax in enumerate(axes):
        std = np.sqrt(P_filt[:, i, i])
        if i == 0 and zs is not None:
            ax.plot(t, zs, 'k.', markersize=2, alpha=0.4, label='Measurement')
        if xs is not None:
            ax.plot(t, xs[:, i], 'k-', linewidth=2, alpha=0.8, label='True State')
        ax.plot(t, m_filt[:, i], 'b--', linewidth=1.5, label='Filter Mean')
        ax.fill_between(t, m_filt[:, i] - n_sigma * std, m_filt[:, i] + n_sigma * std,
                        alpha=0.2, color='blue', label=f'+/-{n_sigma:g}sigma')
        ax.set_ylabel(STATE_LABELS[i])
        ax.set_title(f'{title} - {STATE_LABELS[i]}')
        ax.legend()
        ax.grid(True, alpha=0.3)
    axes[-1].set_xlabel('Time [s]')

    plt.tight_layout()
    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"  Saved: {os.path.basename(save_path)}")
    plt.close(fig)


def plot_measurement_model_comparison(t, results, reference, save_path=None):
    """
    Plot the deviation of each filter variant from a reference variant.

    Parameters
    ----------
    t : ndarray [T]
        Time array
    results : dict
        Variant name -> (m_filt, P_filt, cond_nums)
    reference : str
        Key in results that the others are compared against
    save_path : str, optional
        Path to save figure
    """
    m_ref = results[reference][0]
    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    for name, (m, _, cond) in results.items():
        if name == reference:
            continue
        dev = np.abs(m - m_ref).max(axis=1) + 1e-20
        axes[0].semilogy(t, dev, lw=1.5, label=name)
        axes[1].semilogy(t, cond, lw=1.5, label=name)
    axes[1].semilogy(t, results[reference][2], 'k--', lw=1.5, label=reference)

    axes[0].set_ylabel(f'max |x - x_{{{reference}}}|')
    axes[0].set_title('Deviation From Reference')
    axes[1].set_ylabel('Condition Number of P')
    axes[1].set_title('Condition Number Over Time')
    for ax in axes:
        ax.set_xlabel('Time [s]')
        ax.legend()
        ax.grid(True, alpha=0.3)

    plt.suptitle('Measurement Model and Solver Comparison', fontsize=14, fontweight='bold')
    plt.tight_layout()
    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
