"""Visualization tools for evolution runs."""

from .plots import plot_error_trajectory, plot_topology, save_figure

__all__ = [
    'plot_error_trajectory',
    'plot_topology',
    'save_figure',
]
