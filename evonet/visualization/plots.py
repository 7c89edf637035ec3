"""
Matplotlib-based plots of an evolution run.

These functions create static plots from an EvolutionHistory.
"""

from pathlib import Path
from typing import Optional, Tuple, Union

# Matplotlib imports with non-GUI backend
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from ..evolution.history import EvolutionHistory


def plot_error_trajectory(
    history: EvolutionHistory,
    figsize: Tuple[int, int] = (10, 4),
    title: Optional[str] = None,
) -> plt.Figure:
    """
    Plot best and mean error per generation, next to the mutation rate.

    Args:
        history: Recorded run history
        figsize: Figure size
        title: Plot title

    Returns:
        matplotlib Figure
    """
    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=figsize)

    generations = [g.generation for g in history.generations]
    best = [g.best_error for g in history.generations]
    mean = [g.mean_error for g in history.generations]
    rates = [g.mutation_rate for g in history.generations]

    # Error plot
    ax1.plot(generations, best, 'b-', linewidth=2, label='Best')
    ax1.plot(generations, mean, 'r--', linewidth=1, alpha=0.7, label='Mean')
    ax1.set_xlabel('Generation')
    ax1.set_ylabel('Mean absolute error')
    ax1.set_title('Error')
    ax1.set_yscale('symlog')
    ax1.grid(True, alpha=0.3)
    ax1.legend()

    # Mutation rate plot
    ax2.plot(generations, rates, 'g-', linewidth=2)
    ax2.set_xlabel('Generation')
    ax2.set_ylabel('Mutation rate (%)')
    ax2.set_title('Mutation Rate')
    ax2.grid(True, alpha=0.3)

    if title:
        fig.suptitle(title)

    plt.tight_layout()
    return fig


def plot_topology(
    history: EvolutionHistory,
    figsize: Tuple[int, int] = (10, 4),
    title: Optional[str] = None,
) -> plt.Figure:
    """Plot mean depth, mean input range and topology diversity per generation."""
    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=figsize)

    generations = [g.generation for g in history.generations]

    ax1.plot(generations, [g.mean_depth for g in history.generations],
             'b-', linewidth=2, label='Mean depth')
    ax1.plot(generations, [g.mean_range for g in history.generations],
             'm-', linewidth=2, label='Mean range')
    ax1.set_xlabel('Generation')
    ax1.set_title('Topology')
    ax1.grid(True, alpha=0.3)
    ax1.legend()

    ax2.plot(generations, [g.unique_topologies for g in history.generations],
             'k-', linewidth=2)
    ax2.set_xlabel('Generation')
    ax2.set_ylabel('Unique topologies')
    ax2.set_title('Diversity')
    ax2.grid(True, alpha=0.3)

    if title:
        fig.suptitle(title)

    plt.tight_layout()
    return fig


def save_figure(fig: plt.Figure, path: Union[str, Path]) -> Path:
    """Save a figure as PNG and close it."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, format='png', dpi=100, bbox_inches='tight')
    plt.close(fig)
    return path
