"""
Fitness evaluation for evolved predictors.

Fitness is the mean absolute error between the rounded prediction and the
label over the whole dataset. Lower is better.

A candidate whose running error overflows is not dropped: it receives a
large but finite penalty and an overflow flag, and sorts behind every
candidate with a finite error.
"""

import math
from typing import List, Optional, Tuple, TYPE_CHECKING
import numpy as np

from .candidate import propagate

if TYPE_CHECKING:
    from .candidate import Candidate
    from ..datasets.base import Dataset


# Per-sample penalty for candidates whose error overflows
OVERFLOW_PENALTY = 1e9


def round_half_up(value: float) -> float:
    """Round to the nearest integer, halves rounded up."""
    return float(np.floor(value + 0.5))


def mean_error(
    candidate: 'Candidate',
    dataset: 'Dataset',
    activation: Optional[str] = None,
) -> Optional[float]:
    """
    Mean absolute error of the rounded predictions.

    Returns:
        The error, or None when a prediction or the running total stops
        being finite
    """
    total = 0.0
    with np.errstate(over='ignore', invalid='ignore'):
        for x, y in zip(dataset.inputs, dataset.outputs):
            prediction = propagate(x, candidate.input_range, candidate.weights, activation)
            if not math.isfinite(prediction):
                return None
            total += abs(round_half_up(prediction) - y)
            if not math.isfinite(total):
                return None
    return total / len(dataset)


def evaluate(
    candidate: 'Candidate',
    dataset: 'Dataset',
    overflow_penalty: float = OVERFLOW_PENALTY,
    activation: Optional[str] = None,
) -> float:
    """
    Evaluate a candidate against every sample of a dataset.

    Args:
        candidate: Candidate to score
        dataset: Labeled samples
        overflow_penalty: Per-sample penalty when the error stops being finite
        activation: Optional activation between layers

    Returns:
        Mean absolute error, or overflow_penalty * len(dataset) on overflow
    """
    error = mean_error(candidate, dataset, activation)
    if error is None:
        return overflow_penalty * len(dataset)
    return error


def sort_key(candidate: 'Candidate') -> Tuple[bool, float, int]:
    """Order finite candidates first, then by error, then by smaller input range."""
    error = candidate.error if candidate.error is not None else math.inf
    return (candidate.overflowed, error, candidate.input_range)


def evaluate_population(
    population: List['Candidate'],
    dataset: 'Dataset',
    overflow_penalty: float = OVERFLOW_PENALTY,
    activation: Optional[str] = None,
) -> int:
    """
    Score every candidate and sort the population in place.

    Overflowing candidates are flagged and sort behind every finite one,
    whatever the finite errors are.

    Returns:
        Number of candidates that hit the overflow penalty
    """
    overflowed = 0
    for candidate in population:
        error = mean_error(candidate, dataset, activation)
        candidate.overflowed = error is None
        if candidate.overflowed:
            candidate.error = overflow_penalty * len(dataset)
            overflowed += 1
        else:
            candidate.error = error
    population.sort(key=sort_key)
    return overflowed
