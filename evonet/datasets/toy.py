"""
Toy datasets for trying out the evolutionary search.

These datasets are designed to:
1. Run in seconds
2. Have a known best achievable error
3. Exercise the input range (only some leading dimensions matter)
"""

import numpy as np
from typing import Dict, Optional

from .base import Dataset


def constant_pair() -> Dataset:
    """
    Two identical inputs with different labels.

    No predictor can do better than a mean absolute error of 0.5, and any
    predictor rounding to 0 or 1 achieves it.
    """
    return Dataset(
        inputs=np.array([[1, 2, 3], [1, 2, 3]]),
        outputs=np.array([0, 1]),
    )


def linear_sum(
    n_samples: int = 50,
    n_features: int = 6,
    n_relevant: int = 2,
    max_value: int = 5,
    seed: Optional[int] = None,
) -> Dataset:
    """
    Label is the sum of the first n_relevant features.

    The remaining features are noise, so a candidate reading only the
    leading n_relevant inputs can reach zero error.

    Args:
        n_samples: Number of samples
        n_features: Input dimension
        n_relevant: Leading features that define the label
        max_value: Features are integers in [0, max_value)
        seed: Random seed
    """
    if not 1 <= n_relevant <= n_features:
        raise ValueError(f"n_relevant must be in [1, {n_features}], got {n_relevant}")
    rng = np.random.default_rng(seed)
    X = rng.integers(0, max_value, size=(n_samples, n_features)).astype(float)
    y = X[:, :n_relevant].sum(axis=1)
    return Dataset(inputs=X, outputs=y)


def threshold(
    n_samples: int = 60,
    n_features: int = 4,
    seed: Optional[int] = None,
) -> Dataset:
    """
    Binary label: 1 when the first feature exceeds 0.5.

    Features are uniform in [0, 1).
    """
    rng = np.random.default_rng(seed)
    X = rng.random((n_samples, n_features))
    y = (X[:, 0] > 0.5).astype(float)
    return Dataset(inputs=X, outputs=y)


# Registry of available datasets
DATASETS = {
    'constant_pair': {
        'function': constant_pair,
        'description': 'Identical inputs, labels 0 and 1 - best error 0.5',
        'best_error': 0.5,
        'default_params': {},
    },
    'linear_sum': {
        'function': linear_sum,
        'description': 'Label is the sum of the two leading features',
        'best_error': 0.0,
        'default_params': {'n_samples': 50, 'n_features': 6, 'n_relevant': 2},
    },
    'threshold': {
        'function': threshold,
        'description': 'Label is whether the first feature exceeds 0.5',
        'best_error': 0.0,
        'default_params': {'n_samples': 60, 'n_features': 4},
    },
}


def get_dataset(name: str, **kwargs) -> Dataset:
    """
    Get a dataset by name.

    Args:
        name: Dataset name
        **kwargs: Override default parameters
    """
    if name not in DATASETS:
        available = ', '.join(DATASETS.keys())
        raise ValueError(f"Unknown dataset '{name}'. Available: {available}")

    dataset_info = DATASETS[name]
    params = dataset_info['default_params'].copy()
    params.update(kwargs)

    return dataset_info['function'](**params)


def list_datasets() -> Dict[str, Dict]:
    """List all available datasets with their metadata."""
    return {
        name: {k: v for k, v in info.items() if k != 'function'}
        for name, info in DATASETS.items()
    }
