"""
Activation functions available between evolved layers.

Propagation is linear by default: raw weighted sums pass straight through.
The functions here can be switched on per run to squash or rectify the
values leaving each hidden layer.
"""

import numpy as np
from typing import Callable, Dict


def linear(x: np.ndarray) -> np.ndarray:
    """Identity activation - no nonlinearity."""
    return x


def relu(x: np.ndarray) -> np.ndarray:
    """Rectified Linear Unit."""
    return np.maximum(0, x)


def sigmoid(x: np.ndarray) -> np.ndarray:
    """Sigmoid - smooth, bounded (0, 1)."""
    # Clip to avoid overflow
    x = np.clip(x, -500, 500)
    return 1 / (1 + np.exp(-x))


def tanh(x: np.ndarray) -> np.ndarray:
    return np.tanh(x)


# Registry of all activation functions
ACTIVATIONS: Dict[str, Callable[[np.ndarray], np.ndarray]] = {
    'linear': linear,
    'relu': relu,
    'sigmoid': sigmoid,
    'tanh': tanh,
}


def get_activation(name: str) -> Callable[[np.ndarray], np.ndarray]:
    """Get an activation function by name."""
    if name not in ACTIVATIONS:
        available = ', '.join(ACTIVATIONS.keys())
        raise ValueError(f"Unknown activation '{name}'. Available: {available}")
    return ACTIVATIONS[name]
