"""Numeric primitives shared by the evolutionary engine."""

from .matrix import (
    DimensionMismatchError,
    generate_matrix,
    pad_row,
    trim_row,
    reshape_columns,
    multiply,
)
from .activations import ACTIVATIONS, get_activation

__all__ = [
    'DimensionMismatchError',
    'generate_matrix',
    'pad_row',
    'trim_row',
    'reshape_columns',
    'multiply',
    'ACTIVATIONS',
    'get_activation',
]
