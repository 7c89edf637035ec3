"""
Matrix primitives for evolved predictors.

Every weight layer is a 2D float array of shape (rows, cols). Rows line up
with the values flowing into the layer and columns with the values flowing
out, so a vector of length `rows` times the layer gives a vector of length
`cols`.

The row operators (pad_row, trim_row) are what let the mutation operators
change a layer's width while keeping it chained to its neighbours.
"""

import numpy as np
from typing import Optional, Sequence, Union

ArrayLike = Union[np.ndarray, Sequence[float]]

# Shared generator used when callers do not pass their own
_default_rng = np.random.default_rng()


class DimensionMismatchError(ValueError):
    """Raised when a vector and a matrix cannot be multiplied."""


def _resolve_rng(rng: Optional[np.random.Generator]) -> np.random.Generator:
    return rng if rng is not None else _default_rng


def generate_matrix(
    rows: int,
    cols: int,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """
    Generate a rows x cols matrix of uniform random values in [0, 1).

    Args:
        rows: Number of rows (values flowing in)
        cols: Number of columns (values flowing out)
        rng: Random generator (module default if omitted)

    Returns:
        New float array of shape (rows, cols)
    """
    if rows < 1 or cols < 1:
        raise ValueError(f"Matrix shape must be positive, got ({rows}, {cols})")
    return _resolve_rng(rng).random((rows, cols))


def pad_row(
    row: ArrayLike,
    count: int,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """
    Return a copy of `row` with `count` random values inserted.

    Each value is inserted at an independently chosen position of the
    growing row (the end included). The input is not modified.
    """
    if count < 0:
        raise ValueError(f"Cannot pad a row by a negative count ({count})")
    rng = _resolve_rng(rng)
    padded = np.array(row, dtype=float)
    for _ in range(count):
        index = int(rng.integers(0, len(padded) + 1))
        padded = np.insert(padded, index, rng.random())
    return padded


def trim_row(
    row: ArrayLike,
    count: int,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """
    Return a copy of `row` with `count` randomly chosen elements removed.

    A row is never trimmed to nothing: `count` must be smaller than the
    row length.
    """
    trimmed = np.array(row, dtype=float)
    if count < 0:
        raise ValueError(f"Cannot trim a row by a negative count ({count})")
    if count >= len(trimmed):
        raise ValueError(
            f"Cannot trim {count} elements from a row of length {len(trimmed)}"
        )
    rng = _resolve_rng(rng)
    for _ in range(count):
        index = int(rng.integers(0, len(trimmed)))
        trimmed = np.delete(trimmed, index)
    return trimmed


def reshape_columns(
    matrix: np.ndarray,
    width: int,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """
    Pad or trim every row of `matrix` so it ends up `width` columns wide.

    Rows are reshaped independently, so padded values and removed
    positions differ from row to row.
    """
    matrix = np.asarray(matrix, dtype=float)
    current = matrix.shape[1]
    if width == current:
        return matrix.copy()
    if width > current:
        rows = [pad_row(row, width - current, rng) for row in matrix]
    else:
        rows = [trim_row(row, current - width, rng) for row in matrix]
    return np.vstack(rows)


def multiply(a: ArrayLike, b: ArrayLike) -> np.ndarray:
    """
    Multiply vector `a` (length n) by matrix `b` (n x m).

    Element j of the result is sum_k a[k] * b[k][j]. Neither argument is
    modified.

    Raises:
        DimensionMismatchError: if len(a) differs from the rows of b
    """
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if b.ndim != 2 or a.ndim != 1 or a.shape[0] != b.shape[0]:
        raise DimensionMismatchError(
            f"Cannot multiply vector of shape {a.shape} by matrix of shape {b.shape}"
        )
    return a @ b
