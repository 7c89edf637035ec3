"""
Topology mutation operators.

These operators change a candidate's structure without breaking the
matrix chain:
- Range change: grow or shrink the number of inputs read
- Layer insertion: split one layer into two
- Layer removal: merge two adjacent layers into one

Rates are percentages (0-100). Every operator works on copies and leaves
its arguments untouched.
"""

from typing import Tuple
import numpy as np

from ..core.matrix import generate_matrix, reshape_columns
from .candidate import Candidate, generate_candidate_id


def roll(rate: float, rng: np.random.Generator) -> bool:
    """Return True with probability rate percent."""
    return rng.random() * 100 < rate


# =============================================================================
# Range Mutation
# =============================================================================

def change_range(
    candidate: Candidate,
    max_range: int,
    rng: np.random.Generator,
) -> Candidate:
    """
    Grow or shrink the number of input dimensions a candidate reads.

    Shrinks when the range is already at max_range, or when it is above 1
    and a coin flip says so; grows otherwise. The first layer gains or
    loses the row of the newest input so its row count stays at
    input_range + 1. The bias row is always kept last.

    Args:
        candidate: Candidate to mutate (not modified)
        max_range: Input dimension D of the dataset
        rng: Random generator

    Returns:
        Mutated copy
    """
    child = candidate.copy()
    if max_range <= 1:
        return child

    first = child.weights[0]
    shrink = child.input_range >= max_range or (
        child.input_range > 1 and rng.random() < 0.5
    )

    if shrink:
        child.weights[0] = np.delete(first, child.input_range - 1, axis=0)
        child.input_range -= 1
    else:
        new_row = generate_matrix(1, first.shape[1], rng)
        child.weights[0] = np.insert(first, child.input_range, new_row, axis=0)
        child.input_range += 1

    return child


# =============================================================================
# Layer Mutations
# =============================================================================

def add_layer(
    matrix: np.ndarray,
    max_width: int,
    rng: np.random.Generator,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split an n x m layer into an n x p layer and a p x m layer.

    The new width p is drawn uniformly from [1, max_width]. The first half
    is the original layer with each row padded or trimmed to p values; the
    second half is fresh random weights mapping p back to m.

    Example:
        3 x 1 layer, p = 4  ->  3 x 4 layer, then 4 x 1 layer

    Returns:
        Tuple of (first, second)
    """
    if max_width < 1:
        raise ValueError(f"max_width must be at least 1, got {max_width}")
    m = matrix.shape[1]
    p = int(rng.integers(1, max_width + 1))
    first = reshape_columns(matrix, p, rng)
    second = generate_matrix(p, m, rng)
    return first, second


def remove_layer(
    first: np.ndarray,
    second: np.ndarray,
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Merge an n x m layer and an m x p layer into a single n x p layer.

    The rows of the first layer are padded or trimmed to p values; the
    second layer is discarded.
    """
    if first.shape[1] != second.shape[0]:
        raise ValueError(
            f"Layers of shapes {first.shape} and {second.shape} are not adjacent"
        )
    return reshape_columns(first, second.shape[1], rng)


# =============================================================================
# Candidate Mutation
# =============================================================================

def mutate_candidate(
    candidate: Candidate,
    mutation_rate: float,
    max_range: int,
    max_width: int,
    rng: np.random.Generator,
    generation: int = 0,
) -> Candidate:
    """
    Apply one round of structural mutation to a copy of a candidate.

    Order:
    1. Range roll: on a hit, change_range.
    2. One left-to-right pass over the layers. Each position is rolled
       once: below half the rate the layer is merged into its predecessor
       (never for the first layer), otherwise below the rate it is split
       in two. The second half of a split is not revisited in the same
       pass.

    Args:
        candidate: Parent candidate (not modified)
        mutation_rate: Current mutation rate in percent
        max_range: Input dimension D of the dataset
        max_width: Upper bound for the width of an inserted layer
        rng: Random generator
        generation: Generation number for the child

    Returns:
        New unevaluated candidate
    """
    child = candidate.copy()

    if roll(mutation_rate, rng):
        child = change_range(child, max_range, rng)

    weights = child.weights
    i = 0
    while i < len(weights):
        layer_roll = rng.random() * 100
        if layer_roll < mutation_rate:
            # Lower half of a hit merges, upper half splits
            if i > 0 and layer_roll < mutation_rate / 2:
                merged = remove_layer(weights[i - 1], weights[i], rng)
                weights[i - 1:i + 1] = [merged]
                continue
            first, second = add_layer(weights[i], max_width, rng)
            weights[i:i + 1] = [first, second]
            i += 2
            continue
        i += 1

    return Candidate(
        input_range=child.input_range,
        weights=weights,
        candidate_id=generate_candidate_id(generation, 'mut'),
        generation=generation,
        parent=candidate.candidate_id,
    )
