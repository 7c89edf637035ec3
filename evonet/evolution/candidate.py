"""
Candidate representation for topology-free evolutionary search.

A Candidate is one evolvable predictor: an input range (how many leading
input dimensions it reads) and an ordered chain of weight matrices.

Structural invariant:
- the first layer has input_range + 1 rows (inputs plus bias)
- each layer has as many columns as the next layer has rows
- the last layer has exactly one column
"""

from dataclasses import dataclass
from typing import List, Dict, Optional, Any, Sequence
import uuid
import numpy as np

from ..core.matrix import multiply, generate_matrix
from ..core.activations import get_activation


# Constant appended to every sliced input
BIAS = 1.0


class StructuralCollapseError(RuntimeError):
    """Raised when propagation does not end in a single output value."""


def generate_candidate_id(generation: int = 0, prefix: str = '') -> str:
    """Generate a unique candidate identifier."""
    short_uuid = uuid.uuid4().hex[:8]
    if prefix:
        return f"{prefix}_gen{generation}_{short_uuid}"
    return f"gen{generation}_{short_uuid}"


def check_chain(weights: Sequence[np.ndarray], input_range: int) -> None:
    """
    Validate the matrix-chain invariant.

    Raises:
        ValueError: describing the first broken link
    """
    if input_range < 1:
        raise ValueError(f"Input range must be at least 1, got {input_range}")
    if len(weights) == 0:
        raise ValueError("A candidate needs at least one layer")
    for i, layer in enumerate(weights):
        if np.ndim(layer) != 2:
            raise ValueError(f"Layer {i} is not a matrix (ndim={np.ndim(layer)})")
    if weights[0].shape[0] != input_range + 1:
        raise ValueError(
            f"First layer has {weights[0].shape[0]} rows, "
            f"expected input_range + 1 = {input_range + 1}"
        )
    for i in range(len(weights) - 1):
        if weights[i].shape[1] != weights[i + 1].shape[0]:
            raise ValueError(
                f"Layer {i} has {weights[i].shape[1]} columns but layer {i + 1} "
                f"has {weights[i + 1].shape[0]} rows"
            )
    if weights[-1].shape[1] != 1:
        raise ValueError(
            f"Last layer must have 1 column, got {weights[-1].shape[1]}"
        )


def propagate(
    inputs: Sequence[float],
    input_range: int,
    weights: Sequence[np.ndarray],
    activation: Optional[str] = None,
) -> float:
    """
    Push an input vector through a weight chain and return the prediction.

    The first `input_range` values are taken, a bias of 1 is appended and
    the vector is multiplied through every layer in order. Values pass
    through unchanged between layers unless `activation` names a function
    from evonet.core.activations; it is never applied after the last layer.

    Raises:
        ValueError: if `inputs` is shorter than `input_range`
        DimensionMismatchError: if two layers do not chain
        StructuralCollapseError: if the chain does not end in one value
    """
    if len(inputs) < input_range:
        raise ValueError(
            f"Input has {len(inputs)} values, candidate reads {input_range}"
        )
    values = np.append(np.asarray(inputs[:input_range], dtype=float), BIAS)
    act = get_activation(activation) if activation else None

    last = len(weights) - 1
    for i, layer in enumerate(weights):
        values = multiply(values, layer)
        if act is not None and i < last:
            values = act(values)

    if len(values) != 1:
        raise StructuralCollapseError(
            f"Network collapsed into {len(values)} output values"
        )
    return float(values[0])


@dataclass(eq=False)
class Candidate:
    """
    One evolvable predictor.

    Attributes:
        input_range: Number of leading input dimensions consulted
        weights: Ordered weight matrices, first layer (input_range + 1) rows
        error: Mean absolute error after evaluation (None until evaluated)
        overflowed: True when the last evaluation hit the overflow penalty
        candidate_id: Unique identifier
        generation: Generation this candidate was created in
        parent: Identifier of the candidate it was mutated from
    """
    input_range: int
    weights: List[np.ndarray]
    error: Optional[float] = None
    overflowed: bool = False
    candidate_id: str = ''
    generation: int = 0
    parent: Optional[str] = None

    def __post_init__(self):
        self.weights = [np.array(w, dtype=float) for w in self.weights]
        check_chain(self.weights, self.input_range)
        if not self.candidate_id:
            self.candidate_id = generate_candidate_id(self.generation)

    @property
    def depth(self) -> int:
        """Number of weight layers."""
        return len(self.weights)

    @property
    def layer_shapes(self) -> List[tuple]:
        return [tuple(w.shape) for w in self.weights]

    @property
    def total_params(self) -> int:
        return int(sum(w.size for w in self.weights))

    @property
    def architecture_string(self) -> str:
        """Human-readable topology, e.g. 'r3[4-2-1]' (range then layer widths)."""
        widths = '-'.join(str(w.shape[1]) for w in self.weights)
        return f"r{self.input_range}[{widths}]"

    def predict(self, inputs: Sequence[float], activation: Optional[str] = None) -> float:
        """Forward-propagate one input vector."""
        return propagate(inputs, self.input_range, self.weights, activation)

    def copy(self) -> 'Candidate':
        """Create a deep copy; no weight array is shared with the original."""
        return Candidate(
            input_range=self.input_range,
            weights=[w.copy() for w in self.weights],
            error=self.error,
            overflowed=self.overflowed,
            candidate_id=self.candidate_id,
            generation=self.generation,
            parent=self.parent,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary for reporting."""
        return {
            'candidate_id': self.candidate_id,
            'generation': self.generation,
            'parent': self.parent,
            'input_range': self.input_range,
            'weights': [w.tolist() for w in self.weights],
            'error': self.error,
            'overflowed': self.overflowed,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Candidate):
            return NotImplemented
        return (
            self.input_range == other.input_range
            and self.error == other.error
            and self.overflowed == other.overflowed
            and self.candidate_id == other.candidate_id
            and self.generation == other.generation
            and self.parent == other.parent
            and len(self.weights) == len(other.weights)
            and all(np.array_equal(a, b) for a, b in zip(self.weights, other.weights))
        )

    def __repr__(self) -> str:
        error_str = f", error={self.error:.4f}" if self.error is not None else ""
        return (
            f"Candidate(id={self.candidate_id}, arch={self.architecture_string}, "
            f"params={self.total_params}, gen={self.generation}{error_str})"
        )


def create_random_candidate(
    max_range: int,
    generation: int = 0,
    rng: Optional[np.random.Generator] = None,
    prefix: str = 'rand',
) -> Candidate:
    """
    Create a minimal random candidate.

    The input range is drawn uniformly from [1, max_range] and the chain is
    a single (input_range + 1) x 1 layer.
    """
    if max_range < 1:
        raise ValueError(f"max_range must be at least 1, got {max_range}")
    rng = rng if rng is not None else np.random.default_rng()
    input_range = int(rng.integers(1, max_range + 1))
    return Candidate(
        input_range=input_range,
        weights=[generate_matrix(input_range + 1, 1, rng)],
        candidate_id=generate_candidate_id(generation, prefix),
        generation=generation,
    )
