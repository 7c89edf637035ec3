"""
Labeled dataset container consumed by the evolutionary engine.

A dataset is an ordered list of samples, each an input vector of fixed
length D and a single numeric label.
"""

from dataclasses import dataclass
from typing import Iterator, List, NamedTuple, Sequence, Tuple, Union
import numpy as np


class Sample(NamedTuple):
    """One labeled sample."""
    input: Sequence[float]
    output: float


SampleLike = Union[Sample, Tuple[Sequence[float], float], dict]


@dataclass
class Dataset:
    """
    Fixed-width labeled samples.

    Attributes:
        inputs: Float array of shape (n_samples, input_dim)
        outputs: Float array of shape (n_samples,)
    """
    inputs: np.ndarray
    outputs: np.ndarray

    def __post_init__(self):
        self.inputs = np.asarray(self.inputs, dtype=float)
        self.outputs = np.asarray(self.outputs, dtype=float).reshape(-1)
        if self.inputs.ndim != 2:
            raise ValueError(f"Inputs must be 2D, got shape {self.inputs.shape}")
        if len(self.inputs) == 0:
            raise ValueError("Dataset must contain at least one sample")
        if self.inputs.shape[1] == 0:
            raise ValueError("Samples must have at least one input dimension")
        if len(self.inputs) != len(self.outputs):
            raise ValueError(
                f"Got {len(self.inputs)} inputs but {len(self.outputs)} outputs"
            )

    @property
    def input_dim(self) -> int:
        """Length D shared by every input vector."""
        return self.inputs.shape[1]

    def __len__(self) -> int:
        return len(self.outputs)

    def __iter__(self) -> Iterator[Sample]:
        for x, y in zip(self.inputs, self.outputs):
            yield Sample(x, float(y))

    @classmethod
    def from_samples(cls, samples: Sequence[SampleLike]) -> 'Dataset':
        """
        Build a dataset from (input, output) pairs.

        Accepts Sample tuples, plain 2-tuples or dicts with 'input' and
        'output' keys. Every input must have the length of the first one.

        Raises:
            ValueError: on an empty list or a sample of a different width
        """
        if len(samples) == 0:
            raise ValueError("Dataset must contain at least one sample")

        inputs: List[List[float]] = []
        outputs: List[float] = []
        for i, sample in enumerate(samples):
            if isinstance(sample, dict):
                x, y = sample['input'], sample['output']
            else:
                x, y = sample
            x = [float(v) for v in x]
            if inputs and len(x) != len(inputs[0]):
                raise ValueError(
                    f"Sample {i} has {len(x)} inputs, expected {len(inputs[0])}"
                )
            inputs.append(x)
            outputs.append(float(y))

        return cls(inputs=np.array(inputs), outputs=np.array(outputs))
