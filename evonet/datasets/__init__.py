"""Labeled datasets for the evolutionary search."""

from .base import Dataset, Sample
from .sensor import load_sensor_samples, classify_axis
from .toy import (
    constant_pair,
    linear_sum,
    threshold,
    DATASETS,
    get_dataset,
    list_datasets,
)

__all__ = [
    'Dataset',
    'Sample',
    'load_sensor_samples',
    'classify_axis',
    'constant_pair',
    'linear_sum',
    'threshold',
    'DATASETS',
    'get_dataset',
    'list_datasets',
]
