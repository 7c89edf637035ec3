"""
Accelerometer CSV loader.

Recordings are stored as one CSV file per axis, somewhere below a directory
that stands for one label (e.g. 'shots' -> 1, 'non-shots' -> 0). The axis is
encoded in the file name with an 'X__AXIS', 'Y__AXIS' or 'Z__AXIS' token.
Each line's first field is an integer reading.

Two ways to shape samples:
- per file: the readings of one file, with the axis code inserted at
  index 1, form one sample
- grouped: the X, Y and Z files of one recording (same name once the axis
  token is removed) are concatenated into one sample
"""

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .base import Dataset, Sample

PathLike = Union[str, Path]

# File name token -> axis code
AXIS_TOKENS = {
    'X__AXIS': 1,
    'Y__AXIS': 2,
    'Z__AXIS': 3,
}


def classify_axis(filename: str) -> int:
    """Axis code for a file name, 0 if it carries no axis token."""
    for token, code in AXIS_TOKENS.items():
        if token in filename:
            return code
    return 0


def list_csv_files(directory: PathLike) -> List[Path]:
    """All .csv files below a directory, recursively, in sorted order."""
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Data directory not found: {directory}")
    return sorted(p for p in directory.rglob('*.csv') if p.is_file())


def read_readings(path: PathLike) -> List[int]:
    """Read the first field of every non-blank line as an integer."""
    readings = []
    with open(path, 'r', newline='') as f:
        for row in csv.reader(f):
            if not row or not row[0].strip():
                continue
            readings.append(int(float(row[0])))
    return readings


@dataclass
class AxisRecord:
    """The three axis files of one recording."""
    x: Optional[List[int]] = None
    y: Optional[List[int]] = None
    z: Optional[List[int]] = None

    def set_axis(self, code: int, readings: List[int]) -> None:
        setattr(self, 'xyz'[code - 1], readings)

    @property
    def complete(self) -> bool:
        return self.x is not None and self.y is not None and self.z is not None

    def concatenated(self) -> List[int]:
        return list(self.x) + list(self.y) + list(self.z)


def recording_key(path: Path) -> str:
    """Identify a recording by its path with the axis token removed."""
    name = path.name
    for token in AXIS_TOKENS:
        name = name.replace(token, '')
    return str(path.with_name(name))


def _load_per_file(directory: PathLike, label: float) -> List[Sample]:
    samples = []
    for path in list_csv_files(directory):
        readings = read_readings(path)
        readings.insert(1, classify_axis(path.name))
        samples.append(Sample(readings, label))
    return samples


def _load_grouped(directory: PathLike, label: float) -> List[Sample]:
    records: Dict[str, AxisRecord] = {}
    for path in list_csv_files(directory):
        code = classify_axis(path.name)
        if code == 0:
            continue
        records.setdefault(recording_key(path), AxisRecord()).set_axis(
            code, read_readings(path)
        )

    incomplete = [key for key, record in records.items() if not record.complete]
    if incomplete:
        raise ValueError(
            f"Recordings missing an axis file: {', '.join(sorted(incomplete))}"
        )
    return [Sample(records[key].concatenated(), label) for key in sorted(records)]


def load_sensor_samples(
    groups: Sequence[Tuple[PathLike, float]],
    group_axes: bool = False,
) -> Dataset:
    """
    Build a labeled dataset from directories of axis CSV files.

    Args:
        groups: (directory, label) pairs
        group_axes: Concatenate the X, Y and Z files of each recording
            instead of turning every file into its own sample

    Returns:
        Dataset with one sample per file (or per recording)

    Raises:
        FileNotFoundError: if a directory does not exist
        ValueError: if a grouped recording lacks an axis, or if samples
            end up with different lengths
    """
    samples: List[Sample] = []
    for directory, label in groups:
        if group_axes:
            samples.extend(_load_grouped(directory, label))
        else:
            samples.extend(_load_per_file(directory, label))
    return Dataset.from_samples(samples)
