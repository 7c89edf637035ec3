"""
Generation history for evolutionary runs.

Records per-generation statistics for reporting and plotting. Nothing here
is written to disk.
"""

from dataclasses import dataclass, asdict
from typing import List, Dict, Any, Optional
from datetime import datetime
import numpy as np

from .candidate import Candidate


@dataclass
class GenerationStats:
    """Statistics for a single generation."""
    generation: int
    best_error: float
    mean_error: float
    worst_error: float
    best_range: int
    best_architecture: str
    mutation_rate: float
    next_mutation_rate: float
    population_size: int
    unique_topologies: int
    mean_depth: float
    mean_range: float
    mean_params: float
    overflowed: int
    timestamp: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class EvolutionHistory:
    """
    Tracks evolution progress over generations.

    Records per-generation statistics for analysis and visualization.
    """

    def __init__(self):
        self.generations: List[GenerationStats] = []
        self.best_candidate_per_gen: List[Dict[str, Any]] = []
        self.error_trajectory: List[float] = []
        self.mutation_rate_trajectory: List[float] = []

    def record_generation(
        self,
        generation: int,
        population: List[Candidate],
        mutation_rate: float,
        next_mutation_rate: float,
        overflowed: int = 0,
    ) -> GenerationStats:
        """
        Record statistics for an evaluated, sorted population.

        Args:
            generation: Generation number
            population: Current population, best first
            mutation_rate: Rate used to build this generation
            next_mutation_rate: Rate the next generation will use
            overflowed: Number of candidates scored with the overflow penalty

        Returns:
            GenerationStats for this generation
        """
        if not population:
            raise ValueError("Cannot record an empty population")

        errors = [c.error if c.error is not None else np.inf for c in population]
        best = population[0]
        topologies = {(c.input_range, tuple(c.layer_shapes)) for c in population}

        stats = GenerationStats(
            generation=generation,
            best_error=float(errors[0]),
            mean_error=float(np.mean(errors)),
            worst_error=float(max(errors)),
            best_range=best.input_range,
            best_architecture=best.architecture_string,
            mutation_rate=float(mutation_rate),
            next_mutation_rate=float(next_mutation_rate),
            population_size=len(population),
            unique_topologies=len(topologies),
            mean_depth=float(np.mean([c.depth for c in population])),
            mean_range=float(np.mean([c.input_range for c in population])),
            mean_params=float(np.mean([c.total_params for c in population])),
            overflowed=overflowed,
            timestamp=datetime.now().isoformat(),
        )

        self.generations.append(stats)
        self.best_candidate_per_gen.append({
            'candidate_id': best.candidate_id,
            'input_range': best.input_range,
            'layer_shapes': [list(s) for s in best.layer_shapes],
            'error': best.error,
        })
        self.error_trajectory.append(stats.best_error)
        self.mutation_rate_trajectory.append(stats.mutation_rate)

        return stats

    @property
    def latest(self) -> Optional[GenerationStats]:
        return self.generations[-1] if self.generations else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert history to dictionary for reporting."""
        return {
            'generations': [g.to_dict() for g in self.generations],
            'best_candidate_per_gen': self.best_candidate_per_gen,
            'error_trajectory': self.error_trajectory,
            'mutation_rate_trajectory': self.mutation_rate_trajectory,
        }
