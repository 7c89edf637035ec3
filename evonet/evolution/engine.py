"""
Main evolutionary search engine.

Orchestrates the generational loop:
1. Regenerate the population (fresh, or survivors plus offspring)
2. Evaluate every candidate and sort best first
3. Adapt the mutation rate from the best error
4. Repeat until the best error reaches the target
"""

from dataclasses import dataclass, asdict
from typing import List, Dict, Any, Optional, Callable, Sequence, Union
import time
import numpy as np

from .candidate import Candidate
from .fitness import OVERFLOW_PENALTY, evaluate_population
from .population import regenerate_population, best_candidate
from .history import EvolutionHistory, GenerationStats
from ..datasets.base import Dataset, SampleLike


@dataclass(frozen=True)
class EvolutionConfig:
    """Configuration for an evolution run. Rates are percentages."""
    # Population parameters
    population_size: int = 100
    survivor_count: int = 20

    # Mutation rate schedule
    initial_mutation_rate: float = 10.0
    mutation_rate_scale: float = 10.0

    # Architecture constraints
    max_layer_width: int = 8

    # Evaluation
    overflow_penalty: float = OVERFLOW_PENALTY
    activation: Optional[str] = None

    # Error reported before the first generation
    initial_error: float = 100.0

    def __post_init__(self):
        if self.population_size < 1:
            raise ValueError(f"population_size must be at least 1, got {self.population_size}")
        if self.survivor_count < 1:
            raise ValueError(f"survivor_count must be at least 1, got {self.survivor_count}")
        if self.survivor_count > self.population_size:
            raise ValueError(
                f"survivor_count ({self.survivor_count}) cannot exceed "
                f"population_size ({self.population_size})"
            )
        if self.max_layer_width < 1:
            raise ValueError(f"max_layer_width must be at least 1, got {self.max_layer_width}")
        if self.initial_mutation_rate < 0 or self.mutation_rate_scale < 0:
            raise ValueError("Mutation rates must be non-negative")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class EvolutionResult:
    """Results from an evolution run."""
    best: Optional[Candidate]
    generations_completed: int
    converged: bool
    target_error: float
    final_mutation_rate: float
    history: EvolutionHistory
    runtime_seconds: float

    @property
    def best_error(self) -> Optional[float]:
        return self.best.error if self.best is not None else None

    def summary(self) -> str:
        """Generate summary string."""
        lines = [
            f"Generations: {self.generations_completed}",
            f"Converged: {self.converged} (target error {self.target_error})",
            f"Final mutation rate: {self.final_mutation_rate:.4f}",
            f"Runtime: {self.runtime_seconds:.1f}s",
        ]
        if self.best is not None:
            lines.append(f"Best error: {self.best.error:.6f}")
            lines.append(f"Best architecture: {self.best.architecture_string}")
        return '\n'.join(lines)


class EvolutionEngine:
    """
    Evolves topology-free predictors against a fixed labeled dataset.

    Every source of randomness goes through self.rng, so passing a seed
    makes a run reproducible.
    """

    def __init__(
        self,
        config: Optional[EvolutionConfig] = None,
        seed: Optional[int] = None,
    ):
        self.config = config or EvolutionConfig()
        self.rng = np.random.default_rng(seed)

        self.dataset: Optional[Dataset] = None
        self.population: List[Candidate] = []
        self.history = EvolutionHistory()
        self.generation = 0

    @property
    def max_range(self) -> int:
        """Input dimension D of the attached dataset."""
        if self.dataset is None:
            raise RuntimeError("No dataset attached; call add_data() first")
        return self.dataset.input_dim

    @property
    def best(self) -> Optional[Candidate]:
        return best_candidate(self.population)

    def add_data(self, data: Union[Dataset, Sequence[SampleLike]]) -> None:
        """
        Attach the labeled dataset.

        Args:
            data: A Dataset, or (input, output) samples of equal input length
        """
        if not isinstance(data, Dataset):
            data = Dataset.from_samples(data)
        self.dataset = data

    def run_generation(self, mutation_rate: float) -> GenerationStats:
        """
        Execute one generation.

        Args:
            mutation_rate: Rate (percent) used to build this generation

        Returns:
            GenerationStats, including the next generation's mutation rate
        """
        max_range = self.max_range
        self.generation += 1

        # 1. Regenerate
        self.population = regenerate_population(
            self.population,
            self.config,
            mutation_rate=mutation_rate,
            max_range=max_range,
            generation=self.generation,
            rng=self.rng,
        )

        # 2. Evaluate and sort
        overflowed = evaluate_population(
            self.population,
            self.dataset,
            overflow_penalty=self.config.overflow_penalty,
            activation=self.config.activation,
        )

        # 3. Adapt the mutation rate
        next_rate = self.population[0].error * self.config.mutation_rate_scale

        return self.history.record_generation(
            generation=self.generation,
            population=self.population,
            mutation_rate=mutation_rate,
            next_mutation_rate=next_rate,
            overflowed=overflowed,
        )

    def train(
        self,
        target_error: float,
        max_generations: Optional[int] = None,
        progress_callback: Optional[Callable[[int, GenerationStats], None]] = None,
    ) -> EvolutionResult:
        """
        Run generations until the best error is at most target_error.

        Args:
            target_error: Stopping threshold for the best mean absolute error
            max_generations: Optional cap on generations run by this call;
                without it the loop runs until the target is reached
            progress_callback: Optional callback(generation, stats)

        Returns:
            EvolutionResult with the best candidate found
        """
        if self.dataset is None:
            raise RuntimeError("No dataset attached; call add_data() first")

        start_time = time.time()
        latest = self.history.latest
        if latest is not None and self.population:
            error = latest.best_error
            mutation_rate = latest.next_mutation_rate
        else:
            error = self.config.initial_error
            mutation_rate = self.config.initial_mutation_rate

        generations_run = 0
        # A fresh engine always runs at least one generation
        while self.best is None or error > target_error:
            if max_generations is not None and generations_run >= max_generations:
                break

            stats = self.run_generation(mutation_rate)
            generations_run += 1
            error = stats.best_error
            mutation_rate = stats.next_mutation_rate

            if progress_callback:
                progress_callback(self.generation, stats)

        return EvolutionResult(
            best=self.best,
            generations_completed=self.generation,
            converged=self.best is not None and error <= target_error,
            target_error=target_error,
            final_mutation_rate=mutation_rate,
            history=self.history,
            runtime_seconds=time.time() - start_time,
        )
