"""
Population management for evolutionary search.

Handles:
- Initial population creation (fresh random candidates)
- Survivor culling and rank-skewed parent choice
- Refilling the population by mutation or fresh generation
"""

from typing import List, Dict, Any, Optional, TYPE_CHECKING
import numpy as np

from .candidate import Candidate, create_random_candidate
from .operators import mutate_candidate, roll

if TYPE_CHECKING:
    from .engine import EvolutionConfig


def create_initial_population(
    population_size: int,
    max_range: int,
    rng: np.random.Generator,
    generation: int = 0,
) -> List[Candidate]:
    """
    Create a population of minimal random candidates.

    Args:
        population_size: Number of candidates
        max_range: Input dimension D of the dataset
        rng: Random generator
        generation: Generation number for the new candidates

    Returns:
        List of unevaluated candidates
    """
    return [
        create_random_candidate(max_range, generation, rng)
        for _ in range(population_size)
    ]


def select_survivor_index(n_survivors: int, rng: np.random.Generator) -> int:
    """
    Pick a survivor index, strongly favouring the best ranked ones.

    The index is floor(U1 * U2 * n_survivors) for two independent uniforms,
    so low indices (fitter survivors) are drawn far more often.
    """
    index = int(rng.random() * rng.random() * n_survivors)
    return min(index, n_survivors - 1)


def regenerate_population(
    population: List[Candidate],
    config: 'EvolutionConfig',
    mutation_rate: float,
    max_range: int,
    generation: int,
    rng: np.random.Generator,
) -> List[Candidate]:
    """
    Build the next generation's population.

    An empty population is filled with fresh random candidates. Otherwise
    the first survivor_count candidates (the population is expected sorted
    best first) are kept and the rest is refilled: with probability
    mutation_rate percent a fresh random candidate, else a mutated copy of
    a survivor picked by select_survivor_index.

    Returns:
        New list; survivors are carried over unmodified
    """
    if not population:
        return create_initial_population(
            config.population_size, max_range, rng, generation
        )

    survivors = population[:config.survivor_count]
    new_population = list(survivors)

    while len(new_population) < config.population_size:
        if roll(mutation_rate, rng):
            new_population.append(
                create_random_candidate(max_range, generation, rng)
            )
        else:
            parent = survivors[select_survivor_index(len(survivors), rng)]
            new_population.append(
                mutate_candidate(
                    parent,
                    mutation_rate=mutation_rate,
                    max_range=max_range,
                    max_width=config.max_layer_width,
                    rng=rng,
                    generation=generation,
                )
            )

    return new_population


def get_population_stats(population: List[Candidate]) -> Dict[str, Any]:
    """Get summary statistics for a population."""
    if not population:
        return {'size': 0}

    depths = [c.depth for c in population]
    ranges = [c.input_range for c in population]
    errors = [c.error for c in population if c.error is not None]
    topologies = {
        (c.input_range, tuple(c.layer_shapes)) for c in population
    }

    stats: Dict[str, Any] = {
        'size': len(population),
        'depth_range': (min(depths), max(depths)),
        'mean_depth': float(np.mean(depths)),
        'range_range': (min(ranges), max(ranges)),
        'mean_range': float(np.mean(ranges)),
        'mean_params': float(np.mean([c.total_params for c in population])),
        'unique_topologies': len(topologies),
        'evaluated': len(errors),
    }
    if errors:
        stats['best_error'] = min(errors)
        stats['worst_error'] = max(errors)
        stats['mean_error'] = float(np.mean(errors))

    return stats


def best_candidate(population: List[Candidate]) -> Optional[Candidate]:
    """Return the first candidate of a sorted population, if any."""
    return population[0] if population else None
