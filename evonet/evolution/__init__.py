"""
Evolutionary search for topology-free predictors.

A candidate is an input range plus a chain of weight matrices. The search
mutates the chain's shape (layers inserted, layers merged, inputs added or
dropped) and keeps whatever predicts the labels with the smallest mean
absolute error.

Key components:
- Candidate: Input range and weight chain, with forward propagation
- Operators: Range change, layer insertion and layer removal
- Fitness: Mean absolute error with an overflow penalty
- EvolutionEngine: Generational loop with an adaptive mutation rate

Example usage:
    from evonet.evolution import EvolutionEngine, EvolutionConfig

    engine = EvolutionEngine(EvolutionConfig(population_size=50), seed=0)
    engine.add_data([([1, 2, 3], 0), ([1, 2, 4], 1)])
    result = engine.train(target_error=0.5)

    print(result.summary())
"""

from .candidate import (
    Candidate,
    StructuralCollapseError,
    check_chain,
    create_random_candidate,
    propagate,
)
from .fitness import OVERFLOW_PENALTY, evaluate, evaluate_population, mean_error, sort_key
from .operators import change_range, add_layer, remove_layer, mutate_candidate
from .population import (
    create_initial_population,
    select_survivor_index,
    regenerate_population,
    get_population_stats,
)
from .history import EvolutionHistory, GenerationStats
from .engine import EvolutionEngine, EvolutionConfig, EvolutionResult

__all__ = [
    # Core classes
    'Candidate',
    'EvolutionEngine',
    'EvolutionConfig',
    'EvolutionResult',
    'EvolutionHistory',
    'GenerationStats',
    'StructuralCollapseError',
    # Candidate helpers
    'check_chain',
    'create_random_candidate',
    'propagate',
    # Fitness
    'OVERFLOW_PENALTY',
    'evaluate',
    'evaluate_population',
    'mean_error',
    'sort_key',
    # Operators
    'change_range',
    'add_layer',
    'remove_layer',
    'mutate_candidate',
    # Population
    'create_initial_population',
    'select_survivor_index',
    'regenerate_population',
    'get_population_stats',
]
