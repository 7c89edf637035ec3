"""
Command line entry point.

Usage:
    python -m evonet --toy linear_sum --target-error 0.1
    python -m evonet --data recordings/shots=1 --data recordings/rest=0

Options:
    --data DIR=LABEL     Directory of axis CSV files and its label (repeatable)
    --group-axes         Combine the X/Y/Z files of a recording into one sample
    --toy NAME           Use a toy dataset instead of CSV directories
    --target-error E     Stop once the best mean absolute error is <= E
    --population N       Population size (default: 100)
    --survivors N        Survivors kept per generation (default: 20)
    --mutation-rate R    Initial mutation rate in percent (default: 10)
    --max-width N        Widest inserted layer (default: 8)
    --max-generations N  Give up after N generations (default: no limit)
    --activation NAME    Activation between layers (default: none)
    --seed N             Random seed for reproducibility
    --plot PATH          Save error and topology plots with this PNG prefix
"""

import argparse
import sys
from typing import List, Optional, Tuple

from .core.activations import ACTIVATIONS
from .datasets import DATASETS, get_dataset, load_sensor_samples
from .evolution import EvolutionConfig, EvolutionEngine, GenerationStats


def parse_group(value: str) -> Tuple[str, float]:
    """Parse a DIR=LABEL argument."""
    directory, sep, label = value.rpartition('=')
    if not sep or not directory:
        raise argparse.ArgumentTypeError(f"Expected DIR=LABEL, got '{value}'")
    try:
        return directory, float(label)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Label must be numeric, got '{label}'")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='evonet',
        description='Evolve a topology-free predictor for a labeled dataset',
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        '--data', type=parse_group, action='append',
        help='Directory of axis CSV files and its label, as DIR=LABEL'
    )
    source.add_argument(
        '--toy', choices=sorted(DATASETS),
        help='Toy dataset to evolve against'
    )
    parser.add_argument(
        '--group-axes', action='store_true',
        help='Combine the X/Y/Z files of each recording into one sample'
    )
    parser.add_argument(
        '--target-error', type=float, default=0.0001,
        help='Stop once the best error is at most this (default: 0.0001)'
    )
    parser.add_argument(
        '--population', type=int, default=100,
        help='Population size (default: 100)'
    )
    parser.add_argument(
        '--survivors', type=int, default=20,
        help='Survivors kept per generation (default: 20)'
    )
    parser.add_argument(
        '--mutation-rate', type=float, default=10.0,
        help='Initial mutation rate in percent (default: 10)'
    )
    parser.add_argument(
        '--max-width', type=int, default=8,
        help='Widest layer an insertion may create (default: 8)'
    )
    parser.add_argument(
        '--max-generations', type=int, default=None,
        help='Give up after this many generations (default: no limit)'
    )
    parser.add_argument(
        '--activation', choices=sorted(ACTIVATIONS), default=None,
        help='Activation applied between layers (default: none)'
    )
    parser.add_argument(
        '--seed', type=int, default=None,
        help='Random seed for reproducibility'
    )
    parser.add_argument(
        '--plot', type=str, default=None,
        help='Save plots as PREFIX_error.png and PREFIX_topology.png'
    )
    return parser.parse_args(argv)


def print_banner():
    print("=" * 70)
    print("   EVONET - Topology-Free Evolutionary Search")
    print("=" * 70)


def print_config(config: EvolutionConfig, n_samples: int, input_dim: int, args):
    print("\nConfiguration:")
    print(f"   Samples:            {n_samples}")
    print(f"   Input dimension:    {input_dim}")
    print(f"   Target error:       {args.target_error}")
    print(f"   Population size:    {config.population_size}")
    print(f"   Survivors:          {config.survivor_count}")
    print(f"   Mutation rate:      {config.initial_mutation_rate}%")
    print(f"   Max layer width:    {config.max_layer_width}")
    print(f"   Activation:         {config.activation or 'none'}")
    if args.max_generations is not None:
        print(f"   Max generations:    {args.max_generations}")


def progress_callback(generation: int, stats: GenerationStats):
    """Print progress during evolution."""
    print(
        f"\r   Gen {generation:5d} | "
        f"Best error: {stats.best_error:.6f} | "
        f"Arch: {stats.best_architecture:20s} | "
        f"Rate: {stats.mutation_rate:7.3f}%",
        end='', flush=True
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    print_banner()

    if args.toy:
        params = DATASETS[args.toy]['default_params']
        dataset = get_dataset(args.toy, seed=args.seed) if params else get_dataset(args.toy)
    else:
        dataset = load_sensor_samples(args.data, group_axes=args.group_axes)

    config = EvolutionConfig(
        population_size=args.population,
        survivor_count=args.survivors,
        initial_mutation_rate=args.mutation_rate,
        max_layer_width=args.max_width,
        activation=args.activation,
    )

    print_config(config, len(dataset), dataset.input_dim, args)

    engine = EvolutionEngine(config, seed=args.seed)
    engine.add_data(dataset)

    print("\n   Starting evolution...")
    try:
        result = engine.train(
            args.target_error,
            max_generations=args.max_generations,
            progress_callback=progress_callback,
        )
    except KeyboardInterrupt:
        print("\n   Interrupted.")
        return 130
    print()  # New line after progress

    print("\n   Results:")
    print("   --------")
    for line in result.summary().splitlines():
        print(f"   {line}")

    best = result.best
    if best is not None:
        print(f"\n   Best model (range {best.input_range}):")
        for i, layer in enumerate(best.weights):
            print(f"   Layer {i} {layer.shape[0]}x{layer.shape[1]}:")
            for row in layer:
                print("      " + ' '.join(f"{v:9.4f}" for v in row))

    if args.plot:
        from .visualization.plots import plot_error_trajectory, plot_topology, save_figure
        error_path = save_figure(plot_error_trajectory(result.history), f"{args.plot}_error.png")
        topo_path = save_figure(plot_topology(result.history), f"{args.plot}_topology.png")
        print(f"\n   Plots saved to: {error_path}, {topo_path}")

    return 0 if result.converged else 1


if __name__ == '__main__':
    sys.exit(main())
