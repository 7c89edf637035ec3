#!/usr/bin/env python3
"""
Quick Start - Minimal example of the evolutionary search.

Evolves a predictor for a toy dataset whose label is the sum of its two
leading features.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from evonet.datasets.toy import get_dataset
from evonet.evolution import EvolutionEngine, EvolutionConfig

print("evonet - Quick Start")
print("="*40)

dataset = get_dataset('linear_sum', seed=0)
print(f"Dataset: linear_sum ({len(dataset)} samples, {dataset.input_dim} inputs)")

engine = EvolutionEngine(EvolutionConfig(population_size=50, survivor_count=10), seed=0)
engine.add_data(dataset)

print("\nEvolving...")
result = engine.train(target_error=0.1, max_generations=200)

print(f"\n{result.summary()}")
best = result.best
print(f"\nPrediction for {list(dataset.inputs[0])}: {best.predict(dataset.inputs[0]):.3f} "
      f"(label {dataset.outputs[0]:.0f})")
print("\nTry a larger max_generations or a different max_layer_width to experiment!")
