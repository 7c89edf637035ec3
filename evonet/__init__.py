"""
evonet - evolutionary search for topology-free predictors.

Usage:
    python -m evonet --help
"""

__version__ = '0.1.0'
