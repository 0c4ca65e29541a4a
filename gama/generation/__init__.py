"""
Procedural generation strategies and their registry.

This module provides:
    - GenerationStrategy: the contract every algorithm implements
    - Built-in strategies: uniform, random, randomnoise, perlinnoise, diamondsquare
    - StrategyRegistry: case-insensitive name lookup
"""

from gama.generation.base import GenerationStrategy, normalize
from gama.generation.strategies import (
    UniformStrategy,
    RandomStrategy,
    RandomNoiseStrategy,
    PerlinNoiseStrategy,
    DiamondSquareStrategy,
    perlin_noise_2d,
)
from gama.generation.registry import (
    StrategyRegistry,
    default_registry,
    resolve_strategy,
    register_strategy,
    available_strategies,
)

__all__ = [
    # Contract
    "GenerationStrategy",
    "normalize",
    # Strategies
    "UniformStrategy",
    "RandomStrategy",
    "RandomNoiseStrategy",
    "PerlinNoiseStrategy",
    "DiamondSquareStrategy",
    "perlin_noise_2d",
    # Registry
    "StrategyRegistry",
    "default_registry",
    "resolve_strategy",
    "register_strategy",
    "available_strategies",
]
