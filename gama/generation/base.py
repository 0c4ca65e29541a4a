"""
Generation strategy contract.

A strategy fills a pre-allocated elevation grid in place. Built-in strategies
write values normalized to [0, 1] so that the terrain's altitude factor maps
them to real-world heights.
"""

from abc import ABC, abstractmethod
from typing import Optional
import numpy as np


class GenerationStrategy(ABC):
    """
    Base class for procedural terrain algorithms.

    Subclasses set ``name`` to their registry key and implement
    ``_generate``, which returns a float array with the grid's shape.
    The array is copied into the caller's grid, so the grid is never
    resized or replaced.

    Attributes:
        seed: Optional random seed. When set, every call to ``generate``
            produces the same output for a given grid shape.
    """

    name: str = ""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed

    def generate(self, grid: np.ndarray) -> None:
        """
        Populate ``grid`` with elevation values in place.

        Args:
            grid: 2D float array, already allocated to its final shape.
        """
        if grid.ndim != 2:
            raise ValueError(f"Grid must be 2D, got shape {grid.shape}")
        if grid.size == 0:
            return
        grid[...] = self._generate(grid.shape, self._rng())

    @abstractmethod
    def _generate(self, shape: tuple, rng: np.random.Generator) -> np.ndarray:
        """Compute values for a grid of ``shape``."""

    def _rng(self) -> np.random.Generator:
        # Fresh generator per call so seeded strategies stay reproducible
        return np.random.default_rng(self.seed)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(seed={self.seed!r})"


def normalize(values: np.ndarray) -> np.ndarray:
    """Rescale ``values`` linearly to [0, 1]; constant input maps to zeros."""
    low = values.min()
    span = values.max() - low
    if span <= 0 or not np.isfinite(span):
        return np.zeros_like(values, dtype=np.float64)
    return (values - low) / span
