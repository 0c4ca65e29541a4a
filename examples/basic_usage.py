#!/usr/bin/env python3
"""
Basic usage example for the gama DEM generator.

This script demonstrates the core functionality of the gama package:
1. Building terrains from geometry, a method name, or a grid size
2. Switching generation methods and scaling altitudes
3. Registering a custom generation strategy
4. Exporting to ASCII grid and GeoTIFF
"""

import sys
import os

# Add gama package to path (for development)
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

import numpy as np
from pathlib import Path

from gama import (
    Terrain,
    GenerationStrategy,
    register_strategy,
    available_strategies,
)


class RidgeStrategy(GenerationStrategy):
    """Single east-west ridge through the middle of the grid."""

    name = "ridge"

    def _generate(self, shape, rng):
        rows, cols = shape
        y = np.linspace(-1.0, 1.0, rows)[:, None]
        return np.broadcast_to(1.0 - np.abs(y), (rows, cols)).copy()


def example_construction():
    """Example: the different ways to build a terrain."""
    print("=" * 60)
    print("CONSTRUCTION")
    print("=" * 60)

    terrain = Terrain(650000, 6860000, 660000, 6865000, 25.0, projection="EPSG:2154")
    print(f"   From geometry: {terrain.shape} cells of {terrain.cell_size} m")

    terrain = Terrain.from_method("DiamondSquare", seed=1)
    print(f"   From method: {terrain.shape}, {terrain.projection}")

    terrain = Terrain.from_shape("randomnoise", 120, 300)
    print(f"   From shape: {terrain.shape}")


def example_generation():
    """Example: generate, switch methods, scale altitudes."""
    print("=" * 60)
    print("GENERATION")
    print("=" * 60)

    terrain = Terrain.from_shape("perlinnoise", 200, 200, seed=7)
    terrain.set_altitude_factor(1800.0)
    grid = terrain.generate()
    print(f"   perlinnoise: [{grid.min():.1f}, {grid.max():.1f}] m")

    if not terrain.set_generation_method("voronoi"):
        print(f"   'voronoi' unknown, still using {terrain.generation_method}")

    terrain.set_generation_method("diamondsquare", roughness=0.45)
    grid = terrain.generate()
    print(f"   diamondsquare: mean altitude {grid.mean():.1f} m")


def example_custom_strategy():
    """Example: plug in a new algorithm."""
    print("=" * 60)
    print("CUSTOM STRATEGY")
    print("=" * 60)

    register_strategy("ridge", RidgeStrategy)
    print(f"   Available: {', '.join(available_strategies())}")

    terrain = Terrain.from_shape("Ridge", 65, 65)
    terrain.set_altitude_factor(500.0)
    grid = terrain.generate()
    print(f"   Ridge crest: {grid.max():.1f} m at row {int(np.argmax(grid[:, 0]))}")


def example_export(output_dir: Path):
    """Example: write the terrain to raster files."""
    print("=" * 60)
    print("EXPORT")
    print("=" * 60)

    output_dir.mkdir(parents=True, exist_ok=True)
    terrain = Terrain(0, 0, 5000, 5000, 10.0, projection="EPSG:32631",
                      generation_method="diamondsquare", seed=3, altitude_factor=2500.0)
    terrain.generate()

    print(f"   {terrain.to_asc(output_dir / 'example.asc')}")
    print(f"   {terrain.to_geotiff(output_dir / 'example.tif')}")


if __name__ == '__main__':
    example_construction()
    example_generation()
    example_custom_strategy()
    example_export(Path('outputs'))
