"""
gama - procedural digital elevation model (DEM) generation.

This package produces synthetic terrain grids parameterized by extent,
cell size, projection and a pluggable generation algorithm.

Main modules:
    - gama.generation: generation strategies and the strategy registry
    - gama.domain: the Terrain aggregate and coordinate conversions
    - gama.io: extent readers and raster writers (ASCII grid, GeoTIFF)
    - gama.config: configuration management
    - gama.visualization: plotting utilities

Quick start:
    >>> from gama import Terrain
    >>>
    >>> terrain = Terrain(0, 0, 1000, 1000, 10, generation_method="diamondsquare", seed=42)
    >>> terrain.set_altitude_factor(1500.0)
    >>> grid = terrain.generate()
    >>> terrain.to_geotiff("terrain.tif")
"""

__version__ = "0.1.0"

# Errors
from gama.errors import (
    GamaError,
    UnknownStrategyError,
    UnsupportedFileKindError,
    InvalidExtentError,
    GridShapeError,
)

# Domain exports
from gama.domain.terrain import Terrain, DEFAULT_PROJECTION

# Generation exports
from gama.generation.base import GenerationStrategy
from gama.generation.registry import (
    StrategyRegistry,
    resolve_strategy,
    register_strategy,
    available_strategies,
)

# IO exports
from gama.io.readers import FileKind

# Config exports
from gama.config.settings import GamaConfig, load_config

__all__ = [
    # Version
    "__version__",
    # Errors
    "GamaError",
    "UnknownStrategyError",
    "UnsupportedFileKindError",
    "InvalidExtentError",
    "GridShapeError",
    # Domain
    "Terrain",
    "DEFAULT_PROJECTION",
    # Generation
    "GenerationStrategy",
    "StrategyRegistry",
    "resolve_strategy",
    "register_strategy",
    "available_strategies",
    # IO
    "FileKind",
    # Config
    "GamaConfig",
    "load_config",
]
