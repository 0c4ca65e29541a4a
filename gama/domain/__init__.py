"""
Terrain domain: the DEM aggregate, its geometry and its errors.

This module provides:
    - Terrain: extent, cell size, projection and the elevation grid
    - Coordinate conversions between grid cells and projection units
    - The GamaError hierarchy
"""

from gama.errors import (
    GamaError,
    UnknownStrategyError,
    UnsupportedFileKindError,
    InvalidExtentError,
    GridShapeError,
)
from gama.domain.terrain import (
    Terrain,
    grid_shape,
    DEFAULT_PROJECTION,
    DEFAULT_GENERATION_METHOD,
    DEFAULT_FILE_COLUMNS,
)
from gama.domain.coordinates import (
    grid_to_world,
    world_to_grid,
    cell_centers,
)

__all__ = [
    # Errors
    "GamaError",
    "UnknownStrategyError",
    "UnsupportedFileKindError",
    "InvalidExtentError",
    "GridShapeError",
    # Terrain
    "Terrain",
    "grid_shape",
    "DEFAULT_PROJECTION",
    "DEFAULT_GENERATION_METHOD",
    "DEFAULT_FILE_COLUMNS",
    # Coordinates
    "grid_to_world",
    "world_to_grid",
    "cell_centers",
]
