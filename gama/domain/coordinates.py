"""
Grid/world coordinate conversions for a Terrain.

Grid coordinates are (row, col) with row 0 at the top (max y) of the
covered area. World coordinates are (x, y) in the terrain's projection
units. Integer grid coordinates refer to cell centers.
"""

from typing import Tuple, Union
import numpy as np

from gama.domain.terrain import Terrain

Coordinate = Union[float, np.ndarray]


def grid_to_world(
    row: Coordinate,
    col: Coordinate,
    terrain: Terrain,
) -> Tuple[Coordinate, Coordinate]:
    """
    Convert grid coordinates (row, col) to world coordinates (x, y).

    Args:
        row: Row index (or array of row indices)
        col: Column index (or array of column indices)
        terrain: Terrain providing the geometry

    Returns:
        x: X coordinate(s) in projection units
        y: Y coordinate(s) in projection units

    Example:
        >>> terrain = Terrain(0, 0, 100, 100, 1.0)
        >>> grid_to_world(0, 0, terrain)
        (0.5, 99.5)
    """
    min_x, _, _, max_y = terrain.bounds
    cell = terrain.cell_size

    x = min_x + (col + 0.5) * cell
    y = max_y - (row + 0.5) * cell

    return x, y


def world_to_grid(
    x: Coordinate,
    y: Coordinate,
    terrain: Terrain,
    clamp: bool = False,
) -> Tuple[Coordinate, Coordinate]:
    """
    Convert world coordinates (x, y) to fractional grid coordinates (row, col).

    Args:
        x: X coordinate(s) in projection units
        y: Y coordinate(s) in projection units
        terrain: Terrain providing the geometry
        clamp: If True, clamp results to the valid cell-center range

    Returns:
        row: Row index (or array of row indices)
        col: Column index (or array of column indices)
    """
    min_x, _, _, max_y = terrain.bounds
    cell = terrain.cell_size

    col = (x - min_x) / cell - 0.5
    row = (max_y - y) / cell - 0.5

    if clamp:
        height, width = terrain.shape
        row = np.clip(row, 0, height - 1)
        col = np.clip(col, 0, width - 1)

    return row, col


def cell_centers(terrain: Terrain) -> Tuple[np.ndarray, np.ndarray]:
    """
    World coordinates of every cell center.

    Returns:
        xs: (cols,) X coordinates, west to east
        ys: (rows,) Y coordinates, north to south
    """
    rows, cols = terrain.shape
    xs, _ = grid_to_world(0, np.arange(cols, dtype=np.float64), terrain)
    _, ys = grid_to_world(np.arange(rows, dtype=np.float64), 0, terrain)
    return xs, ys
