"""
Terrain: a procedurally generated DEM with its georeferencing.

A Terrain owns the grid geometry (extent, cell size, projection), the
elevation grid itself and the generation strategy used to fill it. Grid
dimensions are computed once at construction:

    rows = floor((y_max - y_min) / cell_size)
    cols = floor((x_max - x_min) / cell_size)

The covered area is anchored at the lower-left corner (x_min, y_min).
Row 0 of the grid is its northern edge.
"""

import logging
import math
from pathlib import Path
from typing import Optional, Tuple, Union
import numpy as np

from gama.errors import InvalidExtentError, UnknownStrategyError
from gama.generation.base import GenerationStrategy
from gama.generation.registry import StrategyRegistry, default_registry

logger = logging.getLogger(__name__)

# Pseudo-Mercator, in meters
DEFAULT_PROJECTION = "EPSG:3857"
DEFAULT_GENERATION_METHOD = "perlinnoise"
DEFAULT_SIZE = 256
# Columns used when the cell size is derived from an imported file
DEFAULT_FILE_COLUMNS = 1000

# Absorbs float error such as 1000 / (1000 / 1000) == 999.9999...
_FLOOR_TOLERANCE = 1e-9


def grid_shape(
    x_min: float,
    y_min: float,
    x_max: float,
    y_max: float,
    cell_size: float,
) -> Tuple[int, int]:
    """
    Compute (rows, cols) for an extent and cell size.

    Raises:
        InvalidExtentError: If the cell size is not a positive finite number,
            the extent is not increasing, or the grid would be empty.
    """
    values = (x_min, y_min, x_max, y_max, cell_size)
    if not all(math.isfinite(v) for v in values):
        raise InvalidExtentError(f"Extent and cell size must be finite, got {values}")
    if cell_size <= 0:
        raise InvalidExtentError(f"cell_size must be positive, got {cell_size}")
    if x_max <= x_min or y_max <= y_min:
        raise InvalidExtentError(
            f"Extent must satisfy x_max > x_min and y_max > y_min, "
            f"got ({x_min}, {y_min}, {x_max}, {y_max})"
        )

    rows = int(math.floor((y_max - y_min) / cell_size + _FLOOR_TOLERANCE))
    cols = int(math.floor((x_max - x_min) / cell_size + _FLOOR_TOLERANCE))
    if rows == 0 or cols == 0:
        raise InvalidExtentError(
            f"cell_size {cell_size} is larger than the extent "
            f"({x_max - x_min} x {y_max - y_min})"
        )
    return rows, cols


class Terrain:
    """
    Procedural digital elevation model.

    Args:
        x_min: Minimum X coordinate, in projection units.
        y_min: Minimum Y coordinate.
        x_max: Maximum X coordinate.
        y_max: Maximum Y coordinate.
        cell_size: Edge length of a cell, in the same units as the extent.
        projection: CRS identifier carried as metadata (e.g. "EPSG:4326").
        generation_method: Registered strategy name (case-insensitive).
        altitude_factor: Multiplier applied to the strategy output. Built-in
            strategies produce values in [0, 1], so this is the maximum
            altitude wanted.
        seed: Optional seed forwarded to the strategy.
        registry: Strategy registry to resolve names against.

    Raises:
        UnknownStrategyError: If ``generation_method`` is not registered.
        InvalidExtentError: If the geometry does not describe a non-empty grid.

    Example:
        >>> terrain = Terrain(0, 0, 100, 50, 0.5, generation_method="diamondsquare")
        >>> terrain.set_altitude_factor(1200.0)
        >>> grid = terrain.generate()
        >>> grid.shape
        (100, 200)
    """

    def __init__(
        self,
        x_min: float,
        y_min: float,
        x_max: float,
        y_max: float,
        cell_size: float,
        projection: str = DEFAULT_PROJECTION,
        generation_method: str = DEFAULT_GENERATION_METHOD,
        altitude_factor: float = 1.0,
        seed: Optional[int] = None,
        registry: Optional[StrategyRegistry] = None,
        **strategy_options,
    ):
        self._registry = registry if registry is not None else default_registry

        # Resolve first: an unknown name must fail before anything is allocated
        strategy = self._registry.resolve(generation_method, seed=seed, **strategy_options)
        rows, cols = grid_shape(x_min, y_min, x_max, y_max, cell_size)

        self._x_min = float(x_min)
        self._y_min = float(y_min)
        self._x_max = float(x_max)
        self._y_max = float(y_max)
        self._cell_size = float(cell_size)
        self._projection = projection
        self._altitude_factor = float(altitude_factor)
        self._seed = seed
        self._strategy = strategy
        self._generation_method = generation_method.strip().lower()
        self._grid = np.zeros((rows, cols), dtype=np.float64)

        logger.debug(
            "Allocated %dx%d terrain grid (cell size %g, %s)",
            rows, cols, self._cell_size, self._projection,
        )

    # Alternative constructors ----------------------------------------

    @classmethod
    def from_method(
        cls,
        generation_method: str,
        seed: Optional[int] = None,
        **strategy_options,
    ) -> "Terrain":
        """Square 256 x 256 terrain with unit cells and the default projection."""
        return cls(
            0, 0, DEFAULT_SIZE, DEFAULT_SIZE, 1,
            generation_method=generation_method,
            seed=seed,
            **strategy_options,
        )

    @classmethod
    def from_shape(
        cls,
        generation_method: str,
        nrows: int,
        ncols: int,
        seed: Optional[int] = None,
        **strategy_options,
    ) -> "Terrain":
        """Terrain of ``nrows`` x ``ncols`` unit cells anchored at the origin."""
        return cls(
            0, 0, ncols, nrows, 1,
            generation_method=generation_method,
            seed=seed,
            **strategy_options,
        )

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        kind=None,
        generation_method: str = DEFAULT_GENERATION_METHOD,
        altitude_factor: float = 1.0,
        seed: Optional[int] = None,
        **strategy_options,
    ) -> "Terrain":
        """
        Terrain covering the extent of a geographic file.

        The extent and projection come from the file's metadata. The cell
        size is chosen so the grid has 1000 columns.

        Args:
            path: Raster or vector file.
            kind: FileKind, 'raster', 'vector', the legacy integers
                (1 = raster, 0 = vector) or None to infer from the suffix.
            generation_method: Strategy name.
            altitude_factor: Multiplier applied after generation.
            seed: Optional strategy seed.
            **strategy_options: Forwarded to the strategy constructor.

        Raises:
            UnsupportedFileKindError: If ``kind`` is not recognized.
            FileNotFoundError: If ``path`` does not exist.
        """
        from gama.io.readers import open_reader

        reader = open_reader(path, kind)
        cell_size = (reader.x_max - reader.x_min) / DEFAULT_FILE_COLUMNS
        return cls(
            reader.x_min, reader.y_min, reader.x_max, reader.y_max, cell_size,
            projection=reader.projection_name,
            generation_method=generation_method,
            altitude_factor=altitude_factor,
            seed=seed,
            **strategy_options,
        )

    @classmethod
    def from_config(cls, config) -> "Terrain":
        """Build a terrain from a GamaConfig; a ``seed`` in the options wins."""
        extent = config.extent
        generation = config.generation
        options = {"seed": generation.seed, **generation.options}
        return cls(
            extent.x_min, extent.y_min, extent.x_max, extent.y_max, extent.cell_size,
            projection=extent.projection,
            generation_method=generation.method,
            altitude_factor=generation.altitude_factor,
            **options,
        )

    # Accessors ------------------------------------------------------

    @property
    def grid(self) -> np.ndarray:
        """The live elevation grid (not a copy)."""
        return self._grid

    @property
    def strategy(self) -> GenerationStrategy:
        return self._strategy

    @property
    def generation_method(self) -> str:
        return self._generation_method

    @property
    def x_min(self) -> float:
        return self._x_min

    @property
    def y_min(self) -> float:
        return self._y_min

    @property
    def x_max(self) -> float:
        return self._x_max

    @property
    def y_max(self) -> float:
        return self._y_max

    @property
    def extent(self) -> Tuple[float, float, float, float]:
        """(x_min, y_min, x_max, y_max) as requested at construction."""
        return (self._x_min, self._y_min, self._x_max, self._y_max)

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """
        Area actually covered by the grid.

        Equal to ``extent`` when the extent is a whole number of cells;
        otherwise the right and top edges fall short of x_max and y_max.
        """
        rows, cols = self._grid.shape
        return (
            self._x_min,
            self._y_min,
            self._x_min + cols * self._cell_size,
            self._y_min + rows * self._cell_size,
        )

    @property
    def cell_size(self) -> float:
        return self._cell_size

    @property
    def projection(self) -> str:
        return self._projection

    @property
    def altitude_factor(self) -> float:
        return self._altitude_factor

    @property
    def shape(self) -> Tuple[int, int]:
        return self._grid.shape

    @property
    def nrows(self) -> int:
        return self._grid.shape[0]

    @property
    def ncols(self) -> int:
        return self._grid.shape[1]

    # Mutators -------------------------------------------------------

    def set_altitude_factor(self, altitude_factor: float) -> None:
        """
        Set the multiplier applied to the strategy output on generation.

        No validation is performed; negative factors invert the relief.
        """
        self._altitude_factor = float(altitude_factor)

    def set_generation_method(self, generation_method: str, **strategy_options) -> bool:
        """
        Switch to another generation strategy.

        An unknown name is not fatal here: a warning is logged and the
        current strategy stays active. The terrain's seed is reused unless
        ``seed`` is passed explicitly.

        Returns:
            True if the strategy was replaced, False if the name was unknown.
        """
        options = {"seed": self._seed, **strategy_options}
        try:
            strategy = self._registry.resolve(generation_method, **options)
        except UnknownStrategyError as e:
            logger.warning(
                "%s. Generation method unchanged (%s)", e, self._generation_method
            )
            return False

        self._strategy = strategy
        self._generation_method = generation_method.strip().lower()
        return True

    # Generation -----------------------------------------------------

    def generate(self) -> np.ndarray:
        """
        Generate the terrain with the current strategy.

        The grid is reset, filled by the strategy, then every cell is
        multiplied by the altitude factor. Calling this again regenerates
        from scratch.

        Returns:
            The live elevation grid.
        """
        logger.debug(
            "Generating %dx%d terrain with %s",
            self.nrows, self.ncols, self._generation_method,
        )
        self._grid.fill(0.0)
        self._strategy.generate(self._grid)
        self._grid *= self._altitude_factor
        return self._grid

    # Export ---------------------------------------------------------

    def to_asc(self, path: Union[str, Path], **options) -> Path:
        """Write the grid as an ESRI ASCII grid (.asc)."""
        from gama.io.writers import AscWriter

        return AscWriter(**options).write(self, path)

    def to_geotiff(self, path: Union[str, Path], **options) -> Path:
        """Write the grid as a single-band GeoTIFF."""
        from gama.io.writers import GeotiffWriter

        return GeotiffWriter(**options).write(self, path)

    def export(self, path: Union[str, Path], fmt: Optional[str] = None, **options) -> Path:
        """
        Write the grid, choosing the format from ``fmt`` or the file suffix.

        Args:
            path: Output file path.
            fmt: 'asc' or 'geotiff'; inferred from the suffix when None.
        """
        from gama.io.writers import get_writer

        return get_writer(fmt or Path(path).suffix, **options).write(self, path)

    def __repr__(self) -> str:
        return (
            f"Terrain(extent={self.extent}, cell_size={self._cell_size}, "
            f"shape={self.shape}, projection={self._projection!r}, "
            f"generation_method={self._generation_method!r}, "
            f"altitude_factor={self._altitude_factor})"
        )
