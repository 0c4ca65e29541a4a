"""
Writers serializing a Terrain to raster files.

Supported formats:
    - ESRI ASCII grid (.asc): plain-text header followed by the rows
    - GeoTIFF (.tif, .tiff): single float32 band with CRS and geotransform

Writers only read the terrain; a failed write leaves it untouched.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union
import numpy as np

from gama.domain.terrain import Terrain

logger = logging.getLogger(__name__)

DEFAULT_NODATA = -9999.0


class TerrainWriter(ABC):
    """
    Base class for terrain writers.

    Args:
        nodata_value: Value written to mark missing data
    """

    def __init__(self, nodata_value: float = DEFAULT_NODATA):
        self.nodata_value = nodata_value

    def write(self, terrain: Terrain, path: Union[str, Path]) -> Path:
        """
        Write ``terrain`` to ``path``.

        Returns:
            The path written.
        """
        path = Path(path)
        logger.debug("Writing %dx%d terrain to %s", terrain.nrows, terrain.ncols, path)
        self._write(terrain, path)
        return path

    @abstractmethod
    def _write(self, terrain: Terrain, path: Path) -> None:
        """Serialize ``terrain`` to ``path``."""


class AscWriter(TerrainWriter):
    """
    ESRI ASCII grid writer.

    Header keys are ncols, nrows, xllcorner, yllcorner, cellsize and
    NODATA_value; rows follow from north to south.

    Args:
        nodata_value: Value written as NODATA_value
        decimals: Fixed number of decimals, or None for full precision
    """

    def __init__(self, nodata_value: float = DEFAULT_NODATA, decimals: Optional[int] = None):
        super().__init__(nodata_value)
        self.decimals = decimals

    def header(self, terrain: Terrain) -> str:
        x_min, y_min, _, _ = terrain.bounds
        return (
            f"ncols {terrain.ncols}\n"
            f"nrows {terrain.nrows}\n"
            f"xllcorner {x_min!r}\n"
            f"yllcorner {y_min!r}\n"
            f"cellsize {terrain.cell_size!r}\n"
            f"NODATA_value {self.nodata_value:g}"
        )

    def _write(self, terrain: Terrain, path: Path) -> None:
        fmt = '%.18g' if self.decimals is None else f'%.{self.decimals}f'
        grid = np.where(np.isfinite(terrain.grid), terrain.grid, self.nodata_value)
        np.savetxt(path, grid, fmt=fmt, delimiter=' ', header=self.header(terrain), comments='')


class GeotiffWriter(TerrainWriter):
    """
    GeoTIFF writer using rasterio.

    Args:
        nodata_value: Nodata tag of the band
        compress: Whether to LZW-compress the output
    """

    def __init__(self, nodata_value: float = DEFAULT_NODATA, compress: bool = True):
        super().__init__(nodata_value)
        self.compress = compress

    def _write(self, terrain: Terrain, path: Path) -> None:
        try:
            import rasterio
            from rasterio.transform import from_origin
        except ImportError:
            raise ImportError(
                "rasterio is required for saving GeoTIFF files. "
                "Install with: pip install rasterio"
            )

        x_min, _, _, y_top = terrain.bounds
        transform = from_origin(x_min, y_top, terrain.cell_size, terrain.cell_size)

        profile = {
            'driver': 'GTiff',
            'dtype': 'float32',
            'width': terrain.ncols,
            'height': terrain.nrows,
            'count': 1,
            'crs': terrain.projection,
            'transform': transform,
            'nodata': self.nodata_value,
        }

        if self.compress:
            profile['compress'] = 'lzw'

        with rasterio.open(path, 'w', **profile) as dst:
            dst.write(terrain.grid.astype(np.float32), 1)


WRITERS = {
    'asc': AscWriter,
    'geotiff': GeotiffWriter,
}

_FORMAT_ALIASES = {
    '.asc': 'asc',
    'ascii': 'asc',
    '.tif': 'geotiff',
    '.tiff': 'geotiff',
    'tif': 'geotiff',
    'tiff': 'geotiff',
    'gtiff': 'geotiff',
}


def get_writer(fmt: str, **options) -> TerrainWriter:
    """
    Writer for a format name or file suffix.

    Args:
        fmt: 'asc', 'geotiff' or a suffix such as '.tif'
        **options: Forwarded to the writer constructor

    Raises:
        ValueError: If the format is not supported.
    """
    key = fmt.strip().lower()
    key = _FORMAT_ALIASES.get(key, key)
    if key not in WRITERS:
        raise ValueError(f"Unsupported export format: {fmt!r}. Available: {list(WRITERS)}")
    return WRITERS[key](**options)
