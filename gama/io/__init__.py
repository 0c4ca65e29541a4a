"""
File adapters around geospatial libraries.

This module provides:
    - Readers for the extent/projection of raster (rasterio) and vector (fiona) files
    - Writers for ESRI ASCII grids and GeoTIFF (rasterio)
"""

from gama.io.readers import (
    FileKind,
    FileMetadata,
    FileReader,
    RasterFileReader,
    VectorFileReader,
    file_kind,
    open_reader,
)
from gama.io.writers import (
    TerrainWriter,
    AscWriter,
    GeotiffWriter,
    get_writer,
    DEFAULT_NODATA,
)

__all__ = [
    # Readers
    "FileKind",
    "FileMetadata",
    "FileReader",
    "RasterFileReader",
    "VectorFileReader",
    "file_kind",
    "open_reader",
    # Writers
    "TerrainWriter",
    "AscWriter",
    "GeotiffWriter",
    "get_writer",
    "DEFAULT_NODATA",
]
