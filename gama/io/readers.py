"""
Readers exposing the extent and projection of geographic files.

Raster files (GeoTIFF, ASCII grids, any GDAL raster) are read with rasterio;
vector files (Shapefile, GeoJSON, GeoPackage...) with fiona. Only metadata
is read: the extent is used to build a Terrain covering the same area.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Optional, Tuple, Union

from gama.domain.terrain import DEFAULT_PROJECTION
from gama.errors import UnsupportedFileKindError

logger = logging.getLogger(__name__)


class FileKind(IntEnum):
    """Kinds of geographic source files."""

    VECTOR = 0
    RASTER = 1


RASTER_SUFFIXES = ('.tif', '.tiff', '.asc', '.img', '.vrt', '.nc', '.dem', '.bil')
VECTOR_SUFFIXES = ('.shp', '.geojson', '.json', '.gpkg', '.kml', '.gml')


@dataclass
class FileMetadata:
    """
    Extent and projection of a geographic file.

    Attributes:
        x_min, y_min, x_max, y_max: Bounding box in projection units
        projection_name: CRS identifier (e.g., "EPSG:4326")
        source_file: Path of the file the metadata was read from
    """
    x_min: float
    y_min: float
    x_max: float
    y_max: float
    projection_name: str = DEFAULT_PROJECTION
    source_file: Optional[str] = None

    @property
    def extent(self) -> Tuple[float, float, float, float]:
        return (self.x_min, self.y_min, self.x_max, self.y_max)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "extent": list(self.extent),
            "projection_name": self.projection_name,
            "source_file": self.source_file,
        }


def _crs_name(crs, path: Path) -> str:
    name = crs.to_string() if crs else ''
    if not name:
        logger.warning("%s has no CRS; assuming %s", path.name, DEFAULT_PROJECTION)
        return DEFAULT_PROJECTION
    return name


class FileReader(ABC):
    """
    Base reader: opens ``path`` once and exposes its metadata.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
    """

    kind: FileKind

    def __init__(self, path: Union[str, Path]):
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Geographic file not found: {path}")
        self.path = path
        logger.debug("Reading %s metadata from %s", self.kind.name.lower(), path)
        self.metadata = self._read_metadata(path)

    @abstractmethod
    def _read_metadata(self, path: Path) -> FileMetadata:
        """Read the extent and projection of ``path``."""

    @property
    def x_min(self) -> float:
        return self.metadata.x_min

    @property
    def y_min(self) -> float:
        return self.metadata.y_min

    @property
    def x_max(self) -> float:
        return self.metadata.x_max

    @property
    def y_max(self) -> float:
        return self.metadata.y_max

    @property
    def projection_name(self) -> str:
        return self.metadata.projection_name


class RasterFileReader(FileReader):
    """Metadata of a raster file, read with rasterio."""

    kind = FileKind.RASTER

    def _read_metadata(self, path: Path) -> FileMetadata:
        try:
            import rasterio
        except ImportError:
            raise ImportError(
                "rasterio is required for reading raster files. "
                "Install with: pip install rasterio"
            )

        with rasterio.open(path) as src:
            bounds = src.bounds
            crs = src.crs

        return FileMetadata(
            x_min=bounds.left,
            y_min=bounds.bottom,
            x_max=bounds.right,
            y_max=bounds.top,
            projection_name=_crs_name(crs, path),
            source_file=str(path),
        )


class VectorFileReader(FileReader):
    """Metadata of a vector file, read with fiona."""

    kind = FileKind.VECTOR

    def _read_metadata(self, path: Path) -> FileMetadata:
        try:
            import fiona
        except ImportError:
            raise ImportError(
                "fiona is required for reading vector files. "
                "Install with: pip install fiona"
            )

        with fiona.open(path) as src:
            x_min, y_min, x_max, y_max = src.bounds
            crs = src.crs

        return FileMetadata(
            x_min=x_min,
            y_min=y_min,
            x_max=x_max,
            y_max=y_max,
            projection_name=_crs_name(crs, path),
            source_file=str(path),
        )


READERS = {
    FileKind.RASTER: RasterFileReader,
    FileKind.VECTOR: VectorFileReader,
}


def file_kind(kind, path: Optional[Union[str, Path]] = None) -> FileKind:
    """
    Normalize a file kind.

    Args:
        kind: FileKind, 'raster', 'vector', 1 (raster), 0 (vector), or None
            to infer from the suffix of ``path``.
        path: File path, used only when ``kind`` is None.

    Raises:
        UnsupportedFileKindError: If the kind is not recognized or cannot
            be inferred.
    """
    if kind is None:
        suffix = Path(path).suffix.lower() if path is not None else ''
        if suffix in RASTER_SUFFIXES:
            return FileKind.RASTER
        if suffix in VECTOR_SUFFIXES:
            return FileKind.VECTOR
        raise UnsupportedFileKindError(suffix or path)

    if isinstance(kind, FileKind):
        return kind
    if isinstance(kind, str):
        try:
            return FileKind[kind.strip().upper()]
        except KeyError:
            raise UnsupportedFileKindError(kind)
    # bool is an int subclass but never a meaningful kind
    if isinstance(kind, int) and not isinstance(kind, bool):
        try:
            return FileKind(kind)
        except ValueError:
            raise UnsupportedFileKindError(kind)
    raise UnsupportedFileKindError(kind)


def open_reader(path: Union[str, Path], kind=None) -> FileReader:
    """
    Open the reader matching ``kind`` for ``path``.

    Raises:
        UnsupportedFileKindError: If the kind is not recognized.
        FileNotFoundError: If ``path`` does not exist.
    """
    return READERS[file_kind(kind, path)](path)
