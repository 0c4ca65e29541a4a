"""
Tests for gama.io module.

These tests verify file kind handling, extent readers and raster writers.
"""

import json

import pytest
import numpy as np


def _write_geojson(path, coordinates, crs=None):
    """Write a small GeoJSON line file."""
    collection = {
        "type": "FeatureCollection",
        "features": [{
            "type": "Feature",
            "properties": {"name": "track"},
            "geometry": {"type": "LineString", "coordinates": coordinates},
        }],
    }
    if crs is not None:
        collection["crs"] = {"type": "name", "properties": {"name": crs}}
    path.write_text(json.dumps(collection))
    return path


def _write_geotiff(path, bounds, shape=(20, 40), crs="EPSG:32631"):
    """Write a small single-band GeoTIFF covering ``bounds``."""
    import rasterio
    from rasterio.transform import from_bounds

    height, width = shape
    transform = from_bounds(*bounds, width, height)
    with rasterio.open(
        path, 'w', driver='GTiff', dtype='float32',
        width=width, height=height, count=1, crs=crs, transform=transform,
    ) as dst:
        dst.write(np.ones(shape, dtype=np.float32), 1)
    return path


class TestFileKind:
    """Tests for file kind normalization."""

    @pytest.mark.parametrize("kind, expected", [
        ("raster", "RASTER"),
        ("Vector", "VECTOR"),
        (1, "RASTER"),
        (0, "VECTOR"),
    ])
    def test_known_kinds(self, kind, expected):
        """Test names, legacy integers and enum members."""
        from gama.io import FileKind, file_kind

        assert file_kind(kind) is FileKind[expected]
        assert file_kind(FileKind[expected]) is FileKind[expected]

    @pytest.mark.parametrize("kind", [2, -1, "image", True, 1.0])
    def test_unsupported_kinds(self, kind):
        """Test that other kinds raise UnsupportedFileKindError."""
        from gama.errors import UnsupportedFileKindError
        from gama.io import file_kind

        with pytest.raises(UnsupportedFileKindError) as excinfo:
            file_kind(kind)

        assert excinfo.value.kind == kind

    def test_infer_from_suffix(self):
        """Test kind inference from file names."""
        from gama.errors import UnsupportedFileKindError
        from gama.io import FileKind, file_kind

        assert file_kind(None, "dem.TIF") is FileKind.RASTER
        assert file_kind(None, "roads.shp") is FileKind.VECTOR
        assert file_kind(None, "area.geojson") is FileKind.VECTOR

        with pytest.raises(UnsupportedFileKindError):
            file_kind(None, "notes.txt")

    def test_terrain_from_unsupported_kind(self, tmp_path):
        """Test that Terrain.from_file rejects unknown kinds before reading."""
        from gama import Terrain, UnsupportedFileKindError

        with pytest.raises(UnsupportedFileKindError):
            Terrain.from_file(tmp_path / "missing.tif", kind=7)

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        from gama import Terrain

        with pytest.raises(FileNotFoundError):
            Terrain.from_file(tmp_path / "missing.tif", kind="raster")


class TestAscWriter:
    """Tests for the ESRI ASCII grid writer."""

    def test_header_and_rows(self, tmp_path):
        """Test the header layout and row order."""
        from gama import Terrain

        terrain = Terrain(100, 200, 103, 202, 1, generation_method="uniform")
        terrain.generate()
        terrain.grid[0, :] = [1.0, 2.0, 3.0]
        terrain.grid[1, :] = [4.0, 5.5, 6.0]

        path = terrain.to_asc(tmp_path / "dem.asc")
        lines = path.read_text().splitlines()

        assert lines[:6] == [
            "ncols 3",
            "nrows 2",
            "xllcorner 100.0",
            "yllcorner 200.0",
            "cellsize 1.0",
            "NODATA_value -9999",
        ]
        assert [float(v) for v in lines[6].split()] == [1.0, 2.0, 3.0]
        assert [float(v) for v in lines[7].split()] == [4.0, 5.5, 6.0]
        assert len(lines) == 8

    def test_values_roundtrip(self, tmp_path):
        """Test that written values load back with numpy."""
        from gama import Terrain

        terrain = Terrain(0, 0, 12, 9, 1, generation_method="perlinnoise", seed=3,
                          altitude_factor=850.0)
        terrain.generate()
        path = terrain.export(tmp_path / "dem.asc")

        data = np.loadtxt(path, skiprows=6)
        np.testing.assert_allclose(data, terrain.grid)

    def test_decimals_and_nodata(self, tmp_path):
        """Test fixed decimals and the nodata replacement for non-finite cells."""
        from gama import Terrain
        from gama.io import AscWriter

        terrain = Terrain.from_shape("uniform", 2, 2, value=0.5)
        terrain.generate()
        terrain.grid[1, 1] = np.nan

        path = AscWriter(nodata_value=-1, decimals=2).write(terrain, tmp_path / "dem.asc")
        lines = path.read_text().splitlines()

        assert lines[5] == "NODATA_value -1"
        assert lines[6] == "0.50 0.50"
        assert lines[7] == "0.50 -1.00"
        assert np.isnan(terrain.grid[1, 1])

    def test_export_unknown_format(self, tmp_path):
        """Test that unsupported formats are rejected."""
        from gama import Terrain

        terrain = Terrain.from_shape("random", 3, 3)

        with pytest.raises(ValueError):
            terrain.export(tmp_path / "dem.xyz")

    def test_write_error_propagates(self, tmp_path):
        """Test that I/O errors surface unchanged and leave the terrain intact."""
        from gama import Terrain

        terrain = Terrain.from_shape("random", 3, 3, seed=1)
        grid = terrain.generate().copy()

        with pytest.raises(OSError):
            terrain.to_asc(tmp_path / "no" / "such" / "dir" / "dem.asc")
        np.testing.assert_array_equal(terrain.grid, grid)


class TestGeotiff:
    """Tests for GeoTIFF export and raster import."""

    def test_write_geotiff(self, tmp_path):
        """Test geometry, CRS and values of a written GeoTIFF."""
        rasterio = pytest.importorskip("rasterio")
        from gama import Terrain

        terrain = Terrain(1000, 2000, 1050, 2030, 2.0, projection="EPSG:32631",
                          generation_method="diamondsquare", seed=4, altitude_factor=900.0)
        terrain.generate()
        path = terrain.to_geotiff(tmp_path / "dem.tif")

        with rasterio.open(path) as src:
            assert (src.height, src.width) == (15, 25)
            assert src.crs.to_string() == "EPSG:32631"
            assert src.bounds.left == pytest.approx(1000)
            assert src.bounds.bottom == pytest.approx(2000)
            assert src.bounds.right == pytest.approx(1050)
            assert src.bounds.top == pytest.approx(2030)
            assert src.nodata == -9999
            data = src.read(1)

        np.testing.assert_allclose(data, terrain.grid.astype(np.float32))

    def test_raster_reader(self, tmp_path):
        """Test extent and projection read from a GeoTIFF."""
        pytest.importorskip("rasterio")
        from gama.io import RasterFileReader

        path = _write_geotiff(tmp_path / "source.tif", (500000, 4000000, 502000, 4001000))
        reader = RasterFileReader(path)

        assert reader.x_min == pytest.approx(500000)
        assert reader.y_min == pytest.approx(4000000)
        assert reader.x_max == pytest.approx(502000)
        assert reader.y_max == pytest.approx(4001000)
        assert reader.projection_name == "EPSG:32631"
        assert reader.metadata.source_file == str(path)

    def test_terrain_from_raster(self, tmp_path):
        """Test a terrain derived from a raster file has 1000 columns."""
        pytest.importorskip("rasterio")
        from gama import Terrain, FileKind

        path = _write_geotiff(tmp_path / "source.tif", (500000, 4000000, 502000, 4001000))
        terrain = Terrain.from_file(path, FileKind.RASTER)

        assert terrain.cell_size == pytest.approx(2.0)
        assert terrain.shape == (500, 1000)
        assert terrain.projection == "EPSG:32631"
        assert terrain.generation_method == "perlinnoise"

    def test_raster_without_crs(self, tmp_path, caplog):
        """Test the default projection is used when the raster has no CRS."""
        pytest.importorskip("rasterio")
        from gama import DEFAULT_PROJECTION
        from gama.io import RasterFileReader

        path = _write_geotiff(tmp_path / "nocrs.tif", (0, 0, 10, 10), shape=(5, 5), crs=None)

        assert RasterFileReader(path).projection_name == DEFAULT_PROJECTION
        assert "no CRS" in caplog.text


class TestVectorReader:
    """Tests for vector file import."""

    def test_vector_reader(self, tmp_path):
        """Test extent and projection read from a GeoJSON file."""
        pytest.importorskip("fiona")
        from gama.io import VectorFileReader

        path = _write_geojson(tmp_path / "track.geojson", [[2.0, 48.0], [3.5, 49.25]])
        reader = VectorFileReader(path)

        assert reader.metadata.extent == pytest.approx((2.0, 48.0, 3.5, 49.25))
        assert reader.projection_name == "EPSG:4326"

    def test_terrain_from_vector(self, tmp_path):
        """Test a terrain derived from a vector file, kind inferred."""
        pytest.importorskip("fiona")
        from gama import Terrain

        path = _write_geojson(tmp_path / "track.geojson", [[0.0, 0.0], [10.0, 5.0]])
        terrain = Terrain.from_file(path, generation_method="random", seed=1)

        assert terrain.ncols == 1000
        assert terrain.nrows == 500
        assert terrain.projection == "EPSG:4326"
        terrain.generate()
        assert terrain.grid.max() < 1.0

    def test_terrain_from_vector_options(self, tmp_path):
        """Test that from_file forwards the altitude factor and strategy options."""
        pytest.importorskip("fiona")
        from gama import Terrain

        path = _write_geojson(tmp_path / "track.geojson", [[0.0, 0.0], [10.0, 5.0]])
        terrain = Terrain.from_file(path, generation_method="diamondsquare",
                                    altitude_factor=250.0, seed=4, roughness=0.7)

        assert terrain.altitude_factor == 250.0
        assert terrain.strategy.roughness == 0.7
        assert terrain.strategy.seed == 4
        grid = terrain.generate()
        assert grid.max() == pytest.approx(250.0)


class TestAdapterBases:
    """Tests for the reader and writer base classes."""

    def test_bases_are_abstract(self, tmp_path):
        """Test that the bases cannot be instantiated without an implementation."""
        from gama.io import FileReader, TerrainWriter

        path = tmp_path / "extent.asc"
        path.write_text("")

        with pytest.raises(TypeError):
            FileReader(path)
        with pytest.raises(TypeError):
            TerrainWriter()

    def test_custom_writer(self, tmp_path):
        """Test that a subclass only has to implement _write."""
        from gama import Terrain
        from gama.io import TerrainWriter

        class ShapeWriter(TerrainWriter):
            def _write(self, terrain, path):
                path.write_text(f"{terrain.nrows} {terrain.ncols} {self.nodata_value:g}")

        terrain = Terrain.from_shape("uniform", 3, 4)
        path = ShapeWriter(nodata_value=-1.0).write(terrain, tmp_path / "shape.txt")

        assert path.read_text() == "3 4 -1"
