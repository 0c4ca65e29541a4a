"""
Configuration settings as typed dataclasses.

This module provides configuration classes for terrain geometry, generation
and export, supporting loading from YAML/JSON files.
"""

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union
import json

from gama.domain.terrain import (
    DEFAULT_GENERATION_METHOD,
    DEFAULT_PROJECTION,
    DEFAULT_SIZE,
    Terrain,
)
from gama.io.writers import DEFAULT_NODATA


@dataclass
class ExtentConfig:
    """
    Grid geometry.

    Attributes:
        x_min, y_min, x_max, y_max: Extent in projection units
        cell_size: Cell edge length, same units as the extent
        projection: CRS identifier
    """
    x_min: float = 0.0
    y_min: float = 0.0
    x_max: float = float(DEFAULT_SIZE)
    y_max: float = float(DEFAULT_SIZE)
    cell_size: float = 1.0
    projection: str = DEFAULT_PROJECTION


@dataclass
class GenerationConfig:
    """
    Generation settings.

    Attributes:
        method: Strategy name (case-insensitive)
        seed: Random seed for reproducibility
        altitude_factor: Maximum altitude wanted
        options: Extra keyword arguments for the strategy
            (e.g. {"octaves": 5} for perlinnoise)
    """
    method: str = DEFAULT_GENERATION_METHOD
    seed: Optional[int] = None
    altitude_factor: float = 1.0
    options: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ExportConfig:
    """
    Export settings.

    Attributes:
        output_dir: Directory for output files
        nodata_value: Nodata marker written to files
        compress: Whether to compress GeoTIFF output
        decimals: Fixed decimals for ASCII grids (None = full precision)
    """
    output_dir: str = "outputs"
    nodata_value: float = DEFAULT_NODATA
    compress: bool = True
    decimals: Optional[int] = None

    def writer_options(self, fmt: str) -> dict:
        """Keyword arguments for the writer of ``fmt`` ('asc' or 'geotiff')."""
        if fmt == 'asc':
            return {"nodata_value": self.nodata_value, "decimals": self.decimals}
        return {"nodata_value": self.nodata_value, "compress": self.compress}


@dataclass
class GamaConfig:
    """
    Main configuration.

    Attributes:
        extent: Grid geometry
        generation: Strategy and altitude settings
        export: Output settings
    """
    extent: ExtentConfig = field(default_factory=ExtentConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    export: ExportConfig = field(default_factory=ExportConfig)

    def to_dict(self) -> dict:
        """Nested plain dictionary, ready for YAML or JSON."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "GamaConfig":
        """Create from dictionary."""
        data = data or {}
        extent = ExtentConfig(**data.get('extent', {}))
        generation = GenerationConfig(**data.get('generation', {}))
        export = ExportConfig(**data.get('export', {}))

        return cls(extent=extent, generation=generation, export=export)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "GamaConfig":
        """Load configuration from YAML file."""
        import yaml

        path = Path(path)
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "GamaConfig":
        """Load configuration from JSON file."""
        path = Path(path)
        with open(path, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)

    def to_yaml(self, path: Union[str, Path]) -> None:
        """Save configuration to YAML file."""
        import yaml

        path = Path(path)
        with open(path, 'w') as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def to_json(self, path: Union[str, Path]) -> None:
        """Save configuration to JSON file."""
        path = Path(path)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    def build_terrain(self) -> Terrain:
        """Terrain described by this configuration, not yet generated."""
        return Terrain.from_config(self)

    @classmethod
    def for_mountains(cls) -> "GamaConfig":
        """Preset: rough diamond-square relief up to 3000 m."""
        return cls(
            generation=GenerationConfig(
                method="diamondsquare",
                altitude_factor=3000.0,
                options={"roughness": 0.6},
            ),
        )

    @classmethod
    def for_hills(cls) -> "GamaConfig":
        """Preset: gentle Perlin hills up to 300 m."""
        return cls(
            generation=GenerationConfig(
                method="perlinnoise",
                altitude_factor=300.0,
                options={"octaves": 4, "persistence": 0.4},
            ),
        )


def load_config(path: Optional[Union[str, Path]] = None) -> GamaConfig:
    """
    Load configuration from file or return defaults.

    Supports YAML and JSON files based on extension.

    Args:
        path: Path to configuration file (optional)

    Returns:
        GamaConfig instance
    """
    if path is None:
        return GamaConfig()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    suffix = path.suffix.lower()
    if suffix in ['.yaml', '.yml']:
        return GamaConfig.from_yaml(path)
    elif suffix == '.json':
        return GamaConfig.from_json(path)
    else:
        raise ValueError(f"Unsupported configuration format: {suffix}")
