"""
Configuration management for gama.

This module provides dataclass configuration models loadable from
YAML or JSON files.
"""

from gama.config.settings import (
    GamaConfig,
    ExtentConfig,
    GenerationConfig,
    ExportConfig,
    load_config,
)

__all__ = [
    "GamaConfig",
    "ExtentConfig",
    "GenerationConfig",
    "ExportConfig",
    "load_config",
]
