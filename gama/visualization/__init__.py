"""
Visualization tools for generated terrain.

This module provides static plotting functions and PNG previews.
"""

from gama.visualization.plotting import (
    plot_terrain,
    plot_strategies,
    save_preview,
    hillshade,
)

__all__ = [
    "plot_terrain",
    "plot_strategies",
    "save_preview",
    "hillshade",
]
