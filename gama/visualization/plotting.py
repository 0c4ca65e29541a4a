"""
Static plotting functions for generated terrain.
"""

from typing import Optional, Sequence, Union
from pathlib import Path
import numpy as np
import matplotlib.pyplot as plt

from gama.domain.terrain import Terrain


def plot_terrain(
    terrain: Terrain,
    ax: Optional[plt.Axes] = None,
    cmap: str = 'terrain',
    title: Optional[str] = None,
    show_colorbar: bool = True,
) -> plt.Axes:
    """
    Plot a terrain grid in world coordinates.

    Args:
        terrain: Terrain to plot (generated or not)
        ax: Matplotlib axes (creates new figure if None)
        cmap: Colormap for elevations
        title: Optional title (defaults to the generation method)
        show_colorbar: Whether to show colorbar

    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 8))

    x_min, y_min, x_max, y_max = terrain.bounds
    im = ax.imshow(
        terrain.grid,
        cmap=cmap,
        origin='upper',
        extent=(x_min, x_max, y_min, y_max),
        aspect='equal',
    )

    ax.set_title(title if title is not None else terrain.generation_method, fontweight='bold')
    ax.set_xlabel(f'X ({terrain.projection})')
    ax.set_ylabel('Y')

    if show_colorbar:
        plt.colorbar(im, ax=ax, label='Altitude', shrink=0.7)

    return ax


def plot_strategies(
    names: Sequence[str],
    nrows: int = 128,
    ncols: int = 128,
    seed: Optional[int] = None,
    cmap: str = 'terrain',
) -> plt.Figure:
    """
    Generate one terrain per strategy and plot them side by side.

    Args:
        names: Strategy names to compare
        nrows: Rows of each terrain
        ncols: Columns of each terrain
        seed: Seed shared by all strategies
        cmap: Colormap for elevations

    Returns:
        Matplotlib figure
    """
    fig, axes = plt.subplots(1, len(names), figsize=(4 * len(names), 4), squeeze=False)

    for ax, name in zip(axes[0], names):
        terrain = Terrain.from_shape(name, nrows, ncols, seed=seed)
        terrain.generate()
        plot_terrain(terrain, ax=ax, cmap=cmap, show_colorbar=False)

    fig.tight_layout()
    return fig


def save_preview(
    terrain: Terrain,
    path: Union[str, Path],
    dpi: int = 150,
    cmap: str = 'terrain',
) -> Path:
    """
    Save a PNG preview of a terrain.

    Args:
        terrain: Terrain to render
        path: Output image path
        dpi: Resolution of the saved image
        cmap: Colormap for elevations

    Returns:
        The path written.
    """
    path = Path(path)
    fig, ax = plt.subplots(figsize=(8, 8))
    plot_terrain(terrain, ax=ax, cmap=cmap)
    fig.savefig(path, dpi=dpi, bbox_inches='tight')
    plt.close(fig)
    return path


def hillshade(
    terrain: Terrain,
    azimuth: float = 315.0,
    altitude: float = 45.0,
) -> np.ndarray:
    """
    Shaded relief of a terrain, in [0, 1].

    Args:
        terrain: Generated terrain
        azimuth: Light direction in degrees clockwise from north
        altitude: Light elevation above the horizon in degrees

    Raises:
        ValueError: If the terrain has fewer than two rows or columns,
            since slopes need neighbours along both axes.
    """
    if min(terrain.shape) < 2:
        raise ValueError(
            f"hillshade needs at least 2 rows and 2 columns, got {terrain.shape}"
        )
    dy, dx = np.gradient(terrain.grid, terrain.cell_size)
    slope = np.pi / 2 - np.arctan(np.hypot(dx, dy))
    aspect = np.arctan2(-dx, dy)
    az = np.radians(360.0 - azimuth + 90.0)
    alt = np.radians(altitude)
    shaded = np.sin(alt) * np.sin(slope) + np.cos(alt) * np.cos(slope) * np.cos(az - aspect)
    return np.clip(shaded, 0.0, 1.0)
