"""
Built-in terrain generation strategies.

All strategies write values in [0, 1]:
    - uniform: flat terrain at a constant level
    - random: independent uniform noise per cell
    - randomnoise: multi-octave value noise (smooth, blobby relief)
    - perlinnoise: fractal gradient noise (Perlin)
    - diamondsquare: recursive midpoint displacement fractal
"""

import math
from typing import Optional, Tuple
import numpy as np

from gama.errors import GridShapeError
from gama.generation.base import GenerationStrategy, normalize


class UniformStrategy(GenerationStrategy):
    """Flat terrain: every cell holds ``value``."""

    name = "uniform"

    def __init__(self, value: float = 0.0, seed: Optional[int] = None):
        super().__init__(seed)
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"value must be in [0, 1], got {value}")
        self.value = float(value)

    def _generate(self, shape, rng):
        return np.full(shape, self.value, dtype=np.float64)


class RandomStrategy(GenerationStrategy):
    """Independent uniform sample in [0, 1) for every cell."""

    name = "random"

    def _generate(self, shape, rng):
        return rng.random(shape)


class RandomNoiseStrategy(GenerationStrategy):
    """
    Multi-octave value noise.

    Each octave draws a coarse random lattice, interpolates it to the grid
    with cubic splines and adds it with a decaying amplitude.

    Args:
        octaves: Number of noise layers (more = more detail).
        persistence: Amplitude decay per octave (0-1).
        scale: Base feature size in cells (larger = smoother).
        seed: Random seed for reproducibility.
    """

    name = "randomnoise"

    def __init__(
        self,
        octaves: int = 4,
        persistence: float = 0.5,
        scale: float = 50.0,
        seed: Optional[int] = None,
    ):
        super().__init__(seed)
        if octaves < 1:
            raise ValueError("octaves must be >= 1")
        if scale <= 0:
            raise ValueError("scale must be positive")
        self.octaves = int(octaves)
        self.persistence = float(persistence)
        self.scale = float(scale)

    def _generate(self, shape, rng):
        from scipy.ndimage import zoom

        height, width = shape
        values = np.zeros(shape, dtype=np.float64)

        for octave in range(self.octaves):
            freq = 2 ** octave
            amp = self.persistence ** octave

            noise_h = max(2, int(height // (self.scale / freq)))
            noise_w = max(2, int(width // (self.scale / freq)))
            lattice = rng.standard_normal((noise_h + 2, noise_w + 2))

            zoomed = zoom(
                lattice,
                (height / lattice.shape[0], width / lattice.shape[1]),
                order=3,
                mode='nearest',
            )
            # zoom may round one cell short; pad by edge replication, then crop
            pad_h = max(0, height - zoomed.shape[0])
            pad_w = max(0, width - zoomed.shape[1])
            if pad_h or pad_w:
                zoomed = np.pad(zoomed, ((0, pad_h), (0, pad_w)), mode='edge')

            values += amp * zoomed[:height, :width]

        return normalize(values)


def _fade(t: np.ndarray) -> np.ndarray:
    # Quintic fade (Perlin)
    return ((6 * t - 15) * t + 10) * t ** 3


def perlin_noise_2d(
    shape: Tuple[int, int],
    res: Tuple[int, int],
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Single octave of 2D gradient noise.

    Args:
        shape: (rows, cols) of the output.
        res: (ry, rx) number of lattice cells along rows and columns.
        rng: Random generator used for the lattice gradients.

    Returns:
        Array of ``shape`` with values roughly in [-1, 1].
    """
    height, width = shape
    ry, rx = res

    angles = rng.random((ry + 1, rx + 1)) * 2 * np.pi
    grad = np.stack([np.cos(angles), np.sin(angles)], axis=-1)

    # Sample at cell centers; coordinates stay strictly below the last lattice line
    u = (np.arange(width) + 0.5) * (rx / width)
    v = (np.arange(height) + 0.5) * (ry / height)

    iu = np.floor(u).astype(int)
    iv = np.floor(v).astype(int)
    dx = (u - iu)[None, :]
    dy = (v - iv)[:, None]

    iu0 = iu[None, :]
    iv0 = iv[:, None]
    iu1 = iu0 + 1
    iv1 = iv0 + 1

    g00 = grad[iv0, iu0]
    g10 = grad[iv0, iu1]
    g01 = grad[iv1, iu0]
    g11 = grad[iv1, iu1]

    n00 = g00[..., 0] * dx + g00[..., 1] * dy
    n10 = g10[..., 0] * (dx - 1.0) + g10[..., 1] * dy
    n01 = g01[..., 0] * dx + g01[..., 1] * (dy - 1.0)
    n11 = g11[..., 0] * (dx - 1.0) + g11[..., 1] * (dy - 1.0)

    tx = _fade(dx)
    ty = _fade(dy)

    n0 = n00 * (1 - tx) + tx * n10
    n1 = n01 * (1 - tx) + tx * n11
    return ((1 - ty) * n0 + ty * n1) * math.sqrt(2.0)


class PerlinNoiseStrategy(GenerationStrategy):
    """
    Fractal Perlin noise.

    Sums ``octaves`` layers of gradient noise. The first octave has
    ``base_resolution`` lattice cells across the longer grid side; each
    following octave doubles the frequency and multiplies the amplitude
    by ``persistence``.

    Args:
        octaves: Number of noise layers.
        persistence: Amplitude decay per octave (0-1).
        base_resolution: Lattice cells across the longer side for octave 0.
        seed: Random seed for reproducibility.
    """

    name = "perlinnoise"

    def __init__(
        self,
        octaves: int = 6,
        persistence: float = 0.5,
        base_resolution: int = 4,
        seed: Optional[int] = None,
    ):
        super().__init__(seed)
        if octaves < 1:
            raise ValueError("octaves must be >= 1")
        if base_resolution < 1:
            raise ValueError("base_resolution must be >= 1")
        self.octaves = int(octaves)
        self.persistence = float(persistence)
        self.base_resolution = int(base_resolution)

    def _generate(self, shape, rng):
        height, width = shape
        longest = max(height, width)
        values = np.zeros(shape, dtype=np.float64)

        amplitude = 1.0
        for octave in range(self.octaves):
            cells = self.base_resolution * (2 ** octave)
            # Finer than one lattice cell per grid cell adds nothing but aliasing
            if cells > longest and octave > 0:
                break
            rx = max(1, round(cells * width / longest))
            ry = max(1, round(cells * height / longest))
            values += amplitude * perlin_noise_2d(shape, (ry, rx), rng)
            amplitude *= self.persistence

        return normalize(values)


DIAMOND_SQUARE_POLICIES = ('pad', 'reject')


def _is_power_of_two_plus_one(n: int) -> bool:
    m = n - 1
    return m >= 1 and (m & (m - 1)) == 0


def lattice_shape(shape: Tuple[int, int]) -> Tuple[int, int]:
    """
    Smallest ``(a * 2**n + 1, b * 2**n + 1)`` lattice covering ``shape``.

    ``n`` (at least 1) is taken from the shorter side, so the lattice tiles
    the longer side with several seed squares instead of growing into a
    square as large as the longest side.
    """
    shortest = min(shape)
    step = 2 ** max(1, math.ceil(math.log2(max(shortest - 1, 1))))
    rows, cols = (max(1, math.ceil((side - 1) / step)) * step + 1 for side in shape)
    return rows, cols


class DiamondSquareStrategy(GenerationStrategy):
    """
    Diamond-square midpoint displacement.

    The algorithm runs on a lattice whose sides are multiples of ``2**n``
    plus one, seeded at every ``2**n`` corner. Grids that are not a
    ``2**n + 1`` square are handled according to ``size_policy``:
        - 'pad': run on the smallest covering lattice (see
          ``lattice_shape``) and keep the top-left window matching the grid
        - 'reject': raise GridShapeError

    Args:
        roughness: Displacement decay per subdivision level (0-1).
            Lower values give smoother terrain.
        size_policy: 'pad' (default) or 'reject'.
        seed: Random seed for reproducibility.
    """

    name = "diamondsquare"

    def __init__(
        self,
        roughness: float = 0.5,
        size_policy: str = 'pad',
        seed: Optional[int] = None,
    ):
        super().__init__(seed)
        if not 0.0 < roughness <= 1.0:
            raise ValueError(f"roughness must be in (0, 1], got {roughness}")
        size_policy = size_policy.lower()
        if size_policy not in DIAMOND_SQUARE_POLICIES:
            raise ValueError(
                f"Unknown size_policy: {size_policy}. Choose from: {DIAMOND_SQUARE_POLICIES}"
            )
        self.roughness = float(roughness)
        self.size_policy = size_policy

    def _generate(self, shape, rng):
        height, width = shape
        if height == width and _is_power_of_two_plus_one(height):
            lattice_rows, lattice_cols = shape
        elif self.size_policy == 'reject':
            raise GridShapeError(
                shape,
                f"diamondsquare requires a square grid of side 2**n + 1, got {shape}"
            )
        else:
            lattice_rows, lattice_cols = lattice_shape(shape)

        lattice = self._displace(lattice_rows, lattice_cols, rng)
        return normalize(lattice[:height, :width])

    def _displace(self, rows: int, cols: int, rng: np.random.Generator) -> np.ndarray:
        # The shorter side spans exactly one seed square
        step = min(rows, cols) - 1
        lattice = np.zeros((rows, cols), dtype=np.float64)
        seeds = lattice[::step, ::step]
        lattice[::step, ::step] = rng.random(seeds.shape)

        last_row, last_col = rows - 1, cols - 1
        scale = 1.0
        while step > 1:
            half = step // 2

            # Diamond step: centers of each square
            avg = (
                lattice[0:last_row:step, 0:last_col:step]
                + lattice[0:last_row:step, step::step]
                + lattice[step::step, 0:last_col:step]
                + lattice[step::step, step::step]
            ) / 4.0
            lattice[half:last_row:step, half:last_col:step] = (
                avg + rng.uniform(-scale, scale, avg.shape)
            )

            # Square step: edge midpoints, averaging the available neighbours
            for row in range(0, rows, half):
                first_col = half if (row // half) % 2 == 0 else 0
                cols_at = np.arange(first_col, cols, step)
                if cols_at.size == 0:
                    continue
                total = np.zeros(cols_at.size)
                count = np.zeros(cols_at.size)
                if row - half >= 0:
                    total += lattice[row - half, cols_at]
                    count += 1
                if row + half < rows:
                    total += lattice[row + half, cols_at]
                    count += 1
                left = cols_at - half >= 0
                total[left] += lattice[row, cols_at[left] - half]
                count[left] += 1
                right = cols_at + half < cols
                total[right] += lattice[row, cols_at[right] + half]
                count[right] += 1
                lattice[row, cols_at] = total / count + rng.uniform(-scale, scale, cols_at.size)

            step = half
            scale *= self.roughness

        return lattice


BUILTIN_STRATEGIES = (
    UniformStrategy,
    RandomStrategy,
    RandomNoiseStrategy,
    PerlinNoiseStrategy,
    DiamondSquareStrategy,
)
