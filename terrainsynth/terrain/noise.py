"""
Deterministic 2D Noise

Stateless Perlin gradient noise and value noise evaluated by
Numba-compiled kernels. Frequency is always an explicit argument, so one
NoiseSource can be shared by any number of concurrent row tasks.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum

import numpy as np
from numba import jit, prange
from numpy.typing import NDArray

from ..errors import InvalidConfigurationError
from ..interfaces import Resolution

logger = logging.getLogger(__name__)

DEFAULT_SEED = 1337

_PERLIN = 0
_VALUE = 1


class NoiseType(str, Enum):
    """Noise algorithm used by a NoiseSource."""
    PERLIN = "perlin"
    VALUE = "value"


_KIND_CODES = {NoiseType.PERLIN: _PERLIN, NoiseType.VALUE: _VALUE}


@jit(nopython=True, cache=True)
def _hash_2d(x: int, y: int, seed: int) -> float:
    """Simple hash function for pseudo-random values in (-1, 1]."""
    n = x + y * 57 + seed * 131
    n = (n << 13) ^ n
    return (1.0 - ((n * (n * n * 15731 + 789221) + 1376312589) & 0x7fffffff) / 1073741824.0)


@jit(nopython=True, cache=True)
def _smoothstep(t: float) -> float:
    """Smooth interpolation curve."""
    return t * t * (3 - 2 * t)


@jit(nopython=True, cache=True)
def _fade(t: float) -> float:
    """Quintic fade curve used by gradient noise."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


@jit(nopython=True, cache=True)
def _lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation."""
    return a + t * (b - a)


@jit(nopython=True, cache=True)
def _gradient(h: int, x: float, y: float) -> float:
    """Dot product with one of eight lattice gradients."""
    h = h & 7
    if h == 0:
        return x + y
    elif h == 1:
        return -x + y
    elif h == 2:
        return x - y
    elif h == 3:
        return -x - y
    elif h == 4:
        return x
    elif h == 5:
        return -x
    elif h == 6:
        return y
    return -y


@jit(nopython=True, cache=True)
def _value_noise_2d(x: float, y: float, seed: int) -> float:
    """2D value noise at a point."""
    # Grid cell coordinates
    x0 = int(np.floor(x))
    y0 = int(np.floor(y))
    x1 = x0 + 1
    y1 = y0 + 1

    # Smooth interpolation weights
    sx = _smoothstep(x - x0)
    sy = _smoothstep(y - y0)

    n00 = _hash_2d(x0, y0, seed)
    n10 = _hash_2d(x1, y0, seed)
    n01 = _hash_2d(x0, y1, seed)
    n11 = _hash_2d(x1, y1, seed)

    nx0 = _lerp(n00, n10, sx)
    nx1 = _lerp(n01, n11, sx)
    return _lerp(nx0, nx1, sy)


@jit(nopython=True, cache=True)
def _perlin_noise_2d(x: float, y: float, perm: np.ndarray) -> float:
    """2D gradient noise at a point, zero on lattice points."""
    xf = np.floor(x)
    yf = np.floor(y)
    xi = int(xf) & 255
    yi = int(yf) & 255
    fx = x - xf
    fy = y - yf

    u = _fade(fx)
    v = _fade(fy)

    aa = perm[perm[xi] + yi]
    ab = perm[perm[xi] + yi + 1]
    ba = perm[perm[xi + 1] + yi]
    bb = perm[perm[xi + 1] + yi + 1]

    nx0 = _lerp(_gradient(aa, fx, fy), _gradient(ba, fx - 1.0, fy), u)
    nx1 = _lerp(_gradient(ab, fx, fy - 1.0), _gradient(bb, fx - 1.0, fy - 1.0), u)
    return _lerp(nx0, nx1, v)


@jit(nopython=True, cache=True)
def _sample(x: float, y: float, perm: np.ndarray, seed: int, kind: int) -> float:
    """Noise at (x, y) remapped from [-1, 1] to [0, 1]."""
    if kind == _PERLIN:
        n = _perlin_noise_2d(x, y, perm)
    else:
        n = _value_noise_2d(x, y, seed)
    value = 0.5 * (n + 1.0)
    if value < 0.0:
        return 0.0
    if value > 1.0:
        return 1.0
    return value


@jit(nopython=True, parallel=True, cache=True)
def _sample_grid_core(
    rows: int,
    columns: int,
    frequency: float,
    perm: np.ndarray,
    seed: int,
    kind: int
) -> np.ndarray:
    """Sample every cell of a grid (Numba-accelerated, one task per row)."""
    out = np.empty((rows, columns), dtype=np.float64)

    for row in prange(rows):
        for col in range(columns):
            out[row, col] = _sample(row * frequency, col * frequency, perm, seed, kind)

    return out


def _permutation_table(seed: int) -> NDArray[np.int64]:
    """Seeded 0..255 permutation, doubled so lookups never wrap."""
    rng = np.random.default_rng(seed)
    table = rng.permutation(256).astype(np.int64)
    perm = np.concatenate([table, table])
    perm.flags.writeable = False
    return perm


@dataclass(frozen=True)
class NoiseSource:
    """Pure, seeded noise sampler.

    The permutation table is built once on construction and is read-only
    afterwards; sampling never mutates the instance.

    Attributes:
        seed: Seed for the permutation table (Perlin) or hash (value noise)
        noise_type: Noise algorithm
    """
    seed: int = DEFAULT_SEED
    noise_type: NoiseType = NoiseType.PERLIN
    perm: NDArray[np.int64] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if isinstance(self.seed, bool) or not isinstance(self.seed, (int, np.integer)):
            raise InvalidConfigurationError(f"Noise seed must be an integer, got {self.seed!r}")
        if not (0 <= self.seed < 2**32):
            raise InvalidConfigurationError(f"Noise seed must be in [0, 2**32), got {self.seed}")
        try:
            noise_type = NoiseType(self.noise_type)
        except ValueError:
            raise InvalidConfigurationError(f"Unknown noise type: {self.noise_type}") from None
        object.__setattr__(self, "seed", int(self.seed))
        object.__setattr__(self, "noise_type", noise_type)
        object.__setattr__(self, "perm", _permutation_table(self.seed))

    @property
    def _kind(self) -> int:
        return _KIND_CODES[self.noise_type]

    def sample(self, x: float, y: float, frequency: float) -> float:
        """Noise value in [0, 1] at grid coordinate (x, y) scaled by frequency."""
        return float(_sample(float(x) * float(frequency), float(y) * float(frequency),
                             self.perm, self.seed, self._kind))

    def sample_grid(self, resolution: Resolution, frequency: float) -> NDArray[np.float64]:
        """Evaluate ``sample(row, col, frequency)`` for every cell.

        Args:
            resolution: Grid dimensions
            frequency: Coordinate scale

        Returns:
            Array of shape (rows, columns) with values in [0, 1]
        """
        logger.debug("Sampling %s noise on %dx%d grid at frequency %g",
                     self.noise_type.value, resolution.rows, resolution.columns, frequency)
        return _sample_grid_core(
            resolution.rows,
            resolution.columns,
            float(frequency),
            self.perm,
            self.seed,
            self._kind
        )
