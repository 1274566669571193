"""
Height Field Synthesis

Builds elevation grids by summing noise layers, and composites a second,
smoother field into an existing grid with a per-cell maximum to raise
plateaus and landmasses.
"""
import logging
from typing import Iterable, Optional

import numpy as np
from numpy.typing import NDArray

from ..interfaces import LayerLike, Resolution, as_layers, check_grid, resolution_of
from .noise import NoiseSource

logger = logging.getLogger(__name__)


def initialize_grid(resolution: Resolution, initial_value: float = 0.0) -> NDArray[np.float64]:
    """Create a flat grid.

    Args:
        resolution: Grid dimensions
        initial_value: Elevation of every cell

    Returns:
        Array of shape (rows, columns) filled with initial_value
    """
    resolution = Resolution.coerce(resolution)
    return np.full(resolution.shape, float(initial_value), dtype=np.float64)


def perturbate(
    resolution: Resolution,
    layers: Iterable[LayerLike],
    noise: Optional[NoiseSource] = None,
    initial_value: float = 0.0
) -> NDArray[np.float64]:
    """Generate a multi-layer noise height field.

    Each layer adds ``sample * amplitude * 2 - amplitude`` to every cell, a
    value in [-amplitude, +amplitude]. Layers are summed in the given order,
    so identical arguments always give bit-identical grids.

    Args:
        resolution: Grid dimensions
        layers: Noise layers (NoiseLayer, (frequency, amplitude) or dicts)
        noise: Noise sampler (default: Perlin noise with the default seed)
        initial_value: Elevation the layers are added to

    Returns:
        Array of shape (rows, columns); all initial_value for no layers
    """
    resolution = Resolution.coerce(resolution)
    layers = as_layers(layers)
    if noise is None:
        noise = NoiseSource()

    logger.debug("Perturbating %dx%d grid with %d layer(s)",
                 resolution.rows, resolution.columns, len(layers))

    grid = initialize_grid(resolution, initial_value)
    for layer in layers:
        samples = noise.sample_grid(resolution, layer.frequency)
        grid += samples * layer.amplitude * 2 - layer.amplitude

    return grid


def cutoff(
    grid: NDArray[np.float64],
    cutoff_layers: Iterable[LayerLike],
    noise: Optional[NoiseSource] = None
) -> None:
    """Floor a grid against a second noise field, in place.

    The cutoff field is ``perturbate`` of the grid's resolution with
    ``cutoff_layers``, typically the same stack without its finest octave.
    Afterwards ``grid[r, c] >= cutoff_field[r, c]`` for every cell: detail
    above the smoother surface is kept, everything below is lifted onto it.

    Args:
        grid: Height grid to modify (2-D float64 array)
        cutoff_layers: Layers of the cutoff field
        noise: Noise sampler (default: Perlin noise with the default seed)
    """
    if not isinstance(grid, np.ndarray) or grid.dtype != np.float64:
        raise TypeError("cutoff modifies the grid in place and needs a float64 numpy array")
    check_grid(grid)

    cutoff_grid = perturbate(resolution_of(grid), cutoff_layers, noise)
    np.maximum(grid, cutoff_grid, out=grid)
