"""
Height Field Rendering

Maps a height grid to an RGB pixel buffer under one of four visualization
modes. Whole-grid statistics are computed once per call and every mode is
a vectorized pass over the grid; the input grid is never modified.
"""
import logging
from typing import Callable, Dict, Optional, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from ..config import RenderConfiguration, require_valid
from ..errors import InvalidConfigurationError
from ..interfaces import HeightStatistics, RenderType, check_grid
from .colors import (
    CONTINENT_LINE_COLOR,
    CONTOUR_BACKGROUND_COLOR,
    CONTOUR_LINE_COLOR,
    DARK_SEA_COLOR,
    HIGH_LAND_COLOR,
    LIGHT_SEA_COLOR,
    LOW_LAND_COLOR,
    SEA_COLOR,
    blend_array,
    gray,
)

logger = logging.getLogger(__name__)

PixelBuffer = NDArray[np.uint8]

# Continent line half-width, as a fraction of the height range
CONTINENT_LINE_BUFFER = 3.0 / 255.0
# Contour band half-widths, as fractions of the contour span
CONTOUR_LINE_WIDTH = 0.05
CONTOUR_SPILL_WIDTH = 0.1


def compute_statistics(grid: NDArray[np.float64], configuration: RenderConfiguration) -> HeightStatistics:
    """Min, max, range and sea level of a grid."""
    min_height = float(np.min(grid))
    max_height = float(np.max(grid))
    height_range = max_height - min_height
    return HeightStatistics(
        min_height=min_height,
        max_height=max_height,
        height_range=height_range,
        sea_level=configuration.sea_level_ratio * height_range + min_height
    )


def _empty_pixels(grid: NDArray[np.float64]) -> PixelBuffer:
    return np.empty(grid.shape + (3,), dtype=np.uint8)


def _contour_distance(
    grid: NDArray[np.float64],
    stats: HeightStatistics,
    configuration: RenderConfiguration
) -> Tuple[NDArray[np.float64], float]:
    """Distance of each cell to its nearest contour level, and the contour span."""
    span = stats.height_range / configuration.contour_line_density
    remainder = np.mod(grid - stats.min_height, span)
    # remainder is in [0, span): below the next level by span - remainder,
    # above the previous one by remainder
    distance = np.minimum(np.abs(remainder - span), remainder)
    return distance, span


def render_height(
    grid: NDArray[np.float64],
    stats: HeightStatistics,
    configuration: RenderConfiguration
) -> PixelBuffer:
    """Grayscale elevation, with cells below sea level in the sea color."""
    if stats.is_degenerate:
        ratio = np.zeros_like(grid)
    else:
        ratio = (grid - stats.min_height) / stats.height_range

    pixels = gray(ratio)
    if configuration.show_sea:
        pixels[grid < stats.sea_level] = SEA_COLOR
    return pixels


def render_relief(
    grid: NDArray[np.float64],
    stats: HeightStatistics,
    configuration: RenderConfiguration
) -> PixelBuffer:
    """Land and sea color ramps separated by a continent line at sea level."""
    sea_level = stats.sea_level
    buffer = CONTINENT_LINE_BUFFER * stats.height_range

    pixels = _empty_pixels(grid)

    # Non-empty masks guarantee non-zero denominators
    land = grid > sea_level
    if np.any(land):
        land_range = stats.max_height - sea_level
        pixels[land] = blend_array(
            LOW_LAND_COLOR, HIGH_LAND_COLOR, (grid[land] - sea_level) / land_range
        )

    sea = grid < sea_level
    if np.any(sea):
        sea_range = sea_level - stats.min_height
        pixels[sea] = blend_array(
            LIGHT_SEA_COLOR, DARK_SEA_COLOR, (sea_level - grid[sea]) / sea_range
        )

    pixels[np.abs(grid - sea_level) <= buffer] = CONTINENT_LINE_COLOR
    return pixels


def render_contour(
    grid: NDArray[np.float64],
    stats: HeightStatistics,
    configuration: RenderConfiguration
) -> PixelBuffer:
    """Contour lines on a flat background."""
    pixels = _empty_pixels(grid)
    pixels[...] = CONTOUR_BACKGROUND_COLOR
    if stats.is_degenerate:
        return pixels

    distance, span = _contour_distance(grid, stats, configuration)
    band = span * CONTOUR_LINE_WIDTH
    on_line = distance < band
    pixels[on_line] = blend_array(
        CONTOUR_LINE_COLOR, CONTOUR_BACKGROUND_COLOR, distance[on_line] / band
    )
    return pixels


def render_height_with_contour(
    grid: NDArray[np.float64],
    stats: HeightStatistics,
    configuration: RenderConfiguration
) -> PixelBuffer:
    """Height mode colors, pulled toward the contour color near each level."""
    pixels = render_height(grid, stats, configuration)
    if stats.is_degenerate:
        return pixels

    distance, span = _contour_distance(grid, stats, configuration)
    band = span * CONTOUR_SPILL_WIDTH
    spill = distance < band
    pixels[spill] = blend_array(pixels[spill], CONTOUR_LINE_COLOR, distance[spill] / band)
    return pixels


_RENDERERS: Dict[RenderType, Callable[..., PixelBuffer]] = {
    RenderType.HEIGHT: render_height,
    RenderType.RELIEF: render_relief,
    RenderType.CONTOUR: render_contour,
    RenderType.HEIGHT_WITH_CONTOUR: render_height_with_contour,
}


def render(
    grid: NDArray[np.float64],
    render_type: Union[RenderType, str],
    configuration: Optional[RenderConfiguration] = None
) -> PixelBuffer:
    """Render a height grid to pixels.

    Args:
        grid: 2D elevation array [rows, columns]
        render_type: Visualization mode
        configuration: Sea level, sea display and contour density
            (defaults to RenderConfiguration())

    Returns:
        uint8 RGB array of shape (rows, columns, 3)
    """
    if configuration is None:
        configuration = RenderConfiguration()
    require_valid(configuration)

    try:
        render_type = RenderType(render_type)
    except ValueError:
        raise InvalidConfigurationError(f"Unknown render type: {render_type}") from None

    grid = check_grid(grid)
    stats = compute_statistics(grid, configuration)
    logger.debug("Rendering %dx%d grid in %s mode (range %.3f, sea level %.3f)",
                 grid.shape[0], grid.shape[1], render_type.value,
                 stats.height_range, stats.sea_level)

    return _RENDERERS[render_type](grid, stats, configuration)
