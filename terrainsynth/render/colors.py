"""
Color Palette and Interpolation

Linear per-channel RGB blending shared by every render mode. Channels are
truncated toward zero on output and clamped to [0, 255].
"""
from typing import Tuple

import numpy as np
from numpy.typing import ArrayLike, NDArray

Color = Tuple[int, int, int]

# Height
SEA_COLOR: Color = (61, 168, 204)

# Relief
LOW_LAND_COLOR: Color = (110, 108, 81)
HIGH_LAND_COLOR: Color = (245, 243, 218)
LIGHT_SEA_COLOR: Color = (61, 168, 204)
DARK_SEA_COLOR: Color = (13, 35, 56)
CONTINENT_LINE_COLOR: Color = (46, 46, 44)

# Contour
CONTOUR_LINE_COLOR: Color = (36, 30, 29)
CONTOUR_BACKGROUND_COLOR: Color = (224, 222, 222)


def _channel(value: float) -> int:
    return min(255, max(0, int(value)))


def blend(color1: Color, color2: Color, ratio: float) -> Color:
    """Blend two colors: ``color1 + ratio * (color2 - color1)``.

    Args:
        color1: Color at ratio 0
        color2: Color at ratio 1
        ratio: Blend factor, normally in [0, 1]

    Returns:
        Integer RGB triple
    """
    return tuple(
        _channel(float(c1) + ratio * (c2 - c1))
        for c1, c2 in zip(color1, color2)
    )


def blend_array(color1: ArrayLike, color2: ArrayLike, ratio: ArrayLike) -> NDArray[np.uint8]:
    """Vectorized ``blend`` over an array of ratios.

    Args:
        color1: RGB triple, or array of colors [..., 3]
        color2: RGB triple, or array of colors [..., 3]
        ratio: Blend factors [...]

    Returns:
        uint8 colors of shape ratio.shape + (3,)
    """
    c1 = np.asarray(color1, dtype=np.float64)
    c2 = np.asarray(color2, dtype=np.float64)
    t = np.asarray(ratio, dtype=np.float64)[..., None]

    blended = c1 + t * (c2 - c1)
    return np.clip(np.trunc(blended), 0, 255).astype(np.uint8)


def gray(ratio: ArrayLike) -> NDArray[np.uint8]:
    """Grayscale colors ``(255 * ratio,) * 3`` for an array of ratios."""
    return blend_array((0, 0, 0), (255, 255, 255), ratio)
