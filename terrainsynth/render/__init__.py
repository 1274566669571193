"""Color mapping of height grids to pixel buffers."""
from .colors import (
    Color,
    blend,
    blend_array,
)
from .modes import (
    PixelBuffer,
    compute_statistics,
    render,
    render_height,
    render_relief,
    render_contour,
    render_height_with_contour,
)
from .image import (
    to_image,
    save_pixel_buffer,
)

__all__ = [
    'Color',
    'blend',
    'blend_array',
    'PixelBuffer',
    'compute_statistics',
    'render',
    'render_height',
    'render_relief',
    'render_contour',
    'render_height_with_contour',
    'to_image',
    'save_pixel_buffer',
]
