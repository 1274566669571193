"""End-to-end terrain generation: height field, mesh and rendered image."""
import logging
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

import numpy as np
from numpy.typing import NDArray

from .config import GenerationConfig, RenderConfiguration, require_valid
from .interfaces import LayerLike, Mesh, RenderType, Resolution
from .render.image import save_pixel_buffer
from .render.modes import PixelBuffer, render
from .terrain.heightfield import cutoff, initialize_grid, perturbate
from .terrain.mesh import build_mesh
from .terrain.noise import NoiseSource

logger = logging.getLogger(__name__)


class TerrainGenerator:
    """Builder around one height grid.

    ``flatten`` and ``perturbate`` replace the grid, ``cutoff`` modifies it
    in place; all three return the generator so calls can be chained.
    ``create_mesh`` and ``render`` only read the grid.

    Example:
        pixels = (TerrainGenerator((350, 500))
                  .perturbate(layers)
                  .cutoff(layers[:-1])
                  .render(RenderType.RELIEF))
    """

    def __init__(
        self,
        resolution: Union[Resolution, Sequence[int]],
        noise: Optional[NoiseSource] = None
    ):
        self.resolution = Resolution.coerce(resolution)
        self.noise = noise if noise is not None else NoiseSource()
        self._grid = initialize_grid(self.resolution)

    @property
    def grid(self) -> NDArray[np.float64]:
        """Read-only view of the current height grid."""
        view = self._grid.view()
        view.flags.writeable = False
        return view

    @property
    def min_height(self) -> float:
        return float(self._grid.min())

    @property
    def max_height(self) -> float:
        return float(self._grid.max())

    @property
    def height_range(self) -> float:
        return self.max_height - self.min_height

    def get_height(self, row: int, col: int) -> float:
        return float(self._grid[row, col])

    def flatten(self) -> "TerrainGenerator":
        """Reset to an all-zero grid."""
        self._grid = initialize_grid(self.resolution)
        return self

    def perturbate(self, layers: Iterable[LayerLike]) -> "TerrainGenerator":
        """Replace the grid with a fresh multi-layer noise field."""
        self._grid = perturbate(self.resolution, layers, self.noise)
        return self

    def cutoff(self, layers: Iterable[LayerLike]) -> "TerrainGenerator":
        """Floor the current grid against a cutoff field built from ``layers``, in place."""
        cutoff(self._grid, layers, self.noise)
        return self

    def create_mesh(self) -> Mesh:
        """Triangle mesh of the current grid."""
        return build_mesh(self._grid)

    def render(
        self,
        render_type: Union[RenderType, str],
        configuration: Optional[RenderConfiguration] = None
    ) -> PixelBuffer:
        """Pixel buffer of the current grid."""
        return render(self._grid, render_type, configuration)

    def save(
        self,
        path: Union[str, Path],
        render_type: Union[RenderType, str],
        configuration: Optional[RenderConfiguration] = None
    ) -> "TerrainGenerator":
        """Render the current grid and encode it to ``path``."""
        save_pixel_buffer(self.render(render_type, configuration), path)
        return self


def run_generation(config: GenerationConfig) -> TerrainGenerator:
    """
    Execute a complete generation recipe.

    Builds the grid from ``config.layers``, applies the cutoff pass when
    ``config.cutoff_layers`` is non-empty and, if ``config.output_path`` is
    set, writes the rendered image there.

    Args:
        config: Generation recipe

    Returns:
        TerrainGenerator holding the final grid
    """
    require_valid(config)

    noise = NoiseSource(seed=config.seed, noise_type=config.noise_type)
    generator = TerrainGenerator(Resolution(config.rows, config.columns), noise)

    logger.info("Generating %dx%d terrain (%s noise, seed %d)",
                config.rows, config.columns, config.noise_type.value, config.seed)

    generator.perturbate(config.layers)
    if config.cutoff_layers:
        generator.cutoff(config.cutoff_layers)

    if config.output_path:
        generator.save(config.output_path, config.render_type, config.render)

    return generator
