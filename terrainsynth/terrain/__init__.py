"""Height field synthesis and mesh construction."""
from .noise import (
    NoiseType,
    NoiseSource,
)
from .heightfield import (
    initialize_grid,
    perturbate,
    cutoff,
)
from .mesh import (
    build_mesh,
    grid_faces,
    grid_vertices,
)

__all__ = [
    'NoiseType',
    'NoiseSource',
    'initialize_grid',
    'perturbate',
    'cutoff',
    'build_mesh',
    'grid_faces',
    'grid_vertices',
]
