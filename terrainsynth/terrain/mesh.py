"""Height grid to triangle mesh conversion."""
import logging

import numpy as np
from numpy.typing import NDArray

from ..interfaces import Mesh, check_grid, resolution_of

logger = logging.getLogger(__name__)


def grid_vertices(grid: NDArray[np.float64]) -> NDArray[np.float64]:
    """Row-major vertex positions (row, col, height), shape (rows * columns, 3)."""
    rows, columns = grid.shape
    row_idx, col_idx = np.meshgrid(np.arange(rows), np.arange(columns), indexing="ij")
    return np.stack([row_idx.ravel(), col_idx.ravel(), grid.ravel()], axis=1).astype(np.float64)


def grid_faces(rows: int, columns: int) -> NDArray[np.int64]:
    """Two triangles per grid cell, in row-major cell order.

    Cell (row, col) yields (top_left, top_right, bottom_left) followed by
    (top_right, bottom_right, bottom_left).
    """
    if rows < 2 or columns < 2:
        return np.empty((0, 3), dtype=np.int64)

    top_left = (
        np.arange(rows - 1, dtype=np.int64)[:, None] * columns
        + np.arange(columns - 1, dtype=np.int64)[None, :]
    ).ravel()
    top_right = top_left + 1
    bottom_left = top_left + columns
    bottom_right = bottom_left + 1

    faces = np.empty((2 * len(top_left), 3), dtype=np.int64)
    faces[0::2] = np.stack([top_left, top_right, bottom_left], axis=1)
    faces[1::2] = np.stack([top_right, bottom_right, bottom_left], axis=1)
    return faces


def build_mesh(grid: NDArray[np.float64]) -> Mesh:
    """Convert a height grid to a triangle mesh.

    Args:
        grid: 2D elevation array [rows, columns]

    Returns:
        Mesh with rows * columns vertices and 2 * (rows - 1) * (columns - 1)
        faces (none when either dimension is below 2)
    """
    grid = check_grid(grid)
    rows, columns = grid.shape

    vertices = grid_vertices(grid)
    faces = grid_faces(rows, columns)
    edges = np.empty((0, 2), dtype=np.int64)

    for array in (vertices, faces, edges):
        array.flags.writeable = False

    logger.debug("Built mesh with %d vertices and %d faces", len(vertices), len(faces))

    return Mesh(
        resolution=resolution_of(grid),
        vertices=vertices,
        edges=edges,
        faces=faces
    )
