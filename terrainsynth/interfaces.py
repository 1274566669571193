"""Shared data model passed between the height field, mesh and render stages."""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Mapping, NamedTuple, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .errors import InvalidConfigurationError, InvalidResolutionError


def _is_integer(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


@dataclass(frozen=True)
class Resolution:
    """Grid dimensions of a height field.

    Attributes:
        rows: Number of grid rows (image height)
        columns: Number of grid columns (image width)
    """
    rows: int
    columns: int

    def __post_init__(self):
        for name in ("rows", "columns"):
            value = getattr(self, name)
            if not _is_integer(value):
                raise InvalidResolutionError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise InvalidResolutionError(f"{name} must be positive, got {value}")
            object.__setattr__(self, name, int(value))

    @property
    def shape(self) -> Tuple[int, int]:
        """Numpy shape ``(rows, columns)``."""
        return (self.rows, self.columns)

    @property
    def cell_count(self) -> int:
        return self.rows * self.columns

    @classmethod
    def coerce(cls, value: Union["Resolution", Sequence[int]]) -> "Resolution":
        """Accept a Resolution or a ``(rows, columns)`` pair."""
        if isinstance(value, Resolution):
            return value
        try:
            rows, columns = value
        except (TypeError, ValueError):
            raise InvalidResolutionError(
                f"Expected Resolution or (rows, columns), got {value!r}"
            ) from None
        return cls(rows, columns)


@dataclass(frozen=True)
class NoiseLayer:
    """One octave of noise.

    Attributes:
        frequency: Coordinate scale applied before sampling (> 0)
        amplitude: Half-width of the height contribution (>= 0); the layer
            adds a value in [-amplitude, +amplitude] to every cell
    """
    frequency: float
    amplitude: float

    def __post_init__(self):
        frequency = float(self.frequency)
        amplitude = float(self.amplitude)
        if not np.isfinite(frequency) or frequency <= 0:
            raise InvalidConfigurationError(f"Layer frequency must be > 0, got {self.frequency}")
        if not np.isfinite(amplitude) or amplitude < 0:
            raise InvalidConfigurationError(f"Layer amplitude must be >= 0, got {self.amplitude}")
        object.__setattr__(self, "frequency", frequency)
        object.__setattr__(self, "amplitude", amplitude)

    def to_dict(self) -> dict:
        return {"frequency": self.frequency, "amplitude": self.amplitude}


LayerLike = Union[NoiseLayer, Tuple[float, float], Mapping[str, float]]


def as_layers(layers: Iterable[LayerLike]) -> List[NoiseLayer]:
    """Normalize layers given as NoiseLayer, ``(frequency, amplitude)`` or dicts."""
    result = []
    for layer in layers:
        if isinstance(layer, NoiseLayer):
            result.append(layer)
        elif isinstance(layer, Mapping):
            try:
                result.append(NoiseLayer(layer["frequency"], layer["amplitude"]))
            except KeyError as e:
                raise InvalidConfigurationError(f"Layer mapping is missing {e}") from None
        else:
            frequency, amplitude = layer
            result.append(NoiseLayer(frequency, amplitude))
    return result


class RenderType(str, Enum):
    """Visualization mode of a render call."""
    HEIGHT = "height"
    RELIEF = "relief"
    CONTOUR = "contour"
    HEIGHT_WITH_CONTOUR = "height_with_contour"


class Vertex(NamedTuple):
    x: float
    y: float
    z: float


class Edge(NamedTuple):
    v1: int
    v2: int


class Face(NamedTuple):
    v1: int
    v2: int
    v3: int


@dataclass(frozen=True, eq=False)
class Mesh:
    """Triangulated surface built from a height grid.

    Attributes:
        resolution: Grid dimensions the mesh was built from
        vertices: Vertex positions (N, 3), row-major, N = rows * columns
        edges: Edge index pairs (0, 2); not populated
        faces: Triangle vertex indices (M, 3)
    """
    resolution: Resolution
    vertices: NDArray[np.float64]
    edges: NDArray[np.int64]
    faces: NDArray[np.int64]

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def face_count(self) -> int:
        return len(self.faces)

    def vertex(self, row: int, col: int) -> Vertex:
        """Vertex at grid position (row, col)."""
        x, y, z = self.vertices[row * self.resolution.columns + col]
        return Vertex(float(x), float(y), float(z))

    def face(self, index: int) -> Face:
        v1, v2, v3 = self.faces[index]
        return Face(int(v1), int(v2), int(v3))


@dataclass(frozen=True)
class HeightStatistics:
    """Whole-grid statistics shared by every render mode.

    Attributes:
        min_height: Lowest elevation in the grid
        max_height: Highest elevation in the grid
        height_range: max_height - min_height
        sea_level: sea_level_ratio * height_range + min_height
    """
    min_height: float
    max_height: float
    height_range: float
    sea_level: float

    @property
    def is_degenerate(self) -> bool:
        """True for a flat grid, where every ratio over the range is undefined."""
        return self.height_range == 0.0


def check_grid(grid) -> NDArray[np.float64]:
    """Return ``grid`` as a 2-D float64 array, rejecting empty or non-finite input."""
    array = np.asarray(grid, dtype=np.float64)
    if array.ndim != 2:
        raise InvalidResolutionError(f"Height grid must be 2-D, got shape {array.shape}")
    if array.size == 0:
        raise InvalidResolutionError(f"Height grid must not be empty, got shape {array.shape}")
    if not np.all(np.isfinite(array)):
        raise InvalidConfigurationError("Height grid contains non-finite values")
    return array


def resolution_of(grid) -> Resolution:
    """Resolution matching a 2-D height grid."""
    array = np.asarray(grid)
    if array.ndim != 2:
        raise InvalidResolutionError(f"Height grid must be 2-D, got shape {array.shape}")
    return Resolution(*array.shape)
