"""Procedural terrain synthesis, triangulation and rendering package."""
from .config import RenderConfiguration, GenerationConfig
from .errors import TerrainError, InvalidResolutionError, InvalidConfigurationError
from .interfaces import Resolution, NoiseLayer, RenderType, Mesh, Vertex, Edge, Face
from .pipeline import TerrainGenerator, run_generation

__all__ = [
    "RenderConfiguration",
    "GenerationConfig",
    "TerrainError",
    "InvalidResolutionError",
    "InvalidConfigurationError",
    "Resolution",
    "NoiseLayer",
    "RenderType",
    "Mesh",
    "Vertex",
    "Edge",
    "Face",
    "TerrainGenerator",
    "run_generation",
]
