"""Exceptions raised by terrain synthesis and rendering."""


class TerrainError(Exception):
    """Base class for all terrainsynth errors."""


class InvalidResolutionError(TerrainError, ValueError):
    """Grid dimensions are not positive integers, or a grid is not 2-D."""


class InvalidConfigurationError(TerrainError, ValueError):
    """A layer, render configuration or generation recipe is out of range."""
