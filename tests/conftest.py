"""Shared pytest fixtures for all test modules."""
import pytest
import numpy as np

from terrainsynth.config import RenderConfiguration, DEFAULT_LAYERS, DEFAULT_CUTOFF_LAYERS
from terrainsynth.interfaces import Resolution
from terrainsynth.terrain.noise import NoiseSource, NoiseType


# === Configuration Fixtures ===

@pytest.fixture
def default_render_config():
    """Default render settings (sea level ratio 0.2, sea shown, 25 contours)."""
    return RenderConfiguration()


@pytest.fixture
def no_sea_config():
    """Render settings with the sea overlay disabled."""
    return RenderConfiguration(show_sea=False)


# === Grid Fixtures ===

@pytest.fixture
def small_resolution():
    """Small non-square grid for fast tests."""
    return Resolution(24, 32)


@pytest.fixture
def square_grid():
    """2x2 grid with min 0, max 15, range 15."""
    return np.array([[0.0, 10.0], [5.0, 15.0]])


@pytest.fixture
def ramp_grid():
    """1x101 grid with heights 0, 1, ..., 100."""
    return np.arange(101, dtype=np.float64).reshape(1, 101)


# === Noise Fixtures ===

@pytest.fixture
def perlin_noise():
    return NoiseSource(seed=42, noise_type=NoiseType.PERLIN)


@pytest.fixture
def value_noise():
    return NoiseSource(seed=42, noise_type=NoiseType.VALUE)


@pytest.fixture
def reference_layers():
    """Five-octave layer stack of the reference generation."""
    return list(DEFAULT_LAYERS)


@pytest.fixture
def reference_cutoff_layers():
    """Reference stack without its finest octave."""
    return list(DEFAULT_CUTOFF_LAYERS)
