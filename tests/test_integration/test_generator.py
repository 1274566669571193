"""Integration tests for end-to-end terrain generation."""
import pytest
import numpy as np
from PIL import Image

from terrainsynth.config import GenerationConfig, RenderConfiguration
from terrainsynth.errors import InvalidConfigurationError, InvalidResolutionError
from terrainsynth.interfaces import RenderType, Resolution
from terrainsynth.pipeline import TerrainGenerator, run_generation
from terrainsynth.terrain.heightfield import perturbate
from terrainsynth.terrain.noise import NoiseSource


class TestTerrainGenerator:
    """Tests for the generator builder."""

    def test_starts_flat(self, small_resolution):
        generator = TerrainGenerator(small_resolution)
        assert generator.grid.shape == small_resolution.shape
        assert generator.height_range == 0.0
        assert generator.get_height(3, 4) == 0.0

    def test_tuple_resolution(self):
        assert TerrainGenerator((4, 6)).resolution == Resolution(4, 6)

    def test_invalid_resolution(self):
        with pytest.raises(InvalidResolutionError):
            TerrainGenerator((0, 6))

    def test_chaining(self, small_resolution, reference_layers, reference_cutoff_layers):
        """Builder methods return the generator."""
        generator = TerrainGenerator(small_resolution)
        assert generator.flatten() is generator
        assert generator.perturbate(reference_layers) is generator
        assert generator.cutoff(reference_cutoff_layers) is generator

    def test_grid_read_only(self, small_resolution, reference_layers):
        """The exposed grid cannot be used to bypass the generator."""
        generator = TerrainGenerator(small_resolution).perturbate(reference_layers)
        with pytest.raises(ValueError):
            generator.grid[0, 0] = 1.0

    def test_perturbate_replaces_grid(self, small_resolution, reference_layers, perlin_noise):
        """Perturbating twice gives the same grid, regardless of prior state."""
        generator = TerrainGenerator(small_resolution, perlin_noise).perturbate(reference_layers)
        first = generator.grid.copy()
        generator.cutoff([(0.05, 100.0)]).perturbate(reference_layers)
        np.testing.assert_array_equal(generator.grid, first)

    def test_flatten(self, small_resolution, reference_layers):
        generator = TerrainGenerator(small_resolution).perturbate(reference_layers).flatten()
        assert np.all(generator.grid == 0.0)

    def test_matches_heightfield(self, small_resolution, reference_layers, perlin_noise):
        generator = TerrainGenerator(small_resolution, perlin_noise).perturbate(reference_layers)
        np.testing.assert_array_equal(
            generator.grid, perturbate(small_resolution, reference_layers, perlin_noise)
        )

    def test_statistics(self, small_resolution, reference_layers):
        generator = TerrainGenerator(small_resolution).perturbate(reference_layers)
        assert generator.min_height == pytest.approx(float(generator.grid.min()))
        assert generator.max_height == pytest.approx(float(generator.grid.max()))
        assert generator.height_range == pytest.approx(generator.max_height - generator.min_height)

    def test_cutoff_floors_grid(self, small_resolution, reference_layers, reference_cutoff_layers, perlin_noise):
        generator = TerrainGenerator(small_resolution, perlin_noise).perturbate(reference_layers)
        generator.cutoff(reference_cutoff_layers)
        floor = perturbate(small_resolution, reference_cutoff_layers, perlin_noise)
        assert np.all(generator.grid >= floor)

    def test_create_mesh(self, reference_layers):
        generator = TerrainGenerator((6, 9)).perturbate(reference_layers)
        mesh = generator.create_mesh()
        assert mesh.vertex_count == 54
        assert mesh.face_count == 2 * 5 * 8
        assert mesh.vertex(2, 3).z == generator.get_height(2, 3)

    @pytest.mark.parametrize("render_type", list(RenderType))
    def test_render(self, small_resolution, reference_layers, render_type):
        generator = TerrainGenerator(small_resolution).perturbate(reference_layers)
        pixels = generator.render(render_type)
        assert pixels.shape == (small_resolution.rows, small_resolution.columns, 3)

    def test_render_leaves_grid(self, small_resolution, reference_layers):
        generator = TerrainGenerator(small_resolution).perturbate(reference_layers)
        before = generator.grid.copy()
        generator.render(RenderType.HEIGHT_WITH_CONTOUR, RenderConfiguration(contour_line_density=5))
        np.testing.assert_array_equal(generator.grid, before)

    def test_save(self, tmp_path, small_resolution, reference_layers):
        path = tmp_path / "relief.png"
        result = TerrainGenerator(small_resolution).perturbate(reference_layers).save(path, "relief")
        assert isinstance(result, TerrainGenerator)
        with Image.open(path) as image:
            assert image.size == (small_resolution.columns, small_resolution.rows)


class TestRunGeneration:
    """Tests for recipe execution."""

    def test_writes_image(self, tmp_path):
        output = tmp_path / "Output.png"
        config = GenerationConfig(rows=20, columns=30, output_path=str(output))
        generator = run_generation(config)
        assert generator.grid.shape == (20, 30)
        with Image.open(output) as image:
            assert image.size == (30, 20)

    def test_no_output(self, tmp_path):
        config = GenerationConfig(rows=8, columns=8, output_path=None)
        generator = run_generation(config)
        assert generator.grid.shape == (8, 8)
        assert list(tmp_path.iterdir()) == []

    def test_deterministic(self):
        config = GenerationConfig(rows=16, columns=12, seed=9, output_path=None)
        np.testing.assert_array_equal(run_generation(config).grid, run_generation(config).grid)

    def test_cutoff_applied(self):
        """Final grid equals the max of terrain and cutoff fields."""
        config = GenerationConfig(rows=16, columns=12, seed=4, output_path=None)
        noise = NoiseSource(seed=4)
        expected = np.maximum(
            perturbate(Resolution(16, 12), config.layers, noise),
            perturbate(Resolution(16, 12), config.cutoff_layers, noise)
        )
        np.testing.assert_array_equal(run_generation(config).grid, expected)

    def test_without_cutoff(self):
        config = GenerationConfig(rows=10, columns=10, cutoff_layers=[], output_path=None)
        expected = perturbate(Resolution(10, 10), config.layers, NoiseSource())
        np.testing.assert_array_equal(run_generation(config).grid, expected)

    def test_invalid_config(self):
        with pytest.raises(InvalidConfigurationError):
            run_generation(GenerationConfig(rows=0, output_path=None))
