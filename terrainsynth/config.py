"""Render and generation configuration management."""
import math
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List, Optional, Union

import yaml

from .errors import InvalidConfigurationError
from .interfaces import NoiseLayer, RenderType, as_layers
from .terrain.noise import DEFAULT_SEED, NoiseType

# Layer stacks of the reference generation: five octaves for the terrain,
# the same stack without its finest octave for the cutoff surface.
DEFAULT_LAYERS = (
    NoiseLayer(0.001, 30.0),
    NoiseLayer(0.005, 30.0),
    NoiseLayer(0.01, 20.0),
    NoiseLayer(0.07, 0.8),
    NoiseLayer(0.2, 0.5),
)
DEFAULT_CUTOFF_LAYERS = DEFAULT_LAYERS[:4]


@dataclass
class RenderConfiguration:
    """Settings shared by all render modes.

    Attributes:
        sea_level_ratio: Sea level as a fraction of the height range above
            the minimum height
        show_sea: Paint cells below sea level with the sea color (Height
            and HeightWithContour modes)
        contour_line_density: Number of contour intervals across the
            height range
    """
    sea_level_ratio: float = 0.2
    show_sea: bool = True
    contour_line_density: float = 25.0

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "RenderConfiguration":
        """Load configuration from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def to_yaml(self, path: Union[str, Path]) -> None:
        """Save configuration to YAML file."""
        with open(path, 'w') as f:
            yaml.dump(asdict(self), f, default_flow_style=False)

    def validate(self) -> List[str]:
        """Validate configuration parameters.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not _is_number(self.sea_level_ratio) or not (0.0 <= self.sea_level_ratio <= 1.0):
            errors.append("sea_level_ratio must be in [0, 1]")

        if not isinstance(self.show_sea, bool):
            errors.append("show_sea must be a boolean")

        if not _is_number(self.contour_line_density) or not self.contour_line_density > 0:
            errors.append("contour_line_density must be > 0")

        return errors


@dataclass
class GenerationConfig:
    """Complete recipe for one terrain: grid, noise, layers and output.

    Defaults reproduce the reference generation: a 350 x 500 grid, five
    Perlin layers, four cutoff layers and a Height render at sea-level
    ratio 0.2 written to Output.png.
    """
    rows: int = 350
    columns: int = 500

    # Noise
    seed: int = DEFAULT_SEED
    noise_type: NoiseType = NoiseType.PERLIN
    layers: List[NoiseLayer] = field(default_factory=lambda: list(DEFAULT_LAYERS))
    cutoff_layers: List[NoiseLayer] = field(default_factory=lambda: list(DEFAULT_CUTOFF_LAYERS))

    # Output
    render_type: RenderType = RenderType.HEIGHT
    output_path: Optional[str] = "Output.png"
    render: RenderConfiguration = field(default_factory=RenderConfiguration)

    def __post_init__(self):
        self.layers = as_layers(self.layers)
        self.cutoff_layers = as_layers(self.cutoff_layers or [])
        if isinstance(self.render, dict):
            self.render = RenderConfiguration(**self.render)
        try:
            self.noise_type = NoiseType(self.noise_type)
        except ValueError:
            raise InvalidConfigurationError(f"Unknown noise type: {self.noise_type}") from None
        try:
            self.render_type = RenderType(self.render_type)
        except ValueError:
            raise InvalidConfigurationError(f"Unknown render type: {self.render_type}") from None

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "GenerationConfig":
        """Load a generation recipe from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def to_dict(self) -> dict:
        return {
            'rows': self.rows,
            'columns': self.columns,
            'seed': self.seed,
            'noise_type': self.noise_type.value,
            'layers': [layer.to_dict() for layer in self.layers],
            'cutoff_layers': [layer.to_dict() for layer in self.cutoff_layers],
            'render_type': self.render_type.value,
            'output_path': self.output_path,
            'render': asdict(self.render),
        }

    def to_yaml(self, path: Union[str, Path]) -> None:
        """Save the recipe to YAML file."""
        with open(path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def validate(self) -> List[str]:
        """Validate the recipe.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        for name in ("rows", "columns"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                errors.append(f"{name} must be a positive integer")

        if isinstance(self.seed, bool) or not isinstance(self.seed, int) or not (0 <= self.seed < 2**32):
            errors.append("seed must be an integer in [0, 2**32)")

        errors.extend(f"render.{e}" for e in self.render.validate())

        return errors


def require_valid(config: Union[RenderConfiguration, GenerationConfig]) -> None:
    """Raise InvalidConfigurationError listing every problem in ``config``."""
    errors = config.validate()
    if errors:
        raise InvalidConfigurationError("; ".join(errors))


def _is_number(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )
