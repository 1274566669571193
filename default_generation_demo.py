#!/usr/bin/env python3
"""
Default Terrain Generation Demo

Reproduces the reference generation:
- 350 x 500 grid, five Perlin noise layers
- Cutoff pass with the four coarsest layers (plateaus)
- One image per render mode
- 3D preview of the triangulated mesh

Usage:
    python default_generation_demo.py [recipe.yaml] [output_dir]
"""
import sys
from pathlib import Path

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from terrainsynth import GenerationConfig, RenderType
from terrainsynth.pipeline import run_generation

# Every n-th grid line goes into the 3D preview
PREVIEW_STRIDE = 10


def plot_mesh_preview(generator, output_path: Path) -> None:
    """Save a decimated 3D surface plot of the generator's mesh."""
    grid = generator.grid[::PREVIEW_STRIDE, ::PREVIEW_STRIDE]
    rows, cols = np.meshgrid(
        np.arange(grid.shape[0]) * PREVIEW_STRIDE,
        np.arange(grid.shape[1]) * PREVIEW_STRIDE,
        indexing="ij"
    )

    fig = plt.figure(figsize=(10, 7))
    ax = fig.add_subplot(111, projection='3d')
    ax.plot_surface(rows, cols, grid, cmap='terrain', linewidth=0, antialiased=False)
    ax.set_xlabel('Row')
    ax.set_ylabel('Column')
    ax.set_zlabel('Height')
    ax.set_title('Terrain Mesh Preview')
    fig.savefig(output_path, dpi=120, bbox_inches='tight')
    plt.close(fig)


def run_demo():
    """Run the complete demonstration."""
    print("=" * 60)
    print("TERRAIN GENERATION")
    print("=" * 60)

    if len(sys.argv) > 1:
        config = GenerationConfig.from_yaml(sys.argv[1])
        print(f"Loaded recipe: {sys.argv[1]}")
    else:
        config = GenerationConfig()
    output_dir = Path(sys.argv[2]) if len(sys.argv) > 2 else Path("output")
    output_dir.mkdir(parents=True, exist_ok=True)

    config.output_path = str(output_dir / "Output.png")

    print(f"  Grid: {config.rows} x {config.columns}")
    print(f"  Layers: {len(config.layers)}, cutoff layers: {len(config.cutoff_layers)}")

    generator = run_generation(config)
    print(f"  Height range: {generator.min_height:.2f} .. {generator.max_height:.2f}")
    print(f"  Saved: {config.output_path}")

    for render_type in RenderType:
        path = output_dir / f"terrain_{render_type.value}.png"
        generator.save(path, render_type, config.render)
        print(f"  Saved: {path}")

    mesh = generator.create_mesh()
    print(f"  Mesh: {mesh.vertex_count} vertices, {mesh.face_count} faces")

    preview_path = output_dir / "terrain_mesh.png"
    plot_mesh_preview(generator, preview_path)
    print(f"  Saved: {preview_path}")

    print("Done.")


if __name__ == "__main__":
    run_demo()
