"""Heatmap accumulation and colorization engine.

Renders weighted 2D points into RGBA heatmaps on a raster surface, averaging
intensity across repeated draw passes.

Architecture layers (strict one-way dependency):
    src/heatmap/ → src/utils/

Key invariants:
    - Pixels are straight 8-bit RGBA, (H, W, 4) numpy arrays
    - Accumulator buffers are zero whenever a draw call returns
    - Covered pixels are always written fully opaque
    - YAML-only configs
"""

__version__ = "0.3.0"
