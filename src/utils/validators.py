"""YAML schema validation and config loading.

Provides centralized validation for heatmap engine configuration using pydantic:
    - Heatmap schema (heatmap.v1.yaml): stamp geometry, gradient stops,
      normalization maximum, default minimum opacity

Loading through these validators gives fail-fast errors with the offending
key and expected range instead of silently wrong pixels.

Units:
    - Stamp radius / blur: pixels
    - Gradient positions: [0.0, 1.0]
    - Colors: CSS names, hex strings, or 0-255 RGB(A) tuples

Usage:
    from src.utils import validators

    cfg = validators.load_heatmap_config("configs/heatmap.v1.yaml")
    engine.configure(cfg)
"""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from pydantic import BaseModel, Field, field_validator

from . import color as color_utils

ColorSpec = Union[str, Tuple[int, int, int], Tuple[int, int, int, int]]


# ============================================================================
# HEATMAP SCHEMA V1
# ============================================================================

class StampConfig(BaseModel):
    """Influence stamp geometry (pixels)."""
    radius: int = Field(default=25, ge=1, description="Solid circle radius (px)")
    blur: int = Field(default=15, ge=0, description="Blur falloff width (px)")


class HeatmapConfigV1(BaseModel):
    """Heatmap engine configuration (heatmap.v1.yaml schema).

    `gradient` left unset means the engine's built-in default stops.
    """
    model_config = {'populate_by_name': True}

    schema_version: str = Field("heatmap.v1", alias="schema", description="Schema version")
    stamp: StampConfig = Field(default_factory=StampConfig)
    gradient: Optional[Dict[float, ColorSpec]] = Field(
        default=None, description="Stop position → color"
    )
    max: float = Field(default=1.0, gt=0.0, description="Weight normalization maximum")
    min_opacity: float = Field(default=0.05, ge=0.0, le=1.0, description="Per-point opacity floor")

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "heatmap.v1":
            raise ValueError(f"Expected schema 'heatmap.v1', got '{v}'")
        return v

    @field_validator('gradient')
    @classmethod
    def validate_gradient(
        cls, v: Optional[Dict[float, ColorSpec]]
    ) -> Optional[Dict[float, ColorSpec]]:
        if v is None:
            return v
        if not v:
            raise ValueError("gradient must define at least one stop")
        for pos, spec in v.items():
            if not (0.0 <= pos <= 1.0):
                raise ValueError(f"Gradient stop position {pos} out of bounds [0.0, 1.0]")
            # Unknown names raise ValueError here rather than at first draw
            color_utils.resolve_color(spec)
        return v


def load_heatmap_config(path: Union[str, Path]) -> HeatmapConfigV1:
    """Load and validate heatmap config from YAML.

    Parameters
    ----------
    path : str or Path
        Path to heatmap.v1.yaml file

    Returns
    -------
    HeatmapConfigV1
        Validated config model

    Raises
    ------
    pydantic.ValidationError
        If config is invalid
    FileNotFoundError
        If file does not exist
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Heatmap config not found: {path}")

    cfg = fs.load_yaml(path) or {}
    return HeatmapConfigV1(**cfg)


def dump_heatmap_config(cfg: HeatmapConfigV1) -> Dict[str, Any]:
    """Serialize a config back to a YAML-ready dict (schema key restored)."""
    data = cfg.model_dump(by_alias=True)
    if data.get('gradient') is not None:
        data['gradient'] = {
            float(k): (list(c) if isinstance(c, tuple) else c)
            for k, c in data['gradient'].items()
        }
    return data
