"""Filesystem helpers: atomic writes, PNG export and YAML handling.

Provides:
    - Atomic writes: tmp file → fsync → rename (no half-written rasters)
    - PNG export of RGBA / RGB / grayscale uint8 rasters via PIL
    - YAML load/dump for engine configs (PyYAML safe_load / safe_dump)
    - Directory creation with exist_ok semantics

All paths use pathlib.Path.

Usage:
    from src.utils import fs
    cfg = fs.load_yaml("configs/heatmap.v1.yaml")
    fs.atomic_save_image(surface.pixels, "outputs/heatmap.png")
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np
import yaml
from PIL import Image


def ensure_dir(p: Union[str, Path]) -> Path:
    """Create directory if it doesn't exist, return Path object.

    Parameters
    ----------
    p : Union[str, Path]
        Directory path

    Returns
    -------
    Path
        Path object (guaranteed to exist)
    """
    p = Path(p)
    p.mkdir(parents=True, exist_ok=True)
    return p


def atomic_write_bytes(
    path: Union[str, Path],
    data: bytes,
    tmp_suffix: str = ".tmp"
) -> None:
    """Write bytes to file atomically (tmp → fsync → rename).

    Parameters
    ----------
    path : Union[str, Path]
        Target file path
    data : bytes
        Data to write
    tmp_suffix : str
        Temporary file suffix, default ".tmp"

    Notes
    -----
    The tmp file lives in the target directory so the rename stays on one
    filesystem.
    """
    path = Path(path)
    ensure_dir(path.parent)

    tmp_path = path.with_suffix(path.suffix + tmp_suffix)

    try:
        with open(tmp_path, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())

        # Overwrites existing file on POSIX
        tmp_path.replace(path)
    except Exception as e:
        if tmp_path.exists():
            tmp_path.unlink()
        raise RuntimeError(f"Failed to write {path} atomically: {e}") from e


def atomic_save_image(
    img: np.ndarray,
    path: Union[str, Path],
    pil_kwargs: Optional[Dict[str, Any]] = None
) -> None:
    """Save a raster atomically.

    Parameters
    ----------
    img : np.ndarray
        (H, W, 4) RGBA, (H, W, 3) RGB or (H, W) grayscale.
        Non-uint8 input is clipped to [0, 255] and cast.
    path : Union[str, Path]
        Target file path (extension determines format)
    pil_kwargs : Optional[Dict[str, Any]]
        Additional kwargs for PIL.Image.save (e.g., optimize=True)
    """
    path = Path(path)
    pil_kwargs = pil_kwargs or {}
    ensure_dir(path.parent)

    if img.dtype != np.uint8:
        img = np.clip(img, 0, 255).astype(np.uint8)

    # Squeeze single-channel to (H, W)
    if img.ndim == 3 and img.shape[2] == 1:
        img = img.squeeze(2)

    pil_img = Image.fromarray(np.ascontiguousarray(img))

    # Keep the real extension last so PIL can detect the format
    tmp_path = path.with_name(path.stem + ".tmp" + path.suffix)
    try:
        pil_img.save(tmp_path, **pil_kwargs)
        tmp_path.replace(path)
    except Exception as e:
        if tmp_path.exists():
            tmp_path.unlink()
        raise RuntimeError(f"Failed to save image {path} atomically: {e}") from e


def atomic_yaml_dump(obj: Any, path: Union[str, Path]) -> None:
    """Save object as YAML atomically.

    Uses PyYAML safe_dump; key order is preserved.
    """
    yaml_str = yaml.safe_dump(
        obj,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True
    )
    atomic_write_bytes(Path(path), yaml_str.encode('utf-8'))


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """Load YAML file safely.

    Parameters
    ----------
    path : Union[str, Path]
        YAML file path

    Returns
    -------
    Dict[str, Any]
        Parsed YAML content

    Raises
    ------
    FileNotFoundError
        If file doesn't exist
    yaml.YAMLError
        If YAML parsing fails
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Failed to parse YAML file {path}: {e}") from e
