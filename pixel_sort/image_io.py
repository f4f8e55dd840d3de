# pixel_sort/image_io.py
from __future__ import annotations

from pathlib import Path
from typing import Dict, Tuple

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .constants import (
    CHANNEL_MAX,
    DEFAULT_OUTPUT_FORMAT,
    EXPAND_8_TO_16,
    FORMAT_ALIASES,
    FORMAT_EXTENSIONS,
    OUTPUT_SUFFIX_MASK,
    OUTPUT_SUFFIX_SORTED,
    OUTPUT_SUFFIX_SPANS,
)
from .core_types import U16Image, assert_u16_grid
from .errors import UnsupportedFormat

"""
Image I/O helpers: decode to a 16-bit RGBA grid, encode back to PNG/JPEG/TIFF.

Decode and encode errors from Pillow propagate unchanged.
"""

_GREY16_MODES = {"I;16", "I;16L", "I;16B", "I;16N", "I"}


def normalise_format(fmt: str) -> str:
    """Lower-case a format tag and resolve aliases ('jpg' -> 'jpeg')."""
    key = fmt.strip().lower().lstrip(".")
    return FORMAT_ALIASES.get(key, key)


def _to_rgba16(im: Image.Image) -> U16Image:
    if im.mode in _GREY16_MODES:
        grey = np.clip(np.array(im, dtype=np.int64), 0, CHANNEL_MAX).astype(np.uint16)
        H, W = grey.shape
        out = np.empty((H, W, 4), dtype=np.uint16)
        out[..., 0] = grey
        out[..., 1] = grey
        out[..., 2] = grey
        out[..., 3] = CHANNEL_MAX
        return out
    arr = np.array(im.convert("RGBA"), dtype=np.uint8)
    return arr.astype(np.uint16) * np.uint16(EXPAND_8_TO_16)


def load_pixel_grid(path: Path) -> Tuple[U16Image, str]:
    """
    Decode an image file.

    Returns:
      grid: uint16 [H,W,4] RGBA, 8-bit sources expanded by *257
      fmt : Pillow's format name lower-cased ('png', 'jpeg', 'tiff', ...)
    """
    with Image.open(path) as im0:
        fmt = (im0.format or DEFAULT_OUTPUT_FORMAT).lower()
        im = ImageOps.exif_transpose(im0)
        grid = _to_rgba16(im)
    return grid, fmt


def grid_to_image(grid: U16Image) -> Image.Image:
    """8-bit RGBA Pillow image from a 16-bit grid (value >> 8)."""
    assert_u16_grid(grid)
    arr = (grid >> 8).astype(np.uint8)
    return Image.fromarray(np.ascontiguousarray(arr))


def save_pixel_grid(path: Path, grid: U16Image, fmt: str) -> Path:
    """
    Encode `grid` as `fmt` (png | jpeg | tiff) at `path`.
    JPEG drops alpha. Returns the written path.
    """
    fmt_n = normalise_format(fmt)
    if fmt_n not in FORMAT_EXTENSIONS:
        raise UnsupportedFormat(fmt)
    im = grid_to_image(grid)
    if fmt_n == "jpeg":
        im = im.convert("RGB")
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    im.save(path, format=fmt_n.upper())
    return Path(path)


def output_paths(src: Path, outdir: Path, fmt: str) -> Dict[str, Path]:
    """
    Output locations for one source file:
      sorted -> <outdir>/<stem>_sorted.<ext>
      mask   -> <outdir>/<stem>_mask.<ext>
      spans  -> <outdir>/<stem>_spans.<ext>
    """
    fmt_n = normalise_format(fmt)
    if fmt_n not in FORMAT_EXTENSIONS:
        raise UnsupportedFormat(fmt)
    ext = FORMAT_EXTENSIONS[fmt_n]
    stem = Path(src).stem
    return {
        "sorted": outdir / f"{stem}{OUTPUT_SUFFIX_SORTED}{ext}",
        "mask": outdir / f"{stem}{OUTPUT_SUFFIX_MASK}{ext}",
        "spans": outdir / f"{stem}{OUTPUT_SUFFIX_SPANS}{ext}",
    }


def is_image_file(path: Path) -> bool:
    try:
        with Image.open(path) as im:
            im.seek(0)
            im.load()
        return True
    except (UnidentifiedImageError, OSError):
        return False


__all__ = [
    "normalise_format",
    "load_pixel_grid",
    "grid_to_image",
    "save_pixel_grid",
    "output_paths",
    "is_image_file",
]
