# pixel_sort/mask.py
from __future__ import annotations

"""
Luminance mask generation.

Exports:
- luminance(grid) -> float64 (H,W) perceived luminance in 16-bit units
- generate_mask(grid, low, high, invert) -> U8Mask of MaskValue entries
- mask_to_grid(mask) -> U16Image, white where selected, black elsewhere

Notes:
- Luminance is sqrt(0.299 R^2 + 0.587 G^2 + 0.114 B^2) over the raw channels,
  no gamma handling. Thresholds only make sense against the 16-bit range.
"""

import numpy as np

from .constants import (
    BLACK,
    LUMA_WEIGHT_B,
    LUMA_WEIGHT_G,
    LUMA_WEIGHT_R,
    WHITE,
)
from .core_types import MaskValue, U16Image, U8Mask, assert_u16_grid
from .errors import InvalidThreshold


def validate_thresholds(low: float, high: float) -> None:
    """Raise InvalidThreshold for negative or out-of-order thresholds."""
    if low < 0 or high < 0:
        raise InvalidThreshold(low, high, "negative")
    if low > high:
        raise InvalidThreshold(low, high, "order")


def luminance(grid: U16Image) -> np.ndarray:
    """Perceived luminance per pixel, float64 (H,W)."""
    rgb = grid[..., :3].astype(np.float64)
    return np.sqrt(
        LUMA_WEIGHT_R * rgb[..., 0] ** 2
        + LUMA_WEIGHT_G * rgb[..., 1] ** 2
        + LUMA_WEIGHT_B * rgb[..., 2] ** 2
    )


def generate_mask(
    grid: U16Image, low: float, high: float, invert: bool = False
) -> U8Mask:
    """
    Mark pixels whose luminance lies in [low, high] as SELECTED.

    Args:
      grid   : uint16 [H,W,4]
      low    : lower bound, inclusive
      high   : upper bound, inclusive
      invert : select pixels outside the band instead

    Returns:
      uint8 [H,W] holding MaskValue.SELECTED / MaskValue.UNSELECTED.
    """
    validate_thresholds(low, high)
    assert_u16_grid(grid)

    lum = luminance(grid)
    in_band = (lum >= float(low)) & (lum <= float(high))
    if invert:
        in_band = ~in_band
    return np.where(in_band, MaskValue.SELECTED, MaskValue.UNSELECTED).astype(
        np.uint8
    )


def mask_to_grid(mask: U8Mask) -> U16Image:
    """Render a mask as an opaque black/white pixel grid."""
    H, W = mask.shape
    out = np.empty((H, W, 4), dtype=np.uint16)
    out[...] = np.array(BLACK, dtype=np.uint16)
    out[mask == MaskValue.SELECTED] = np.array(WHITE, dtype=np.uint16)
    return out


__all__ = ["validate_thresholds", "luminance", "generate_mask", "mask_to_grid"]
