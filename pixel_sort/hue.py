# pixel_sort/hue.py
from __future__ import annotations

"""
HSV hue extraction.

Exports:
  hue_of(colour)      -> float degrees for one RGB(A) sample
  hue_degrees(pixels) -> float64 [N] degrees for (N, >=3) rows

Both round half away from zero to whole degrees, so equal colours always
sort as ties. Achromatic samples (r == g == b) have hue 0.
"""

import math
from typing import Sequence

import numpy as np

from .core_types import HueArray


def hue_of(colour: Sequence[float]) -> float:
    """Hue in [0, 360) of an RGB or RGBA sample. Channel scale is irrelevant."""
    red, green, blue = float(colour[0]), float(colour[1]), float(colour[2])
    lo = min(red, green, blue)
    hi = max(red, green, blue)
    if lo == hi:
        return 0.0

    if hi == red:
        hue = (green - blue) / (hi - lo)
    elif hi == green:
        hue = 2.0 + (blue - red) / (hi - lo)
    else:
        hue = 4.0 + (red - green) / (hi - lo)

    hue *= 60.0
    if hue < 0:
        hue += 360.0
    # hue >= 0 here, so floor(x + 0.5) is round-half-away-from-zero
    return float(math.floor(hue + 0.5) % 360)


def hue_degrees(pixels: np.ndarray) -> HueArray:
    """
    Vectorised hue_of over rows of `pixels` (N, >=3). Returns float64 [N].
    """
    rgb = np.asarray(pixels)[..., :3].astype(np.float64)
    red, green, blue = rgb[..., 0], rgb[..., 1], rgb[..., 2]
    hi = rgb.max(axis=-1)
    lo = rgb.min(axis=-1)
    delta = hi - lo
    chromatic = delta > 0
    safe = np.where(chromatic, delta, 1.0)

    hue = np.select(
        [hi == red, hi == green],
        [(green - blue) / safe, 2.0 + (blue - red) / safe],
        default=4.0 + (red - green) / safe,
    )
    hue = hue * 60.0
    hue = np.where(hue < 0, hue + 360.0, hue)
    hue = np.floor(hue + 0.5) % 360.0
    return np.where(chromatic, hue, 0.0)


__all__ = ["hue_of", "hue_degrees"]
