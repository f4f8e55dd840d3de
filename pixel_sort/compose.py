# pixel_sort/compose.py
from __future__ import annotations

"""
Write sorted spans back into a fresh copy of the source grid.

Spans never overlap, so write order across spans does not matter. Fully
transparent pixels inside a written span are replaced by `transparent_fill`
(magenta by default) so they stay visible in the output; pass None to write
them verbatim.
"""

from typing import Iterable, Optional, Tuple

import numpy as np

from .axis import span_coords
from .constants import BLACK, RGBA16, SPAN_OVERLAY_COLOUR, TRANSPARENT_FILL
from .core_types import ColorSpan, ScanAxis, Span, U16Image, assert_u16_grid


def compose(
    source: U16Image,
    sorted_spans: Iterable[ColorSpan],
    axis: ScanAxis,
    *,
    transparent_fill: Optional[RGBA16] = TRANSPARENT_FILL,
) -> U16Image:
    """
    Return a new grid: `source` with each span's pixels replaced in order.

    Spans of length <= 1 are left as in the source.
    """
    assert_u16_grid(source)
    out = source.copy()
    fill = (
        None
        if transparent_fill is None
        else np.array(transparent_fill, dtype=np.uint16)
    )

    for cs in sorted_spans:
        if len(cs) <= 1:
            continue
        pixels = cs.pixels
        if fill is not None:
            clear = pixels[:, 3] == 0
            if np.any(clear):
                pixels = pixels.copy()
                pixels[clear] = fill
        ys, xs = span_coords(cs.span, axis)
        out[ys, xs] = pixels
    return out


def render_span_overlay(
    shape: Tuple[int, int],
    spans: Iterable[Span],
    axis: ScanAxis,
    colour: RGBA16 = SPAN_OVERLAY_COLOUR,
) -> U16Image:
    """Debug view: opaque black grid of `shape` (H,W) with span pixels painted."""
    H, W = shape[0], shape[1]
    out = np.empty((H, W, 4), dtype=np.uint16)
    out[...] = np.array(BLACK, dtype=np.uint16)
    paint = np.array(colour, dtype=np.uint16)
    for span in spans:
        ys, xs = span_coords(span, axis)
        out[ys, xs] = paint
    return out


__all__ = ["compose", "render_span_overlay"]
