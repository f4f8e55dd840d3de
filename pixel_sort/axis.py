# pixel_sort/axis.py
from __future__ import annotations

"""
Scan-axis helpers.

Exports:
- line_view(grid, axis)   -> view whose first index enumerates scan lines
- span_coords(span, axis) -> (ys, xs) index arrays for a span
- to_xy(axis, line, offset) -> (x, y) for positions along a line

Rows and columns share every algorithm through these two mappings; nothing
downstream branches on the axis itself.
"""

from typing import Tuple

import numpy as np

from .core_types import ScanAxis, Span
from .errors import UnsupportedScanAxis


def _require_scannable(axis: ScanAxis) -> ScanAxis:
    axis = ScanAxis.parse(axis)
    if axis is ScanAxis.DIAGONAL:
        raise UnsupportedScanAxis(axis.value)
    return axis


def line_view(grid: np.ndarray, axis: ScanAxis) -> np.ndarray:
    """
    Return a view of `grid` (H,W[,C]) laid out as (lines, offsets[,C]).
    Writes through the view land in `grid`.
    """
    axis = _require_scannable(axis)
    if axis is ScanAxis.ROWS:
        return grid
    return grid.swapaxes(0, 1)


def to_xy(axis: ScanAxis, line, offset) -> Tuple:
    """
    Map (line, offset) along `axis` to image (x, y).
    Works on ints or on equal-shape integer arrays.
    """
    axis = _require_scannable(axis)
    if axis is ScanAxis.ROWS:
        return offset, line
    return line, offset


def span_coords(span: Span, axis: ScanAxis) -> Tuple[np.ndarray, np.ndarray]:
    """(ys, xs) integer index arrays covering `span` in scan order."""
    axis = _require_scannable(axis)
    offsets = np.arange(span.start, span.stop, dtype=np.intp)
    lines = np.full(offsets.shape, span.line, dtype=np.intp)
    xs, ys = to_xy(axis, lines, offsets)
    return ys, xs


__all__ = ["line_view", "to_xy", "span_coords"]
