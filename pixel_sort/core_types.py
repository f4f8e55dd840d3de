# pixel_sort/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Union

import numpy as np
from numpy.typing import NDArray

from .constants import (
    DEFAULT_HIGH_THRESHOLD,
    DEFAULT_LOW_THRESHOLD,
    DEFAULT_MIN_SPAN_LENGTH,
    RGBA16,
    TRANSPARENT_FILL,
)
from .errors import UnsupportedScanAxis

# Basic aliases

U16Image = NDArray[np.uint16]  # (H, W, 4) RGBA, 0..65535
U8Mask = NDArray[np.uint8]  # (H, W) MaskValue entries
U16Pixels = NDArray[np.uint16]  # (N, 4) RGBA rows
HueArray = NDArray[np.float64]  # (N,) integer degrees in [0, 360)


class MaskValue(IntEnum):
    """Mask entry: whether a pixel takes part in a span."""

    UNSELECTED = 0
    SELECTED = 1


class ScanAxis(Enum):
    """Direction spans are detected and sorted along."""

    ROWS = "rows"
    COLUMNS = "columns"
    DIAGONAL = "diagonal"  # accepted by configuration, never scanned

    @classmethod
    def parse(cls, value: Union[str, "ScanAxis"]) -> "ScanAxis":
        """Resolve a user string ('rows', 'vertical', ...) into a ScanAxis."""
        if isinstance(value, ScanAxis):
            return value
        key = str(value).strip().lower()
        resolved = _AXIS_NAMES.get(key)
        if resolved is None:
            raise UnsupportedScanAxis(value)
        return resolved


_AXIS_NAMES = {
    "rows": ScanAxis.ROWS,
    "row": ScanAxis.ROWS,
    "horizontal": ScanAxis.ROWS,
    "columns": ScanAxis.COLUMNS,
    "column": ScanAxis.COLUMNS,
    "vertical": ScanAxis.COLUMNS,
    "diagonal": ScanAxis.DIAGONAL,
}


# Value objects


@dataclass(frozen=True)
class Span:
    """Run of selected pixels: scan line index, start offset, pixel count."""

    line: int
    start: int
    length: int

    @property
    def stop(self) -> int:
        return self.start + self.length


@dataclass(frozen=True, eq=False)
class ColorSpan:
    """A Span plus the source pixels at its coordinates, in scan order."""

    span: Span
    pixels: U16Pixels  # shape (span.length, 4)

    def __len__(self) -> int:
        return int(self.pixels.shape[0])

    def with_pixels(self, pixels: U16Pixels) -> "ColorSpan":
        """Same coordinates, new pixel sequence."""
        return ColorSpan(self.span, pixels)


@dataclass(frozen=True)
class SortConfig:
    """
    Values consumed by the sorting pipeline.

    low / high           : inclusive luminance band, 16-bit units
    min_span_length      : shortest interior run that gets sorted
    axis                 : ScanAxis.ROWS or ScanAxis.COLUMNS
    invert               : select pixels outside the band instead
    reverse              : ascending hue instead of descending
    flush_terminal_runs  : emit a run that reaches the end of a line even when
                           shorter than min_span_length
    transparent_fill     : colour written for alpha-0 pixels in sorted spans;
                           None writes them verbatim
    workers              : threads for the sort step
    """

    low: int = DEFAULT_LOW_THRESHOLD
    high: int = DEFAULT_HIGH_THRESHOLD
    min_span_length: int = DEFAULT_MIN_SPAN_LENGTH
    axis: ScanAxis = ScanAxis.ROWS
    invert: bool = False
    reverse: bool = False
    flush_terminal_runs: bool = True
    transparent_fill: Optional[RGBA16] = TRANSPARENT_FILL
    workers: int = 1


# Small helpers


def assert_u16_grid(image: np.ndarray) -> U16Image:
    """Validate a uint16 (H,W,4) grid and return it typed as U16Image."""
    if image.dtype != np.uint16 or image.ndim != 3 or image.shape[-1] != 4:
        raise TypeError("expected uint16 (H,W,4) pixel grid")
    return image  # type: ignore[return-value]


def assert_mask_2d(mask_array: np.ndarray) -> U8Mask:
    """Validate a uint8 (H,W) mask and return it typed as U8Mask."""
    if mask_array.dtype != np.uint8 or mask_array.ndim != 2:
        raise TypeError("expected uint8 (H,W) mask")
    return mask_array  # type: ignore[return-value]


__all__ = [
    # aliases / types
    "U16Image",
    "U8Mask",
    "U16Pixels",
    "HueArray",
    # enums
    "MaskValue",
    "ScanAxis",
    # value objects
    "Span",
    "ColorSpan",
    "SortConfig",
    # helpers
    "assert_u16_grid",
    "assert_mask_2d",
]
