# pixel_sort/__init__.py
"""
pixel_sort package.

Purpose:
  Pixel-sorting glitch effect: hue-sort pixels inside runs selected by a
  perceptual-luminance threshold. See pixel_sort.cli for the command line.

Public API:
  run_pixel_sort : full pipeline on an in-memory uint16 RGBA grid.
  generate_mask  : luminance band -> MaskValue mask.
  detect_spans   : mask -> run-length spans along rows or columns.
  hue_of         : HSV hue in whole degrees.
  sort_span      : hue-sort one materialised span.
  compose        : write sorted spans into a copy of the source.
  core_types     : shared aliases and value objects (Span, ColorSpan, SortConfig).
  image_io       : Pillow decode/encode to 16-bit grids.

Quick start:
  from pixel_sort import run_pixel_sort, SortConfig
  from pixel_sort.image_io import load_pixel_grid, save_pixel_grid
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import constants
from . import core_types
from . import errors
from . import image_io
from . import utils

from .core_types import ColorSpan, MaskValue, ScanAxis, SortConfig, Span
from .errors import (
    InvalidSpanLength,
    InvalidThreshold,
    PixelSortError,
    UnsupportedFormat,
    UnsupportedScanAxis,
)
from .mask import generate_mask, mask_to_grid
from .spans import detect_spans
from .hue import hue_of, hue_degrees
from .sorter import materialize, sort_span, sort_spans
from .compose import compose, render_span_overlay
from .pipeline import SortResult, run_pixel_sort

__all__ = [
    "__version__",
    "constants",
    "core_types",
    "errors",
    "image_io",
    "utils",
    "ColorSpan",
    "MaskValue",
    "ScanAxis",
    "SortConfig",
    "Span",
    "InvalidSpanLength",
    "InvalidThreshold",
    "PixelSortError",
    "UnsupportedFormat",
    "UnsupportedScanAxis",
    "generate_mask",
    "mask_to_grid",
    "detect_spans",
    "hue_of",
    "hue_degrees",
    "materialize",
    "sort_span",
    "sort_spans",
    "compose",
    "render_span_overlay",
    "SortResult",
    "run_pixel_sort",
]
