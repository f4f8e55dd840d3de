"""
Global defaults and tunables used across the project.

- Luminance thresholds (16-bit units) and BT.601 weights
- Span length default
- Transparent-pixel fill colour
- Output formats and locations
"""
from __future__ import annotations

from typing import Dict, Tuple

# =========================
# Channel range
# =========================
# Grids carry 16-bit channels. 8-bit sources are expanded by * 257.
CHANNEL_MAX: int = 65535
EXPAND_8_TO_16: int = 257

# =========================
# Luminance mask
# =========================
# Thresholds are calibrated against the 16-bit channel range.
DEFAULT_LOW_THRESHOLD: int = 10000
DEFAULT_HIGH_THRESHOLD: int = 30000

# https://www.itu.int/rec/R-REC-BT.601
LUMA_WEIGHT_R: float = 0.299
LUMA_WEIGHT_G: float = 0.587
LUMA_WEIGHT_B: float = 0.114

# =========================
# Spans
# =========================
DEFAULT_MIN_SPAN_LENGTH: int = 2

# =========================
# Compositing
# =========================
RGBA16 = Tuple[int, int, int, int]

MAGENTA: RGBA16 = (CHANNEL_MAX, 0, CHANNEL_MAX, CHANNEL_MAX)
BLACK: RGBA16 = (0, 0, 0, CHANNEL_MAX)
WHITE: RGBA16 = (CHANNEL_MAX, CHANNEL_MAX, CHANNEL_MAX, CHANNEL_MAX)

# Written in place of fully transparent pixels inside sorted spans.
TRANSPARENT_FILL: RGBA16 = MAGENTA
SPAN_OVERLAY_COLOUR: RGBA16 = MAGENTA

# =========================
# Output
# =========================
DEFAULT_OUTPUT_FORMAT: str = "png"
DEFAULT_OUTPUT_DIR: str = "output"

FORMAT_ALIASES: Dict[str, str] = {"jpg": "jpeg", "tif": "tiff"}
FORMAT_EXTENSIONS: Dict[str, str] = {"png": ".png", "jpeg": ".jpg", "tiff": ".tiff"}

INPUT_EXTENSIONS = {".png", ".jpg", ".jpeg", ".tif", ".tiff", ".webp", ".bmp"}

OUTPUT_SUFFIX_SORTED: str = "_sorted"
OUTPUT_SUFFIX_MASK: str = "_mask"
OUTPUT_SUFFIX_SPANS: str = "_spans"

__all__ = [
    "CHANNEL_MAX",
    "EXPAND_8_TO_16",
    "DEFAULT_LOW_THRESHOLD",
    "DEFAULT_HIGH_THRESHOLD",
    "LUMA_WEIGHT_R",
    "LUMA_WEIGHT_G",
    "LUMA_WEIGHT_B",
    "DEFAULT_MIN_SPAN_LENGTH",
    "RGBA16",
    "MAGENTA",
    "BLACK",
    "WHITE",
    "TRANSPARENT_FILL",
    "SPAN_OVERLAY_COLOUR",
    "DEFAULT_OUTPUT_FORMAT",
    "DEFAULT_OUTPUT_DIR",
    "FORMAT_ALIASES",
    "FORMAT_EXTENSIONS",
    "INPUT_EXTENSIONS",
    "OUTPUT_SUFFIX_SORTED",
    "OUTPUT_SUFFIX_MASK",
    "OUTPUT_SUFFIX_SPANS",
]
