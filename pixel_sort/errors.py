# pixel_sort/errors.py
from __future__ import annotations

"""
Exception types raised by the sorting core.

All of them are caller configuration errors: nothing here is retried, and the
CLI turns them into an error line and exit status 2.
"""


class PixelSortError(ValueError):
    """Base class for invalid pixel-sort configuration."""


class InvalidThreshold(PixelSortError):
    """Luminance thresholds are negative or out of order."""

    def __init__(self, low: float, high: float, reason: str) -> None:
        self.low = low
        self.high = high
        self.reason = reason  # "negative" | "order"
        if reason == "negative":
            msg = f"threshold values must be non-negative (low={low}, high={high})"
        else:
            msg = f"low threshold must not exceed high threshold (low={low}, high={high})"
        super().__init__(msg)


class UnsupportedScanAxis(PixelSortError):
    """Scan axis is unknown or not implemented (diagonal)."""

    def __init__(self, axis: object) -> None:
        self.axis = axis
        super().__init__(f"unsupported scan axis: {axis!s}")


class InvalidSpanLength(PixelSortError):
    """Minimum span length below 1."""

    def __init__(self, min_length: int) -> None:
        self.min_length = min_length
        super().__init__(f"minimum span length must be >= 1, got {min_length}")


class UnsupportedFormat(PixelSortError):
    """Requested output format has no encoder."""

    def __init__(self, fmt: str) -> None:
        self.format = fmt
        super().__init__(f"unsupported format: {fmt}")


__all__ = [
    "PixelSortError",
    "InvalidThreshold",
    "UnsupportedScanAxis",
    "InvalidSpanLength",
    "UnsupportedFormat",
]
