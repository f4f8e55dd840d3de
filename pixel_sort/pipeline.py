# pixel_sort/pipeline.py
from __future__ import annotations

"""
Pixel-sort pipeline.

Runs mask -> span detection -> hue sort -> composition on an in-memory grid.
All configuration is checked before any pixel work starts, so a bad config
never yields a partial result.
"""

import time
from dataclasses import dataclass
from typing import List, Optional, TextIO

from .compose import compose
from .core_types import (
    ScanAxis,
    SortConfig,
    Span,
    U16Image,
    U8Mask,
    assert_u16_grid,
)
from .errors import InvalidSpanLength, UnsupportedScanAxis
from .mask import generate_mask, validate_thresholds
from .sorter import sort_spans
from .spans import covered_pixels, detect_spans
from .utils import (
    changed_pixel_count,
    debug_log,
    format_seconds_compact,
    key_value_pairs_to_string,
    selected_share,
    transparent_count,
)


@dataclass(frozen=True, eq=False)
class SortResult:
    """Output grid plus the intermediates a caller may want to persist."""

    image: U16Image
    mask: U8Mask
    spans: List[Span]
    axis: ScanAxis


def validate_config(config: SortConfig) -> ScanAxis:
    """Raise on any invalid setting; return the resolved scan axis."""
    validate_thresholds(config.low, config.high)
    if config.min_span_length < 1:
        raise InvalidSpanLength(config.min_span_length)
    axis = ScanAxis.parse(config.axis)
    if axis is ScanAxis.DIAGONAL:
        raise UnsupportedScanAxis(axis.value)
    return axis


def run_pixel_sort(
    source: U16Image,
    config: Optional[SortConfig] = None,
    *,
    debug: bool = False,
    log_file: Optional[TextIO] = None,
) -> SortResult:
    """
    Sort hue within luminance-selected spans of `source`.

    Args:
      source   : uint16 [H,W,4] RGBA grid, not modified
      config   : SortConfig, defaults when None
      debug    : print per-stage counts and timings
      log_file : stream for debug lines, current stdout when None

    Returns:
      SortResult(image, mask, spans, axis)
    """
    cfg = config or SortConfig()
    axis = validate_config(cfg)
    assert_u16_grid(source)

    t0 = time.perf_counter()
    mask = generate_mask(source, cfg.low, cfg.high, cfg.invert)
    t_mask = time.perf_counter()

    spans = detect_spans(
        mask,
        cfg.min_span_length,
        axis,
        flush_terminal_runs=cfg.flush_terminal_runs,
    )
    t_spans = time.perf_counter()

    sorted_spans = sort_spans(
        source, spans, axis, reverse=cfg.reverse, workers=cfg.workers
    )
    t_sort = time.perf_counter()

    image = compose(source, sorted_spans, axis, transparent_fill=cfg.transparent_fill)
    t_compose = time.perf_counter()

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Selected", f"{selected_share(mask):.1%}"),
                    ("Spans", len(spans)),
                    ("Span pixels", covered_pixels(spans)),
                    ("Changed", changed_pixel_count(source, image)),
                    ("Alpha=0", transparent_count(source)),
                ]
            ),
            file=log_file,
        )
        debug_log(
            key_value_pairs_to_string(
                [
                    ("mask", format_seconds_compact(t_mask - t0)),
                    ("spans", format_seconds_compact(t_spans - t_mask)),
                    ("sort", format_seconds_compact(t_sort - t_spans)),
                    ("compose", format_seconds_compact(t_compose - t_sort)),
                ]
            ),
            file=log_file,
        )

    return SortResult(image=image, mask=mask, spans=spans, axis=axis)


__all__ = ["SortResult", "validate_config", "run_pixel_sort"]
