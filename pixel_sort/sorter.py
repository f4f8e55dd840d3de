# pixel_sort/sorter.py
from __future__ import annotations

"""
Span materialisation and hue sorting.

Functions:
  materialize(source, span, axis)  -> ColorSpan
  sort_span(color_span, reverse)   -> ColorSpan
  sort_spans(source, spans, axis, reverse, workers) -> List[ColorSpan]

Sorting is stable: pixels with equal hue keep their scan order, so output is
reproducible run to run.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Sequence

import numpy as np

from .axis import span_coords
from .core_types import ColorSpan, ScanAxis, Span, U16Image
from .hue import hue_degrees


def materialize(source: U16Image, span: Span, axis: ScanAxis) -> ColorSpan:
    """Copy the source pixels under `span` in scan order."""
    ys, xs = span_coords(span, axis)
    return ColorSpan(span, source[ys, xs].copy())


def sort_span(color_span: ColorSpan, reverse: bool = False) -> ColorSpan:
    """
    Reorder a span's pixels by hue.

    Descending by default, ascending when `reverse`. Spans of length <= 1
    come back unchanged. The input is never modified.
    """
    if len(color_span) <= 1:
        return color_span
    hues = hue_degrees(color_span.pixels)
    keys = hues if reverse else -hues
    order = np.argsort(keys, kind="stable")
    return color_span.with_pixels(color_span.pixels[order])


def _sort_chunk(
    source: U16Image, spans: Sequence[Span], axis: ScanAxis, reverse: bool
) -> List[ColorSpan]:
    return [sort_span(materialize(source, s, axis), reverse) for s in spans]


def sort_spans(
    source: U16Image,
    spans: Sequence[Span],
    axis: ScanAxis,
    *,
    reverse: bool = False,
    workers: int = 1,
) -> List[ColorSpan]:
    """
    Materialise and sort every span. Result order matches `spans`.

    With workers > 1 the spans are split into contiguous chunks and sorted on
    a thread pool; spans are independent so no locking is needed.
    """
    if workers <= 1 or len(spans) < 2 * workers:
        return _sort_chunk(source, spans, axis, reverse)

    step = (len(spans) + workers - 1) // workers
    out: List[ColorSpan] = []
    with ThreadPoolExecutor(max_workers=workers) as ex:
        futs = [
            ex.submit(_sort_chunk, source, spans[s : s + step], axis, reverse)
            for s in range(0, len(spans), step)
        ]
        for fu in futs:
            out.extend(fu.result())
    return out


__all__ = ["materialize", "sort_span", "sort_spans"]
