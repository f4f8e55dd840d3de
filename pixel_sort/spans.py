# pixel_sort/spans.py
from __future__ import annotations

"""
Run-length span detection over a mask.

Each scan line is split into runs of equal mask value. Selected runs at least
`min_length` long become Spans. A selected run that is still open when the
line ends is flushed even if it is shorter, unless flush_terminal_runs=False.
"""

from typing import Iterator, List, Tuple

import numpy as np

from .axis import line_view
from .core_types import MaskValue, ScanAxis, Span, U8Mask, assert_mask_2d
from .errors import InvalidSpanLength


def iter_runs(line: np.ndarray) -> Iterator[Tuple[int, int, int]]:
    """Yield (value, start, length) for each maximal run in a 1-D array."""
    n = int(line.shape[0])
    if n == 0:
        return
    breaks = np.flatnonzero(line[1:] != line[:-1]) + 1
    starts = np.concatenate(([0], breaks))
    stops = np.concatenate((breaks, [n]))
    for start, stop in zip(starts.tolist(), stops.tolist()):
        yield int(line[start]), start, stop - start


def detect_line_spans(
    line: np.ndarray,
    line_id: int,
    min_length: int,
    *,
    flush_terminal_runs: bool = True,
) -> List[Span]:
    """Spans for one scan line of mask values."""
    n = int(line.shape[0])
    out: List[Span] = []
    for value, start, length in iter_runs(line):
        if value != MaskValue.SELECTED:
            continue
        terminal = start + length == n
        if length >= min_length or (terminal and flush_terminal_runs):
            out.append(Span(line_id, start, length))
    return out


def detect_spans(
    mask: U8Mask,
    min_length: int,
    axis: ScanAxis = ScanAxis.ROWS,
    *,
    flush_terminal_runs: bool = True,
) -> List[Span]:
    """
    Detect spans of selected pixels along `axis`.

    Args:
      mask                : uint8 [H,W] of MaskValue entries
      min_length          : shortest interior run emitted, >= 1
      axis                : ScanAxis.ROWS (left to right) or COLUMNS (top to bottom)
      flush_terminal_runs : emit a run touching the end of its line regardless
                            of min_length

    Returns:
      Spans ordered by line, then start offset.
    """
    if min_length < 1:
        raise InvalidSpanLength(min_length)
    assert_mask_2d(mask)

    lines = line_view(mask, axis)
    spans: List[Span] = []
    for line_id in range(lines.shape[0]):
        spans.extend(
            detect_line_spans(
                lines[line_id],
                line_id,
                min_length,
                flush_terminal_runs=flush_terminal_runs,
            )
        )
    return spans


def covered_pixels(spans: List[Span]) -> int:
    """Total pixel count over all spans."""
    return sum(s.length for s in spans)


__all__ = ["iter_runs", "detect_line_spans", "detect_spans", "covered_pixels"]
