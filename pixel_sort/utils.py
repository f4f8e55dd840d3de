# pixel_sort/utils.py
from __future__ import annotations

"""
Shared utilities for pixel_sort.

Includes time formatting, small grid statistics, and tidy logging.
"""

import sys
from typing import Any, Iterable, List, Optional, TextIO, Tuple

import numpy as np

from .core_types import MaskValue, U16Image, U8Mask


#  Time / size formatting


def format_seconds_compact(seconds: float) -> str:
    """Human-friendly seconds: '<ms>ms', '<s>s', or 'Mm Ss'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.3f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {seconds - 60 * minutes:.1f}s"


def format_total_duration_compact(seconds: float) -> str:
    """Compact total duration: 'Mm Ss', 'Ss.s', or 'ms'."""
    if seconds >= 60.0:
        minutes = int(seconds // 60)
        rem = int(round(seconds - 60 * minutes))
        return f"{minutes}m {rem}s"
    if seconds >= 1.0:
        return f"{seconds:.1f}s"
    return f"{seconds * 1000.0:.1f}ms"


# Grid stats


def selected_share(mask: U8Mask) -> float:
    """Fraction of mask entries that are SELECTED (0 for an empty mask)."""
    if mask.size == 0:
        return 0.0
    return float(np.count_nonzero(mask == MaskValue.SELECTED)) / float(mask.size)


def transparent_count(grid: U16Image) -> int:
    """Number of alpha-0 pixels."""
    return int(np.count_nonzero(grid[..., 3] == 0))


def changed_pixel_count(before: U16Image, after: U16Image) -> int:
    """Pixels whose RGBA differs between two same-shape grids."""
    return int(np.count_nonzero(np.any(before != after, axis=-1)))


#  CLI logging


def enable_line_buffered_stdout() -> None:
    """
    Enable line-buffered stdout when supported.
    Keeps per-file output readable when piping.
    """
    reconfig = getattr(sys.stdout, "reconfigure", None)
    if callable(reconfig):
        try:
            reconfig(line_buffering=True, write_through=True)
        except (ValueError, OSError):
            pass


# Pretty logging


def format_bool_on_off(value: Any) -> str:
    """Pretty boolean: 'on'/'off' for bools; str(value) otherwise."""
    if isinstance(value, bool):
        return "on" if value else "off"
    return str(value)


def format_number_compact(value: Any) -> str:
    """Pretty number: 1,234 style for ints; compact for floats; passthrough otherwise."""
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        text = f"{value:.3f}".rstrip("0").rstrip(".")
        return text
    return str(value)


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """
    Format (name, value) pairs as 'Name: value' blocks separated by sep.
    Uses format_bool_on_off / format_number_compact for readability.
    """
    out: List[str] = []
    for name, value in pairs:
        display = (
            format_bool_on_off(value)
            if isinstance(value, bool)
            else format_number_compact(value)
        )
        out.append(f"{name}{eq}{display}")
    return sep.join(out)


def print_config_line(
    section: str,
    pairs: Iterable[Tuple[str, Any]],
    debug: bool,
    file: Optional[TextIO] = None,
) -> None:
    """
    Emit a single human-readable config line, e.g.:
      [sort] Low: 10,000  High: 30,000  Axis: rows  Invert: off
    Routes to debug_log() when debug=True, else to log().
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    (debug_log if debug else log)(line, file=file)


def print_banner(title: str, file: Optional[TextIO] = None) -> None:
    """Section banner."""
    print(f"\n=== {title} ===", file=file, flush=True)


def log(message: str, file: Optional[TextIO] = None) -> None:
    """Plain log line. `file` defaults to the current sys.stdout."""
    print(message, file=file, flush=True)


def debug_log(message: str, file: Optional[TextIO] = None) -> None:
    """Debug log line."""
    print(f"[debug] {message}", file=file, flush=True)


def warn(message: str, file: Optional[TextIO] = None) -> None:
    """Warning log line."""
    print(f"[warn] {message}", file=file, flush=True)


def error(message: str) -> None:
    """Error log line to stderr."""
    print(f"[error] {message}", file=sys.stderr, flush=True)


__all__ = [
    "format_seconds_compact",
    "format_total_duration_compact",
    "selected_share",
    "transparent_count",
    "changed_pixel_count",
    "enable_line_buffered_stdout",
    "format_bool_on_off",
    "format_number_compact",
    "key_value_pairs_to_string",
    "print_config_line",
    "print_banner",
    "log",
    "debug_log",
    "warn",
    "error",
]
