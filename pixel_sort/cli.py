"""
pixel_sort.cli
Sort pixels by hue inside luminance-selected runs of an image.

Usage:
  pixel-sort INPUT [-l LOW] [-u HIGH] [-s MIN] [-a rows|columns] [-i] [-r] [-m] [-p]
             [--outdir DIR] [--keep-spans] [--no-transparent-fill]
             [--strict-terminal-runs] [--workers N] [--jobs N] [--debug]

Input:
  Any Pillow-readable image, or a folder of them.

Output:
  <outdir>/<stem>_sorted.png (or the input's own format with -p), plus
  <stem>_mask.* with -m and <stem>_spans.* with --keep-spans.

Exit status:
  0 success, 1 decode/encode failure, 2 bad input path or configuration.
"""

from __future__ import annotations

import argparse
import io
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Sequence, TextIO, Tuple

from PIL import UnidentifiedImageError

from .compose import render_span_overlay
from .constants import (
    DEFAULT_HIGH_THRESHOLD,
    DEFAULT_LOW_THRESHOLD,
    DEFAULT_MIN_SPAN_LENGTH,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_OUTPUT_FORMAT,
    FORMAT_EXTENSIONS,
    INPUT_EXTENSIONS,
    OUTPUT_SUFFIX_MASK,
    OUTPUT_SUFFIX_SORTED,
    OUTPUT_SUFFIX_SPANS,
    TRANSPARENT_FILL,
)
from .core_types import ScanAxis, SortConfig
from .errors import PixelSortError
from .image_io import (
    is_image_file,
    load_pixel_grid,
    normalise_format,
    output_paths,
    save_pixel_grid,
)
from .mask import mask_to_grid
from .pipeline import run_pixel_sort, validate_config
from .utils import (
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_total_duration_compact,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
    warn,
)

# CLI args


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with src, lower, upper, min_span, axis, invert,
      reverse, keep_mask, keep_spans, preserve_format, outdir,
      transparent_fill, strict_terminal_runs, workers, jobs, debug.
    """
    parser = argparse.ArgumentParser(
        prog="pixel-sort",
        description="Sort pixels by hue within luminance-thresholded spans.",
    )
    parser.add_argument("src", type=Path, help="Input image or folder")
    parser.add_argument(
        "-l",
        "--lower-threshold",
        dest="lower",
        type=int,
        default=DEFAULT_LOW_THRESHOLD,
        help="Lower perceived luminance threshold (16-bit units).",
    )
    parser.add_argument(
        "-u",
        "--upper-threshold",
        dest="upper",
        type=int,
        default=DEFAULT_HIGH_THRESHOLD,
        help="Upper perceived luminance threshold (16-bit units).",
    )
    parser.add_argument(
        "-s",
        "--minimum-span-length",
        dest="min_span",
        type=int,
        default=DEFAULT_MIN_SPAN_LENGTH,
        help="The minimum length of span that gets sorted.",
    )
    parser.add_argument(
        "-a",
        "--axis",
        choices=["rows", "columns", "diagonal"],
        default="rows",
        help="Scan along rows or columns.",
    )
    parser.add_argument(
        "-i", "--invert", action="store_true", help="Invert the luminance mask."
    )
    parser.add_argument(
        "-r", "--reverse", action="store_true", help="Sort by ascending hue."
    )
    parser.add_argument(
        "-m", "--keep-mask", action="store_true", help="Also write the mask image."
    )
    parser.add_argument(
        "--keep-spans",
        action="store_true",
        help="Also write a magenta-on-black image of the detected spans.",
    )
    parser.add_argument(
        "-p",
        "--preserve-format",
        action="store_true",
        help="Write output in the input's format instead of PNG.",
    )
    parser.add_argument(
        "--outdir",
        type=Path,
        default=Path(DEFAULT_OUTPUT_DIR),
        help="Output directory.",
    )
    parser.add_argument(
        "--no-transparent-fill",
        dest="transparent_fill",
        action="store_false",
        help="Write fully transparent span pixels as-is instead of magenta.",
    )
    parser.add_argument(
        "--strict-terminal-runs",
        action="store_true",
        help="Apply the minimum span length to runs that reach the end of a line.",
    )
    parser.add_argument(
        "--workers", type=int, default=1, help="Threads for the sort step"
    )
    parser.add_argument(
        "--jobs", type=int, default=1, help="Files processed in parallel"
    )
    parser.add_argument("--debug", action="store_true", help="Verbose stage details")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> SortConfig:
    """SortConfig from parsed CLI args. Raises PixelSortError when invalid."""
    config = SortConfig(
        low=args.lower,
        high=args.upper,
        min_span_length=args.min_span,
        axis=ScanAxis.parse(args.axis),
        invert=args.invert,
        reverse=args.reverse,
        flush_terminal_runs=not args.strict_terminal_runs,
        transparent_fill=TRANSPARENT_FILL if args.transparent_fill else None,
        workers=max(1, args.workers),
    )
    validate_config(config)
    return config


# Per-file processing


def _sort_and_save(
    src_path: Path,
    args: argparse.Namespace,
    config: SortConfig,
    out: Optional[TextIO],
) -> None:
    """load -> sort -> save -> report, for one file. Log lines go to `out`."""
    t_start = time.perf_counter()
    print_banner(src_path.name, file=out)

    grid, src_fmt = load_pixel_grid(src_path)
    height, width = grid.shape[0], grid.shape[1]
    if args.debug:
        debug_log(
            key_value_pairs_to_string(
                [("Loaded", f"{width}x{height}"), ("Format", src_fmt)]
            ),
            file=out,
        )
    t_loaded = time.perf_counter()

    result = run_pixel_sort(grid, config, debug=args.debug, log_file=out)
    t_sorted = time.perf_counter()

    out_fmt = DEFAULT_OUTPUT_FORMAT
    if args.preserve_format:
        if normalise_format(src_fmt) in FORMAT_EXTENSIONS:
            out_fmt = src_fmt
        else:
            warn(
                f"no encoder for {src_fmt}; writing {DEFAULT_OUTPUT_FORMAT}",
                file=out,
            )
    paths = output_paths(src_path, args.outdir, out_fmt)
    written: List[Path] = [save_pixel_grid(paths["sorted"], result.image, out_fmt)]
    if args.keep_mask:
        written.append(
            save_pixel_grid(paths["mask"], mask_to_grid(result.mask), out_fmt)
        )
    if args.keep_spans:
        overlay = render_span_overlay(result.mask.shape, result.spans, result.axis)
        written.append(save_pixel_grid(paths["spans"], overlay, out_fmt))
    t_saved = time.perf_counter()

    log(
        f"Wrote {', '.join(p.name for p in written)} | size={width}x{height} "
        f"| spans={len(result.spans):,}",
        file=out,
    )
    if args.debug:
        debug_log(
            f"Total {format_total_duration_compact(t_saved - t_start)}  "
            f"(load={format_total_duration_compact(t_loaded - t_start)}, "
            f"sort={format_total_duration_compact(t_sorted - t_loaded)}, "
            f"save={format_total_duration_compact(t_saved - t_sorted)})",
            file=out,
        )
    else:
        log(
            f"Total time {format_total_duration_compact(t_saved - t_start)}",
            file=out,
        )


def _process_single_image(
    src_path: Path,
    args: argparse.Namespace,
    config: SortConfig,
    out: Optional[TextIO] = None,
) -> bool:
    """
    Process one file. Decode/encode failures are reported and the file is
    skipped, so the rest of a folder still runs. Returns True on success.
    """
    try:
        _sort_and_save(src_path, args, config, out)
    except (UnidentifiedImageError, OSError, PixelSortError) as e:
        error(f"{src_path.name}: {e}")
        return False
    return True


def _process_one_captured(
    path: Path, args: argparse.Namespace, config: SortConfig
) -> Tuple[str, bool]:
    """
    Process a single file into its own buffer.

    Used for concurrent execution: each worker writes to a private stream, so
    output can be printed in order from the main thread.
    """
    buf = io.StringIO()
    ok = _process_single_image(path, args, config, out=buf)
    return buf.getvalue(), ok


def _is_output_artifact(path: Path) -> bool:
    return path.stem.endswith(
        (OUTPUT_SUFFIX_SORTED, OUTPUT_SUFFIX_MASK, OUTPUT_SUFFIX_SPANS)
    )


def collect_inputs(src: Path) -> List[Path]:
    """
    Image files to process: `src` itself, or the decodable images inside a
    folder (by extension, then by content), skipping our own outputs.
    """
    if not src.is_dir():
        return [src]
    files = [
        p
        for p in src.iterdir()
        if p.is_file()
        and p.suffix.lower() in INPUT_EXTENSIONS
        and not _is_output_artifact(p)
        and is_image_file(p)
    ]
    files.sort(key=lambda p: p.name.lower())
    return files


# Entry point


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    CLI entry point. Returns the process exit status.

    Handles a single file or a folder. In folder mode supports --jobs
    parallelism while keeping per-file output together. A file that fails
    to decode or encode is reported and skipped; the exit status is then 1.
    """
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    try:
        config = build_config(args)
    except PixelSortError as e:
        error(str(e))
        return 2

    print_config_line(
        "sort",
        [
            ("Low", config.low),
            ("High", config.high),
            ("Min span", config.min_span_length),
            ("Axis", config.axis.value),
            ("Invert", config.invert),
            ("Reverse", config.reverse),
        ],
        debug=False,
    )
    if args.debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Flush terminal runs", config.flush_terminal_runs),
                    ("Transparent fill", config.transparent_fill is not None),
                    ("Workers", config.workers),
                    ("Jobs", args.jobs),
                    ("Outdir", str(args.outdir)),
                ]
            )
        )

    src = args.src
    if not src.exists():
        error(f"not found: {src}")
        return 2

    files = collect_inputs(src)
    if args.debug and src.is_dir():
        debug_log(key_value_pairs_to_string([("Images", len(files))]))

    failed = 0
    if args.jobs <= 1 or len(files) <= 1:
        for p in files:
            if not _process_single_image(p, args, config):
                failed += 1
    else:
        with ThreadPoolExecutor(max_workers=args.jobs) as ex:
            futures = [
                ex.submit(_process_one_captured, p, args, config) for p in files
            ]
            for fu in futures:
                text, ok = fu.result()
                print(text, end="", flush=True)
                if not ok:
                    failed += 1

    if failed:
        error(f"{failed} of {len(files)} file(s) failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
