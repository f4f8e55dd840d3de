"""Tests for run-length span detection."""

import numpy as np
import pytest

from pixel_sort.axis import line_view, span_coords, to_xy
from pixel_sort.core_types import ScanAxis, Span
from pixel_sort.errors import InvalidSpanLength, UnsupportedScanAxis
from pixel_sort.spans import covered_pixels, detect_spans, iter_runs

from conftest import make_mask


class TestIterRuns:
    def test_runs(self):
        line = np.array([1, 1, 1, 0, 0, 1, 1], dtype=np.uint8)
        assert list(iter_runs(line)) == [(1, 0, 3), (0, 3, 2), (1, 5, 2)]

    def test_single_run(self):
        assert list(iter_runs(np.zeros(4, dtype=np.uint8))) == [(0, 0, 4)]

    def test_empty(self):
        assert list(iter_runs(np.zeros(0, dtype=np.uint8))) == []


class TestDetectSpansRows:
    def test_basic_line(self):
        mask = make_mask(["WWWBBWW"])
        assert detect_spans(mask, 2) == [Span(0, 0, 3), Span(0, 5, 2)]

    def test_min_length_four_without_terminal_flush(self):
        mask = make_mask(["WWWBBWW"])
        assert detect_spans(mask, 4, flush_terminal_runs=False) == []

    def test_terminal_run_flushed_despite_min_length(self):
        # Interior run of 3 is dropped, terminal run of 2 is kept: the two
        # short runs are treated differently on purpose.
        mask = make_mask(["WWWBBWW"])
        assert detect_spans(mask, 4) == [Span(0, 5, 2)]

    def test_short_interior_run_dropped(self):
        mask = make_mask(["BWBWWWB"])
        assert detect_spans(mask, 2) == [Span(0, 3, 3)]

    def test_terminal_single_pixel(self):
        mask = make_mask(["BBBW"])
        assert detect_spans(mask, 2) == [Span(0, 3, 1)]
        assert detect_spans(mask, 2, flush_terminal_runs=False) == []

    def test_whole_line_selected(self):
        mask = make_mask(["WWWW"])
        assert detect_spans(mask, 10) == [Span(0, 0, 4)]

    def test_no_selection(self):
        assert detect_spans(make_mask(["BBBB", "BBBB"]), 1) == []

    def test_runs_do_not_cross_lines(self):
        mask = make_mask(["BBWW", "WWBB"])
        assert detect_spans(mask, 2) == [Span(0, 2, 2), Span(1, 0, 2)]

    def test_order_and_bounds(self):
        rng = np.random.RandomState(7)
        mask = (rng.rand(12, 17) > 0.4).astype(np.uint8)
        spans = detect_spans(mask, 2)
        keys = [(s.line, s.start) for s in spans]
        assert keys == sorted(keys)
        for s in spans:
            assert s.length >= 1
            assert s.stop <= mask.shape[1]
            assert mask[s.line, s.start : s.stop].all()

    def test_spans_are_maximal(self):
        mask = make_mask(["BWWWBWWB"])
        for s in detect_spans(mask, 1):
            row = mask[s.line]
            assert s.start == 0 or row[s.start - 1] == 0
            assert s.stop == row.shape[0] or row[s.stop] == 0

    def test_covered_pixels(self):
        mask = make_mask(["WWWBBWW"])
        assert covered_pixels(detect_spans(mask, 2)) == 5


class TestDetectSpansColumns:
    def test_columns_equal_rows_of_transpose(self):
        rng = np.random.RandomState(3)
        mask = (rng.rand(9, 13) > 0.5).astype(np.uint8)
        cols = detect_spans(mask, 2, ScanAxis.COLUMNS)
        rows_t = detect_spans(np.ascontiguousarray(mask.T), 2, ScanAxis.ROWS)
        assert cols == rows_t

    def test_column_scan(self):
        mask = make_mask(["WB", "WB", "BW"])
        assert detect_spans(mask, 2, ScanAxis.COLUMNS) == [
            Span(0, 0, 2),
            Span(1, 2, 1),
        ]


class TestDetectSpansErrors:
    @pytest.mark.parametrize("bad", [0, -3])
    def test_min_length_below_one(self, bad):
        with pytest.raises(InvalidSpanLength):
            detect_spans(make_mask(["WW"]), bad)

    def test_diagonal_rejected(self):
        with pytest.raises(UnsupportedScanAxis):
            detect_spans(make_mask(["WW"]), 1, ScanAxis.DIAGONAL)


class TestAxisHelpers:
    def test_to_xy(self):
        assert to_xy(ScanAxis.ROWS, 2, 5) == (5, 2)
        assert to_xy(ScanAxis.COLUMNS, 2, 5) == (2, 5)

    def test_span_coords(self):
        ys, xs = span_coords(Span(1, 2, 3), ScanAxis.ROWS)
        assert ys.tolist() == [1, 1, 1]
        assert xs.tolist() == [2, 3, 4]
        ys, xs = span_coords(Span(1, 2, 3), ScanAxis.COLUMNS)
        assert ys.tolist() == [2, 3, 4]
        assert xs.tolist() == [1, 1, 1]

    @pytest.mark.parametrize("axis", [ScanAxis.ROWS, ScanAxis.COLUMNS])
    def test_span_coords_agree_with_to_xy(self, axis):
        span = Span(3, 1, 4)
        ys, xs = span_coords(span, axis)
        expected = [to_xy(axis, span.line, off) for off in range(span.start, span.stop)]
        assert list(zip(xs.tolist(), ys.tolist())) == expected

    def test_line_view_writes_through(self):
        grid = np.zeros((2, 3), dtype=np.uint8)
        line_view(grid, ScanAxis.COLUMNS)[2, 1] = 9
        assert grid[1, 2] == 9

    def test_parse(self):
        assert ScanAxis.parse("vertical") is ScanAxis.COLUMNS
        assert ScanAxis.parse("Rows") is ScanAxis.ROWS
        assert ScanAxis.parse("diagonal") is ScanAxis.DIAGONAL
        with pytest.raises(UnsupportedScanAxis):
            ScanAxis.parse("spiral")
