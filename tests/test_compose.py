"""Tests for span composition and the span overlay."""

import numpy as np
import pytest

from pixel_sort.compose import compose, render_span_overlay
from pixel_sort.constants import MAGENTA
from pixel_sort.core_types import ColorSpan, ScanAxis, Span

from conftest import HUED, make_grid


class TestCompose:
    def test_empty_spans_is_copy(self, random_grid):
        out = compose(random_grid, [], ScanAxis.ROWS)
        np.testing.assert_array_equal(out, random_grid)
        assert out is not random_grid
        assert not np.shares_memory(out, random_grid)

    def test_writes_span_in_order(self):
        grid = make_grid([[HUED[10], HUED[50], HUED[90]]])
        new = grid[0, ::-1].copy()
        out = compose(grid, [ColorSpan(Span(0, 0, 3), new)], ScanAxis.ROWS)
        np.testing.assert_array_equal(out[0], new)

    def test_source_not_mutated(self):
        grid = make_grid([[HUED[10], HUED[50]]])
        before = grid.copy()
        compose(grid, [ColorSpan(Span(0, 0, 2), grid[0, ::-1].copy())], ScanAxis.ROWS)
        np.testing.assert_array_equal(grid, before)

    def test_untouched_outside_spans(self):
        grid = make_grid([[HUED[10], HUED[50], HUED[90], HUED[200]]])
        pixels = np.array([grid[0, 2], grid[0, 1]])
        out = compose(grid, [ColorSpan(Span(0, 1, 2), pixels)], ScanAxis.ROWS)
        np.testing.assert_array_equal(out[0, 0], grid[0, 0])
        np.testing.assert_array_equal(out[0, 3], grid[0, 3])

    def test_column_axis(self):
        grid = make_grid([[HUED[10], HUED[50]], [HUED[90], HUED[200]]])
        pixels = grid[::-1, 1].copy()
        out = compose(grid, [ColorSpan(Span(1, 0, 2), pixels)], ScanAxis.COLUMNS)
        np.testing.assert_array_equal(out[:, 1], pixels)
        np.testing.assert_array_equal(out[:, 0], grid[:, 0])

    def test_transparent_becomes_magenta(self):
        grid = make_grid([[HUED[10] + (0,), HUED[50]]])
        cs = ColorSpan(Span(0, 0, 2), grid[0].copy())
        out = compose(grid, [cs], ScanAxis.ROWS)
        assert tuple(out[0, 0].tolist()) == MAGENTA
        np.testing.assert_array_equal(out[0, 1], grid[0, 1])
        # span pixels themselves are not modified
        assert cs.pixels[0, 3] == 0

    def test_transparent_fill_disabled(self):
        grid = make_grid([[HUED[10] + (0,), HUED[50]]])
        cs = ColorSpan(Span(0, 0, 2), grid[0].copy())
        out = compose(grid, [cs], ScanAxis.ROWS, transparent_fill=None)
        np.testing.assert_array_equal(out, grid)

    def test_length_one_span_not_written(self):
        grid = make_grid([[HUED[10] + (0,), HUED[50]]])
        cs = ColorSpan(Span(0, 0, 1), grid[0, :1].copy())
        out = compose(grid, [cs], ScanAxis.ROWS)
        np.testing.assert_array_equal(out, grid)


class TestRenderSpanOverlay:
    def test_paints_spans(self):
        out = render_span_overlay((2, 4), [Span(0, 1, 2), Span(1, 3, 1)], ScanAxis.ROWS)
        painted = np.all(out == np.array(MAGENTA, dtype=np.uint16), axis=-1)
        assert painted.tolist() == [
            [False, True, True, False],
            [False, False, False, True],
        ]
        assert out[0, 0].tolist() == [0, 0, 0, 65535]
