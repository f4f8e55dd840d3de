"""Tests for HSV hue extraction."""

import numpy as np
import pytest

from pixel_sort.hue import hue_degrees, hue_of

from conftest import HUED


class TestHueOf:
    @pytest.mark.parametrize("expected,rgb", sorted(HUED.items()))
    def test_fixture_hues(self, expected, rgb):
        assert hue_of(rgb) == expected

    def test_primaries(self):
        assert hue_of((65535, 0, 0)) == 0
        assert hue_of((0, 65535, 0)) == 120
        assert hue_of((0, 0, 65535)) == 240

    def test_secondaries(self):
        assert hue_of((65535, 65535, 0)) == 60
        assert hue_of((0, 65535, 65535)) == 180
        assert hue_of((65535, 0, 65535)) == 300

    @pytest.mark.parametrize("v", [0, 1, 12345, 65535])
    def test_achromatic_is_zero(self, v):
        assert hue_of((v, v, v)) == 0

    def test_alpha_ignored(self):
        assert hue_of((30000, 5000, 0, 0)) == hue_of((30000, 5000, 0, 65535))

    def test_scale_invariant(self):
        assert hue_of((255, 128, 0)) == hue_of((255 * 257, 128 * 257, 0))

    def test_rounds_to_whole_degrees(self):
        h = hue_of((65535, 1000, 0))
        assert h == float(int(h))

    def test_near_360_wraps_to_zero(self):
        # raw hue 359.9 rounds to 360, which wraps to 0
        assert hue_of((60000, 0, 100)) == 0


class TestHueDegrees:
    def test_matches_scalar(self, random_grid):
        flat = random_grid.reshape(-1, 4)
        vec = hue_degrees(flat)
        assert vec.shape == (flat.shape[0],)
        scalar = np.array([hue_of(px) for px in flat])
        np.testing.assert_array_equal(vec, scalar)

    def test_range(self, random_grid):
        vec = hue_degrees(random_grid.reshape(-1, 4))
        assert vec.min() >= 0
        assert vec.max() < 360

    def test_achromatic_rows(self):
        px = np.array([[0, 0, 0, 65535], [500, 500, 500, 0]], dtype=np.uint16)
        np.testing.assert_array_equal(hue_degrees(px), [0.0, 0.0])
