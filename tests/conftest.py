"""
Conftest: shared fixtures for pixel_sort tests.

Colours are written in 16-bit units. The hue fixtures are chosen so every
hue is an exact whole degree and every luminance falls inside [1000, 40000].
"""

import numpy as np
import pytest

OPAQUE = 65535

# name -> (r, g, b) with the named hue in degrees
HUED = {
    10: (30000, 5000, 0),
    50: (30000, 25000, 0),
    90: (15000, 30000, 0),
    200: (0, 20000, 30000),
    300: (30000, 0, 30000),
    350: (30000, 0, 5000),
}

# Very dark colours: luminance well under 1000
DARK = {
    0: (900, 0, 0),
    120: (0, 900, 0),
    240: (0, 0, 900),
    300: (900, 0, 900),
}


def make_grid(rows):
    """uint16 (H,W,4) grid from nested lists of (r,g,b) or (r,g,b,a)."""
    H = len(rows)
    W = len(rows[0])
    out = np.zeros((H, W, 4), dtype=np.uint16)
    for y, row in enumerate(rows):
        for x, px in enumerate(row):
            out[y, x, :3] = px[:3]
            out[y, x, 3] = px[3] if len(px) == 4 else OPAQUE
    return out


def make_mask(text_rows):
    """uint8 mask from strings like 'WWWBBWW' (W selected, B not)."""
    return np.array(
        [[1 if ch == "W" else 0 for ch in row] for row in text_rows], dtype=np.uint8
    )


@pytest.fixture
def hued():
    return HUED


@pytest.fixture
def dark():
    return DARK


@pytest.fixture
def random_grid():
    """A 24x32 deterministic opaque grid."""
    rng = np.random.RandomState(42)
    grid = rng.randint(0, 65536, (24, 32, 4)).astype(np.uint16)
    grid[..., 3] = OPAQUE
    return grid
