import pytest
import numpy as np

from color_adapt.processing.buffer import PixelBuffer


def argb(a, r, g, b):
    return (a << 24) | (r << 16) | (g << 8) | b


@pytest.fixture
def white_buffer():
    """Returns a 2x2 opaque all-white buffer."""
    return PixelBuffer.filled(2, 2, (255, 255, 255, 255))


@pytest.fixture
def sample_buffer():
    """Returns a 3x2 buffer with three near-white pixels.

    Near-white averages are 240, 215 and 206 (white point 220);
    the brightest average is 240.
    """
    values = [
        argb(255, 10, 20, 30), argb(128, 250, 240, 230), argb(0, 100, 100, 100),
        argb(255, 210, 220, 215), argb(64, 0, 0, 0), argb(255, 206, 206, 206),
    ]
    return PixelBuffer.from_argb_ints(values, 3, 2)


@pytest.fixture
def random_buffer():
    """Returns a 23x17 buffer of seeded random ARGB values."""
    rng = np.random.default_rng(1234)
    return PixelBuffer(rng.integers(0, 256, size=(17, 23, 4), dtype=np.uint8))


@pytest.fixture
def bright_buffer():
    """Returns a 40x30 buffer with a band of near-white pixels on a random background."""
    rng = np.random.default_rng(99)
    pixels = rng.integers(0, 200, size=(30, 40, 4), dtype=np.uint8)
    pixels[5:9, :, 1:] = rng.integers(206, 256, size=(4, 40, 3), dtype=np.uint8)
    return PixelBuffer(pixels)
