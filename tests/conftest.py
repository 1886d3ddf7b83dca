"""Shared fixtures: synthetic RGBA pixel buffers and seeds."""
from __future__ import annotations

import numpy as np
import pytest

from pixelseed.utils import solid_image


@pytest.fixture
def black_image():
    """4x8 all-black buffer: exactly 32 pixels, every channel 0."""
    return solid_image(4, 8)


@pytest.fixture
def noise_image():
    """Fixed-content 48x40 RGBA buffer (1920 pixels, 60 per chunk)."""
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(40, 48, 4), dtype=np.uint8)


@pytest.fixture
def zero_seed():
    return bytes(32)


@pytest.fixture
def other_seed():
    return bytes(range(32))
