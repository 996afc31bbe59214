# Project MUSE - tests/conftest.py
# (C) 2025 MUSE Corp. All rights reserved.

import numpy as np
import pytest


def make_frame(width, height, rgba=(128, 128, 128, 255)):
    frame = np.empty((height, width, 4), dtype=np.uint8)
    frame[:] = rgba
    return frame


def make_mask(width, height, alpha=0):
    mask = np.zeros((height, width, 4), dtype=np.uint8)
    mask[:, :, 3] = alpha
    return mask


class FakeSegmenter:
    """Returns a fixed mask (or raises) and counts calls."""

    def __init__(self, mask=None, error=None):
        self.mask = mask
        self.error = error
        self.calls = 0

    def segment(self, frame):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return None if self.mask is None else self.mask.copy()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
