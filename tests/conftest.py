"""Shared fixtures for the QR reader tests."""

import numpy as np
import pytest


@pytest.fixture
def sharpImage() -> np.ndarray:
    """100x100 BGR noise image; Laplacian variance far above 100."""
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(100, 100, 3), dtype=np.uint8)


@pytest.fixture
def flatImage() -> np.ndarray:
    """100x100 uniform gray image; Laplacian variance is 0."""
    return np.full((100, 100, 3), 128, dtype=np.uint8)
