"""Tests for the enhancement pipeline used on the retry pass."""

import cv2
import numpy as np
import pytest

from core.enhancer import QrImageEnhancer


@pytest.fixture
def enhancer():
    return QrImageEnhancer()


def test_empty_input_is_returned_unchanged(enhancer):
    empty = np.zeros((0, 0, 3), dtype=np.uint8)

    assert enhancer.enhance(empty) is empty
    assert enhancer.enhance(None) is None


def test_small_image_is_upscaled_to_target(enhancer):
    image = np.full((100, 150, 3), 200, dtype=np.uint8)

    result = enhancer.enhance(image)

    assert result.ndim == 2
    assert result.dtype == np.uint8
    assert result.shape == (600, 900)


def test_large_image_keeps_size(enhancer, sharpImage):
    image = cv2.resize(sharpImage, (500, 400), interpolation=cv2.INTER_NEAREST)

    result = enhancer.enhance(image)

    assert result.shape == (400, 500)


def test_accepts_gray_and_bgra(enhancer, sharpImage):
    gray = cv2.cvtColor(sharpImage, cv2.COLOR_BGR2GRAY)
    bgra = cv2.cvtColor(sharpImage, cv2.COLOR_BGR2BGRA)

    assert enhancer.enhance(gray).shape == (600, 600)
    assert enhancer.enhance(bgra).shape == (600, 600)


def test_enhancing_twice_is_allowed(enhancer, sharpImage):
    once = enhancer.enhance(sharpImage)
    twice = enhancer.enhance(once)

    assert twice.shape == once.shape


def test_deterministic_and_input_untouched(enhancer, sharpImage):
    before = sharpImage.copy()

    first = enhancer.enhance(sharpImage)
    second = enhancer.enhance(sharpImage)

    assert np.array_equal(first, second)
    assert np.array_equal(sharpImage, before)


def test_gray_input_is_not_modified_in_place(enhancer):
    gray = np.random.default_rng(3).integers(0, 256, size=(400, 400), dtype=np.uint8)
    before = gray.copy()

    enhancer.enhance(gray)

    assert np.array_equal(gray, before)


def test_custom_upscale_parameters():
    enhancer = QrImageEnhancer(minDimension=50, targetDimension=80)

    assert enhancer.enhance(np.zeros((40, 60), dtype=np.uint8)).shape == (80, 120)
    assert enhancer.enhance(np.zeros((60, 60), dtype=np.uint8)).shape == (60, 60)
