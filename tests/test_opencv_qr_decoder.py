"""Tests for the OpenCV decoder backend and corner normalization."""

import cv2
import numpy as np
import pytest

from core.interfaces.qr_decoder_interface import (
    DecodedSymbol,
    DecoderFault,
    normalizePoints
)
from core.qr.opencv_qr_decoder import OpenCVQrDecoder
from tests.helpers import makeQrImage, requiresQrEncoder


class ExplodingDetector:

    def detectAndDecode(self, image):
        raise cv2.error("boom")


def test_blank_image_decodes_to_empty_text(flatImage):
    outcome = OpenCVQrDecoder().decode(flatImage)

    assert isinstance(outcome, DecodedSymbol)
    assert outcome.text == ""


def test_opencv_error_becomes_fault(flatImage):
    decoder = OpenCVQrDecoder()
    decoder._detector = ExplodingDetector()

    outcome = decoder.decode(flatImage)

    assert isinstance(outcome, DecoderFault)
    assert outcome.description.startswith("OpenCV error: ")


def test_backend_name():
    assert OpenCVQrDecoder().backendName == "opencv"


@requiresQrEncoder
def test_decodes_rendered_symbol():
    outcome = OpenCVQrDecoder().decode(makeQrImage("HELLO"))

    assert isinstance(outcome, DecodedSymbol)
    assert outcome.text == "HELLO"
    assert len(outcome.points) == 4
    assert all(isinstance(v, int) for point in outcome.points for v in point)


@pytest.mark.parametrize("raw, expected", [
    (None, []),
    (np.zeros((0,), dtype=np.float32), []),
    (np.array([[[1.4, 2.6], [10.0, 2.0], [10.0, 12.0], [1.0, 12.0]]], dtype=np.float32),
     [(1, 3), (10, 2), (10, 12), (1, 12)]),
    ([(0, 0), (5, 0), (5, 5), (0, 5)], [(0, 0), (5, 0), (5, 5), (0, 5)]),
    ([(0, 0), (5, 0), (5, 5)], []),
])
def test_normalize_points(raw, expected):
    assert normalizePoints(raw) == expected
