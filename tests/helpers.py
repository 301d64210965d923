"""Test doubles and image builders for the QR reader tests."""

from typing import List, Sequence

import cv2
import numpy as np
import pytest

from core.interfaces.qr_decoder_interface import (
    IQrDecoder,
    DecodeOutcome,
    DecodedSymbol
)


class ScriptedDecoder(IQrDecoder):
    """Decoder returning pre-scripted outcomes, one per call."""

    def __init__(self, outcomes: Sequence[DecodeOutcome]):
        self._outcomes = list(outcomes)
        self.calls: List[np.ndarray] = []

    @property
    def backendName(self) -> str:
        return "scripted"

    def decode(self, image: np.ndarray) -> DecodeOutcome:
        self.calls.append(image)
        if len(self.calls) <= len(self._outcomes):
            return self._outcomes[len(self.calls) - 1]
        return DecodedSymbol(text="", points=[])


class FixedQualityScorer:
    """Quality scorer stub returning a constant score."""

    def __init__(self, value: float):
        self.value = value

    def score(self, image: np.ndarray) -> float:
        return self.value


def squareBox(x: int, y: int, side: int):
    return [(x, y), (x + side, y), (x + side, y + side), (x, y + side)]


def makeQrImage(text: str, moduleSize: int = 8, border: int = 40) -> np.ndarray:
    """Render a QR symbol as a BGR image with a white quiet zone."""
    encoder = cv2.QRCodeEncoder.create()
    symbol = encoder.encode(text)
    symbol = cv2.resize(
        symbol, None, fx=moduleSize, fy=moduleSize,
        interpolation=cv2.INTER_NEAREST
    )
    symbol = cv2.copyMakeBorder(
        symbol, border, border, border, border,
        cv2.BORDER_CONSTANT, value=255
    )
    return cv2.cvtColor(symbol, cv2.COLOR_GRAY2BGR)


requiresQrEncoder = pytest.mark.skipif(
    not hasattr(cv2, "QRCodeEncoder"),
    reason="cv2.QRCodeEncoder not available in this OpenCV build"
)


