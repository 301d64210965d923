"""
OpenCV QR Code Decoder Implementation.

This module provides QR code decoding using OpenCV's built-in
QRCodeDetector. It is the default backend: it needs no model files
and ships with every OpenCV build.

Follows the Single Responsibility Principle (SRP) from SOLID.
"""

import logging
from typing import Optional

import cv2
import numpy as np

from core.interfaces.qr_decoder_interface import (
    IQrDecoder,
    DecodeOutcome,
    DecodedSymbol,
    DecoderFault,
    normalizePoints
)


class OpenCVQrDecoder(IQrDecoder):
    """
    QR code decoder using cv2.QRCodeDetector.

    Locates and decodes a single QR symbol. OpenCV errors raised while
    decoding are converted into DecoderFault instead of propagating.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize OpenCVQrDecoder.

        Args:
            logger: Logger instance for debug output
        """
        self._detector = cv2.QRCodeDetector()
        self._logger = logger or logging.getLogger(__name__)

        self._logger.info("OpenCVQrDecoder initialized")

    @property
    def backendName(self) -> str:
        return "opencv"

    def decode(self, image: np.ndarray) -> DecodeOutcome:
        """
        Detect and decode a QR code in an image.

        Args:
            image: Input image (BGR or grayscale)

        Returns:
            DecodedSymbol with text (possibly empty) and corners,
            or DecoderFault if OpenCV rejected the image
        """
        try:
            # API: detectAndDecode(img) -> (text, points, straight_qrcode)
            # points: float32 array (1, 4, 2) or None
            text, points, _ = self._detector.detectAndDecode(image)
        except cv2.error as e:
            self._logger.error(f"OpenCV exception: {e}")
            return DecoderFault(f"OpenCV error: {e}")

        polygon = normalizePoints(points)

        self._logger.debug(f"QR detection attempted, data length: {len(text or '')}")
        self._logger.debug(f"Found points: {len(polygon)}")
        if text:
            self._logger.debug(f"Raw QR data: {text}")

        return DecodedSymbol(text=text or "", points=polygon)
