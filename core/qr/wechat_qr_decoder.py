"""
WeChat QR Code Decoder Implementation.

This module provides QR code decoding using OpenCV's WeChat QRCode module.
WeChat QRCode is a CNN-based detector with super-resolution support,
available in opencv-contrib-python.

Follows the Single Responsibility Principle (SRP) from SOLID.
"""

import os
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


class WechatQrDecoder(IQrDecoder):
    """
    QR code decoder using OpenCV WeChat QRCode module.

    The model files are loaded lazily on the first decode call.
    """

    MODEL_FILES = (
        "detect.prototxt",
        "detect.caffemodel",
        "sr.prototxt",
        "sr.caffemodel"
    )

    def __init__(
        self,
        modelDir: str = "models/wechat",
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize WechatQrDecoder.

        Args:
            modelDir: Directory containing WeChat QR model files:
                - detect.prototxt
                - detect.caffemodel
                - sr.prototxt
                - sr.caffemodel
            logger: Logger instance for debug output
        """
        self._modelDir = modelDir
        self._logger = logger or logging.getLogger(__name__)
        self._detector = None

        self._logger.info(f"WechatQrDecoder initialized (modelDir={modelDir})")

    @property
    def backendName(self) -> str:
        return "wechat"

    def _ensureDetector(self) -> None:
        """Lazily initialize WeChat QR detector with model files."""
        if self._detector is not None:
            return

        paths = [os.path.join(self._modelDir, name) for name in self.MODEL_FILES]
        for path in paths:
            if not os.path.exists(path):
                raise FileNotFoundError(f"WeChat QR model file not found: {path}")

        try:
            self._detector = cv2.wechat_qrcode.WeChatQRCode(*paths)
        except AttributeError as e:
            raise ImportError(
                "WeChat QRCode requires opencv-contrib-python. "
                "Install with: pip install opencv-contrib-python"
            ) from e

        self._logger.info("WeChat QRCode detector loaded successfully")

    def decode(self, image: np.ndarray) -> DecodeOutcome:
        """
        Detect and decode a QR code in an image.

        Args:
            image: Input image (BGR or grayscale)

        Returns:
            DecodedSymbol for the first non-empty result, or DecoderFault
        """
        try:
            self._ensureDetector()
            # API: detectAndDecode(image) -> (texts, points)
            decodedTexts, points = self._detector.detectAndDecode(image)
        except (cv2.error, FileNotFoundError, ImportError) as e:
            self._logger.error(f"WeChat QRCode exception: {e}")
            return DecoderFault(f"WeChat QRCode error: {e}")

        for idx, qrText in enumerate(decodedTexts or ()):
            if not qrText:
                continue

            polygon = []
            if points is not None and len(points) > idx:
                polygon = normalizePoints(points[idx])

            self._logger.debug(f"Raw QR data: {qrText}")
            return DecodedSymbol(text=qrText, points=polygon)

        self._logger.debug("No QR code detected")
        return DecodedSymbol(text="", points=[])
