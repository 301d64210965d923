"""
zxing-cpp QR decoder backend.

Only imported by the factory once zxingcpp is known to be installed.
"""

import logging
from typing import List, Optional, Tuple

import cv2
import numpy as np
import zxingcpp

from core.enhancer.quality_scorer import toGrayscale
from core.interfaces.qr_decoder_interface import (
    IQrDecoder,
    DecodeOutcome,
    DecodedSymbol,
    DecoderFault
)


def cornerPolygon(position) -> List[Tuple[int, int]]:
    """zxing Position → [top_left, top_right, bottom_right, bottom_left]."""
    corners = (
        position.top_left,
        position.top_right,
        position.bottom_right,
        position.bottom_left
    )
    return [(int(point.x), int(point.y)) for point in corners]


class ZxingQrDecoder(IQrDecoder):
    """
    Decoder over zxingcpp.read_barcodes restricted to the QR format.

    When several symbols are found the first valid one is returned.
    """

    def __init__(
        self,
        tryRotate: bool = True,
        tryDownscale: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Args:
            tryRotate: Also search the image rotated by 90/180/270 degrees.
            tryDownscale: Also search downscaled copies of large images.
            logger: Logger instance.
        """
        self._readOptions = {
            "formats": zxingcpp.BarcodeFormat.QRCode,
            "try_rotate": tryRotate,
            "try_downscale": tryDownscale,
        }
        self._logger = logger or logging.getLogger(__name__)
        self._logger.info(f"ZxingQrDecoder ready: rotate={tryRotate}, downscale={tryDownscale}")

    @property
    def backendName(self) -> str:
        return "zxing"

    def decode(self, image: np.ndarray) -> DecodeOutcome:
        try:
            barcodes = zxingcpp.read_barcodes(toGrayscale(image), **self._readOptions)
        except (cv2.error, ValueError, RuntimeError, TypeError) as e:
            self._logger.error(f"zxing-cpp rejected the image: {e}")
            return DecoderFault(f"zxing-cpp error: {e}")

        valid = [barcode for barcode in barcodes if barcode.valid]
        self._logger.debug(f"zxing-cpp: {len(barcodes)} candidate(s), {len(valid)} valid")
        if not valid:
            return DecodedSymbol(text="")

        first = valid[0]
        return DecodedSymbol(text=first.text, points=cornerPolygon(first.position))
