"""
QR Image Enhancer Module

Transforms a raw image into a version more likely to decode.
Used as the fallback pass when the raw image does not decode.

Pipeline order (important, each stage feeds the next):
1. Grayscale       - single luminance channel
2. Binarize        - Otsu global threshold to 0/255
3. CLAHE           - local contrast boost, clip limit 2.0
4. Morph close     - dilate then erode, 3x3 rectangle
5. Upscale         - if shorter side < 300, cubic resize to 600

Follows SRP: Only handles enhancement for QR decoding.
"""

import logging
from typing import Optional, Tuple
import numpy as np
import cv2

from core.enhancer.quality_scorer import toGrayscale


class QrImageEnhancer:
    """
    Deterministic enhancement pipeline for QR decoding.

    Stateless between calls: the output depends only on the input image
    and the constructor parameters.
    """

    def __init__(
        self,
        clipLimit: float = 2.0,
        tileGridSize: Tuple[int, int] = (8, 8),
        morphKernelSize: int = 3,
        minDimension: int = 300,
        targetDimension: int = 600,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize QrImageEnhancer.

        Args:
            clipLimit: CLAHE contrast limit. Kept low so already-binary
                       content is not turned into noise.
            tileGridSize: CLAHE tile grid.
            morphKernelSize: Side of the square closing kernel.
            minDimension: Images whose shorter side is below this are upscaled.
            targetDimension: Shorter side after upscaling.
            logger: Logger instance for debug output.
        """
        self._clipLimit = clipLimit
        self._tileGridSize = tuple(tileGridSize)
        self._morphKernelSize = morphKernelSize
        self._minDimension = minDimension
        self._targetDimension = targetDimension
        self._logger = logger or logging.getLogger(__name__)

        self._logger.info(
            f"QrImageEnhancer initialized: clipLimit={clipLimit}, "
            f"tileGridSize={self._tileGridSize}, kernel={morphKernelSize}, "
            f"upscale<{minDimension}->{targetDimension}"
        )

    @property
    def clipLimit(self) -> float:
        """Get CLAHE clip limit."""
        return self._clipLimit

    @property
    def minDimension(self) -> int:
        """Get the shorter-side threshold for upscaling."""
        return self._minDimension

    @property
    def targetDimension(self) -> int:
        """Get the shorter side produced by upscaling."""
        return self._targetDimension

    def enhance(self, image: np.ndarray) -> np.ndarray:
        """
        Enhance image for QR decoding.

        Args:
            image: Input image (BGR, BGRA or grayscale, 8-bit).

        Returns:
            Enhanced grayscale image. Empty input is returned unchanged.
        """
        if image is None or image.size == 0:
            self._logger.warning("Input image is None or empty")
            return image

        self._logger.debug("Starting: Enhancing image for QR detection")

        processed = toGrayscale(image).copy()

        _, processed = cv2.threshold(
            processed, 0, 255, cv2.THRESH_BINARY | cv2.THRESH_OTSU
        )

        clahe = cv2.createCLAHE(
            clipLimit=self._clipLimit,
            tileGridSize=self._tileGridSize
        )
        processed = clahe.apply(processed)

        kernel = cv2.getStructuringElement(
            cv2.MORPH_RECT,
            (self._morphKernelSize, self._morphKernelSize)
        )
        processed = cv2.morphologyEx(processed, cv2.MORPH_CLOSE, kernel)

        processed = self._upscaleIfSmall(processed)

        self._logger.debug("Completed: Enhancing image for QR detection")
        return processed

    def _upscaleIfSmall(self, image: np.ndarray) -> np.ndarray:
        """
        Upscale isotropically so the shorter side reaches targetDimension.

        Args:
            image: Grayscale image.

        Returns:
            Upscaled image, or the input if it is already large enough.
        """
        h, w = image.shape[:2]
        shorter = min(h, w)
        if shorter >= self._minDimension:
            return image

        scale = self._targetDimension / shorter
        newW = max(1, int(round(w * scale)))
        newH = max(1, int(round(h * scale)))

        upscaled = cv2.resize(image, (newW, newH), interpolation=cv2.INTER_CUBIC)
        self._logger.debug(f"Upscale: {w}x{h} → {newW}x{newH} ({scale:.3f}x)")
        return upscaled
