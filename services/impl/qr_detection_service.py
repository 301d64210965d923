"""
QR Detection Service Implementation.

Drives the detect → enhance → retry pipeline:

1. Decode a copy of the raw image
2. On failure, enhance the original image and decode again
3. Validate the payload and score confidence on whichever variant decoded
4. Track detection statistics and dump debug images on failure

Follows:
- SRP: Only handles QR detection orchestration
- DIP: Depends on IQrDecoder abstraction (interface)
- Factory Pattern: Uses createQrDecoder() when no decoder is injected
"""

import time
import logging
from typing import Optional

import numpy as np

from core.interfaces.qr_decoder_interface import (
    IQrDecoder,
    DecoderFault,
    normalizePoints
)
from core.interfaces.writer_interface import IImageWriter
from core.qr import (
    createQrDecoder,
    ConfidenceScorer,
    isValidPayload
)
from core.enhancer import QrImageEnhancer
from services.interfaces.qr_detection_service_interface import (
    IQrDetectionService,
    DetectionResult,
    DetectionSuccess,
    DetectionFailure
)
from services.interfaces.base_service_interface import BaseService


class QrDetectionService(IQrDetectionService, BaseService):
    """
    QR Detection Service Implementation.

    Owns the detection counters of one instance. Not safe for concurrent
    use from several threads without external locking.
    """

    SERVICE_NAME = "qr_detection"

    DEBUG_ORIGINAL_FILENAME = "debug_original.png"
    DEBUG_ENHANCED_FILENAME = "debug_enhanced.png"

    ERROR_EMPTY_IMAGE = "Empty input image"
    ERROR_NOT_DETECTED = "No QR code detected in image"
    ERROR_VALIDATION = "QR code found but data validation failed"
    ERROR_WEBCAM = "Webcam detection not implemented yet"

    def __init__(
        self,
        decoder: Optional[IQrDecoder] = None,
        enhancer: Optional[QrImageEnhancer] = None,
        confidenceScorer: Optional[ConfidenceScorer] = None,

        # Behaviour flags
        preprocessingEnabled: bool = True,
        multipleQrEnabled: bool = False,

        # Debug settings
        debugDirectory: str = ".",
        debugEnabled: bool = True,
        imageWriter: Optional[IImageWriter] = None,

        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize QrDetectionService.

        Args:
            decoder: QR decoder backend (default: OpenCV QRCodeDetector).
            enhancer: Enhancement pipeline for the retry pass.
            confidenceScorer: Scorer for successful decodes.
            preprocessingEnabled: Retry on an enhanced image after a miss.
            multipleQrEnabled: Reserved for multi-symbol detection, no effect.
            debugDirectory: Directory for debug_original/debug_enhanced images.
            debugEnabled: Whether debug images are written on failure.
            imageWriter: Writer used for debug images.
            logger: Logger instance.
        """
        BaseService.__init__(
            self,
            serviceName=self.SERVICE_NAME,
            debugDirectory=debugDirectory,
            debugEnabled=debugEnabled,
            imageWriter=imageWriter,
            logger=logger
        )

        self._decoder: IQrDecoder = decoder or createQrDecoder()
        self._enhancer = enhancer or QrImageEnhancer()
        self._confidenceScorer = confidenceScorer or ConfidenceScorer()

        self._preprocessingEnabled = preprocessingEnabled
        self._multipleQrEnabled = multipleQrEnabled

        self._totalDetections = 0
        self._successfulDetections = 0

        self._logger.info(
            f"QrDetectionService initialized "
            f"(backend={self._decoder.backendName}, "
            f"preprocessing={preprocessingEnabled}, "
            f"multipleQr={multipleQrEnabled})"
        )

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Detection
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def detect(self, image: np.ndarray) -> DetectionResult:
        """
        Detect and decode a QR code from an image.

        The caller's image is never modified: the raw attempt works on a
        copy, and the enhanced attempt starts from the untouched input.

        Args:
            image: Input image (BGR or grayscale, 8-bit).

        Returns:
            DetectionSuccess or DetectionFailure.
        """
        self._logger.debug("Starting: QR detection from image")
        startTime = time.time()
        self._totalDetections += 1

        if image is None or image.size == 0:
            self._logger.error("Cannot detect QR codes in empty image")
            return DetectionFailure(self.ERROR_EMPTY_IMAGE)

        processedImage = image.copy()
        originalResult = self._processDetection(processedImage)

        if not originalResult.success and self._preprocessingEnabled:
            self._logger.debug("Trying with image enhancement...")
            enhancedImage = self._enhancer.enhance(image)
            enhancedResult = self._processDetection(enhancedImage)

            if enhancedResult.success:
                enhancedResult.processedImage = enhancedImage
                self._successfulDetections += 1
                self._logger.info(
                    f"QR found after enhancement: {enhancedResult.data} "
                    f"(time={self._measureTime(startTime):.2f}ms)"
                )
                self._logger.debug("Completed: QR detection from image")
                return enhancedResult

            self._saveDebugImage(enhancedImage, self.DEBUG_ENHANCED_FILENAME)

        if originalResult.success:
            originalResult.processedImage = processedImage
            self._successfulDetections += 1
            self._logger.info(
                f"QR detection successful: {originalResult.data} "
                f"(time={self._measureTime(startTime):.2f}ms)"
            )
        else:
            self._logger.warning(
                f"QR detection failed: {originalResult.errorMessage} "
                f"(time={self._measureTime(startTime):.2f}ms)"
            )
            self._saveDebugImage(processedImage, self.DEBUG_ORIGINAL_FILENAME)

        self._logger.debug("Completed: QR detection from image")
        return originalResult

    def detectFromWebcam(self) -> DetectionResult:
        """
        Live webcam detection placeholder.

        Returns:
            DetectionFailure, live detection is not implemented.
        """
        self._logger.info("Attempting QR detection from webcam")
        return DetectionFailure(self.ERROR_WEBCAM)

    def _processDetection(self, image: np.ndarray) -> DetectionResult:
        """
        Run one decode attempt and validate/score its output.

        Args:
            image: Image variant to decode (raw copy or enhanced).

        Returns:
            DetectionSuccess without processedImage, or DetectionFailure.
        """
        outcome = self._decoder.decode(image)

        if isinstance(outcome, DecoderFault):
            return DetectionFailure(outcome.description)

        if not outcome.text:
            return DetectionFailure(self.ERROR_NOT_DETECTED)

        if not isValidPayload(outcome.text):
            self._logger.debug("QR validation failed")
            return DetectionFailure(self.ERROR_VALIDATION)

        self._logger.debug("QR validation passed")
        # Partial corner sets are dropped, a box is either empty or 4 points
        boundingBox = normalizePoints(outcome.points)
        return DetectionSuccess(
            data=outcome.text,
            boundingBox=boundingBox,
            confidence=self._confidenceScorer.score(boundingBox, image)
        )

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Configuration Methods
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def setPreprocessingEnabled(self, enabled: bool) -> None:
        """Enable or disable the enhanced retry."""
        self._preprocessingEnabled = enabled
        self._logger.debug(f"Preprocessing {'enabled' if enabled else 'disabled'}")

    def isPreprocessingEnabled(self) -> bool:
        """Check if the enhanced retry is enabled."""
        return self._preprocessingEnabled

    def setMultipleQrEnabled(self, enabled: bool) -> None:
        """Set the reserved multi-symbol flag. Detection is unaffected."""
        self._multipleQrEnabled = enabled
        self._logger.debug(f"Multiple QR detection {'enabled' if enabled else 'disabled'}")

    def isMultipleQrEnabled(self) -> bool:
        """Check the reserved multi-symbol flag."""
        return self._multipleQrEnabled

    def getBackend(self) -> str:
        """Get current QR decoder backend."""
        return self._decoder.backendName

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Statistics
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def getTotalDetections(self) -> int:
        return self._totalDetections

    def getSuccessfulDetections(self) -> int:
        return self._successfulDetections

    def getSuccessRate(self) -> float:
        if self._totalDetections == 0:
            return 0.0
        return self._successfulDetections / self._totalDetections
