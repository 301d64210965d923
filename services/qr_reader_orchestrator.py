"""
QR Reader Orchestrator Module.

Creates ConfigService and wires the QR reader components with
parameters from config:

1. Image Loader: files and webcam frames
2. QR Detection: decode → enhance → retry, validation, confidence
3. Result Writer: console, text reports, visualizations, batch report

Follows:
- SRP: Only handles component wiring and the per-image run
- DIP: Components receive parameters, not the config service
"""

import os
import logging
from typing import List, Optional

from core.loader import ImageLoader, LoadResult
from core.qr import createQrDecoder
from core.enhancer import QrImageEnhancer
from services.impl.config_service import ConfigService
from services.impl.qr_detection_service import QrDetectionService
from services.interfaces.qr_detection_service_interface import (
    DetectionResult,
    DetectionFailure
)
from services.result_writer_service import ResultWriterService


class QrReaderOrchestrator:
    """
    Wires the QR reader components and runs inputs through them.

    Responsibilities:
    - Build every component from ConfigService values
    - Run one loaded image through detection and reporting
    - Keep the per-run list of results for the batch report
    """

    def __init__(
        self,
        configService: Optional[ConfigService] = None,
        backend: Optional[str] = None,
        outputDirectory: Optional[str] = None
    ):
        """
        Initialize the orchestrator.

        Args:
            configService: Loaded configuration (default: built-in values).
            backend: Decoder backend overriding the configured one.
            outputDirectory: Report directory overriding the configured one.
        """
        self._logger = logging.getLogger(__name__)
        self._configService = configService or ConfigService(None)
        config = self._configService

        self._outputDirectory = outputDirectory or config.getOutputDirectory()
        self._saveVisualization = config.isSaveVisualization()
        self._results: List[DetectionResult] = []
        self._writerCounter = 1

        self._imageLoader = ImageLoader()

        decoder = createQrDecoder(
            backend=backend or config.getQrBackend(),
            zxingTryRotate=config.getZxingTryRotate(),
            zxingTryDownscale=config.getZxingTryDownscale(),
            wechatModelDir=config.getWechatModelDir()
        )
        enhancer = QrImageEnhancer(
            clipLimit=config.getClipLimit(),
            tileGridSize=config.getTileGridSize(),
            morphKernelSize=config.getMorphKernelSize(),
            minDimension=config.getMinDimension(),
            targetDimension=config.getTargetDimension()
        )
        self._detectionService = QrDetectionService(
            decoder=decoder,
            enhancer=enhancer,
            preprocessingEnabled=config.isPreprocessingEnabled(),
            multipleQrEnabled=config.isMultipleQrEnabled(),
            debugDirectory=config.getDebugDirectory()
        )
        self._detectionService.setDebugEnabled(config.isDebugEnabled())
        self._resultWriter = ResultWriterService()

        self._logger.info("QrReaderOrchestrator initialized successfully")

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Component Access
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    @property
    def configService(self) -> ConfigService:
        return self._configService

    @property
    def imageLoader(self) -> ImageLoader:
        return self._imageLoader

    @property
    def detectionService(self) -> QrDetectionService:
        return self._detectionService

    @property
    def resultWriter(self) -> ResultWriterService:
        return self._resultWriter

    @property
    def results(self) -> List[DetectionResult]:
        return list(self._results)

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Processing
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def processLoaded(self, loadResult: LoadResult) -> DetectionResult:
        """
        Detect, print and persist the result for one loaded input.

        Inputs that failed to load are reported as failures without
        reaching the detector.

        Args:
            loadResult: Output of ImageLoader.

        Returns:
            DetectionResult for this input.
        """
        if not loadResult.success:
            result = DetectionFailure(loadResult.errorMessage)
        else:
            result = self._detectionService.detect(loadResult.image)

        self._results.append(result)
        self._resultWriter.printToConsole(result)

        if result.success:
            self._saveSuccess(result)

        return result

    def processFile(self, filePath: str) -> DetectionResult:
        """Load one image file and process it."""
        return self.processLoaded(self._imageLoader.loadFromFile(filePath))

    def processWebcam(self, cameraIndex: Optional[int] = None) -> DetectionResult:
        """Capture one webcam frame and process it."""
        if cameraIndex is None:
            cameraIndex = self._configService.getCameraIndex()
        return self.processLoaded(self._imageLoader.loadFromWebcam(cameraIndex))

    def saveBatchReport(self) -> bool:
        """Write the aggregated report for everything processed so far."""
        if not self._results:
            return False

        baseFilename = os.path.join(
            self._outputDirectory,
            self._configService.getBatchReportName()
        )
        return self._resultWriter.generateReport(self._results, baseFilename)

    def logStatistics(self) -> None:
        """Log detection counters of the detection service."""
        service = self._detectionService
        self._logger.info(f"Detection statistics ({service.getServiceName()}):")
        self._logger.info(f"  Total detections: {service.getTotalDetections()}")
        self._logger.info(f"  Successful: {service.getSuccessfulDetections()}")
        self._logger.info(f"  Success rate: {service.getSuccessRate() * 100:.1f}%")

    def _saveSuccess(self, result: DetectionResult) -> None:
        index = self._writerCounter
        self._writerCounter += 1

        textPath = os.path.join(self._outputDirectory, f"qr_result_{index}.txt")
        self._resultWriter.saveToTextFile(result, textPath)

        if self._saveVisualization:
            imagePath = os.path.join(self._outputDirectory, f"qr_visualization_{index}.png")
            self._resultWriter.saveVisualization(result, imagePath)
