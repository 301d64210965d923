"""
Result Writer Service

Turns detection results into human-readable output:
- plain-text report per result
- annotated image (symbol outline, corner markers, info text)
- framed console block
- aggregated batch report
"""

import os
import sys
import logging
from datetime import datetime
from typing import Optional, Sequence, TextIO

import numpy as np
import cv2

from core.interfaces.writer_interface import IImageWriter
from core.writer.local_writer import LocalImageWriter
from services.interfaces.qr_detection_service_interface import DetectionResult


logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class ResultWriterService:
    """
    Service for reporting detection results.

    Follows:
    - SRP: Only handles result formatting and persistence
    - DIP: Depends on IImageWriter abstraction for images
    """

    MAX_DISPLAY_DATA_LENGTH = 50

    def __init__(
        self,
        imageWriter: Optional[IImageWriter] = None,
        outlineColor: tuple[int, int, int] = (0, 255, 0),
        cornerColor: tuple[int, int, int] = (0, 0, 255),
        textColor: tuple[int, int, int] = (255, 255, 255),
        textBackground: tuple[int, int, int] = (0, 0, 0),
        lineThickness: int = 3,
        fontSize: float = 0.6
    ):
        """
        Initialize ResultWriterService.

        Args:
            imageWriter: Image writer implementation.
            outlineColor: Color of the symbol outline (BGR).
            cornerColor: Color of the outer corner markers (BGR).
            textColor: Color of info text (BGR).
            textBackground: Color of the box behind info text (BGR).
            lineThickness: Thickness of the symbol outline.
            fontSize: Font scale for info text.
        """
        self._imageWriter = imageWriter or LocalImageWriter()
        self._outlineColor = outlineColor
        self._cornerColor = cornerColor
        self._textColor = textColor
        self._textBackground = textBackground
        self._lineThickness = lineThickness
        self._fontSize = fontSize

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Text Output
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def formatResult(self, result: DetectionResult) -> str:
        """
        Format a result as a plain-text report block.

        Args:
            result: Detection result.

        Returns:
            Multi-line report ending with a timestamp line.
        """
        lines = [
            "Detection Result:",
            f"  Success: {'YES' if result.success else 'NO'}"
        ]

        if result.success:
            lines.append(f"  Data: {result.data}")
            lines.append(f"  Confidence: {result.confidence * 100:.1f}%")
            if result.boundingBox:
                lines.append(f"  Bounding Box: {formatPoints(result.boundingBox)}")
        else:
            lines.append(f"  Error: {result.errorMessage}")

        lines.append(f"  Timestamp: {datetime.now().strftime(TIMESTAMP_FORMAT)}")
        return "\n".join(lines) + "\n"

    def saveToTextFile(self, result: DetectionResult, filename: str) -> bool:
        """
        Save a result report to a text file.

        Args:
            result: Detection result.
            filename: Destination path.

        Returns:
            bool: True if the file was written.
        """
        logger.debug(f"Starting: Saving results to text file: {filename}")

        if not self._writeText(filename, self.formatResult(result)):
            return False

        logger.info(f"Results saved to: {filename}")
        return True

    def printToConsole(self, result: DetectionResult, stream: Optional[TextIO] = None) -> None:
        """
        Print a framed result block.

        Args:
            result: Detection result.
            stream: Output stream (default: stdout).
        """
        stream = stream or sys.stdout
        separator = "=" * 50

        lines = ["", separator, "QR CODE DETECTION RESULT", separator]
        if result.success:
            lines.append("Status: SUCCESS")
            lines.append(f"Data: {result.data}")
            lines.append(f"Confidence: {result.confidence * 100:.2f}%")
            if result.boundingBox:
                lines.append(f"Bounding Box: {formatPoints(result.boundingBox)}")
        else:
            lines.append("Status: FAILED")
            lines.append(f"Error: {result.errorMessage}")
        lines.append(separator)

        print("\n".join(lines), file=stream)

    def saveBatchResults(
        self,
        results: Sequence[DetectionResult],
        baseFilename: str
    ) -> bool:
        """
        Save an aggregated report to "<baseFilename>_batch.txt".

        Args:
            results: Detection results in processing order.
            baseFilename: Path prefix of the report.

        Returns:
            bool: True if the report was written.
        """
        logger.debug("Starting: Saving batch results")

        successCount = sum(1 for r in results if r.success)
        total = len(results)
        successRate = successCount / total * 100 if total else 0.0

        parts = [
            "BATCH QR CODE DETECTION RESULTS",
            f"Generated: {datetime.now().strftime(TIMESTAMP_FORMAT)}",
            f"Total files processed: {total}",
            "-" * 40
        ]
        for idx, result in enumerate(results, 1):
            parts.append(f"Result {idx}:")
            parts.append(self.formatResult(result))
        parts.append("-" * 40)
        parts.append(
            f"Successful detections: {successCount}/{total} ({successRate:.1f}%)"
        )

        filename = f"{baseFilename}_batch.txt"
        if not self._writeText(filename, "\n".join(parts) + "\n"):
            logger.error("Failed to create batch results file")
            return False

        logger.info(f"Batch results saved: {filename}")
        return True

    def generateReport(self, results: Sequence[DetectionResult], filename: str) -> bool:
        """Write the batch report for a set of results."""
        return self.saveBatchResults(results, filename)

    def _writeText(self, filename: str, content: str) -> bool:
        try:
            directory = os.path.dirname(filename)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(filename, 'w', encoding='utf-8') as f:
                f.write(content)
            return True
        except OSError as e:
            logger.error(f"Failed to open file for writing: {filename} ({e})")
            return False

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Visualization
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def saveVisualization(self, result: DetectionResult, filename: str) -> bool:
        """
        Save the processed image annotated with the detection.

        Args:
            result: Detection result (must be a success with an image).
            filename: Destination path.

        Returns:
            bool: True if the image was written.
        """
        if not result.success or result.processedImage is None or result.processedImage.size == 0:
            logger.warning("Cannot save visualization - no successful result or empty image")
            return False

        logger.debug(f"Starting: Saving visualization: {filename}")

        visualization = self.drawAnnotations(result)
        success = self._imageWriter.save(visualization, filename)

        if success:
            logger.info(f"Visualization saved to: {filename}")
        else:
            logger.error(f"Failed to save visualization: {filename}")
        return success

    def drawAnnotations(self, result: DetectionResult) -> np.ndarray:
        """
        Draw outline, corner markers and info text on a copy of the image.

        Args:
            result: Successful detection result.

        Returns:
            Annotated BGR image.
        """
        image = result.processedImage
        if image.ndim == 2:
            visualization = cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
        else:
            visualization = image.copy()

        if len(result.boundingBox) == 4:
            self._drawBoundingBox(visualization, result.boundingBox)

        self._drawInfoText(visualization, result)
        return visualization

    def _drawBoundingBox(self, image: np.ndarray, boundingBox: Sequence) -> None:
        points = [(int(x), int(y)) for x, y in boundingBox]

        for i in range(4):
            cv2.line(
                image,
                points[i],
                points[(i + 1) % 4],
                self._outlineColor,
                self._lineThickness
            )

        for point in points:
            cv2.circle(image, point, 8, self._cornerColor, -1)
            cv2.circle(image, point, 4, self._outlineColor, -1)

    def _drawInfoText(self, image: np.ndarray, result: DetectionResult) -> None:
        lines = ["QR DETECTED" if result.success else "NOT DETECTED"]
        if result.success:
            lines.append(f"Confidence: {int(result.confidence * 100)}%")
            lines.append(f"Data: {truncateData(result.data, self.MAX_DISPLAY_DATA_LENGTH)}")

        x, y = 10, 30
        for idx, text in enumerate(lines):
            (textWidth, textHeight), baseline = cv2.getTextSize(
                text,
                cv2.FONT_HERSHEY_SIMPLEX,
                self._fontSize,
                2
            )
            if idx > 0:
                y += textHeight + 15

            cv2.rectangle(
                image,
                (x - 5, y - textHeight - 5),
                (x + textWidth + 5, y + baseline + 5),
                self._textBackground,
                -1
            )
            cv2.putText(
                image,
                text,
                (x, y),
                cv2.FONT_HERSHEY_SIMPLEX,
                self._fontSize,
                self._textColor,
                2
            )


def formatPoints(points: Sequence) -> str:
    """Render corners as "(x,y) (x,y) ..."."""
    return " ".join(f"({int(x)},{int(y)})" for x, y in points)


def truncateData(data: str, maxLength: int = 50) -> str:
    """Shorten long payloads for on-image display."""
    if len(data) <= maxLength:
        return data
    return data[:maxLength - 3] + "..."
