"""
QR Detection Service Interface Module.

Defines the interface and result types for QR code detection.
A detection either succeeds (decoded, validated and scored) or fails
with a human-readable reason; the two outcomes are separate types.

Follows:
- SRP: Only handles QR detection operations
- DIP: Depends on IQrDecoder abstraction from core layer
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union
import numpy as np


@dataclass
class DetectionSuccess:
    """
    Successful detection.

    Attributes:
        data: Decoded and validated payload (non-empty).
        boundingBox: Four corners [(x, y), ...] or empty, in the coordinate
                     space of processedImage.
        confidence: Heuristic confidence (0.0 to 1.0).
        processedImage: Image variant (raw copy or enhanced) that decoded.
    """
    data: str
    boundingBox: List[Tuple[int, int]] = field(default_factory=list)
    confidence: float = 0.0
    processedImage: Optional[np.ndarray] = field(default=None, repr=False)

    @property
    def success(self) -> bool:
        return True

    @property
    def errorMessage(self) -> str:
        return ""


@dataclass
class DetectionFailure:
    """
    Failed detection.

    Attributes:
        errorMessage: Reason for the failure.
    """
    errorMessage: str

    @property
    def success(self) -> bool:
        return False

    @property
    def data(self) -> str:
        return ""

    @property
    def boundingBox(self) -> List[Tuple[int, int]]:
        return []

    @property
    def confidence(self) -> float:
        return 0.0

    @property
    def processedImage(self) -> Optional[np.ndarray]:
        return None


DetectionResult = Union[DetectionSuccess, DetectionFailure]


class IQrDetectionService(ABC):
    """
    Interface for QR detection operations.

    Decodes a QR code from an image, retrying on an enhanced version of the
    image when the raw one does not decode, and keeps detection statistics.
    """

    @abstractmethod
    def detect(self, image: np.ndarray) -> DetectionResult:
        """
        Detect and decode a QR code from an image.

        Input problems, misses and DecoderFault outcomes all come back as
        DetectionFailure. An exception raised by a decoder that breaks the
        IQrDecoder contract (instead of returning DecoderFault) is not
        caught and reaches the caller.

        Args:
            image: Input image (BGR, BGRA, grayscale or any 8-bit channel count).

        Returns:
            DetectionResult: success or failure.
        """
        pass

    @abstractmethod
    def setPreprocessingEnabled(self, enabled: bool) -> None:
        """
        Enable or disable the enhanced retry.

        Args:
            enabled: True to retry on an enhanced image.
        """
        pass

    @abstractmethod
    def getTotalDetections(self) -> int:
        """Number of detect() calls so far."""
        pass

    @abstractmethod
    def getSuccessfulDetections(self) -> int:
        """Number of detect() calls that succeeded."""
        pass

    @abstractmethod
    def getSuccessRate(self) -> float:
        """Successful / total, 0.0 before the first call."""
        pass
