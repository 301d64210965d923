"""
Writer Interface Module

Defines the abstract interface for image persistence used by the
QR reader (debug artifacts and annotated result images).
Follows ISP: Only contains methods related to image saving.
"""

from abc import ABC, abstractmethod
import numpy as np


class IImageWriter(ABC):
    """
    Abstract interface for image writing operations.

    Implementations never raise on I/O problems; they report the outcome
    through the return value so callers can treat writes as best-effort.
    """

    @abstractmethod
    def save(self, image: np.ndarray, filepath: str) -> bool:
        """
        Save an image to the specified filepath.

        Args:
            image: Image as numpy array (BGR or grayscale).
            filepath: Destination path; the extension selects the format.

        Returns:
            bool: True if the file was written, False otherwise.
        """
        pass
