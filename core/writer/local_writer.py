"""
Local Image Writer Implementation

Implements IImageWriter for saving images to the local filesystem.
Used for debug artifacts and annotated detection results.
"""

import os
import logging
from typing import List
import numpy as np
import cv2

from core.interfaces.writer_interface import IImageWriter


logger = logging.getLogger(__name__)


class LocalImageWriter(IImageWriter):
    """
    Image writer for the local filesystem, backed by cv2.imwrite.

    Creates missing parent directories. Existing files are overwritten.
    """

    def __init__(self, jpegQuality: int = 95, pngCompression: int = 3):
        """
        Initialize LocalImageWriter.

        Args:
            jpegQuality: JPEG quality (0-100).
            pngCompression: PNG compression level (0-9, lower is faster).
        """
        self._jpegQuality = jpegQuality
        self._pngCompression = pngCompression

    def save(self, image: np.ndarray, filepath: str) -> bool:
        """
        Save an image to the specified filepath.

        Args:
            image: Image as numpy array.
            filepath: Destination path for the image file.

        Returns:
            bool: True if image saved successfully.
        """
        if image is None or image.size == 0:
            logger.warning(f"Refusing to save empty image to {filepath}")
            return False

        try:
            directory = os.path.dirname(filepath)
            if directory:
                os.makedirs(directory, exist_ok=True)

            success = cv2.imwrite(filepath, image, self._encodeParams(filepath))

            if success:
                logger.debug(f"Image saved to {filepath}")
            else:
                logger.error(f"Failed to save image to {filepath}")
            return bool(success)

        except (OSError, cv2.error) as e:
            logger.error(f"Error saving image to {filepath}: {e}")
            return False

    def _encodeParams(self, filepath: str) -> List[int]:
        ext = os.path.splitext(filepath)[1].lower()
        if ext in ('.jpg', '.jpeg'):
            return [cv2.IMWRITE_JPEG_QUALITY, self._jpegQuality]
        if ext == '.png':
            return [cv2.IMWRITE_PNG_COMPRESSION, self._pngCompression]
        return []
