"""
Image Loader Module

Supplies validated images to the QR detection service from image files
or camera devices. Input errors (missing file, unsupported format,
undecodable data, unavailable camera) are reported through LoadResult
and never reach the detector as exceptions.
"""

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import cv2
import numpy as np

from core.interfaces.camera_interface import ICameraCapture
from core.camera.opencv_camera import OpenCVCamera


SUPPORTED_FORMATS = ('.jpg', '.jpeg', '.png', '.bmp', '.tiff', '.tif', '.webp')

IMAGE_TYPE_NAMES = {
    1: "Grayscale",
    3: "BGR Color",
    4: "BGRA Color",
}


@dataclass
class LoadResult:
    """
    Result of loading one image.

    Attributes:
        success: Whether an image was obtained.
        image: Loaded BGR image, None on failure.
        errorMessage: Reason for the failure, empty on success.
        source: File path or "webcam_device_<index>".
    """
    success: bool
    image: Optional[np.ndarray] = field(default=None, repr=False)
    errorMessage: str = ""
    source: str = ""


class ImageLoader:
    """
    Loads images from files and camera devices.

    File formats are whitelisted by extension (case-insensitive).
    """

    def __init__(
        self,
        camera: Optional[ICameraCapture] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize ImageLoader.

        Args:
            camera: Camera used by loadFromWebcam (default: OpenCVCamera).
            logger: Logger instance.
        """
        self._camera = camera or OpenCVCamera()
        self._logger = logger or logging.getLogger(__name__)

    def loadFromFile(self, filePath: str) -> LoadResult:
        """
        Load an image file in colour.

        Args:
            filePath: Path to the image file.

        Returns:
            LoadResult with the BGR image or an error message.
        """
        filePath = str(filePath)
        self._logger.debug(f"Starting: Loading image from file: {filePath}")

        if not os.path.exists(filePath):
            self._logger.error(f"File does not exist: {filePath}")
            return self._errorResult(f"File does not exist: {filePath}", filePath)

        extension = getFileExtension(filePath)
        if not isSupportedFormat(extension):
            self._logger.error(f"Unsupported image format: {extension}")
            return self._errorResult(f"Unsupported image format: {extension}", filePath)

        image = cv2.imread(filePath, cv2.IMREAD_COLOR)

        if image is None or image.size == 0:
            self._logger.error(f"Failed to load image (may be corrupted): {filePath}")
            return self._errorResult("Failed to load image (file may be corrupted)", filePath)

        self._logger.info(f"Image loaded successfully: {getImageInfo(image)}")
        self._logger.debug("Completed: Loading image from file")
        return LoadResult(success=True, image=image, source=filePath)

    def loadFromWebcam(self, cameraIndex: int = 0) -> LoadResult:
        """
        Capture a single frame from a camera device.

        Args:
            cameraIndex: Camera device index.

        Returns:
            LoadResult with the captured frame or an error message.
        """
        self._logger.debug(
            f"Starting: Loading image from webcam (device {cameraIndex})"
        )

        if not self._camera.open(cameraIndex):
            self._logger.error(f"Failed to open webcam device: {cameraIndex}")
            return self._errorResult(f"Failed to open webcam device: {cameraIndex}")

        try:
            ret, frame = self._camera.read()
        finally:
            self._camera.release()

        if not ret or frame is None or frame.size == 0:
            self._logger.error("Failed to capture frame from webcam")
            return self._errorResult("Failed to capture frame from webcam")

        self._logger.info(f"Webcam image captured: {getImageInfo(frame)}")
        self._logger.debug("Completed: Loading image from webcam")
        return LoadResult(
            success=True,
            image=frame,
            source=f"webcam_device_{cameraIndex}"
        )

    def listImages(self, directory: str) -> List[Path]:
        """
        Find supported image files below a directory.

        Args:
            directory: Directory searched recursively.

        Returns:
            Sorted list of image paths (empty if the directory is missing).
        """
        root = Path(directory)
        if not root.is_dir():
            self._logger.error(f"Input path is not a directory: {directory}")
            return []

        imageFiles = [
            path for path in root.rglob("*")
            if path.is_file() and isSupportedFormat(getFileExtension(str(path)))
        ]
        imageFiles.sort(key=lambda p: str(p).lower())

        self._logger.info(f"Found {len(imageFiles)} images in {directory} (recursive)")
        return imageFiles

    def _errorResult(self, errorMessage: str, source: str = "") -> LoadResult:
        return LoadResult(success=False, image=None, errorMessage=errorMessage, source=source)


def isValidImage(image: Optional[np.ndarray]) -> bool:
    """Check that an image holds pixel data."""
    return image is not None and image.size > 0 and image.shape[0] > 0 and image.shape[1] > 0


def getImageInfo(image: Optional[np.ndarray]) -> str:
    """
    Describe an image as "<w>x<h>, <type>, Channels: <c>".
    """
    if not isValidImage(image):
        return "Invalid image"

    h, w = image.shape[:2]
    channels = 1 if image.ndim == 2 else image.shape[2]
    if image.dtype == np.uint8:
        imageType = IMAGE_TYPE_NAMES.get(channels, "Unknown type")
    else:
        imageType = "Unknown type"

    return f"{w}x{h}, {imageType}, Channels: {channels}"


def getFileExtension(filePath: str) -> str:
    """Lower-cased extension including the dot, empty when there is none."""
    return os.path.splitext(filePath)[1].lower()


def isSupportedFormat(extension: str) -> bool:
    return extension.lower() in SUPPORTED_FORMATS
