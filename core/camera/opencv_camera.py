"""
OpenCV Camera

Still-frame capture through cv2.VideoCapture for the webcam input of
the QR reader. Many webcams deliver dark or unfocused frames right after
the device opens, so the first read after open() drops a few frames.
"""

import logging
from typing import List, Optional, Tuple

import cv2
import numpy as np

from core.interfaces.camera_interface import ICameraCapture, CameraInfo


logger = logging.getLogger(__name__)


class OpenCVCamera(ICameraCapture):
    """ICameraCapture over cv2.VideoCapture."""

    def __init__(self, maxCameraSearch: int = 5, warmupFrames: int = 5):
        """
        Args:
            maxCameraSearch: Device indices 0..N-1 tried by listAvailableCameras.
            warmupFrames: Frames discarded before the first frame returned
                          after open().
        """
        self._maxCameraSearch = maxCameraSearch
        self._warmupFrames = warmupFrames
        self._device: Optional[cv2.VideoCapture] = None
        self._deviceIndex = -1
        self._pendingWarmup = 0

    def listAvailableCameras(self) -> List[CameraInfo]:
        found = [
            info for info in map(self._probe, range(self._maxCameraSearch))
            if info is not None
        ]
        logger.info(f"Camera probe: {len(found)} of {self._maxCameraSearch} indices usable")
        return found

    def _probe(self, index: int) -> Optional[CameraInfo]:
        device = cv2.VideoCapture(index)
        try:
            if not device.isOpened():
                return None
            ok, frame = device.read()
            if not ok or frame is None:
                return None
            height, width = frame.shape[:2]
            return CameraInfo(index=index, name=f"Camera {index}", resolution=(width, height))
        except cv2.error as e:
            logger.debug(f"Probe of camera {index} failed: {e}")
            return None
        finally:
            device.release()

    def open(
        self,
        cameraIndex: int,
        width: Optional[int] = None,
        height: Optional[int] = None
    ) -> bool:
        self.release()

        try:
            device = cv2.VideoCapture(cameraIndex)
        except cv2.error as e:
            logger.error(f"VideoCapture({cameraIndex}) raised: {e}")
            return False

        if not device.isOpened():
            logger.error(f"Camera {cameraIndex} is not available")
            device.release()
            return False

        for prop, value in ((cv2.CAP_PROP_FRAME_WIDTH, width), (cv2.CAP_PROP_FRAME_HEIGHT, height)):
            if value is not None:
                device.set(prop, value)

        self._device = device
        self._deviceIndex = cameraIndex
        self._pendingWarmup = self._warmupFrames
        logger.info(f"Camera {cameraIndex} opened")
        return True

    def read(self) -> Tuple[bool, Optional[np.ndarray]]:
        if not self.isOpened():
            return (False, None)

        try:
            while self._pendingWarmup > 0:
                self._pendingWarmup -= 1
                self._device.grab()
            ok, frame = self._device.read()
        except cv2.error as e:
            logger.error(f"Frame grab from camera {self._deviceIndex} failed: {e}")
            return (False, None)

        if not ok:
            return (False, None)
        return (True, frame)

    def release(self) -> None:
        if self._device is None:
            return
        self._device.release()
        logger.debug(f"Camera {self._deviceIndex} released")
        self._device = None
        self._deviceIndex = -1

    def isOpened(self) -> bool:
        return self._device is not None and self._device.isOpened()

    def getCameraIndex(self) -> int:
        """Index of the open device, -1 when closed."""
        return self._deviceIndex
