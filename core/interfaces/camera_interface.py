"""
Camera Interface Module

Defines the abstract interface for grabbing still frames from a camera
device, used by the image loader for webcam input.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Tuple, Optional
import numpy as np


@dataclass
class CameraInfo:
    """
    A camera device found by probing.

    Attributes:
        index: Device index accepted by open().
        name: Display name.
        resolution: (width, height) of the probe frame, None if unknown.
    """
    index: int
    name: str
    resolution: Optional[Tuple[int, int]] = None

    def __str__(self) -> str:
        if self.resolution is None:
            return self.name
        width, height = self.resolution
        return f"{self.name} ({width}x{height})"


class ICameraCapture(ABC):
    """Still-frame source backed by a camera device."""

    @abstractmethod
    def listAvailableCameras(self) -> List[CameraInfo]:
        """List camera devices that can deliver a frame."""
        pass

    @abstractmethod
    def open(
        self,
        cameraIndex: int,
        width: Optional[int] = None,
        height: Optional[int] = None
    ) -> bool:
        """
        Open a device, optionally requesting a frame size.

        Returns:
            bool: True if the device is ready to read.
        """
        pass

    @abstractmethod
    def read(self) -> Tuple[bool, Optional[np.ndarray]]:
        """Grab one BGR frame as (ok, frame)."""
        pass

    @abstractmethod
    def release(self) -> None:
        pass

    @abstractmethod
    def isOpened(self) -> bool:
        pass
