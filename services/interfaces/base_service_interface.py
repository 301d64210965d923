"""
Base Service Interface Module.

Defines the base interface shared by the QR reader services.
Provides service identification, debug artifact writing and timing.

Follows:
- ISP (Interface Segregation Principle): Minimal base interface
- DIP (Dependency Inversion Principle): High-level modules depend on abstractions
"""

from abc import ABC, abstractmethod
from typing import Optional
import logging
import os
import time

import numpy as np

from core.interfaces.writer_interface import IImageWriter
from core.writer.local_writer import LocalImageWriter


class IBaseService(ABC):
    """
    Base interface for all services.

    Provides common functionality for:
    - Service identification
    - Debug output management
    - Timing measurement
    """

    @abstractmethod
    def getServiceName(self) -> str:
        """
        Get the service name for logging.

        Returns:
            str: Service name (e.g., "qr_detection")
        """
        pass

    @abstractmethod
    def setDebugEnabled(self, enabled: bool) -> None:
        """
        Enable or disable debug artifact output.

        Args:
            enabled: True to write debug artifacts.
        """
        pass

    @abstractmethod
    def isDebugEnabled(self) -> bool:
        """
        Check if debug artifact output is enabled.

        Returns:
            bool: True if debug is enabled.
        """
        pass


class BaseService(IBaseService):
    """
    Base implementation for services.

    Debug artifacts are written with fixed names inside debugDirectory,
    so each failing run overwrites the previous one.
    """

    def __init__(
        self,
        serviceName: str,
        debugDirectory: str = ".",
        debugEnabled: bool = True,
        imageWriter: Optional[IImageWriter] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize BaseService.

        Args:
            serviceName: Name of the service (e.g., "qr_detection").
            debugDirectory: Directory for debug artifacts.
            debugEnabled: Whether debug artifacts are written.
            imageWriter: Writer used for debug images.
            logger: Logger instance; defaults to one named after the service.
        """
        self._serviceName = serviceName
        self._debugDirectory = debugDirectory
        self._debugEnabled = debugEnabled
        self._imageWriter = imageWriter or LocalImageWriter()
        self._logger = logger or logging.getLogger(serviceName)

    def getServiceName(self) -> str:
        """Get the service name."""
        return self._serviceName

    def setDebugEnabled(self, enabled: bool) -> None:
        """Enable or disable debug artifacts."""
        self._debugEnabled = enabled
        self._logger.info(f"Debug artifacts {'enabled' if enabled else 'disabled'}")

    def isDebugEnabled(self) -> bool:
        """Check if debug artifacts are enabled."""
        return self._debugEnabled

    def getDebugDirectory(self) -> str:
        """Get the debug artifact directory."""
        return self._debugDirectory

    def _saveDebugImage(self, image: np.ndarray, filename: str) -> None:
        """
        Write a debug image, best-effort.

        The write result is logged, never raised.

        Args:
            image: Image to save (numpy array).
            filename: Fixed file name inside the debug directory.
        """
        if not self._debugEnabled or image is None or image.size == 0:
            return

        filepath = os.path.join(self._debugDirectory, filename)
        if self._imageWriter.save(image, filepath):
            self._logger.debug(f"Saved debug image: {filepath}")
        else:
            self._logger.warning(f"Failed to save debug image: {filepath}")

    def _measureTime(self, startTime: float) -> float:
        """
        Calculate elapsed time in milliseconds.

        Args:
            startTime: Start time from time.time().

        Returns:
            Elapsed time in milliseconds.
        """
        return (time.time() - startTime) * 1000
