"""
Services Interfaces Package.

Exports all service interfaces for the QR reader.
"""

from services.interfaces.base_service_interface import (
    IBaseService,
    BaseService
)

from services.interfaces.config_service_interface import IConfigService

from services.interfaces.qr_detection_service_interface import (
    DetectionResult,
    DetectionSuccess,
    DetectionFailure,
    IQrDetectionService
)


__all__ = [
    # Base
    "IBaseService",
    "BaseService",
    # Config
    "IConfigService",
    # QR Detection
    "DetectionResult",
    "DetectionSuccess",
    "DetectionFailure",
    "IQrDetectionService",
]
