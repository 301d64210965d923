# Services module for QR Reader
# Contains detection orchestration, reporting and configuration

# Implementations live in services/impl/:
# from services.impl.qr_detection_service import QrDetectionService
# from services.impl.config_service import ConfigService

__all__ = []
