"""QR Decoding module."""

from core.qr.opencv_qr_decoder import OpenCVQrDecoder
from core.qr.qr_decoder_factory import (
    createQrDecoder,
    getSupportedQrBackends,
    isQrBackendAvailable
)
from core.qr.payload_validator import isValidPayload
from core.qr.confidence_scorer import ConfidenceScorer

__all__ = [
    'OpenCVQrDecoder',
    'createQrDecoder',
    'getSupportedQrBackends',
    'isQrBackendAvailable',
    'isValidPayload',
    'ConfidenceScorer'
]
