# Core module for QR Reader
# Contains interfaces and implementations for decoding, enhancement,
# image loading, camera capture and image writing

from core.interfaces.qr_decoder_interface import (
    IQrDecoder,
    DecodedSymbol,
    DecoderFault
)
from core.interfaces.camera_interface import ICameraCapture, CameraInfo
from core.interfaces.writer_interface import IImageWriter
from core.camera.opencv_camera import OpenCVCamera
from core.writer.local_writer import LocalImageWriter

__all__ = [
    "IQrDecoder",
    "DecodedSymbol",
    "DecoderFault",
    "ICameraCapture",
    "CameraInfo",
    "IImageWriter",
    "OpenCVCamera",
    "LocalImageWriter",
]
