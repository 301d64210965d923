"""Image loading from files and camera devices."""

from core.loader.image_loader import (
    ImageLoader,
    LoadResult,
    SUPPORTED_FORMATS,
    isValidImage,
    getImageInfo,
    getFileExtension,
    isSupportedFormat
)

__all__ = [
    "ImageLoader",
    "LoadResult",
    "SUPPORTED_FORMATS",
    "isValidImage",
    "getImageInfo",
    "getFileExtension",
    "isSupportedFormat",
]
