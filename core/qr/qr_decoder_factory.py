"""
QR Decoder Factory Module.

Maps a backend name from configuration or the command line to a decoder
instance. Each backend is registered with an availability probe, a
builder and an install hint, so optional libraries are only imported
when their backend is requested.
"""

import importlib.util
import logging
from typing import Callable, Dict, List, NamedTuple

from core.interfaces.qr_decoder_interface import IQrDecoder


logger = logging.getLogger(__name__)


class _Backend(NamedTuple):
    isAvailable: Callable[[], bool]
    build: Callable[..., IQrDecoder]
    installHint: str


def _hasOpenCVDetector() -> bool:
    try:
        import cv2
    except ImportError:
        return False
    return hasattr(cv2, "QRCodeDetector")


def _hasZxing() -> bool:
    return importlib.util.find_spec("zxingcpp") is not None


def _hasWechat() -> bool:
    try:
        import cv2
    except ImportError:
        return False
    return hasattr(getattr(cv2, "wechat_qrcode", None), "WeChatQRCode")


def _buildOpenCV(**_) -> IQrDecoder:
    from core.qr.opencv_qr_decoder import OpenCVQrDecoder
    return OpenCVQrDecoder()


def _buildZxing(zxingTryRotate: bool, zxingTryDownscale: bool, **_) -> IQrDecoder:
    from core.qr.zxing_qr_decoder import ZxingQrDecoder
    return ZxingQrDecoder(tryRotate=zxingTryRotate, tryDownscale=zxingTryDownscale)


def _buildWechat(wechatModelDir: str, **_) -> IQrDecoder:
    from core.qr.wechat_qr_decoder import WechatQrDecoder
    return WechatQrDecoder(modelDir=wechatModelDir)


# Insertion order is the order reported by getSupportedQrBackends()
_BACKENDS: Dict[str, _Backend] = {
    "opencv": _Backend(_hasOpenCVDetector, _buildOpenCV, "pip install opencv-contrib-python"),
    "zxing": _Backend(_hasZxing, _buildZxing, "pip install zxing-cpp"),
    "wechat": _Backend(_hasWechat, _buildWechat, "pip install opencv-contrib-python"),
}


def createQrDecoder(
    backend: str = "opencv",
    zxingTryRotate: bool = True,
    zxingTryDownscale: bool = True,
    wechatModelDir: str = "models/wechat"
) -> IQrDecoder:
    """
    Create the decoder for a backend name.

    Args:
        backend: "opencv" (default), "zxing" or "wechat"; case and
                 surrounding whitespace are ignored.
        zxingTryRotate: zxing only, search rotated symbols.
        zxingTryDownscale: zxing only, search downscaled copies.
        wechatModelDir: wechat only, directory of the CNN model files.

    Returns:
        IQrDecoder for the backend.

    Raises:
        ValueError: Unknown backend name.
        ImportError: The backend's library is not installed.

    Examples:
        >>> createQrDecoder().backendName
        'opencv'
    """
    name = _normalize(backend)
    entry = _BACKENDS.get(name)
    if entry is None:
        message = f"Invalid QR backend: '{name}'. Supported backends: {getSupportedQrBackends()}"
        logger.error(message)
        raise ValueError(message)

    if not entry.isAvailable():
        message = f"QR backend '{name}' is not available. Install with: {entry.installHint}"
        logger.error(message)
        raise ImportError(message)

    logger.info(f"Creating QR decoder: {name}")
    return entry.build(
        zxingTryRotate=zxingTryRotate,
        zxingTryDownscale=zxingTryDownscale,
        wechatModelDir=wechatModelDir
    )


def getSupportedQrBackends() -> List[str]:
    """Backend names accepted by createQrDecoder()."""
    return list(_BACKENDS)


def isQrBackendAvailable(backend: str) -> bool:
    """True if the backend is known and its library can be imported."""
    entry = _BACKENDS.get(_normalize(backend))
    return entry is not None and entry.isAvailable()


def _normalize(backend: str) -> str:
    return backend.strip().lower()
