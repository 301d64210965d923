"""Tests for decoder backend selection."""

import pytest

from core.qr import createQrDecoder, getSupportedQrBackends, isQrBackendAvailable
from tests.helpers import makeQrImage, requiresQrEncoder


def test_default_backend_is_opencv():
    assert createQrDecoder().backendName == "opencv"


def test_backend_name_is_normalized():
    assert createQrDecoder(" OpenCV ").backendName == "opencv"


def test_unknown_backend_raises():
    with pytest.raises(ValueError, match="Invalid QR backend"):
        createQrDecoder("quirc")


def test_supported_backends():
    assert getSupportedQrBackends() == ["opencv", "zxing", "wechat"]


def test_availability():
    assert isQrBackendAvailable("opencv")
    assert not isQrBackendAvailable("unknown")


def test_zxing_backend_when_installed():
    pytest.importorskip("zxingcpp")

    assert createQrDecoder("zxing").backendName == "zxing"


def test_missing_library_raises_import_error(monkeypatch):
    from core.qr import qr_decoder_factory

    entry = qr_decoder_factory._BACKENDS["zxing"]
    monkeypatch.setitem(
        qr_decoder_factory._BACKENDS, "zxing", entry._replace(isAvailable=lambda: False)
    )

    with pytest.raises(ImportError, match="pip install zxing-cpp"):
        createQrDecoder("zxing")
    assert not isQrBackendAvailable("zxing")


@requiresQrEncoder
def test_zxing_decodes_rendered_symbol():
    pytest.importorskip("zxingcpp")

    outcome = createQrDecoder("zxing").decode(makeQrImage("ZXING"))

    assert outcome.text == "ZXING"
    assert len(outcome.points) == 4
