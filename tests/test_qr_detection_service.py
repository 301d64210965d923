"""Tests for the detect → enhance → retry orchestration."""

import os

import numpy as np
import pytest

from core.enhancer import QrImageEnhancer
from core.interfaces.qr_decoder_interface import DecodedSymbol, DecoderFault
from services.impl.qr_detection_service import QrDetectionService
from services.interfaces.qr_detection_service_interface import (
    DetectionSuccess,
    DetectionFailure
)
from tests.helpers import ScriptedDecoder, squareBox, makeQrImage, requiresQrEncoder


MISS = DecodedSymbol(text="", points=[])


@pytest.fixture(autouse=True)
def inTmpDir(tmp_path, monkeypatch):
    """Debug artifacts land in the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


def makeService(decoder, **kwargs) -> QrDetectionService:
    return QrDetectionService(decoder=decoder, **kwargs)


def debugFiles(directory) -> set:
    return {
        name for name in ("debug_original.png", "debug_enhanced.png")
        if os.path.exists(os.path.join(directory, name))
    }


class TestRawAttempt:

    def test_success_on_raw_image(self, sharpImage, inTmpDir):
        box = squareBox(10, 10, 45)  # 2025 / 10000 = 20% of frame
        decoder = ScriptedDecoder([DecodedSymbol("HELLO", box)])
        service = makeService(decoder)

        result = service.detect(sharpImage)

        assert isinstance(result, DetectionSuccess)
        assert result.success is True
        assert result.data == "HELLO"
        assert result.boundingBox == box
        assert result.confidence == pytest.approx(1.0)
        assert result.errorMessage == ""
        assert np.array_equal(result.processedImage, sharpImage)
        assert result.processedImage is not sharpImage
        assert not np.shares_memory(result.processedImage, sharpImage)
        assert len(decoder.calls) == 1
        assert service.getSuccessfulDetections() == 1
        assert debugFiles(inTmpDir) == set()

    def test_caller_image_is_not_modified(self, sharpImage):
        before = sharpImage.copy()
        decoder = ScriptedDecoder([MISS, MISS])

        makeService(decoder).detect(sharpImage)

        assert np.array_equal(sharpImage, before)

    def test_success_without_corners_has_zero_confidence(self, sharpImage):
        decoder = ScriptedDecoder([DecodedSymbol("NO-CORNERS", [])])

        result = makeService(decoder).detect(sharpImage)

        assert result.success
        assert result.boundingBox == []
        assert result.confidence == 0.0


class TestEnhancedRetry:

    def test_enhanced_attempt_rescues_detection(self, sharpImage, inTmpDir):
        box = squareBox(100, 100, 300)
        decoder = ScriptedDecoder([MISS, DecodedSymbol("BACKUP", box)])
        service = makeService(decoder)

        result = service.detect(sharpImage)

        expectedEnhanced = QrImageEnhancer().enhance(sharpImage)
        assert result.success
        assert result.data == "BACKUP"
        assert np.array_equal(result.processedImage, expectedEnhanced)
        assert result.processedImage.shape == (600, 600)
        assert decoder.calls[1] is result.processedImage
        assert service.getSuccessfulDetections() == 1
        assert service.getTotalDetections() == 1
        assert debugFiles(inTmpDir) == set()

    def test_enhancement_starts_from_original_input(self, sharpImage):
        decoder = ScriptedDecoder([MISS, MISS])

        makeService(decoder).detect(sharpImage)

        assert np.array_equal(
            decoder.calls[1],
            QrImageEnhancer().enhance(sharpImage)
        )

    def test_both_attempts_fail(self, sharpImage, inTmpDir):
        decoder = ScriptedDecoder([MISS, MISS])
        service = makeService(decoder)

        result = service.detect(sharpImage)

        assert isinstance(result, DetectionFailure)
        assert result.success is False
        assert result.errorMessage == "No QR code detected in image"
        assert result.data == ""
        assert result.confidence == 0.0
        assert result.processedImage is None
        assert service.getSuccessfulDetections() == 0
        assert debugFiles(inTmpDir) == {"debug_original.png", "debug_enhanced.png"}

    def test_failure_returns_original_attempt_reason(self, sharpImage):
        decoder = ScriptedDecoder([DecodedSymbol("bad\x07data", []), MISS])

        result = makeService(decoder).detect(sharpImage)

        assert result.errorMessage == "QR code found but data validation failed"

    def test_preprocessing_disabled_skips_enhancement(self, sharpImage, inTmpDir):
        decoder = ScriptedDecoder([MISS, DecodedSymbol("NEVER", [])])
        service = makeService(decoder, preprocessingEnabled=False)

        result = service.detect(sharpImage)

        assert not result.success
        assert len(decoder.calls) == 1
        assert debugFiles(inTmpDir) == {"debug_original.png"}

    def test_setter_takes_effect_on_next_call(self, sharpImage):
        decoder = ScriptedDecoder([MISS, MISS, MISS])
        service = makeService(decoder)

        service.setPreprocessingEnabled(False)
        service.detect(sharpImage)

        assert not service.isPreprocessingEnabled()
        assert len(decoder.calls) == 1


class TestFailureKinds:

    @pytest.mark.parametrize("image", [None, np.zeros((0, 0, 3), dtype=np.uint8)])
    def test_empty_image(self, image, inTmpDir):
        decoder = ScriptedDecoder([])
        service = makeService(decoder)

        result = service.detect(image)

        assert result.errorMessage == "Empty input image"
        assert decoder.calls == []
        assert service.getTotalDetections() == 1
        assert debugFiles(inTmpDir) == set()

    def test_decoder_fault_becomes_failure(self, sharpImage):
        decoder = ScriptedDecoder([
            DecoderFault("OpenCV error: bad buffer"),
            DecoderFault("OpenCV error: still bad")
        ])

        result = makeService(decoder).detect(sharpImage)

        assert not result.success
        assert result.errorMessage == "OpenCV error: bad buffer"

    def test_validation_miss(self, sharpImage):
        decoder = ScriptedDecoder([DecodedSymbol("ring\x07", [])])

        result = makeService(decoder, preprocessingEnabled=False).detect(sharpImage)

        assert result.errorMessage == "QR code found but data validation failed"

    def test_debug_disabled_writes_nothing(self, sharpImage, inTmpDir):
        decoder = ScriptedDecoder([MISS, MISS])

        makeService(decoder, debugEnabled=False).detect(sharpImage)

        assert debugFiles(inTmpDir) == set()

    def test_debug_directory_is_configurable(self, sharpImage, inTmpDir):
        decoder = ScriptedDecoder([MISS, MISS])
        target = inTmpDir / "artifacts"

        makeService(decoder, debugDirectory=str(target)).detect(sharpImage)

        assert debugFiles(target) == {"debug_original.png", "debug_enhanced.png"}


class TestStatistics:

    def test_fresh_instance(self):
        service = makeService(ScriptedDecoder([]))

        assert service.getTotalDetections() == 0
        assert service.getSuccessfulDetections() == 0
        assert service.getSuccessRate() == 0.0

    def test_counts_every_call(self, sharpImage):
        decoder = ScriptedDecoder([
            DecodedSymbol("A", []),  # call 1: raw success
            MISS, MISS,              # call 2: both fail
            MISS, DecodedSymbol("B", []),  # call 3: enhanced success
        ])
        service = makeService(decoder)

        service.detect(sharpImage)
        service.detect(sharpImage)
        service.detect(sharpImage)
        service.detect(None)

        assert service.getTotalDetections() == 4
        assert service.getSuccessfulDetections() == 2
        assert service.getSuccessRate() == pytest.approx(0.5)

    def test_multiple_qr_flag_is_inert(self, sharpImage):
        decoder = ScriptedDecoder([DecodedSymbol("ONE", [])])
        service = makeService(decoder)

        service.setMultipleQrEnabled(True)
        result = service.detect(sharpImage)

        assert service.isMultipleQrEnabled()
        assert result.data == "ONE"
        assert len(decoder.calls) == 1

    def test_webcam_stub(self):
        service = makeService(ScriptedDecoder([]))

        result = service.detectFromWebcam()

        assert result.errorMessage == "Webcam detection not implemented yet"
        assert service.getTotalDetections() == 0


@requiresQrEncoder
def test_decodes_rendered_symbol_with_default_backend(inTmpDir):
    image = makeQrImage("HELLO WORLD")
    service = QrDetectionService()

    result = service.detect(image)

    assert service.getBackend() == "opencv"
    assert result.success
    assert result.data == "HELLO WORLD"
    assert len(result.boundingBox) == 4
    assert 0.0 < result.confidence <= 1.0


def test_two_channel_image_fails_without_raising(inTmpDir):
    rng = np.random.default_rng(5)
    image = rng.integers(0, 256, size=(10, 10, 2), dtype=np.uint8)

    result = QrDetectionService().detect(image)

    assert isinstance(result, DetectionFailure)


def test_two_channel_image_reaches_enhanced_attempt(sharpImage):
    image = np.ascontiguousarray(sharpImage[:, :, :2])
    decoder = ScriptedDecoder([MISS, DecodedSymbol("TWO", squareBox(100, 100, 300))])

    result = makeService(decoder).detect(image)

    assert result.success
    assert decoder.calls[1].ndim == 2


@pytest.mark.parametrize("points", [
    [(0, 0), (1, 1), (2, 2)],
    [(0, 0), (10, 0), (10, 10), (0, 10), (5, 5)],
])
def test_partial_corner_sets_are_dropped(sharpImage, points):
    decoder = ScriptedDecoder([DecodedSymbol("X", points)])

    result = makeService(decoder).detect(sharpImage)

    assert result.success
    assert result.boundingBox == []
    assert result.confidence == 0.0


def test_float_corners_are_rounded(sharpImage):
    corners = [(10.4, 10.6), (55.0, 10.0), (55.0, 55.0), (10.0, 55.0)]
    decoder = ScriptedDecoder([DecodedSymbol("F", corners)])

    result = makeService(decoder).detect(sharpImage)

    assert result.boundingBox == [(10, 11), (55, 10), (55, 55), (10, 55)]


def test_service_name_and_debug_toggle(sharpImage, inTmpDir):
    service = makeService(ScriptedDecoder([MISS, MISS]))

    service.setDebugEnabled(False)
    service.detect(sharpImage)

    assert service.getServiceName() == "qr_detection"
    assert not service.isDebugEnabled()
    assert debugFiles(inTmpDir) == set()
