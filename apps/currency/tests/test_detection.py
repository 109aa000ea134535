import time

import pytest

from apps.currency.detection import (
    DetectionResult,
    DisabledDetector,
    get_detector,
    run_detection,
)
from apps.currency.exceptions import DetectionFailedError, DetectorUnavailableError
from apps.currency.tests.fakes import (
    FilenameDetector,
    FixedDetector,
    CrashingDetector,
    OfflineDetector,
    SlowDetector,
    make_image_upload,
)


class TestRunDetection:
    """Test the detector contract enforced by run_detection."""

    def test_valid_detection(self):
        result = run_detection(make_image_upload('note_20000.jpg'), detector=FilenameDetector())

        assert result.value == 20000
        assert result.text == 'dua puluh ribu rupiah'
        assert result.confidence == 92.5
        assert result.currency == 'IDR'

    def test_zero_value_rejected(self):
        with pytest.raises(DetectionFailedError):
            run_detection(make_image_upload('blurry.jpg'), detector=FilenameDetector())

    def test_value_outside_set_rejected(self):
        detector = FixedDetector(DetectionResult(value=75000, confidence=99))
        with pytest.raises(DetectionFailedError):
            run_detection(b'raw', detector=detector)

    def test_none_result_rejected(self):
        with pytest.raises(DetectionFailedError):
            run_detection(b'raw', detector=FixedDetector(None))

    def test_crash_becomes_detection_failure(self):
        with pytest.raises(DetectionFailedError):
            run_detection(b'raw', detector=CrashingDetector())

    def test_unavailable_propagates(self):
        with pytest.raises(DetectorUnavailableError):
            run_detection(b'raw', detector=OfflineDetector())

    def test_confidence_clamped(self):
        detector = FixedDetector(DetectionResult(value=5000, confidence=140))
        assert run_detection(b'raw', detector=detector).confidence == 100.0

        detector = FixedDetector(DetectionResult(value=5000, confidence=-3))
        assert run_detection(b'raw', detector=detector).confidence == 0.0

    def test_detector_text_kept(self):
        detector = FixedDetector(DetectionResult(value=5000, confidence=80, text='lima ribu'))
        assert run_detection(b'raw', detector=detector).text == 'lima ribu'

    def test_slow_detector_times_out(self):
        started = time.monotonic()

        with pytest.raises(DetectorUnavailableError):
            run_detection(b'raw', detector=SlowDetector(delay=1.0, timeout=0.1))

        assert time.monotonic() - started < 0.9

    def test_detector_within_timeout(self):
        result = run_detection(b'raw', detector=SlowDetector(delay=0.01, timeout=5))

        assert result.value == 50000

    def test_no_timeout_runs_inline(self):
        result = run_detection(b'raw', detector=SlowDetector(delay=0, timeout=None))

        assert result.value == 50000


class TestGetDetector:

    def test_default_is_disabled(self, settings):
        settings.SCAN_TUNAI_DETECTOR = 'apps.currency.detection.DisabledDetector'
        detector = get_detector()

        assert isinstance(detector, DisabledDetector)
        with pytest.raises(DetectorUnavailableError):
            detector.detect(b'raw')

    def test_configured_detector(self, settings):
        settings.SCAN_TUNAI_DETECTOR = 'apps.currency.tests.fakes.FilenameDetector'
        settings.SCAN_TUNAI_DETECTOR_TIMEOUT = 7
        detector = get_detector()

        assert isinstance(detector, FilenameDetector)
        assert detector.timeout == 7

    def test_failed_result_helper(self):
        result = DetectionResult.failed('too dark')
        assert result.value == 0
        assert not result.recognized
        assert result.description == 'too dark'
