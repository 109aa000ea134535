"""Test doubles for the detector boundary, shared by app test suites."""

import io
import re
import time

from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from apps.currency.detection import BaseDetector, DetectionResult
from apps.currency.exceptions import DetectorUnavailableError


class FilenameDetector(BaseDetector):
    """
    Reads the denomination from the upload's file name.

    ``note_50000.jpg`` is detected as 50000, ``blurry.jpg`` as not recognised.
    """

    pattern = re.compile(r'note_(\d+)')

    def detect(self, image) -> DetectionResult:
        match = self.pattern.search(getattr(image, 'name', '') or '')
        if not match:
            return DetectionResult.failed('no banknote in frame')
        return DetectionResult(value=int(match.group(1)), confidence=92.5)


class FixedDetector(BaseDetector):
    """Always returns the same result."""

    def __init__(self, result=None, timeout=None):
        super().__init__(timeout=timeout)
        self.result = result
        self.calls = 0

    def detect(self, image) -> DetectionResult:
        self.calls += 1
        return self.result


class SlowDetector(BaseDetector):
    """Answers 50000, but only after ``delay`` seconds."""

    def __init__(self, delay=1.0, timeout=None):
        super().__init__(timeout=timeout)
        self.delay = delay

    def detect(self, image) -> DetectionResult:
        time.sleep(self.delay)
        return DetectionResult(value=50000, confidence=90.0)


class CrashingDetector(BaseDetector):
    def detect(self, image) -> DetectionResult:
        raise RuntimeError('model exploded')


class OfflineDetector(BaseDetector):
    def detect(self, image) -> DetectionResult:
        raise DetectorUnavailableError('backend offline')


def make_image_upload(name='note_50000.jpg'):
    """Return a small valid JPEG upload with the given file name."""
    buffer = io.BytesIO()
    Image.new('RGB', (16, 8), color=(40, 90, 200)).save(buffer, format='JPEG')
    return SimpleUploadedFile(name, buffer.getvalue(), content_type='image/jpeg')
