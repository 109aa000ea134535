"""
Banknote detection boundary.

Recognising a banknote is delegated to a pluggable detector class named by
the ``SCAN_TUNAI_DETECTOR`` setting. This module owns only the contract:

    - ``BaseDetector.detect(image)`` returns a ``DetectionResult``
    - a result with ``value == 0`` means "not recognised"
    - ``run_detection`` turns anything that is not a valid denomination into
      ``DetectionFailedError`` so callers never admit a failed detection

Example:
    Single scan in a view::

        from apps.currency.detection import run_detection

        detection = run_detection(request.FILES['image'])
        print(detection.value, detection.text)
"""

import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from dataclasses import dataclass, replace

from django.conf import settings
from django.utils.module_loading import import_string

from .denominations import is_valid_denomination, CURRENCY_CODE
from .exceptions import DetectionFailedError, DetectorUnavailableError
from .formatting import denomination_text

logger = logging.getLogger(__name__)

NOT_RECOGNIZED_TEXT = 'Tidak dapat mendeteksi uang'


@dataclass(frozen=True)
class DetectionResult:
    """Outcome of one detector invocation."""

    value: int
    confidence: float = 0.0
    text: str = ''
    description: str = ''
    currency: str = CURRENCY_CODE

    @property
    def recognized(self) -> bool:
        return is_valid_denomination(self.value)

    @classmethod
    def failed(cls, reason: str = '') -> 'DetectionResult':
        return cls(value=0, text=NOT_RECOGNIZED_TEXT, description=reason)


class BaseDetector:
    """
    Base class for banknote detectors.

    Subclasses implement ``detect``. They should return
    ``DetectionResult.failed(...)`` for images without a recognisable note and
    raise ``DetectorUnavailableError`` when the backend cannot be reached.
    """

    def __init__(self, timeout=None):
        self.timeout = timeout

    def detect(self, image) -> DetectionResult:
        raise NotImplementedError


class DisabledDetector(BaseDetector):
    """Detector used when no recognition backend is configured."""

    def detect(self, image) -> DetectionResult:
        raise DetectorUnavailableError("Banknote detection is not configured")


def get_detector() -> BaseDetector:
    """Instantiate the detector configured in settings."""
    detector_class = import_string(settings.SCAN_TUNAI_DETECTOR)
    return detector_class(timeout=settings.SCAN_TUNAI_DETECTOR_TIMEOUT)


def _call_detector(detector, image) -> DetectionResult:
    """Call ``detector.detect`` and give up after ``detector.timeout`` seconds."""
    if not detector.timeout:
        return detector.detect(image)

    # A hung detector thread is abandoned, not joined.
    executor = ThreadPoolExecutor(max_workers=1)
    try:
        future = executor.submit(detector.detect, image)
        try:
            return future.result(timeout=detector.timeout)
        except FutureTimeoutError:
            logger.warning("Detector %s timed out after %ss",
                           type(detector).__name__, detector.timeout)
            raise DetectorUnavailableError("Banknote detection timed out")
    finally:
        executor.shutdown(wait=False)


def run_detection(image, detector=None) -> DetectionResult:
    """
    Run a detector and enforce the "valid denomination only" contract.

    Args:
        image: Uploaded image file (or raw bytes, depending on the detector).
        detector: Detector instance. Defaults to ``get_detector()``.

    Returns:
        DetectionResult with a valid denomination, a spoken text and a
        confidence clamped to [0, 100].

    Raises:
        DetectionFailedError: If nothing valid was recognised or the
            detector crashed.
        DetectorUnavailableError: If the detector backend is unavailable
            or does not answer within ``detector.timeout`` seconds.
    """
    detector = detector or get_detector()

    try:
        result = _call_detector(detector, image)
    except DetectorUnavailableError:
        raise
    except Exception as e:
        logger.warning("Detector %s failed: %s", type(detector).__name__, e)
        raise DetectionFailedError("Banknote detection failed") from e

    if result is None or not result.recognized:
        reason = result.description if result is not None else ''
        logger.info("No banknote recognised (value=%s): %s",
                    getattr(result, 'value', None), reason)
        raise DetectionFailedError(
            "Could not detect a banknote. Make sure the image is clear and the note is fully visible."
        )

    confidence = min(100.0, max(0.0, float(result.confidence or 0)))
    return replace(
        result,
        confidence=confidence,
        text=result.text or denomination_text(result.value),
    )
