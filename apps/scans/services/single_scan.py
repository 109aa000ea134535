"""Single banknote scan: quota, detection, history."""

import logging
from dataclasses import dataclass

from apps.accounts.models import User
from apps.currency.detection import DetectionResult, run_detection
from apps.scans.models import ScanRecord, ScanOperation
from apps.subscriptions.services import check_and_reserve, release_reservation, QuotaDecision

from .scan_history import record_scan

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanOutcome:
    record: ScanRecord
    detection: DetectionResult
    quota: QuotaDecision


def scan_banknote(*, user: User, image, detector=None) -> ScanOutcome:
    """
    Identify one banknote and store it in the user's history.

    The detector call runs outside any database transaction. A scan is
    reserved first and handed back if detection or the history write
    fails.

    Args:
        user: Scanning user
        image: Uploaded image
        detector: Detector instance, defaults to the configured one

    Returns:
        ScanOutcome with the stored record, the detection and the quota state

    Raises:
        ScanLimitExceededError: If the daily allowance is used up
        DetectionFailedError: If no banknote was recognised
        DetectorUnavailableError: If the detector backend is unavailable
    """
    quota = check_and_reserve(user=user)

    try:
        detection = run_detection(image, detector=detector)
        record = record_scan(user=user, detection=detection, operation=ScanOperation.SINGLE)
    except Exception:
        release_reservation(user=user)
        raise

    return ScanOutcome(record=record, detection=detection, quota=quota)
