"""
Scan history service.

Every admitted detection is appended here, independent of any calculation
session it may belong to.
"""

import logging
from datetime import timedelta
from decimal import Decimal
from typing import Optional

from django.conf import settings
from django.db.models import Q, QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.currency.denominations import is_valid_denomination
from apps.currency.detection import DetectionResult
from apps.scans.models import ScanRecord, ScanOperation
from apps.subscriptions.models import Subscription, PlanType

from .exceptions import InvalidScanError

logger = logging.getLogger(__name__)


def record_scan(
    *,
    user: User,
    detection: DetectionResult,
    operation: str = ScanOperation.SINGLE,
    session=None
) -> ScanRecord:
    """
    Append one scan to the user's history.

    Args:
        user: User who scanned
        detection: Successful detection result
        operation: 'single' or 'calculation'
        session: CalculationSession the scan was admitted into, if any

    Returns:
        Created ScanRecord instance

    Raises:
        InvalidScanError: If the detection has no valid denomination
    """
    if not is_valid_denomination(detection.value):
        raise InvalidScanError(f"Cannot record a scan with value {detection.value!r}")

    record = ScanRecord.objects.create(
        user=user,
        value=detection.value,
        currency=detection.currency,
        confidence=Decimal(str(round(detection.confidence, 2))),
        text=detection.text[:255],
        operation=operation,
        session=session,
    )

    logger.info("Recorded %s scan %s of %s for user %s", operation, record.id, record.value, user.id)
    return record


def _retention_cutoff(now=None):
    days = settings.SCAN_TUNAI_HISTORY_RETENTION_DAYS
    if not days:
        return None
    return (now or timezone.now()) - timedelta(days=days)


def _full_history_subscriptions(now=None) -> QuerySet:
    """Active paid subscriptions, whose history is never expired."""
    now = now or timezone.now()
    return (
        Subscription.objects
        .filter(is_active=True)
        .exclude(plan=PlanType.FREE)
        .filter(Q(expires_at__isnull=True) | Q(expires_at__gt=now))
    )


def get_scan_history(*, user: User) -> QuerySet:
    """
    Single scans of the user, newest first.

    Free users only see the retention window; active paid plans see everything.
    """
    queryset = ScanRecord.objects.filter(user=user, operation=ScanOperation.SINGLE)

    subscription = Subscription.objects.filter(user=user).first()
    keeps_full_history = subscription is not None and subscription.keeps_full_history()

    cutoff = _retention_cutoff()
    if cutoff is not None and not keeps_full_history:
        queryset = queryset.filter(created_at__gte=cutoff)

    return queryset.order_by('-created_at')


def purge_expired_scans(*, now=None, dry_run: bool = False) -> int:
    """
    Delete scan records older than the retention window.

    Records of users on an active paid plan are kept.

    Args:
        now: Reference time, defaults to the current time
        dry_run: Only count the records that would be deleted

    Returns:
        Number of (would-be) deleted records, 0 when retention is disabled
    """
    cutoff = _retention_cutoff(now)
    if cutoff is None:
        return 0

    expired = (
        ScanRecord.objects
        .filter(created_at__lt=cutoff)
        .exclude(user_id__in=_full_history_subscriptions(now).values('user_id'))
    )
    if dry_run:
        return expired.count()

    deleted, _ = expired.delete()
    if deleted:
        logger.info("Purged %s scan records older than %s", deleted, cutoff)
    return deleted
