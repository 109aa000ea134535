"""
Daily scan quota.

Every detector call is preceded by ``check_and_reserve``. The reservation
is taken under a row lock so two parallel scans cannot both use the last
free slot. When detection then fails, ``release_reservation`` hands the
slot back.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.subscriptions.models import Subscription

from .exceptions import ScanLimitExceededError
from .subscription_management import get_or_create_subscription

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuotaDecision:
    allowed: bool
    remaining: Optional[int] = None
    limit: Optional[int] = None

    @property
    def is_unlimited(self) -> bool:
        return self.limit is None


def _lock_subscription(user: User) -> Subscription:
    get_or_create_subscription(user=user)
    return Subscription.objects.select_for_update().get(user=user)


@transaction.atomic
def check_and_reserve(*, user: User) -> QuotaDecision:
    """
    Reserve one scan for today.

    Args:
        user: User about to scan

    Returns:
        QuotaDecision with the scans left after this one (None when unlimited)

    Raises:
        ScanLimitExceededError: If today's allowance is used up
    """
    subscription = _lock_subscription(user)
    reset = subscription.reset_daily_counter_if_needed(timezone.localdate())
    limit = subscription.effective_daily_limit()

    if limit is None:
        if reset:
            subscription.save(update_fields=['scans_today', 'scan_counter_date', 'updated_at'])
        return QuotaDecision(allowed=True)

    if subscription.scans_today >= limit:
        logger.info("Scan limit reached for user %s (%s/%s)", user.id, subscription.scans_today, limit)
        raise ScanLimitExceededError(
            f"Daily scan limit of {limit} reached. Upgrade your plan for unlimited scans.",
            limit=limit,
            used=subscription.scans_today,
        )

    subscription.scans_today += 1
    subscription.save(update_fields=['scans_today', 'scan_counter_date', 'updated_at'])

    return QuotaDecision(
        allowed=True,
        remaining=limit - subscription.scans_today,
        limit=limit,
    )


@transaction.atomic
def release_reservation(*, user: User) -> None:
    """Give back a scan reserved today whose detection did not succeed."""
    subscription = _lock_subscription(user)

    if subscription.is_unlimited():
        return
    if subscription.scan_counter_date != timezone.localdate() or subscription.scans_today == 0:
        return

    subscription.scans_today -= 1
    subscription.save(update_fields=['scans_today', 'updated_at'])
