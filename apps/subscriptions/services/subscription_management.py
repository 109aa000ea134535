"""
Subscription management service.

Plan changes are simulated: subscribing activates the plan immediately,
there is no payment gateway behind it.
"""

import logging
from datetime import timedelta

from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.subscriptions.models import Subscription, PlanType
from apps.subscriptions.plans import get_plan, free_daily_scan_limit

from .exceptions import InvalidPlanError, PlanChangeError

logger = logging.getLogger(__name__)


def get_or_create_subscription(*, user: User) -> Subscription:
    """Return the user's subscription, creating a free one on first use."""
    subscription, created = Subscription.objects.get_or_create(
        user=user,
        defaults={
            'plan': PlanType.FREE,
            'price': 0,
            'daily_scan_limit': free_daily_scan_limit(),
        },
    )
    if created:
        logger.info("Created free subscription for user %s", user.id)
    return subscription


@transaction.atomic
def subscribe(*, user: User, plan: str) -> Subscription:
    """
    Switch the user to a paid plan starting now.

    Args:
        user: Subscribing user
        plan: Plan key ('monthly' or 'yearly')

    Returns:
        Updated Subscription instance

    Raises:
        InvalidPlanError: If the plan is unknown or free
    """
    selected = get_plan(plan)
    if selected is None:
        raise InvalidPlanError(f"Unknown plan '{plan}'")
    if not selected.is_paid:
        raise InvalidPlanError("The free plan cannot be purchased")

    get_or_create_subscription(user=user)
    subscription = Subscription.objects.select_for_update().get(user=user)

    now = timezone.now()
    subscription.plan = selected.key
    subscription.price = selected.price
    subscription.started_at = now
    subscription.expires_at = now + timedelta(days=selected.duration_days)
    subscription.is_active = True
    subscription.daily_scan_limit = selected.daily_scan_limit
    subscription.save()

    logger.info("User %s subscribed to %s until %s", user.id, selected.key, subscription.expires_at)
    return subscription


@transaction.atomic
def cancel_subscription(*, user: User) -> Subscription:
    """
    Downgrade the user to the free plan.

    Raises:
        PlanChangeError: If the user is already on the free plan
    """
    get_or_create_subscription(user=user)
    subscription = Subscription.objects.select_for_update().get(user=user)

    if subscription.plan == PlanType.FREE:
        raise PlanChangeError("You are already on the free plan")

    previous = subscription.plan
    subscription.plan = PlanType.FREE
    subscription.price = 0
    subscription.started_at = timezone.now()
    subscription.expires_at = None
    subscription.is_active = True
    subscription.daily_scan_limit = free_daily_scan_limit()
    subscription.save()

    logger.info("User %s cancelled %s, now on free plan", user.id, previous)
    return subscription
