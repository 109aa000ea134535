"""
Subscriptions app services layer.

Plan management and the daily scan quota that every detector call
goes through.
"""

from .exceptions import (
    SubscriptionsServiceError,
    ScanLimitExceededError,
    InvalidPlanError,
    PlanChangeError,
)

from .subscription_management import (
    get_or_create_subscription,
    subscribe,
    cancel_subscription,
)

from .quota import (
    QuotaDecision,
    check_and_reserve,
    release_reservation,
)


__all__ = [
    # Exceptions
    'SubscriptionsServiceError',
    'ScanLimitExceededError',
    'InvalidPlanError',
    'PlanChangeError',

    # Subscription Management
    'get_or_create_subscription',
    'subscribe',
    'cancel_subscription',

    # Quota
    'QuotaDecision',
    'check_and_reserve',
    'release_reservation',
]
