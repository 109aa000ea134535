"""
Domain-specific exceptions for subscriptions app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class SubscriptionsServiceError(Exception):
    """Base exception for all subscriptions service errors."""
    pass


class ScanLimitExceededError(SubscriptionsServiceError):
    """Raised when the daily scan allowance is used up."""

    def __init__(self, message="Daily scan limit reached", *, limit=None, used=None):
        super().__init__(message)
        self.limit = limit
        self.used = used


class InvalidPlanError(SubscriptionsServiceError):
    """Raised when an unknown or non-purchasable plan is requested."""
    pass


class PlanChangeError(SubscriptionsServiceError):
    """Raised when a plan change makes no sense for the current plan."""
    pass
