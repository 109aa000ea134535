from django.db import models
from django.utils import timezone
import uuid

from .plans import free_daily_scan_limit


class PlanType(models.TextChoices):
    FREE = 'free', 'Gratis'
    MONTHLY = 'monthly', 'Bulanan'
    YEARLY = 'yearly', 'Tahunan'


def default_daily_scan_limit():
    return free_daily_scan_limit()


class Subscription(models.Model):
    """A user's plan and their scan counter for the current day."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField('accounts.User', on_delete=models.CASCADE, related_name='subscription')
    plan = models.CharField(max_length=20, choices=PlanType.choices, default=PlanType.FREE)
    price = models.PositiveIntegerField(default=0)
    started_at = models.DateTimeField(default=timezone.now)
    expires_at = models.DateTimeField(null=True, blank=True)
    is_active = models.BooleanField(default=True)

    # Null limit means unlimited
    daily_scan_limit = models.PositiveIntegerField(null=True, blank=True, default=default_daily_scan_limit)
    scans_today = models.PositiveIntegerField(default=0)
    scan_counter_date = models.DateField(default=timezone.localdate)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'subscriptions'
        indexes = [
            models.Index(fields=['plan', 'expires_at'], name='subscr_plan_expires_idx'),
        ]

    def __str__(self):
        return f"{self.user.email} ({self.plan})"

    def is_subscription_active(self, now=None):
        """True while the plan is active and not past its expiry."""
        if not self.is_active:
            return False
        if self.expires_at is None:
            return True
        return self.expires_at > (now or timezone.now())

    def effective_daily_limit(self, now=None):
        """
        Daily limit that applies right now.

        The free plan always follows the current free allowance setting. A
        paid plan that has expired or been deactivated falls back to it.
        """
        if self.plan == PlanType.FREE or not self.is_subscription_active(now):
            return free_daily_scan_limit()
        return self.daily_scan_limit

    def is_unlimited(self, now=None):
        return self.effective_daily_limit(now) is None

    def keeps_full_history(self, now=None):
        """Paid plans keep scan history for as long as they are active."""
        return self.plan != PlanType.FREE and self.is_subscription_active(now)

    def reset_daily_counter_if_needed(self, today=None):
        """Zero the counter when the stored date is not today. Returns True if reset."""
        today = today or timezone.localdate()
        if self.scan_counter_date == today:
            return False
        self.scans_today = 0
        self.scan_counter_date = today
        return True

    def scans_used_today(self, today=None):
        today = today or timezone.localdate()
        return self.scans_today if self.scan_counter_date == today else 0

    def remaining_scans(self, today=None):
        """Scans left today, or None for unlimited plans."""
        limit = self.effective_daily_limit()
        if limit is None:
            return None
        return max(0, limit - self.scans_used_today(today))
