from django.db import models
from django.utils import timezone
import uuid

from apps.currency.denominations import CURRENCY_CODE

from .breakdown import add_to_breakdown
from .exceptions import SessionClosedError, SessionAlreadyCompletedError


class CalculationSession(models.Model):
    """
    A "count the cash" session.

    Open sessions accept banknotes one at a time; a finished session is
    frozen. Callers persist the row after ``admit``/``finalize`` and hold a
    row lock while doing so.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='calculation_sessions')
    total_amount = models.BigIntegerField(default=0)
    banknote_count = models.PositiveIntegerField(default=0)
    currency = models.CharField(max_length=3, default=CURRENCY_CODE)
    # [{'value': 50000, 'count': 2}, ...] sorted by value descending
    tallies = models.JSONField(default=list, blank=True)
    is_completed = models.BooleanField(default=False)
    note = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'calculation_sessions'
        indexes = [
            models.Index(fields=['owner', 'is_completed', 'completed_at'], name='calc_owner_completed_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        state = 'completed' if self.is_completed else 'open'
        return f"{self.owner.email}: {self.total_amount} {self.currency} ({state})"

    def admit(self, value):
        """Add one banknote. Nothing changes when it is rejected."""
        if self.is_completed:
            raise SessionClosedError("This calculation session is already finished")

        self.tallies = add_to_breakdown(self.tallies, value)
        self.total_amount += value
        self.banknote_count += 1

    def finalize(self, note=None):
        if self.is_completed:
            raise SessionAlreadyCompletedError("This calculation session is already finished")

        self.is_completed = True
        self.completed_at = timezone.now()
        self.note = note
