from django.db import models
import uuid

from apps.currency.denominations import Denomination, CURRENCY_CODE


class ScanOperation(models.TextChoices):
    SINGLE = 'single', 'Single scan'
    CALCULATION = 'calculation', 'Calculation'


class ScanRecord(models.Model):
    """One successful banknote detection. Written once, never updated."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='scan_records')
    value = models.PositiveIntegerField(choices=Denomination.choices)
    currency = models.CharField(max_length=3, default=CURRENCY_CODE)
    confidence = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    text = models.CharField(max_length=255, blank=True)
    operation = models.CharField(max_length=20, choices=ScanOperation.choices, default=ScanOperation.SINGLE)
    session = models.ForeignKey(
        'calculations.CalculationSession',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='scan_records',
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'scan_records'
        indexes = [
            models.Index(fields=['user', 'operation', 'created_at'], name='scan_user_op_created_idx'),
            models.Index(fields=['session'], name='scan_session_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.user.email}: {self.get_value_display()} ({self.operation})"
