"""Subscription plan catalogue."""

from dataclasses import dataclass, field
from typing import List, Optional

from django.conf import settings

from apps.currency.formatting import format_rupiah


@dataclass(frozen=True)
class Plan:
    key: str
    name: str
    price: int
    duration_days: Optional[int] = None
    # None means unlimited scans
    daily_scan_limit: Optional[int] = None
    features: List[str] = field(default_factory=list)

    @property
    def is_paid(self) -> bool:
        return self.price > 0

    @property
    def price_formatted(self) -> str:
        return format_rupiah(self.price)


def free_daily_scan_limit() -> int:
    return settings.SCAN_TUNAI_FREE_DAILY_SCANS


def get_plans() -> List[Plan]:
    """Return all plans, cheapest first."""
    free_limit = free_daily_scan_limit()
    retention_days = settings.SCAN_TUNAI_HISTORY_RETENTION_DAYS
    free_history = (
        f'Riwayat scan {retention_days} hari' if retention_days else 'Riwayat scan tidak terbatas'
    )
    return [
        Plan(
            key='free',
            name='Paket Gratis',
            price=0,
            daily_scan_limit=free_limit,
            features=[
                f'{free_limit} scan per hari',
                'Scan uang tunggal',
                'Mode hitung uang',
                free_history,
            ],
        ),
        Plan(
            key='monthly',
            name='Paket Bulanan',
            price=29000,
            duration_days=30,
            features=[
                'Unlimited scan',
                'Scan uang tunggal',
                'Mode hitung uang',
                'Riwayat scan tidak terbatas',
                'Dukungan prioritas',
            ],
        ),
        Plan(
            key='yearly',
            name='Paket Tahunan',
            price=249000,
            duration_days=365,
            features=[
                'Unlimited scan',
                'Scan uang tunggal',
                'Mode hitung uang',
                'Riwayat scan tidak terbatas',
                'Dukungan prioritas',
                'Hemat 28%',
            ],
        ),
    ]


def get_plan(key: str) -> Optional[Plan]:
    for plan in get_plans():
        if plan.key == key:
            return plan
    return None
