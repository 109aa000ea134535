"""Indonesian Rupiah banknote denominations."""

from django.db import models


CURRENCY_CODE = 'IDR'


class Denomination(models.IntegerChoices):
    RP_1000 = 1000, 'Rp 1.000'
    RP_2000 = 2000, 'Rp 2.000'
    RP_5000 = 5000, 'Rp 5.000'
    RP_10000 = 10000, 'Rp 10.000'
    RP_20000 = 20000, 'Rp 20.000'
    RP_50000 = 50000, 'Rp 50.000'
    RP_100000 = 100000, 'Rp 100.000'


VALID_DENOMINATIONS = frozenset(Denomination.values)


def is_valid_denomination(value) -> bool:
    """Return True only for an int face value from the fixed banknote set."""
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return value in VALID_DENOMINATIONS
