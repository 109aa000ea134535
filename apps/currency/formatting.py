"""
Presentation helpers for Rupiah amounts.

Two derived views of an integer amount are used by the API and read aloud by
the client's text-to-speech:

    >>> format_rupiah(120000)
    'Rp 120.000'
    >>> amount_to_words(120000)
    'seratus dua puluh ribu rupiah'
"""

UNITS = ['', 'satu', 'dua', 'tiga', 'empat', 'lima', 'enam', 'tujuh', 'delapan', 'sembilan']

TEENS = [
    'sepuluh', 'sebelas', 'dua belas', 'tiga belas', 'empat belas',
    'lima belas', 'enam belas', 'tujuh belas', 'delapan belas', 'sembilan belas',
]

# (magnitude, scale word, wording when the group is exactly one)
SCALES = [
    (1_000_000_000, 'milyar', 'satu milyar'),
    (1_000_000, 'juta', 'satu juta'),
    (1_000, 'ribu', 'seribu'),
]


def format_rupiah(amount: int) -> str:
    """Format an amount with id-ID thousands separators, e.g. ``Rp 50.000``."""
    return 'Rp ' + f'{int(amount):,}'.replace(',', '.')


def _hundreds_to_words(n: int) -> str:
    """Words for 0 <= n < 1000."""
    if n == 0:
        return ''
    if n < 10:
        return UNITS[n]
    if n < 20:
        return TEENS[n - 10]
    if n < 100:
        tens, ones = divmod(n, 10)
        words = f'{UNITS[tens]} puluh'
        return f'{words} {UNITS[ones]}' if ones else words

    hundreds, remainder = divmod(n, 100)
    words = 'seratus' if hundreds == 1 else f'{UNITS[hundreds]} ratus'
    return f'{words} {_hundreds_to_words(remainder)}' if remainder else words


def _number_to_words(n: int) -> str:
    parts = []
    for magnitude, word, single in SCALES:
        if n >= magnitude:
            group, n = divmod(n, magnitude)
            if group == 1:
                parts.append(single)
            else:
                parts.append(f'{_number_to_words(group)} {word}')
    if n:
        parts.append(_hundreds_to_words(n))
    return ' '.join(parts)


def amount_to_words(amount: int) -> str:
    """
    Spell out a Rupiah amount in Indonesian.

    Args:
        amount: Non-negative integer amount.

    Returns:
        Spoken text ending in ``rupiah``, e.g. ``lima puluh ribu rupiah``.

    Raises:
        ValueError: If amount is negative.
    """
    amount = int(amount)
    if amount < 0:
        raise ValueError("Amount cannot be negative")
    if amount == 0:
        return 'nol rupiah'
    return f'{_number_to_words(amount)} rupiah'


def denomination_text(value: int) -> str:
    """Spoken name of a single banknote, e.g. ``seribu rupiah``."""
    return amount_to_words(value)
