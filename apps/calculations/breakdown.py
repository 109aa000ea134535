"""
Per-denomination tallies of a calculation session.

A breakdown is a list of ``{'value': int, 'count': int}`` dicts with at most
one entry per value, kept sorted by value descending. Functions here never
mutate their input.
"""

from typing import Dict, List

from apps.currency.denominations import is_valid_denomination

from .exceptions import InvalidDenominationError

Tally = Dict[str, int]


def validate_denomination(value) -> int:
    """Return ``value`` if it is a banknote face value, else raise."""
    if not is_valid_denomination(value):
        raise InvalidDenominationError(f"{value!r} is not a valid banknote denomination")
    return value


def add_to_breakdown(tallies: List[Tally], value: int) -> List[Tally]:
    """
    Count one more banknote of ``value``.

    Returns:
        A new sorted breakdown with the matching tally incremented or a
        new ``{'value': value, 'count': 1}`` entry inserted.

    Raises:
        InvalidDenominationError: If ``value`` is not a banknote face value
    """
    validate_denomination(value)

    updated = [dict(tally) for tally in tallies]
    for tally in updated:
        if tally['value'] == value:
            tally['count'] += 1
            break
    else:
        updated.append({'value': value, 'count': 1})

    updated.sort(key=lambda tally: tally['value'], reverse=True)
    return updated


def breakdown_total(tallies: List[Tally]) -> int:
    return sum(tally['value'] * tally['count'] for tally in tallies)


def breakdown_count(tallies: List[Tally]) -> int:
    return sum(tally['count'] for tally in tallies)
