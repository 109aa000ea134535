"""
Calculation session service.

Handles the session lifecycle (start, admit, finalize) with row-level
locking so concurrent admits to one session never lose an update.
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.calculations.models import CalculationSession
from apps.currency.detection import DetectionResult, run_detection
from apps.currency.formatting import format_rupiah, amount_to_words, denomination_text
from apps.scans.models import ScanOperation
from apps.scans.services import record_scan
from apps.subscriptions.services import check_and_reserve, release_reservation

from ..exceptions import (
    SessionNotFoundError,
    SessionClosedError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdmitResult:
    """Session after an admit plus the banknote that was just added."""

    session: CalculationSession
    value: int
    text: str
    confidence: float
    remaining_scans: Optional[int] = None

    @property
    def formatted(self) -> str:
        return format_rupiah(self.value)


def start_session(*, owner: User) -> CalculationSession:
    """Create an empty, open session."""
    session = CalculationSession.objects.create(owner=owner)
    logger.info("Started calculation session %s for user %s", session.id, owner.id)
    return session


def get_session(*, session_id: UUID, owner: User) -> CalculationSession:
    """
    Get a session owned by ``owner``.

    Raises:
        SessionNotFoundError: If the session doesn't exist or isn't the owner's
    """
    try:
        return CalculationSession.objects.get(id=session_id, owner=owner)
    except CalculationSession.DoesNotExist:
        raise SessionNotFoundError(f"Calculation session {session_id} not found")


def _lock_session(session_id: UUID, owner: User) -> CalculationSession:
    try:
        session = CalculationSession.objects.select_for_update().get(id=session_id)
    except CalculationSession.DoesNotExist:
        raise SessionNotFoundError(f"Calculation session {session_id} not found")

    if session.owner_id != owner.id:
        raise SessionNotFoundError(f"Calculation session {session_id} not found")
    return session


@transaction.atomic
def admit_banknote(
    *,
    session_id: UUID,
    owner: User,
    detection: DetectionResult
) -> AdmitResult:
    """
    Add one detected banknote to a session.

    The session row is locked for the whole read-modify-write, and the
    matching scan record is written in the same transaction.

    Args:
        session_id: UUID of the session
        owner: User the session must belong to
        detection: Successful detection result

    Returns:
        AdmitResult with the updated session and the admitted banknote

    Raises:
        SessionNotFoundError: If the session doesn't exist or isn't the owner's
        SessionClosedError: If the session is already completed
        InvalidDenominationError: If the detected value is not a banknote
    """
    session = _lock_session(session_id, owner)

    session.admit(detection.value)
    session.save(update_fields=['total_amount', 'banknote_count', 'tallies', 'updated_at'])

    record_scan(
        user=owner,
        detection=detection,
        operation=ScanOperation.CALCULATION,
        session=session,
    )

    logger.info(
        "Admitted %s into session %s (total=%s, count=%s)",
        detection.value, session.id, session.total_amount, session.banknote_count,
    )
    return AdmitResult(
        session=session,
        value=detection.value,
        text=detection.text or denomination_text(detection.value),
        confidence=detection.confidence,
    )


def scan_into_session(*, session_id: UUID, owner: User, image, detector=None) -> AdmitResult:
    """
    Detect a banknote in ``image`` and add it to the session.

    The session is checked before a scan is reserved, so a closed or foreign
    session costs no quota. The reservation is handed back when anything
    after it fails.

    Raises:
        SessionNotFoundError, SessionClosedError, InvalidDenominationError
        ScanLimitExceededError: If the daily allowance is used up
        DetectionFailedError, DetectorUnavailableError: If detection fails
    """
    session = get_session(session_id=session_id, owner=owner)
    if session.is_completed:
        raise SessionClosedError("This calculation session is already finished")

    quota = check_and_reserve(user=owner)

    try:
        detection = run_detection(image, detector=detector)
        result = admit_banknote(session_id=session_id, owner=owner, detection=detection)
    except Exception:
        release_reservation(user=owner)
        raise

    return replace(result, remaining_scans=quota.remaining)


@transaction.atomic
def finalize_session(
    *,
    session_id: UUID,
    owner: User,
    note: Optional[str] = None
) -> CalculationSession:
    """
    Finish a session and freeze its totals.

    Raises:
        SessionNotFoundError: If the session doesn't exist or isn't the owner's
        SessionAlreadyCompletedError: If the session was already finished
    """
    session = _lock_session(session_id, owner)

    session.finalize(note)
    session.save(update_fields=['is_completed', 'completed_at', 'note', 'updated_at'])

    logger.info("Finished calculation session %s (total=%s)", session.id, session.total_amount)
    return session


def summarize_session(session: CalculationSession) -> dict:
    """
    Read-only projection of a session.

    Each tally also carries its formatted value and spoken name; the total
    carries its formatted amount and words.
    """
    return {
        'session_id': session.id,
        'total_amount': session.total_amount,
        'total_formatted': format_rupiah(session.total_amount),
        'total_text': amount_to_words(session.total_amount),
        'banknote_count': session.banknote_count,
        'currency': session.currency,
        'tallies': [
            {
                'value': tally['value'],
                'count': tally['count'],
                'formatted': format_rupiah(tally['value']),
                'text': denomination_text(tally['value']),
            }
            for tally in session.tallies
        ],
        'is_completed': session.is_completed,
        'note': session.note,
        'created_at': session.created_at,
        'completed_at': session.completed_at,
    }


def get_completed_sessions(*, owner: User) -> QuerySet:
    """Completed sessions of the user, most recently finished first."""
    return (
        CalculationSession.objects
        .filter(owner=owner, is_completed=True)
        .order_by('-completed_at')
    )
