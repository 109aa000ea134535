"""
Service layer unit tests for calculations app.

Tests cover:
- Session lifecycle (start, admit, finalize, summarize)
- Aggregation invariants
- Ownership checks
- Quota handling when scanning into a session
"""

import random
from datetime import timedelta

import pytest
from django.db import DatabaseError
from django.utils import timezone

from apps.calculations.models import CalculationSession
from apps.calculations.services import (
    start_session,
    get_session,
    admit_banknote,
    scan_into_session,
    finalize_session,
    summarize_session,
    get_completed_sessions,
)
from apps.calculations.exceptions import (
    SessionNotFoundError,
    SessionClosedError,
    SessionAlreadyCompletedError,
    InvalidDenominationError,
)
from apps.currency.denominations import Denomination
from apps.currency.detection import DetectionResult
from apps.currency.exceptions import DetectionFailedError
from apps.currency.tests.fakes import FixedDetector, make_image_upload
from apps.scans.models import ScanRecord, ScanOperation
from apps.subscriptions.models import Subscription
from apps.subscriptions.services import ScanLimitExceededError


def note(value, confidence=90.0):
    return DetectionResult(value=value, confidence=confidence)


def admit(session, owner, value):
    return admit_banknote(session_id=session.id, owner=owner, detection=note(value))


def scans_today(user):
    return Subscription.objects.get(user=user).scans_today


# =============================================================================
# Lifecycle
# =============================================================================

@pytest.mark.django_db
class TestStartSession:
    """Tests for session_management.start_session."""

    def test_new_session_is_empty_and_open(self, user):
        session = start_session(owner=user)

        assert session.owner == user
        assert session.total_amount == 0
        assert session.banknote_count == 0
        assert session.tallies == []
        assert session.is_completed is False
        assert session.note is None
        assert session.completed_at is None
        assert session.currency == 'IDR'


@pytest.mark.django_db
class TestAdmitBanknote:
    """Tests for session_management.admit_banknote."""

    def test_scenario_a_mixed_banknotes(self, session, user):
        admit(session, user, 50000)
        admit(session, user, 20000)
        result = admit(session, user, 50000)

        summary = summarize_session(result.session)
        assert summary['total_amount'] == 120000
        assert summary['banknote_count'] == 3
        assert [(t['value'], t['count']) for t in summary['tallies']] == [(50000, 2), (20000, 1)]

    def test_admit_echoes_banknote(self, session, user):
        admit(session, user, 50000)
        result = admit_banknote(
            session_id=session.id, owner=user, detection=note(10000, confidence=81.5)
        )

        assert result.value == 10000
        assert result.formatted == 'Rp 10.000'
        assert result.text == 'sepuluh ribu rupiah'
        assert result.confidence == 81.5
        assert result.session.total_amount == 60000

    def test_admit_is_persisted(self, session, user):
        admit(session, user, 5000)

        stored = CalculationSession.objects.get(id=session.id)
        assert stored.total_amount == 5000
        assert stored.tallies == [{'value': 5000, 'count': 1}]

    def test_admit_writes_scan_record(self, session, user):
        admit(session, user, 100000)

        record = ScanRecord.objects.get(session=session)
        assert record.user == user
        assert record.value == 100000
        assert record.operation == ScanOperation.CALCULATION

    def test_scenario_d_zero_value_rejected(self, session, user):
        with pytest.raises(InvalidDenominationError):
            admit_banknote(session_id=session.id, owner=user, detection=DetectionResult.failed())

        stored = CalculationSession.objects.get(id=session.id)
        assert stored.total_amount == 0
        assert stored.banknote_count == 0
        assert stored.tallies == []
        assert ScanRecord.objects.count() == 0

    def test_value_outside_set_rejected(self, session, user):
        admit(session, user, 2000)

        with pytest.raises(InvalidDenominationError):
            admit(session, user, 3000)

        stored = CalculationSession.objects.get(id=session.id)
        assert stored.total_amount == 2000
        assert stored.banknote_count == 1

    def test_other_user_cannot_admit(self, session, other_user):
        with pytest.raises(SessionNotFoundError):
            admit(session, other_user, 1000)

        assert CalculationSession.objects.get(id=session.id).banknote_count == 0

    def test_stale_instance_does_not_lose_updates(self, session, user):
        stale = CalculationSession.objects.get(id=session.id)

        admit(session, user, 10000)
        admit(stale, user, 20000)

        stored = CalculationSession.objects.get(id=session.id)
        assert stored.total_amount == 30000
        assert stored.banknote_count == 2


@pytest.mark.django_db
class TestFinalizeSession:
    """Tests for session_management.finalize_session."""

    def test_scenario_b_finish_empty_session_with_note(self, session, user):
        finished = finalize_session(session_id=session.id, owner=user, note='test')

        summary = summarize_session(finished)
        assert summary['is_completed'] is True
        assert summary['note'] == 'test'
        assert summary['total_amount'] == 0
        assert summary['banknote_count'] == 0
        assert summary['completed_at'] is not None

    def test_finish_without_note(self, session, user):
        finished = finalize_session(session_id=session.id, owner=user)

        assert finished.note is None
        assert finished.completed_at <= timezone.now()

    def test_scenario_c_admit_after_finish_fails(self, session, user):
        admit(session, user, 10000)
        finalize_session(session_id=session.id, owner=user)

        with pytest.raises(SessionClosedError):
            admit(session, user, 5000)

        summary = summarize_session(CalculationSession.objects.get(id=session.id))
        assert summary['total_amount'] == 10000
        assert summary['banknote_count'] == 1
        assert summary['tallies'][0]['count'] == 1
        assert ScanRecord.objects.filter(session=session).count() == 1

    def test_finish_twice_fails(self, session, user):
        first = finalize_session(session_id=session.id, owner=user, note='first')

        with pytest.raises(SessionAlreadyCompletedError):
            finalize_session(session_id=session.id, owner=user, note='second')

        stored = CalculationSession.objects.get(id=session.id)
        assert stored.note == 'first'
        assert stored.completed_at == first.completed_at

    def test_other_user_cannot_finish(self, session, other_user):
        with pytest.raises(SessionNotFoundError):
            finalize_session(session_id=session.id, owner=other_user)

        assert CalculationSession.objects.get(id=session.id).is_completed is False


# =============================================================================
# Read side
# =============================================================================

@pytest.mark.django_db
class TestSummarizeSession:
    """Tests for summarize_session and lookups."""

    def test_summary_is_idempotent(self, session, user):
        admit(session, user, 20000)
        session.refresh_from_db()

        assert summarize_session(session) == summarize_session(session)

    def test_summary_presentation_fields(self, session, user):
        admit(session, user, 50000)
        result = admit(session, user, 1000)

        summary = summarize_session(result.session)
        assert summary['session_id'] == session.id
        assert summary['total_formatted'] == 'Rp 51.000'
        assert summary['total_text'] == 'lima puluh satu ribu rupiah'
        assert summary['tallies'][0]['formatted'] == 'Rp 50.000'
        assert summary['tallies'][1]['text'] == 'seribu rupiah'

    def test_invariants_hold_after_every_admit(self, session, user):
        rng = random.Random(42)
        events = []

        for _ in range(25):
            value = rng.choice(Denomination.values)
            events.append(value)
            summary = summarize_session(admit(session, user, value).session)

            tallies = summary['tallies']
            values = [t['value'] for t in tallies]
            assert values == sorted(values, reverse=True)
            assert len(values) == len(set(values))
            assert summary['total_amount'] == sum(events)
            assert summary['banknote_count'] == len(events)
            assert sum(t['count'] for t in tallies) == summary['banknote_count']
            assert sum(t['value'] * t['count'] for t in tallies) == summary['total_amount']

    def test_get_session_checks_owner(self, session, user, other_user):
        assert get_session(session_id=session.id, owner=user) == session

        with pytest.raises(SessionNotFoundError):
            get_session(session_id=session.id, owner=other_user)

    def test_completed_sessions_newest_first(self, user, other_user):
        first = start_session(owner=user)
        second = start_session(owner=user)
        start_session(owner=user)  # still open
        foreign = start_session(owner=other_user)

        finalize_session(session_id=first.id, owner=user)
        finalize_session(session_id=second.id, owner=user)
        finalize_session(session_id=foreign.id, owner=other_user)
        CalculationSession.objects.filter(id=first.id).update(
            completed_at=timezone.now() - timedelta(hours=1)
        )

        history = list(get_completed_sessions(owner=user))

        assert [s.id for s in history] == [second.id, first.id]


# =============================================================================
# Scanning into a session
# =============================================================================

@pytest.mark.django_db
class TestScanIntoSession:
    """Tests for session_management.scan_into_session."""

    def test_scan_adds_banknote_and_reserves_quota(self, session, user):
        detector = FixedDetector(note(20000))

        result = scan_into_session(
            session_id=session.id, owner=user, image=make_image_upload(), detector=detector
        )

        assert result.session.total_amount == 20000
        assert result.remaining_scans == 9
        assert scans_today(user) == 1

    def test_failed_detection_keeps_quota_and_session(self, session, user):
        detector = FixedDetector(DetectionResult.failed('blurry'))

        with pytest.raises(DetectionFailedError):
            scan_into_session(
                session_id=session.id, owner=user, image=make_image_upload(), detector=detector
            )

        assert scans_today(user) == 0
        assert CalculationSession.objects.get(id=session.id).banknote_count == 0

    def test_closed_session_costs_no_quota(self, session, user):
        finalize_session(session_id=session.id, owner=user)
        detector = FixedDetector(note(20000))

        with pytest.raises(SessionClosedError):
            scan_into_session(
                session_id=session.id, owner=user, image=make_image_upload(), detector=detector
            )

        assert detector.calls == 0
        assert scans_today(user) == 0

    def test_foreign_session_costs_no_quota(self, session, other_user):
        detector = FixedDetector(note(20000))

        with pytest.raises(SessionNotFoundError):
            scan_into_session(
                session_id=session.id, owner=other_user, image=make_image_upload(), detector=detector
            )

        assert detector.calls == 0

    def test_limit_reached(self, session, user):
        Subscription.objects.filter(user=user).update(
            scans_today=10, scan_counter_date=timezone.localdate()
        )
        detector = FixedDetector(note(20000))

        with pytest.raises(ScanLimitExceededError):
            scan_into_session(
                session_id=session.id, owner=user, image=make_image_upload(), detector=detector
            )

        assert detector.calls == 0
        assert CalculationSession.objects.get(id=session.id).total_amount == 0

    def test_history_write_failure_rolls_back_and_releases_quota(self, session, user, monkeypatch):
        def broken_record_scan(**kwargs):
            raise DatabaseError('disk full')

        monkeypatch.setattr(
            'apps.calculations.services.session_management.record_scan', broken_record_scan
        )

        with pytest.raises(DatabaseError):
            scan_into_session(
                session_id=session.id, owner=user, image=make_image_upload(),
                detector=FixedDetector(note(20000)),
            )

        assert scans_today(user) == 0
        stored = CalculationSession.objects.get(id=session.id)
        assert stored.banknote_count == 0
        assert stored.total_amount == 0
        assert stored.tallies == []
