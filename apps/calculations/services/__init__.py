"""
Calculations app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from apps.calculations.exceptions import (
    SessionServiceError,
    SessionNotFoundError,
    SessionClosedError,
    SessionAlreadyCompletedError,
    InvalidDenominationError,
)

from .session_management import (
    AdmitResult,
    start_session,
    get_session,
    admit_banknote,
    scan_into_session,
    finalize_session,
    summarize_session,
    get_completed_sessions,
)


__all__ = [
    # Exceptions
    'SessionServiceError',
    'SessionNotFoundError',
    'SessionClosedError',
    'SessionAlreadyCompletedError',
    'InvalidDenominationError',

    # Session Management
    'AdmitResult',
    'start_session',
    'get_session',
    'admit_banknote',
    'scan_into_session',
    'finalize_session',
    'summarize_session',
    'get_completed_sessions',
]
