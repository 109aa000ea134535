"""
Domain-specific exceptions for calculations app.

Raised by the session model and the services layer; views convert them
to HTTP responses.
"""


class SessionServiceError(Exception):
    """Base exception for all calculation session errors."""
    pass


class SessionNotFoundError(SessionServiceError):
    """Raised when a session does not exist or belongs to another user."""
    pass


class SessionClosedError(SessionServiceError):
    """Raised when a banknote is added to a completed session."""
    pass


class SessionAlreadyCompletedError(SessionServiceError):
    """Raised when finishing a session that is already completed."""
    pass


class InvalidDenominationError(SessionServiceError):
    """Raised when a value outside the banknote set reaches a session."""
    pass
