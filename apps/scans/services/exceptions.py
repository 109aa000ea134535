"""
Domain-specific exceptions for scans app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class ScansServiceError(Exception):
    """Base exception for all scans service errors."""
    pass


class InvalidScanError(ScansServiceError):
    """Raised when a detection without a valid denomination is recorded."""
    pass
