"""
Scans app services layer.

Single scans and the per-user scan history shared with calculation
sessions.
"""

from .exceptions import (
    ScansServiceError,
    InvalidScanError,
)

from .scan_history import (
    record_scan,
    get_scan_history,
    purge_expired_scans,
)

from .single_scan import (
    ScanOutcome,
    scan_banknote,
)


__all__ = [
    # Exceptions
    'ScansServiceError',
    'InvalidScanError',

    # History
    'record_scan',
    'get_scan_history',
    'purge_expired_scans',

    # Single Scan
    'ScanOutcome',
    'scan_banknote',
]
