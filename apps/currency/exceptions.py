"""Domain exceptions for banknote detection."""


class CurrencyServiceError(Exception):
    """Base exception for currency detection errors."""
    pass


class DetectionFailedError(CurrencyServiceError):
    """The detector did not recognise a valid banknote in the image."""
    pass


class DetectorUnavailableError(CurrencyServiceError):
    """No working detector is configured or the detector backend is down."""
    pass
