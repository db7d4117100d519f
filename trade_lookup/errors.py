"""Error taxonomy for trade search and lookup."""

from typing import Optional


class TradeLookupError(Exception):
    """Base class for errors surfaced to the presentation layer."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TradeLookupError):
    """Required query text is empty for the active mode. No request is made."""


class TransportError(TradeLookupError):
    """
    The Trade Service could not be reached or answered with a non-2xx status.

    Args:
        message: User-facing description of the failure
        status_code: HTTP status returned by the backend, if any
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedDataError(TradeLookupError):
    """A response or record did not have the expected shape."""
