"""
Errors raised by the Events API v2 clients.

A call either succeeds (HTTP 202) or raises exactly one of these.
"""

from typing import Optional


class EventsV2Error(Exception):
    """Base exception for Events API v2 errors."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class SerializationError(EventsV2Error):
    """The envelope could not be encoded as JSON. No request was sent."""


class TransportError(EventsV2Error):
    """The request failed before any response was received."""


class HttpError(EventsV2Error):
    """The service answered with a 4xx or 5xx status."""

    def __init__(self, status_code: int):
        super().__init__(f"HttpError: {status_code}")
        self.status_code = status_code


class HttpNotAccepted(EventsV2Error):
    """The service answered with a status that is neither 202 nor an error."""

    def __init__(self, status_code: int):
        super().__init__(f"HttpNotAccepted: {status_code}")
        self.status_code = status_code
