"""Error types raised by the events client."""

from __future__ import annotations


class EventError(Exception):
    """Base class for every error raised by this package."""


class ValidationError(EventError, ValueError):
    """A payload field was assigned a value that violates its constraint."""


class PreconditionError(EventError, ValueError):
    """A field required by the requested event type is missing."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class TransportError(EventError):
    """The HTTP request could not be completed (DNS, connection, timeout)."""


class HttpStatusError(EventError):
    """The API answered with a status code other than 200."""

    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(f"Unexpected HTTP response code: {status_code}")
        self.status_code = status_code
        self.body = body


class ResponseFormatError(EventError):
    """The response body is not a non-empty JSON object."""

    def __init__(self, body: str) -> None:
        super().__init__(f"Invalid json response format: {body}")
        self.body = body
