"""Error kinds raised across the stream alerts components.

Upstream failures carry the HTTP status and response body so that callers can
log them without re-reading the response.
"""

from typing import Optional


class StreamAlertsError(Exception):
    """Base class for all stream alerts errors."""


class NotFoundError(StreamAlertsError):
    """The creator or user does not exist upstream."""


class InvalidCreatorError(NotFoundError):
    """The creator identifier is not on the allow-list."""


class UpstreamAPIError(StreamAlertsError):
    """Non-2xx response from the streaming platform."""

    def __init__(self, description: str, status: Optional[int] = None, body: str = ""):
        self.description = description
        self.status = status
        self.body = body
        super().__init__(f"{description}: {status} - {body}")


class AuthError(UpstreamAPIError):
    """Authentication still failed after the single forced token refresh."""


class ConfigurationError(StreamAlertsError):
    """Fatal configuration problem, e.g. a token expiry computed in the past.

    Usually points at clock skew or bad client credentials and must not be
    retried in a loop.
    """


class NotificationDeliveryError(StreamAlertsError):
    """The webhook call failed on both the first attempt and the retry."""

    def __init__(self, message: str, status: Optional[int] = None, body: str = ""):
        self.status = status
        self.body = body
        super().__init__(message)


class SchemaVersionError(StreamAlertsError):
    """A durable record carries a schema version this code cannot migrate."""
