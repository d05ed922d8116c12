"""Shared helpers used by every stream alerts component."""

from shared.clock import utc_now
from shared.errors import (
    AuthError,
    ConfigurationError,
    InvalidCreatorError,
    NotFoundError,
    NotificationDeliveryError,
    SchemaVersionError,
    StreamAlertsError,
    UpstreamAPIError,
)

__all__ = [
    "utc_now",
    "StreamAlertsError",
    "NotFoundError",
    "InvalidCreatorError",
    "UpstreamAPIError",
    "AuthError",
    "ConfigurationError",
    "NotificationDeliveryError",
    "SchemaVersionError",
]
