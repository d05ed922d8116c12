"""
Configuration management for the notification system.

Handles the Discord webhook target, message overrides and delivery timeout.
"""

import os
from dataclasses import dataclass
from typing import Optional

# Twitch purple accent used on live alert embeds
DEFAULT_COLOR = 15277667


def _get_bool_env(key: str, default: bool = False) -> bool:
    """Parse boolean environment variable."""
    value = os.getenv(key, str(default)).lower()
    return value in ("true", "1", "yes", "on")


@dataclass
class NotificationConfig:
    """Configuration for live alert delivery."""

    discord_webhook_url: Optional[str] = None
    discord_username: Optional[str] = None
    discord_avatar_url: Optional[str] = None
    mention: Optional[str] = None
    color: int = DEFAULT_COLOR
    timeout_seconds: int = 5
    enabled: bool = True

    @classmethod
    def from_env(cls) -> "NotificationConfig":
        """Create configuration from environment variables.

        Returns:
            NotificationConfig instance
        """
        return cls(
            discord_webhook_url=os.getenv("DISCORD_WEBHOOK_URL") or None,
            discord_username=os.getenv("DISCORD_USERNAME") or None,
            discord_avatar_url=os.getenv("DISCORD_AVATAR_URL") or None,
            mention=os.getenv("DISCORD_MENTION") or None,
            color=int(os.getenv("NOTIFICATION_COLOR", str(DEFAULT_COLOR))),
            timeout_seconds=int(os.getenv("NOTIFICATION_TIMEOUT", "5")),
            enabled=_get_bool_env("NOTIFICATION_ENABLED", True),
        )

    def has_webhook_configured(self) -> bool:
        """Check if a webhook is configured."""
        return bool(self.discord_webhook_url)

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If configuration is invalid
        """
        if self.enabled and not self.has_webhook_configured():
            raise ValueError("DISCORD_WEBHOOK_URL is required when notifications are enabled")

        if self.discord_webhook_url and not self.discord_webhook_url.startswith(
            ("http://", "https://")
        ):
            raise ValueError("DISCORD_WEBHOOK_URL must be an http(s) URL")

        if not 0 <= self.color <= 0xFFFFFF:
            raise ValueError(f"Invalid color: {self.color}")

        if self.timeout_seconds <= 0:
            raise ValueError(f"Invalid timeout_seconds: {self.timeout_seconds}")
