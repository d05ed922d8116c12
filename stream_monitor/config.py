"""Configuration for creator stream monitoring."""

import os
from dataclasses import dataclass, field
from datetime import timedelta
from typing import List

# Creators the service is allowed to track unless ALLOWED_CREATORS overrides it
DEFAULT_ALLOWED_CREATORS = ["sevadus", "darkostoafk"]


@dataclass
class MonitorConfig:
    """Stream monitor settings."""

    allowed_creators: List[str] = field(default_factory=lambda: list(DEFAULT_ALLOWED_CREATORS))
    notify_cooldown_hours: float = 8.0
    poll_interval_seconds: int = 300
    poll_cron: str = "*/5 * * * *"
    creator_url_template: str = "https://twitch.tv/{creator}"

    @classmethod
    def from_env(cls) -> "MonitorConfig":
        """Create configuration from environment variables.

        Returns:
            MonitorConfig instance
        """
        allowed = os.getenv("ALLOWED_CREATORS")
        creators = (
            [c.strip().lower() for c in allowed.split(",") if c.strip()]
            if allowed is not None
            else list(DEFAULT_ALLOWED_CREATORS)
        )
        return cls(
            allowed_creators=creators,
            notify_cooldown_hours=float(os.getenv("NOTIFY_COOLDOWN_HOURS", "8")),
            poll_interval_seconds=int(os.getenv("POLL_INTERVAL_SECONDS", "300")),
            poll_cron=os.getenv("POLL_CRON", "*/5 * * * *"),
            creator_url_template=os.getenv(
                "CREATOR_URL_TEMPLATE", "https://twitch.tv/{creator}"
            ),
        )

    @property
    def notify_cooldown(self) -> timedelta:
        """Anti-flap window during which a new stream id does not re-notify."""
        return timedelta(hours=self.notify_cooldown_hours)

    def is_allowed(self, creator: str) -> bool:
        """Check a creator identifier against the allow-list."""
        return creator in self.allowed_creators

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If configuration is invalid
        """
        if not self.allowed_creators:
            raise ValueError("ALLOWED_CREATORS must name at least one creator")

        if self.notify_cooldown_hours < 0:
            raise ValueError(f"Invalid notify_cooldown_hours: {self.notify_cooldown_hours}")

        if self.poll_interval_seconds <= 0:
            raise ValueError(f"Invalid poll_interval_seconds: {self.poll_interval_seconds}")

        if "{creator}" not in self.creator_url_template:
            raise ValueError("CREATOR_URL_TEMPLATE must contain {creator}")
