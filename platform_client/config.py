"""Configuration for the platform API client."""

import os
from dataclasses import dataclass


@dataclass
class PlatformConfig:
    """Twitch Helix API settings."""

    client_id: str = ""
    api_base: str = "https://api.twitch.tv/helix"
    timeout_seconds: int = 10

    @classmethod
    def from_env(cls) -> "PlatformConfig":
        """Create configuration from environment variables.

        Returns:
            PlatformConfig instance
        """
        return cls(
            client_id=os.getenv("TWITCH_CLIENT_ID", ""),
            api_base=os.getenv("TWITCH_API_BASE", "https://api.twitch.tv/helix").rstrip("/"),
            timeout_seconds=int(os.getenv("TWITCH_TIMEOUT", "10")),
        )

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If configuration is invalid
        """
        if not self.client_id:
            raise ValueError("TWITCH_CLIENT_ID is required")

        if not self.api_base.startswith(("http://", "https://")):
            raise ValueError(f"Invalid api_base: {self.api_base}")

        if self.timeout_seconds <= 0:
            raise ValueError(f"Invalid timeout_seconds: {self.timeout_seconds}")
