"""Configuration for the shared credential store."""

import os
from dataclasses import dataclass


@dataclass
class CredentialConfig:
    """OAuth client-credentials settings for the platform app token."""

    client_id: str = ""
    client_secret: str = ""
    token_url: str = "https://id.twitch.tv/oauth2/token"

    # The stored expiry is pulled forward by this much (seconds)
    safety_margin_seconds: int = 3600
    timeout_seconds: int = 10

    @classmethod
    def from_env(cls) -> "CredentialConfig":
        """Create configuration from environment variables.

        Returns:
            CredentialConfig instance
        """
        return cls(
            client_id=os.getenv("TWITCH_CLIENT_ID", ""),
            client_secret=os.getenv("TWITCH_CLIENT_SECRET", ""),
            token_url=os.getenv("TWITCH_TOKEN_URL", "https://id.twitch.tv/oauth2/token"),
            safety_margin_seconds=int(os.getenv("TOKEN_SAFETY_MARGIN_SECONDS", "3600")),
            timeout_seconds=int(os.getenv("TWITCH_TIMEOUT", "10")),
        )

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If configuration is invalid
        """
        if not self.client_id or not self.client_secret:
            raise ValueError("TWITCH_CLIENT_ID and TWITCH_CLIENT_SECRET are required")

        if self.safety_margin_seconds < 0:
            raise ValueError(f"Invalid safety_margin_seconds: {self.safety_margin_seconds}")

        if self.timeout_seconds <= 0:
            raise ValueError(f"Invalid timeout_seconds: {self.timeout_seconds}")

    def __repr__(self) -> str:
        """String representation (hides secret)."""
        return (
            f"CredentialConfig(client_id={self.client_id}, token_url={self.token_url}, "
            f"safety_margin_seconds={self.safety_margin_seconds})"
        )
