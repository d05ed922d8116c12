"""Configuration for the alerts HTTP service."""

import os
from dataclasses import dataclass


def _get_bool_env(key: str, default: bool = False) -> bool:
    """Parse boolean environment variable."""
    value = os.getenv(key, str(default)).lower()
    return value in ("true", "1", "yes", "on")


@dataclass
class ApiConfig:
    """HTTP boundary and scheduler settings."""

    host: str = "0.0.0.0"
    port: int = 8000
    enable_scheduler: bool = True
    environment: str = "production"

    @classmethod
    def from_env(cls) -> "ApiConfig":
        """Create configuration from environment variables.

        Returns:
            ApiConfig instance
        """
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            enable_scheduler=_get_bool_env("ENABLE_SCHEDULER", True),
            environment=os.getenv("ENVIRONMENT", "production"),
        )

    @property
    def debug(self) -> bool:
        return self.environment == "development"

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If configuration is invalid
        """
        if not 0 < self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}")

        if self.environment not in ("development", "staging", "production", "testing"):
            raise ValueError(f"Invalid environment: {self.environment}")
