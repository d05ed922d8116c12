"""State Store Configuration

Configuration management for the durable record store.
"""

import os
from dataclasses import dataclass


@dataclass
class StateStoreConfig:
    """Configuration for the State Store module.

    All configuration is loaded from environment variables with sensible defaults.
    """

    database_url: str = "sqlite:///stream_alerts.db"

    # Pool configuration (ignored by SQLite)
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_recycle: int = 3600  # Recycle connections after 1 hour

    debug: bool = False

    @classmethod
    def from_env(cls) -> "StateStoreConfig":
        """Load configuration from environment variables.

        Returns:
            StateStoreConfig instance populated from environment
        """
        return cls(
            database_url=os.getenv("DATABASE_URL", "sqlite:///stream_alerts.db"),
            db_pool_size=int(os.getenv("DB_POOL_SIZE", "5")),
            db_max_overflow=int(os.getenv("DB_MAX_OVERFLOW", "10")),
            db_pool_recycle=int(os.getenv("DB_POOL_RECYCLE", "3600")),
            debug=os.getenv("DB_ECHO", "false").lower() == "true",
        )

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured database is SQLite."""
        return self.database_url.startswith("sqlite")

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If configuration is invalid
        """
        if not self.database_url:
            raise ValueError("DATABASE_URL is required")

        if self.db_pool_size < 1:
            raise ValueError("DB_POOL_SIZE must be at least 1")

    def __repr__(self) -> str:
        """String representation (hides credentials)."""
        scheme = self.database_url.split("://", 1)[0]
        return f"StateStoreConfig(scheme={scheme}, pool_size={self.db_pool_size})"
