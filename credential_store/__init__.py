"""Shared credential store.

Caches the platform's OAuth client-credentials app token, persists it as a
durable record and guarantees single-flight refreshes.
"""

from .config import CredentialConfig
from .models import AccessToken
from .store import CredentialStore

__version__ = "1.0.0"
__all__ = ["CredentialStore", "CredentialConfig", "AccessToken"]
