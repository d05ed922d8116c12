"""State Store Module

Durable, schema-versioned records for monitor state, scheduled tasks and the
shared app token.
"""

__version__ = "1.0.0"

from .config import StateStoreConfig
from .migrations import CREDENTIAL_KIND, CURRENT_VERSIONS, MONITOR_KIND, TASK_KIND
from .store import StateStore

__all__ = [
    "StateStore",
    "StateStoreConfig",
    "MONITOR_KIND",
    "CREDENTIAL_KIND",
    "TASK_KIND",
    "CURRENT_VERSIONS",
]
