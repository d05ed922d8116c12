"""
Creator stream monitoring.

One monitor per creator tracks whether the creator is live and sends a single
alert per live session, with an anti-flap cooldown against upstream gaps.

Main components:
- StreamMonitor: per-creator state machine
- MonitorRegistry: per-creator serialization and allow-list checks
- MonitorRecord: persisted profile and live status
- CronTask: scheduled poll payload
"""

from .config import MonitorConfig
from .models import CreatorProfile, Live, MonitorRecord, Offline
from .monitor import StreamMonitor
from .page import page_meta
from .registry import MonitorRegistry
from .tasks import CronTask

__version__ = "1.0.0"
__all__ = [
    "CreatorProfile",
    "CronTask",
    "Live",
    "MonitorConfig",
    "MonitorRecord",
    "MonitorRegistry",
    "Offline",
    "StreamMonitor",
    "page_meta",
]
