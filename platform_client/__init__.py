"""Platform API client.

Authenticated Helix lookups for users and live streams.
"""

from .client import PlatformClient
from .config import PlatformConfig
from .models import LiveStreamInfo, UserInfo

__version__ = "1.0.0"
__all__ = ["PlatformClient", "PlatformConfig", "LiveStreamInfo", "UserInfo"]
