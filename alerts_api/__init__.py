"""
HTTP boundary for the stream alerts service.

Main components:
- create_app: FastAPI application factory
- PollScheduler: in-process interval scheduler for poll tasks
- ApiConfig: configuration management
"""

from .config import ApiConfig
from .scheduler import PollScheduler

__version__ = "1.0.0"
__all__ = ["ApiConfig", "PollScheduler"]
