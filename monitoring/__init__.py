"""Monitoring module.

Provides Prometheus metrics for polls, notifications and token refreshes.
"""

from .metrics import MetricsExporter

__all__ = ["MetricsExporter"]

__version__ = "1.0.0"
