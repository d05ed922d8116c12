"""
Notification system for live stream alerts.

Delivers "creator is live" messages to a Discord channel via webhook.

Main components:
- DiscordWebhookSink: webhook delivery with one immediate retry
- LiveAlertBuilder: message and embed construction from a monitor record
- NotificationConfig: configuration management

Example:
    from notifier import DiscordWebhookSink, LiveAlertBuilder, NotificationConfig

    config = NotificationConfig.from_env()
    sink = DiscordWebhookSink(config)
    await sink.notify(LiveAlertBuilder(config).build(record))
"""

from .config import NotificationConfig
from .discord import DiscordEmbed, DiscordWebhookSink
from .notifier import LiveAlertBuilder

__version__ = "1.0.0"
__all__ = ["DiscordEmbed", "DiscordWebhookSink", "LiveAlertBuilder", "NotificationConfig"]
