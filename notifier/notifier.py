"""
Live alert payload construction.

Turns a monitor record into the Discord webhook body: a short message with an
optional mention and one rich embed linking to the channel.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict

from notifier.config import NotificationConfig
from notifier.discord import DiscordEmbed

if TYPE_CHECKING:
    from stream_monitor.models import MonitorRecord

logger = logging.getLogger(__name__)

DEFAULT_CREATOR_URL_TEMPLATE = "https://twitch.tv/{creator}"

# Helix thumbnails carry a size template; without it Discord gets the source size
THUMBNAIL_SIZE_TEMPLATE = "-{width}x{height}"


class LiveAlertBuilder:
    """Builds webhook payloads for live alerts."""

    def __init__(
        self,
        config: NotificationConfig,
        creator_url_template: str = DEFAULT_CREATOR_URL_TEMPLATE,
    ):
        """
        Initialize the builder.

        Args:
            config: Notification configuration (mention, color, overrides)
            creator_url_template: Channel URL with a ``{creator}`` placeholder
        """
        self.config = config
        self.creator_url_template = creator_url_template

    def build(self, record: "MonitorRecord") -> Dict[str, Any]:
        """
        Build the payload announcing that a creator went live.

        Args:
            record: Monitor record whose status is Live

        Returns:
            JSON-serializable webhook body

        Raises:
            ValueError: If the record is not live
        """
        status = record.status
        if not status.is_live:
            raise ValueError(f"Cannot build live alert for offline creator {record.creator_id}")

        name = record.profile.display_name or record.creator_id
        content = f"{name} is live!"
        if self.config.mention:
            content += f" cc {self.config.mention}"

        embed = DiscordEmbed(
            title=f"Watch {name} now!",
            url=self.creator_url_template.format(creator=record.creator_id),
            color=self.config.color,
        )
        if status.thumbnail_url:
            embed.set_image(status.thumbnail_url.replace(THUMBNAIL_SIZE_TEMPLATE, ""))

        payload: Dict[str, Any] = {"content": content, "embeds": [embed.to_dict()]}

        if self.config.discord_username:
            payload["username"] = self.config.discord_username

        if self.config.discord_avatar_url:
            payload["avatar_url"] = self.config.discord_avatar_url

        logger.debug(f"Built live alert for {record.creator_id} (stream {status.stream_id})")
        return payload
