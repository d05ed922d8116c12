"""
Discord webhook sink with rich embed support.

Delivers live alerts to a Discord channel. A failed delivery is retried once,
immediately; a second failure raises ``NotificationDeliveryError``.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp

from notifier.config import DEFAULT_COLOR, NotificationConfig
from shared.errors import NotificationDeliveryError

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 2


class DiscordEmbed:
    """Builder for Discord embed objects."""

    def __init__(
        self,
        title: str,
        url: Optional[str] = None,
        description: Optional[str] = None,
        color: int = DEFAULT_COLOR,
    ):
        """
        Initialize a Discord embed.

        Args:
            title: Embed title
            url: Link opened when the title is clicked
            description: Embed description
            color: Embed color (decimal)
        """
        self.data: Dict[str, Any] = {
            "title": title,
            "color": color,
        }

        if url:
            self.data["url"] = url

        if description:
            self.data["description"] = description

    def set_image(self, url: str) -> "DiscordEmbed":
        """
        Set the large embed image.

        Args:
            url: Image URL

        Returns:
            Self for method chaining
        """
        self.data["image"] = {"url": url}
        return self

    def set_thumbnail(self, url: str) -> "DiscordEmbed":
        """
        Set embed thumbnail.

        Args:
            url: Image URL

        Returns:
            Self for method chaining
        """
        self.data["thumbnail"] = {"url": url}
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert embed to dictionary for JSON serialization."""
        return self.data


class DiscordWebhookSink:
    """Discord webhook delivery with a single immediate retry."""

    def __init__(self, config: NotificationConfig, metrics=None):
        """
        Initialize the sink.

        Args:
            config: Notification configuration
            metrics: Optional MetricsExporter
        """
        self.config = config
        self.metrics = metrics
        self.webhook_url = config.discord_webhook_url

    async def notify(self, payload: Dict[str, Any]) -> None:
        """
        Deliver a webhook payload.

        Args:
            payload: JSON body ({content, embeds, ...})

        Raises:
            NotificationDeliveryError: If the first attempt and the retry both fail
        """
        if not self.config.enabled:
            logger.debug("Notifications are disabled, dropping live alert")
            self._record("skipped")
            return

        if not self.webhook_url:
            raise NotificationDeliveryError("Discord webhook URL not configured")

        status: Optional[int] = None
        body = ""
        for attempt in range(1, MAX_ATTEMPTS + 1):
            try:
                status, body = await self._post(payload)
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                status, body = None, str(e)
                logger.warning(f"Discord notification attempt {attempt} failed: {e!r}")
                continue

            if 200 <= status < 300:
                logger.debug(f"Discord notification sent on attempt {attempt}")
                self._record("sent")
                return

            logger.warning(f"Discord notification attempt {attempt} failed: {status} - {body}")

        self._record("failed")
        raise NotificationDeliveryError(
            f"Discord notification failed after {MAX_ATTEMPTS} attempts: {status} - {body}",
            status=status,
            body=body,
        )

    async def _post(self, payload: Dict[str, Any]):
        async with aiohttp.ClientSession() as session:
            async with session.post(
                self.webhook_url,
                params={"wait": "true"},
                json=payload,
                timeout=aiohttp.ClientTimeout(total=self.config.timeout_seconds),
            ) as response:
                return response.status, await response.text()

    def _record(self, result: str) -> None:
        if self.metrics:
            self.metrics.record_notification(result)
