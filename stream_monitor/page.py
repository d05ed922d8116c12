"""Title and social card meta tags for a creator status page."""

from typing import Dict, List

from stream_monitor.models import MonitorRecord

THUMBNAIL_SIZE_TEMPLATE = "-{width}x{height}"
CARD_WIDTH = 1280
CARD_HEIGHT = 720


def card_image(record: MonitorRecord) -> str:
    """Live thumbnail sized for a social card, or the offline banner."""
    status = record.status
    if status.is_live:
        return status.thumbnail_url.replace(
            THUMBNAIL_SIZE_TEMPLATE, f"-{CARD_WIDTH}x{CARD_HEIGHT}"
        )
    return record.profile.offline_image_url


def page_meta(record: MonitorRecord) -> List[Dict[str, str]]:
    """
    Build the meta tags for a creator page.

    Args:
        record: Creator monitor record

    Returns:
        List of tag dicts, each keyed by ``title``, ``name`` or ``property``
        plus ``content``
    """
    name = record.profile.display_name or record.creator_id
    live = record.status.is_live
    title = f"{name} - {'Live Now' if live else 'Offline'}"
    description = f"{name} is currently {'live' if live else 'offline'} on Twitch"
    image = card_image(record)

    return [
        {"title": title},
        {"name": "description", "content": description},
        {"property": "og:title", "content": title},
        {"property": "og:description", "content": description},
        {"property": "og:type", "content": "website"},
        {"property": "og:image", "content": image},
        {"property": "og:image:width", "content": str(CARD_WIDTH)},
        {"property": "og:image:height", "content": str(CARD_HEIGHT)},
        {"name": "twitter:card", "content": "summary_large_image"},
        {"name": "twitter:title", "content": title},
        {"name": "twitter:description", "content": description},
        {"name": "twitter:image", "content": image},
    ]
