"""Pytest fixtures for platform_client tests."""

import json
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from credential_store.models import AccessToken
from platform_client.client import PlatformClient
from platform_client.config import PlatformConfig

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def _api_response(status=200, body=None):
    """Build an ``async with session.get(...)`` context returning a mock response."""
    response = AsyncMock()
    response.status = status
    response.text.return_value = json.dumps(body) if body is not None else ""

    context = MagicMock()
    context.__aenter__.return_value = response
    context.__aexit__.return_value = False
    return context


def _stream(stream_id="123", user_login="alice", type="live"):
    """A streams list entry."""
    return {
        "id": stream_id,
        "user_id": "1001",
        "user_login": user_login,
        "user_name": user_login.capitalize(),
        "game_id": "509658",
        "game_name": "Just Chatting",
        "type": type,
        "title": "hello",
        "viewer_count": 42,
        "started_at": "2026-10-19T11:30:00Z",
        "language": "en",
        "thumbnail_url": f"https://static-cdn.jtvnw.net/previews-ttv/live_user_{user_login}-{{width}}x{{height}}.jpg",
        "tags": ["English"],
        "is_mature": False,
    }


def _user(login="alice"):
    """A users list entry."""
    return {
        "id": "1001",
        "login": login,
        "display_name": login.capitalize(),
        "type": "",
        "broadcaster_type": "partner",
        "description": "",
        "profile_image_url": f"https://cdn.example.com/{login}-profile.png",
        "offline_image_url": f"https://cdn.example.com/{login}-offline.png",
        "created_at": "2016-12-14T20:32:28Z",
    }


@pytest.fixture
def api_response():
    """Factory for mocked Helix responses."""
    return _api_response


@pytest.fixture
def stream():
    """Factory for stream entries."""
    return _stream


@pytest.fixture
def user():
    """Factory for user entries."""
    return _user


@pytest.fixture
def credentials():
    """Credential store double issuing token-1, then token-2 after a forced refresh."""
    store = AsyncMock()
    tokens = {"current": "token-1"}

    async def get_token():
        return AccessToken(access_token=tokens["current"], expires_at=NOW + timedelta(hours=1))

    async def force_refresh():
        tokens["current"] = "token-2"

    store.get_token.side_effect = get_token
    store.force_refresh.side_effect = force_refresh
    return store


@pytest.fixture
def client(credentials):
    """Platform client under test."""
    config = PlatformConfig(client_id="client-id", api_base="https://api.test/helix")
    return PlatformClient(config, credentials, clock=lambda: NOW)
