"""Pytest fixtures for credential_store tests."""

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from prometheus_client import CollectorRegistry

from credential_store.config import CredentialConfig
from credential_store.store import CredentialStore
from monitoring.metrics import MetricsExporter
from state_store.config import StateStoreConfig
from state_store.store import StateStore


class FakeClock:
    """Controllable UTC clock."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def _token_response(status=200, body=None, text="", delay=0.0):
    """Build an ``async with session.post(...)`` context returning a mock response."""
    response = AsyncMock()
    response.status = status
    response.text.return_value = text

    async def json_body():
        if delay:
            await asyncio.sleep(delay)
        return body

    response.json.side_effect = json_body

    context = MagicMock()
    context.__aenter__.return_value = response
    context.__aexit__.return_value = False
    return context


def _grant(access_token="token-1", expires_in=5_000_000):
    """A successful client-credentials grant body."""
    return {"access_token": access_token, "expires_in": expires_in, "token_type": "bearer"}


@pytest.fixture
def token_response():
    """Factory for mocked token endpoint responses."""
    return _token_response


@pytest.fixture
def grant():
    """Factory for grant bodies."""
    return _grant


@pytest.fixture
def clock():
    """Clock frozen at a fixed instant."""
    return FakeClock(datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def config():
    """Test credentials."""
    return CredentialConfig(client_id="client-id", client_secret="client-secret")


@pytest.fixture
def state_store():
    """In-memory durable record store."""
    store = StateStore(StateStoreConfig(database_url="sqlite:///:memory:"))
    store.initialize()
    yield store
    store.close()


@pytest.fixture
def metrics():
    """Metrics exporter on a private registry."""
    return MetricsExporter(registry=CollectorRegistry())


@pytest.fixture
def credentials(config, state_store, metrics, clock):
    """Credential store under test."""
    return CredentialStore(config, state_store, metrics=metrics, clock=clock)
