"""
Pytest configuration and shared fixtures for all tests
"""

import os
import sys

import pytest

# Add project root to Python path
project_root = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, os.path.dirname(project_root))


@pytest.fixture(scope="session")
def test_env_vars():
    """Provide test environment variables."""
    return {
        "TWITCH_CLIENT_ID": "test-client-id",
        "TWITCH_CLIENT_SECRET": "test-client-secret",
        "TWITCH_TOKEN_URL": "https://id.test/oauth2/token",
        "TWITCH_API_BASE": "https://api.test/helix",
        "DISCORD_WEBHOOK_URL": "https://discord.test/api/webhooks/1/abc",
        "DISCORD_MENTION": "<@1234>",
        "ALLOWED_CREATORS": "alice,bob",
        "DATABASE_URL": "sqlite:///:memory:",
        "ENABLE_SCHEDULER": "false",
        "LOG_LEVEL": "DEBUG",
        "ENVIRONMENT": "testing",
    }


@pytest.fixture
def mock_env(monkeypatch, test_env_vars):
    """Mock environment variables for testing."""
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("LOG_PATH", raising=False)
