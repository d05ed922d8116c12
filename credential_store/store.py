"""Shared credential store for the platform app access token.

A single instance is shared by every PlatformClient in the process. All reads
and writes of the token happen under one ``asyncio.Lock``, so N concurrent
callers holding an expired token cause a single outbound refresh; the others
wake up to the already-refreshed token.

Forced refreshes (after a 401) are deduplicated with a reentrancy flag: the
initiator sets it before its first suspension point and clears it in
``finally``, while concurrent arrivals return immediately instead of queuing a
second refresh. Their next ``get_token`` call then waits on the lock for the
in-flight refresh to land.
"""

import asyncio
import logging
from datetime import timedelta
from typing import Optional

import aiohttp
from pydantic import ValidationError

from credential_store.config import CredentialConfig
from credential_store.models import AccessToken, AccessTokenResponse
from monitoring.metrics import MetricsExporter
from shared.clock import Clock, utc_now
from shared.errors import ConfigurationError, UpstreamAPIError
from state_store.migrations import CREDENTIAL_KIND
from state_store.store import StateStore

logger = logging.getLogger(__name__)

TOKEN_KEY = "credential:app_token"


class CredentialStore:
    """Durable single-flight cache for the client-credentials token."""

    def __init__(
        self,
        config: CredentialConfig,
        state_store: StateStore,
        metrics: Optional[MetricsExporter] = None,
        clock: Clock = utc_now,
    ):
        """
        Initialize the credential store.

        Args:
            config: Client credentials and token endpoint settings
            state_store: Durable record store holding the token between restarts
            metrics: Optional metrics exporter
            clock: Source of the current UTC time

        Raises:
            ValueError: If configuration is invalid
        """
        config.validate()
        self.config = config
        self.state_store = state_store
        self.metrics = metrics
        self._clock = clock

        self._lock = asyncio.Lock()
        self._token: Optional[AccessToken] = None
        self._loaded = False
        self._force_refreshing = False

        # Outbound token endpoint calls, successful or not
        self.refresh_count = 0

    async def get_token(self) -> AccessToken:
        """
        Return the cached token, refreshing it first if it has expired.

        Returns:
            An unexpired access token

        Raises:
            UpstreamAPIError: If the token endpoint rejects the request
            ConfigurationError: If the computed expiry is not in the future
        """
        async with self._lock:
            self._ensure_loaded()
            token = self._token
            if token is not None and not token.is_expired(self._clock()):
                return token

            return await self._refresh(forced=False)

    async def force_refresh(self) -> None:
        """
        Fetch a new token regardless of the cached expiry.

        Concurrent calls while a forced refresh is running return immediately.

        Raises:
            UpstreamAPIError: If the token endpoint rejects the request
            ConfigurationError: If the computed expiry is not in the future
        """
        if self._force_refreshing:
            logger.info("Token already force refreshing, skipping")
            return

        self._force_refreshing = True
        try:
            async with self._lock:
                self._ensure_loaded()
                await self._refresh(forced=True)
        finally:
            self._force_refreshing = False

    def _ensure_loaded(self) -> None:
        """Load the durable token copy into memory on first use."""
        if self._loaded:
            return
        payload = self.state_store.load(TOKEN_KEY, CREDENTIAL_KIND)
        if payload is not None:
            self._token = AccessToken.model_validate(payload)
            logger.debug(f"Loaded persisted app token, expires at {self._token.expires_at}")
        self._loaded = True

    async def _refresh(self, forced: bool) -> AccessToken:
        """Fetch, validate and persist a new token. Caller holds the lock."""
        kind = "forced" if forced else "expired"
        logger.info(f"Refreshing platform app token ({kind})")
        self.refresh_count += 1

        try:
            body = await self._request_token()

            now = self._clock()
            expires_at = (
                now
                + timedelta(seconds=body.expires_in)
                - timedelta(seconds=self.config.safety_margin_seconds)
            )
            if expires_at <= now:
                raise ConfigurationError(
                    f"calculated expiration is in the past: expires_in={body.expires_in}, "
                    f"safety_margin={self.config.safety_margin_seconds}s, expires_at={expires_at}"
                )

            token = AccessToken(access_token=body.access_token, expires_at=expires_at)
            # Persist before swapping the in-memory copy so a failed write leaves both untouched
            self.state_store.save(TOKEN_KEY, CREDENTIAL_KIND, token.model_dump(mode="json"))
        except Exception:
            if self.metrics:
                self.metrics.record_token_refresh(kind, "failure")
            raise

        self._token = token
        if self.metrics:
            self.metrics.record_token_refresh(kind, "success")
        logger.info(f"Platform app token refreshed, expires at {expires_at.isoformat()}")
        return token

    async def _request_token(self) -> AccessTokenResponse:
        """POST the client-credentials grant to the token endpoint."""
        async with aiohttp.ClientSession() as session:
            async with session.post(
                self.config.token_url,
                data={
                    "client_id": self.config.client_id,
                    "client_secret": self.config.client_secret,
                    "grant_type": "client_credentials",
                },
                timeout=aiohttp.ClientTimeout(total=self.config.timeout_seconds),
            ) as response:
                if not 200 <= response.status < 300:
                    raise UpstreamAPIError(
                        "Failed to refresh token", response.status, await response.text()
                    )
                body = await response.json()

        try:
            return AccessTokenResponse.model_validate(body)
        except ValidationError as e:
            raise UpstreamAPIError("Malformed token response", response.status, str(e)) from e
