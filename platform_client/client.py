"""Twitch Helix API client.

Obtains the shared app token from the CredentialStore and issues
authenticated GET requests. A 401 triggers one forced token refresh and one
retry of the same request; a second 401 is surfaced as an ``AuthError``.
"""

import logging
from typing import Dict, Optional, Tuple, Type, TypeVar

import aiohttp
from pydantic import BaseModel, ValidationError

from credential_store.models import AccessToken
from credential_store.store import CredentialStore
from platform_client.config import PlatformConfig
from platform_client.models import LiveStreamInfo, StreamsResponse, UserInfo, UsersResponse
from shared.clock import Clock, utc_now
from shared.errors import AuthError, NotFoundError, UpstreamAPIError

logger = logging.getLogger(__name__)

ResponseModel = TypeVar("ResponseModel", bound=BaseModel)


class PlatformClient:
    """Client for the Helix user and stream lookups.

    Holds no state of its own beyond a short-lived token hint, used only to
    skip a trip to the credential store while the token still looks unexpired.
    """

    def __init__(
        self,
        config: PlatformConfig,
        credentials: CredentialStore,
        clock: Clock = utc_now,
    ):
        """
        Initialize the client.

        Args:
            config: Helix API settings
            credentials: Shared credential store
            clock: Source of the current UTC time

        Raises:
            ValueError: If configuration is invalid
        """
        config.validate()
        self.config = config
        self.credentials = credentials
        self._clock = clock
        self._token_hint: Optional[AccessToken] = None

    async def get_user(self, login: str) -> Optional[UserInfo]:
        """
        Look up a user by login.

        Args:
            login: Creator login name

        Returns:
            The user, or None when Helix returns an empty list

        Raises:
            NotFoundError: On a 404 response
            UpstreamAPIError: On any other non-2xx response
            AuthError: If the request is still unauthorized after a token refresh
        """
        status, body = await self._api_get("users", {"login": login})
        self._raise_for_status(status, body, f"user not found: {login}", "failed to get user")

        users = self._parse(UsersResponse, status, body, "users")
        logger.debug(f"get_user({login}) returned {len(users.data)} user(s)")
        return users.data[0] if users.data else None

    async def get_live_status(self, login: str) -> Optional[LiveStreamInfo]:
        """
        Look up the creator's current stream.

        Args:
            login: Creator login name

        Returns:
            The first live stream, or None when the creator is offline

        Raises:
            NotFoundError: On a 404 response
            UpstreamAPIError: On any other non-2xx response
            AuthError: If the request is still unauthorized after a token refresh
        """
        status, body = await self._api_get("streams", {"user_login": login})
        self._raise_for_status(
            status, body, f"channel not found: {login}", "failed to get channel status"
        )

        streams = self._parse(StreamsResponse, status, body, "streams")
        return next((stream for stream in streams.data if stream.is_live), None)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _token(self) -> AccessToken:
        hint = self._token_hint
        if hint is None or hint.is_expired(self._clock()):
            hint = await self.credentials.get_token()
            self._token_hint = hint
        return hint

    async def _api_get(self, path: str, params: Dict[str, str]) -> Tuple[int, str]:
        """GET with one forced-refresh retry on 401."""
        status, body = await self._get_once(path, params)
        if status != 401:
            return status, body

        # The token may be revoked upstream despite a future expiry
        logger.warning(f"Helix GET /{path} returned 401, forcing token refresh")
        self._token_hint = None
        await self.credentials.force_refresh()

        status, body = await self._get_once(path, params)
        if status == 401:
            raise AuthError(f"GET /{path} unauthorized after token refresh", status, body)
        return status, body

    async def _get_once(self, path: str, params: Dict[str, str]) -> Tuple[int, str]:
        token = await self._token()
        headers = {
            "Authorization": f"Bearer {token.access_token}",
            "Client-Id": self.config.client_id,
        }
        async with aiohttp.ClientSession() as session:
            async with session.get(
                f"{self.config.api_base}/{path}",
                params=params,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self.config.timeout_seconds),
            ) as response:
                return response.status, await response.text()

    @staticmethod
    def _raise_for_status(status: int, body: str, not_found: str, description: str) -> None:
        if 200 <= status < 300:
            return
        if status == 404:
            raise NotFoundError(not_found)
        raise UpstreamAPIError(description, status, body)

    @staticmethod
    def _parse(model: Type[ResponseModel], status: int, body: str, what: str) -> ResponseModel:
        try:
            return model.model_validate_json(body)
        except ValidationError as e:
            raise UpstreamAPIError(f"Malformed {what} response", status, str(e)) from e
