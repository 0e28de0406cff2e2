"""Twitch API client service.

Two upstreams are involved:
- Helix: authenticated with an app access token (client-credentials flow),
  auto-fetched and cached by ``AppTokenCache``.
- TMI chatters: unauthenticated, keyed by channel login.
"""

import logging
from typing import Literal
from urllib.parse import quote

import httpx

from twitchtools.core.exceptions import (
    ChannelUnavailableError,
    NotFoundError,
    UpstreamProtocolError,
)
from twitchtools.models import ChatterRole, ChattersSnapshot, FoundersResponse, UserSummary
from twitchtools.services.token_cache import OAUTH_BASE, AppTokenCache

logger = logging.getLogger(__name__)

HELIX_BASE = "https://api.twitch.tv/helix"
TMI_BASE = "https://tmi.twitch.tv"

# Helix accepts at most 100 id/login filters per request
USERS_BATCH_SIZE = 100

FOUNDERS_MESSAGE = (
    "Founder data requires broadcaster authentication and is therefore not publicly available."
)


def chunked(items: list[str], size: int = USERS_BATCH_SIZE) -> list[list[str]]:
    """Split *items* into consecutive batches of at most *size*."""
    return [items[i : i + size] for i in range(0, len(items), size)]


class TwitchAPIClient:
    """Client for interacting with Twitch API.

    Manages a shared httpx client for connection reuse and owns the app
    token cache used for every Helix call.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        *,
        http: httpx.AsyncClient | None = None,
        token_cache: AppTokenCache | None = None,
        helix_url: str = HELIX_BASE,
        tmi_url: str = TMI_BASE,
        oauth_url: str = OAUTH_BASE,
        safety_margin: int = 60,
        timeout: float = 10.0,
    ):
        self.client_id = client_id
        self.helix_url = helix_url.rstrip("/")
        self.tmi_url = tmi_url.rstrip("/")

        # Shared HTTP client — reuses TCP connections across requests
        self._http = http or httpx.AsyncClient(timeout=timeout)

        self.token_cache = token_cache or AppTokenCache(
            self._http,
            client_id,
            client_secret,
            oauth_url=oauth_url,
            safety_margin=safety_margin,
        )

    async def close(self) -> None:
        """Close the shared HTTP client. Call on app shutdown."""
        await self._http.aclose()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _app_headers(self, token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}", "Client-Id": self.client_id}

    async def _helix_get(self, path: str, params: dict | None = None) -> dict:
        """GET request to Helix API with the app token; returns the JSON body."""
        token = await self.token_cache.acquire_token()
        try:
            response = await self._http.get(
                f"{self.helix_url}/{path}",
                params=params,
                headers=self._app_headers(token.value),
            )
        except httpx.HTTPError as e:
            logger.error(f"Helix GET /{path} error: {type(e).__name__}: {e}")
            raise UpstreamProtocolError(f"Twitch API request failed: {e}") from e

        if response.status_code == 401:
            # Revoked or rotated app token; next call fetches a fresh one
            self.token_cache.invalidate()

        if not response.is_success:
            message = _error_message(response)
            logger.warning(f"Helix GET /{path} failed: {response.status_code} {message}")
            raise UpstreamProtocolError(message)

        return response.json()

    # ------------------------------------------------------------------
    # User data
    # ------------------------------------------------------------------

    async def get_user_by_login(self, login: str) -> UserSummary:
        """Look up a Twitch user by login name."""
        data = await self._helix_get("users", {"login": login})
        users = data.get("data") or []
        if not users:
            logger.debug(f"No user found for login: {login}")
            raise NotFoundError("User not found")
        return UserSummary.from_helix(users[0])

    async def get_users_by_ids_or_logins(
        self,
        identifiers: list[str],
        *,
        key: Literal["id", "login"] = "id",
    ) -> list[UserSummary]:
        """Get multiple users, one Helix call per batch of 100, in batch order."""
        users: list[UserSummary] = []
        for chunk in chunked(identifiers):
            data = await self._helix_get("users", {key: chunk})
            users.extend(UserSummary.from_helix(u) for u in data.get("data") or [])
        return users

    # ------------------------------------------------------------------
    # Chatters
    # ------------------------------------------------------------------

    async def get_chatters(self, channel: str) -> ChattersSnapshot:
        """Fetch the TMI chatters listing for *channel*."""
        url = f"{self.tmi_url}/group/user/{quote(channel.lower(), safe='')}/chatters"
        try:
            response = await self._http.get(url)
        except httpx.HTTPError as e:
            logger.warning(f"Chatters lookup for {channel} failed: {type(e).__name__}: {e}")
            raise ChannelUnavailableError("Channel not found or offline") from e

        if not response.is_success:
            logger.warning(f"Chatters lookup for {channel} failed: {response.status_code}")
            raise ChannelUnavailableError("Channel not found or offline")

        return ChattersSnapshot.from_tmi(response.json())

    async def get_role_members(self, channel: str, role: ChatterRole) -> list[UserSummary]:
        """Resolve the users holding *role* in *channel* (first 100 only)."""
        snapshot = await self.get_chatters(channel)
        names = snapshot.names_for(role)
        if not names:
            return []

        if len(names) > USERS_BATCH_SIZE:
            logger.debug(f"{channel} has {len(names)} {role.value}, truncating to {USERS_BATCH_SIZE}")

        data = await self._helix_get("users", {"login": names[:USERS_BATCH_SIZE]})
        return [
            UserSummary.from_helix(u, include_created_at=False) for u in data.get("data") or []
        ]

    async def get_founders(self, channel: str) -> FoundersResponse:
        """Founders need a broadcaster token, which this service never holds."""
        return FoundersResponse(message=FOUNDERS_MESSAGE, data=[])


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return "Twitch API Error"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return "Twitch API Error"
