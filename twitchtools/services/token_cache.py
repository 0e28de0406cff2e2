"""App access token cache (client-credentials flow).

The token lives in memory only. It is replaced, never mutated, when it
expires. ``expires_at`` already has the safety margin subtracted, so a token
is usable for as long as ``now < expires_at``.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

import httpx

from twitchtools.core.exceptions import UpstreamAuthError

logger = logging.getLogger(__name__)

OAUTH_BASE = "https://id.twitch.tv/oauth2"
DEFAULT_SAFETY_MARGIN = 60


@dataclass(frozen=True)
class AppToken:
    """Bearer token and the monotonic time it must be renewed at."""

    value: str
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


class AppTokenCache:
    """Fetches and memoizes a Twitch app access token.

    Renewals are serialized with an asyncio lock; callers that were waiting
    on the lock reuse the token the first one fetched.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        client_id: str,
        client_secret: str,
        *,
        oauth_url: str = OAUTH_BASE,
        safety_margin: int = DEFAULT_SAFETY_MARGIN,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._http = http
        self.client_id = client_id
        self.client_secret = client_secret
        self.oauth_url = oauth_url.rstrip("/")
        self.safety_margin = safety_margin
        self._clock = clock

        self._token: AppToken | None = None
        self._lock = asyncio.Lock()

    @property
    def token(self) -> AppToken | None:
        return self._token

    def invalidate(self) -> None:
        """Drop the cached token so the next caller fetches a new one."""
        self._token = None

    async def acquire_token(self) -> AppToken:
        """Return a cached app access token, refreshing only when expired."""
        token = self._token
        if token and token.is_valid(self._clock()):
            return token

        async with self._lock:
            # Double-check after acquiring lock
            token = self._token
            if token and token.is_valid(self._clock()):
                return token

            self._token = await self._request_token()
            return self._token

    async def _request_token(self) -> AppToken:
        if not self.client_id or not self.client_secret:
            raise UpstreamAuthError("Twitch client credentials are not configured")

        logger.info("Getting new Twitch access token")
        now = self._clock()
        try:
            response = await self._http.post(
                f"{self.oauth_url}/token",
                data={
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "grant_type": "client_credentials",
                },
            )
        except httpx.HTTPError as e:
            logger.error(f"Token request failed: {type(e).__name__}: {e}")
            raise UpstreamAuthError("Failed to get access token") from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        access_token = data.get("access_token") if isinstance(data, dict) else None
        if response.status_code != 200 or not access_token:
            logger.error(f"Failed to get app token: {response.status_code}")
            raise UpstreamAuthError("Failed to get access token")

        expires_in = data.get("expires_in", 0)
        logger.info(f"Got new access token (expires in {expires_in}s)")
        return AppToken(
            value=access_token,
            expires_at=now + expires_in - self.safety_margin,
        )
