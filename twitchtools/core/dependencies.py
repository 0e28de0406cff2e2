"""Dependency injection utilities for FastAPI"""

import logging

from fastapi import Query

from twitchtools.core.config import get_settings
from twitchtools.core.exceptions import MissingParameterError
from twitchtools.services import TwitchAPIClient

logger = logging.getLogger(__name__)


# ============================================
# Service Dependencies
# ============================================


_twitch_api: TwitchAPIClient | None = None


def get_twitch_api() -> TwitchAPIClient:
    """Get shared TwitchAPIClient singleton (connection reuse + token cache)."""
    global _twitch_api
    if _twitch_api is None:
        settings = get_settings()
        _twitch_api = TwitchAPIClient(
            client_id=settings.twitch_client_id,
            client_secret=settings.twitch_client_secret,
            helix_url=settings.helix_url,
            tmi_url=settings.tmi_url,
            oauth_url=settings.oauth_url,
            safety_margin=settings.token_safety_margin,
            timeout=settings.http_timeout,
        )
    return _twitch_api


async def close_twitch_api() -> None:
    """Close the shared TwitchAPIClient. Call on app shutdown."""
    global _twitch_api
    if _twitch_api is not None:
        await _twitch_api.close()
        _twitch_api = None


# ============================================
# Request Parameters
# ============================================


def require_channel(channel: str | None = Query(None)) -> str:
    """Return the ``channel`` query parameter, rejecting missing or empty values"""
    if not channel:
        raise MissingParameterError("channel")
    return channel
