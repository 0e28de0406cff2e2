"""Channel lookup API routes"""

import logging

from fastapi import APIRouter, Depends

from twitchtools.core.dependencies import get_twitch_api, require_channel
from twitchtools.models import ChatterRole, FoundersResponse, UserSummary
from twitchtools.services import TwitchAPIClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["channels"])


@router.get("/user", response_model=UserSummary)
async def get_user(
    channel: str = Depends(require_channel),
    twitch_api: TwitchAPIClient = Depends(get_twitch_api),
) -> UserSummary:
    """Get basic user metadata for a channel"""
    return await twitch_api.get_user_by_login(channel)


@router.get("/mods", response_model=list[UserSummary], response_model_exclude_none=True)
async def get_mods(
    channel: str = Depends(require_channel),
    twitch_api: TwitchAPIClient = Depends(get_twitch_api),
) -> list[UserSummary]:
    """Get moderators currently listed in the channel's chat"""
    mods = await twitch_api.get_role_members(channel, ChatterRole.MODERATORS)
    logger.debug(f"{channel}: {len(mods)} moderators")
    return mods


@router.get("/vips", response_model=list[UserSummary], response_model_exclude_none=True)
async def get_vips(
    channel: str = Depends(require_channel),
    twitch_api: TwitchAPIClient = Depends(get_twitch_api),
) -> list[UserSummary]:
    """Get VIPs currently listed in the channel's chat"""
    vips = await twitch_api.get_role_members(channel, ChatterRole.VIPS)
    logger.debug(f"{channel}: {len(vips)} vips")
    return vips


@router.get("/founders", response_model=FoundersResponse)
async def get_founders(
    channel: str = Depends(require_channel),
    twitch_api: TwitchAPIClient = Depends(get_twitch_api),
) -> FoundersResponse:
    """Founders are not publicly available; returns an informational payload"""
    return await twitch_api.get_founders(channel)
