"""Services layer - upstream Twitch access

Services are initialized with their dependencies and accessed through dependency injection.
"""

from .token_cache import AppToken, AppTokenCache
from .twitch_api import TwitchAPIClient

__all__ = [
    "AppToken",
    "AppTokenCache",
    "TwitchAPIClient",
]
