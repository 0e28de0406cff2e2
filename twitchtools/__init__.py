"""TwitchTools API - moderator, VIP and user lookups for Twitch channels"""

__version__ = "1.0.0"
