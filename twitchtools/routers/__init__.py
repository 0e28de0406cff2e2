"""API Routers package"""

from . import channels_router

__all__ = [
    "channels_router",
]
