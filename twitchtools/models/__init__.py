"""Response and upstream data models"""

from .chatters import ChatterRole, ChattersSnapshot
from .user import FoundersResponse, ServiceInfo, UserSummary

__all__ = [
    "ChatterRole",
    "ChattersSnapshot",
    "FoundersResponse",
    "ServiceInfo",
    "UserSummary",
]
