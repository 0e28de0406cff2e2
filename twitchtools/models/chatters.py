"""TMI chatters snapshot"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ChatterRole(str, Enum):
    """Roles the API exposes member listings for."""

    MODERATORS = "moderators"
    VIPS = "vips"


@dataclass
class ChattersSnapshot:
    """Login names in a channel's chat, partitioned by role."""

    chatter_count: int = 0
    broadcaster: list[str] = field(default_factory=list)
    vips: list[str] = field(default_factory=list)
    moderators: list[str] = field(default_factory=list)
    staff: list[str] = field(default_factory=list)
    admins: list[str] = field(default_factory=list)
    global_mods: list[str] = field(default_factory=list)
    viewers: list[str] = field(default_factory=list)

    @classmethod
    def from_tmi(cls, payload: dict) -> ChattersSnapshot:
        chatters = payload.get("chatters") or {}
        return cls(
            chatter_count=payload.get("chatter_count", 0),
            broadcaster=list(chatters.get("broadcaster") or []),
            vips=list(chatters.get("vips") or []),
            moderators=list(chatters.get("moderators") or []),
            staff=list(chatters.get("staff") or []),
            admins=list(chatters.get("admins") or []),
            global_mods=list(chatters.get("global_mods") or []),
            viewers=list(chatters.get("viewers") or []),
        )

    def names_for(self, role: ChatterRole) -> list[str]:
        return getattr(self, role.value)
