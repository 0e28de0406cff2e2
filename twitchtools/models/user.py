"""Public response models"""

from __future__ import annotations

from pydantic import BaseModel


class UserSummary(BaseModel):
    """Projection of a Helix user record."""

    id: str
    login: str
    display_name: str
    profile_image_url: str
    created_at: str | None = None

    @classmethod
    def from_helix(cls, user: dict, *, include_created_at: bool = True) -> UserSummary:
        return cls(
            id=user["id"],
            login=user["login"],
            display_name=user.get("display_name", user["login"]),
            profile_image_url=user.get("profile_image_url", ""),
            created_at=user.get("created_at") if include_created_at else None,
        )


class FoundersResponse(BaseModel):
    """Informational payload; founder data is never available."""

    message: str
    data: list[UserSummary] = []


class ServiceInfo(BaseModel):
    """Status and usage listing served at the root path."""

    status: str
    message: str
    endpoints: list[str]
    usage: str
