"""Schemas related to user profiles."""

from datetime import datetime

from pydantic import Field, constr, field_validator

from app.schemas.base import APIModel


class UserRead(APIModel):
    """Public representation of a user."""

    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    username: str | None = None
    bio: str | None = None
    interests: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("interests", mode="before")
    @classmethod
    def default_interests(cls, value):
        return [] if value is None else value


class UserProfileUpdate(APIModel):
    """Payload for updating profile fields; omitted fields are left unchanged."""

    username: constr(strip_whitespace=True, min_length=3, max_length=64, pattern=r"^[A-Za-z0-9_.]+$") | None = None
    first_name: constr(strip_whitespace=True, max_length=128) | None = None
    last_name: constr(strip_whitespace=True, max_length=128) | None = None
    bio: constr(strip_whitespace=True, max_length=2000) | None = None
    interests: list[constr(strip_whitespace=True, min_length=1, max_length=64)] | None = Field(
        default=None, max_length=20, description="Interest tags shown on the profile"
    )
    profile_image_url: constr(max_length=512) | None = None

    @field_validator("interests")
    @classmethod
    def deduplicate_interests(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        seen: list[str] = []
        for item in value:
            if item.lower() not in (existing.lower() for existing in seen):
                seen.append(item)
        return seen
