"""Invite link models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Invitee(BaseModel):
    """Profile of a user who joined through an invite link."""
    id: str
    full_name: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(extra="ignore")


class InviteLink(BaseModel):
    """Shareable invite code owned by a creator.

    ``invitees`` is only populated by listing queries that join profiles.
    """
    id: str | int | None = None
    creator_id: str
    code: str
    expires_at: datetime
    created_at: datetime | None = None
    invitees: list[Invitee] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True, extra="allow")

    @field_validator("invitees", mode="before")
    @classmethod
    def invitees_as_list(cls, value: Any) -> Any:
        # PostgREST embeds a many-to-one relation as an object (or null)
        if value is None:
            return []
        if isinstance(value, dict):
            return [value]
        return value
