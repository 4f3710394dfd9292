"""Points balance models."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserPoints(BaseModel):
    """A user's points balance.

    Stored rows are returned as-is, so either column may be NULL.
    """

    points: int | None = 0
    last_points_update: datetime | None = Field(default_factory=utcnow)

    model_config = ConfigDict(from_attributes=True, extra="ignore")
