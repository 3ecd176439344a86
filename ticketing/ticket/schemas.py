# ticketing/ticket/schemas.py
from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator


class TicketBase(BaseModel):
    title: str = Field(..., min_length=1)
    body: str = Field(..., min_length=1)


class TicketCreate(TicketBase):
    # unknown keys such as "owner" are dropped, owner comes from the token
    model_config = {"extra": "ignore"}


class TicketOut(TicketBase):
    id: int
    owner: str
    created_at: datetime = Field(..., alias="createdAt")

    model_config = {"from_attributes": True, "populate_by_name": True}

    @field_validator("created_at")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        # SQLite hands back naive datetimes; they were written as UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
