"""Event and RSVP schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

EventType = Literal["workshop", "hackathon", "meetup", "demo_day"]
RSVPStatus = Literal["registered", "attended", "cancelled"]
Timeframe = Literal["upcoming", "past", "all"]


class Event(BaseModel):
    """A club event (workshop, hackathon, meetup or demo day)."""

    id: str
    title: str
    description: str | None = None
    event_type: EventType | None = None
    date: datetime
    end_date: datetime | None = None
    location: str | None = None
    max_attendees: int | None = None
    image_url: str | None = None
    is_published: bool = False
    created_at: datetime

    model_config = ConfigDict(extra="ignore")


class EventInput(BaseModel):
    """Payload used by admins to create an event."""

    title: str = ""
    description: str | None = None
    event_type: EventType | None = None
    date: datetime | None = None
    end_date: datetime | None = None
    location: str | None = None
    max_attendees: int | None = Field(None, ge=1)
    image_url: str | None = None
    is_published: bool = False


class EventUpdate(BaseModel):
    """Partial event update; only fields that were set are sent."""

    title: str | None = None
    description: str | None = None
    event_type: EventType | None = None
    date: datetime | None = None
    end_date: datetime | None = None
    location: str | None = None
    max_attendees: int | None = Field(None, ge=1)
    image_url: str | None = None
    is_published: bool | None = None


class EventRSVP(BaseModel):
    """A member's registration against an event."""

    id: str
    event_id: str
    member_id: str
    status: RSVPStatus = "registered"
    created_at: datetime

    model_config = ConfigDict(extra="ignore")


class MemberEventRSVP(BaseModel):
    """An RSVP joined with its event, as shown on the member dashboard."""

    id: str
    event: Event
    status: RSVPStatus
    created_at: datetime
