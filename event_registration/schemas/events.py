import datetime as dt

from pydantic import BaseModel, Field, field_validator

from event_registration.domain import CapacityStatus, Event
from event_registration.services.availability import (
    admin_status,
    availability_of,
    fill_percentage,
    is_upcoming,
    status,
)


def _not_blank(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


def _not_in_past(value: dt.date) -> dt.date:
    if value < dt.datetime.now(dt.timezone.utc).date():
        raise ValueError("Event date cannot be in the past")
    return value


# ---------- Event ----------
class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    date: dt.date
    location: str = Field(min_length=1, max_length=200)
    capacity: int = Field(ge=1)
    image_url: str = Field(min_length=1, max_length=500)

    @field_validator("title", "description", "location", "image_url")
    @classmethod
    def strip_text(cls, value: str) -> str:
        return _not_blank(value)

    @field_validator("date")
    @classmethod
    def date_not_in_past(cls, value: dt.date) -> dt.date:
        return _not_in_past(value)


class EventUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1)
    date: dt.date | None = None
    location: str | None = Field(default=None, min_length=1, max_length=200)
    capacity: int | None = Field(default=None, ge=0)
    image_url: str | None = Field(default=None, min_length=1, max_length=500)

    @field_validator("title", "description", "location", "image_url")
    @classmethod
    def strip_text(cls, value: str | None) -> str | None:
        return None if value is None else _not_blank(value)

    @field_validator("date")
    @classmethod
    def date_not_in_past(cls, value: dt.date | None) -> dt.date | None:
        return None if value is None else _not_in_past(value)


class CapacityUpdate(BaseModel):
    capacity: int = Field(ge=0)


class EventOut(BaseModel):
    id: str
    title: str
    description: str
    date: dt.date
    location: str
    capacity: int
    registration_count: int
    image_url: str
    created_at: dt.datetime
    available: int
    total: int
    status: CapacityStatus
    fill_percentage: float
    is_upcoming: bool

    class Config:
        from_attributes = True

    @classmethod
    def from_event(cls, event: Event, **extra) -> "EventOut":
        available, total = availability_of(event)
        return cls(
            id=event.id,
            title=event.title,
            description=event.description,
            date=event.date,
            location=event.location,
            capacity=event.capacity,
            registration_count=event.registration_count,
            image_url=event.image_url,
            created_at=event.created_at,
            available=available,
            total=total,
            status=status(event),
            fill_percentage=fill_percentage(event),
            is_upcoming=is_upcoming(event),
            **extra,
        )


class AdminEventOut(EventOut):
    admin_status: CapacityStatus

    @classmethod
    def from_event(cls, event: Event, **extra) -> "AdminEventOut":
        return super().from_event(event, admin_status=admin_status(event), **extra)  # type: ignore


class AvailabilityOut(BaseModel):
    event_id: str
    available: int
    total: int
    status: CapacityStatus
    fill_percentage: float
