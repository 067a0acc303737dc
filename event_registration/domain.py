import enum
import uuid
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from typing import NamedTuple


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CapacityStatus(str, enum.Enum):
    FULL = "Full"
    ALMOST_FULL = "Almost Full"
    AVAILABLE = "Available"
    PAST = "Past"


class Availability(NamedTuple):
    available: int
    total: int


@dataclass
class Event:
    title: str
    description: str
    date: date
    location: str
    capacity: int
    image_url: str
    registration_count: int = 0
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)

    def copy(self, **changes) -> "Event":
        return replace(self, **changes)


@dataclass(frozen=True)
class Registrant:
    name: str
    phone: str
    location: str


@dataclass
class Registration:
    event_id: str
    name: str
    phone: str
    location: str
    id: str = field(default_factory=new_id)
    registration_date: datetime = field(default_factory=utcnow)

    @classmethod
    def for_registrant(cls, event_id: str, registrant: Registrant) -> "Registration":
        return cls(
            event_id=event_id,
            name=registrant.name,
            phone=registrant.phone,
            location=registrant.location,
        )
