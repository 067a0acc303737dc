import datetime as dt

from pydantic import BaseModel

from event_registration.schemas.registrations import RegistrationOut


class DashboardEventOut(BaseModel):
    id: str
    title: str
    date: dt.date
    location: str
    capacity: int
    registration_count: int

    class Config:
        from_attributes = True


class DashboardOut(BaseModel):
    total_events: int
    total_registrations: int
    total_capacity: int
    filled_capacity: int
    remaining_spots: int
    capacity_percentage: int
    upcoming_events: list[DashboardEventOut]
    recent_registrations: list[RegistrationOut]

    class Config:
        from_attributes = True
