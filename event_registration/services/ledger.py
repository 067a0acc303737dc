from datetime import date

from event_registration.core.exceptions import (
    BelowCurrentRegistrations,
    EventFull,
    EventNotFound,
    InvalidCapacity,
    NotFound,
)
from event_registration.core.logger_factory import setup_logger
from event_registration.domain import Availability, Event, Registrant, Registration
from event_registration.repositories.base import EventRepository
from event_registration.services.availability import availability_of

logger = setup_logger(__name__)


class RegistrationLedger:
    """
    Owns the relationship between an event's capacity and its registration count.

    Every mutation of a single event runs inside that event's lock, and the
    repository re-checks the capacity condition in the same statement that
    increments the counter, so concurrent registrations can never overfill an event.
    """

    def __init__(self, repository: EventRepository, locks):
        self.repository = repository
        self.locks = locks

    # ---------- reads ----------
    def get_event(self, event_id: str) -> Event:
        event = self.repository.get_event(event_id)
        if event is None:
            raise EventNotFound(event_id)
        return event

    def list_events(self) -> list[Event]:
        return self.repository.list_events()

    def available_spots(self, event_id: str) -> Availability:
        return availability_of(self.get_event(event_id))

    def safe_available_spots(self, event_id: str) -> Availability:
        """Same as available_spots, but a missing event reads as (0, 0)."""
        try:
            return self.available_spots(event_id)
        except NotFound:
            return Availability(available=0, total=0)

    def registrations_for_event(self, event_id: str) -> list[Registration]:
        self.get_event(event_id)
        return self.repository.list_registrations(event_id)

    def list_registrations(self) -> list[Registration]:
        return self.repository.list_registrations()

    # ---------- admission ----------
    def register(self, event_id: str, registrant: Registrant) -> Registration:
        with self.locks.hold(event_id):
            available, total = self.available_spots(event_id)
            if available <= 0:
                logger.warning(f"Registration rejected, event {event_id} is full ({total} spots)")
                raise EventFull(event_id)

            registration = Registration.for_registrant(event_id, registrant)
            if not self.repository.add_registration(registration):
                # the event vanished or filled up outside this lock
                if self.repository.get_event(event_id) is None:
                    raise EventNotFound(event_id)
                logger.warning(f"Registration rejected by storage, event {event_id} is full")
                raise EventFull(event_id)

        logger.info(f"Registration {registration.id} admitted to event {event_id} ({available - 1}/{total} left)")
        return registration

    # ---------- admin ----------
    def create_event(
        self,
        *,
        title: str,
        description: str,
        date: date,
        location: str,
        capacity: int,
        image_url: str,
    ) -> Event:
        if capacity < 0:
            raise InvalidCapacity(capacity)
        event = Event(
            title=title,
            description=description,
            date=date,
            location=location,
            capacity=capacity,
            image_url=image_url,
            registration_count=0,
        )
        created = self.repository.insert_event(event)
        logger.info(f"Event {created.id} created with capacity {capacity}")
        return created

    def set_capacity(self, event_id: str, new_capacity: int) -> Event:
        if new_capacity < 0:
            raise InvalidCapacity(new_capacity)

        with self.locks.hold(event_id):
            event = self.get_event(event_id)
            if new_capacity < event.registration_count:
                raise BelowCurrentRegistrations(event_id, new_capacity, event.registration_count)

            if not self.repository.set_capacity(event_id, new_capacity):
                current = self.get_event(event_id)
                raise BelowCurrentRegistrations(event_id, new_capacity, current.registration_count)

        logger.info(f"Capacity of event {event_id} set to {new_capacity}")
        return self.get_event(event_id)

    def update_event(self, event_id: str, **fields) -> Event:
        """
        Edit event details. A capacity in the edit obeys the same rule as
        set_capacity, and details and capacity are written together or not at all.
        """
        capacity = fields.get("capacity")
        if capacity is not None and capacity < 0:
            raise InvalidCapacity(capacity)

        if not fields:
            return self.get_event(event_id)

        with self.locks.hold(event_id):
            event = self.get_event(event_id)
            if capacity is not None and capacity < event.registration_count:
                raise BelowCurrentRegistrations(event_id, capacity, event.registration_count)

            updated = self.repository.update_event(event_id, **fields)
            if updated is None:
                # deleted, or filled past the new capacity, outside this lock
                current = self.get_event(event_id)
                raise BelowCurrentRegistrations(event_id, capacity, current.registration_count)

        logger.info(f"Event {event_id} updated: {sorted(fields)}")
        return updated

    def remove_event(self, event_id: str) -> None:
        with self.locks.hold(event_id):
            if not self.repository.delete_event(event_id):
                raise EventNotFound(event_id)
        logger.info(f"Event {event_id} deleted with its registrations")
