"""Storage boundary for the registration ledger.

Implementations must make ``add_registration``, ``set_capacity`` and
``delete_event`` atomic: either every row they touch changes or none does.
"""

from abc import ABC, abstractmethod

from event_registration.domain import Event, Registration

EDITABLE_FIELDS = frozenset({"title", "description", "date", "location", "image_url", "capacity"})


class EventRepository(ABC):
    """Interface for event and registration persistence."""

    @abstractmethod
    def get_event(self, event_id: str) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def list_events(self) -> list[Event]:
        """Return all events ordered by date ascending."""
        ...

    @abstractmethod
    def insert_event(self, event: Event) -> Event:
        ...

    @abstractmethod
    def update_event(self, event_id: str, **fields) -> Event | None:
        """
        Apply field changes to an event in one write. A ``capacity`` change is only
        applied while registration_count <= capacity. Returns the updated event, or
        None if it is gone or the capacity condition failed (nothing is changed then).
        """
        ...

    @abstractmethod
    def delete_event(self, event_id: str) -> bool:
        """Delete an event together with every registration that references it."""
        ...

    @abstractmethod
    def list_registrations(self, event_id: str | None = None) -> list[Registration]:
        """Return registrations (optionally for one event) ordered by registration date."""
        ...

    @abstractmethod
    def add_registration(self, registration: Registration) -> bool:
        """
        Store the registration and bump the event's registration_count by one,
        only while registration_count < capacity. Returns False when no spot was left.
        """
        ...

    @abstractmethod
    def set_capacity(self, event_id: str, capacity: int) -> bool:
        """Set capacity only if it is not below registration_count. Returns False otherwise."""
        ...
