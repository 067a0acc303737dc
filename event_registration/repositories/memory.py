import threading

from event_registration.domain import Event, Registration
from event_registration.repositories.base import EDITABLE_FIELDS, EventRepository


class InMemoryEventRepository(EventRepository):
    """
    Process-local repository. Nothing is persisted.
    A single re-entrant mutex makes every method atomic, and callers only ever
    receive copies of the stored objects.
    """

    def __init__(self, events: list[Event] | None = None):
        self._events: dict[str, Event] = {}
        self._registrations: dict[str, Registration] = {}
        self._mutex = threading.RLock()
        for event in events or []:
            self.insert_event(event)

    def get_event(self, event_id: str) -> Event | None:
        with self._mutex:
            event = self._events.get(event_id)
            return event.copy() if event else None

    def list_events(self) -> list[Event]:
        with self._mutex:
            events = [e.copy() for e in self._events.values()]
        return sorted(events, key=lambda e: (e.date, e.created_at))

    def insert_event(self, event: Event) -> Event:
        with self._mutex:
            self._events[event.id] = event.copy()
            return event.copy()

    def update_event(self, event_id: str, **fields) -> Event | None:
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be edited directly: {sorted(unknown)}")

        with self._mutex:
            event = self._events.get(event_id)
            if event is None:
                return None
            if "capacity" in fields and fields["capacity"] < event.registration_count:
                return None
            self._events[event_id] = event.copy(**fields)
            return self._events[event_id].copy()

    def delete_event(self, event_id: str) -> bool:
        with self._mutex:
            if self._events.pop(event_id, None) is None:
                return False
            self._registrations = {
                rid: r for rid, r in self._registrations.items() if r.event_id != event_id
            }
            return True

    def list_registrations(self, event_id: str | None = None) -> list[Registration]:
        with self._mutex:
            regs = [
                Registration(**vars(r))
                for r in self._registrations.values()
                if event_id is None or r.event_id == event_id
            ]
        return sorted(regs, key=lambda r: r.registration_date)

    def add_registration(self, registration: Registration) -> bool:
        with self._mutex:
            event = self._events.get(registration.event_id)
            if event is None or event.registration_count >= event.capacity:
                return False
            self._events[event.id] = event.copy(registration_count=event.registration_count + 1)
            self._registrations[registration.id] = Registration(**vars(registration))
            return True

    def set_capacity(self, event_id: str, capacity: int) -> bool:
        with self._mutex:
            event = self._events.get(event_id)
            if event is None or capacity < event.registration_count:
                return False
            self._events[event_id] = event.copy(capacity=capacity)
            return True
