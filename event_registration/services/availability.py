"""
Read-side projections over event state.

Everything here is a pure function of the events/registrations passed in;
callers re-read from the ledger on every request.
"""
from datetime import date, datetime, timezone

from event_registration.domain import Availability, CapacityStatus, Event, Registration

ALMOST_FULL_RATIO = 0.2
DASHBOARD_EVENT_LIMIT = 3
DASHBOARD_REGISTRATION_LIMIT = 5


def _today() -> date:
    return datetime.now(timezone.utc).date()


def availability_of(event: Event) -> Availability:
    return Availability(
        available=max(0, event.capacity - event.registration_count),
        total=event.capacity,
    )


def _as_availability(item: Event | Availability) -> Availability:
    return item if isinstance(item, Availability) else availability_of(item)


def status(item: Event | Availability) -> CapacityStatus:
    available, total = _as_availability(item)
    if total <= 0:
        # no spots ever existed
        return CapacityStatus.FULL

    ratio = available / total
    if ratio == 0:
        return CapacityStatus.FULL
    if ratio <= ALMOST_FULL_RATIO:
        return CapacityStatus.ALMOST_FULL
    return CapacityStatus.AVAILABLE


def fill_percentage(item: Event | Availability) -> float:
    available, total = _as_availability(item)
    if total <= 0:
        return 0.0
    return (total - available) * 100 / total


def is_upcoming(event: Event, today: date | None = None) -> bool:
    """True when the event falls on a later calendar day than ``today``."""
    return event.date > (today or _today())


def admin_status(event: Event, today: date | None = None) -> CapacityStatus:
    if not is_upcoming(event, today):
        return CapacityStatus.PAST
    return status(event)


def search_events(events: list[Event], term: str | None = None) -> list[Event]:
    """Case-insensitive match on title or location, newest first."""
    if term:
        needle = term.lower()
        events = [e for e in events if needle in e.title.lower() or needle in e.location.lower()]
    return sorted(events, key=lambda e: e.created_at, reverse=True)


def filter_registrations(
    registrations: list[Registration],
    term: str | None = None,
    event_id: str | None = None,
    sort: str = "registration_date",
    direction: str = "desc",
) -> list[Registration]:
    if sort not in ("name", "registration_date"):
        raise ValueError(f"Unsupported sort field: {sort}")
    if direction not in ("asc", "desc"):
        raise ValueError(f"Unsupported sort direction: {direction}")

    matches = []
    needle = (term or "").lower()
    for reg in registrations:
        if event_id and reg.event_id != event_id:
            continue
        if needle and not (
            needle in reg.name.lower() or needle in reg.phone or needle in reg.location.lower()
        ):
            continue
        matches.append(reg)

    if sort == "name":
        key = lambda r: r.name.lower()  # noqa: E731
    else:
        key = lambda r: r.registration_date  # noqa: E731
    return sorted(matches, key=key, reverse=direction == "desc")


def dashboard_summary(events: list[Event], registrations: list[Registration]) -> dict:
    """Return aggregated totals across all events, plus the short lists the admin dashboard shows."""
    total_capacity = sum(e.capacity for e in events)
    filled_capacity = sum(e.registration_count for e in events)
    capacity_percentage = round(filled_capacity / total_capacity * 100) if total_capacity > 0 else 0

    return {
        "total_events": len(events),
        "total_registrations": len(registrations),
        "total_capacity": total_capacity,
        "filled_capacity": filled_capacity,
        "remaining_spots": total_capacity - filled_capacity,
        "capacity_percentage": capacity_percentage,
        "upcoming_events": sorted(events, key=lambda e: e.date)[:DASHBOARD_EVENT_LIMIT],
        "recent_registrations": sorted(
            registrations, key=lambda r: r.registration_date, reverse=True
        )[:DASHBOARD_REGISTRATION_LIMIT],
    }
