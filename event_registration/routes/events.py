from fastapi import APIRouter, Depends

from event_registration.routes.deps import get_ledger
from event_registration.schemas.events import AvailabilityOut, EventOut
from event_registration.services.availability import fill_percentage, status
from event_registration.services.ledger import RegistrationLedger

router = APIRouter(prefix="/events", tags=["events"])


@router.get("", response_model=list[EventOut])
def list_events(ledger: RegistrationLedger = Depends(get_ledger)):
    return [EventOut.from_event(e) for e in ledger.list_events()]


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: str, ledger: RegistrationLedger = Depends(get_ledger)):
    return EventOut.from_event(ledger.get_event(event_id))


@router.get("/{event_id}/availability", response_model=AvailabilityOut)
def event_availability(event_id: str, ledger: RegistrationLedger = Depends(get_ledger)):
    """Remaining spots for the registration form; a missing event simply shows as full."""
    spots = ledger.safe_available_spots(event_id)
    return AvailabilityOut(
        event_id=event_id,
        available=spots.available,
        total=spots.total,
        status=status(spots),
        fill_percentage=fill_percentage(spots),
    )
