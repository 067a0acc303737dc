from fastapi import APIRouter, Depends, Query, Response, status

from event_registration.routes.deps import get_ledger, require_admin
from event_registration.schemas.events import AdminEventOut, CapacityUpdate, EventCreate, EventUpdate
from event_registration.schemas.registrations import RegistrationOut
from event_registration.schemas.reports import DashboardOut
from event_registration.services.availability import dashboard_summary, filter_registrations, search_events
from event_registration.services.ledger import RegistrationLedger

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/dashboard", response_model=DashboardOut)
def dashboard(ledger: RegistrationLedger = Depends(get_ledger)):
    """Aggregate report across all events."""
    return dashboard_summary(ledger.list_events(), ledger.list_registrations())


@router.get("/events", response_model=list[AdminEventOut])
def list_events(search: str | None = None, ledger: RegistrationLedger = Depends(get_ledger)):
    return [AdminEventOut.from_event(e) for e in search_events(ledger.list_events(), search)]


@router.post("/events", response_model=AdminEventOut, status_code=status.HTTP_201_CREATED)
def create_event(payload: EventCreate, ledger: RegistrationLedger = Depends(get_ledger)):
    event = ledger.create_event(**payload.model_dump())
    return AdminEventOut.from_event(event)


@router.get("/events/{event_id}", response_model=AdminEventOut)
def get_event(event_id: str, ledger: RegistrationLedger = Depends(get_ledger)):
    return AdminEventOut.from_event(ledger.get_event(event_id))


@router.put("/events/{event_id}", response_model=AdminEventOut)
def update_event(event_id: str, payload: EventUpdate, ledger: RegistrationLedger = Depends(get_ledger)):
    event = ledger.update_event(event_id, **payload.model_dump(exclude_none=True))
    return AdminEventOut.from_event(event)


@router.put("/events/{event_id}/capacity", response_model=AdminEventOut)
def set_capacity(event_id: str, payload: CapacityUpdate, ledger: RegistrationLedger = Depends(get_ledger)):
    return AdminEventOut.from_event(ledger.set_capacity(event_id, payload.capacity))


@router.delete("/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(event_id: str, ledger: RegistrationLedger = Depends(get_ledger)):
    ledger.remove_event(event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/events/{event_id}/registrations", response_model=list[RegistrationOut])
def event_registrations(event_id: str, ledger: RegistrationLedger = Depends(get_ledger)):
    return ledger.registrations_for_event(event_id)


@router.get("/registrations", response_model=list[RegistrationOut])
def list_registrations(
    search: str | None = None,
    event_id: str | None = None,
    sort: str = Query("registration_date", pattern="^(name|registration_date)$"),
    direction: str = Query("desc", pattern="^(asc|desc)$"),
    ledger: RegistrationLedger = Depends(get_ledger),
):
    return filter_registrations(
        ledger.list_registrations(), term=search, event_id=event_id, sort=sort, direction=direction
    )
