from fastapi import APIRouter, Depends, status

from event_registration.routes.deps import get_ledger
from event_registration.schemas.registrations import RegistrationOut, RegistrationRequest
from event_registration.services.ledger import RegistrationLedger

router = APIRouter(prefix="/events", tags=["registrations"])


@router.post("/{event_id}/registrations", response_model=RegistrationOut, status_code=status.HTTP_201_CREATED)
def register(event_id: str, payload: RegistrationRequest, ledger: RegistrationLedger = Depends(get_ledger)):
    return ledger.register(event_id, payload.to_registrant())
