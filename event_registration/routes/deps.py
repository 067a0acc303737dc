import secrets
from functools import lru_cache

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.orm import Session

from event_registration.core import config
from event_registration.core.locks import LocalLockProvider, RedisLockProvider
from event_registration.database.db import get_db
from event_registration.repositories.base import EventRepository
from event_registration.repositories.memory import InMemoryEventRepository
from event_registration.repositories.sql import SqlAlchemyEventRepository
from event_registration.services.ledger import RegistrationLedger

security = HTTPBasic()


@lru_cache
def get_lock_provider():
    if config.get_lock_backend() == "local":
        return LocalLockProvider()
    return RedisLockProvider()


@lru_cache
def get_memory_repository() -> InMemoryEventRepository:
    return InMemoryEventRepository()


def get_repository(db: Session = Depends(get_db)) -> EventRepository:
    if config.get_storage_backend() == "memory":
        return get_memory_repository()
    return SqlAlchemyEventRepository(db)


def get_ledger(
    repository: EventRepository = Depends(get_repository),
    locks=Depends(get_lock_provider),
) -> RegistrationLedger:
    return RegistrationLedger(repository, locks)


def require_admin(credentials: HTTPBasicCredentials = Depends(security)) -> str:
    """Gate for admin routes; the ledger itself trusts its callers."""
    valid_user = secrets.compare_digest(credentials.username.encode(), config.ADMIN_USERNAME.encode())
    valid_password = secrets.compare_digest(credentials.password.encode(), config.ADMIN_PASSWORD.encode())
    if not (valid_user and valid_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username
