from contextlib import contextmanager

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from event_registration.core.exceptions import StorageFailure
from event_registration.core.logger_factory import setup_logger
from event_registration.domain import Event, Registration
from event_registration.models.events import EventRecord
from event_registration.models.registrations import RegistrationRecord
from event_registration.repositories.base import EDITABLE_FIELDS, EventRepository

logger = setup_logger(__name__)


def _to_event(record: EventRecord) -> Event:
    return Event(
        id=record.id,
        title=record.title,
        description=record.description,
        date=record.date,
        location=record.location,
        capacity=record.capacity,
        registration_count=record.registration_count,
        image_url=record.image_url,
        created_at=record.created_at,
    )


def _to_registration(record: RegistrationRecord) -> Registration:
    return Registration(
        id=record.id,
        event_id=record.event_id,
        name=record.name,
        phone=record.phone,
        location=record.location,
        registration_date=record.registration_date,
    )


class SqlAlchemyEventRepository(EventRepository):
    """Repository over a SQLAlchemy session. Every write commits its own transaction."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _storage_errors(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"Storage failure while trying to {action}")
            raise StorageFailure() from e

    def get_event(self, event_id: str) -> Event | None:
        with self._storage_errors("load an event"):
            record = self.db.get(EventRecord, event_id, populate_existing=True)
            return _to_event(record) if record else None

    def list_events(self) -> list[Event]:
        with self._storage_errors("list events"):
            records = self.db.scalars(select(EventRecord).order_by(EventRecord.date, EventRecord.created_at))
            return [_to_event(r) for r in records]

    def insert_event(self, event: Event) -> Event:
        with self._storage_errors("create an event"):
            record = EventRecord(
                id=event.id,
                title=event.title,
                description=event.description,
                date=event.date,
                location=event.location,
                capacity=event.capacity,
                registration_count=event.registration_count,
                image_url=event.image_url,
                created_at=event.created_at,
            )
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
            return _to_event(record)

    def update_event(self, event_id: str, **fields) -> Event | None:
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be edited directly: {sorted(unknown)}")

        with self._storage_errors("update an event"):
            if fields:
                stmt = update(EventRecord).where(EventRecord.id == event_id).values(**fields)
                if "capacity" in fields:
                    stmt = stmt.where(EventRecord.registration_count <= fields["capacity"])
                res = self.db.execute(stmt)
                if res.rowcount != 1:  # type: ignore
                    self.db.rollback()
                    return None
                self.db.commit()
        return self.get_event(event_id)

    def delete_event(self, event_id: str) -> bool:
        with self._storage_errors("delete an event"):
            # registrations go first so nothing is orphaned even without FK enforcement
            self.db.execute(delete(RegistrationRecord).where(RegistrationRecord.event_id == event_id))
            res = self.db.execute(delete(EventRecord).where(EventRecord.id == event_id))
            if res.rowcount != 1:  # type: ignore
                self.db.rollback()
                return False
            self.db.commit()
            return True

    def list_registrations(self, event_id: str | None = None) -> list[Registration]:
        stmt = select(RegistrationRecord).order_by(RegistrationRecord.registration_date)
        if event_id is not None:
            stmt = stmt.where(RegistrationRecord.event_id == event_id)
        with self._storage_errors("list registrations"):
            return [_to_registration(r) for r in self.db.scalars(stmt)]

    def add_registration(self, registration: Registration) -> bool:
        with self._storage_errors("record a registration"):
            # Check capacity and increment registration_count atomically
            stmt = (
                update(EventRecord)
                .where(EventRecord.id == registration.event_id)
                .where(EventRecord.registration_count < EventRecord.capacity)
                .values(registration_count=EventRecord.registration_count + 1)
            )
            res = self.db.execute(stmt)
            if res.rowcount != 1:  # type: ignore
                self.db.rollback()
                return False

            self.db.add(
                RegistrationRecord(
                    id=registration.id,
                    event_id=registration.event_id,
                    name=registration.name,
                    phone=registration.phone,
                    location=registration.location,
                    registration_date=registration.registration_date,
                )
            )
            self.db.commit()
            return True

    def set_capacity(self, event_id: str, capacity: int) -> bool:
        with self._storage_errors("change capacity"):
            stmt = (
                update(EventRecord)
                .where(EventRecord.id == event_id)
                .where(EventRecord.registration_count <= capacity)
                .values(capacity=capacity)
            )
            res = self.db.execute(stmt)
            if res.rowcount != 1:  # type: ignore
                self.db.rollback()
                return False
            self.db.commit()
            return True
