"""
Test database models (EventRecord and RegistrationRecord).
"""
import uuid
from datetime import date, timedelta

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from event_registration.models.events import EventRecord
from event_registration.models.registrations import RegistrationRecord


def _event_record(**kwargs) -> EventRecord:
    fields = dict(
        id=str(uuid.uuid4()),
        title="Test Event",
        description="Description",
        date=date.today() + timedelta(days=5),
        location="Hall A",
        capacity=100,
        registration_count=0,
        image_url="https://example.com/a.jpg",
    )
    fields.update(kwargs)
    return EventRecord(**fields)


def _registration_record(event_id: str, name: str = "Alice") -> RegistrationRecord:
    return RegistrationRecord(
        id=str(uuid.uuid4()), event_id=event_id, name=name, phone="5551234567", location="Boston"
    )


class TestEventModel:
    """Test the EventRecord model."""

    def test_create_event(self, db_session: Session):
        event = _event_record()
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)

        assert event.title == "Test Event"
        assert event.capacity == 100
        assert event.registration_count == 0
        assert event.created_at is not None

    def test_event_relationship_with_registrations(self, db_session: Session):
        event = _event_record(title="Concert", capacity=50)
        db_session.add(event)
        db_session.commit()

        db_session.add_all([_registration_record(event.id, "Alice"), _registration_record(event.id, "Bob")])
        db_session.commit()
        db_session.refresh(event)

        assert len(event.registrations) == 2
        assert all(r.event_id == event.id for r in event.registrations)

    def test_count_above_capacity_is_rejected(self, db_session: Session):
        db_session.add(_event_record(capacity=1, registration_count=2))

        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_negative_capacity_is_rejected(self, db_session: Session):
        db_session.add(_event_record(capacity=-1))

        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()


class TestRegistrationModel:
    """Test the RegistrationRecord model."""

    def test_create_registration(self, db_session: Session):
        event = _event_record(title="Festival", capacity=200)
        db_session.add(event)
        db_session.commit()

        registration = _registration_record(event.id)
        db_session.add(registration)
        db_session.commit()
        db_session.refresh(registration)

        assert registration.event_id == event.id
        assert registration.registration_date is not None
        assert registration.event.title == "Festival"

    def test_registration_requires_existing_event(self, db_session: Session):
        db_session.add(_registration_record("missing-event"))

        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_orm_delete_cascades(self, db_session: Session):
        event = _event_record(title="Seminar", capacity=30)
        db_session.add(event)
        db_session.commit()
        db_session.add(_registration_record(event.id))
        db_session.commit()

        db_session.delete(event)
        db_session.commit()

        assert db_session.query(RegistrationRecord).filter_by(event_id=event.id).count() == 0
