from datetime import date, timedelta

from event_registration.core.logger_factory import setup_logger
from event_registration.domain import Event
from event_registration.repositories.base import EventRepository

logger = setup_logger(__name__)


def sample_events(today: date | None = None) -> list[Event]:
    """A handful of upcoming events for demos and local development."""
    today = today or date.today()
    return [
        Event(
            title="Tech Conference",
            description="A day of talks on web development, cloud and AI from industry speakers.",
            date=today + timedelta(days=30),
            location="Convention Center, San Francisco",
            capacity=200,
            image_url="https://images.pexels.com/photos/2774556/pexels-photo-2774556.jpeg",
        ),
        Event(
            title="Community Garden Workshop",
            description="Hands-on introduction to urban gardening and composting.",
            date=today + timedelta(days=14),
            location="Green Park, Portland",
            capacity=25,
            image_url="https://images.pexels.com/photos/1301856/pexels-photo-1301856.jpeg",
        ),
        Event(
            title="Charity Fun Run",
            description="5K run raising money for the local children's hospital.",
            date=today + timedelta(days=45),
            location="Riverside Trail, Austin",
            capacity=150,
            image_url="https://images.pexels.com/photos/2402777/pexels-photo-2402777.jpeg",
        ),
        Event(
            title="Jazz Night",
            description="Live jazz from local musicians in an intimate setting.",
            date=today + timedelta(days=7),
            location="Blue Note Lounge, Chicago",
            capacity=60,
            image_url="https://images.pexels.com/photos/1105666/pexels-photo-1105666.jpeg",
        ),
    ]


def seed_sample_events(repository: EventRepository, today: date | None = None) -> int:
    """Insert the sample events, but only into an empty store. Returns how many were added."""
    if repository.list_events():
        return 0
    events = sample_events(today)
    for event in events:
        repository.insert_event(event)
    logger.info(f"Seeded {len(events)} sample events")
    return len(events)
