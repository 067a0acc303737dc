class LedgerError(Exception):
    """Base class for every error raised by the registration ledger."""


class NotFound(LedgerError):
    pass


class EventNotFound(NotFound):
    def __init__(self, event_id: str):
        self.event_id = event_id
        super().__init__("Event not found")


class AdmissionError(LedgerError):
    pass


class EventFull(AdmissionError):
    def __init__(self, event_id: str):
        self.event_id = event_id
        super().__init__("This event is full")


class CapacityError(LedgerError):
    pass


class BelowCurrentRegistrations(CapacityError):
    """Capacity edit would drop below the registrations already taken."""

    def __init__(self, event_id: str, requested: int, registration_count: int):
        self.event_id = event_id
        self.requested = requested
        self.registration_count = registration_count
        super().__init__(
            f"Cannot set capacity below the current registration count ({registration_count})"
        )


class InvalidCapacity(CapacityError):
    def __init__(self, requested: int):
        self.requested = requested
        super().__init__("Capacity must be a non-negative integer")


class StorageFailure(LedgerError):
    def __init__(self, message: str = "An error occurred. Please try again."):
        super().__init__(message)


class LedgerBusy(LedgerError):
    def __init__(self, event_id: str):
        self.event_id = event_id
        super().__init__("Could not acquire lock, please try again.")
