from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from event_registration.core.config import CORS_ORIGINS, get_seed_sample_events, get_storage_backend
from event_registration.core.exceptions import (
    AdmissionError,
    CapacityError,
    InvalidCapacity,
    LedgerBusy,
    LedgerError,
    NotFound,
    StorageFailure,
)
from event_registration.core.logger_factory import setup_logger
from event_registration.database.db import Base, SessionLocal, engine
from event_registration.models import events, registrations  # noqa: F401  (register tables)
from event_registration.repositories.sql import SqlAlchemyEventRepository
from event_registration.routes import admin
from event_registration.routes import events as event_routes
from event_registration.routes import registrations as registration_routes
from event_registration.routes.deps import get_memory_repository
from event_registration.services.seed import seed_sample_events

logger = setup_logger(__name__)


def seed_store():
    if get_storage_backend() == "memory":
        return seed_sample_events(get_memory_repository())
    db = SessionLocal()
    try:
        return seed_sample_events(SqlAlchemyEventRepository(db))
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if get_storage_backend() == "sql":
        # Create all tables (in production, use migrations such as Alembic)
        Base.metadata.create_all(bind=engine)
    if get_seed_sample_events():
        seed_store()
    logger.info(f"Event registration API starting ({get_storage_backend()} storage)")
    yield
    logger.info("Event registration API shutting down")


app = FastAPI(title="Event Registration API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def status_for(exc: LedgerError) -> int:
    if isinstance(exc, NotFound):
        return 404
    if isinstance(exc, InvalidCapacity):
        return 422
    if isinstance(exc, (AdmissionError, CapacityError)):
        return 409
    if isinstance(exc, LedgerBusy):
        return 503
    return 500


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    if isinstance(exc, StorageFailure):
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=status_for(exc), content={"detail": str(exc)})


@app.get("/health")
def health():
    return {"status": "ok"}


# Include the routers
app.include_router(event_routes.router)
app.include_router(registration_routes.router)
app.include_router(admin.router)
