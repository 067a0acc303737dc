import os

# Storage
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./events.db")
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "sql")
# Load a few example events into an empty store on startup
SEED_SAMPLE_EVENTS = os.getenv("SEED_SAMPLE_EVENTS", "false").lower() in ("1", "true", "yes")

# Redis / locking
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
LOCK_BACKEND = os.getenv("LOCK_BACKEND", "redis")
LOCK_TIMEOUT = float(os.getenv("LOCK_TIMEOUT", "10"))
LOCK_BLOCKING_TIMEOUT = float(os.getenv("LOCK_BLOCKING_TIMEOUT", "5"))

# Admin credentials
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_PATH = os.getenv("LOG_PATH", "")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]


def get_database_url():
    return DATABASE_URL


def get_redis_url():
    return REDIS_URL


def get_lock_backend():
    return LOCK_BACKEND


def get_storage_backend():
    return STORAGE_BACKEND


def get_seed_sample_events():
    return SEED_SAMPLE_EVENTS
