import threading
from contextlib import contextmanager

import redis

from event_registration.core.config import LOCK_BLOCKING_TIMEOUT, LOCK_TIMEOUT, get_redis_url
from event_registration.core.exceptions import LedgerBusy, StorageFailure
from event_registration.core.logger_factory import setup_logger

logger = setup_logger(__name__)


def get_redis_client():
    """Get Redis client for locking."""
    return redis.from_url(get_redis_url(), decode_responses=True)


def lock_key(event_id: str) -> str:
    return f"event_lock:{event_id}"


class RedisLockProvider:
    """
    Per-event exclusive scope backed by a Redis lock.
    Works across processes, so several API workers can share one event safely.
    """

    def __init__(self, client=None, timeout: float = LOCK_TIMEOUT, blocking_timeout: float = LOCK_BLOCKING_TIMEOUT):
        self._client = client
        self.timeout = timeout
        self.blocking_timeout = blocking_timeout

    @property
    def client(self):
        if self._client is None:
            self._client = get_redis_client()
        return self._client

    @contextmanager
    def hold(self, event_id: str):
        lock = self.client.lock(lock_key(event_id), timeout=self.timeout, blocking_timeout=self.blocking_timeout)
        try:
            # Acquire the lock - only one process can proceed at a time
            acquired = lock.acquire(blocking=True, blocking_timeout=self.blocking_timeout)
        except redis.exceptions.LockError:  # type: ignore
            raise LedgerBusy(event_id)
        except redis.exceptions.RedisError as e:  # type: ignore
            logger.error(f"Redis unavailable while locking event {event_id}: {e}")
            raise StorageFailure()
        if not acquired:
            logger.warning(f"Timed out waiting for lock on event {event_id}")
            raise LedgerBusy(event_id)

        try:
            yield
        finally:
            try:
                lock.release()
            except redis.exceptions.LockError:  # type: ignore
                # lock expired while we held it
                logger.warning(f"Lock on event {event_id} expired before release")
            except redis.exceptions.RedisError as e:  # type: ignore
                # the write is already done; the key expires after `timeout`
                logger.error(f"Could not release lock on event {event_id}: {e}")


class LocalLockProvider:
    """
    Per-event exclusive scope for a single process.
    A lock entry lives only while some caller holds or waits for it.
    """

    def __init__(self, blocking_timeout: float = LOCK_BLOCKING_TIMEOUT):
        self.blocking_timeout = blocking_timeout
        # event_id -> [lock, number of holders and waiters]
        self._locks: dict[str, list] = {}
        self._guard = threading.Lock()

    def _checkout(self, event_id: str) -> threading.Lock:
        with self._guard:
            entry = self._locks.setdefault(event_id, [threading.Lock(), 0])
            entry[1] += 1
            return entry[0]

    def _checkin(self, event_id: str) -> None:
        with self._guard:
            entry = self._locks[event_id]
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[event_id]

    @contextmanager
    def hold(self, event_id: str):
        lock = self._checkout(event_id)
        try:
            if not lock.acquire(timeout=self.blocking_timeout):
                logger.warning(f"Timed out waiting for lock on event {event_id}")
                raise LedgerBusy(event_id)
            try:
                yield
            finally:
                lock.release()
        finally:
            self._checkin(event_id)
