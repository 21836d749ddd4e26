"""
Lock store interface and an in-process implementation.

A lock store offers one atomic primitive: claim (or release) a named lock
slot for a holder id, with the slot expiring after the lock type's timeout.
Public API: LockStore, InMemoryLockStore.
"""
import logging
import threading
import time
from typing import Callable, Dict, Optional, Protocol, Tuple, runtime_checkable

from submission_lock.constants import LockType

logger = logging.getLogger(__name__)


@runtime_checkable
class LockStore(Protocol):
    def try_acquire(
        self, lock_id: str, resource_key: str, lock_type: LockType
    ) -> bool:
        """
        Claim resource_key for lock_id without blocking.

        Returns True if the slot was free (or expired, or already held by
        lock_id, in which case its expiration is renewed). The slot must be
        released by the store once lock_type.expiration_timeout_ms elapses.
        """
        ...

    def try_release(
        self, lock_id: str, resource_key: str, lock_type: LockType
    ) -> bool:
        """
        Release resource_key without blocking.

        Returns True only if lock_id was the current holder.
        """
        ...


class InMemoryLockStore:
    """
    Single-process lock store with single-holder semantics.
    Expiration is measured with the injected clock (seconds).
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock or time.monotonic
        self._mutex = threading.Lock()
        self._slots: Dict[str, Tuple[str, float]] = {}

    def _live_holder(self, resource_key: str) -> Optional[str]:
        entry = self._slots.get(resource_key)
        if entry is None:
            return None
        holder, expires_at = entry
        if self._clock() >= expires_at:
            del self._slots[resource_key]
            logger.debug(
                f"Expired lock resource_key={resource_key} holder={holder}"
            )
            return None
        return holder

    def try_acquire(
        self, lock_id: str, resource_key: str, lock_type: LockType
    ) -> bool:
        with self._mutex:
            holder = self._live_holder(resource_key)
            if holder is not None and holder != lock_id:
                return False
            expires_at = self._clock() + lock_type.expiration_timeout_seconds
            self._slots[resource_key] = (lock_id, expires_at)
            return True

    def try_release(
        self, lock_id: str, resource_key: str, lock_type: LockType
    ) -> bool:
        with self._mutex:
            if self._live_holder(resource_key) != lock_id:
                return False
            del self._slots[resource_key]
            return True

    def holder(self, resource_key: str) -> Optional[str]:
        """Return the lock id currently holding resource_key, or None."""
        with self._mutex:
            return self._live_holder(resource_key)
