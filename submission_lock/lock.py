"""
Bucketed retrying lock for serializing submission updates.

The instance id is mapped into one of 256 buckets per form so that many
instances of the same form can be modified concurrently while the number of
distinct lock slots stays bounded. NOT threadsafe: one instance represents
one holder and must not be shared between callers.
Public API: BucketedRetryLock, derive_resource_key.
"""
import logging
import random
import time
import uuid
from typing import Any, Callable, Optional

from submission_lock.constants import (
    BUCKET_MASK,
    DEFAULT_INITIAL_MAX_BACKOFF_MS,
    DEFAULT_TRIES,
    SUBMISSION_NAMESPACE,
    LockType,
    SubmissionLockType,
)
from submission_lock.exceptions import (
    InvalidArgument,
    LockStoreFailure,
    LockTimeout,
)
from submission_lock.store import LockStore

logger = logging.getLogger(__name__)


def string_hash(value: str) -> int:
    """
    Signed 32-bit polynomial hash (s[0]*31^(n-1) + ... + s[n-1]) over the
    UTF-16 code units of value. Stable across processes.
    """
    data = value.encode("utf-16-be")
    h = 0
    for i in range(0, len(data), 2):
        h = (31 * h + ((data[i] << 8) | data[i + 1])) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


def instance_bucket(instance_id: str) -> str:
    """Return the two hex digit bucket ("00".."ff") for instance_id."""
    return f"{string_hash(instance_id) & BUCKET_MASK:02x}"


def derive_resource_key(form_id: str, instance_id: Optional[str]) -> str:
    """
    Return "submission|<form_id>|<bucket>" for the given submission.
    Non-string instance ids (e.g. UUID) are hashed by their str() form.
    Raises InvalidArgument when instance_id is None or empty.
    """
    if instance_id is None or str(instance_id) == "":
        raise InvalidArgument("instanceId cannot be null or blank")
    instance_id = str(instance_id)
    return f"{SUBMISSION_NAMESPACE}|{form_id}|{instance_bucket(instance_id)}"


class BucketedRetryLock:
    """Acquire and release one bucketed submission lock with retries."""

    def __init__(
        self,
        form_id: str,
        instance_id: Optional[str],
        store: LockStore,
        user: Any = None,
        *,
        lock_type: LockType = SubmissionLockType.MODIFICATION,
        tries: int = DEFAULT_TRIES,
        initial_max_backoff_ms: int = DEFAULT_INITIAL_MAX_BACKOFF_MS,
        sleep: Callable[[float], Any] = time.sleep,
        rng: Optional[random.Random] = None,
    ):
        self.resource_key = derive_resource_key(form_id, instance_id)
        self.form_id = form_id
        self.instance_id = instance_id
        self.store = store
        self.user = user
        self.lock_type = lock_type
        self.lock_id = str(uuid.uuid4())
        self.tries = tries
        self.initial_max_backoff_ms = initial_max_backoff_ms
        self.max_backoff_ms = initial_max_backoff_ms
        self._sleep = sleep
        self._rng = rng or random.Random()

    def __repr__(self):
        return (
            f"<BucketedRetryLock lock_id={self.lock_id} "
            f"resource_key={self.resource_key}>"
        )

    def __enter__(self):
        return self.acquire()

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False

    def _next_backoff_ms(self) -> float:
        backoff = self._rng.random() * self.max_backoff_ms
        self.max_backoff_ms *= 2
        return backoff

    def _wait(self) -> None:
        backoff_ms = self._next_backoff_ms()
        logger.debug(
            f"Lock busy, backing off lock_id={self.lock_id} "
            f"resource_key={self.resource_key} backoff_ms={backoff_ms:.1f}"
        )
        self._sleep(backoff_ms / 1000.0)

    def acquire(self) -> "BucketedRetryLock":
        """
        Try up to `tries` times to acquire the lock, sleeping a jittered,
        doubling backoff between attempts.

        Raises:
            LockTimeout: every attempt was rejected by the store.
            LockStoreFailure: the backoff wait failed.
        """
        self.max_backoff_ms = self.initial_max_backoff_ms
        for attempt in range(1, self.tries + 1):
            if self.store.try_acquire(
                self.lock_id, self.resource_key, self.lock_type
            ):
                return self
            if attempt == self.tries:
                break
            try:
                self._wait()
            except Exception as e:
                raise LockStoreFailure(
                    f"Interrupted while acquiring lock "
                    f"lock_id={self.lock_id} "
                    f"resource_key={self.resource_key}: {e}"
                ) from e
        logger.warning(
            f"Timed out acquiring lock lock_id={self.lock_id} "
            f"resource_key={self.resource_key} tries={self.tries} "
            f"user={self.user}"
        )
        raise LockTimeout(self.lock_id, self.resource_key)

    def release(self) -> None:
        """
        Try up to `tries` times to release the lock, then give up. An
        unreleased lock is force-released by the store once the lock type's
        expiration elapses.
        """
        self.max_backoff_ms = self.initial_max_backoff_ms
        for attempt in range(1, self.tries + 1):
            if self.store.try_release(
                self.lock_id, self.resource_key, self.lock_type
            ):
                return
            if attempt == self.tries:
                break
            try:
                self._wait()
            except Exception as e:
                logger.warning(
                    f"Abandoned lock release lock_id={self.lock_id} "
                    f"resource_key={self.resource_key}: {e}"
                )
                return
        logger.warning(
            f"Gave up releasing lock lock_id={self.lock_id} "
            f"resource_key={self.resource_key} tries={self.tries} "
            f"user={self.user}; it expires after "
            f"{self.lock_type.expiration_timeout_ms} ms"
        )
