"""
Lock store backed by the Django cache: cache.add claims a slot atomically
and the cache timeout enforces the lock type's expiration.
Public API: import from submission_lock.adapters.django.
"""
import logging
import math
from typing import Optional

from django.core.cache import caches

from submission_lock.adapters.django.conf import (
    get_cache_alias,
    get_key_prefix,
)
from submission_lock.constants import LockType

logger = logging.getLogger(__name__)


def _timeout_seconds(lock_type: LockType) -> int:
    return max(1, math.ceil(lock_type.expiration_timeout_ms / 1000))


class CacheLockStore:
    """
    LockStore over a Django cache backend. Backend errors are logged and
    reported as a failed attempt.
    """

    def __init__(
        self,
        cache_alias: Optional[str] = None,
        key_prefix: Optional[str] = None,
    ):
        self.cache_alias = cache_alias or get_cache_alias()
        self.key_prefix = key_prefix or get_key_prefix()

    @property
    def cache(self):
        return caches[self.cache_alias]

    def cache_key(self, resource_key: str) -> str:
        return f"{self.key_prefix}:{resource_key}"

    def try_acquire(
        self, lock_id: str, resource_key: str, lock_type: LockType
    ) -> bool:
        key = self.cache_key(resource_key)
        timeout = _timeout_seconds(lock_type)
        try:
            if self.cache.add(key, lock_id, timeout=timeout):
                logger.info(
                    f"Acquired submission lock resource_key={resource_key} "
                    f"lock_id={lock_id}"
                )
                return True
            if self.cache.get(key) == lock_id:
                # Re-acquire by the holder renews the expiration.
                return bool(self.cache.touch(key, timeout=timeout))
            return False
        except Exception as exc:
            logger.error(
                f"Failed to acquire submission lock "
                f"resource_key={resource_key}: {exc}"
            )
            return False

    def try_release(
        self, lock_id: str, resource_key: str, lock_type: LockType
    ) -> bool:
        key = self.cache_key(resource_key)
        try:
            holder = self.cache.get(key)
            if holder != lock_id:
                logger.debug(
                    f"Submission lock not held resource_key={resource_key} "
                    f"lock_id={lock_id} holder={holder}"
                )
                return False
            self.cache.delete(key)
            logger.info(
                f"Released submission lock resource_key={resource_key} "
                f"lock_id={lock_id}"
            )
            return True
        except Exception as exc:
            logger.error(
                f"Failed to release submission lock "
                f"resource_key={resource_key}: {exc}"
            )
            return False

    def is_locked(self, resource_key: str) -> bool:
        """Return True if resource_key is currently held, else False."""
        try:
            return self.cache.get(self.cache_key(resource_key)) is not None
        except Exception as exc:
            logger.error(
                f"Failed to check submission lock "
                f"resource_key={resource_key}: {exc}"
            )
            return False
