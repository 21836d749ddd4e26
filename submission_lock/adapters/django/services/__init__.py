"""
Services: cache-backed lock store and submission lock helpers.
Import from here or from submission_lock.adapters.django.

- Store: CacheLockStore
- Lock: get_submission_lock, submission_lock, is_submission_locked,
  serialize_submission_task
"""
from submission_lock.adapters.django.services.cache_store import (
    CacheLockStore,
)
from submission_lock.adapters.django.services.lock import (
    get_submission_lock,
    is_submission_locked,
    serialize_submission_task,
    submission_lock,
)

__all__ = [
    "CacheLockStore",
    "get_submission_lock",
    "submission_lock",
    "is_submission_locked",
    "serialize_submission_task",
]
