"""
Submission lock: serialize updates to the same submission across workers.
Public API: import from submission_lock.adapters.django.
"""
import inspect
from contextlib import contextmanager
from typing import Any, Optional

from submission_lock.adapters.django.conf import (
    get_initial_max_backoff_ms,
    get_tries,
)
from submission_lock.adapters.django.services.cache_store import (
    CacheLockStore,
)
from submission_lock.exceptions import InvalidArgument
from submission_lock.lock import BucketedRetryLock, derive_resource_key
from submission_lock.store import LockStore


def get_submission_lock(
    form_id: str,
    instance_id: str,
    user: Any = None,
    store: Optional[LockStore] = None,
) -> BucketedRetryLock:
    """
    Build a lock for one submission, using the cache store and the retry
    settings unless a store is given.
    """
    return BucketedRetryLock(
        form_id,
        instance_id,
        store or CacheLockStore(),
        user,
        tries=get_tries(),
        initial_max_backoff_ms=get_initial_max_backoff_ms(),
    )


@contextmanager
def submission_lock(
    form_id: str,
    instance_id: str,
    user: Any = None,
    store: Optional[LockStore] = None,
):
    """
    Hold the submission lock for the duration of the with-block.
    Raises LockTimeout if it cannot be acquired.
    """
    lock = get_submission_lock(form_id, instance_id, user=user, store=store)
    lock.acquire()
    try:
        yield lock
    finally:
        lock.release()


def is_submission_locked(
    form_id: str,
    instance_id: str,
    store: Optional[CacheLockStore] = None,
) -> bool:
    """Return True if the bucket of the given submission is held."""
    store = store or CacheLockStore()
    return store.is_locked(derive_resource_key(form_id, instance_id))


def _extract_submission_ids(func, args, kwargs, form_param, instance_param):
    try:
        bound = inspect.signature(func).bind_partial(*args, **kwargs)
        values = bound.arguments
    except TypeError:
        values = kwargs
    return values.get(form_param), values.get(instance_param)


def serialize_submission_task(
    form_param: str = "form_id",
    instance_param: str = "instance_id",
    store: Optional[LockStore] = None,
):
    """
    Decorator to run a function (or bound Celery task) while holding the
    lock of the submission named by its form_param and instance_param
    arguments. LockTimeout propagates so the task can be retried later
    (see conf.get_lock_task_retry_kwargs).
    """
    def decorator(func):
        def wrapper(*args, **kwargs):
            form_id, instance_id = _extract_submission_ids(
                func, args, kwargs, form_param, instance_param
            )
            if form_id is None or form_id == "":
                raise InvalidArgument(
                    f"Could not extract {form_param} for {func.__name__}"
                )
            with submission_lock(form_id, instance_id, store=store):
                return func(*args, **kwargs)
        wrapper.__name__ = func.__name__
        wrapper.__module__ = func.__module__
        wrapper.__doc__ = func.__doc__
        wrapper.__qualname__ = func.__qualname__
        return wrapper
    return decorator
