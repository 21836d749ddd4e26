"""
Global config for submission_lock, read from Django settings with defaults.
"""
from django.conf import settings

from submission_lock.constants import (
    DEFAULT_INITIAL_MAX_BACKOFF_MS,
    DEFAULT_TRIES,
)
from submission_lock.exceptions import LockTimeout

DEFAULT_CACHE_ALIAS = "default"
DEFAULT_KEY_PREFIX = "submission_lock"

DEFAULT_TASK_MAX_RETRIES = 3
DEFAULT_TASK_RETRY_BACKOFF_MAX = 60


def get_tries():
    """Return acquire/release attempts per call (default 4)."""
    return getattr(settings, "SUBMISSION_LOCK_TRIES", DEFAULT_TRIES)


def get_initial_max_backoff_ms():
    """Return the first backoff ceiling in milliseconds (default 250)."""
    return getattr(
        settings,
        "SUBMISSION_LOCK_INITIAL_MAX_BACKOFF_MS",
        DEFAULT_INITIAL_MAX_BACKOFF_MS,
    )


def get_cache_alias():
    """Return the Django cache alias holding lock slots."""
    return getattr(
        settings, "SUBMISSION_LOCK_CACHE_ALIAS", DEFAULT_CACHE_ALIAS
    )


def get_key_prefix():
    """Return the prefix prepended to resource keys in the cache."""
    return getattr(settings, "SUBMISSION_LOCK_KEY_PREFIX", DEFAULT_KEY_PREFIX)


def get_task_max_retries():
    """Return how often Celery re-queues a task that hit LockTimeout."""
    return getattr(
        settings,
        "SUBMISSION_LOCK_TASK_MAX_RETRIES",
        DEFAULT_TASK_MAX_RETRIES,
    )


def get_task_retry_backoff_max():
    """Return max backoff seconds between Celery retries (default 60)."""
    return getattr(
        settings,
        "SUBMISSION_LOCK_TASK_RETRY_BACKOFF_MAX",
        DEFAULT_TASK_RETRY_BACKOFF_MAX,
    )


def get_lock_task_retry_kwargs(max_retries=None):
    """
    Return kwargs for @shared_task so a task that cannot get its submission
    lock is re-queued with backoff instead of failing.
    """
    n = get_task_max_retries() if max_retries is None else max_retries
    return {
        "bind": True,
        "autoretry_for": (LockTimeout,),
        "retry_backoff": True,
        "retry_backoff_max": get_task_retry_backoff_max(),
        "retry_jitter": True,
        "retry_kwargs": {"max_retries": n},
    }
