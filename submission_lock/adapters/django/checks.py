"""
System checks: the lock expiration must outlast the acquire retry budget,
otherwise a lock may expire while its holder is still working.
"""
from django.core import checks

from submission_lock.adapters.django.conf import (
    get_initial_max_backoff_ms,
    get_tries,
)
from submission_lock.constants import (
    SubmissionLockType,
    worst_case_backoff_ms,
)


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def check_lock_expiration(app_configs=None, **kwargs):
    """Return errors for invalid retry settings and warnings for short expirations."""
    tries = get_tries()
    initial = get_initial_max_backoff_ms()
    if not (_is_positive_int(tries) and _is_positive_int(initial)):
        return [
            checks.Error(
                "SUBMISSION_LOCK_TRIES and "
                "SUBMISSION_LOCK_INITIAL_MAX_BACKOFF_MS must be positive "
                f"integers (got {tries!r}, {initial!r}).",
                id="submission_lock.E001",
            )
        ]
    budget = worst_case_backoff_ms(tries, initial)
    messages = []
    for lock_type in SubmissionLockType.get_all_types():
        if lock_type.expiration_timeout_ms < 2 * budget:
            messages.append(
                checks.Warning(
                    f"Lock type {lock_type.name} expires after "
                    f"{lock_type.expiration_timeout_ms} ms, less than twice "
                    f"the worst-case acquire backoff of {budget} ms.",
                    hint=(
                        "Lower SUBMISSION_LOCK_TRIES or "
                        "SUBMISSION_LOCK_INITIAL_MAX_BACKOFF_MS."
                    ),
                    id="submission_lock.W001",
                )
            )
    return messages
