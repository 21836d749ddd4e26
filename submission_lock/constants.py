"""
Constants for bucketed submission locks.
"""
from dataclasses import dataclass

# At 4 tries and 250 initial backoff, the maximum amount of time a single
# acquire or release can spend sleeping is bounded by:
# 250 + 500 + 1000 + 2000 = 3750 ms
DEFAULT_TRIES = 4
DEFAULT_INITIAL_MAX_BACKOFF_MS = 250

SUBMISSION_NAMESPACE = "submission"
BUCKET_MASK = 0xFF


@dataclass(frozen=True)
class LockType:
    """Named lock type with the store-side expiration of its lock slots."""

    name: str
    expiration_timeout_ms: int

    @property
    def expiration_timeout_seconds(self) -> float:
        return self.expiration_timeout_ms / 1000.0


class SubmissionLockType:
    """Lock types used for submission locks."""

    MODIFICATION = LockType("MODIFICATION", 66000)

    @classmethod
    def get_all_types(cls):
        return [cls.MODIFICATION]


def worst_case_backoff_ms(
    tries: int = DEFAULT_TRIES,
    initial_max_backoff_ms: int = DEFAULT_INITIAL_MAX_BACKOFF_MS,
) -> int:
    """
    Upper bound on the total backoff one acquire or release can sleep:
    the sum of the doubling maxima over all tries.
    """
    return initial_max_backoff_ms * (2 ** tries - 1)
