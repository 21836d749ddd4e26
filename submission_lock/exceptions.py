"""
Errors raised by submission locks.
"""


class LockError(Exception):
    """Base exception for all submission lock errors."""

    pass


class InvalidArgument(LockError, ValueError):
    """Raised when a lock is constructed with unusable identifiers."""

    pass


class LockTimeout(LockError):
    """Raised when acquire() exhausts its retry budget."""

    def __init__(self, lock_id: str, resource_key: str):
        self.lock_id = lock_id
        self.resource_key = resource_key
        super().__init__(
            f"Timed out acquiring lock. lockId: {lock_id}, "
            f"resourceKey: {resource_key}"
        )


class LockStoreFailure(LockError):
    """
    Raised when waiting between acquire attempts fails unexpectedly.
    The original exception is chained as __cause__.
    """

    pass
