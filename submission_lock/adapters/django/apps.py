"""Django app config for submission_lock."""
from django.apps import AppConfig


class SubmissionLockDjangoConfig(AppConfig):
    """App config for submission_lock Django adapter."""

    name = "submission_lock.adapters.django"
    label = "submission_lock"
    verbose_name = "Submission Lock"

    def ready(self):
        # Imported here so settings are configured before checks load.
        from django.core import checks

        from submission_lock.adapters.django.checks import (
            check_lock_expiration,
        )

        checks.register(check_lock_expiration)
